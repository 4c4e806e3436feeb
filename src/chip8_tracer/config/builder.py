import logging
import random
from typing import Optional

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.scheduler import DualClockScheduler
from .models import EmulatorConfig

logger = logging.getLogger(__name__)

# @intent:responsibility 設定（Config）に基づいて、CPUとスケジューラを生成し、プログラムを配置します。
class MachineBuilder:
    def __init__(self, config: Optional[EmulatorConfig] = None):
        self.config = config if config is not None else EmulatorConfig()

    # @intent:responsibility プログラムを配置したCPUを生成します。
    # @intent:post-condition 失敗した場合は ProgramLoadError が送出され、マシンは生成されません。
    def build_cpu(self, program: bytes, rng: Optional[random.Random] = None) -> Chip8Cpu:
        cpu = Chip8Cpu(rng=rng)
        cpu.load_program(program)
        logger.info("Loaded %d byte program at 0x200", len(program))
        return cpu

    def build_scheduler(self) -> DualClockScheduler:
        return DualClockScheduler(
            instruction_hz=self.config.instruction_hz,
            timer_hz=self.config.timer_hz,
        )
