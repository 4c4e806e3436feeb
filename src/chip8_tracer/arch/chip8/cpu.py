# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import random
from typing import List, Optional

from chip8_tracer.common.types import RegisterLayoutInfo, RegisterMap
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.errors import ProgramLoadError
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8State, MAX_PROGRAM_SIZE, PROGRAM_START, REGISTER_LAYOUT
from chip8_tracer.arch.chip8.instructions import Peripherals, decode_opcode, execute_instruction
from chip8_tracer.arch.chip8.instructions.base import read_word
from chip8_tracer.peripherals.framebuffer import Framebuffer
from chip8_tracer.peripherals.keypad import Keypad

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシンをエミュレートするクラス。
    状態に加えて、フレームバッファとキーパッド（入力ラッチ）を所有します。
    """
    def __init__(self, rng: Optional[random.Random] = None):
        self._io = Peripherals(rng=rng if rng is not None else random.Random())
        self._program = b""
        super().__init__()

    # @intent:responsibility フォントを配置し、ロード済みのプログラムイメージを持つ初期状態を生成します。
    def _create_initial_state(self) -> Chip8State:
        state = Chip8State()
        state.memory[PROGRAM_START:PROGRAM_START + len(self._program)] = self._program
        return state

    # @intent:responsibility 状態とデバイスを初期化します。プログラムイメージは保持されます。
    def reset(self) -> None:
        super().reset()
        self._io.framebuffer.clear()
        self._io.keypad = Keypad()

    # @intent:responsibility プログラムイメージを 0x200 から配置し、マシンをリセットします。
    # @intent:pre-condition プログラム長は 0xE00 バイト以下である必要があります。
    def load_program(self, program: bytes) -> None:
        if len(program) > MAX_PROGRAM_SIZE:
            raise ProgramLoadError(
                f"Program is {len(program)} bytes, exceeds the maximum of {MAX_PROGRAM_SIZE} bytes"
            )
        self._program = bytes(program)
        self.reset()

    def get_state(self) -> Chip8State:
        return self._state

    @property
    def framebuffer(self) -> Framebuffer:
        return self._io.framebuffer

    @property
    def keypad(self) -> Keypad:
        return self._io.keypad

    # @intent:responsibility キー待ち中は命令をフェッチしません。
    def _is_blocked(self) -> bool:
        return self._io.keypad.is_waiting

    def _fetch(self) -> int:
        return read_word(self._state, self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Operation) -> str:
        return execute_instruction(operation, self._state, self._io)

    # @intent:responsibility キーの押下エッジを処理し、キー待ちが解除されれば押されたキー番号をレジスタに書き込みます。
    def key_down(self, key: int, resolve_wait: bool = True) -> None:
        register = self._io.keypad.press(key, resolve_wait)
        if register is not None:
            self._state.v[register] = key

    def key_up(self, key: int) -> None:
        self._io.keypad.release(key)

    # @intent:responsibility 60Hz毎に遅延タイマーとサウンドタイマーを1ずつ減らします（0で止まる）。
    def tick_timers(self) -> None:
        s = self._state
        if s.delay_timer > 0:
            s.delay_timer -= 1
        if s.sound_timer > 0:
            s.sound_timer -= 1

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> RegisterMap:
        return self._state.register_map()

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return REGISTER_LAYOUT
