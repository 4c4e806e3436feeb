# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
import logging

from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.state import Chip8State
from .base import Peripherals
from .maps import EXECUTE_MAP, dispatch_key

logger = logging.getLogger(__name__)

UNKNOWN_DESCRIPTION = "Unknown/unimplemented instruction"

# @intent:responsibility CHIP-8のオペコードをデコードします。
def decode_opcode(opcode: int, pc: int) -> Operation:
    """
    オペコードをデコードし、命令自身のアドレスとディスパッチキーを持つOperationを返します。
    """
    return Operation(address=pc, opcode=opcode, key=dispatch_key(opcode))

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8State, io: Peripherals) -> str:
    """
    命令を実行して状態を変更し、トレース用の説明文を返します。
    未知の命令は何もせずに説明文だけを返します（PCは既に進んでいる）。
    """
    executor = EXECUTE_MAP.get(operation.key)
    if executor is None:
        logger.debug("Unknown opcode %04X at %04X", operation.opcode, operation.address)
        return UNKNOWN_DESCRIPTION
    return executor(state, io, operation)
