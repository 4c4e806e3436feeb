"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import random
from dataclasses import dataclass, field

from chip8_tracer.arch.chip8.state import Chip8State, MEMORY_SIZE
from chip8_tracer.core.errors import MemoryAccessError
from chip8_tracer.peripherals.framebuffer import Framebuffer
from chip8_tracer.peripherals.keypad import Keypad

# @intent:data_structure 命令が操作するCPU以外のデバイス群。
@dataclass
class Peripherals:
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)


# @intent:utility_function アドレス範囲 [addr, addr+length) がメモリ内に収まっているか検証します。
def check_range(addr: int, length: int = 1) -> None:
    if addr < 0 or addr + length > MEMORY_SIZE:
        raise MemoryAccessError(
            f"Memory access 0x{addr:04X}..0x{addr + length - 1:04X} out of bounds for {MEMORY_SIZE} bytes"
        )


# @intent:utility_function メモリから16ビットワードをビッグエンディアン形式で読み込みます。
def read_word(state: Chip8State, addr: int) -> int:
    """Big-endian 16-bit read."""
    check_range(addr, 2)
    return (state.memory[addr] << 8) | state.memory[addr + 1]


def read_block(state: Chip8State, addr: int, length: int) -> bytes:
    check_range(addr, length)
    return bytes(state.memory[addr:addr + length])


def write_block(state: Chip8State, addr: int, data: bytes) -> None:
    check_range(addr, len(data))
    state.memory[addr:addr + len(data)] = data
