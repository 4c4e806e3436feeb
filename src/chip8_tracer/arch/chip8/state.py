# chip8_tracer/arch/chip8/state.py
"""
CHIP-8 固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.core.state import CpuState
from chip8_tracer.common.types import RegisterInfo, RegisterLayoutInfo, RegisterMap

# @intent:constant アドレス空間とスタックの大きさ。
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START  # 0xE00
STACK_DEPTH = 16
REGISTER_COUNT = 16
FONT_GLYPH_SIZE = 5

# @intent:constant 16文字 x 5バイトの16進フォント。メモリの [0, 80) に配置されます。
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:constant UIのレジスタ表示レイアウト。
REGISTER_LAYOUT = [
    RegisterLayoutInfo("Pointers/Timers", [
        RegisterInfo("PC", 16), RegisterInfo("I", 16), RegisterInfo("SP", 8),
        RegisterInfo("DT", 8), RegisterInfo("ST", 8),
    ]),
    RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(REGISTER_COUNT)]),
]


def _initial_memory() -> bytearray:
    memory = bytearray(MEMORY_SIZE)
    memory[0:len(FONT_SET)] = FONT_SET
    return memory


# @intent:responsibility CHIP-8のメモリ、レジスタ、スタック、タイマー、ループ検出フラグを保持します。
@dataclass
class Chip8State(CpuState):
    """
    CHIP-8の全状態を保持するデータクラス。
    エミュレーションループだけが所有し、命令の実行によってのみ変更されます。
    """
    pc: int = PROGRAM_START
    memory: bytearray = field(default_factory=_initial_memory)
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)  # VFはキャリー/ボロー/衝突フラグを兼ねる
    i: int = 0x0000
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    endloop: bool = False  # 自分自身へのジャンプを検出した

    # @intent:responsibility 公開用の独立したコピーを作成します。
    # @intent:rationale dataclasses.replaceは浅いコピーであり、memory/v/stackを共有してしまうため使わない。
    def copy(self) -> "Chip8State":
        return Chip8State(
            pc=self.pc,
            sp=self.sp,
            memory=bytearray(self.memory),
            v=list(self.v),
            i=self.i,
            stack=list(self.stack),
            delay_timer=self.delay_timer,
            sound_timer=self.sound_timer,
            endloop=self.endloop,
        )

    def register_map(self) -> RegisterMap:
        registers = {
            "PC": self.pc, "I": self.i, "SP": self.sp,
            "DT": self.delay_timer, "ST": self.sound_timer,
        }
        for n, value in enumerate(self.v):
            registers[f"V{n:X}"] = value
        return registers
