"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from chip8_tracer.arch.chip8.state import Chip8State, STACK_DEPTH
from chip8_tracer.arch.chip8.instructions.base import Peripherals
from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError
from chip8_tracer.core.snapshot import Operation

# 実行関数が呼ばれる時点で state.pc は既に次の命令（address + 2）を指している。

# --- 00EE RET ---
# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
def execute_ret(state: Chip8State, io: Peripherals, op: Operation) -> str:
    if state.sp == 0:
        raise StackUnderflowError("Return with empty call stack")
    state.sp -= 1
    state.pc = state.stack[state.sp]
    return f"Returning from subroutine to 0x{state.pc:03X}"

# --- 1NNN JP ---
# @intent:responsibility NNNへジャンプします。自分自身へのジャンプはendloopとして記録します。
def execute_jp(state: Chip8State, io: Peripherals, op: Operation) -> str:
    nnn = op.nnn
    state.pc = nnn
    if nnn == op.address:
        # 停止はしない。トレースの重複排除にのみ使う。
        state.endloop = True
        return f"Endless loop at 0x{nnn:03X}"
    return f"Jumping to 0x{nnn:03X}"

# --- 2NNN CALL ---
def execute_call(state: Chip8State, io: Peripherals, op: Operation) -> str:
    if state.sp >= STACK_DEPTH:
        raise StackOverflowError(f"Call stack overflow: more than {STACK_DEPTH} nested calls")
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = op.nnn
    return f"Calling subroutine at 0x{op.nnn:03X}"

# --- BNNN JP V0 ---
def execute_jp_v0(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.pc = op.nnn + state.v[0]
    return f"Jumping to 0x{op.nnn:03X} + V0(0x{state.v[0]:02X})"

# --- 3XKK / 4XKK ---
def execute_se_imm(state: Chip8State, io: Peripherals, op: Operation) -> str:
    vx = state.v[op.x]
    if vx == op.kk:
        state.pc += 2
    return f"Skipping next instruction if V{op.x:X}(0x{vx:02X}) == 0x{op.kk:02X}"

def execute_sne_imm(state: Chip8State, io: Peripherals, op: Operation) -> str:
    vx = state.v[op.x]
    if vx != op.kk:
        state.pc += 2
    return f"Skipping next instruction if V{op.x:X}(0x{vx:02X}) != 0x{op.kk:02X}"

# --- 5XY0 / 9XY0 ---
# 下位ニブルは判定に使わない。
def execute_se_reg(state: Chip8State, io: Peripherals, op: Operation) -> str:
    vx, vy = state.v[op.x], state.v[op.y]
    if vx == vy:
        state.pc += 2
    return f"Skipping next instruction if V{op.x:X}(0x{vx:02X}) == V{op.y:X}(0x{vy:02X})"

def execute_sne_reg(state: Chip8State, io: Peripherals, op: Operation) -> str:
    vx, vy = state.v[op.x], state.v[op.y]
    if vx != vy:
        state.pc += 2
    return f"Skipping next instruction if V{op.x:X}(0x{vx:02X}) != V{op.y:X}(0x{vy:02X})"
