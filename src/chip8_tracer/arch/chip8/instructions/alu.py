"""
算術論理演算命令の実装。

8ビットの算術は全て mod 256 で折り返します（オーバーフローはエラーではない）。
"""
from chip8_tracer.arch.chip8.state import Chip8State
from chip8_tracer.arch.chip8.instructions.base import Peripherals
from chip8_tracer.core.snapshot import Operation

VF = 0xF

# --- 7XKK ADD Vx, byte ---
# @intent:responsibility V[X]にKKを加算します。キャリーフラグは変化しません。
def execute_add_imm(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF  # wrapping add
    return f"Adding 0x{op.kk:02X} to V{op.x:X}"

# --- 8XY0 LD Vx, Vy ---
def execute_ld_reg(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[op.x] = state.v[op.y]
    return f"Moving V{op.y:X} into V{op.x:X}"

# --- 8XY1/2/3 OR/AND/XOR ---
# @intent:rationale 論理演算の後はVFを0にクリアする。
def execute_or(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[op.x] |= state.v[op.y]
    state.v[VF] = 0
    return f"Setting V{op.x:X} to V{op.x:X} OR V{op.y:X}"

def execute_and(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[op.x] &= state.v[op.y]
    state.v[VF] = 0
    return f"Setting V{op.x:X} to V{op.x:X} AND V{op.y:X}"

def execute_xor(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[op.x] ^= state.v[op.y]
    state.v[VF] = 0
    return f"Setting V{op.x:X} to V{op.x:X} XOR V{op.y:X}"

# --- 8XY4 ADD Vx, Vy ---
# 8XY4〜8XYE: VFを先に書き込み、その後でオペランドを読み直して結果を書き込む。
# XまたはYがFの場合もこの順序に従う。

# --- 8XY4 ADD Vx, Vy ---
def execute_add_reg(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[VF] = 1 if state.v[op.x] + state.v[op.y] > 0xFF else 0
    state.v[op.x] = (state.v[op.x] + state.v[op.y]) & 0xFF  # wrapping add
    return f"Adding V{op.y:X} to V{op.x:X} and storing the carry in VF"

# --- 8XY5 SUB Vx, Vy ---
def execute_sub(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[VF] = 1 if state.v[op.x] > state.v[op.y] else 0
    state.v[op.x] = (state.v[op.x] - state.v[op.y]) & 0xFF  # wrapping sub
    return f"Subtracting V{op.y:X} from V{op.x:X} and storing the borrow in VF"

# --- 8XY6 SHR Vx ---
def execute_shr(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[VF] = state.v[op.x] & 1
    state.v[op.x] >>= 1
    return f"Shifting V{op.x:X} right, least significant bit goes to VF"

# --- 8XY7 SUBN Vx, Vy ---
def execute_subn(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[VF] = 1 if state.v[op.y] > state.v[op.x] else 0
    state.v[op.x] = (state.v[op.y] - state.v[op.x]) & 0xFF  # wrapping sub
    return f"Subtracting V{op.x:X} from V{op.y:X} into V{op.x:X} and storing the borrow in VF"

# --- 8XYE SHL Vx ---
def execute_shl(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[VF] = state.v[op.x] >> 7
    state.v[op.x] = (state.v[op.x] << 1) & 0xFF  # 8bitで切り捨て
    return f"Shifting V{op.x:X} left, most significant bit goes to VF"

# --- CXKK RND Vx, byte ---
def execute_rnd(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[op.x] = io.rng.randint(0, 0xFF) & op.kk
    return f"Setting V{op.x:X} to a random byte AND 0x{op.kk:02X}"
