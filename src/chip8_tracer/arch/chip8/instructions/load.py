"""
ロード/ストア命令（レジスタ、インデックス、タイマー、BCD、ブロック転送）の実装。
"""
from chip8_tracer.arch.chip8.state import Chip8State, FONT_GLYPH_SIZE
from chip8_tracer.arch.chip8.instructions.base import Peripherals, read_block, write_block
from chip8_tracer.core.snapshot import Operation

# --- 6XKK LD Vx, byte ---
def execute_ld_imm(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[op.x] = op.kk
    return f"Moving 0x{op.kk:02X} into V{op.x:X}"

# --- ANNN LD I, addr ---
def execute_ld_i(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.i = op.nnn
    return f"Putting 0x{op.nnn:03X} into I"

# --- FX07 LD Vx, DT ---
def execute_ld_vx_dt(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[op.x] = state.delay_timer
    return f"Putting the value of the delay timer into V{op.x:X}"

# --- FX15 LD DT, Vx ---
def execute_ld_dt(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.delay_timer = state.v[op.x]
    return f"Setting the delay timer to the value of V{op.x:X}"

# --- FX18 LD ST, Vx ---
def execute_ld_st(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.sound_timer = state.v[op.x]
    return f"Setting the sound timer to the value of V{op.x:X}"

# --- FX1E ADD I, Vx ---
def execute_add_i(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.i = (state.i + state.v[op.x]) & 0xFFFF  # 16bitで折り返す。VFは変化しない
    return f"Adding the value of V{op.x:X} to I"

# --- FX29 LD F, Vx ---
# @intent:responsibility V[X]の値に対応するフォントグリフの先頭アドレスをIに設定します。
def execute_ld_font(state: Chip8State, io: Peripherals, op: Operation) -> str:
    digit = state.v[op.x]
    state.i = digit * FONT_GLYPH_SIZE
    return f"Setting I to the location of the sprite for digit {digit:X}"

# --- FX33 LD B, Vx ---
# @intent:responsibility V[X]の10進3桁（百、十、一の位）を memory[I..I+3] に格納します。
def execute_ld_bcd(state: Chip8State, io: Peripherals, op: Operation) -> str:
    vx = state.v[op.x]
    write_block(state, state.i, bytes([vx // 100, (vx // 10) % 10, vx % 10]))
    return f"Storing the BCD representation of V{op.x:X} at I"

# --- FX55 LD [I], Vx ---
def execute_store_regs(state: Chip8State, io: Peripherals, op: Operation) -> str:
    write_block(state, state.i, bytes(state.v[0:op.x + 1]))
    return f"Storing registers V0..V{op.x:X} into memory at I"

# --- FX65 LD Vx, [I] ---
def execute_load_regs(state: Chip8State, io: Peripherals, op: Operation) -> str:
    state.v[0:op.x + 1] = list(read_block(state, state.i, op.x + 1))
    return f"Loading registers V0..V{op.x:X} from memory at I"
