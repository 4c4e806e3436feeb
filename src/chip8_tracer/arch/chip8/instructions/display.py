"""
画面命令（クリア、スプライト描画）の実装。
"""
from chip8_tracer.arch.chip8.state import Chip8State
from chip8_tracer.arch.chip8.instructions.base import Peripherals, read_block
from chip8_tracer.core.snapshot import Operation

# --- 00E0 CLS ---
def execute_cls(state: Chip8State, io: Peripherals, op: Operation) -> str:
    io.framebuffer.clear()
    return "Clearing screen"

# --- DXYN DRW Vx, Vy, nibble ---
# @intent:responsibility memory[I]から始まるNバイトのスプライトを(V[X], V[Y])にXOR描画し、衝突をVFに設定します。
# @intent:rationale スプライトの読み出しを先に行い、範囲外アクセスならフレームバッファを変更せずにエラーとする。
def execute_drw(state: Chip8State, io: Peripherals, op: Operation) -> str:
    sx = state.v[op.x]
    sy = state.v[op.y]
    rows = read_block(state, state.i, op.n)
    state.v[0xF] = io.framebuffer.draw_sprite(sx, sy, rows)
    return f"Drawing sprite at {sx}, {sy} with height {op.n}"
