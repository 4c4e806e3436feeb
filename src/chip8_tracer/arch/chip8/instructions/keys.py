"""
キー入力命令の実装。
"""
from chip8_tracer.arch.chip8.state import Chip8State
from chip8_tracer.arch.chip8.instructions.base import Peripherals
from chip8_tracer.core.errors import KeyIndexError
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.peripherals.keypad import KEY_COUNT


def _key_in(state: Chip8State, register: int) -> int:
    key = state.v[register]
    if key >= KEY_COUNT:
        raise KeyIndexError(f"Key index 0x{key:02X} in V{register:X} out of range")
    return key

# --- EX9E SKP Vx ---
def execute_skp(state: Chip8State, io: Peripherals, op: Operation) -> str:
    key = _key_in(state, op.x)
    if io.keypad.is_pressed(key):
        state.pc += 2
    return f"Skipping next instruction if key in V{op.x:X} ({key:X}) is pressed"

# --- EXA1 SKNP Vx ---
def execute_sknp(state: Chip8State, io: Peripherals, op: Operation) -> str:
    key = _key_in(state, op.x)
    if not io.keypad.is_pressed(key):
        state.pc += 2
    return f"Skipping next instruction if key in V{op.x:X} ({key:X}) is not pressed"

# --- FX0A LD Vx, K ---
# @intent:responsibility キー待ち状態に入ります。押下エッジが来るまで以降の命令は実行されません。
def execute_wait_key(state: Chip8State, io: Peripherals, op: Operation) -> str:
    io.keypad.begin_wait(op.x)
    return f"Waiting for a key press and storing the result into V{op.x:X}"
