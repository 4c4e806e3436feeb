"""
オペコードと命令実装のマッピング定義。
"""
from . import alu
from . import control
from . import display
from . import keys
from . import load

# @intent:utility_function オペコードからディスパッチキー（オペランドのニブルを0にした値）を求めます。
def dispatch_key(opcode: int) -> int:
    family = opcode >> 12
    if family == 0x0:
        return opcode            # 00E0, 00EE は完全一致
    if family == 0x8:
        return opcode & 0xF00F   # 8XYn
    if family in (0xE, 0xF):
        return opcode & 0xF0FF   # EXnn, FXnn
    return opcode & 0xF000       # 5XY0/9XY0 も含め、上位ニブルのみで判定

# @intent:map ディスパッチキーから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    0x00EE: control.execute_ret,
    0x1000: control.execute_jp,
    0x2000: control.execute_call,
    0x3000: control.execute_se_imm,
    0x4000: control.execute_sne_imm,
    0x5000: control.execute_se_reg,
    0x9000: control.execute_sne_reg,
    0xB000: control.execute_jp_v0,

    # ALU
    0x7000: alu.execute_add_imm,
    0x8000: alu.execute_ld_reg,
    0x8001: alu.execute_or,
    0x8002: alu.execute_and,
    0x8003: alu.execute_xor,
    0x8004: alu.execute_add_reg,
    0x8005: alu.execute_sub,
    0x8006: alu.execute_shr,
    0x8007: alu.execute_subn,
    0x800E: alu.execute_shl,
    0xC000: alu.execute_rnd,

    # Load/Store
    0x6000: load.execute_ld_imm,
    0xA000: load.execute_ld_i,
    0xF007: load.execute_ld_vx_dt,
    0xF015: load.execute_ld_dt,
    0xF018: load.execute_ld_st,
    0xF01E: load.execute_add_i,
    0xF029: load.execute_ld_font,
    0xF033: load.execute_ld_bcd,
    0xF055: load.execute_store_regs,
    0xF065: load.execute_load_regs,

    # Display
    0x00E0: display.execute_cls,
    0xD000: display.execute_drw,

    # Keypad
    0xE09E: keys.execute_skp,
    0xE0A1: keys.execute_sknp,
    0xF00A: keys.execute_wait_key,
}
