"""
レイヤー間で共有される型定義。
"""
from typing import Dict, List, NamedTuple

# @intent:data_structure レジスタ名と値の対応。CPUが生成し、スナップショット経由でUIが表示します。
RegisterMap = Dict[str, int]

# @intent:data_structure レンダラへ渡される1フレーム（行優先、各セル0/1）。
Frame = bytes

# @intent:data_structure 単一のレジスタの表示定義。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

    @property
    def hex_digits(self) -> int:
        return (self.width + 3) // 4

    def format_value(self, value: int) -> str:
        """例: 16bitの0x200 -> "0x0200" """
        return f"0x{value:0{self.hex_digits}X}"

# @intent:data_structure レジスタグループの表示定義（例: "Pointers/Timers", "General"）。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
