# src/chip8_tracer/ui/register_view.py
"""
レジスタを表示する汎用ウィジェット。
レイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFormLayout, QGroupBox, QLabel, QVBoxLayout, QWidget

from chip8_tracer.common.types import RegisterInfo, RegisterLayoutInfo, RegisterMap
from chip8_tracer.ui.fonts import get_monospace_font_family

# @intent:responsibility レジスタ値を表示する汎用UIウィジェットを提供します。
class RegisterView(QWidget):
    """
    レジスタ状態を表示するウィジェット。
    スレッド安全のため、CPUではなくスナップショットから得たレジスタマップで更新します。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = get_monospace_font_family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_infos: Dict[str, RegisterInfo] = {}

    # @intent:responsibility レイアウト情報に基づいてUIを構築します。
    def set_layout(self, layout_info: List[RegisterLayoutInfo]) -> None:
        while self.layout.count():
            item = self.layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_infos.clear()

        for group in layout_info:
            group_box = QGroupBox(group.group_name)
            group_box.setStyleSheet("""
                QGroupBox {
                    font-weight: bold;
                    border: 1px solid #222;
                    border-radius: 4px;
                    margin-top: 20px;
                    color: #EEE;
                }
                QGroupBox::title {
                    subcontrol-origin: margin;
                    subcontrol-position: top left;
                    padding: 0 5px;
                    left: 10px;
                    color: #00AAAA;
                }
            """)
            group_layout = QFormLayout(group_box)
            group_layout.setLabelAlignment(Qt.AlignLeft)
            group_layout.setSpacing(4)

            for reg in group.registers:
                self._register_infos[reg.name] = reg

                label_name = QLabel(f"{reg.name}:")
                label_value = QLabel(reg.format_value(0))
                label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
                label_value.setAlignment(Qt.AlignRight)

                group_layout.addRow(label_name, label_value)
                self._register_labels[reg.name] = label_value

            self.layout.addWidget(group_box)

        self.layout.addStretch()

    def update_registers(self, reg_map: RegisterMap) -> None:
        for name, value in reg_map.items():
            if name in self._register_labels:
                self._register_labels[name].setText(self._register_infos[name].format_value(value))

    def value_text(self, name: str) -> str:
        return self._register_labels[name].text()
