"""
実行トレース（直近の命令の説明）を表示するウィジェット。
"""
from typing import Sequence, Tuple

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QVBoxLayout, QWidget

from chip8_tracer.ui.fonts import get_monospace_font

# @intent:responsibility スナップショットのトレース行を古い順に表示し、最新行までスクロールします。
class TraceView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.text = QPlainTextEdit()
        self.text.setReadOnly(True)
        self.text.setFont(get_monospace_font(10))
        self.text.setStyleSheet("background-color: #101010; color: #BBBBBB;")
        self.layout.addWidget(self.text)

        self._lines: Tuple[str, ...] = ()

    def update_trace(self, lines: Sequence[str]) -> None:
        lines = tuple(lines)
        if lines == self._lines:
            return
        self._lines = lines
        self.text.setPlainText("\n".join(lines))
        self.text.moveCursor(QTextCursor.End)

    def lines(self) -> Tuple[str, ...]:
        return self._lines
