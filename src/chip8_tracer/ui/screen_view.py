"""
CHIP-8の64x32フレームバッファを表示するウィジェット。
"""
from typing import Optional

from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtWidgets import QWidget

from chip8_tracer.common.types import Frame
from chip8_tracer.config.models import DisplayConfig
from chip8_tracer.peripherals.framebuffer import HEIGHT, WIDTH

# @intent:responsibility ホストに渡されたフレームを拡大して描画します。
class ScreenView(QWidget):
    def __init__(self, display: Optional[DisplayConfig] = None, parent=None):
        super().__init__(parent)
        self._display = display if display is not None else DisplayConfig()
        self._image = QImage(WIDTH, HEIGHT, QImage.Format_RGB32)
        self._on = QColor(self._display.foreground).rgb()
        self._off = QColor(self._display.background).rgb()
        self._image.fill(self._off)
        self._frame: Optional[Frame] = None
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(WIDTH * 2, HEIGHT * 2)

    def sizeHint(self) -> QSize:
        return QSize(WIDTH * self._display.scale, HEIGHT * self._display.scale)

    # @intent:responsibility 新しいフレームを受け取り、変化があれば再描画します。
    def set_frame(self, frame: Optional[Frame]) -> None:
        if frame is None or frame == self._frame:
            return
        self._frame = frame
        for y in range(HEIGHT):
            row = y * WIDTH
            for x in range(WIDTH):
                self._image.setPixel(x, y, self._on if frame[row + x] else self._off)
        self.update()

    def image(self) -> QImage:
        return self._image

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(self._display.background))
        # 縦横比を保ったまま整数倍で拡大する
        scale = max(1, min(self.width() // WIDTH, self.height() // HEIGHT))
        w, h = WIDTH * scale, HEIGHT * scale
        x = (self.width() - w) // 2
        y = (self.height() - h) // 2
        painter.drawImage(x, y, self._image.scaled(w, h))
        painter.end()
