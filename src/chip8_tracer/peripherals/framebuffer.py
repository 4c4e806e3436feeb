# chip8_tracer/peripherals/framebuffer.py
"""
64x32 モノクロフレームバッファ。

各セルは0または1を保持します。変更されるのは画面クリアとスプライト描画の2命令のみで、
スプライト描画はXORで行われます。
"""
from typing import List

from chip8_tracer.common.types import Frame

WIDTH = 64
HEIGHT = 32
SIZE = WIDTH * HEIGHT

# @intent:responsibility 2048セルの2値ピクセルグリッドとXORスプライト描画を提供します。
class Framebuffer:
    def __init__(self):
        self._cells = bytearray(SIZE)

    def clear(self) -> None:
        self._cells = bytearray(SIZE)

    # @intent:responsibility 8ピクセル幅のスプライトをXORで描画し、衝突フラグを返します。
    # @intent:pre-condition rowsの各要素は8bit値であり、最上位ビットが左端のピクセルです。
    def draw_sprite(self, x: int, y: int, rows: bytes) -> int:
        """
        (x, y) を左上として rows を描画します。座標は画面端でトーラス状に折り返し、クリップはしません。
        描画前に既にセットされていたセットビットが1つでもあれば1、そうでなければ0を返します。
        """
        collision = 0
        for row, bits in enumerate(rows):
            for column in range(8):
                if bits & (0x80 >> column):
                    index = (x + column) % WIDTH + ((y + row) % HEIGHT) * WIDTH
                    collision = max(collision, self._cells[index])
                    self._cells[index] ^= 1
        return collision

    def pixel(self, x: int, y: int) -> int:
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {WIDTH}x{HEIGHT} framebuffer.")
        return self._cells[x + y * WIDTH]

    def to_bytes(self) -> Frame:
        """レンダラへ渡すための読み取り専用コピー（行優先、2048バイト）。"""
        return bytes(self._cells)

    def rows(self) -> List[bytes]:
        return [bytes(self._cells[r * WIDTH:(r + 1) * WIDTH]) for r in range(HEIGHT)]

    def lit_count(self) -> int:
        return sum(self._cells)
