# src/retro_chip8/arch/chip8/display.py
"""
CHIP-8のモノクロフレームバッファと組み込みフォント。
"""
from typing import List, Sequence, Tuple

WIDTH = 64
HEIGHT = 32

# @intent:constant 16進数字 0〜F のフォントグリフ。1文字5バイト、メモリ先頭に配置されます。
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
GLYPH_SIZE = 5

Buffer = Tuple[Tuple[bool, ...], ...]

# @intent:responsibility 64x32ピクセルのモノクロフレームバッファを保持し、XOR描画を提供します。
class Display:
    """
    CHIP-8のフレームバッファ。
    描画はXOR合成で行われ、画面端を越えたピクセルは反対側へ折り返します。
    """
    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        self.width = width
        self.height = height
        self._pixels: List[List[bool]] = [[False] * width for _ in range(height)]

    # @intent:responsibility 全ピクセルを消灯します。
    def clear(self) -> None:
        for row in self._pixels:
            for x in range(self.width):
                row[x] = False

    # @intent:responsibility スプライトを (x, y) にXOR描画し、衝突の有無を返します。
    # @intent:post-condition 点灯していたピクセルが1つでも消灯した場合 True を返します。
    def draw(self, x: int, y: int, sprite: Sequence[int]) -> bool:
        collision = False
        for row_offset, row_bits in enumerate(sprite):
            py = (y + row_offset) % self.height
            for bit in range(8):
                if not row_bits & (0x80 >> bit):
                    continue
                px = (x + bit) % self.width
                if self._pixels[py][px]:
                    collision = True
                self._pixels[py][px] = not self._pixels[py][px]
        return collision

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[y][x]

    # @intent:responsibility 描画側に渡す読み取り専用のバッファを返します（buffer[y][x]）。
    def get_buffer(self) -> Buffer:
        return tuple(tuple(row) for row in self._pixels)
