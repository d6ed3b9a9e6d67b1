# src/chip8_tracer/arch/chip8/display.py
"""
CHIP-8 のモノクロフレームバッファ。
"""
from typing import List, Tuple

from chip8_tracer.arch.chip8.constants import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:responsibility 64x32の1bitピクセル格子を保持し、XOR描画と衝突検出を提供します。
# @intent:rationale レンダラは読み取り専用ビュー（rows / get_pixel）とdirtyフラグのみを使用し、
#                  ピクセルの書き換えはインタプリタ（00E0, Dxyn）に限定します。
class Framebuffer:
    """
    モノクロフレームバッファ。各ピクセルは0または1。
    """
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self.width = width
        self.height = height
        self._pixels: List[bytearray] = [bytearray(width) for _ in range(height)]
        self._dirty = True

    def clear(self) -> None:
        for row in self._pixels:
            row[:] = bytes(self.width)
        self._dirty = True

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer.")

    def get_pixel(self, x: int, y: int) -> int:
        self._check(x, y)
        return self._pixels[y][x]

    # @intent:responsibility ピクセルにbitをXORし、点灯していたピクセルを消した場合Trueを返します。
    # @intent:pre-condition x, y は呼び出し側で画面サイズの剰余に折り返し済みであること。範囲外は IndexError。
    def xor_pixel(self, x: int, y: int, bit: int) -> bool:
        self._check(x, y)
        if not bit:
            return False
        row = self._pixels[y]
        collided = row[x] == 1
        row[x] ^= 1
        self._dirty = True
        return collided

    # @intent:responsibility 各行の不変コピーを返します。
    def rows(self) -> Tuple[bytes, ...]:
        return tuple(bytes(row) for row in self._pixels)

    def lit_count(self) -> int:
        return sum(sum(row) for row in self._pixels)

    @property
    def dirty(self) -> bool:
        return self._dirty

    # @intent:responsibility 前回の呼び出し以降に描画があったかを返し、フラグを下ろします。
    def consume_dirty(self) -> bool:
        was_dirty = self._dirty
        self._dirty = False
        return was_dirty

    def __str__(self) -> str:
        return "\n".join("".join("#" if p else "." for p in row) for row in self._pixels)
