# src/chip8_tracer/ui/display_view.py
"""
フレームバッファを画面に描画するウィジェット。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QColor, QPaintEvent
from PySide6.QtCore import QSize

from chip8_tracer.arch.chip8.display import Framebuffer
from chip8_tracer.config.models import DisplayConfig

# @intent:responsibility 64x32のフレームバッファを、倍率と配色に従って矩形として描画します。
# @intent:rationale 拡大率と色は表示ポリシーであり、インタプリタには持たせません。
class FramebufferView(QWidget):
    def __init__(self, framebuffer: Optional[Framebuffer] = None, config: Optional[DisplayConfig] = None, parent=None):
        super().__init__(parent)
        self._framebuffer = framebuffer
        self._config = config or DisplayConfig()
        self._on_color = QColor(self._config.on_color)
        self._off_color = QColor(self._config.off_color)
        self._apply_size()

    def set_framebuffer(self, framebuffer: Framebuffer) -> None:
        self._framebuffer = framebuffer
        self._apply_size()
        self.update()

    def set_display_config(self, config: DisplayConfig) -> None:
        self._config = config
        self._on_color = QColor(config.on_color)
        self._off_color = QColor(config.off_color)
        self._apply_size()
        self.update()

    def _apply_size(self) -> None:
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        width, height = (64, 32) if self._framebuffer is None else (self._framebuffer.width, self._framebuffer.height)
        return QSize(width * self._config.scale, height * self._config.scale)

    # @intent:responsibility 前回描画以降に変化があれば再描画を要求し、要求したかを返します。
    def refresh(self) -> bool:
        if self._framebuffer is not None and self._framebuffer.consume_dirty():
            self.update()
            return True
        return False

    # @intent:responsibility 論理ピクセル(x, y)の表示色を返します。
    def pixel_color(self, x: int, y: int) -> QColor:
        if self._framebuffer is not None and self._framebuffer.get_pixel(x, y):
            return self._on_color
        return self._off_color

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        scale = self._config.scale
        painter.fillRect(self.rect(), self._off_color)
        if self._framebuffer is not None:
            for y, row in enumerate(self._framebuffer.rows()):
                for x, pixel in enumerate(row):
                    if pixel:
                        painter.fillRect(x * scale, y * scale, scale, scale, self._on_color)
        painter.end()
