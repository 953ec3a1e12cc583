# src/retro_chip8/ui/display_view.py
"""
CHIP-8のフレームバッファを拡大描画するウィジェット。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QColor
from PySide6.QtCore import QSize

from retro_chip8.arch.chip8.display import Display, WIDTH, HEIGHT

# @intent:responsibility フレームバッファの点灯ピクセルを scale 倍の矩形として描画します。
class DisplayView(QWidget):
    """
    フレームバッファを表示するウィジェット。
    描画は1回の run_cycle が完了した後に update() で要求されます。
    """
    def __init__(self, scale: int = 20, foreground: str = "#FFFFFF", background: str = "#000000", parent=None):
        super().__init__(parent)
        self._display: Optional[Display] = None
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self.setFixedSize(self.sizeHint())

    def set_display(self, display: Display) -> None:
        self._display = display
        self.update()

    def sizeHint(self) -> QSize:
        width = self._display.width if self._display else WIDTH
        height = self._display.height if self._display else HEIGHT
        return QSize(width * self._scale, height * self._scale)

    # @intent:responsibility 背景を塗りつぶし、点灯ピクセルのみを前景色で描画します。
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        if self._display is not None:
            s = self._scale
            for y, row in enumerate(self._display.get_buffer()):
                for x, lit in enumerate(row):
                    if lit:
                        painter.fillRect(x * s, y * s, s, s, self._foreground)
        painter.end()
