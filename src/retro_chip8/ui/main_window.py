# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
フレームバッファ表示、レジスタ表示、キー入力、実行タイマーを束ねるホスト側の実行ループです。
"""
import logging
import time
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QDockWidget, QMessageBox
from PySide6.QtGui import QKeyEvent, QCloseEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import MachineConfig
from retro_chip8.core.errors import Chip8Error
from .display_view import DisplayView
from .register_view import RegisterView
from .keymap import KeyMap, build_key_map, key_value

logger = logging.getLogger(__name__)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、実行ループとUIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    CHIP-8エミュレータのメインウィンドウ。
    QTimerのタイムアウト毎に経過秒数を測って run_cycle を呼び出し、その後に画面を更新します。
    キーイベントも同じGUIスレッドで処理されるため、ステップの途中に割り込むことはありません。
    """
    def __init__(self, cpu: Chip8Cpu, config: Optional[MachineConfig] = None,
                 key_map: Optional[KeyMap] = None, parent=None):
        super().__init__(parent)
        self._cpu = cpu
        self._config = config if config is not None else MachineConfig()
        self._key_map = key_map if key_map is not None else build_key_map(self._config.key_map)
        self._last_time: Optional[float] = None
        self._fatal_error: Optional[Chip8Error] = None

        self.setWindowTitle("Chip 8 Emulator")
        self._create_display()
        self._create_status_inspector()

        self._timer = QTimer(self)
        self._timer.setInterval(self._config.timing.frame_interval_ms)
        self._timer.timeout.connect(self._on_timer)

    def _create_display(self):
        display_cfg = self._config.display
        self.display_view = DisplayView(display_cfg.scale, display_cfg.foreground, display_cfg.background, self)
        self.display_view.set_display(self._cpu.display)
        self.setCentralWidget(self.display_view)

    def _create_status_inspector(self):
        self.register_view = RegisterView(self)
        self.register_view.set_cpu(self._cpu)
        dock = QDockWidget("Registers", self)
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    # --- 実行制御 ---

    def is_running(self) -> bool:
        return self._timer.isActive()

    def get_fatal_error(self) -> Optional[Chip8Error]:
        return self._fatal_error

    @Slot()
    def start(self):
        if self._fatal_error is not None:
            return
        self._last_time = time.perf_counter()
        self._timer.start()

    @Slot()
    def stop(self):
        self._timer.stop()

    # @intent:responsibility 前回からの経過秒数を run_cycle に渡し、完了後に画面とレジスタ表示を更新します。
    @Slot()
    def _on_timer(self):
        now = time.perf_counter()
        elapsed = now - self._last_time if self._last_time is not None else 0.0
        self._last_time = now
        self.advance(elapsed)

    def advance(self, elapsed_seconds: float) -> None:
        try:
            self._cpu.run_cycle(elapsed_seconds)
        except Chip8Error as e:
            self._on_fatal_error(e)
        finally:
            self.display_view.update()
            self.register_view.update_registers()

    # @intent:responsibility 致命的エラーでエミュレーションを停止し、ユーザーに通知します。再開はしません。
    def _on_fatal_error(self, error: Chip8Error) -> None:
        self.stop()
        self._fatal_error = error
        pc = self._cpu.get_state().pc
        logger.error("Emulation halted at PC %#05x: %s", pc, error)
        QMessageBox.critical(self, "Emulation Error", f"Emulation halted at PC {pc:#05x}:\n{error}")

    # --- キー入力 ---

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key_Escape:
            self.close()
            return
        if event.isAutoRepeat():
            return
        key = key_value(event.key(), self._key_map)
        if key is None:
            super().keyPressEvent(event)
            return
        self._cpu.key_press(key)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        key = key_value(event.key(), self._key_map)
        if key is None:
            super().keyReleaseEvent(event)
            return
        self._cpu.key_release(key)

    def closeEvent(self, event: QCloseEvent):
        self.stop()
        super().closeEvent(event)
