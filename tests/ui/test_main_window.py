import os
import sys
import unittest
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QKeyEvent, QColor
from PySide6.QtCore import Qt, QEvent, QSize

from retro_chip8.config.models import MachineConfig, DisplayConfig, TimingConfig
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.core.errors import DecodeError
from retro_chip8.ui.main_window import MainWindow
from retro_chip8.ui.display_view import DisplayView
from retro_chip8.ui.register_view import RegisterView

# 0x200: LD V0, #$05 / 0x202: SKP V0 / 0x204: JP $204 / 0x206: JP $206
PROGRAM = bytes([0x60, 0x05, 0xE0, 0x9E, 0x12, 0x04, 0x12, 0x06])


def key_event(event_type, key, auto_repeat=False):
    return QKeyEvent(event_type, key, Qt.NoModifier, "", auto_repeat)


class QtTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()


class TestMainWindow(QtTestCase):
    def setUp(self):
        self.config = MachineConfig()
        self.cpu, self.bus = SystemBuilder().build_system(self.config, PROGRAM)
        self.window = MainWindow(self.cpu, self.config)

    def tearDown(self):
        self.window.stop()
        self.window.deleteLater()

    def test_window_layout(self):
        self.assertEqual(self.window.windowTitle(), "Chip 8 Emulator")
        self.assertIs(self.window.centralWidget(), self.window.display_view)
        self.assertIsInstance(self.window.register_view, RegisterView)

    def test_advance_runs_cycle_and_refreshes_registers(self):
        self.window.advance(2 / 600)
        self.assertEqual(self.cpu.get_state().v[0], 5)
        self.assertEqual(self.window.register_view.get_register_text("V0"), "0x05")
        self.assertEqual(self.window.register_view.get_register_text("PC"), "0x0204")

    def test_key_press_reaches_cpu(self):
        self.window.keyPressEvent(key_event(QEvent.KeyPress, Qt.Key_5))
        self.assertTrue(self.cpu.get_state().keys[5])
        # SKP V0 が押下中のキー5で分岐する
        self.window.advance(2 / 600)
        self.assertEqual(self.cpu.get_state().pc, 0x206)

        self.window.keyReleaseEvent(key_event(QEvent.KeyRelease, Qt.Key_5))
        self.assertFalse(self.cpu.get_state().keys[5])

    def test_auto_repeat_is_ignored(self):
        self.window.keyReleaseEvent(key_event(QEvent.KeyRelease, Qt.Key_5))
        self.window.keyPressEvent(key_event(QEvent.KeyPress, Qt.Key_5, auto_repeat=True))
        self.assertFalse(self.cpu.get_state().keys[5])

    def test_unmapped_key_is_ignored(self):
        self.window.keyPressEvent(key_event(QEvent.KeyPress, Qt.Key_Space))
        self.assertFalse(any(self.cpu.get_state().keys))

    def test_configured_key_map(self):
        config = MachineConfig(key_map={"X": 0x0})
        window = MainWindow(self.cpu, config)
        window.keyPressEvent(key_event(QEvent.KeyPress, Qt.Key_X))
        self.assertTrue(self.cpu.get_state().keys[0])
        window.deleteLater()

    def test_prebuilt_key_map(self):
        window = MainWindow(self.cpu, self.config, key_map={Qt.Key_PageUp.value: 0x1})
        window.keyPressEvent(key_event(QEvent.KeyPress, Qt.Key_PageUp))
        self.assertTrue(self.cpu.get_state().keys[1])
        window.deleteLater()

    def test_timer_uses_configured_interval(self):
        config = MachineConfig(timing=TimingConfig(frame_interval_ms=5))
        window = MainWindow(self.cpu, config)
        self.assertEqual(window._timer.interval(), 5)
        window.start()
        self.assertTrue(window.is_running())
        window.stop()
        self.assertFalse(window.is_running())
        window.deleteLater()

    # 致命的エラーでは実行ループが停止し、ダイアログで通知される
    def test_fatal_error_halts(self):
        cpu, _ = SystemBuilder().build_system(self.config, bytes([0x00, 0x00]))
        window = MainWindow(cpu, self.config)
        window.start()
        with patch("retro_chip8.ui.main_window.QMessageBox.critical") as critical:
            window.advance(0.1)
        critical.assert_called_once()
        self.assertFalse(window.is_running())
        self.assertIsInstance(window.get_fatal_error(), DecodeError)

        # 停止後は再開しない
        window.start()
        self.assertFalse(window.is_running())
        window.deleteLater()


class TestDisplayView(QtTestCase):
    def test_size_follows_scale(self):
        view = DisplayView(scale=20)
        self.assertEqual(view.sizeHint(), QSize(1280, 640))
        self.assertEqual(DisplayView(scale=5).sizeHint(), QSize(320, 160))

    def test_renders_lit_pixels(self):
        config = MachineConfig(display=DisplayConfig(scale=4, foreground="#00FF00", background="#000000"))
        cpu, _ = SystemBuilder().build_system(config, bytes([0xD0, 0x01]))  # DRW V0, V0, 1 (I=0: 0xF0)
        cpu.step()
        view = DisplayView(4, "#00FF00", "#000000")
        view.set_display(cpu.display)
        image = view.grab().toImage()
        self.assertEqual(image.pixelColor(1, 1), QColor("#00FF00"))
        self.assertEqual(image.pixelColor(4 * 4 + 1, 1), QColor("#000000"))


if __name__ == '__main__':
    unittest.main()
