import unittest
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.core.errors import OutOfRangeError
from retro_chip8.loader.loader import ProgramLoader
from retro_chip8.arch.chip8.cpu import Chip8Cpu


class TestChip8PeripheralInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        ProgramLoader().load_font(self.bus)
        self.cpu = Chip8Cpu(self.bus)
        self.state = self.cpu.get_state()
        self.display = self.cpu.display

    def _execute(self, word, current_pc=0x200):
        self.bus.write(current_pc, word >> 8)
        self.bus.write(current_pc + 1, word & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    def _lit_pixels(self):
        return {(x, y) for y, row in enumerate(self.display.get_buffer()) for x, lit in enumerate(row) if lit}

    # --- DRW ---
    def test_draw_on_clear_screen_has_no_collision(self):
        # フォント "0" (F0 90 90 90 F0) を (0, 0) に描画
        self.state.i = 0x000
        self._execute(0xD125)
        self.assertEqual(self.state.vf, 0)
        self.assertTrue(all(self.display.get_pixel(x, 0) for x in range(4)))
        self.assertFalse(self.display.get_pixel(4, 0))
        self.assertTrue(self.display.get_pixel(0, 1))
        self.assertFalse(self.display.get_pixel(1, 1))
        self.assertTrue(self.display.get_pixel(3, 1))

    def test_draw_twice_erases_and_sets_collision(self):
        self.state.i = 0x000
        self._execute(0xD125)
        self._execute(0xD125)
        self.assertEqual(self.state.vf, 1)
        self.assertEqual(self._lit_pixels(), set())

    def test_draw_uses_register_coordinates(self):
        self.state.v[1] = 10
        self.state.v[2] = 20
        self.state.i = 0x300
        self.bus.write(0x300, 0x80)
        self._execute(0xD121)
        self.assertEqual(self._lit_pixels(), {(10, 20)})

    def test_draw_wraps_around_edges(self):
        self.state.v[1] = 62
        self.state.v[2] = 31
        self.state.i = 0x300
        self.bus.write(0x300, 0xFF)
        self.bus.write(0x301, 0x80)
        self._execute(0xD122)
        expected = {(62, 31), (63, 31)} | {(x, 31) for x in range(6)} | {(62, 0)}
        self.assertEqual(self._lit_pixels(), expected)

    def test_draw_sprite_past_memory_end_is_fatal(self):
        self.state.i = 0xFFE
        with self.assertRaises(OutOfRangeError):
            self._execute(0xD125)

    # --- CLS ---
    def test_clear_screen(self):
        self.state.i = 0x000
        self._execute(0xD125)
        self._execute(0x00E0)
        self.assertEqual(self._lit_pixels(), set())
        self.assertEqual(self.state.pc, 0x202)

    # --- SKP / SKNP ---
    def test_skip_pressed(self):
        self.state.v[1] = 5
        self._execute(0xE19E)
        self.assertEqual(self.state.pc, 0x202)

        self.cpu.key_press(5)
        self._execute(0xE19E)
        self.assertEqual(self.state.pc, 0x204)

    def test_skip_not_pressed(self):
        self.state.v[1] = 5
        self._execute(0xE1A1)
        self.assertEqual(self.state.pc, 0x204)

        self.cpu.key_press(5)
        self._execute(0xE1A1)
        self.assertEqual(self.state.pc, 0x202)

        self.cpu.key_release(5)
        self._execute(0xE1A1)
        self.assertEqual(self.state.pc, 0x204)

    def test_skip_pressed_with_invalid_key_value(self):
        self.state.v[1] = 0x20
        with self.assertRaises(OutOfRangeError):
            self._execute(0xE19E)

    # --- LD Vx, K ---
    def test_wait_for_key_latches_register(self):
        self._execute(0xF30A)
        self.assertEqual(self.state.wait_for_key, 3)
        self.assertEqual(self.state.pc, 0x202)


if __name__ == '__main__':
    unittest.main()
