import unittest
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu


class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        self.cpu = Chip8Cpu(self.bus, rng=lambda: 0xAB)
        self.state = self.cpu.get_state()

    def _execute(self, word, current_pc=0x200):
        self.bus.write(current_pc, word >> 8)
        self.bus.write(current_pc + 1, word & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    # --- ADD Vx, Vy ---
    def test_add_with_carry(self):
        # 250 + 10 = 260 -> 4, VF=1
        self.state.v[1] = 250
        self.state.v[2] = 10
        self._execute(0x8124)
        self.assertEqual(self.state.v[1], 4)
        self.assertEqual(self.state.vf, 1)
        self.assertEqual(self.state.pc, 0x202)

    def test_add_without_carry_clears_flag(self):
        self.state.v[1] = 100
        self.state.v[2] = 55
        self.state.vf = 1
        self._execute(0x8124)
        self.assertEqual(self.state.v[1], 155)
        self.assertEqual(self.state.vf, 0)

    def test_add_exactly_255_has_no_carry(self):
        self.state.v[1] = 200
        self.state.v[2] = 55
        self._execute(0x8124)
        self.assertEqual(self.state.v[1], 255)
        self.assertEqual(self.state.vf, 0)

    def test_add_into_vf_overwrites_flag(self):
        # フラグ(1)を書いた後に結果(300 & 0xFF = 44)で上書きされる
        self.state.v[0xF] = 200
        self.state.v[1] = 100
        self._execute(0x8F14)
        self.assertEqual(self.state.vf, 44)

    # --- ADD Vx, byte ---
    def test_add_byte_wraps_without_flag(self):
        self.state.v[1] = 2
        self._execute(0x71FF)
        self.assertEqual(self.state.v[1], 1)
        self.assertEqual(self.state.vf, 0)

    # --- SUB Vx, Vy ---
    def test_sub_greater(self):
        self.state.v[1] = 5
        self.state.v[2] = 3
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 2)
        self.assertEqual(self.state.vf, 1)

    def test_sub_wraps(self):
        self.state.v[1] = 3
        self.state.v[2] = 5
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 254)
        self.assertEqual(self.state.vf, 0)

    def test_sub_equal_operands_clears_flag(self):
        # Vx > Vy の厳密比較なので、等しい場合はVF=0
        self.state.v[1] = 4
        self.state.v[2] = 4
        self.state.vf = 1
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 0)
        self.assertEqual(self.state.vf, 0)

    # --- SUBN Vx, Vy ---
    def test_reverse_sub(self):
        self.state.v[1] = 3
        self.state.v[2] = 5
        self._execute(0x8127)
        self.assertEqual(self.state.v[1], 2)
        self.assertEqual(self.state.vf, 1)

    def test_reverse_sub_wraps(self):
        self.state.v[1] = 5
        self.state.v[2] = 3
        self._execute(0x8127)
        self.assertEqual(self.state.v[1], 254)
        self.assertEqual(self.state.vf, 0)

    # --- SHR / SHL ---
    def test_shift_right(self):
        self.state.v[1] = 0b101
        self._execute(0x8106)
        self.assertEqual(self.state.v[1], 0b10)
        self.assertEqual(self.state.vf, 1)

        self.state.v[1] = 0b100
        self._execute(0x8106)
        self.assertEqual(self.state.v[1], 0b10)
        self.assertEqual(self.state.vf, 0)

    def test_shift_left_stores_masked_high_bit(self):
        self.state.v[1] = 0x81
        self._execute(0x810E)
        self.assertEqual(self.state.v[1], 0x02)
        self.assertEqual(self.state.vf, 0x80)

    def test_shift_left_without_high_bit(self):
        self.state.v[1] = 0x41
        self.state.vf = 1
        self._execute(0x810E)
        self.assertEqual(self.state.v[1], 0x82)
        self.assertEqual(self.state.vf, 0)

    # --- OR / AND / XOR ---
    def test_bitwise_operations_leave_flag(self):
        for word, expected in ((0x8121, 0b1110), (0x8122, 0b1000), (0x8123, 0b0110)):
            self.state.v[1] = 0b1100
            self.state.v[2] = 0b1010
            self.state.vf = 7
            self._execute(word)
            self.assertEqual(self.state.v[1], expected)
            self.assertEqual(self.state.vf, 7)

    # --- RND Vx, byte ---
    def test_load_rand_masks_injected_byte(self):
        self._execute(0xC10F)
        self.assertEqual(self.state.v[1], 0x0B)

    def test_load_rand_default_source(self):
        cpu = Chip8Cpu(self.bus)
        self.bus.write(0x200, 0xC1)
        self.bus.write(0x201, 0xFF)
        cpu.step()
        self.assertTrue(0 <= cpu.get_state().v[1] <= 0xFF)


if __name__ == '__main__':
    unittest.main()
