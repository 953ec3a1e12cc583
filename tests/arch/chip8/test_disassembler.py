# tests/arch/chip8/test_disassembler.py
"""
retro_chip8.arch.chip8.disassembler モジュールの単体テスト。
"""
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.disassembler import disassemble

# @intent:test_suite メモリ範囲の逆アセンブルと、未定義語の DW 表記を検証します。


def make_bus(program, offset=0x200):
    bus = Bus()
    bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
    bus.load(offset, program)
    return bus


class TestDisassembler:
    def test_program_listing(self):
        bus = make_bus([0x60, 0x05, 0xA2, 0x0A, 0xD0, 0x15, 0x12, 0x00])
        assert disassemble(bus, 0x200, 8) == [
            (0x200, "6005", "LD V0, #$05"),
            (0x202, "A20A", "LD I, $20A"),
            (0x204, "D015", "DRW V0, V1, 5"),
            (0x206, "1200", "JP $200"),
        ]

    def test_undecodable_word_is_data(self):
        bus = make_bus([0xFF, 0xFF, 0x00, 0xE0])
        assert disassemble(bus, 0x200, 4) == [
            (0x200, "FFFF", "DW $FFFF"),
            (0x202, "00E0", "CLS"),
        ]

    def test_odd_length_drops_trailing_byte(self):
        bus = make_bus([0x00, 0xE0, 0x12])
        assert len(disassemble(bus, 0x200, 3)) == 1

    def test_range_is_clipped_to_memory(self):
        bus = make_bus([0x00, 0xE0], offset=0xFFE)
        assert disassemble(bus, 0xFFE, 0x100) == [(0xFFE, "00E0", "CLS")]

    # @intent:test_case_peek 逆アセンブルはバスアクセスログを残さないことを検証します。
    def test_does_not_log_bus_activity(self):
        bus = make_bus([0x00, 0xE0])
        disassemble(bus, 0x200, 2)
        assert bus.get_and_clear_activity_log() == []
