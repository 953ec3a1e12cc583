# tests/arch/chip8/test_display.py
"""
retro_chip8.arch.chip8.display モジュールの単体テスト。
"""
from retro_chip8.arch.chip8.display import Display, FONTSET, GLYPH_SIZE, WIDTH, HEIGHT

# @intent:test_suite フレームバッファのXOR描画、折り返し、衝突判定を検証します。


class TestDisplay:
    def test_dimensions(self):
        display = Display()
        assert (display.width, display.height) == (WIDTH, HEIGHT) == (64, 32)
        buffer = display.get_buffer()
        assert len(buffer) == 32
        assert all(len(row) == 64 for row in buffer)

    def test_draw_sets_pixels_msb_first(self):
        display = Display()
        assert display.draw(8, 4, [0b10100000]) is False
        assert display.get_pixel(8, 4)
        assert not display.get_pixel(9, 4)
        assert display.get_pixel(10, 4)

    # @intent:test_case_xor 同じスプライトを2回描画すると消え、衝突が報告されることを検証します。
    def test_redraw_erases_with_collision(self):
        display = Display()
        display.draw(0, 0, [0xFF])
        assert display.draw(0, 0, [0xFF]) is True
        assert not any(display.get_buffer()[0])

    def test_partial_overlap_is_collision(self):
        display = Display()
        display.draw(0, 0, [0x80])
        assert display.draw(0, 0, [0xC0]) is True
        assert not display.get_pixel(0, 0)
        assert display.get_pixel(1, 0)

    def test_lighting_new_pixels_is_not_collision(self):
        display = Display()
        display.draw(0, 0, [0x80])
        assert display.draw(1, 0, [0x80]) is False

    def test_wraps_horizontally_and_vertically(self):
        display = Display()
        display.draw(63, 31, [0xC0, 0xC0])
        assert display.get_pixel(63, 31)
        assert display.get_pixel(0, 31)
        assert display.get_pixel(63, 0)
        assert display.get_pixel(0, 0)

    def test_start_coordinates_wrap(self):
        display = Display()
        display.draw(64 + 3, 32 + 2, [0x80])
        assert display.get_pixel(3, 2)

    def test_clear(self):
        display = Display()
        display.draw(10, 10, [0xFF, 0xFF])
        display.clear()
        assert not any(any(row) for row in display.get_buffer())

    def test_buffer_is_a_copy(self):
        display = Display()
        buffer = display.get_buffer()
        display.draw(0, 0, [0x80])
        assert buffer[0][0] is False
        assert display.get_buffer()[0][0] is True


class TestFontset:
    def test_sixteen_glyphs(self):
        assert GLYPH_SIZE == 5
        assert len(FONTSET) == 16 * GLYPH_SIZE

    def test_glyph_shapes(self):
        assert FONTSET[0:5] == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])
        assert FONTSET[5:10] == bytes([0x20, 0x60, 0x20, 0x20, 0x70])
        assert FONTSET[75:80] == bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])
