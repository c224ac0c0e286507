from chip8vm import Display


def test_draw_on_blank_reports_no_collision():
    display = Display()
    assert display.draw_sprite(0, 0, [0xFF]) is False
    assert display.pixels[0, :8].all()
    assert not display.pixels[0, 8:].any()


def test_drawing_twice_erases_and_collides():
    display = Display()
    display.draw_sprite(10, 5, [0xFF])
    assert display.draw_sprite(10, 5, [0xFF]) is True
    assert not display.pixels.any()


def test_bits_are_drawn_msb_first():
    display = Display()
    display.draw_sprite(0, 0, [0b10100000])
    assert list(display.pixels[0, :4]) == [True, False, True, False]


def test_clipped_at_right_edge():
    display = Display()
    display.draw_sprite(60, 0, [0xFF])
    assert display.pixels[0, 60:].all()
    assert not display.pixels[0, :4].any()


def test_clipped_at_bottom_edge():
    display = Display()
    display.draw_sprite(0, 31, [0x80, 0x80, 0x80])
    assert display.pixels[31, 0]
    assert not display.pixels[0:2, 0].any()


def test_partial_overlap_still_collides():
    display = Display()
    display.draw_sprite(0, 0, [0x01])
    assert display.draw_sprite(0, 0, [0x03]) is True
    assert display.pixels[0, 6]
    assert not display.pixels[0, 7]


def test_clear():
    display = Display()
    display.draw_sprite(0, 0, [0xFF, 0xFF])
    display.clear()
    assert not display.pixels.any()
