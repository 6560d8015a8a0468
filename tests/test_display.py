import pytest

from fractol.mlx.display import Display, DisplayError
from fractol.mlx.events import Event, EventMask, EventType

WIN1_SX = 242
WIN1_SY = 242


@pytest.fixture
def display():
    with Display(headless=True) as d:
        yield d


def _color_map(x, y, w, h):
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


def test_window_pixel_put_and_clear(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    for x in range(WIN1_SX):
        for y in range(WIN1_SY):
            display.pixel_put(win, x, y, _color_map(x, y, WIN1_SX, WIN1_SY))
    assert win.pixel(0, 0) == 0xFF0000
    assert win.pixel(241, 241) == 0x01FDFD
    display.clear_window(win)
    assert not any(win.framebuffer.data)


def test_pixel_put_outside_is_clipped(display):
    win = display.new_window(10, 10, "w")
    display.pixel_put(win, 20, 20, 0xFFFFFF)
    assert {win.pixel(x, y) for x in range(10) for y in range(10)} == {0}
    display.pixel_put(win, 9, 9, 0xFFFFFF)
    assert win.pixel(9, 9) == 0xFFFFFF
    assert win.pixel(0, 0) == 0


def test_image_layout_and_put(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    image = display.new_image(42, 42)
    assert image.bits_per_pixel == 32
    assert image.size_line == 168
    for x in range(42):
        for y in range(42):
            image.put_pixel(x, y, 0x123456)
    display.put_image_to_window(win, image, 20, 20)
    assert win.pixel(20, 20) == 0x123456
    assert win.pixel(61, 61) == 0x123456
    assert win.pixel(19, 19) == 0
    assert win.pixel(62, 62) == 0


def test_put_image_clips_negative_offset(display):
    win = display.new_window(20, 20, "w")
    image = display.new_image(15, 15)
    image.put_pixel(14, 14, 0xABCDEF)
    image.put_pixel(10, 10, 0x00FF00)
    display.put_image_to_window(win, image, -10, -10)
    assert win.pixel(4, 4) == 0xABCDEF
    assert win.pixel(0, 0) == 0x00FF00
    assert win.pixel(5, 5) == 0


def test_destroy_image(display):
    image = display.new_image(4, 4)
    assert display.images == (image,)
    display.destroy_image(image)
    assert display.images == ()
    with pytest.raises(DisplayError):
        display.destroy_image(image)


def test_string_put_records_text(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    display.string_put(win, 5, WIN1_SY // 2, 0xFF99FF, "String output")
    display.string_put(win, 15, WIN1_SY // 2 + 20, 0x00FFFF, "MinilibX test")
    assert win.strings == [
        (5, 121, 0xFF99FF, "String output"),
        (15, 141, 0x00FFFF, "MinilibX test"),
    ]
    display.clear_window(win)
    assert win.strings == []


def test_set_font(display):
    win = display.new_window(10, 10, "w")
    display.set_font(win, "fixed")
    assert win.font == "fixed"


def test_xpm_from_data(display):
    image = display.xpm_to_image(["2 1 2 1", "a c #FF0000", "b c blue", "ab"])
    assert (image.width, image.height) == (2, 1)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == 0x0000FF
    assert display.images == (image,)


def test_xpm_from_file(display, tmp_path):
    path = tmp_path / "open.xpm"
    path.write_text(
        '/* XPM */\nstatic char *open[] = {\n"2 2 2 1",\n"a c #00FF00",\n'
        '"b c black",\n"ab",\n"ba"\n};\n'
    )
    image = display.xpm_file_to_image(path)
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(0, 0) == 0x00FF00
    assert image.get_pixel(0, 1) == 0


def test_expose_hook_runs_on_first_loop(display):
    win = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    calls = []
    win.hooks.expose_hook(lambda p: calls.append(p), "win1")
    display.loop()
    assert calls == ["win1"]


def test_escape_destroys_third_window(display):
    win1 = display.new_window(WIN1_SX, WIN1_SY, "Title1")
    win3 = display.new_window(WIN1_SX, WIN1_SY, "Title3")
    keys = []

    def key_win3(key, param):
        keys.append(key)
        if key == 0xFF1B:
            display.destroy_window(win3)

    win3.hooks.key_hook(key_win3, None)
    display.post_event(win3, Event(EventType.KEY_RELEASE, keycode=0xFF1B))
    display.loop()
    assert keys == [0xFF1B]
    assert display.windows == (win1,)


def test_mouse_hook_replaces_window(display):
    state = {}

    def gere_mouse(button, x, y, param):
        display.destroy_window(state["win1"])
        state["win1"] = display.new_window(123, 45, "new win")
        state["win1"].hooks.mouse_hook(gere_mouse, None)

    state["win1"] = display.new_window(300, 300, "win1")
    win2 = display.new_window(600, 600, "win2")
    original = state["win1"]
    original.hooks.mouse_hook(gere_mouse, None)
    win2.hooks.mouse_hook(gere_mouse, None)
    display.post_event(original, Event(EventType.BUTTON_PRESS, button=1, x=3, y=4))
    display.loop()
    assert original not in display.windows
    assert len(display.windows) == 2
    assert state["win1"].title == "new win"
    assert (state["win1"].width, state["win1"].height) == (123, 45)


def test_client_message_calls_destroy_hook_and_ends_loop(display):
    win = display.new_window(10, 10, "w")
    frames = []
    win.hooks.hook(EventType.DESTROY_NOTIFY, 0, lambda p: display.destroy_window(p), win)
    display.loop_hook(lambda p: frames.append(p), "frame")
    display.post_event(win, Event(EventType.CLIENT_MESSAGE))
    display.loop()
    assert display.windows == ()
    assert frames == []


def test_loop_end_stops_loop_hook(display):
    win = display.new_window(10, 10, "w")
    counter = []

    def frame(param):
        counter.append(param)
        display.pixel_put(win, len(counter), 0, 0xFFFFFF)
        if len(counter) == 3:
            display.loop_end()

    display.loop_hook(frame, 7)
    display.loop()
    assert [win.pixel(x, 0) for x in range(5)] == [0, 0xFFFFFF, 0xFFFFFF, 0xFFFFFF, 0]
    display.loop()
    assert win.pixel(4, 0) == 0
    assert counter == [7, 7, 7]


def test_loop_without_windows_returns_at_once(display):
    calls = []
    display.loop_hook(lambda p: calls.append(p), None)
    display.loop()
    assert calls == []


def test_loop_sets_event_mask(display):
    win = display.new_window(10, 10, "w")
    win.hooks.key_hook(lambda k, p: None, None)
    assert win.event_mask == 0xFFFFFF
    display.loop()
    assert win.event_mask == EventMask.KEY_RELEASE


def test_flush_events_discards_pending(display):
    win = display.new_window(10, 10, "w")
    keys = []
    win.hooks.key_hook(lambda k, p: keys.append(k), None)
    display.post_event(win, Event(EventType.KEY_RELEASE, keycode=99))
    display.flush_events()
    display.loop()
    assert keys == []


def test_events_for_destroyed_window_are_dropped(display):
    keep = display.new_window(10, 10, "keep")
    gone = display.new_window(10, 10, "gone")
    keys = []
    gone.hooks.key_hook(lambda k, p: keys.append(k), None)
    display.post_event(gone, Event(EventType.KEY_RELEASE, keycode=99))
    display.destroy_window(gone)
    display.loop()
    assert keys == []
    assert display.windows == (keep,)
    with pytest.raises(DisplayError):
        display.post_event(gone, Event(EventType.KEY_RELEASE))


def test_destroy_unknown_window(display):
    win = display.new_window(10, 10, "w")
    display.destroy_window(win)
    with pytest.raises(DisplayError):
        display.destroy_window(win)


def test_invalid_window_size(display):
    with pytest.raises(ValueError):
        display.new_window(0, 10, "w")


def test_color_value_depth_16():
    with Display(headless=True, depth=16) as d:
        assert d.color_value(0xFF0000) == 0xF800
        assert d.color_value(0x00FF00) == 0x07E0
        assert d.color_value(0x0000FF) == 0x001F


def test_color_value_truecolor(display):
    assert display.color_value(0x123456) == 0x123456


def test_unsupported_depth():
    with pytest.raises(DisplayError):
        Display(headless=True, depth=12)


def test_screen_size():
    with Display(headless=True, screen_size=(800, 600)) as d:
        assert d.screen_size() == (800, 600)


def test_mouse_position_and_cursor(display):
    win = display.new_window(50, 50, "w")
    display.mouse_move(win, 10, 20)
    assert display.mouse_get_pos(win) == (10, 20)
    display.mouse_hide(win)
    assert win.cursor_visible is False
    display.mouse_show(win)
    assert win.cursor_visible is True


def test_close_releases_everything():
    d = Display(headless=True)
    d.new_window(10, 10, "w")
    d.new_image(2, 2)
    d.close()
    assert d.closed is True
    assert d.windows == ()
    assert d.images == ()
    with pytest.raises(DisplayError):
        d.new_window(10, 10, "again")