import pytest

from fractol.mlx.events import Event, EventMask, EventType, HookTable


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        return 0


def test_key_hook_receives_keycode_and_param():
    table = HookTable()
    rec = Recorder()
    table.key_hook(rec, "data")
    assert table.dispatch(Event(EventType.KEY_RELEASE, keycode=65307)) is True
    assert rec.calls == [(65307, "data")]


def test_key_hook_ignores_key_press():
    table = HookTable()
    rec = Recorder()
    table.key_hook(rec, None)
    assert table.dispatch(Event(EventType.KEY_PRESS, keycode=99)) is False
    assert rec.calls == []


def test_mouse_hook_receives_button_position_and_param():
    table = HookTable()
    rec = Recorder()
    table.mouse_hook(rec, "p")
    assert table.dispatch(Event(EventType.BUTTON_PRESS, button=4, x=10, y=20))
    assert rec.calls == [(4, 10, 20, "p")]


def test_button_release_via_generic_hook():
    table = HookTable()
    rec = Recorder()
    table.hook(EventType.BUTTON_RELEASE, EventMask.BUTTON_RELEASE, rec, 7)
    table.dispatch(Event(EventType.BUTTON_RELEASE, button=1, x=3, y=5))
    assert rec.calls == [(1, 3, 5, 7)]


def test_motion_hook_receives_position():
    table = HookTable()
    rec = Recorder()
    table.hook(EventType.MOTION_NOTIFY, EventMask.POINTER_MOTION, rec, None)
    table.dispatch(Event(EventType.MOTION_NOTIFY, x=42, y=24))
    assert rec.calls == [(42, 24, None)]


def test_expose_only_on_last_in_series():
    table = HookTable()
    rec = Recorder()
    table.expose_hook(rec, "w")
    assert table.dispatch(Event(EventType.EXPOSE, count=2)) is False
    assert table.dispatch(Event(EventType.EXPOSE, count=0)) is True
    assert rec.calls == [("w",)]


def test_generic_event_gets_only_param():
    table = HookTable()
    rec = Recorder()
    table.hook(EventType.DESTROY_NOTIFY, 0, rec, "closing")
    assert table.dispatch(Event(EventType.DESTROY_NOTIFY))
    assert rec.calls == [("closing",)]


def test_destroy_notify_number_matches_close_hook():
    table = HookTable()
    rec = Recorder()
    table.hook(17, 0, rec, None)
    table.dispatch(Event(EventType.DESTROY_NOTIFY))
    assert rec.calls == [(None,)]


def test_dispatch_without_hook_returns_false():
    assert HookTable().dispatch(Event(EventType.KEY_RELEASE, keycode=1)) is False


def test_undefined_event_types_never_call():
    table = HookTable()
    rec = Recorder()
    table.hook(0, 0, rec, None)
    table.hook(1, 0, rec, None)
    assert table.dispatch(Event(0)) is False
    assert table.dispatch(Event(1)) is False
    assert rec.calls == []


def test_out_of_range_event_ignored_on_dispatch():
    assert HookTable().dispatch(Event(99)) is False


@pytest.mark.parametrize("bad", [-1, 36, 100])
def test_hook_rejects_out_of_range_type(bad):
    with pytest.raises(ValueError):
        HookTable().hook(bad, 0, Recorder(), None)


def test_event_mask_is_union_of_hooks():
    table = HookTable()
    assert table.event_mask() == EventMask.NONE
    table.key_hook(Recorder(), None)
    table.mouse_hook(Recorder(), None)
    table.hook(EventType.MOTION_NOTIFY, EventMask.POINTER_MOTION, Recorder(), None)
    assert table.event_mask() == (
        EventMask.KEY_RELEASE | EventMask.BUTTON_PRESS | EventMask.POINTER_MOTION
    )


def test_rehooking_replaces_previous_entry():
    table = HookTable()
    first, second = Recorder(), Recorder()
    table.mouse_hook(first, "a")
    table.mouse_hook(second, "b")
    table.dispatch(Event(EventType.BUTTON_PRESS, button=5, x=1, y=2))
    assert first.calls == []
    assert second.calls == [(5, 1, 2, "b")]


def test_replacing_hook_replaces_its_mask():
    table = HookTable()
    table.hook(EventType.EXPOSE, EventMask.EXPOSURE, Recorder(), None)
    table.hook(EventType.EXPOSE, EventMask.STRUCTURE_NOTIFY, Recorder(), None)
    assert table.event_mask() == EventMask.STRUCTURE_NOTIFY


def test_none_function_clears_call_but_keeps_mask():
    table = HookTable()
    table.hook(EventType.KEY_PRESS, EventMask.KEY_PRESS, None, None)
    assert table.dispatch(Event(EventType.KEY_PRESS, keycode=5)) is False
    assert table.event_mask() == EventMask.KEY_PRESS


def test_x11_numbers_used_by_hooks():
    table = HookTable()
    rec = Recorder()
    table.expose_hook(rec, "e")
    table.key_hook(rec, "k")
    assert table.event_mask() == (1 << 15) | (1 << 1)
    assert table.dispatch(Event(12, count=0)) is True
    assert table.dispatch(Event(3, keycode=65307)) is True
    assert rec.calls == [("e",), (65307, "k")]


def test_hooks_are_per_table():
    a, b = HookTable(), HookTable()
    rec = Recorder()
    a.key_hook(rec, None)
    assert b.dispatch(Event(EventType.KEY_RELEASE, keycode=1)) is False
    assert rec.calls == []