"""Window events, per-window hook tables and event dispatch."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any

HookFunc = Callable[..., Any]


class EventType(IntEnum):
    """Core X11 event type numbers."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35


# One past the highest event type a hook table can hold.
MAX_EVENT = 36


class EventMask(IntFlag):
    """Core X11 event selection masks."""

    NONE = 0
    KEY_PRESS = 1 << 0
    KEY_RELEASE = 1 << 1
    BUTTON_PRESS = 1 << 2
    BUTTON_RELEASE = 1 << 3
    ENTER_WINDOW = 1 << 4
    LEAVE_WINDOW = 1 << 5
    POINTER_MOTION = 1 << 6
    POINTER_MOTION_HINT = 1 << 7
    BUTTON1_MOTION = 1 << 8
    BUTTON2_MOTION = 1 << 9
    BUTTON3_MOTION = 1 << 10
    BUTTON4_MOTION = 1 << 11
    BUTTON5_MOTION = 1 << 12
    BUTTON_MOTION = 1 << 13
    KEYMAP_STATE = 1 << 14
    EXPOSURE = 1 << 15
    VISIBILITY_CHANGE = 1 << 16
    STRUCTURE_NOTIFY = 1 << 17
    RESIZE_REDIRECT = 1 << 18
    SUBSTRUCTURE_NOTIFY = 1 << 19
    SUBSTRUCTURE_REDIRECT = 1 << 20
    FOCUS_CHANGE = 1 << 21
    PROPERTY_CHANGE = 1 << 22
    COLORMAP_CHANGE = 1 << 23
    OWNER_GRAB_BUTTON = 1 << 24


@dataclass(frozen=True)
class Event:
    """A window event.

    ``keycode`` is the key symbol for key events, ``button`` the mouse button
    for button events, ``x``/``y`` the pointer position and ``count`` the
    number of expose events still to follow.
    """

    type: int
    keycode: int = 0
    button: int = 0
    x: int = 0
    y: int = 0
    count: int = 0


@dataclass
class _Hook:
    mask: int
    func: HookFunc | None
    param: Any


def _check_type(event_type: int) -> int:
    if not 0 <= int(event_type) < MAX_EVENT:
        raise ValueError(f"event type {event_type} out of range 0..{MAX_EVENT - 1}")
    return int(event_type)


class HookTable:
    """The callbacks registered on one window, keyed by event type."""

    def __init__(self) -> None:
        self._hooks: dict[int, _Hook] = {}

    def hook(self, event_type: int, mask: int, func: HookFunc | None, param: Any = None) -> None:
        """Register ``func`` for ``event_type``, selecting events with ``mask``."""
        self._hooks[_check_type(event_type)] = _Hook(int(mask), func, param)

    def key_hook(self, func: HookFunc | None, param: Any = None) -> None:
        """Call ``func(keycode, param)`` when a key is released."""
        self.hook(EventType.KEY_RELEASE, EventMask.KEY_RELEASE, func, param)

    def mouse_hook(self, func: HookFunc | None, param: Any = None) -> None:
        """Call ``func(button, x, y, param)`` when a mouse button is pressed."""
        self.hook(EventType.BUTTON_PRESS, EventMask.BUTTON_PRESS, func, param)

    def expose_hook(self, func: HookFunc | None, param: Any = None) -> None:
        """Call ``func(param)`` when the window needs redrawing."""
        self.hook(EventType.EXPOSE, EventMask.EXPOSURE, func, param)

    def event_mask(self) -> EventMask:
        """Return the union of the masks of all registered hooks."""
        combined = 0
        for entry in self._hooks.values():
            combined |= entry.mask
        return EventMask(combined)

    def dispatch(self, event: Event) -> bool:
        """Call the hook registered for ``event``; return whether one was called."""
        kind = int(event.type)
        if not 0 <= kind < MAX_EVENT:
            return False
        entry = self._hooks.get(kind)
        if entry is None or entry.func is None:
            return False
        func, param = entry.func, entry.param
        if kind < EventType.KEY_PRESS:
            return False
        if kind in (EventType.KEY_PRESS, EventType.KEY_RELEASE):
            func(event.keycode, param)
        elif kind in (EventType.BUTTON_PRESS, EventType.BUTTON_RELEASE):
            func(event.button, event.x, event.y, param)
        elif kind == EventType.MOTION_NOTIFY:
            func(event.x, event.y, param)
        elif kind == EventType.EXPOSE:
            if event.count:
                return False
            func(param)
        else:
            func(param)
        return True