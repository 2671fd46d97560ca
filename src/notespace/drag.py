# SPDX-License-Identifier: GPL-3.0-or-later
"""
Drag-and-drop coordination shared by every draggable kind.

A ``DragCoordinator`` holds the one active drag of the whole workspace.
Sources publish a ``DragItem`` into it when a gesture starts; drop zones
read it to decide whether they accept what is being dragged. Neither side
touches workspace data: a zone's ``on_drop`` callback is where the host
calls the store.

Folder rows are both clickable and draggable, so they put a ``HoldGate``
in front of their source: a drag may only start after the pointer has been
held down for a short delay.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, TypeVar

from gi.repository import GLib, GObject

from notespace.constants import DRAG_HOLD_DELAY_MS

log = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class DragItem(Generic[T]):
    type: str
    id: str
    data: T


@dataclass(frozen=True)
class DragState:
    is_dragging: bool
    dragged_item: Optional[DragItem]


class DragCoordinator(GObject.Object):

    __gsignals__ = {
        'drag-changed': (GObject.SignalFlags.RUN_LAST, None, ()),
    }

    def __init__(self):
        super().__init__()
        self._item: Optional[DragItem] = None

    @property
    def dragged_item(self) -> Optional[DragItem]:
        return self._item

    @property
    def is_dragging(self) -> bool:
        return self._item is not None

    def drag_state(self) -> DragState:
        return DragState(self._item is not None, self._item)

    def dragged_item_of_type(self, drag_type) -> Optional[DragItem]:
        if self._item is not None and self._item.type == drag_type:
            return self._item
        return None

    def begin(self, item: DragItem) -> bool:
        if self._item is not None:
            log.debug('Refusing drag of %s %s, %s %s already active',
                      item.type, item.id, self._item.type, self._item.id)
            return False
        self._item = item
        self.emit('drag-changed')
        return True

    def end(self):
        if self._item is None:
            return
        self._item = None
        self.emit('drag-changed')

    def draggable(self, drag_type, item_id, data: T, on_drag_start=None,
                  on_drag_end=None, disabled=False, gate=None) -> 'DragSource[T]':
        return DragSource(self, drag_type, item_id, data, on_drag_start,
                          on_drag_end, disabled, gate)

    def drop_zone(self, accepts: Iterable[str], on_drop: Callable[[DragItem], None],
                  can_drop=None, on_drag_enter=None, on_drag_leave=None) -> 'DropZone':
        return DropZone(self, accepts, on_drop, can_drop, on_drag_enter, on_drag_leave)


class DragSource(Generic[T]):

    def __init__(self, coordinator: DragCoordinator, drag_type, item_id, data: T,
                 on_drag_start=None, on_drag_end=None, disabled=False, gate=None):
        self._coordinator = coordinator
        self.type = drag_type
        self.id = item_id
        self.data = data
        self.disabled = disabled
        self.gate: Optional[HoldGate] = gate
        self._on_drag_start = on_drag_start
        self._on_drag_end = on_drag_end
        self._active = False

    @property
    def is_dragging(self) -> bool:
        item = self._coordinator.dragged_item
        return self._active and item is not None and item.id == self.id

    def drag_start(self) -> bool:
        """Begin a gesture. False means the host must cancel the native drag."""
        if self.disabled:
            return False
        if self.gate is not None and not self.gate.allow_drag_start():
            return False
        if not self._coordinator.begin(DragItem(self.type, self.id, self.data)):
            if self.gate is not None:
                self.gate.finish()
            return False
        self._active = True
        if self._on_drag_start is not None:
            self._on_drag_start()
        return True

    def drag_end(self, did_drop=False):
        was_active = self._active
        self._active = False
        if was_active:
            self._coordinator.end()
        if self.gate is not None:
            self.gate.finish()
        if was_active and self._on_drag_end is not None:
            self._on_drag_end(did_drop)


class DropZone(Generic[T]):

    def __init__(self, coordinator: DragCoordinator, accepts: Iterable[str],
                 on_drop: Callable[[DragItem[T]], None],
                 can_drop: Optional[Callable[[DragItem[T]], bool]] = None,
                 on_drag_enter=None, on_drag_leave=None):
        self._coordinator = coordinator
        self.accepts = frozenset(accepts)
        self._on_drop = on_drop
        self._can_drop = can_drop
        self._on_drag_enter = on_drag_enter
        self._on_drag_leave = on_drag_leave
        self._enter_count = 0
        self._is_over = False
        self._handler_id = coordinator.connect('drag-changed', self._on_drag_changed)

    def _accepted_item(self) -> Optional[DragItem[T]]:
        item = self._coordinator.dragged_item
        if item is not None and item.type in self.accepts:
            return item
        return None

    @property
    def is_drag_active(self) -> bool:
        return self._coordinator.is_dragging

    @property
    def is_over(self) -> bool:
        return self._is_over and self._accepted_item() is not None

    @property
    def can_drop(self) -> bool:
        item = self._accepted_item()
        if item is None:
            return False
        return self._can_drop is None or bool(self._can_drop(item))

    def drag_enter(self):
        self._enter_count += 1
        if self._enter_count == 1:
            self._is_over = True
            item = self._accepted_item()
            if item is not None and self._on_drag_enter is not None:
                self._on_drag_enter(item)

    def drag_leave(self):
        if self._enter_count == 0:
            return
        self._enter_count -= 1
        if self._enter_count == 0:
            self._is_over = False
            if self._on_drag_leave is not None:
                self._on_drag_leave()

    def drop(self) -> bool:
        """Finish the gesture over this zone. True if ``on_drop`` ran."""
        item = self._accepted_item()
        accepted = self.is_over and self.can_drop
        self._reset()
        if not accepted:
            return False
        self._on_drop(item)
        return True

    def _reset(self):
        self._enter_count = 0
        self._is_over = False

    def _on_drag_changed(self, coordinator):
        if not coordinator.is_dragging:
            self._reset()

    def dispose(self):
        if self._handler_id is not None:
            self._coordinator.disconnect(self._handler_id)
            self._handler_id = None


class DropRouter:
    """
    Several drop zones sharing one widget, keyed by drag type.

    A folder row takes both folder drags (reparenting) and note drags
    (filing). Events reach only the zone matching the active item's type.
    """

    def __init__(self, coordinator: DragCoordinator):
        self._coordinator = coordinator
        self._zones: dict[str, DropZone] = {}

    def add(self, drag_type, on_drop, can_drop=None) -> DropZone:
        zone = self._coordinator.drop_zone([drag_type], on_drop, can_drop)
        self._zones[drag_type] = zone
        return zone

    def active_zone(self) -> Optional[DropZone]:
        item = self._coordinator.dragged_item
        if item is None:
            return None
        return self._zones.get(item.type)

    @property
    def is_over(self) -> bool:
        zone = self.active_zone()
        return zone is not None and zone.is_over

    @property
    def can_drop(self) -> bool:
        zone = self.active_zone()
        return zone is not None and zone.can_drop

    def drag_enter(self):
        zone = self.active_zone()
        if zone is not None:
            zone.drag_enter()

    def drag_leave(self):
        zone = self.active_zone()
        if zone is not None:
            zone.drag_leave()

    def drop(self) -> bool:
        zone = self.active_zone()
        return zone is not None and zone.drop()

    def dispose(self):
        for zone in self._zones.values():
            zone.dispose()
        self._zones.clear()


class HoldState(enum.Enum):
    IDLE = 'idle'
    PENDING = 'pending'
    READY = 'ready'
    DRAGGING = 'dragging'


class HoldGate:
    """Press-and-hold delay before a clickable row may be dragged."""

    def __init__(self, delay_ms=DRAG_HOLD_DELAY_MS, enabled: Optional[Callable[[], bool]] = None,
                 on_ready=None):
        self._delay_ms = delay_ms
        self._enabled = enabled
        self._on_ready = on_ready
        self._timeout_id = None
        self.state = HoldState.IDLE

    @property
    def is_ready(self) -> bool:
        return self.state is HoldState.READY

    def press(self):
        if self._enabled is not None and not self._enabled():
            return
        self.cancel()
        self.state = HoldState.PENDING
        self._timeout_id = GLib.timeout_add(self._delay_ms, self._on_elapsed)

    def _on_elapsed(self):
        self._timeout_id = None
        if self.state is HoldState.PENDING:
            self.state = HoldState.READY
            if self._on_ready is not None:
                self._on_ready()
        return GLib.SOURCE_REMOVE

    def release(self) -> bool:
        """Pointer up. True when the press was short enough to be a click."""
        was_click = self.state in (HoldState.IDLE, HoldState.PENDING)
        if self.state is not HoldState.DRAGGING:
            self.cancel()
        return was_click

    def leave(self):
        if self.state is not HoldState.DRAGGING:
            self.cancel()

    def allow_drag_start(self) -> bool:
        if self.state is not HoldState.READY:
            return False
        self.state = HoldState.DRAGGING
        return True

    def finish(self):
        self.cancel()

    def cancel(self):
        if self._timeout_id is not None:
            GLib.source_remove(self._timeout_id)
            self._timeout_id = None
        self.state = HoldState.IDLE
