"""
Pointer Interaction Controller
==============================
Turns discrete pointer events into viewport pans and location picks.

Two mutually exclusive modes, switched by ``is_selecting``:

* **Pan mode** (``is_selecting = False``) — pointer-down starts a drag;
  each move pans by the delta since the *previous* move, so the total
  pan equals the net pointer displacement however the moves are split.
* **Select mode** (``is_selecting = True``) — drags are ignored and a
  click resolves to a geographic pick.  Picks outside the bounds are
  dropped without an error.

    IDLE ──down (pan mode)──▶ DRAGGING ──move──▶ DRAGGING
      ▲                          │
      └──────── up / leave ──────┘
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable

from parkwatch.spatial.bounds import GeoPoint
from parkwatch.spatial.transform import PixelPoint, ViewportTransform

logger = logging.getLogger(__name__)

LocationCallback = Callable[[GeoPoint], None]
MarkerCallback = Callable[[str], None]


class DragState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(slots=True)
class InteractionState:
    is_selecting: bool = False
    drag: DragState = DragState.IDLE
    drag_start: PixelPoint | None = None
    hovered_id: str | None = None


class InteractionController:
    """
    Drives a ``ViewportTransform`` from pointer events.

    Parameters
    ----------
    transform : ViewportTransform
    on_location_select : callable, optional
        Receives in-bounds picks made in select mode.
    on_marker_click : callable, optional
        Receives the id of a clicked sighting marker (pan mode only).
    state : InteractionState, optional
        Externally owned interaction state.
    """

    def __init__(
        self,
        transform: ViewportTransform,
        on_location_select: LocationCallback | None = None,
        on_marker_click: MarkerCallback | None = None,
        state: InteractionState | None = None,
    ) -> None:
        self.transform = transform
        self.on_location_select = on_location_select
        self.on_marker_click = on_marker_click
        self.state = state if state is not None else InteractionState()

    @property
    def is_dragging(self) -> bool:
        return self.state.drag is DragState.DRAGGING

    def set_selecting(self, selecting: bool) -> None:
        self.state.is_selecting = selecting
        if selecting:
            # Entering select mode abandons any drag in progress.
            self._end_drag()

    # ── Drag-to-pan ───────────────────────────────────────────

    def pointer_down(self, position: PixelPoint) -> None:
        if self.state.is_selecting:
            return
        if not position.is_finite():
            logger.debug("Ignoring pointer-down at non-finite %r", position)
            return
        self.state.drag = DragState.DRAGGING
        self.state.drag_start = position

    def pointer_move(self, position: PixelPoint) -> None:
        if not self.is_dragging or self.state.is_selecting:
            return
        if not position.is_finite():
            logger.debug("Ignoring pointer-move at non-finite %r", position)
            return
        start = self.state.drag_start
        if start is None:
            self.state.drag_start = position
            return
        self.transform.pan(position.x - start.x, position.y - start.y)
        self.state.drag_start = position

    def pointer_up(self) -> None:
        self._end_drag()

    def pointer_leave(self) -> None:
        self._end_drag()

    def _end_drag(self) -> None:
        self.state.drag = DragState.IDLE
        self.state.drag_start = None

    # ── Picks and marker clicks ───────────────────────────────

    def click(self, position: PixelPoint) -> GeoPoint | None:
        """
        Resolve a click in select mode.

        Returns the picked point (and notifies ``on_location_select``)
        when it lies inside the bounds; otherwise returns ``None``.
        """
        if not self.state.is_selecting:
            return None
        if not position.is_finite():
            logger.debug("Ignoring click at non-finite %r", position)
            return None

        coords = self.transform.unproject(position)
        if not self.transform.bounds.contains_point(coords):
            logger.debug("Dropped out-of-bounds pick %r", coords)
            return None

        if self.on_location_select is not None:
            self.on_location_select(coords)
        return coords

    def marker_click(self, sighting_id: str) -> bool:
        if self.state.is_selecting:
            return False
        self.state.hovered_id = None
        if self.on_marker_click is not None:
            self.on_marker_click(sighting_id)
        return True

    def hover(self, sighting_id: str | None) -> None:
        self.state.hovered_id = sighting_id
