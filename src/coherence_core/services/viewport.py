"""
Viewport controller - pan/zoom transform with animated transitions.

The controller never touches node positions. It owns a ViewTransform that the
canvas applies to its node layer, and at most one in-flight transition. A new
request starts from wherever the current transition has got to, so the last
request always wins without a visible jump.

Time is passed in explicitly (seconds) so the same code runs under a QTimer
and in tests.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..config import ViewportSettings
from ..domain.models import ViewTransform, IDENTITY

logger = logging.getLogger(__name__)

TransformListener = Callable[[ViewTransform], None]


def ease_cubic_in_out(t: float) -> float:
    """Cubic ease-in-out on [0, 1]."""
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


@dataclass(frozen=True)
class Transition:
    """One animated move between two transforms."""
    start: ViewTransform
    end: ViewTransform
    started_at: float
    duration: float
    easing: Callable[[float], float] = ease_cubic_in_out

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, max(0.0, (now - self.started_at) / self.duration))

    def at(self, now: float) -> ViewTransform:
        t = self.progress(now)
        if t >= 1.0:
            return self.end
        return self.start.interpolate(self.end, self.easing(t))


class ViewportController:
    """Pan/zoom state for one canvas."""

    def __init__(
        self,
        width: float,
        height: float,
        settings: Optional[ViewportSettings] = None,
    ):
        self._settings = settings or ViewportSettings()
        self._width = width
        self._height = height
        self._transform = IDENTITY
        self._transition: Optional[Transition] = None
        self._listeners: List[TransformListener] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def transform(self) -> ViewTransform:
        return self._transform

    @property
    def settings(self) -> ViewportSettings:
        return self._settings

    @property
    def size(self) -> Tuple[float, float]:
        return (self._width, self._height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self._width / 2, self._height / 2)

    @property
    def is_animating(self) -> bool:
        return self._transition is not None

    @property
    def target(self) -> ViewTransform:
        """Where the view will end up once any transition completes."""
        return self._transition.end if self._transition else self._transform

    def resize(self, width: float, height: float) -> None:
        self._width = width
        self._height = height

    def on_change(self, listener: TransformListener) -> None:
        """Register a callback invoked whenever the transform changes."""
        self._listeners.append(listener)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def zoom_by(self, factor: float, now: float) -> None:
        """Animated zoom about the viewport center (toolbar buttons)."""
        base = self.target
        cx, cy = self.center
        end = self._scaled_about(base, factor, cx, cy)
        self._start(end, now, self._settings.zoom_duration_s)

    def zoom_at(self, factor: float, point: Tuple[float, float]) -> None:
        """Immediate zoom keeping a screen point fixed (mouse wheel)."""
        self.cancel()
        self._set(self._scaled_about(self._transform, factor, *point))

    def pan_by(self, dx: float, dy: float) -> None:
        """Immediate pan in screen pixels. Cancels any running animation."""
        self.cancel()
        t = self._transform
        self._set(ViewTransform(t.x + dx, t.y + dy, t.k))

    def reset(self, now: float) -> None:
        """Animate back to the identity transform."""
        self._start(IDENTITY, now, self._settings.reset_duration_s)

    def focus(self, position: Optional[Tuple[float, float]], now: float) -> None:
        """
        Animate so a scene point sits at the viewport center at focus scale.

        Args:
            position: Scene coordinates of the node, or None if not yet placed
            now: Current time in seconds
        """
        if position is None:
            return

        k = self._clamp(self._settings.focus_scale)
        cx, cy = self.center
        px, py = position
        end = ViewTransform(cx - px * k, cy - py * k, k)
        self._start(end, now, self._settings.focus_duration_s)

    def advance(self, now: float) -> bool:
        """
        Step the in-flight transition.

        Returns:
            True while a transition is still running
        """
        if self._transition is None:
            return False

        transition = self._transition
        self._set(transition.at(now))
        if transition.progress(now) >= 1.0:
            self._transition = None
            return False
        return True

    def cancel(self) -> None:
        """Stop at the current interpolated transform."""
        self._transition = None

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _clamp(self, k: float) -> float:
        lo, hi = self._settings.scale_extent
        return max(lo, min(hi, k))

    def _scaled_about(
        self, base: ViewTransform, factor: float, sx: float, sy: float
    ) -> ViewTransform:
        k = self._clamp(base.k * factor)
        px, py = base.invert(sx, sy)
        return ViewTransform(sx - px * k, sy - py * k, k)

    def _start(self, end: ViewTransform, now: float, duration: float) -> None:
        # Continue from the current interpolated position
        if self._transition is not None:
            self._set(self._transition.at(now))
        self._transition = Transition(
            start=self._transform, end=end, started_at=now, duration=duration,
        )

    def _set(self, transform: ViewTransform) -> None:
        if transform == self._transform:
            return
        self._transform = transform
        for listener in list(self._listeners):
            listener(transform)
