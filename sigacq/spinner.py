"""Model of a rotating "busy" indicator made of fading radial lines."""

from __future__ import annotations

import math
from typing import Protocol


class _Enableable(Protocol):
    enabled: bool


def line_count_distance_from_primary(current: int, primary: int, total_lines: int) -> int:
    """Return how many lines ``current`` trails behind the ``primary`` line."""
    distance = primary - current
    if distance < 0:
        distance += total_lines
    return distance


def current_line_alpha(
    count_distance: int,
    total_lines: int,
    trail_fade_percentage: float,
    min_opacity: float,
    alpha: float,
) -> float:
    """Return the opacity of a line ``count_distance`` steps behind the primary one.

    ``min_opacity`` is a percentage; ``alpha`` is the base colour opacity in 0..1.
    """
    if count_distance == 0:
        return alpha
    min_alpha = min_opacity / 100.0
    threshold = int(math.ceil((total_lines - 1) * trail_fade_percentage / 100.0))
    if count_distance > threshold:
        return min_alpha
    gradient = (alpha - min_alpha) / float(threshold + 1)
    result = alpha - gradient * count_distance
    return min(1.0, max(0.0, result))


class WaitingSpinner:
    """State of a waiting spinner: geometry, animation step and timer."""

    def __init__(
        self,
        parent: _Enableable | None = None,
        center_on_parent: bool = True,
        disable_parent_when_spinning: bool = True,
    ) -> None:
        self.parent = parent
        self.center_on_parent = center_on_parent
        self.disable_parent_when_spinning = disable_parent_when_spinning
        self.alpha = 1.0
        self.trail_fade_percentage = 80.0
        self.minimum_trail_opacity = math.pi
        self._roundness = 100.0
        self._revolutions_per_second = math.pi / 2
        self._number_of_lines = 20
        self._line_length = 10
        self._line_width = 2
        self._inner_radius = 10
        self._current_counter = 0
        self._is_spinning = False
        self._timer_active = False

    # read-only views of the configured values
    @property
    def roundness(self) -> float:
        return self._roundness

    @property
    def revolutions_per_second(self) -> float:
        return self._revolutions_per_second

    @property
    def number_of_lines(self) -> int:
        return self._number_of_lines

    @property
    def line_length(self) -> int:
        return self._line_length

    @property
    def line_width(self) -> int:
        return self._line_width

    @property
    def inner_radius(self) -> int:
        return self._inner_radius

    @property
    def current_counter(self) -> int:
        return self._current_counter

    @property
    def is_spinning(self) -> bool:
        return self._is_spinning

    @property
    def timer_active(self) -> bool:
        return self._timer_active

    def start(self) -> None:
        """Show the spinner and start the animation timer."""
        self._is_spinning = True
        if self.parent is not None and self.disable_parent_when_spinning:
            self.parent.enabled = False
        if not self._timer_active:
            self._timer_active = True
            self._current_counter = 0

    def stop(self) -> None:
        """Hide the spinner and stop the animation timer."""
        self._is_spinning = False
        if self.parent is not None and self.disable_parent_when_spinning:
            self.parent.enabled = True
        if self._timer_active:
            self._timer_active = False
            self._current_counter = 0

    def rotate(self) -> None:
        """Advance the primary line by one step."""
        self._current_counter += 1
        if self._current_counter >= self._number_of_lines:
            self._current_counter = 0

    def set_number_of_lines(self, lines: int) -> None:
        self._number_of_lines = lines
        self._current_counter = 0

    def set_line_length(self, length: int) -> None:
        self._line_length = length

    def set_line_width(self, width: int) -> None:
        self._line_width = width

    def set_inner_radius(self, radius: int) -> None:
        self._inner_radius = radius

    def set_roundness(self, roundness: float) -> None:
        """Set the roundness, clamped to 0..100."""
        self._roundness = max(0.0, min(100.0, roundness))

    def set_revolutions_per_second(self, revolutions_per_second: float) -> None:
        self._revolutions_per_second = revolutions_per_second

    def size(self) -> int:
        """Side length of the square area the spinner occupies."""
        return (self._inner_radius + self._line_length) * 2

    def timer_interval(self) -> int:
        """Milliseconds between animation steps."""
        return int(1000 / (self._number_of_lines * self._revolutions_per_second))

    def line_alphas(self) -> list[float]:
        """Opacity of each line, in drawing order, for the current step."""
        if self._current_counter >= self._number_of_lines:
            self._current_counter = 0
        return [
            current_line_alpha(
                line_count_distance_from_primary(
                    i, self._current_counter, self._number_of_lines
                ),
                self._number_of_lines,
                self.trail_fade_percentage,
                self.minimum_trail_opacity,
                self.alpha,
            )
            for i in range(self._number_of_lines)
        ]