import math

import pytest

from sigacq.spinner import (
    WaitingSpinner,
    current_line_alpha,
    line_count_distance_from_primary,
)


class _Parent:
    def __init__(self):
        self.enabled = True


def test_distance_same_line_is_zero():
    assert line_count_distance_from_primary(5, 5, 20) == 0


def test_distance_wraps_and_stays_in_range():
    for current in range(12):
        for primary in range(12):
            d = line_count_distance_from_primary(current, primary, 12)
            assert 0 <= d < 12
            assert (current + d) % 12 == primary


def test_alpha_of_primary_is_base_alpha():
    assert current_line_alpha(0, 20, 80.0, math.pi, 0.7) == 0.7


def test_alpha_beyond_threshold_is_minimum():
    assert current_line_alpha(19, 20, 10.0, 50.0, 1.0) == pytest.approx(0.5)


def test_alpha_decreases_with_distance():
    alphas = [current_line_alpha(d, 20, 80.0, math.pi, 1.0) for d in range(20)]
    assert all(a >= b for a, b in zip(alphas, alphas[1:]))
    assert all(0.0 <= a <= 1.0 for a in alphas)


def test_default_geometry():
    spinner = WaitingSpinner()
    assert spinner.number_of_lines == 20
    assert spinner.size() == 2 * (spinner.inner_radius + spinner.line_length)


def test_timer_interval_shrinks_with_more_lines():
    spinner = WaitingSpinner()
    before = spinner.timer_interval()
    spinner.set_number_of_lines(40)
    assert spinner.timer_interval() < before


def test_roundness_is_clamped():
    spinner = WaitingSpinner()
    spinner.set_roundness(250.0)
    assert spinner.roundness == 100.0
    spinner.set_roundness(-3.0)
    assert spinner.roundness == 0.0
    spinner.set_roundness(42.0)
    assert spinner.roundness == 42.0


def test_rotate_cycles_back_to_start():
    spinner = WaitingSpinner()
    spinner.set_number_of_lines(6)
    for _ in range(6):
        spinner.rotate()
    assert spinner.current_counter == 0


def test_line_alphas_primary_follows_counter():
    spinner = WaitingSpinner()
    spinner.rotate()
    spinner.rotate()
    alphas = spinner.line_alphas()
    assert len(alphas) == spinner.number_of_lines
    assert alphas[2] == spinner.alpha
    assert max(alphas) == alphas[2]


def test_start_and_stop_toggle_parent_and_timer():
    parent = _Parent()
    spinner = WaitingSpinner(parent)
    spinner.rotate()
    spinner.start()
    assert spinner.is_spinning and spinner.timer_active
    assert parent.enabled is False
    assert spinner.current_counter == 0
    spinner.rotate()
    spinner.stop()
    assert not spinner.is_spinning and not spinner.timer_active
    assert parent.enabled is True
    assert spinner.current_counter == 0


def test_parent_left_alone_when_not_requested():
    parent = _Parent()
    spinner = WaitingSpinner(parent, disable_parent_when_spinning=False)
    spinner.start()
    assert parent.enabled is True


def test_set_number_of_lines_resets_counter():
    spinner = WaitingSpinner()
    spinner.rotate()
    spinner.set_number_of_lines(8)
    assert spinner.current_counter == 0
    assert len(spinner.line_alphas()) == 8