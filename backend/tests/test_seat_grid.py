"""
Tests for the in-memory seat grid and selection set.
"""

from decimal import Decimal

import pytest

from boxoffice.domain import InvalidCoordinateError, Seat, SeatGrid, SeatState, seat_name


def test_reset_marks_occupied_seats_reserved():
    grid = SeatGrid(2, 3)
    grid.reset({(0, 1), Seat(1, 2)})

    assert grid.state(0, 1) is SeatState.RESERVED
    assert grid.state(1, 2) is SeatState.RESERVED
    assert grid.state(0, 0) is SeatState.AVAILABLE
    assert grid.reserved_seats() == {Seat(0, 1), Seat(1, 2)}


def test_reset_clears_selection():
    grid = SeatGrid(2, 2)
    grid.toggle(0, 0)
    grid.toggle(1, 1)

    grid.reset(set())

    assert grid.selected_seats() == []
    assert grid.state(0, 0) is SeatState.AVAILABLE


def test_reset_ignores_occupied_seats_outside_grid():
    grid = SeatGrid(2, 2)
    grid.reset({(0, 0), (7, 7)})

    assert grid.reserved_seats() == {Seat(0, 0)}


def test_toggle_selects_and_deselects():
    grid = SeatGrid(2, 2)
    grid.reset(set())

    assert grid.toggle(1, 0) is SeatState.SELECTED
    assert grid.selected_seats() == [Seat(1, 0)]
    assert grid.toggle(1, 0) is SeatState.AVAILABLE
    assert grid.selected_seats() == []


def test_double_toggle_restores_selection():
    """Toggling the same seat twice returns the selection to its prior state."""
    grid = SeatGrid(3, 3)
    grid.reset({(2, 2)})
    grid.toggle(0, 0)
    grid.toggle(1, 1)
    before = grid.selected_seats()

    for row, col in [(0, 2), (1, 1), (2, 2)]:
        grid.toggle(row, col)
        grid.toggle(row, col)
        assert set(grid.selected_seats()) == set(before)


def test_toggle_reserved_seat_is_noop():
    grid = SeatGrid(2, 2)
    grid.reset({(0, 0)})

    assert grid.toggle(0, 0) is SeatState.RESERVED
    assert grid.selected_seats() == []


def test_toggle_outside_grid_raises():
    grid = SeatGrid(2, 2)
    grid.reset(set())

    with pytest.raises(InvalidCoordinateError) as exc_info:
        grid.toggle(5, 5)
    assert exc_info.value.row == 5
    assert grid.selected_seats() == []


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (2, 0), (0, 2)])
def test_toggle_never_clamps(row, col):
    grid = SeatGrid(2, 2)
    with pytest.raises(InvalidCoordinateError):
        grid.toggle(row, col)


def test_selected_seats_keep_selection_order():
    grid = SeatGrid(3, 5)
    for row, col in [(2, 4), (0, 0), (0, 1)]:
        grid.toggle(row, col)

    assert [seat.name for seat in grid.selected_seats()] == ["C5", "A1", "A2"]


def test_total_is_count_times_price():
    grid = SeatGrid(2, 2)
    assert grid.total(Decimal("100")) == 0

    grid.toggle(0, 0)
    grid.toggle(0, 1)
    assert grid.total(Decimal("100")) == Decimal("200")


def test_refresh_keeps_still_available_selection():
    grid = SeatGrid(2, 2)
    grid.toggle(0, 0)
    grid.toggle(1, 1)

    grid.refresh({(1, 1)})

    assert grid.selected_seats() == [Seat(0, 0)]
    assert grid.state(1, 1) is SeatState.RESERVED


def test_seat_names():
    assert seat_name(0, 0) == "A1"
    assert seat_name(2, 4) == "C5"
    assert Seat(25, 9).name == "Z10"


def test_grid_requires_positive_dimensions():
    with pytest.raises(ValueError):
        SeatGrid(0, 3)
