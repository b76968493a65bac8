"""Tests for page arithmetic and the control strip."""

import math

import pytest

from postindex.services.pagination import (
    clamp_page,
    page_bounds,
    page_controls,
    page_window,
    total_pages,
)


@pytest.mark.parametrize("page_size", [10, 20, 50])
def test_total_pages_formula(page_size):
    for count in range(0, 130):
        assert total_pages(count, page_size) == max(1, math.ceil(count / page_size))


@pytest.mark.parametrize(
    "page,pages,expected",
    [(0, 3, 1), (-4, 3, 1), (1, 3, 1), (3, 3, 3), (9, 3, 3), (5, 1, 1)],
)
def test_clamp_page(page, pages, expected):
    assert clamp_page(page, pages) == expected


def test_window_centered_on_current():
    assert list(page_window(5, 10)) == [3, 4, 5, 6, 7]


def test_window_shifts_at_edges():
    assert list(page_window(1, 10)) == [1, 2, 3, 4, 5]
    assert list(page_window(2, 10)) == [1, 2, 3, 4, 5]
    assert list(page_window(10, 10)) == [6, 7, 8, 9, 10]
    assert list(page_window(9, 10)) == [6, 7, 8, 9, 10]


def test_window_smaller_than_size():
    assert list(page_window(2, 3)) == [1, 2, 3]
    assert list(page_window(1, 1)) == [1]


def test_controls_prev_next_always_present():
    controls = page_controls(1, 1)
    assert [c.label for c in controls] == ["Prev", "1", "Next"]
    assert controls[0].disabled
    assert controls[-1].disabled
    assert controls[1].active


def test_controls_middle_page():
    controls = page_controls(4, 8)
    labels = [c.label for c in controls]
    assert labels == ["Prev", "2", "3", "4", "5", "6", "Next"]
    assert not controls[0].disabled
    assert controls[0].page == 3
    assert controls[-1].page == 5
    assert [c.label for c in controls if c.active] == ["4"]


def test_page_bounds_last_partial_page():
    assert page_bounds(3, 10, 25) == (20, 25)
    assert page_bounds(1, 10, 0) == (0, 0)
