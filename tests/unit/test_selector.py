"""Tests for placecage.core.selector: source photo index selection."""

import pytest

from placecage.core.selector import select_index


class TestSelectIndex:
    def test_cage_default_100x200(self):
        # 300 = 9 * 33 + 3
        assert select_index(100, 200, 33) == 4

    def test_wraps_to_first_index(self):
        assert select_index(10, 13, 23) == 1
        assert select_index(0, 0, 5) == 1

    def test_last_index(self):
        assert select_index(20, 2, 23) == 23

    def test_depends_only_on_sum(self):
        assert select_index(1, 99, 30) == select_index(99, 1, 30) == select_index(50, 50, 30)

    def test_deterministic(self):
        assert select_index(640, 480, 43) == select_index(640, 480, 43)

    @pytest.mark.parametrize("count", [1, 23, 30, 33, 43])
    def test_always_in_bounds(self, count):
        for total in range(0, 7001, 7):
            index = select_index(total, 0, count)
            assert 1 <= index <= count

    @pytest.mark.parametrize("count", [0, -1])
    def test_rejects_non_positive_count(self, count):
        with pytest.raises(ValueError, match="image_count must be positive"):
            select_index(100, 100, count)
