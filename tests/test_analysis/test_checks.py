"""Tests for the temporal property checks."""

import numpy as np
import pytest

from stream_temporal.analysis import (
    at_most_once,
    count_matches,
    first_is,
    is_eventually_followed,
    is_followed_by,
    is_frozen_after,
    last_is,
    match_indices,
    match_mask,
    strip_first,
    strip_last
)


def is_zero(x):
    return x == 0


class TestMatches:
    """Test suite for the match helpers."""

    def test_match_mask(self):
        mask = match_mask([0, 1, 0, 2], is_zero)

        assert mask.dtype == bool
        np.testing.assert_array_equal(mask, [True, False, True, False])

    def test_match_mask_empty(self):
        assert match_mask([], is_zero).shape == (0,)

    def test_match_mask_accepts_iterators(self):
        assert match_mask(iter([0, 0]), is_zero).tolist() == [True, True]

    def test_match_indices(self):
        assert match_indices([1, 0, 2, 0], is_zero).tolist() == [1, 3]

    def test_count_and_at_most_once(self):
        assert count_matches([0, 1, 0], is_zero) == 2
        assert not at_most_once([0, 1, 0], is_zero)
        assert at_most_once([1, 0, 2], is_zero)
        assert at_most_once([], is_zero)


class TestIsFrozenAfter:
    """Test suite for is_frozen_after."""

    @pytest.mark.parametrize("seq, expected", [
        ([1, 2, 3], True),
        ([], True),
        ([1, 0, "A"], True),
        ([0, "A", "A"], True),
        ([1, 0], False),
        ([0, "A", 1], False),
        ([0, 0, "A"], False),
    ])
    def test_cases(self, seq, expected):
        assert is_frozen_after(seq, is_zero, "A") is expected


class TestIsFollowedBy:
    """Test suite for is_followed_by."""

    @pytest.mark.parametrize("seq, expected", [
        ([], True),
        ([1, 2], True),
        ([0, "N"], True),
        ([0, "N", 1, 0, "N"], True),
        ([0], False),
        ([0, 1, "N"], False),
        (["N", 1], False),
        ([1, 0, "N", "N"], False),
    ])
    def test_cases(self, seq, expected):
        assert is_followed_by(seq, is_zero, "N") is expected


class TestIsEventuallyFollowed:
    """Test suite for is_eventually_followed."""

    @pytest.mark.parametrize("seq, expected", [
        ([], True),
        ([1, 2], True),
        ([0, 1, "E"], True),
        ([0, 0, "E", 1, "E"], True),
        ([0, "E", 0, "E"], True),
        ([0], False),
        (["E", 0], False),
        ([0, "E", "E"], False),
    ])
    def test_cases(self, seq, expected):
        assert is_eventually_followed(seq, is_zero, "E") is expected


class TestEnds:
    """Test suite for first/last checks and their inverses."""

    def test_first_is(self):
        assert first_is(["S", 1], "S")
        assert not first_is([1, "S"], "S")
        assert not first_is([], "S")

    def test_last_is(self):
        assert last_is([1, "T"], "T")
        assert not last_is([], "T")

    def test_strip(self):
        assert strip_first(["S", 1, 2]) == [1, 2]
        assert strip_last([1, 2, "T"]) == [1, 2]
        assert strip_first([]) == []
        assert strip_last([]) == []
