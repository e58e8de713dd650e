"""Tests for standard distance rounding."""

import pytest

from runnote.analysis.distances import meters_to_miles, round_half_up, round_to_standard


@pytest.mark.unit
class TestRoundToStandard:
    """Snapping GPS distances to track distances."""

    @pytest.mark.parametrize(
        "meters,expected",
        [
            (205, 200),
            (190.59, 200),
            (390, 400),
            (411.55, 400),
            (1000, 1000),
            (1609.3, 1600),
        ],
    )
    def test_snaps_to_closest_standard(self, meters, expected):
        """Distances within 15% of a standard snap to it."""
        assert round_to_standard(meters) == expected

    def test_550_snaps_up_to_600(self):
        """|550-600|/550 is under the tolerance."""
        assert round_to_standard(550) == 600

    def test_tie_goes_to_first_standard(self):
        """700 is equally far from 600 and 800; the shorter one wins."""
        assert round_to_standard(700) == 600

    def test_far_from_standards_rounds_to_100(self):
        """Beyond the ladder, distances round to the nearest 100m."""
        assert round_to_standard(2520) == 2500
        assert round_to_standard(2550) == 2600

    @pytest.mark.parametrize("meters", [0, -10])
    def test_non_positive_is_zero(self, meters):
        """Zero and negative distances don't divide by zero."""
        assert round_to_standard(meters) == 0

    def test_returns_int(self):
        assert isinstance(round_to_standard(2480), int)


@pytest.mark.unit
class TestHelpers:
    def test_round_half_up(self):
        """Halves round up, unlike round()."""
        assert round_half_up(2.5) == 3
        assert round_half_up(397.5) == 398
        assert round_half_up(3.14, 0.1) == pytest.approx(3.1)
        assert round_half_up(250, 100) == 300

    def test_meters_to_miles(self):
        assert meters_to_miles(1609.344) == pytest.approx(1.0)
        assert meters_to_miles(0) == 0
