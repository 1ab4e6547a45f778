"""
Unit tests for location parsing and cache keys.
"""

import pytest

from forecaster.core.errors import InvalidLocation
from forecaster.core.location import US_STATES, Location, parse_location


class TestParseLocation:
    """Test cases for parse_location."""

    def test_bare_zip(self):
        location = parse_location("80202")
        assert location.zip == "80202"
        assert location.city is None
        assert location.state is None
        assert location.is_zip_only

    def test_zip_with_surrounding_whitespace(self):
        assert parse_location("  80202 ").zip == "80202"

    def test_city_state(self):
        location = parse_location("Denver, CO")
        assert (location.city, location.state, location.zip) == ("Denver", "CO", None)

    def test_city_state_zip(self):
        location = parse_location("Denver, CO 80202")
        assert (location.city, location.state, location.zip) == ("Denver", "CO", "80202")

    def test_state_is_upper_cased(self):
        location = parse_location("austin, tx")
        assert location.state == "TX"
        assert location.city == "austin"

    def test_splits_on_last_comma(self):
        location = parse_location("Washington, District of Columbia, DC")
        assert location.city == "Washington, District of Columbia"
        assert location.state == "DC"

    @pytest.mark.parametrize(
        "raw",
        ["gibberish", "", "   ", "8020", "802021", ", CO", "Denver,", "Denver, Colorado", "Denver, CO 8020", "Denver, C0"],
    )
    def test_rejects_unparsable_input(self, raw):
        with pytest.raises(InvalidLocation):
            parse_location(raw)

    @pytest.mark.parametrize("raw", ["８０２０２", "Denver, CO ８０２０２"])
    def test_rejects_non_ascii_digits(self, raw):
        with pytest.raises(InvalidLocation):
            parse_location(raw)

    @pytest.mark.parametrize("raw", ["Nowhere, ZZ", "Nowhere, zz", "Nowhere, Zz 12345"])
    def test_rejects_unknown_state(self, raw):
        with pytest.raises(InvalidLocation):
            parse_location(raw)


class TestLocation:
    """Test cases for the Location model."""

    def test_recognizes_fifty_states_and_dc(self):
        assert len(US_STATES) == 51
        assert "DC" in US_STATES

    @pytest.mark.parametrize(
        "city,state",
        [("Denver", "CO"), ("DENVER", "co"), ("denver", "Co"), ("  Denver ", " cO ")],
    )
    def test_cache_key_ignores_casing(self, city, state):
        assert Location.from_fields(city=city, state=state).cache_key == "denver-CO"

    def test_cache_key_collapses_inner_whitespace(self):
        a = Location.from_fields(city="Salt  Lake City", state="UT")
        b = Location.from_fields(city="salt lake city", state="ut")
        assert a.cache_key == b.cache_key

    def test_cache_key_with_zip_suffix(self):
        assert Location.from_fields(city="Denver", state="CO", zip="80202").cache_key == "denver-CO-80202"

    def test_zip_only_cache_key(self):
        assert Location.from_fields(zip="80202").cache_key == "zip-80202"

    def test_display(self):
        assert Location.from_fields(city="Denver", state="co", zip="80202").display == "Denver, CO 80202"
        assert Location.from_fields(zip="80202").display == "zip code 80202"

    @pytest.mark.parametrize(
        "fields",
        [
            {},
            {"city": "Denver"},
            {"state": "CO"},
            {"city": "Denver", "zip": "80202"},
            {"city": "Denver", "state": "ZZ"},
            {"zip": "abcde"},
            {"city": "x" * 101, "state": "CO"},
        ],
    )
    def test_from_fields_rejects_incomplete_or_invalid(self, fields):
        with pytest.raises(InvalidLocation):
            Location.from_fields(**fields)
