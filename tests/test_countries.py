"""
Tests for country code resolution and Schengen membership.
"""

import logging

import pytest

from visa_tracker.countries import (
    COUNTRY_CODE_TO_NAME,
    COUNTRY_NAME_TO_CODE,
    SCHENGEN_COUNTRIES,
    get_country_code,
    is_schengen_country,
    list_destinations,
)


def test_exact_match():
    assert get_country_code("France") == "FR"
    assert get_country_code("United States") == "US"
    assert get_country_code("Germany") == "DE"


def test_city_country_uses_part_after_last_comma():
    assert get_country_code("Paris, France") == "FR"
    assert get_country_code("Kraków, Lesser Poland, Poland") == "PL"


def test_case_insensitive_match():
    assert get_country_code("france") == "FR"
    assert get_country_code("UNITED KINGDOM") == "GB"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("sudan", "SD"),
        ("SUDAN", "SD"),
        ("guinea", "GN"),
        ("niger", "NE"),
    ],
)
def test_case_insensitive_equality_beats_substring(name, expected):
    # "sudan" is also inside "south sudan", "guinea" inside "equatorial guinea"
    assert get_country_code(name) == expected


def test_substring_match_either_direction():
    assert get_country_code("The Netherlands") == "NL"
    assert get_country_code("Czech") == "CZ"


def test_unknown_name_falls_back_to_first_two_letters(caplog):
    with caplog.at_level(logging.WARNING, logger="visa_tracker.countries"):
        assert get_country_code("Xanadu") == "XA"
    assert "unreliable" in caplog.text


def test_empty_name_does_not_match_everything():
    assert get_country_code("") == ""


def test_tables_are_consistent():
    assert len(COUNTRY_CODE_TO_NAME) == len(COUNTRY_NAME_TO_CODE)
    assert all(len(code) == 2 and code.isupper() for code in COUNTRY_CODE_TO_NAME)
    assert all(name in COUNTRY_NAME_TO_CODE for name in SCHENGEN_COUNTRIES)


@pytest.mark.parametrize(
    "destination,expected",
    [
        ("France", True),
        ("Lisbon, Portugal", True),
        ("switzerland", True),
        ("Reykjavik, Iceland", True),
        ("United Kingdom", False),
        ("Tokyo, Japan", False),
        ("Ireland", False),
        ("", False),
    ],
)
def test_is_schengen_country(destination, expected):
    assert is_schengen_country(destination) is expected


def test_list_destinations_sorted():
    destinations = list_destinations()
    assert destinations == sorted(destinations)
    assert "France" in destinations
