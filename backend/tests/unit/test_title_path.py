"""Unit tests for title-path addressing."""

import re
from datetime import datetime, timezone

from folio.domain.title_path import TITLE_PATH_PATTERN, is_addressable, slugify, title_path


def test_title_path_formats_date_and_slug():
    now = datetime(2024, 3, 7, 15, 30, tzinfo=timezone.utc)
    assert title_path("Hello World", now) == "2024/03/07/Hello-World/"


def test_slug_only_replaces_spaces():
    assert slugify("Ça va? Yes, Très  Bien") == "Ça-va?-Yes,-Très--Bien"


def test_attempt_appends_disambiguating_suffix():
    now = datetime(2024, 12, 25, tzinfo=timezone.utc)
    assert title_path("Hello World", now, attempt=1) == "2024/12/25/Hello-World-2/"
    assert title_path("Hello World", now, attempt=2) == "2024/12/25/Hello-World-3/"


def test_same_title_same_day_collides():
    morning = datetime(2024, 3, 7, 8, tzinfo=timezone.utc)
    evening = datetime(2024, 3, 7, 22, tzinfo=timezone.utc)
    assert title_path("Daily", morning) == title_path("Daily", evening)


def test_pattern_matches_generated_paths():
    path = title_path("Hello World", datetime(2024, 3, 7, tzinfo=timezone.utc))
    assert re.fullmatch(TITLE_PATH_PATTERN, path)
    assert not re.fullmatch(TITLE_PATH_PATTERN, "2024/3/7/Hello/")


def test_only_single_segment_slugs_are_addressable():
    assert is_addressable("Hello-World")
    assert is_addressable("...and-then")
    for slug in ("", ".", "..", "AC/DC", "a\\b"):
        assert not is_addressable(slug)
