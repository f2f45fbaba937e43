"""Tests for crudcore/domain/models/enums.py."""

import pytest

from crudcore.domain.models.enums import ObjectState, SortDirection


def test_object_state_is_string_comparable():
    assert ObjectState.ADDED == "added"


def test_sort_direction_values_are_upper_case():
    assert SortDirection.ASC == "ASC"
    assert SortDirection.DESC == "DESC"


@pytest.mark.parametrize("raw", ["asc", "ASC", " Asc "])
def test_sort_direction_parse_is_case_insensitive(raw):
    assert SortDirection.parse(raw) is SortDirection.ASC


def test_sort_direction_parse_rejects_unknown():
    with pytest.raises(ValueError):
        SortDirection.parse("sideways")
