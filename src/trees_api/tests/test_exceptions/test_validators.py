import pytest

from trees_api.models import Tree, Insect
from trees_api.validators.model_validators import (
    find_unknown_model_kwargs,
    get_required_attributes,
    find_missing_required,
    get_unique_attribute_sets,
)
from trees_api.validators.request_validators import parse_path_id, ids_match, is_provided


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("3", 3), ("17", 17), (" 17 ", None), ("0_3", None), ("٣", None),
        ("+3", None), ("abc", None), ("3.5", None), ("", None),
    ],
)
def test_parse_path_id(raw, expected):
    assert parse_path_id(raw) == expected


@pytest.mark.parametrize(
    "pk, body_id, expected",
    [(3, 3, True), (3, 3.0, True), (3, "3", False), (3, True, False), (1, True, False),
     (3, None, False), (3, 2, False), (None, 3, False)],
)
def test_ids_match_compares_body_id_as_sent(pk, body_id, expected):
    assert ids_match(pk, body_id) is expected


@pytest.mark.parametrize(
    "value, expected",
    [(None, False), ("", False), (0, False), (0.0, False), ("Stagg", True), (240.91, True), (-1, True), (False, True)],
)
def test_is_provided(value, expected):
    assert is_provided(value) is expected


def test_required_attributes_map_to_column_names():
    assert get_required_attributes(Tree) == {
        "tree": "tree",
        "location": "location",
        "height_ft": "heightFt",
        "ground_circumference_ft": "groundCircumferenceFt",
    }


def test_missing_required_treats_none_as_missing():
    assert find_missing_required(Tree, {"tree": "Stagg", "location": None}) == [
        "location", "heightFt", "groundCircumferenceFt"
    ]


def test_unknown_kwargs():
    assert find_unknown_model_kwargs(Tree, {"tree": "x", "heightFt": 1}) == ["heightFt"]


def test_insect_name_is_unique():
    assert ["name"] in get_unique_attribute_sets(Insect)
