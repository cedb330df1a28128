import pytest

from resource_query.core.errors import QueryParseError
from resource_query.core.models import ComparisonOp
from resource_query.query.filter_parser import coerce_scalar, parse_filters


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("20", 20),
        ("-3", -3),
        ("12.5", 12.5),
        ("true", True),
        ("false", False),
        ("0123", "0123"),
        ("Austin", "Austin"),
        ("", ""),
    ],
)
def test_coerce_scalar(raw, expected):
    value = coerce_scalar(raw)

    assert value == expected
    assert type(value) is type(expected)


def test_repeated_plain_values_stay_equality():
    clauses = parse_filters({"skills": ["music", "games"]})

    assert clauses[0].operator is ComparisonOp.eq
    assert clauses[0].value == ["music", "games"]


def test_in_accepts_repeated_values():
    clauses = parse_filters({"city": {"in": ["Austin", "Dallas,Houston"]}})

    assert clauses[0].value == ["Austin", "Dallas", "Houston"]


def test_empty_in_list_raises():
    with pytest.raises(QueryParseError):
        parse_filters({"city": {"in": ","}})


@pytest.mark.parametrize("field", ["$where", "profile.$gt", "$or.city", "a..b"])
def test_operator_field_names_are_rejected(field):
    with pytest.raises(QueryParseError):
        parse_filters({field: "sleep(5000) || true"})


def test_string_fields_keep_numeric_looking_values():
    clauses = parse_filters(
        {"hourlyRate": "20", "contactPhone": {"in": "5551234567,5559876543"}, "experienceYears": "3"},
        string_fields={"hourlyRate", "contactPhone"},
    )

    assert [c.value for c in clauses] == ["20", ["5551234567", "5559876543"], 3]
