import pytest

from resource_query.core.errors import QueryParseError
from resource_query.query.params import nest_query_params


def test_plain_pairs():
    assert nest_query_params([("city", "Austin"), ("page", "2")]) == {"city": "Austin", "page": "2"}


def test_bracket_keys_nest_under_field():
    raw = nest_query_params([("hourlyRate[gt]", "20"), ("hourlyRate[lte]", "40")])

    assert raw == {"hourlyRate": {"gt": "20", "lte": "40"}}


def test_repeated_keys_become_lists():
    raw = nest_query_params([("skills", "music"), ("skills", "games"), ("age[in]", "1"), ("age[in]", "2")])

    assert raw == {"skills": ["music", "games"], "age": {"in": ["1", "2"]}}


def test_empty_brackets_collect_list():
    assert nest_query_params([("tag[]", "a"), ("tag[]", "b")]) == {"tag": ["a", "b"]}


@pytest.mark.parametrize(
    "pairs",
    [
        [("a[b][c]", "1")],
        [("a[b", "1")],
        [("a]", "1")],
        [("a", "1"), ("a[gt]", "2")],
        [("a[gt]", "2"), ("a", "1")],
    ],
)
def test_malformed_keys_raise(pairs):
    with pytest.raises(QueryParseError):
        nest_query_params(pairs)
