"""
Filter parameter parsing.

Each non-reserved parameter becomes one or more FilterClause objects. A
parameter whose value is a mapping keyed by an operator token
(``{"gt": "20"}``) becomes a comparison on that operator; a plain value
becomes an equality clause.
"""

import re
from typing import AbstractSet, Any, List, Mapping

from resource_query.core.errors import QueryParseError
from resource_query.core.models import ComparisonOp, FilterClause, Scalar

# Tokens are matched as whole words only, so "ingredient" never reads as "in"
_OPERATOR_TOKEN = re.compile(r"\b(gt|gte|lt|lte|in)\b")

_INT_LITERAL = re.compile(r"^-?(0|[1-9]\d*)$")
_FLOAT_LITERAL = re.compile(r"^-?(0|[1-9]\d*)?\.\d+$")


def validate_field_name(field: Any, key: str = "filter") -> str:
    """
    Check that a field path names a stored field.

    Empty paths, empty segments and segments starting with ``$`` (query
    operators such as ``$where``) are rejected.
    """
    if not isinstance(field, str) or not field.strip():
        raise QueryParseError(f"Field name in '{key}' must be a non-empty string")

    for segment in field.split("."):
        if not segment:
            raise QueryParseError(f"Empty path segment in field '{field}'")
        if segment.startswith("$"):
            raise QueryParseError(f"Field '{field}' may not reference a query operator")
    return field


def coerce_scalar(value: Any) -> Scalar:
    """
    Convert a query-string value to the most specific scalar type.

    Integer and decimal literals become numbers, ``true``/``false`` become
    booleans, and any other string is kept as-is.
    """
    if isinstance(value, (bool, int, float)):
        return value
    if not isinstance(value, str):
        raise QueryParseError(f"Unsupported filter value {value!r}")

    if _INT_LITERAL.match(value):
        return int(value)
    if _FLOAT_LITERAL.match(value):
        return float(value)
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _coerce(value: Any, field: str, keep_string: bool) -> Scalar:
    if isinstance(value, (Mapping, list)):
        raise QueryParseError(f"Nested value for field '{field}'")
    if keep_string and isinstance(value, str):
        return value
    return coerce_scalar(value)


def _operator_for(token: Any, field: str) -> ComparisonOp:
    if not isinstance(token, str) or not _OPERATOR_TOKEN.fullmatch(token):
        raise QueryParseError(f"Unsupported operator '{token}' for field '{field}'")
    return ComparisonOp(token)


def _coerce_list(values: List[Any], field: str, keep_string: bool) -> List[Scalar]:
    return [_coerce(item, field, keep_string) for item in values]


def _membership_values(value: Any, field: str, keep_string: bool) -> List[Scalar]:
    """Values for an ``in`` clause; comma-separated strings are split."""
    items = value if isinstance(value, list) else [value]
    expanded: List[Any] = []
    for item in items:
        if isinstance(item, str):
            expanded.extend(part.strip() for part in item.split(",") if part.strip())
        else:
            expanded.append(item)
    if not expanded:
        raise QueryParseError(f"Empty value list for field '{field}'")
    return _coerce_list(expanded, field, keep_string)


def _operator_clauses(
    field: str, operators: Mapping[str, Any], keep_string: bool
) -> List[FilterClause]:
    if not operators:
        raise QueryParseError(f"Empty operator mapping for field '{field}'")

    clauses = []
    for token, operand in operators.items():
        operator = _operator_for(token, field)
        if isinstance(operand, Mapping):
            raise QueryParseError(f"Nested operators are not supported for field '{field}'")

        if operator is ComparisonOp.in_:
            value: Any = _membership_values(operand, field, keep_string)
        elif isinstance(operand, list):
            raise QueryParseError(f"Operator '{token}' on field '{field}' takes a single value")
        else:
            value = _coerce(operand, field, keep_string)

        clauses.append(FilterClause(field=field, operator=operator, value=value))
    return clauses


def parse_filters(
    params: Mapping[str, Any], string_fields: AbstractSet[str] = frozenset()
) -> List[FilterClause]:
    """
    Parse filter parameters into clauses.

    Args:
        params: Non-reserved RawParameters
        string_fields: Fields stored as strings; their values are never
            converted to numbers or booleans

    Returns:
        Clauses in parameter order

    Raises:
        QueryParseError: If a parameter has an unsupported shape or names
            a query operator instead of a field
    """
    clauses: List[FilterClause] = []

    for field, value in params.items():
        validate_field_name(field)
        keep_string = field in string_fields

        if isinstance(value, Mapping):
            clauses.extend(_operator_clauses(field, value, keep_string))
        elif isinstance(value, list):
            clauses.append(FilterClause(field=field, value=_coerce_list(value, field, keep_string)))
        elif value is None:
            raise QueryParseError(f"Missing value for field '{field}'")
        else:
            clauses.append(FilterClause(field=field, value=_coerce(value, field, keep_string)))

    return clauses
