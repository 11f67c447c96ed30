"""Unit tests for the per-field validators in newsdesk.validation."""

from __future__ import annotations

import pytest

from newsdesk.exceptions import ValidationError
from newsdesk.models import ErrorKind
from newsdesk.validation import (
    RangeValidator,
    validate_category,
    validate_language,
    validate_page,
    validate_page_size,
    validate_query,
    validate_sort_order,
)


def test_category_optional_and_case_insensitive() -> None:
    assert validate_category(None).value is None
    assert validate_category(" Technology ").value == "technology"
    assert validate_category("weather").error.kind is ErrorKind.INVALID_CATEGORY


def test_language_validation() -> None:
    assert validate_language("PT").value == "pt"
    assert validate_language(None).ok
    assert validate_language("zz").error.kind is ErrorKind.UNSUPPORTED_LANGUAGE


def test_page_defaults_and_bounds() -> None:
    assert validate_page(None).value == 1
    assert validate_page(100).ok
    assert not validate_page(101).ok
    assert not validate_page(0).ok


def test_page_size_never_fails() -> None:
    assert validate_page_size(None).value == 20
    assert validate_page_size(-5).value == 1
    assert validate_page_size(1000).value == 100
    assert validate_page_size("ten").value == 20


def test_query_trimmed_and_bounded() -> None:
    assert validate_query("  hello world  ").value == "hello world"
    assert validate_query("a" * 500).ok
    assert not validate_query("a" * 501).ok
    assert not validate_query(None).ok
    assert not validate_query(42).ok


@pytest.mark.parametrize("query", ["AI & robotics", "what's new?", "C# (dotnet)", "covid-19: update", "Nº 1"])
def test_query_allow_list_accepts(query) -> None:
    assert validate_query(query).ok


@pytest.mark.parametrize("query", ["<script>", "a;b", "rm -rf /", "50%", "x=1"])
def test_query_allow_list_rejects(query) -> None:
    assert validate_query(query).error.kind is ErrorKind.INVALID_QUERY


def test_sort_order_falls_back_instead_of_failing() -> None:
    assert validate_sort_order("popularity").value == "popularity"
    assert validate_sort_order("random").value == "publishedAt"
    assert validate_sort_order(None).value == "publishedAt"


def test_unwrap_raises_validation_error() -> None:
    with pytest.raises(ValidationError) as info:
        validate_page(0).unwrap()
    assert info.value.kind is ErrorKind.INVALID_PAGE


def test_strict_range_validator_requires_error_kind() -> None:
    with pytest.raises(ValueError):
        RangeValidator(name="page", minimum=1, maximum=5, default=1)
    clamped = RangeValidator(name="pageSize", minimum=1, maximum=5, default=2, clamp=True)
    assert clamped(9).value == 5
