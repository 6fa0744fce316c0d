"""Tests for the term dictionary."""

from __future__ import annotations

import pytest

from sly import terms
from sly.terms import DEFAULT_TERMS, TermDictionary


@pytest.fixture()
def foo_bar() -> TermDictionary:
    return TermDictionary({"foo": "bar"})


class TestApiTerm:
    def test_value_in_dictionary_returns_key(self, foo_bar: TermDictionary) -> None:
        assert foo_bar.api_term("bar") == "foo"

    def test_value_not_in_dictionary_returns_value(self, foo_bar: TermDictionary) -> None:
        assert foo_bar.api_term("baz") == "baz"

    def test_key_is_not_a_value(self, foo_bar: TermDictionary) -> None:
        assert foo_bar.api_term("foo") == "foo"


class TestCommonTerm:
    def test_key_in_dictionary_returns_value(self, foo_bar: TermDictionary) -> None:
        assert foo_bar.common_term("foo") == "bar"

    def test_key_not_in_dictionary_returns_value(self, foo_bar: TermDictionary) -> None:
        assert foo_bar.common_term("baz") == "baz"


class TestRoundTrip:
    @pytest.mark.parametrize("common", sorted(DEFAULT_TERMS))
    def test_common_names_round_trip(self, common: str) -> None:
        d = TermDictionary()
        assert d.api_term(d.common_term(common)) == common

    @pytest.mark.parametrize("api", sorted(DEFAULT_TERMS.values()))
    def test_api_names_round_trip(self, api: str) -> None:
        d = TermDictionary()
        assert d.common_term(d.api_term(api)) == api


class TestReadOnly:
    def test_terms_cannot_be_mutated(self, foo_bar: TermDictionary) -> None:
        with pytest.raises(TypeError):
            foo_bar.terms["x"] = "y"  # type: ignore[index]

    def test_source_mapping_changes_do_not_leak(self) -> None:
        source = {"foo": "bar"}
        d = TermDictionary(source)
        source["foo"] = "qux"
        assert d.common_term("foo") == "bar"


class TestGlobalDictionary:
    def test_defaults_installed_lazily(self) -> None:
        assert terms.common_term("current") == "in-progress"
        assert terms.api_term("in-progress") == "current"

    def test_set_dictionary_replaces_lookups(self) -> None:
        terms.set_dictionary(TermDictionary({"foo": "bar"}))
        assert terms.api_term("bar") == "foo"
        assert terms.common_term("current") == "current"
