"""Query catalog: fixed names and arities, immutable templates, aliased fields, coercion."""

from __future__ import annotations

import dataclasses

import pytest

from workshop_db.core.errors import ArityError, OperationNotFoundError, ParameterTypeError
from workshop_db.queries import DEFAULT_REGISTRY, FIELD_ALIASES, QueryRegistry, QueryTemplate, lookup


def test_catalog_names_and_arities():
    assert DEFAULT_REGISTRY.arities() == {
        "get_all": 0,
        "get_one": 1,
        "get_range": 2,
        "get_stats": 0,
        "get_slice": 2,
    }
    assert len(DEFAULT_REGISTRY) == 5
    assert "get_one" in DEFAULT_REGISTRY


def test_lookup_unknown_raises_not_found():
    with pytest.raises(OperationNotFoundError) as ei:
        lookup("drop_everything")
    assert ei.value.name == "drop_everything"
    assert "drop_everything" in str(ei.value)
    # also a KeyError for callers that treat the catalog as a mapping
    assert isinstance(ei.value, KeyError)


def test_templates_are_immutable():
    t = lookup("get_all")
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.sql = "DELETE FROM Workshop"  # type: ignore[misc]


def test_fields_are_aliased_away_from_storage_columns():
    for t in DEFAULT_REGISTRY:
        assert t.fields, t.name
        assert not set(t.fields) & set(FIELD_ALIASES), t.name


def test_templates_use_placeholders_matching_arity():
    for t in DEFAULT_REGISTRY:
        assert t.sql.count("?") == t.arity, t.name


def test_check_arity():
    t = lookup("get_range")
    t.check_arity([1, 2])
    with pytest.raises(ArityError) as ei:
        t.check_arity([1])
    assert (ei.value.expected, ei.value.got) == (2, 1)


def test_zero_arity_is_strict():
    with pytest.raises(ArityError):
        lookup("get_all").check_arity([None])


def test_coerce_converts_text_to_declared_types():
    assert lookup("get_range").coerce(["100", "200"]) == [100, 200]
    assert lookup("get_one").coerce([7]) == [7]


def test_coerce_rejects_bad_text_and_wrong_count():
    with pytest.raises(ParameterTypeError, match="ident"):
        lookup("get_one").coerce(["two"])
    with pytest.raises(ArityError):
        lookup("get_one").coerce([])


def test_signature():
    assert lookup("get_slice").signature() == "get_slice(start, count)"


def test_registry_rejects_duplicate_names():
    t = QueryTemplate(name="x", sql="SELECT 1 AS one", fields=("one",))
    with pytest.raises(ValueError, match="Duplicate"):
        QueryRegistry([t, t])


def test_template_types_must_match_names():
    with pytest.raises(ValueError):
        QueryTemplate(name="bad", sql="SELECT ?", param_names=("a",))
