import pytest

from rpncalc.variables import (
    VariableTable,
    extract_variables,
    format_number,
    preprocess,
    substitute,
)


def test_add_counts_occurrences_and_distinct_names():
    table = VariableTable()
    assert table.add("x") == 1
    assert table.add("x") == 2
    assert table.add("y") == 1
    assert len(table) == 2


def test_add_empty_name_rejected():
    with pytest.raises(ValueError):
        VariableTable().add("")


def test_names_follow_slot_order():
    table = VariableTable()
    for name in ["a", "b", "c", "d"]:
        table.add(name)
    # "d" hashes to slot 0, "a".."c" to 97..99
    assert table.names() == ["d", "a", "b", "c"]


def test_set_and_get_round_trip():
    table = VariableTable()
    table.add("rate")
    assert table.get("rate") == 0.0
    table.set("rate", 2.5)
    assert table.get("rate") == 2.5
    assert table["rate"] == 2.5


def test_unknown_name_raises_key_error():
    table = VariableTable()
    with pytest.raises(KeyError):
        table.get("x")
    with pytest.raises(KeyError):
        table.set("x", 1.0)


def test_contains_and_iter():
    table = VariableTable()
    table.add("ab")
    assert "ab" in table
    assert "zz" not in table
    assert list(table) == table.names()


def test_table_full_raises():
    table = VariableTable()
    names = [a + b for a in "abcdefghij" for b in "abcdefghij"]
    for name in names:
        table.add(name)
    assert len(table) == VariableTable.CAPACITY
    with pytest.raises(OverflowError):
        table.add("zzz")


def test_preprocess_removes_spaces():
    result = preprocess("1 + 2 * 3")
    assert " " not in result
    assert result == "1+2*3"


def test_preprocess_collapses_double_negative():
    assert preprocess("3--4") == "3+4"


def test_preprocess_collapses_mixed_signs():
    assert preprocess("3 + - + 4") == "3-4"


def test_preprocess_is_idempotent():
    once = preprocess("a * - - ( b - + c )")
    assert preprocess(once) == once


def test_preprocess_empty_raises():
    with pytest.raises(ValueError):
        preprocess("")


def test_extract_variables_finds_words():
    table = extract_variables("x+y*x-(zz/2)")
    assert sorted(table.names()) == ["x", "y", "zz"]
    assert len(table) == 3


def test_extract_variables_none():
    table = extract_variables("1+2*3")
    assert len(table) == 0
    assert table.names() == []


def test_substitute_with_mapping():
    assert substitute("x+y", {"x": 1.0, "y": 2.0}) == "1+2"


def test_substitute_with_table():
    table = extract_variables("a*b")
    table.set("a", 3.0)
    table.set("b", 0.5)
    assert substitute("a*b", table) == "3*0.5"


def test_substitute_without_variables_is_identity():
    assert substitute("1+2*(3-4)", {}) == "1+2*(3-4)"


def test_substitute_missing_value_raises():
    with pytest.raises(KeyError):
        substitute("q+1", {})


def test_format_number_matches_percent_g():
    assert format_number(1e6) == "1e+06"


@pytest.mark.parametrize("value", [0.0, 1.0, -2.5, 0.125, 123.0])
def test_format_number_round_trip(value):
    assert float(format_number(value)) == value


def test_format_number_drops_trailing_zero():
    assert format_number(4.0) == "4"