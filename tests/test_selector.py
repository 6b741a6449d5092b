import pytest

from x12lite.errors import BadSelector
from x12lite.selector import Selector, parse_selector


def test_parse_full_selector() -> None:
    sel = parse_selector("EB(2)-3(4).5")
    assert sel == Selector(tag="EB", occurrence=2, field=3, repetition=4, component=5)


def test_parse_bare_tag_uses_defaults() -> None:
    sel = parse_selector("ISA")
    assert sel.tag == "ISA"
    assert sel.occurrence is None and sel.field is None
    assert sel.repetition is None and sel.component is None


def test_parse_modes() -> None:
    assert parse_selector("EB(+)").occurrence_mode == "new"
    assert parse_selector("EB(?)").occurrence_mode == "count"
    star = parse_selector("EB(*)-1")
    assert star.occurrence_mode == "all"
    assert star.gathers
    assert star.field == 1
    assert parse_selector("REF-2(?)").repetition_mode == "count"
    assert parse_selector("REF-2(+)").repetition_mode == "new"


def test_empty_group_is_explicit_zero() -> None:
    sel = parse_selector("EB()-1()")
    assert sel.occurrence == 0
    assert sel.occurrence_mode is None
    assert sel.repetition == 0
    assert parse_selector("EB-1").occurrence is None


def test_two_character_tags_and_case() -> None:
    sel = parse_selector("n1-2")
    assert sel.tag == "n1"
    assert sel.field == 2
    assert sel.matches("N1")
    assert not sel.matches("N10")


@pytest.mark.parametrize("text", ["", "E", "EB-x", "EB(1", "EB(**)", "EB-1-2-3"])
def test_bad_selectors(text: str) -> None:
    with pytest.raises(BadSelector):
        parse_selector(text)


def test_trailing_newline_is_rejected() -> None:
    with pytest.raises(BadSelector):
        parse_selector("EB-1\n")


def test_non_string_selectors() -> None:
    for value in (None, 12, ["EB-1"]):
        with pytest.raises(BadSelector):
            parse_selector(value)  # type: ignore[arg-type]
