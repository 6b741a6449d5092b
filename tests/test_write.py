import copy

import pytest

from x12lite.delimiters import DEFAULT_HEADER
from x12lite.document import Document
from x12lite.errors import BadSelector, DelimiterConflict, UnsupportedBatch, ZeroIndex
from x12lite.write import AUTO_NUMBER


def _two_eb() -> Document:
    return Document(DEFAULT_HEADER + "\nEB*A~\nEB*B~")


def test_write_defaults_to_last_and_read_to_first() -> None:
    doc = _two_eb()
    doc["EB(+)-1"] = "C"
    assert doc["EB(?)"] == 3
    assert doc["EB-1"] == "A"
    assert doc["EB(3)-1"] == "C"
    doc["EB-1"] = "Z"
    assert doc["EB(*)-1"] == ["A", "B", "Z"]


def test_write_creates_missing_segment() -> None:
    doc = Document()
    doc["GS-1"] = "HS"
    assert doc.to_rows() == [Document().to_rows()[0], ["GS", "HS"]]


def test_occurrence_padding_appends_blank_segments() -> None:
    doc = Document()
    doc["LX(3)-1"] = "3"
    assert doc.grep("LX") == [["LX"], ["LX"], ["LX", "3"]]
    doc["LX(2)-1"] = "2"
    assert doc["LX(*)-1"] == ["2", "3"]


def test_new_segments_go_to_the_end() -> None:
    doc = _two_eb()
    doc["SE-1"] = "4"
    doc["EB(+)-1"] = "C"
    assert [row[0] for row in doc] == ["ISA", "EB", "EB", "SE", "EB"]


def test_field_writes() -> None:
    doc = Document()
    doc["REF"] = ["EJ", "123", "", "X"]
    assert doc.grep("REF")[0] == ["REF", "EJ", "123", "", "X"]
    doc["REF-3"] = ["a", "b"]
    assert doc.grep("REF")[0] == ["REF", "EJ", "123", "a", "b"]
    doc["REF-2"] = "x*y"
    assert doc.grep("REF")[0] == ["REF", "EJ", "x", "y", "b"]
    doc["REF"] = "**c:e^f*d"
    assert doc.grep("REF")[0] == ["REF", "", "", "c:e^f", "d"]


def test_field_write_pads_row() -> None:
    doc = Document()
    doc["N1-4"] = "Z"
    assert doc.grep("N1")[0] == ["N1", "", "", "", "Z"]


def test_none_clears_without_removing_structure() -> None:
    doc = Document()
    doc["REF"] = ["EJ", "123"]
    doc["REF-2"] = None
    assert doc.grep("REF")[0] == ["REF", "EJ", ""]
    doc.set("REF")
    assert doc.grep("REF")[0] == ["REF", ""]


def test_repetition_padding() -> None:
    doc = Document()
    doc["REF-1"] = "EJ"
    doc["REF-2(3)"] = "x"
    assert doc["REF-2"] == "^^x"
    doc["REF-2(5)"] = "e"
    assert doc["REF-2"] == "^^x^^e"


def test_repetition_replace_and_append() -> None:
    doc = Document()
    doc["REF-2"] = "a^b"
    doc["REF-2(1)"] = ["z", "y"]
    assert doc["REF-2"] == "z^y"
    doc["REF-2(+)"] = "c"
    assert doc["REF-2"] == "z^y^c"
    doc["REF-3(+)"] = "n"
    assert doc["REF-3"] == "n"


def test_component_writes() -> None:
    doc = Document()
    doc["EB-3"] = "30^33"
    doc["EB-3(2).2"] = "Z"
    assert doc["EB-3"] == "30^33:Z"
    doc["EB-3.1"] = "X"  # last repetition by default
    assert doc["EB-3"] == "30^X:Z"
    doc["EB-3(+).2"] = "N"
    assert doc["EB-3"] == "30^X:Z^:N"


def test_component_padding_in_empty_field() -> None:
    doc = Document()
    doc["EB-5(2).3"] = "v"
    assert doc["EB-5"] == "^::v"
    assert doc["EB-5(2).3"] == "v"


def test_delimiter_conflicts_leave_document_unchanged() -> None:
    doc = Document()
    doc["REF-2"] = "a^b"
    before = copy.deepcopy(doc.to_rows())
    with pytest.raises(DelimiterConflict):
        doc["REF-2(1)"] = "a*b"
    with pytest.raises(DelimiterConflict):
        doc.set("REF-2(1)", ["a", "b*c"])
    with pytest.raises(DelimiterConflict):
        doc["REF-2(1).1"] = "a^b"
    with pytest.raises(DelimiterConflict):
        doc["REF-2(1).1"] = "a*b"
    with pytest.raises(DelimiterConflict):
        doc["REF-1"] = "a~b"
    with pytest.raises(DelimiterConflict):
        doc["NEW(+)-2(1)"] = "a*b"
    assert doc.to_rows() == before


def test_zero_indexes_fail_on_write() -> None:
    doc = _two_eb()
    for selector in ("EB-0", "EB-1.0", "EB()-1", "EB-1()"):
        with pytest.raises(ZeroIndex):
            doc[selector] = "x"
    assert doc["EB(?)"] == 2


def test_read_only_modes_fail_on_write() -> None:
    doc = _two_eb()
    for selector in ("EB(?)-1", "EB-1(?)", "EB-1(*)", "EB(1)(2)"):
        with pytest.raises(BadSelector):
            doc[selector] = "x"


def test_gather_write_hits_every_match() -> None:
    doc = _two_eb()
    doc["EB(*)-4"] = "Q"
    assert doc["EB(*)-4"] == ["Q", "Q"]
    length = len(doc)
    doc["ZZZ(*)-1"] = "x"
    assert len(doc) == length


def test_header_writes_keep_fixed_widths() -> None:
    doc = Document()
    doc["ISA-6"] = "SENDER"
    assert doc["ISA-6"] == "SENDER".ljust(15)
    doc["ISA-6"] = "X" * 20
    assert doc["ISA-6"] == "X" * 15
    doc["isa-13"] = "1"
    assert doc["ISA-13"] == "1".ljust(9)
    assert len(doc.to_text()) == 106
    assert Document(doc.to_text()).delimiters == doc.delimiters


def test_auto_number() -> None:
    doc = Document()
    doc.set("LX(+)-1", AUTO_NUMBER)
    doc.set("LX(+)-1", AUTO_NUMBER)
    assert doc["LX(*)-1"] == ["1", "2"]
    doc.set("LX(*)-2", AUTO_NUMBER)
    assert doc["LX(*)-2"] == ["1", "2"]


def test_normalized_write() -> None:
    doc = Document()
    doc.set("NM1-3", "smith~jr*", normalize=True)
    assert doc["NM1-3"] == "SMITH JR "


def test_round_trip_after_writes() -> None:
    doc = Document()
    doc.update({"GS-1": "HS", "EB-3(2).2": "Z", "REF-2(3)": "x", "LX(3)-1": "3"})
    assert Document(doc.to_text()) == doc


def test_update_shapes() -> None:
    doc = Document()
    assert doc.update({"GS-1": "HS", "GS-2": None}) is doc
    assert doc.grep("GS")[0] == ["GS", "HS"]
    doc.update(["ST-1", "270", "ST-2", "0001"])
    doc.update([("BHT-1", "0022")])
    doc.update("SE-1", "5", "SE-2", "0001")
    doc.update(None)
    assert doc.find("ST-2", "BHT-1", "SE-1") == ["0001", "0022", "5"]


def test_update_rejects_other_shapes() -> None:
    doc = Document()
    with pytest.raises(UnsupportedBatch):
        doc.update(42)
    with pytest.raises(UnsupportedBatch):
        doc.update(["GS-1"])


def test_update_pairs_apply_independently() -> None:
    doc = Document()
    with pytest.raises(ZeroIndex):
        doc.update([("GS-1", "HS"), ("GS-0", "x"), ("GS-2", "never")])
    assert doc["GS-1"] == "HS"
    assert doc["GS-2"] == ""


def test_line_breaks_in_values_are_conflicts() -> None:
    doc = Document()
    doc["NM1-3"] = "SMITH"
    before = copy.deepcopy(doc.to_rows())
    for selector in ("NM1-3", "NM1-3(1)", "NM1-3(1).1"):
        with pytest.raises(DelimiterConflict):
            doc[selector] = "SMITH\nJR"
        with pytest.raises(DelimiterConflict):
            doc[selector] = "SMITH\rJR"
    assert doc.to_rows() == before
    assert Document(doc.to_text()) == doc
