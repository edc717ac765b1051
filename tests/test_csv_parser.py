"""
Tests for the single-pass CSV scanner (deck/catalog/csv_parser.py).
"""

import logging

import pytest

from deck.catalog.csv_parser import parse_csv, scan_cells


class TestScanCells:
    """Tests for the raw character scanner."""

    def test_simple_rows(self):
        """Commas split cells, LF splits rows."""
        assert scan_cells("a,b\nc,d") == [["a", "b"], ["c", "d"]]

    def test_crlf_counts_as_one_break(self):
        """CRLF does not leave an empty row between records."""
        assert scan_cells("a,b\r\nc,d") == [["a", "b"], ["c", "d"]]

    def test_bare_cr_breaks_rows(self):
        """Old Mac line endings are line breaks too."""
        assert scan_cells("a\rb\rc") == [["a"], ["b"], ["c"]]

    def test_quoted_delimiters_and_breaks_are_literal(self):
        """Commas and line breaks inside quotes stay in the cell."""
        assert scan_cells('"a,b","c\r\nd"') == [["a,b", "c\r\nd"]]

    def test_doubled_quote_inside_quotes(self):
        """A doubled quote inside a quoted field is one literal quote."""
        assert scan_cells('"say ""hi"""') == [['say "hi"']]

    def test_quoted_empty_cell(self):
        """Two quotes with nothing between them give an empty cell."""
        assert scan_cells('"",x') == [["", "x"]]

    def test_trailing_comma_before_break_makes_empty_cell(self):
        """The break character is examined on the new cell, creating it."""
        assert scan_cells("a,b,\n") == [["a", "b", ""]]

    def test_trailing_comma_at_end_of_input(self):
        """No character is examined after the last comma, so no cell exists."""
        assert scan_cells("a,b,") == [["a", "b"]]

    def test_blank_line_is_a_single_empty_cell(self):
        assert scan_cells("a\n\nb") == [["a"], [""], ["b"]]

    def test_empty_text(self):
        assert scan_cells("") == []


class TestParseCsv:
    """Tests for parse_csv: header mapping and row filtering."""

    def test_well_formed_rows(self):
        """N data rows give N records with every header populated."""
        records = parse_csv("title,desc\nA,first\nB,second\nC,third\n")
        assert records == [
            {"title": "A", "desc": "first"},
            {"title": "B", "desc": "second"},
            {"title": "C", "desc": "third"},
        ]

    def test_embedded_comma_newline_and_quotes(self):
        """A properly quoted value survives intact."""
        text = 'title,desc\nx,"He said ""hi"", didn\'t he?\nSecond line"\n'
        records = parse_csv(text)
        assert records == [{"title": "x", "desc": 'He said "hi", didn\'t he?\nSecond line'}]

    def test_end_to_end_example(self):
        """Quoted title, multi-line description and a quoted category list."""
        text = (
            "title,desc,category\n"
            '"Peer Review, v2","Uses ""structured"" feedback\nacross sessions","ai,progress"\n'
        )
        records = parse_csv(text)
        assert len(records) == 1
        record = records[0]
        assert record["title"] == "Peer Review, v2"
        assert record["desc"] == 'Uses "structured" feedback\nacross sessions'
        assert "\n" in record["desc"]
        assert record["category"] == "ai,progress"

    def test_unquoted_category_list_is_truncated(self):
        """Without quotes the extra cell is dropped with the overflow."""
        text = 'title,desc,category\n"Peer Review, v2",desc,ai,progress\n'
        assert parse_csv(text) == [{"title": "Peer Review, v2", "desc": "desc", "category": "ai"}]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", " \r\n\t "])
    def test_empty_input_gives_no_records(self, text):
        assert parse_csv(text) == []

    def test_header_only(self):
        assert parse_csv("title,desc\n") == []
        assert parse_csv("title,desc") == []

    def test_blank_lines_do_not_add_records(self):
        """Stray and trailing blank lines give the same count as none."""
        clean = "title,desc\nA,1\nB,2\n"
        noisy = "title,desc\nA,1\n\n\nB,2\n\n\n"
        assert len(parse_csv(noisy)) == len(parse_csv(clean)) == 2

    def test_comma_only_row_is_blank(self):
        """A row of empty cells is dropped even with the right width."""
        assert parse_csv("a,b\n,\n1,2") == [{"a": "1", "b": "2"}]

    def test_short_rows_are_dropped(self):
        assert parse_csv("a,b,c\n1,2\n3,4,5") == [{"a": "3", "b": "4", "c": "5"}]

    def test_extra_cells_are_dropped(self):
        assert parse_csv("a,b\n1,2,3,4") == [{"a": "1", "b": "2"}]

    def test_trailing_comma_at_end_leaves_row_short(self):
        """``1,`` at end of input has one cell, so a two-column row is dropped."""
        assert parse_csv("a,b\n1,") == []
        assert parse_csv("a,b\n1,\n") == [{"a": "1", "b": ""}]

    def test_headers_and_values_are_trimmed(self):
        records = parse_csv("  title , desc \n  x ,  y ")
        assert records == [{"title": "x", "desc": "y"}]

    def test_byte_order_mark_is_removed_from_first_header(self):
        records = parse_csv("\ufefftitle,desc\nA,B")
        assert list(records[0]) == ["title", "desc"]

    def test_leading_blank_lines_before_header(self):
        """The first populated row is the header."""
        assert parse_csv("\n\ntitle\nA") == [{"title": "A"}]

    def test_mixed_line_endings(self):
        text = "title,desc\r\nA,1\nB,2\rC,3"
        assert [r["title"] for r in parse_csv(text)] == ["A", "B", "C"]

    def test_parsing_is_idempotent(self, sample_csv):
        assert parse_csv(sample_csv) == parse_csv(sample_csv)

    def test_sample_sheet(self, sample_csv):
        records = parse_csv(sample_csv)
        assert [r["title"] for r in records] == ["Peer Review, v2", "Ice breakers", "", "Fair grading"]
        assert all(len(r) == 6 for r in records)
        assert records[0]["category"] == "ai, progress"
        assert records[2]["format"] == "Online, Offline"

    def test_same_keys_for_every_record(self, sample_csv):
        keys = {tuple(sorted(r)) for r in parse_csv(sample_csv)}
        assert len(keys) == 1

    def test_non_string_input_is_a_programmer_error(self):
        with pytest.raises(TypeError):
            parse_csv(None)

    def test_rows_without_records_are_logged(self, caplog):
        """Data rows that all get dropped produce a warning, not an error."""
        with caplog.at_level(logging.WARNING, logger="deck.catalog.csv_parser"):
            assert parse_csv("a,b\n1\n2\n") == []
        assert "produced no records" in caplog.text

    def test_header_only_is_not_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="deck.catalog.csv_parser"):
            parse_csv("a,b\n\n")
        assert caplog.text == ""
