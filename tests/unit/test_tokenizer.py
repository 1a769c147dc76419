from __future__ import annotations

import pytest

from attendance_sheet.csvtext.tokenizer import is_blank_row, tokenize

"""Unit tests for the quote-aware tokenizer."""


def test_quoted_field_keeps_comma():
    assert tokenize('a,"b,c",d') == [["a", "b,c", "d"]]


def test_embedded_newline_in_quotes_is_one_row():
    assert tokenize('"x\ny",z') == [["x\ny", "z"]]


def test_embedded_crlf_in_quotes_is_kept_verbatim():
    assert tokenize('"x\r\ny",z\r\nq') == [["x\r\ny", "z"], ["q"]]


def test_crlf_is_one_terminator():
    assert tokenize("a,b\r\nc,d") == [["a", "b"], ["c", "d"]]


@pytest.mark.parametrize("text", ["a,b\nc,d", "a,b\rc,d", "a,b\r\nc,d\r\n", "a,b\nc,d\n"])
def test_row_terminators(text):
    assert tokenize(text) == [["a", "b"], ["c", "d"]]


def test_doubled_quote_inside_quoted_field():
    assert tokenize('"say ""hi""",x') == [['say "hi"', "x"]]


def test_blank_rows_are_dropped():
    text = "a,b\n,\n  ,   \n\n\r\nc,d"
    assert tokenize(text) == [["a", "b"], ["c", "d"]]


def test_trailing_commas_keep_empty_fields():
    assert tokenize("a,b,,\n") == [["a", "b", "", ""]]


def test_final_row_flushed_without_terminator():
    assert tokenize("h1,h2\nv1,v2") == [["h1", "h2"], ["v1", "v2"]]


def test_quote_mid_field_is_literal():
    assert tokenize('ab"c,d') == [['ab"c', "d"]]


def test_unterminated_quote_runs_to_end():
    assert tokenize('a,"open\nstill') == [["a", "open\nstill"]]


def test_fields_are_not_trimmed():
    assert tokenize(" a , b ") == [[" a ", " b "]]


@pytest.mark.parametrize("text", ["", "   ", "\n\n", "\r\n \t\r\n", ",,,"])
def test_empty_or_whitespace_input_yields_no_rows(text):
    assert tokenize(text) == []


def test_quoted_empty_fields():
    assert tokenize('"",x') == [["", "x"]]


def test_is_blank_row():
    assert is_blank_row(["", " ", "\t"])
    assert not is_blank_row(["", "x"])


def test_tokenize_is_deterministic():
    text = 'E.ID,Name,1\r\nE001,"Ann, A",P\r\n'
    assert tokenize(text) == tokenize(text)
