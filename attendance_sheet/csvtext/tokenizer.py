from __future__ import annotations

"""Quote-aware tokenizer for comma-separated spreadsheet exports.

Rules:
- a double quote at the start of a field opens quoted mode, the next lone
  quote closes it; ``""`` inside a quoted field is one literal quote
- a quote anywhere else outside quoted mode is a literal character
- unquoted ``,`` ends a field; unquoted CR, LF or CRLF ends a row
  (CRLF is one terminator)
- rows whose fields are all blank after trimming are dropped
- the last field/row is flushed without a trailing terminator

The tokenizer never fails: malformed quoting is read literally and an
unterminated quoted field runs to the end of the input.
"""

__all__ = [
    "RawRow",
    "tokenize",
    "is_blank_row",
]

RawRow = list[str]

QUOTE = '"'
DELIMITER = ","


def is_blank_row(row: RawRow) -> bool:
    return all(not f.strip() for f in row)


def tokenize(text: str, delimiter: str = DELIMITER) -> list[RawRow]:
    """Split raw text into rows of raw (untrimmed) field strings."""
    rows: list[RawRow] = []
    row: RawRow = []
    field: list[str] = []
    in_quotes = False
    # True once anything (char, delimiter, quote) belongs to the pending row
    pending = False

    def end_field() -> None:
        row.append("".join(field))
        field.clear()

    def end_row() -> None:
        nonlocal row, pending
        end_field()
        if not is_blank_row(row):
            rows.append(row)
        row = []
        pending = False

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if in_quotes:
            if ch == QUOTE:
                if i + 1 < n and text[i + 1] == QUOTE:
                    field.append(QUOTE)
                    i += 2
                    continue
                in_quotes = False
            else:
                field.append(ch)
            i += 1
            continue

        if ch == QUOTE and not field:
            in_quotes = True
            pending = True
        elif ch == delimiter:
            end_field()
            pending = True
        elif ch == "\r":
            end_row()
            if i + 1 < n and text[i + 1] == "\n":
                i += 1
        elif ch == "\n":
            end_row()
        else:
            field.append(ch)
            pending = True
        i += 1

    if pending or field:
        end_row()
    return rows
