"""Decoding and parsing of CSV text into rows of cells."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .params import LineReaderParams, SeparatorParams

_WHITESPACE = " \t\n\v\f\r"

UTF8_BOM = b"\xef\xbb\xbf"
UTF16_LE_BOM = b"\xff\xfe"
UTF16_BE_BOM = b"\xfe\xff"


class TextEncoding(enum.Enum):
    """The encoding a document was read in, used again when it is saved."""

    UTF8 = "utf-8"
    UTF8_BOM = "utf-8-bom"
    UTF16_LE = "utf-16-le"
    UTF16_BE = "utf-16-be"


@dataclass
class ParseResult:
    """Rows of cells read from CSV text, and whether lines ended in CR/LF."""

    rows: list[list[str]] = field(default_factory=list)
    has_cr: bool = False


def decode(data: bytes) -> tuple[str, TextEncoding]:
    """Decode raw file content, detecting and removing a byte order mark."""
    head = data[:2]
    if len(data) >= 2 and head == UTF16_LE_BOM:
        return data[2:].decode("utf-16-le"), TextEncoding.UTF16_LE
    if len(data) >= 2 and head == UTF16_BE_BOM:
        return data[2:].decode("utf-16-be"), TextEncoding.UTF16_BE
    if len(data) >= 3 and data[:3] == UTF8_BOM:
        return data[3:].decode("utf-8", errors="surrogateescape"), TextEncoding.UTF8_BOM
    return data.decode("utf-8", errors="surrogateescape"), TextEncoding.UTF8


def trim(text: str) -> str:
    """Remove leading and trailing whitespace."""
    return text.strip(_WHITESPACE)


def unquote(text: str, quote_char: str = '"') -> str:
    """Strip enclosing quotes from ``text`` and unescape doubled quotes."""
    if len(text) >= 2 and text[0] == quote_char and text[-1] == quote_char:
        return text[1:-1].replace(quote_char * 2, quote_char)
    return text


def parse(
    text: str,
    separator_params: SeparatorParams | None = None,
    line_reader_params: LineReaderParams | None = None,
) -> ParseResult:
    """Split CSV ``text`` into rows of cells."""
    sep = separator_params if separator_params is not None else SeparatorParams()
    lines = line_reader_params if line_reader_params is not None else LineReaderParams()
    quote_char = sep.quote_char
    separator = sep.separator

    def finish_cell(chars: list[str]) -> str:
        cell = "".join(chars)
        if sep.trim:
            cell = trim(cell)
        if sep.auto_quote:
            cell = unquote(cell, quote_char)
        return cell

    def is_comment(row: list[str]) -> bool:
        return (
            lines.skip_comment_lines
            and bool(row[0])
            and row[0][0] == lines.comment_prefix
        )

    result = ParseResult()
    row: list[str] = []
    cell: list[str] = []
    quoted = False
    cr = 0
    lf = 0

    for ch in text:
        if ch == quote_char:
            if not cell or cell[0] == quote_char:
                quoted = not quoted
            elif sep.trim:
                # allow whitespace before the first quote character
                try:
                    first_quote = cell.index(quote_char)
                except ValueError:
                    first_quote = len(cell)
                if all(c in _WHITESPACE for c in cell[:first_quote]):
                    quoted = not quoted
            cell.append(ch)
        elif ch == separator:
            if quoted:
                cell.append(ch)
            else:
                row.append(finish_cell(cell))
                cell = []
        elif ch == "\r":
            if sep.quoted_linebreaks and quoted:
                cell.append(ch)
            else:
                cr += 1
        elif ch == "\n":
            if sep.quoted_linebreaks and quoted:
                cell.append(ch)
                continue
            lf += 1
            if lines.skip_empty_lines and not row and not cell:
                continue
            row.append(finish_cell(cell))
            if not is_comment(row):
                result.rows.append(row)
            row = []
            cell = []
            quoted = False
        else:
            cell.append(ch)

    if row or cell:
        row.append(finish_cell(cell))
        if not is_comment(row):
            result.rows.append(row)

    result.has_cr = cr > lf // 2
    return result