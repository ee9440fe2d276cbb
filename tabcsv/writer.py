"""Formatting of rows of cells as CSV text and encoding it for output."""

from __future__ import annotations

from collections.abc import Iterable

from .params import SeparatorParams
from .reader import UTF8_BOM, UTF16_BE_BOM, UTF16_LE_BOM, TextEncoding


def quote_cell(cell: str, separator_params: SeparatorParams | None = None) -> str:
    """Quote ``cell`` if it holds a separator, a space or a line break."""
    params = separator_params if separator_params is not None else SeparatorParams()
    if params.auto_quote and (
        params.separator in cell or " " in cell or "\n" in cell
    ):
        quote = params.quote_char
        return quote + cell.replace(quote, quote * 2) + quote
    return cell


def format_csv(
    rows: Iterable[Iterable[str]], separator_params: SeparatorParams | None = None
) -> str:
    """Return CSV text for ``rows``, one line per row."""
    params = separator_params if separator_params is not None else SeparatorParams()
    line_end = "\r\n" if params.has_cr else "\n"
    return "".join(
        params.separator.join(quote_cell(cell, params) for cell in row) + line_end
        for row in rows
    )


def encode(text: str, encoding: TextEncoding = TextEncoding.UTF8) -> bytes:
    """Encode ``text`` for writing, adding the byte order mark of ``encoding``."""
    if encoding is TextEncoding.UTF16_LE:
        return UTF16_LE_BOM + text.encode("utf-16-le")
    if encoding is TextEncoding.UTF16_BE:
        return UTF16_BE_BOM + text.encode("utf-16-be")
    data = text.encode("utf-8", errors="surrogateescape")
    if encoding is TextEncoding.UTF8_BOM:
        return UTF8_BOM + data
    return data