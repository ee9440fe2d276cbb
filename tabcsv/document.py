"""CSV documents read from and written to files or streams."""

from __future__ import annotations

import copy
import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from .converter import Converter
from .params import ConverterParams, LabelParams, LineReaderParams, SeparatorParams
from .reader import TextEncoding, decode, parse
from .table import Table
from .writer import encode, format_csv


def _is_stream(source: Any) -> bool:
    return hasattr(source, "read")


def _is_writable(target: Any) -> bool:
    return hasattr(target, "write")


def _checked(seq: list, index: int) -> int:
    """Return ``index`` if it addresses an element of ``seq``."""
    if index < 0 or index >= len(seq):
        raise IndexError(f"index {index} out of range (size {len(seq)})")
    return index


def _resize(row: list[str], size: int) -> None:
    if len(row) > size:
        del row[size:]
    else:
        row.extend([""] * (size - len(row)))


class Document(Table):
    """A CSV document held in memory, read from a path or a stream."""

    def __init__(
        self,
        source: Any = None,
        label_params: LabelParams | None = None,
        separator_params: SeparatorParams | None = None,
        converter_params: ConverterParams | None = None,
        line_reader_params: LineReaderParams | None = None,
    ) -> None:
        super().__init__(label_params, converter_params)
        self.separator_params = (
            copy.copy(separator_params) if separator_params is not None else SeparatorParams()
        )
        self.line_reader_params = (
            line_reader_params if line_reader_params is not None else LineReaderParams()
        )
        self.path = ""
        self.encoding = TextEncoding.UTF8
        if source is None:
            return
        if _is_stream(source):
            self._read_stream(source)
        else:
            path = os.fspath(source)
            if path:
                self.path = path
                self._read_file()

    # Loading and saving

    def load(
        self,
        source: Any,
        label_params: LabelParams | None = None,
        separator_params: SeparatorParams | None = None,
        converter_params: ConverterParams | None = None,
        line_reader_params: LineReaderParams | None = None,
    ) -> None:
        """Replace the document with data read from a path or a stream."""
        self.label_params = label_params if label_params is not None else LabelParams()
        self.separator_params = (
            copy.copy(separator_params) if separator_params is not None else SeparatorParams()
        )
        self.converter_params = (
            converter_params if converter_params is not None else ConverterParams()
        )
        self.line_reader_params = (
            line_reader_params if line_reader_params is not None else LineReaderParams()
        )
        if _is_stream(source):
            self.path = ""
            self._read_stream(source)
            return
        path = os.fspath(source)
        if not path:
            raise ValueError("no path to load the document from")
        self.path = path
        self._read_file()

    def save(self, target: Any = None) -> None:
        """Write the document to a stream, to a path, or to the path it came from."""
        text = format_csv(self.rows, self.separator_params)
        if _is_writable(target):
            try:
                target.write(text)
            except TypeError:
                target.write(text.encode("utf-8", errors="surrogateescape"))
            return
        if target is not None:
            path = os.fspath(target)
            if path:
                self.path = path
        if not self.path:
            raise ValueError("no path to save the document to")
        Path(self.path).write_bytes(encode(text, self.encoding))

    def clear(self) -> None:
        """Remove all data and forget the encoding that was read."""
        super().clear()
        self.encoding = TextEncoding.UTF8

    # Columns

    def get_column(
        self,
        column: int | str,
        type_: type = str,
        converter: Callable[[str], Any] | None = None,
    ) -> list[Any]:
        """Return a data column converted to ``type_``, or by ``converter``."""
        index = self._column_position(column)
        data_column = self._data_column_index(index)
        convert = converter or (
            lambda text: Converter(self.converter_params).to_val(text, type_)
        )
        label_row = self.label_params.column_name_idx
        values = []
        for position, cells in enumerate(self.rows):
            if position <= label_row:
                continue
            if data_column >= len(cells):
                raise IndexError(
                    f"requested column index {index} >= "
                    f"{len(cells) - self._data_column_index(0)} "
                    f"(number of columns on row index {position - (label_row + 1)})"
                )
            values.append(convert(cells[data_column]))
        return values

    def set_column(self, column: int | str, values: Sequence[Any]) -> None:
        """Store ``values`` in a data column, growing the table as needed."""
        data_column = self._data_column_index(self._column_position(column))
        data = self.rows

        while self._data_row_index(len(values)) > len(data):
            data.append([""] * self._data_column_count())

        if data_column + 1 > self._data_column_count():
            width = self._data_column_index(data_column + 1)
            for position, cells in enumerate(data):
                if position >= self.label_params.column_name_idx:
                    _resize(cells, width)

        converter = Converter(self.converter_params)
        first_row = self.label_params.column_name_idx + 1
        for offset, value in enumerate(values):
            cells = data[_checked(data, offset + first_row)]
            cells[_checked(cells, data_column)] = converter.to_str(value)

    def remove_column(self, column: int | str) -> None:
        """Remove a data column."""
        index = self._column_position(column)
        data_column = self._data_column_index(index)
        for position, cells in enumerate(self.rows):
            if position < self.label_params.column_name_idx:
                continue
            if data_column >= len(cells):
                raise IndexError(f"column out of range: {index} (on row {position})")
            del cells[data_column]
        self._update_column_names()

    def insert_column(
        self, index: int, values: Sequence[Any] | None = None, name: str = ""
    ) -> None:
        """Insert a data column before ``index``, optionally filled and labelled."""
        data_column = self._data_column_index(self._checked_index(index))
        data = self.rows
        label_row = self.label_params.column_name_idx

        if not values:
            column = [""] * len(data)
        else:
            column = [""] * self._data_row_index(len(values))
            converter = Converter(self.converter_params)
            for offset, value in enumerate(values):
                column[offset + label_row + 1] = converter.to_str(value)

        while len(column) > len(data):
            data.append([""] * max(label_row + 1, self._data_column_count()))

        for position, cells in enumerate(data):
            if position < label_row:
                continue
            if data_column > len(cells):
                raise IndexError(f"column out of range: {index} (on row {position})")
            cells.insert(data_column, column[_checked(column, position)])

        if name:
            self.set_column_name(index, name)
        self._update_column_names()

    # Rows

    def get_row(
        self,
        row: int | str,
        type_: type = str,
        converter: Callable[[str], Any] | None = None,
    ) -> list[Any]:
        """Return a data row converted to ``type_``, or by ``converter``."""
        data_row = self._data_row_index(self._row_position(row))
        cells = self.rows[_checked(self.rows, data_row)]
        convert = converter or (
            lambda text: Converter(self.converter_params).to_val(text, type_)
        )
        label_column = self.label_params.row_name_idx
        return [
            convert(text) for position, text in enumerate(cells) if position > label_column
        ]

    def set_row(self, row: int | str, values: Sequence[Any]) -> None:
        """Store ``values`` in a data row, growing the table as needed."""
        data_row = self._data_row_index(self._row_position(row))
        data = self.rows

        while data_row + 1 > len(data):
            data.append([""] * self._data_column_count())

        if len(values) > self._data_column_count():
            width = self._data_column_index(len(values))
            for position, cells in enumerate(data):
                if position >= self.label_params.column_name_idx:
                    _resize(cells, width)

        converter = Converter(self.converter_params)
        cells = data[data_row]
        first_column = self.label_params.row_name_idx + 1
        for offset, value in enumerate(values):
            cells[_checked(cells, offset + first_column)] = converter.to_str(value)

    def remove_row(self, row: int | str) -> None:
        """Remove a data row."""
        data_row = self._data_row_index(self._row_position(row))
        del self.rows[_checked(self.rows, data_row)]
        self._update_row_names()

    def insert_row(
        self, index: int, values: Sequence[Any] | None = None, name: str = ""
    ) -> None:
        """Insert a data row before ``index``, optionally filled and labelled."""
        data_row = self._data_row_index(self._checked_index(index))
        data = self.rows

        if not values:
            cells = [""] * self._data_column_count()
        else:
            cells = [""] * self._data_column_index(len(values))
            converter = Converter(self.converter_params)
            first_column = self.label_params.row_name_idx + 1
            for offset, value in enumerate(values):
                cells[offset + first_column] = converter.to_str(value)

        while data_row > len(data):
            data.append([""] * self._data_column_count())

        data.insert(data_row, cells)

        if name:
            self.set_row_name(index, name)
        self._update_row_names()

    # Reading

    def _read_file(self) -> None:
        self._populate(Path(self.path).read_bytes())

    def _read_stream(self, stream: Any) -> None:
        seekable = getattr(stream, "seekable", None)
        if callable(seekable) and seekable():
            stream.seek(0)
        self._populate(stream.read())

    def _populate(self, data: bytes | str) -> None:
        self.clear()
        if isinstance(data, str):
            text = data
            if text.startswith("\ufeff"):
                text = text[1:]
                self.encoding = TextEncoding.UTF8_BOM
        else:
            text, self.encoding = decode(bytes(data))
        result = parse(text, self.separator_params, self.line_reader_params)
        self.separator_params.has_cr = result.has_cr
        self.rows = result.rows