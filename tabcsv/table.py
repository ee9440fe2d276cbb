"""In-memory table of cell text with optional row and column labels."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .converter import Converter
from .params import ConverterParams, LabelParams


def _at(seq: list, index: int) -> Any:
    """Return ``seq[index]``, refusing negative indices."""
    if index < 0 or index >= len(seq):
        raise IndexError(f"index {index} out of range (size {len(seq)})")
    return seq[index]


def _resize(row: list[str], size: int) -> None:
    """Grow ``row`` with empty cells or truncate it to ``size`` cells."""
    if len(row) > size:
        del row[size:]
    else:
        row.extend([""] * (size - len(row)))


class Table:
    """Rows of cell text, addressed by data index or by label.

    One row may hold the column labels and one column may hold the row
    labels, as given by ``label_params``; data indices skip past them.
    """

    def __init__(
        self,
        label_params: LabelParams | None = None,
        converter_params: ConverterParams | None = None,
    ) -> None:
        self.label_params = label_params if label_params is not None else LabelParams()
        self.converter_params = (
            converter_params if converter_params is not None else ConverterParams()
        )
        self._data: list[list[str]] = []
        self._column_names: dict[str, int] = {}
        self._row_names: dict[str, int] = {}

    @property
    def rows(self) -> list[list[str]]:
        """All rows, label row and label column included."""
        return self._data

    @rows.setter
    def rows(self, rows: list[list[str]]) -> None:
        self._data = [list(row) for row in rows]
        self._reindex()

    def clear(self) -> None:
        """Remove all rows and labels."""
        self._data.clear()
        self._column_names.clear()
        self._row_names.clear()

    # Counts

    def column_count(self) -> int:
        """Number of data columns, label column excluded."""
        first_row = max(self.label_params.column_name_idx, 0)
        width = len(self._data[first_row]) if len(self._data) > first_row else 0
        return max(width - (self.label_params.row_name_idx + 1), 0)

    def row_count(self) -> int:
        """Number of data rows, label row excluded."""
        return max(len(self._data) - (self.label_params.column_name_idx + 1), 0)

    # Label lookup

    def column_index(self, name: str) -> int:
        """Data index of the column labelled ``name``, or -1 if there is none."""
        if self.label_params.column_name_idx >= 0 and name in self._column_names:
            return self._column_names[name] - (self.label_params.row_name_idx + 1)
        return -1

    def row_index(self, name: str) -> int:
        """Data index of the row labelled ``name``, or -1 if there is none."""
        if self.label_params.row_name_idx >= 0 and name in self._row_names:
            return self._row_names[name] - (self.label_params.column_name_idx + 1)
        return -1

    # Cells

    def get_cell(
        self,
        column: int | str,
        row: int | str,
        type_: type = str,
        converter: Callable[[str], Any] | None = None,
    ) -> Any:
        """Return a cell converted to ``type_``, or by ``converter`` if given."""
        data_column = self._data_column_index(self._column_position(column))
        data_row = self._data_row_index(self._row_position(row))
        text = _at(_at(self._data, data_row), data_column)
        if converter is not None:
            return converter(text)
        return Converter(self.converter_params).to_val(text, type_)

    def set_cell(self, column: int | str, row: int | str, value: Any) -> None:
        """Store ``value`` in a cell, growing the table as needed."""
        data_column = self._data_column_index(self._column_position(column))
        data_row = self._data_row_index(self._row_position(row))

        while data_row + 1 > len(self._data):
            self._data.append([""] * self._data_column_count())

        if data_column + 1 > self._data_column_count():
            for position, cells in enumerate(self._data):
                if position >= self.label_params.column_name_idx:
                    _resize(cells, data_column + 1)

        text = Converter(self.converter_params).to_str(value)
        target = _at(self._data, data_row)
        _at(target, data_column)
        target[data_column] = text

    # Column labels

    def column_name(self, index: int) -> str:
        """Label of the data column at ``index``."""
        data_column = self._data_column_index(self._checked_index(index))
        if self.label_params.column_name_idx < 0:
            raise IndexError(
                f"column name row index < 0: {self.label_params.column_name_idx}"
            )
        return _at(_at(self._data, self.label_params.column_name_idx), data_column)

    def set_column_name(self, index: int, name: str) -> None:
        """Label the data column at ``index`` with ``name``."""
        label_row = self.label_params.column_name_idx
        if label_row < 0:
            raise IndexError(f"column name row index < 0: {label_row}")
        data_column = self._data_column_index(self._checked_index(index))
        self._column_names[name] = data_column

        while len(self._data) <= label_row:
            self._data.append([])
        cells = self._data[label_row]
        if data_column >= len(cells):
            _resize(cells, data_column + 1)
        cells[data_column] = name

    def column_names(self) -> list[str]:
        """Labels of all data columns."""
        if self.label_params.column_name_idx >= 0:
            label_row = _at(self._data, self.label_params.column_name_idx)
            return label_row[self.label_params.row_name_idx + 1:]
        return []

    # Row labels

    def row_name(self, index: int) -> str:
        """Label of the data row at ``index``."""
        data_row = self._data_row_index(self._checked_index(index))
        if self.label_params.row_name_idx < 0:
            raise IndexError(f"row name column index < 0: {self.label_params.row_name_idx}")
        return _at(_at(self._data, data_row), self.label_params.row_name_idx)

    def set_row_name(self, index: int, name: str) -> None:
        """Label the data row at ``index`` with ``name``."""
        data_row = self._data_row_index(self._checked_index(index))
        self._row_names[name] = data_row
        label_column = self.label_params.row_name_idx
        if label_column < 0:
            raise IndexError(f"row name column index < 0: {label_column}")

        while len(self._data) <= data_row:
            self._data.append([])
        cells = self._data[data_row]
        if label_column >= len(cells):
            _resize(cells, label_column + 1)
        cells[label_column] = name

    def row_names(self) -> list[str]:
        """Labels of all data rows."""
        label_column = self.label_params.row_name_idx
        if label_column < 0:
            return []
        return [
            _at(cells, label_column)
            for position, cells in enumerate(self._data)
            if position > self.label_params.column_name_idx
        ]

    # Internal helpers

    def _reindex(self) -> None:
        self._update_column_names()
        self._update_row_names()

    def _update_column_names(self) -> None:
        self._column_names.clear()
        label_row = self.label_params.column_name_idx
        if label_row >= 0 and len(self._data) > label_row:
            for position, name in enumerate(self._data[label_row]):
                self._column_names[name] = position

    def _update_row_names(self) -> None:
        self._row_names.clear()
        label_column = self.label_params.row_name_idx
        if label_column >= 0 and len(self._data) > self.label_params.column_name_idx + 1:
            position = 0
            for cells in self._data:
                if len(cells) > label_column:
                    self._row_names[cells[label_column]] = position
                    position += 1

    def _data_row_count(self) -> int:
        return len(self._data)

    def _data_column_count(self) -> int:
        first_row = max(self.label_params.column_name_idx, 0)
        return len(self._data[first_row]) if len(self._data) > first_row else 0

    def _data_row_index(self, index: int) -> int:
        return index + max(self.label_params.column_name_idx + 1, 0)

    def _data_column_index(self, index: int) -> int:
        return index + max(self.label_params.row_name_idx + 1, 0)

    @staticmethod
    def _checked_index(index: int) -> int:
        if index < 0:
            raise IndexError(f"negative index: {index}")
        return index

    def _column_position(self, column: int | str) -> int:
        if isinstance(column, str):
            index = self.column_index(column)
            if index < 0:
                raise KeyError(f"column not found: {column}")
            return index
        return self._checked_index(column)

    def _row_position(self, row: int | str) -> int:
        if isinstance(row, str):
            index = self.row_index(row)
            if index < 0:
                raise KeyError(f"row not found: {row}")
            return index
        return self._checked_index(row)