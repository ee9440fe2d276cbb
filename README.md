# tabcsv

A small library for working with CSV documents as tables. Rows and columns
can be addressed by index or by label, and cell text is converted to and from
Python values on access.

## Installation

```
pip install tabcsv
```

## Reading a document

```python
import io
from tabcsv.document import Document
from tabcsv.params import LabelParams

csv = (
    "Date,Open,Close,Volume\n"
    "2017-02-24,64.53,64.62,21705200\n"
    "2017-02-23,64.42,64.62,20235200\n"
)

doc = Document(io.StringIO(csv), label_params=LabelParams(0, 0))

closes = doc.get_column("Close", float)            # [64.62, 64.62]
volume = doc.get_cell("Volume", "2017-02-23", int)  # 20235200
print(doc.column_names())                           # ['Open', 'Close', 'Volume']
print(doc.row_names())                              # ['2017-02-24', '2017-02-23']
print(doc.row_count(), doc.column_count())          # 2 3
```

The source of a `Document` can be a path or an open stream (text or binary).
`Document.load(source, ...)` replaces the contents of an existing document
in the same way. `LabelParams(column_name_idx, row_name_idx)` chooses which
row holds the column labels and which column holds the row labels; `-1` turns
either off, and values below `-1` raise `ValueError`. Data indices always
skip past the label row and label column.

`column_index(name)` and `row_index(name)` return the data index for a label,
or `-1` when there is none.

## Editing and saving

```python
doc.set_cell("Close", "2017-02-24", 65.0)
doc.insert_column(0, [1, 2], "Rank")
doc.remove_row("2017-02-23")
doc.save("out.csv")
```

`set_column`, `set_row`, `remove_column` and `remove_row` take either an index
or a label; `insert_column` and `insert_row` take an index, optional values
and an optional label. `set_column_name` and `set_row_name` label a column or
row. The table grows with empty cells when you write past its current edges.

`save()` with no argument writes back to the path the document was read from;
`save(path)` writes to a new path and remembers it; `save(stream)` writes the
CSV text to an open stream. Cells holding the separator, a space or a line
break are quoted on output, with quote characters doubled inside.

## Options

- `SeparatorParams`: separator character, trimming of whitespace around
  cells, CR/LF line endings, line breaks inside quoted cells, automatic
  quoting and unquoting, and the quote character. When a document is read,
  CR/LF endings are kept if at least half of its line breaks had them.
- `ConverterParams`: give invalid numbers (including empty cells) a default
  value (`default_integer`, `default_float`) instead of raising, and choose
  whether the decimal point of the current `LC_NUMERIC` locale is honoured
  when reading floats.
- `LineReaderParams`: skip comment lines starting with a given prefix, skip
  empty lines.

Cell values convert to and from `str`, `int` and `float`. A custom conversion
can be passed as `converter`, a callable that takes the cell text and returns
a value:

```python
cents = doc.get_column("Close", converter=lambda s: round(100 * float(s)))
```

Documents starting with a UTF-8 byte order mark, or in UTF-16 with a byte
order mark, are read and saved back to a path in the same encoding.

## Lower-level pieces

- `tabcsv.reader`: `decode(data)` detects a byte order mark and decodes;
  `parse(text, separator_params, line_reader_params)` splits text into rows.
- `tabcsv.writer`: `format_csv(rows, separator_params)` builds CSV text;
  `encode(text, encoding)` adds the matching byte order mark.
- `tabcsv.converter.Converter`: `to_val(text, type_)` and `to_str(value)`.
- `tabcsv.table.Table`: the in-memory table with labels, without file input
  or output.

## Errors

Missing labels raise `KeyError`; indices outside the table raise
`IndexError`; text that cannot be converted raises `ValueError`; values of
an unsupported type (anything but `str`, `int` and `float`, including
`bool`) raise `tabcsv.converter.NoConverterError`, a `TypeError`.

## What it does not do

This is a library only: there is no command-line tool.