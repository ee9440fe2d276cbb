import io
import re

import pytest

from tabcsv.document import Document
from tabcsv.params import ConverterParams, LabelParams, SeparatorParams

BASIC = "-,A,B,C\n1,3,9,81\n2,4,16,256\n"


@pytest.fixture
def basic_path(tmp_path):
    path = tmp_path / "basic.csv"
    path.write_bytes(BASIC.encode())
    return path


def _write(tmp_path, text, name="data.csv"):
    path = tmp_path / name
    path.write_bytes(text.encode())
    return path


def test_default_conversion_to_custom_values(tmp_path):
    path = _write(tmp_path, "-,A,B,C\n1,,x,#\n2,,y,$\n")
    doc = Document(
        path,
        LabelParams(0, 0),
        SeparatorParams(),
        ConverterParams(True, 0.0, 1),
    )
    assert doc.get_cell(0, 0, int) == 1
    assert doc.get_cell(1, 0, int) == 1
    assert doc.get_cell(2, 0, int) == 1
    assert doc.get_cell(0, 1, float) == 0.0
    assert doc.get_cell(1, 1, float) == 0.0
    assert doc.get_cell(2, 1, float) == 0.0


def _check_basic(doc):
    assert doc.get_cell(0, 0, int) == 3
    assert doc.get_cell(1, 0, int) == 9
    assert doc.get_cell(2, 0, int) == 81
    assert doc.get_cell("A", "2") == "4"
    assert doc.get_cell("B", "2") == "16"
    assert doc.get_cell("C", "2") == "256"


def test_read_from_binary_file_stream(basic_path):
    with open(basic_path, "rb") as stream:
        stream.seek(0, io.SEEK_END)
        doc = Document(stream, LabelParams(0, 0))
    _check_basic(doc)


def test_read_from_string_stream():
    doc = Document(io.StringIO(BASIC), LabelParams(0, 0))
    _check_basic(doc)


def test_read_from_bytes_stream():
    doc = Document(io.BytesIO(BASIC.encode()), LabelParams(0, 0))
    _check_basic(doc)


def test_load_from_file_stream(basic_path):
    doc = Document()
    with open(basic_path, "rb") as stream:
        doc.load(stream, LabelParams(0, 0))
    _check_basic(doc)
    assert doc.path == ""


def test_load_from_string_stream():
    doc = Document("")
    doc.load(io.StringIO(BASIC), LabelParams(0, 0))
    _check_basic(doc)


def test_load_from_path(basic_path):
    doc = Document()
    doc.load(basic_path, LabelParams(0, 0))
    assert doc.get_column("C", int) == [81, 256]


def test_load_empty_path_raises():
    doc = Document()
    with pytest.raises(ValueError):
        doc.load("")


def test_generate_document_by_row_labels(tmp_path):
    expected = ",A,B,C,D\n0,2,4,16,256\n1,3,9,81,6561\n2,4,16,256,65536\n3,5,25,625,390625\n"
    path = tmp_path / "out.csv"
    doc = Document("", LabelParams(0, 0), SeparatorParams(",", False, False))

    for index in range(4):
        doc.set_row_name(index, str(index))

    doc.set_row(0, [2, 4])
    doc.set_row(1, [3, 9, 81, 6561])
    doc.set_row(2, [4, 16, 256, 65536])
    doc.set_row(3, [5, 25, 625, 390625])

    doc.set_cell(2, 0, 16)
    doc.set_cell(3, 0, 256)

    for index, name in enumerate("ABCD"):
        doc.set_column_name(index, name)

    doc.save(path)
    assert path.read_bytes().decode() == expected


def test_generate_document_with_insert_row(tmp_path):
    expected = ",A,B,C,D\n0,2,4,16,256\n1,3,9,81,6561\n2,4,16,256,65536\n3,5,25,625,390625\n"
    path = tmp_path / "out.csv"
    doc = Document("", LabelParams(0, 0), SeparatorParams(",", False, False))

    doc.insert_row(0, [3, 9, 81, 6561], "1")
    doc.insert_row(0, [2, 4, 16, 256], "0")

    doc.insert_row(2)
    doc.set_row(2, [4, 16, 256, 65536])
    doc.set_row_name(2, "2")

    doc.insert_row(3, [5, 25, 625, 390625], "3")

    ints = doc.get_row("1", int)
    assert len(ints) == 4
    assert ints[0] == 3
    assert ints[1] == 9

    for index, name in enumerate("ABCD"):
        doc.set_column_name(index, name)

    doc.save(path)
    assert path.read_bytes().decode() == expected


def test_all_accessors(basic_path):
    doc = Document(basic_path, LabelParams(0, 0))

    assert doc.get_column(0, int)[0] == 3
    assert doc.get_column("A", int)[0] == 3

    doc.set_column(0, [4, 5])
    assert doc.get_column(0, int)[0] == 4
    doc.set_column("A", [5, 6])
    assert doc.get_column("A", int)[0] == 5

    doc.insert_column(0, [7, 8], "A2")
    assert doc.get_column("A2", int)[0] == 7

    assert doc.get_row(0, int)[0] == 7
    assert doc.get_row("1", int)[0] == 7

    doc.set_row(0, [9, 3, 9, 81])
    assert doc.get_row(0, int)[0] == 9

    doc.set_row("1", [9, 3, 9, 81])
    assert doc.get_row("1", int)[0] == 9

    doc.insert_row(0, [1, 2, 3, 4], "1B")
    assert doc.get_row("1B", int)[0] == 1

    assert doc.get_cell(0, 0, int) == 1
    assert doc.get_cell("A2", "1B", int) == 1
    assert doc.get_cell(0, "1B", int) == 1
    assert doc.get_cell("A2", 0, int) == 1

    doc.set_cell(1, 1, 111)
    assert doc.get_cell(1, 1, int) == 111
    doc.set_cell("A", "2", 222)
    assert doc.get_cell("A", "2", int) == 222


def test_get_column_out_of_range_messages(tmp_path):
    path = _write(tmp_path, "-,A,B,C\n1,3,9,81\n2,4,16\n")
    doc = Document(path, LabelParams(0, 0))

    assert doc.column_name(0) == "A"
    assert doc.column_name(1) == "B"
    assert doc.column_name(2) == "C"

    message = "requested column index 2 >= 2 (number of columns on row index 1)"
    with pytest.raises(IndexError, match=re.escape(message)):
        doc.get_column(2, int)
    with pytest.raises(IndexError, match=re.escape(message)):
        doc.get_column("C", int)
    with pytest.raises(
        IndexError,
        match=re.escape("requested column index 3 >= 3 (number of columns on row index 0)"),
    ):
        doc.get_column(3, int)


def test_get_column_unknown_name(basic_path):
    doc = Document(basic_path, LabelParams(0, 0))
    with pytest.raises(KeyError, match="column not found: Z"):
        doc.get_column("Z")


def test_parse_large_file_by_path_and_text_stream(tmp_path):
    rows = 5000
    lines = ["Foo,Bar,Baz"] + [f"{i},{i * 2},{i * 3}" for i in range(rows)]
    path = _write(tmp_path, "\n".join(lines) + "\n")
    assert path.stat().st_size > 64 * 1024

    doc = Document(path)
    assert doc.row_count() == rows
    assert doc.get_column("Baz", int)[-1] == (rows - 1) * 3

    with open(path) as stream:
        doc2 = Document(stream)
    assert doc2.row_count() == rows
    assert doc2.get_column("Bar", int)[1] == 2


def test_high_precision_floats_round_trip(tmp_path):
    path = _write(tmp_path, "-,A,B,C\nf,0,0,0\nd,0,0,0\n")
    values = [3.14159, 3.1415926535, 3.141592653589793, 3.14159265358979323846]

    doc = Document(path, LabelParams(0, 0))
    doc.set_cell("A", "f", values[0])
    doc.set_cell("B", "f", values[1])
    doc.set_cell("C", "f", values[2])
    doc.set_cell("A", "d", values[3])
    doc.save()

    doc2 = Document(path, LabelParams(0, 0))
    assert doc2.get_cell("A", "f", float) == values[0]
    assert doc2.get_cell("B", "f", float) == values[1]
    assert doc2.get_cell("C", "f", float) == values[2]
    assert doc2.get_cell("A", "d", float) == values[3]


@pytest.mark.parametrize("column, value", [(0, 4), (1, 16), (2, 256)])
def test_set_cell_with_offset_column_labels(tmp_path, column, value):
    csv = "# Comment line\nA,B,C\n3,9,81\n4,16,256\n"
    path = _write(tmp_path, csv)
    label_params = LabelParams()
    label_params.column_name_idx = 1
    label_params.row_name_idx = -1
    separator_params = SeparatorParams()
    separator_params.auto_quote = False

    doc = Document(path, label_params, separator_params)
    doc.set_cell(column, 1, value)
    doc.save()
    assert path.read_bytes().decode() == csv


def test_remove_column_messages(tmp_path):
    path = _write(tmp_path, "-,A,B,C,D\n1,3,9,81,6561\n2,4,16,256\n")
    doc = Document(path, LabelParams(0, 0))

    doc.remove_column("A")
    assert doc.column_name(0) == "B"

    doc.remove_column(0)
    assert doc.column_name(0) == "C"

    with pytest.raises(IndexError, match=re.escape("column out of range: 2 (on row 0)")):
        doc.remove_column(2)

    with pytest.raises(IndexError, match=re.escape("column out of range: 1 (on row 2)")):
        doc.remove_column("D")


def test_insert_column_messages(tmp_path):
    path = _write(tmp_path, "A,B,C\n1,3,9\n2,4,16\n")
    doc = Document(path)

    doc.insert_column(3, [1, 2], "D")
    doc.insert_column(4, [3, 4], "E")
    assert doc.column_names() == ["A", "B", "C", "D", "E"]
    assert doc.get_column("E", int) == [3, 4]

    with pytest.raises(IndexError, match=re.escape("column out of range: 6 (on row 0)")):
        doc.insert_column(6, [5, 6], "F")


def test_remove_row(basic_path):
    doc = Document(basic_path, LabelParams(0, 0))
    doc.remove_row("1")
    assert doc.row_names() == ["2"]
    assert doc.row_count() == 1
    with pytest.raises(IndexError):
        doc.remove_row(5)
    with pytest.raises(KeyError, match="row not found: 9"):
        doc.remove_row("9")


def test_set_column_grows_rows(tmp_path):
    path = _write(tmp_path, "A,B\n1,2\n")
    doc = Document(path)
    doc.set_column(1, [5, 6, 7])
    assert doc.row_count() == 3
    assert doc.get_column(1, int) == [5, 6, 7]
    assert doc.get_column(0) == ["1", "", ""]


def test_custom_converter_functions(basic_path):
    doc = Document(basic_path, LabelParams(0, 0))
    assert doc.get_column("B", converter=lambda text: int(text) * 10) == [90, 160]
    assert doc.get_row("2", converter=lambda text: f"<{text}>") == ["<4>", "<16>", "<256>"]


def test_save_to_streams(basic_path):
    doc = Document(basic_path, LabelParams(0, 0))
    text_out = io.StringIO()
    doc.save(text_out)
    assert text_out.getvalue() == BASIC
    bytes_out = io.BytesIO()
    doc.save(bytes_out)
    assert bytes_out.getvalue() == BASIC.encode()


def test_save_without_path_raises():
    doc = Document()
    with pytest.raises(ValueError):
        doc.save()


def test_utf8_bom_preserved_on_save(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes(b"\xef\xbb\xbfID\n1\n")
    doc = Document(path, LabelParams(0, -1))
    assert doc.row_count() == 1
    assert doc.get_column("ID") == ["1"]
    doc.save()
    assert path.read_bytes() == b"\xef\xbb\xbfID\n1\n"


def test_utf16_be_written_back(tmp_path):
    path = tmp_path / "u16.csv"
    path.write_bytes(b"\xfe\xff" + "-,A,B,C\n1,0,0,0\n2,0,0,0\n".encode("utf-16-be"))
    doc = Document(path, LabelParams(0, 0))

    doc.set_cell(0, 0, 3)
    doc.set_cell(1, 0, 9)
    doc.set_cell(2, 0, 81)
    doc.set_cell("A", "2", "4")
    doc.set_cell("B", "2", "16")
    doc.set_cell("C", "2", "256")
    doc.save()

    assert path.read_bytes() == b"\xfe\xff" + BASIC.encode("utf-16-be")


def test_crlf_detected_and_kept(tmp_path):
    path = _write(tmp_path, "A,B\r\n1,2\r\n")
    doc = Document(path)
    assert doc.separator_params.has_cr is True
    out = io.StringIO()
    doc.save(out)
    assert out.getvalue() == "A,B\r\n1,2\r\n"


def test_separator_params_not_mutated_by_read(tmp_path):
    path = _write(tmp_path, "A,B\r\n1,2\r\n")
    params = SeparatorParams(",", False, False)
    Document(path, separator_params=params)
    assert params.has_cr is False