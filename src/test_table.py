import pyarrow as pa
import pytest

from str2table.cell import CellType, CellValue
from str2table.core import parse_export_color, parse_force_parse, parse_subtable
from str2table.settings import Color, ParseMode
from str2table.table import Table, TableCell, TableLine

TEXT = """\
name  age  score
alice 30   1.5
bob   41   2

carol 27   x
"""


def test_from_string_drops_empty_lines_and_fields():
    table = Table.from_string(TEXT)
    assert len(table) == 4
    assert table.width == 3
    assert [str(c) for c in table[1]] == ["alice", "30", "1.5"]


def test_from_string_infers_types():
    table = Table.from_string(TEXT)
    assert table.cell(1, 1).value == CellValue.integer(30)
    assert table.cell(2, 2).value.type is CellType.INTEGER
    assert table.cell(1, 2).value.type is CellType.FLOAT
    assert table.cell(3, 2).value == CellValue.string("x")


def test_string_mode_keeps_text():
    table = Table.from_string(TEXT, parse_mode=ParseMode.STRING)
    assert all(c.value.type is CellType.STRING for line in table for c in line)


def test_custom_separation_and_end_line():
    table = Table.from_string("1#2;\n3 # 4;", separation="#", end_line=";")
    assert len(table) == 2
    assert [c.value.value for c in table[1]] == [3, 4]


def test_crlf_input():
    table = Table.from_string("1 2\r\n3 4\r\n")
    assert [str(c) for c in table[0]] == ["1", "2"]


def test_force_parse_columns():
    table = Table.from_string("1 2\n3 4", force_parse=parse_force_parse("2cs"))
    assert table.cell(0, 0).value.type is CellType.INTEGER
    assert table.cell(0, 1).value == CellValue.string("2")
    assert table.cell(1, 1).value == CellValue.string("4")


def test_force_parse_lines_is_advisory():
    table = Table.from_string("1 a\n3 4", force_parse=parse_force_parse("1lf"))
    assert table.cell(0, 0).value.type is CellType.FLOAT
    assert table.cell(0, 1).value.type is CellType.STRING
    assert table.cell(1, 0).value.type is CellType.INTEGER


def test_subtable():
    table = Table.from_string(TEXT).subtable(parse_subtable("1-2l,3c,1c"))
    assert [[str(c) for c in line] for line in table] == [["name", "score"], ["alice", "1.5"]]


def test_subtable_single_axis_keeps_the_other():
    table = Table.from_string(TEXT).subtable(parse_subtable("4l"))
    assert [str(c) for c in table[0]] == ["carol", "27", "x"]


def test_subtable_ignores_missing_indices():
    table = Table.from_string(TEXT).subtable(parse_subtable("3-9l,7c"))
    assert len(table) == 2
    assert all(len(line) == 0 for line in table)


def test_apply_colors_line_wins():
    table = Table.from_string(TEXT)
    table.apply_colors(parse_export_color("1rl,2yc"))
    assert table.cell(0, 1).color is Color.RED
    assert table.cell(1, 1).color is Color.YELLOW
    assert table.cell(1, 0).color is Color.BLACK


def test_line_editing():
    line = TableLine.from_string("1 2", " ")
    line.push_cell(TableCell.from_text("3"))
    line.insert_cell(0, TableCell.from_text("0"))
    assert line.to_string(",") == "0,1,2,3"
    assert str(line.remove_cell(1)) == "1"
    assert str(line.pop_cell()) == "3"
    assert line.get_cell(10) is None
    with pytest.raises(IndexError):
        line.remove_cell(10)


def test_table_editing():
    table = Table.from_string("1\n2")
    table.insert_line(1, TableLine.from_string("x", " "))
    assert [str(line[0]) for line in table] == ["1", "x", "2"]
    assert str(table.pop_line()[0]) == "2"
    with pytest.raises(IndexError):
        table.insert_line(5, TableLine())


def test_to_arrow_types():
    arrow = Table.from_string("1 1.5 a\n2 3 b\n4").to_arrow()
    assert arrow.column_names == ["column_1", "column_2", "column_3"]
    assert arrow.schema.field("column_1").type == pa.int64()
    assert arrow.schema.field("column_2").type == pa.float64()
    assert arrow.schema.field("column_3").type == pa.string()
    assert arrow.column("column_3").to_pylist() == ["a", "b", None]


def test_to_arrow_huge_integers_become_float():
    arrow = Table.from_string("99999999999999999999\n1").to_arrow()
    assert arrow.schema.field("column_1").type == pa.float64()


def test_long_integers_render_everywhere():
    digits = "7" * 5000
    table = Table.from_string(f"{digits} 1\n0x{'a' * 4000} 2")
    assert table.cell(0, 0).value.type is CellType.INTEGER
    assert table[0].to_string(" ") == f"{digits} 1"
    arrow = table.to_arrow()
    assert arrow.schema.field("column_1").type == pa.string()
    assert arrow.column("column_1").to_pylist()[0] == digits
