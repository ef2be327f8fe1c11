"""
Table model: a Table holds TableLines, a TableLine holds TableCells, a
TableCell holds one CellValue plus its console color.

Selector indices are 1-based (``1l`` is the first line); Python level
accessors such as ``Table.cell`` use ordinary 0-based indices.
"""
import logging

import pyarrow as pa

from . import cell as cells
from .cell import CellType
from .settings import Axis, Color, ParseMode

logger = logging.getLogger(__name__)

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


class TableCell:
    """One cell: an immutable CellValue and a mutable color."""

    def __init__(self, value, color=Color.BLACK):
        self.value = value
        self.color = color

    @classmethod
    def from_text(cls, text, force_type=None):
        return cls(cells.convert(text, force_type))

    @classmethod
    def as_string(cls, text):
        return cls(cells.force_as_string(text))

    def width(self, debug=False):
        """Printed width without color escape codes."""
        return len(repr(self.value) if debug else str(self.value))

    def render(self, debug=False):
        text = repr(self.value) if debug else str(self.value)
        if self.color.ansi is None:
            return text
        return f"{self.color.ansi}{text}\x1b[0m"

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return f"{self.value!r}<{self.color.label}>"

    def __eq__(self, other):
        if not isinstance(other, TableCell):
            return NotImplemented
        return self.value == other.value and self.color is other.color


class TableLine:
    """A line of cells. Cells are read from one line of text."""

    def __init__(self, table_cells=None):
        self.cells = list(table_cells or [])

    @staticmethod
    def split_fields(text, separation):
        """Trim the line and every field, drop empty fields."""
        fields = (field.strip() for field in text.strip().split(separation))
        return [field for field in fields if field]

    @classmethod
    def from_string(cls, text, separation, force_type=None, column_types=None):
        """Parse one line of text.

        :param text: Line without line terminator.
        :param separation: Field separator.
        :param force_type: ForceType for every cell of this line, or None.
        :param column_types: Mapping 1-based column index -> ForceType.
        :return: TableLine.
        """
        column_types = column_types or {}
        line = cls()
        for number, field in enumerate(cls.split_fields(text, separation), start=1):
            line.push_cell(TableCell.from_text(field, force_type or column_types.get(number)))
        return line

    @classmethod
    def from_string_force(cls, text, separation):
        return cls([TableCell.as_string(f) for f in cls.split_fields(text, separation)])

    def push_cell(self, table_cell):
        self.cells.append(table_cell)

    def pop_cell(self):
        return self.cells.pop() if self.cells else None

    def insert_cell(self, index, table_cell):
        if index > len(self.cells):
            raise IndexError(f"Cell index {index} out of range")
        self.cells.insert(index, table_cell)

    def remove_cell(self, index):
        if index >= len(self.cells):
            raise IndexError(f"Cell index {index} out of range")
        return self.cells.pop(index)

    def get_cell(self, index):
        if 0 <= index < len(self.cells):
            return self.cells[index]
        return None

    def to_string(self, separation):
        """Plain text of the line, fields joined by ``separation``."""
        return separation.join(str(c) for c in self.cells)

    def __len__(self):
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __getitem__(self, index):
        return self.cells[index]

    def __eq__(self, other):
        if not isinstance(other, TableLine):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self):
        return f"TableLine({self.cells!r})"


class Table:
    """A list of TableLines; lines may have different lengths."""

    def __init__(self, lines=None):
        self.lines = list(lines or [])

    @staticmethod
    def split_lines(text, end_line="\n"):
        # A custom terminator makes physical line breaks meaningless
        if "\n" not in end_line:
            text = text.replace("\r", "").replace("\n", "")
        return text.split(end_line)

    @classmethod
    def from_string(cls, text, separation=" ", end_line="\n", parse_mode=ParseMode.AUTO,
                    force_parse=None):
        """Parse delimited text into a Table.

        Args:
            text (str): The whole input
            separation (str): Field separator, may be several characters
            end_line (str): Line terminator
            parse_mode (ParseMode): AUTO infers types, STRING keeps text
            force_parse (Selection): Optional forced types for 1-based lines or columns

        Returns:
            Table: Empty lines are dropped
        """
        raw_lines = [line for line in cls.split_lines(text, end_line)
                     if TableLine.split_fields(line, separation)]
        if parse_mode is ParseMode.STRING:
            return cls([TableLine.from_string_force(line, separation) for line in raw_lines])

        line_types, column_types = {}, {}
        if force_parse:
            line_types = force_parse.attributes(Axis.LINE)
            column_types = force_parse.attributes(Axis.COLUMN)
        lines = [TableLine.from_string(line, separation, line_types.get(number), column_types)
                 for number, line in enumerate(raw_lines, start=1)]
        logger.debug("Parsed table with %d line(s)", len(lines))
        return cls(lines)

    def push_line(self, line):
        self.lines.append(line)

    def pop_line(self):
        return self.lines.pop() if self.lines else None

    def insert_line(self, index, line):
        if index > len(self.lines):
            raise IndexError(f"Line index {index} out of range")
        self.lines.insert(index, line)

    def remove_line(self, index):
        if index >= len(self.lines):
            raise IndexError(f"Line index {index} out of range")
        return self.lines.pop(index)

    def get_line(self, index):
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def cell(self, row, column):
        line = self.get_line(row)
        return line.get_cell(column) if line is not None else None

    @property
    def width(self):
        """Length of the longest line."""
        return max((len(line) for line in self.lines), default=0)

    def subtable(self, selection):
        """Cells at the crossing of the selected lines and columns.

        An axis with nothing selected keeps all of its lines or columns.
        Indices that do not exist are ignored.
        """
        line_numbers = selection.line_indices or range(1, len(self.lines) + 1)
        column_numbers = selection.column_indices or range(1, self.width + 1)
        table = Table()
        for number in line_numbers:
            line = self.get_line(number - 1)
            if line is None:
                continue
            picked = (line.get_cell(c - 1) for c in column_numbers)
            table.push_line(TableLine([c for c in picked if c is not None]))
        return table

    def set_color_line(self, number, color):
        line = self.get_line(number - 1)
        if line is None:
            return
        for table_cell in line:
            table_cell.color = color

    def set_color_column(self, number, color):
        for line in self.lines:
            table_cell = line.get_cell(number - 1)
            if table_cell is not None:
                table_cell.color = color

    def apply_colors(self, selection):
        """Color columns, then lines, so a line color wins where both apply."""
        for number, color in selection.columns:
            self.set_color_column(number, color)
        for number, color in selection.lines:
            self.set_color_line(number, color)

    def to_arrow(self):
        """Convert to a pyarrow Table with one typed column per table column.

        A column is int64 when every cell is an Integer that fits, float64 when
        every cell is numeric, otherwise string. Short lines give nulls.
        """
        arrays, names = [], []
        for column in range(self.width):
            column_cells = [line.get_cell(column) for line in self.lines]
            arrays.append(_column_array(column_cells))
            names.append(f"column_{column + 1}")
        return pa.Table.from_arrays(arrays, names=names)

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def __getitem__(self, index):
        return self.lines[index]

    def __eq__(self, other):
        if not isinstance(other, Table):
            return NotImplemented
        return self.lines == other.lines

    def __repr__(self):
        return f"Table({len(self.lines)} lines)"


def _fits_double(value):
    if value.type is CellType.FLOAT:
        return True
    return value.type is CellType.INTEGER and abs(value.value) < 2 ** 1023


def _column_array(column_cells):
    values = [c.value for c in column_cells if c is not None]
    if values and all(v.type is CellType.INTEGER and _INT64_MIN <= v.value <= _INT64_MAX
                      for v in values):
        return pa.array([c.value.value if c is not None else None for c in column_cells],
                        type=pa.int64())
    if values and all(_fits_double(v) for v in values):
        return pa.array([float(c.value.value) if c is not None else None for c in column_cells],
                        type=pa.float64())
    return pa.array([str(c) if c is not None else None for c in column_cells], type=pa.string())
