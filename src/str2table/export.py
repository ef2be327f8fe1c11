# export.py
# Renders a Table to the console (boxed, ANSI colored), or writes it to a
# txt, csv or spreadsheet file. The file format is chosen from the suffix of
# the output path.

import logging
import math
import sys

import pyarrow as pa
import pyarrow.csv as pa_csv
from openpyxl import Workbook
from openpyxl.styles import Font

from .cell import CellType
from .settings import OutputFormat, output_format

logger = logging.getLogger(__name__)

BORDER_COLOR = "\x1b[90m"
RESET = "\x1b[0m"

# Largest integer a spreadsheet stores without losing digits
_EXCEL_MAX_EXACT_INT = 2 ** 53


def _column_widths(table, debug=False):
    widths = [0] * table.width
    for line in table:
        for i, table_cell in enumerate(line):
            widths[i] = max(widths[i], table_cell.width(debug))
    return widths


def render_console(table, debug=False):
    """Draw the table as a grid with grey borders, left aligned.

    :param table: Table to draw.
    :param debug: Show every cell as ``value<type>``.
    :return: The drawing, one text line per row plus border lines.
    """
    widths = _column_widths(table, debug)
    border = BORDER_COLOR + "".join("+" + "-" * (w + 2) for w in widths) + "+" + RESET
    bar = f"{BORDER_COLOR}|{RESET}"
    rows = [border]
    for line in table:
        row = bar
        for i, width in enumerate(widths):
            table_cell = line.get_cell(i)
            if table_cell is None:
                row += " " * (width + 2) + bar
            else:
                padding = " " * (width - table_cell.width(debug))
                row += f" {table_cell.render(debug)}{padding} {bar}"
        rows.append(row)
        rows.append(border)
    return "\n".join(rows)


def to_console(table, debug=False, file=None):
    print(render_console(table, debug), file=file or sys.stdout)


def to_txt(table, path, separation=" "):
    """Write the plain values, one line per table line, fields joined by ``separation``."""
    with open(path, "w", encoding="utf-8") as handle:
        for line in table:
            handle.write(line.to_string(separation) + "\n")
    logger.debug("Wrote %d line(s) to %s", len(table), path)


def to_csv(table, path):
    """Write rendered values as CSV without a header; short lines are padded."""
    width = table.width
    columns = []
    for column in range(width):
        values = []
        for line in table:
            table_cell = line.get_cell(column)
            values.append(str(table_cell) if table_cell is not None else None)
        columns.append(pa.array(values, type=pa.string()))
    arrow_table = pa.Table.from_arrays(columns, names=[f"column_{i + 1}" for i in range(width)])
    pa_csv.write_csv(arrow_table, str(path), write_options=pa_csv.WriteOptions(include_header=False))
    logger.debug("Wrote %d line(s) to %s", len(table), path)


def _excel_value(value):
    if value.type is CellType.INTEGER:
        if abs(value.value) <= _EXCEL_MAX_EXACT_INT:
            return value.value
        return str(value)
    if value.type is CellType.FLOAT:
        # Spreadsheets have no inf / NaN
        return value.value if math.isfinite(value.value) else str(value)
    return value.value


def to_excel(table, path):
    """Write a spreadsheet; numbers stay numbers, cell colors become font colors."""
    workbook = Workbook()
    sheet = workbook.active
    for row, line in enumerate(table, start=1):
        for column, table_cell in enumerate(line, start=1):
            target = sheet.cell(row=row, column=column, value=_excel_value(table_cell.value))
            if table_cell.color.ansi is not None:
                target.font = Font(color=table_cell.color.rgb)
    workbook.save(str(path))
    logger.debug("Wrote %d line(s) to %s", len(table), path)


def export(table, path, separation=" "):
    """Write ``table`` to ``path`` in the format implied by its suffix."""
    fmt = output_format(path)
    if fmt is OutputFormat.CSV:
        to_csv(table, path)
    elif fmt is OutputFormat.TXT:
        to_txt(table, path, separation)
    else:
        to_excel(table, path)
    return fmt
