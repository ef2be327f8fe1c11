"""
str2table

Turns delimited text into a typed table: every cell is inferred as an
integer, a float or a string, and a small selector language picks lines and
columns to force types on, to keep, or to color.
"""

from .cell import CellType, CellValue
from .config import load_config
from .core import parse_export_color, parse_force_parse, parse_subtable
from .errors import ErrorLevel, Str2TableError
from .main import run_table
from .settings import Settings
from .table import Table

__version__ = "0.1.0"
__all__ = [
    "CellType", "CellValue", "load_config", "parse_export_color", "parse_force_parse",
    "parse_subtable", "ErrorLevel", "Str2TableError", "run_table", "Settings", "Table",
]
