"""
Settings shared by the input and output stages.

Holds the closed vocabularies of the selector language (axis, force type and
color letters), the parse/output modes, and the ``Settings`` object that the
command line and the configuration files both fill in.
"""
import enum
import logging
import os

from .errors import ArgError, ArgErrorKind, ErrorLevel

logger = logging.getLogger(__name__)


class Axis(enum.Enum):
    """Whether a selector addresses a line (row) or a column."""

    LINE = "l"
    COLUMN = "c"

    @property
    def label(self):
        return self.name.lower()

    @classmethod
    def from_letter(cls, letter):
        return cls(letter.lower())


class ForceType(enum.Enum):
    """Type a line or column is forced to, regardless of inference."""

    STRING = "s"
    INTEGER = "i"
    FLOAT = "f"

    @property
    def label(self):
        return self.name.capitalize()

    @classmethod
    def from_letter(cls, letter):
        return cls(letter.lower())


class Color(enum.Enum):
    """Console color of a cell. BLACK means "no escape code"."""

    BLACK = None
    RED = "r"
    GREEN = "g"
    BLUE = "b"
    YELLOW = "y"
    GREY = "x"
    WHITE = "w"

    @property
    def label(self):
        return self.name.capitalize()

    @property
    def ansi(self):
        return _ANSI_CODES[self]

    @property
    def rgb(self):
        return _RGB_CODES[self]

    @classmethod
    def from_letter(cls, letter):
        if not letter:
            raise ValueError("Color letter can't be empty")
        return cls(letter.lower())


_ANSI_CODES = {
    Color.BLACK: None,
    Color.RED: "\x1b[31m",
    Color.GREEN: "\x1b[32m",
    Color.YELLOW: "\x1b[33m",
    Color.BLUE: "\x1b[34m",
    Color.WHITE: "\x1b[37m",
    Color.GREY: "\x1b[90m",
}

# Font colors used by the spreadsheet export
_RGB_CODES = {
    Color.BLACK: "000000",
    Color.RED: "FF0000",
    Color.GREEN: "00B050",
    Color.YELLOW: "FFC000",
    Color.BLUE: "0070C0",
    Color.WHITE: "FFFFFF",
    Color.GREY: "808080",
}


class ParseMode(enum.Enum):
    """``AUTO`` infers every cell type, ``STRING`` keeps every cell as text."""

    AUTO = "a"
    STRING = "s"


class OutputFormat(enum.Enum):
    CSV = "csv"
    TXT = "txt"
    EXCEL = "xlsx"


_SUFFIXES = {
    "csv": OutputFormat.CSV,
    "txt": OutputFormat.TXT,
    "xls": OutputFormat.EXCEL,
    "xlsx": OutputFormat.EXCEL,
}


def output_format(path):
    """Infer the export format from the suffix of ``path``.

    :param path: Output file path.
    :return: The matching OutputFormat.
    :raises ArgError: FORMAT_ERROR when the suffix is not supported.
    """
    suffix = os.path.splitext(str(path))[1].lstrip(".")
    try:
        return _SUFFIXES[suffix.lower()]
    except KeyError:
        raise ArgError(ArgErrorKind.FORMAT_ERROR,
                       reason=f"has the unsupported suffix '{suffix}'.",
                       error_arg=suffix, whole_arg=str(path),
                       hint="Use one of the suffixes: csv, txt, xls, xlsx.") from None


class Settings:
    """All the knobs of one run. ``None`` means "not set here".

    Attributes:
        input (str): Input file, stdin when None
        separation (str): Field separator, may be several characters
        end_line (str): Line terminator
        parse_mode (ParseMode): Auto inference or everything as text
        force_parse (Selection): Lines or columns with a forced type
        subtable (Selection): Lines and columns to keep
        output (str): Output file, console when None
        colors (Selection): Console colors by line and column
        show_level (ErrorLevel): Lowest severity of diagnostics to print
    """

    FIELDS = ("input", "separation", "end_line", "parse_mode", "force_parse",
              "subtable", "output", "colors", "show_level")

    DEFAULTS = {
        "separation": " ",
        "end_line": "\n",
        "parse_mode": ParseMode.AUTO,
        "show_level": ErrorLevel.WARNING,
    }

    def __init__(self, **values):
        unknown = set(values) - set(self.FIELDS)
        if unknown:
            raise TypeError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        for field in self.FIELDS:
            setattr(self, field, values.get(field))

    def merge(self, override):
        """Return new settings where every value set in ``override`` wins."""
        merged = Settings(**self.as_dict())
        for field in self.FIELDS:
            value = getattr(override, field)
            if value is not None:
                merged_from = getattr(merged, field)
                if merged_from is not None and merged_from != value:
                    logger.debug("Setting '%s' overridden: %r -> %r", field, merged_from, value)
                setattr(merged, field, value)
        return merged

    def with_defaults(self):
        resolved = Settings(**self.as_dict())
        for field, default in self.DEFAULTS.items():
            if getattr(resolved, field) is None:
                setattr(resolved, field, default)
        return resolved

    @property
    def output_format(self):
        if self.output is None:
            return None
        return output_format(self.output)

    def as_dict(self):
        return {field: getattr(self, field) for field in self.FIELDS}

    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        set_values = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items() if v is not None)
        return f"Settings({set_values})"
