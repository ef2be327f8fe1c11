"""
Diagnostic types for str2table.

Every failure the selector parser, the cell conversions and the configuration
loader can report is one of the exceptions below. Each carries a severity, a
short description and optional reason / attempt / hint texts, and knows how to
render itself for a given visibility threshold.
"""
import enum


class ErrorLevel(enum.IntEnum):
    """Severity of a diagnostic, ordered WARNING < ERROR < FATAL."""

    WARNING = 0  # can be ignored or fixed automatically
    ERROR = 1    # can be fixed by the user, e.g. by calling again with other arguments
    FATAL = 2    # unrecoverable, e.g. a missing file

    def tag(self):
        return f"[{self.name.capitalize()}]"

    @classmethod
    def from_name(cls, name):
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown error level: '{name}'") from None


class Str2TableError(ValueError):
    """Base class of all diagnostics.

    Args:
        description (str): General description of the error
        level (ErrorLevel): Severity
        reason (str): Specific cause, if known
        attempt (str): What the program already tried in order to recover
        hint (str): How the user may fix it
        error_arg (str): The offending fragment
        whole_arg (str): The whole expression the fragment belongs to
        span (tuple): Byte offsets ``(start, end)`` of the fragment in ``whole_arg``
    """

    name = "Str2TableError"

    def __init__(self, description, level=ErrorLevel.ERROR, reason=None, attempt=None,
                 hint=None, error_arg=None, whole_arg=None, span=None):
        super().__init__(description)
        self.description = description
        self.level = ErrorLevel(level)
        self._reason = reason
        self._attempt = attempt
        self.hint = hint
        self.error_arg = error_arg
        self.whole_arg = whole_arg
        self.span = span

    def describe(self):
        return self.description

    @property
    def reason(self):
        return self._reason

    @property
    def attempt(self):
        return self._attempt

    def message(self, showing_level=ErrorLevel.WARNING):
        """Render the diagnostic, or return "" when it is below ``showing_level``."""
        if self.level < showing_level:
            return ""
        message = f"{self.level.tag()} {self.describe()}"
        if self.attempt:
            message += ("\nProgram has tried this(these) attempt to fix this error:"
                        f"\n\t {self.attempt}")
        if self.hint:
            message += f"\nYou may try the following method(s) to fix this:\n\t {self.hint}"
        if self.reason:
            message += f"\nThis error is caused by the following reason(s):\n {self.reason}"
        return message

    def __str__(self):
        return self.message(ErrorLevel.WARNING)

    def __repr__(self):
        return f"{type(self).__name__}({self.description!r}, level={self.level.name})"


class ArgErrorKind(enum.Enum):
    NO_IMPLEMENTATION = "NoImplementation"
    WRONG_FORMAT = "WrongFormat"
    CONFLICTS = "Conflicts"
    FORMAT_ERROR = "FormatError"


# kind -> (description, default hint, default level)
_ARG_ERROR_TABLE = {
    ArgErrorKind.NO_IMPLEMENTATION: (
        "This argument is not implemented fully.",
        "Please wait for the next version.",
        ErrorLevel.WARNING),
    ArgErrorKind.WRONG_FORMAT: (
        "The format of this argument is wrong.",
        "Please check the format of this argument.",
        ErrorLevel.ERROR),
    ArgErrorKind.CONFLICTS: (
        "This argument causes conflict(s).",
        "Please check the reason.",
        ErrorLevel.ERROR),
    ArgErrorKind.FORMAT_ERROR: (
        "This file format is unsupported.",
        "Please check the format of the file.",
        ErrorLevel.ERROR),
}


class ArgError(Str2TableError):
    """An error in a command line argument or configuration value."""

    name = "ArgError"

    def __init__(self, kind, reason=None, error_arg=None, whole_arg=None, span=None, hint=None):
        description, default_hint, level = _ARG_ERROR_TABLE[kind]
        super().__init__(description, level=level, reason=reason, hint=hint or default_hint,
                         error_arg=error_arg, whole_arg=whole_arg, span=span)
        self.kind = kind

    @property
    def reason(self):
        if self._reason is None:
            return None
        if self.whole_arg is None:
            return self._reason
        reason = f"Error happens in \"{self.whole_arg}\", where"
        if self.error_arg is not None:
            reason += f" \"{self.error_arg}\""
        return f"{reason} {self._reason}"


class ConflictsError(Str2TableError):
    """Two parts of one argument contradict each other."""

    name = "ConflictsError"

    def __init__(self, level=ErrorLevel.ERROR, error_arg=None, whole_arg=None, span=None,
                 conflicts=None):
        if error_arg is not None and conflicts:
            reason = f"In \"{error_arg}\", {conflicts} conflict with each other."
        elif conflicts:
            reason = f"{conflicts} conflict with each other."
        elif error_arg is not None:
            reason = f"\"{error_arg}\" has conflicts in it."
        else:
            reason = None
        super().__init__("This argument causes conflict(s).", level=level, reason=reason,
                         hint="Please check the conflict(s) and try again.",
                         error_arg=error_arg, whole_arg=whole_arg, span=span)
        self.conflicts = list(conflicts or [])


class KeywordMissing(Str2TableError):
    """A required keyword letter (axis, type or color) is absent or unknown."""

    name = "KeywordError"

    def __init__(self, keyword, error_arg=None, whole_arg=None, span=None):
        reason = None
        if error_arg is not None:
            reason = f"In \"{whole_arg}\", \"{error_arg}\" is where {keyword} is expected."
        super().__init__(f"{keyword} is missing or wrong.", level=ErrorLevel.ERROR,
                         reason=reason, hint="Please check the keyword and try again.",
                         error_arg=error_arg, whole_arg=whole_arg, span=span)
        self.keyword = keyword


class RangeErrorKind(enum.Enum):
    OUT_OF_RANGE = "the value is out of the range."
    LEFT_SIDE = "the left side of the range is missing or not a number."
    RIGHT_SIDE = "the right side of the range is missing or not a number."
    BOTH_SIDES = "both sides of the range are missing or not a number."
    SINGLE_NUMBER = "the single number is missing or not a number."


class RangeError(Str2TableError):
    """A number or a range bound inside a selector is malformed."""

    name = "RangeError"

    def __init__(self, kind, error_value=None, whole_value=None, span=None):
        super().__init__("The number or range is invalid.", level=ErrorLevel.ERROR,
                         reason=kind.value, hint="Please check the range again.",
                         error_arg=error_value, whole_arg=whole_value, span=span)
        self.kind = kind

    @property
    def reason(self):
        if self.error_arg is None:
            return self._reason
        return f"Error happens in \"{self.error_arg}\", where {self._reason}"


class CellParseError(Str2TableError):
    """Raised by the strict forced conversions when a literal has the wrong type."""

    name = "CellParseError"

    def __init__(self, text, target, reason=None):
        super().__init__(f"\"{text}\" can't be parsed as {target}.", level=ErrorLevel.ERROR,
                         reason=reason, hint=f"Use a valid {target} literal or let the type be inferred.",
                         error_arg=text)
        self.target = target


class ConfigError(Str2TableError):
    """A configuration file is missing, unreadable or malformed."""

    name = "ConfigError"


class InputError(Str2TableError):
    """The input text can't be read."""

    name = "InputError"

    def __init__(self, source, reason=None):
        super().__init__(f"Can't read the input from {source}.", level=ErrorLevel.FATAL,
                         reason=reason, hint="Please check that the file exists and is readable.",
                         error_arg=source)
