"""
TOML configuration files.

A file holds one table per configuration name::

    [conf_name]
    input = "input.txt"
    separation = "#"
    is_auto = true
    force_parse.line = [[1, 1, 's'], [2, 4, 'i']]
    export = "output.csv"
    export_color.column = [[1, 1, 'r'], [2, 2, 'g']]
    export_subtable.line = [1, 3]
    show_level = "error"
    configuration = [".", "base"]

Array entries are turned back into selector tokens (``[2, 4, 'i']`` on lines is
``2-4li``) so a configuration file is checked by the same grammar as the
command line.
"""
import logging
import os
import tomllib

from .core import parse_export_color, parse_force_parse, parse_subtable
from .errors import ConfigError, ErrorLevel
from .settings import ParseMode, Settings, output_format

logger = logging.getLogger(__name__)

SAME_FILE = "."

KNOWN_KEYS = {"input", "separation", "seperation", "end_line", "is_auto", "force_parse",
              "export", "export_color", "export_subtable", "show_level", "configuration"}


def _expect(value, kind, key, path):
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"Wrong value for '{key}' in {path}.",
                          reason=f"Expected {kind.__name__}, got {value!r}.",
                          hint="Please check the configuration file.",
                          error_arg=key, whole_arg=str(path))
    return value


def _axes(section, key, path):
    """The ``line`` / ``column`` arrays of a dotted key such as ``force_parse``."""
    table = _expect(section.get(key, {}), dict, key, path)
    unknown = set(table) - {"line", "column"}
    if unknown:
        raise ConfigError(f"Unknown key(s) under '{key}' in {path}.",
                          reason=f"Only 'line' and 'column' are allowed, got {sorted(unknown)}.",
                          error_arg=key, whole_arg=str(path))
    for axis_name, letter in (("line", "l"), ("column", "c")):
        entries = _expect(table.get(axis_name, []), list, f"{key}.{axis_name}", path)
        yield f"{key}.{axis_name}", letter, entries


def _range_tokens(section, key, path, attribute_first):
    """``[start, end, letter]`` entries -> ``start-end`` tokens with axis and attribute letters."""
    tokens = []
    for full_key, axis, entries in _axes(section, key, path):
        for entry in entries:
            _expect(entry, list, full_key, path)
            if len(entry) != 3:
                raise ConfigError(f"Wrong entry in '{full_key}' in {path}.",
                                  reason=f"Expected [start, end, letter], got {entry!r}.",
                                  error_arg=full_key, whole_arg=str(path))
            start = _expect(entry[0], int, full_key, path)
            end = _expect(entry[1], int, full_key, path)
            letter = _expect(entry[2], str, full_key, path)
            suffix = letter + axis if attribute_first else axis + letter
            tokens.append(f"{start}-{end}{suffix}")
    return ",".join(tokens)


def _index_tokens(section, key, path):
    tokens = []
    for full_key, axis, entries in _axes(section, key, path):
        tokens.extend(f"{_expect(index, int, full_key, path)}{axis}" for index in entries)
    return ",".join(tokens)


def _read_file(path):
    try:
        with open(path, 'rb') as file:
            return tomllib.load(file)
    except OSError as e:
        raise ConfigError(f"Can't read the configuration file {path}.", level=ErrorLevel.FATAL,
                          reason=str(e), hint="Please check the path of the configuration file.",
                          error_arg=str(path)) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"The configuration file {path} is not valid TOML.",
                          reason=str(e), hint="Please check the syntax of the configuration file.",
                          error_arg=str(path)) from e


def settings_from_section(section, path="<config>"):
    """Build Settings from one already decoded configuration table.

    :param section: Mapping of one ``[conf_name]`` table.
    :param path: File name used in diagnostics.
    :return: Settings; keys that are absent stay None.
    :raises ConfigError: On a value of the wrong type.
    :raises Str2TableError: On a selector entry the grammar rejects.
    """
    unknown = set(section) - KNOWN_KEYS
    if unknown:
        logger.warning("Ignoring unknown configuration key(s) in %s: %s",
                       path, ", ".join(sorted(unknown)))

    values = {}
    if "input" in section:
        values["input"] = _expect(section["input"], str, "input", path)
    for key in ("seperation", "separation"):
        if key in section:
            values["separation"] = _expect(section[key], str, key, path)
    if "end_line" in section:
        values["end_line"] = _expect(section["end_line"], str, "end_line", path)
    if "is_auto" in section:
        is_auto = _expect(section["is_auto"], bool, "is_auto", path)
        values["parse_mode"] = ParseMode.AUTO if is_auto else ParseMode.STRING
    if "export" in section:
        values["output"] = _expect(section["export"], str, "export", path)
        output_format(values["output"])
    if "show_level" in section:
        level = _expect(section["show_level"], str, "show_level", path)
        try:
            values["show_level"] = ErrorLevel.from_name(level)
        except ValueError as e:
            raise ConfigError(f"Wrong value for 'show_level' in {path}.", reason=str(e),
                              hint="Use one of: warning, error, fatal.",
                              error_arg="show_level", whole_arg=str(path)) from e

    expression = _range_tokens(section, "force_parse", path, attribute_first=False)
    if expression:
        values["force_parse"] = parse_force_parse(expression)
    expression = _range_tokens(section, "export_color", path, attribute_first=True)
    if expression:
        values["colors"] = parse_export_color(expression)
    expression = _index_tokens(section, "export_subtable", path)
    if expression:
        values["subtable"] = parse_subtable(expression)
    return Settings(**values)


def load_config(path, name, _seen=None):
    """Load the configuration ``name`` from the TOML file ``path``.

    A ``configuration = [file, name]`` key inherits another configuration;
    ``"."`` names the same file, other relative paths are taken relative to
    the including file. Values of the including configuration win.

    Args:
        path (str): TOML file
        name (str): Configuration table inside the file

    Returns:
        Settings: Values found in the file, None for everything else

    Raises:
        ConfigError: Missing file (FATAL), bad TOML, missing table, wrong
            value types or an inheritance cycle
    """
    path = os.path.abspath(path)
    seen = set(_seen or ())
    if (path, name) in seen:
        raise ConfigError("The configuration inherits from itself.",
                          reason=f"'{name}' in {path} is part of an inheritance cycle.",
                          hint="Please remove one of the 'configuration' keys.",
                          error_arg=name, whole_arg=path)
    seen.add((path, name))

    document = _read_file(path)
    section = document.get(name)
    if not isinstance(section, dict):
        raise ConfigError(f"Configuration '{name}' not found in {path}.",
                          reason=f"Available configurations: {sorted(document)}.",
                          hint="Please check the configuration name.",
                          error_arg=name, whole_arg=path)

    settings = settings_from_section(section, path)
    logger.debug("Loaded configuration '%s' from %s: %r", name, path, settings)

    if "configuration" not in section:
        return settings
    parent = _expect(section["configuration"], list, "configuration", path)
    if len(parent) != 2 or not all(isinstance(p, str) for p in parent):
        raise ConfigError(f"Wrong value for 'configuration' in {path}.",
                          reason=f"Expected [path, name], got {parent!r}.",
                          error_arg="configuration", whole_arg=path)
    parent_path, parent_name = parent
    if parent_path == SAME_FILE:
        parent_path = path
    else:
        parent_path = os.path.join(os.path.dirname(path), parent_path)
    base = load_config(parent_path, parent_name, seen)
    logger.debug("Configuration '%s' inherits '%s' from %s", name, parent_name, parent_path)
    return base.merge(settings)
