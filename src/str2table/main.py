import logging

from . import export
from .read import read_input
from .table import Table

logger = logging.getLogger(__name__)


def run_table(settings, out=None, debug=False):
    """Read, parse, select, color and write one table.

    Args:
        settings (Settings): Merged settings; unset values take their defaults
        out (file): Console stream, stdout when None
        debug (bool): Show cell types on the console

    Returns:
        Table: The table that was written
    """
    settings = settings.with_defaults()
    # Fail on a bad output suffix before reading any input
    fmt = settings.output_format

    text = read_input(settings.input)
    table = Table.from_string(text, settings.separation, settings.end_line,
                              settings.parse_mode, settings.force_parse)
    if settings.subtable:
        table = table.subtable(settings.subtable)
        logger.debug("Subtable has %d line(s)", len(table))

    if fmt is not None:
        if settings.colors:
            logger.debug("Colors only apply to console output, ignoring them for %s", settings.output)
        export.export(table, settings.output, settings.separation)
        return table

    if settings.colors:
        table.apply_colors(settings.colors)
    export.to_console(table, debug=debug, file=out)
    return table
