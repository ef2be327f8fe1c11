import sys
import argparse
import logging

from .config import load_config
from .core import parse_export_color, parse_force_parse, parse_subtable
from .errors import ErrorLevel, Str2TableError
from .main import run_table
from .settings import ParseMode, Settings, output_format


def build_parser():
    parser = argparse.ArgumentParser(
        prog='str2table',
        description='Turn delimited text into a typed table and print or export it')
    parser.add_argument('-i', '--input', help='Input file, stdin when omitted')
    parser.add_argument('-s', '--separation', help="Field separator, may be several characters (default ' ')")
    parser.add_argument('-e', '--end-line', dest='end_line', help='Line terminator (default newline)')
    parser.add_argument('-p', '--parse-mode', dest='parse_mode', choices=['a', 's'],
                        help="'a' infers cell types (default), 's' keeps every cell as text")
    parser.add_argument('-f', '--force-parse', dest='force_parse', metavar='FORCE_PARSE',
                        help="Force types of lines or columns, e.g. '1-2li,4lf'")
    parser.add_argument('-S', '--subtable', metavar='SUBTABLE',
                        help="Keep only these lines and columns, e.g. '1-3l,2-4c'")
    target = parser.add_mutually_exclusive_group()
    target.add_argument('-o', '--output', help='Export to a csv, txt, xls or xlsx file')
    target.add_argument('-C', '--colors', metavar='COLORS',
                        help="Console colors by line or column, e.g. '1rl,2-4yc'")
    parser.add_argument('-c', '--config', nargs=2, metavar=('FILE', 'NAME'),
                        help='Read settings from the configuration NAME in the TOML FILE')
    parser.add_argument('--show-level', dest='show_level', choices=['warning', 'error', 'fatal'],
                        help='Lowest severity of diagnostics to print (default warning)')
    parser.add_argument('--debug', action='store_true', help='Show the type of every cell')
    parser.add_argument('--verbose', action='store_true', help='Log what the program does')
    return parser


def settings_from_args(args):
    """Settings given on the command line; options not given stay None."""
    values = {
        'input': args.input,
        'separation': args.separation,
        'end_line': args.end_line,
        'output': args.output,
    }
    if args.parse_mode is not None:
        values['parse_mode'] = ParseMode(args.parse_mode)
    if args.force_parse is not None:
        values['force_parse'] = parse_force_parse(args.force_parse)
    if args.subtable is not None:
        values['subtable'] = parse_subtable(args.subtable)
    if args.colors is not None:
        values['colors'] = parse_export_color(args.colors)
    if args.show_level is not None:
        values['show_level'] = ErrorLevel.from_name(args.show_level)
    if args.output is not None:
        output_format(args.output)
    return Settings(**values)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    show_level = ErrorLevel.from_name(args.show_level) if args.show_level else ErrorLevel.WARNING
    try:
        settings = settings_from_args(args)
        if args.config:
            settings = load_config(*args.config).merge(settings)
            if settings.show_level is not None:
                show_level = settings.show_level
        run_table(settings, debug=args.debug)
    except Str2TableError as e:
        message = e.message(show_level)
        if message:
            print(message, file=sys.stderr)
        if e.level >= ErrorLevel.ERROR:
            sys.exit(1)
    return 0


if __name__ == "__main__":
    main()
