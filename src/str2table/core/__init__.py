from .token import SelectorToken, split_tokens
from .grammar import Category, Grammar, FORCE_PARSE, SUBTABLE, EXPORT_COLOR
from .selector import (
    IndexAttribute, Selection, parse_selection,
    parse_force_parse, parse_subtable, parse_export_color
)

__all__ = [
    'SelectorToken', 'split_tokens',
    'Category', 'Grammar', 'FORCE_PARSE', 'SUBTABLE', 'EXPORT_COLOR',
    'IndexAttribute', 'Selection', 'parse_selection',
    'parse_force_parse', 'parse_subtable', 'parse_export_color'
]
