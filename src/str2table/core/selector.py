"""
Selector expressions: ``1-3l,2-4c,5l`` (subtable), ``1-2li,4lf`` (force parse),
``1rl,3gl,2-4yc`` (export color).

The aggregator walks the comma separated tokens left to right, classifies each
one with its grammar, expands ranges into single indices and routes them into a
line bucket or a column bucket. The first malformed token aborts the whole
expression; there are no partial results.
"""
import logging
from collections import namedtuple

from ..errors import (ArgError, ArgErrorKind, ConflictsError, KeywordMissing, RangeError,
                      RangeErrorKind)
from ..settings import Axis
from .grammar import EXPORT_COLOR, FORCE_PARSE, SUBTABLE, Category, WELL_FORMED
from .token import split_tokens

logger = logging.getLogger(__name__)

IndexAttribute = namedtuple("IndexAttribute", ["index", "attribute"])

_RANGE_ERRORS = {
    Category.LEFT_BAD: RangeErrorKind.LEFT_SIDE,
    Category.RIGHT_BAD: RangeErrorKind.RIGHT_SIDE,
    Category.BOTH_BAD: RangeErrorKind.BOTH_SIDES,
    Category.SINGLE_BAD: RangeErrorKind.SINGLE_NUMBER,
}

AXIS_KEYWORD = "line or column ('l' or 'c')"


class Selection:
    """Result of a selector expression: index/attribute pairs per axis.

    Both sequences are sorted by index and hold every index at most once.
    ``axis`` is set for grammars where one axis is shared by the whole
    expression (force parse).
    """

    def __init__(self, lines=(), columns=(), axis=None):
        self.lines = tuple(IndexAttribute(*pair) for pair in lines)
        self.columns = tuple(IndexAttribute(*pair) for pair in columns)
        self.axis = axis

    def pairs(self, axis):
        return self.lines if axis is Axis.LINE else self.columns

    @property
    def line_indices(self):
        return [pair.index for pair in self.lines]

    @property
    def column_indices(self):
        return [pair.index for pair in self.columns]

    def attributes(self, axis):
        """Mapping index -> attribute for one axis."""
        return {pair.index: pair.attribute for pair in self.pairs(axis)}

    def __bool__(self):
        return bool(self.lines or self.columns)

    def __eq__(self, other):
        if not isinstance(other, Selection):
            return NotImplemented
        return (self.lines, self.columns, self.axis) == (other.lines, other.columns, other.axis)

    def __repr__(self):
        axis = f", axis={self.axis.name}" if self.axis else ""
        return f"Selection(lines={list(self.lines)}, columns={list(self.columns)}{axis})"


def _diagnose(category, token, expression, grammar):
    """Build the diagnostic for a malformed token."""
    if category is None:
        return ArgError(ArgErrorKind.WRONG_FORMAT, reason="has more than one error in it.",
                        error_arg=token.text, whole_arg=expression, span=token.span)
    if category in _RANGE_ERRORS:
        return RangeError(_RANGE_ERRORS[category], error_value=token.text,
                          whole_value=expression, span=token.span)
    keyword = AXIS_KEYWORD if category == Category.AXIS_MISSING else grammar.attribute_keyword
    return KeywordMissing(keyword, error_arg=token.text, whole_arg=expression, span=token.span)


def _attribute_label(attribute):
    return "selected" if attribute is None else attribute.label


def _normalize(pairs, axis, expression):
    """Sort by index, drop exact duplicates, reject one index bound to two attributes.

    The sort is stable, so the lowest conflicting index is reported with its
    attributes in expression order.
    """
    seen = {}
    for index, attribute in sorted(pairs, key=lambda pair: pair.index):
        if index not in seen:
            seen[index] = attribute
        elif seen[index] != attribute:
            conflicts = [f"{axis.label} {index}: {_attribute_label(seen[index])}",
                         f"{axis.label} {index}: {_attribute_label(attribute)}"]
            raise ConflictsError(whole_arg=expression, conflicts=conflicts,
                                 span=(0, len(expression.encode("utf-8"))))
    return [IndexAttribute(index, seen[index]) for index in sorted(seen)]


def parse_selection(expression, grammar):
    """Parse ``expression`` with ``grammar`` into a Selection.

    :param expression: The whole comma separated selector text.
    :param grammar: One of FORCE_PARSE, SUBTABLE or EXPORT_COLOR.
    :return: Selection with sorted, unique indices per axis.
    :raises Str2TableError: The diagnostic of the first malformed token, or a
        ConflictsError / KeywordMissing found while aggregating.
    """
    buckets = {Axis.LINE: [], Axis.COLUMN: []}
    bound_axis = None
    for token in split_tokens(expression, strip=grammar.strip):
        category = grammar.classify(token.text)
        if category not in WELL_FORMED:
            raise _diagnose(category, token, expression, grammar)
        extracted = grammar.extract(token.text)

        if bound_axis is None:
            bound_axis = extracted.axis
        elif grammar.shared_axis and extracted.axis is not bound_axis:
            raise ConflictsError(error_arg=token.text, whole_arg=expression, span=token.span,
                                 conflicts=[bound_axis.label, extracted.axis.label])

        # Inverted ranges such as 3-2l are accepted and cover the same indices as 2-3l
        low, high = sorted((extracted.start, extracted.end))
        buckets[extracted.axis].extend(
            IndexAttribute(index, extracted.attribute) for index in range(low, high + 1))

    if bound_axis is None:
        raise KeywordMissing(AXIS_KEYWORD, whole_arg=expression,
                             span=(0, len(expression.encode("utf-8"))))

    lines = _normalize(buckets[Axis.LINE], Axis.LINE, expression)
    columns = _normalize(buckets[Axis.COLUMN], Axis.COLUMN, expression)
    selection = Selection(lines, columns, axis=bound_axis if grammar.shared_axis else None)
    logger.debug("Parsed %s selector %r -> %r", grammar.name, expression, selection)
    return selection


def parse_force_parse(expression):
    """Parse a force parse expression such as ``1-2li,4lf``."""
    return parse_selection(expression, FORCE_PARSE)


def parse_subtable(expression):
    """Parse a subtable expression such as ``1-3l,2-4c,5l``."""
    return parse_selection(expression, SUBTABLE)


def parse_export_color(expression):
    """Parse an export color expression such as ``1rl,3gl,2-4yc``."""
    return parse_selection(expression, EXPORT_COLOR)
