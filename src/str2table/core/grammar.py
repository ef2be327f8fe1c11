"""
Shape classification of single selector tokens.

A grammar is an ordered list of (pattern, category) pairs. The first pattern
that matches a token decides its category, so the order below is also the
tie-break between two malformed shapes a token could fit. Categories RANGE and
SINGLE are well formed; every other category names the one thing that is
wrong with the token. A token that fits no pattern has more than one error.
"""
import enum
import re
from collections import namedtuple

from ..cell import decimal_to_int
from ..settings import Axis, Color, ForceType


class Category(enum.IntEnum):
    RANGE = 0
    SINGLE = 1
    LEFT_BAD = 2
    RIGHT_BAD = 3
    BOTH_BAD = 4
    SINGLE_BAD = 5
    ATTRIBUTE_MISSING = 6
    AXIS_MISSING = 7


WELL_FORMED = (Category.RANGE, Category.SINGLE)

# Decoded content of a well formed token. end == start for a single number.
Extracted = namedtuple("Extracted", ["start", "end", "axis", "attribute"])

_NUM = r"[0-9]+"
# Anything between dashes that is not a plain unsigned number (empty included)
_BAD_NUM = r"(?:|[^-]*[^0-9-][^-]*)"


class Grammar:
    """One selector vocabulary.

    :param name: Human readable name used in logs.
    :param suffix: Regex of the trailing letters, with named groups ``axis``
        and (optionally) ``attr``.
    :param attribute_missing: Regex for "numbers fine, attribute letter wrong",
        or None when the grammar has no attribute letter.
    :param axis_missing: Regex for "numbers fine, axis letter wrong".
    :param attribute_keyword: Name of the attribute letter in diagnostics.
    :param decode_attribute: Maps the attribute letter to its enum value.
    :param strip: Trim whitespace around tokens before classifying.
    :param shared_axis: All tokens of one expression must use the same axis.
    """

    def __init__(self, name, suffix, attribute_missing, axis_missing, attribute_keyword=None,
                 decode_attribute=None, strip=False, shared_axis=False):
        self.name = name
        self.attribute_keyword = attribute_keyword
        self.decode_attribute = decode_attribute
        self.strip = strip
        self.shared_axis = shared_axis

        shapes = [
            (rf"^(?P<start>{_NUM})-(?P<end>{_NUM}){suffix}$", Category.RANGE),
            (rf"^(?P<start>{_NUM}){suffix}$", Category.SINGLE),
            (rf"^{_BAD_NUM}-{_NUM}{suffix}$", Category.LEFT_BAD),
            (rf"^{_NUM}-{_BAD_NUM}{suffix}$", Category.RIGHT_BAD),
            (rf"^[^-]*-[^-]*{suffix}$", Category.BOTH_BAD),
            (rf"^[^-]*{suffix}$", Category.SINGLE_BAD),
        ]
        if attribute_missing is not None:
            shapes.append((attribute_missing, Category.ATTRIBUTE_MISSING))
        shapes.append((axis_missing, Category.AXIS_MISSING))
        self.patterns = tuple((re.compile(p, re.IGNORECASE), c) for p, c in shapes)

    def classify(self, text):
        """Return the first matching Category of ``text``, or None if nothing matches."""
        for pattern, category in self.patterns:
            if pattern.match(text):
                return category
        return None

    def extract(self, text):
        """Decode a well formed token into an Extracted tuple.

        Raises:
            ValueError: If ``text`` is not a well formed range or single number
        """
        for pattern, category in self.patterns[:len(WELL_FORMED)]:
            m = pattern.match(text)
            if m:
                break
        else:
            raise ValueError(f"'{text}' is not a well formed {self.name} token")
        groups = m.groupdict()
        start = decimal_to_int(groups["start"])
        end = decimal_to_int(groups["end"]) if groups.get("end") is not None else start
        axis = Axis.from_letter(groups["axis"])
        attribute = None
        if self.decode_attribute is not None:
            attribute = self.decode_attribute(groups["attr"])
        return Extracted(start, end, axis, attribute)

    def __repr__(self):
        return f"Grammar({self.name!r})"


# N[-M]<l|c><s|i|f>
FORCE_PARSE = Grammar(
    "force-parse",
    suffix=r"(?P<axis>[lc])(?P<attr>[sif])",
    attribute_missing=rf"^{_NUM}(?:-{_NUM})?[lc](?:[^sif].*)?$",
    axis_missing=rf"^{_NUM}(?:-{_NUM})?[^lc0-9-]?[sif]$",
    attribute_keyword="type ('s', 'i' or 'f')",
    decode_attribute=ForceType.from_letter,
    strip=False,
    shared_axis=True,
)

# N[-M]<l|c>
SUBTABLE = Grammar(
    "subtable",
    suffix=r"(?P<axis>[lc])",
    attribute_missing=None,
    axis_missing=rf"^{_NUM}(?:-{_NUM})?[^lc0-9-]?$",
    strip=True,
)

# N[-M]<r|g|b|y|x|w><l|c>
EXPORT_COLOR = Grammar(
    "export-color",
    suffix=r"(?P<attr>[rgbyxw])(?P<axis>[lc])",
    attribute_missing=rf"^{_NUM}(?:-{_NUM})?[^rgbyxw0-9-]?[lc]$",
    axis_missing=rf"^{_NUM}(?:-{_NUM})?[rgbyxw][^lc]?$",
    attribute_keyword="color ('r', 'g', 'b', 'y', 'x' or 'w')",
    decode_attribute=Color.from_letter,
    strip=True,
)
