# SelectorToken is one comma separated unit of a selector expression,
# with its byte position inside the whole expression for diagnostics.
class SelectorToken:
    def __init__(self, text, start, end):
        self.text = text    # Token text (trimmed when the grammar trims)
        self.start = start  # Byte offset of the first byte in the expression
        self.end = end      # Byte offset one past the last byte

    @property
    def span(self):
        return (self.start, self.end)

    def __eq__(self, other):
        if not isinstance(other, SelectorToken):
            return NotImplemented
        return (self.text, self.start, self.end) == (other.text, other.start, other.end)

    def __str__(self):
        return f"SelectorToken({self.text!r}, span={self.start}..{self.end})"

    __repr__ = __str__


def _byte_len(text):
    return len(text.encode("utf-8"))


def split_tokens(expression, strip=False):
    """Split a selector expression on commas, tracking byte offsets.

    Args:
        expression (str): The whole selector expression
        strip (bool): Trim surrounding whitespace of every token

    Returns:
        list: SelectorToken objects in expression order
    """
    tokens = []
    offset = 0
    for part in expression.split(","):
        text = part
        start = offset
        if strip:
            text = part.strip()
            leading = part[:len(part) - len(part.lstrip())]
            start += _byte_len(leading)
        tokens.append(SelectorToken(text, start, start + _byte_len(text)))
        offset += _byte_len(part) + 1  # skip the comma
    return tokens
