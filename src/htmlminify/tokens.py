from enum import Enum


class Quote(str, Enum):
    """How an attribute value was quoted in the source."""

    DOUBLE = '"'
    SINGLE = "'"
    NONE = ""


class Attribute:
    __slots__ = ("name", "quote", "value")

    def __init__(self, name, value="", quote=Quote.NONE):
        self.name = name
        self.value = value
        self.quote = Quote(quote)

    def __repr__(self):
        return f"Attribute({self.name!r}, {self.value!r}, {self.quote.name})"

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return NotImplemented
        return self.name == other.name and self.value == other.value and self.quote is other.quote

    __hash__ = None


class Tag:
    __slots__ = ("attrs", "kind", "name", "self_closing")

    START = 0
    END = 1

    def __init__(self, kind, name, attrs=None, self_closing=False):
        self.kind = kind
        self.name = name
        self.attrs = attrs if attrs is not None else []
        self.self_closing = bool(self_closing)

    def __repr__(self):
        attrs = " ".join(f"{attr.name}={attr.value!r}" for attr in self.attrs)
        closing = " /" if self.self_closing else ""
        kind_str = "start" if self.kind == self.START else "end"
        return f"<{kind_str}:{self.name}{closing} {attrs}>"


class CharacterTokens:
    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"CharacterTokens({self.data!r})"


class CommentToken:
    """A comment, stored with its delimiters exactly as written."""

    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"CommentToken({self.data!r})"


class DoctypeToken:
    """A DOCTYPE declaration, stored exactly as written."""

    __slots__ = ("data",)

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"DoctypeToken({self.data!r})"


def is_start_tag(token):
    return isinstance(token, Tag) and token.kind == Tag.START


class ParseError:
    """Represents a parse error with location information."""

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is not None and self.column is not None:
            if self.message != self.code:
                return f"({self.line},{self.column}): {self.code} - {self.message}"
            return f"({self.line},{self.column}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.line == other.line and self.column == other.column

    __hash__ = None  # Unhashable since we define __eq__


class StrictModeError(Exception):
    """Raised by the tokenizer in strict mode on the first parse error."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))
