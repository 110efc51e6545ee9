"""Markup tokenizer feeding the minifier.

A trimmed-down version of the HTML tokenization state machine. It differs from
a browser tokenizer in the ways a minifier needs:

- text, attribute values, comments and doctypes are kept verbatim (no
  character reference decoding), so untouched regions re-serialize byte for
  byte;
- comments keep their delimiters and bogus comments keep their source text;
- duplicate attributes are reported but kept;
- the body of a raw-text element is always exactly one character token, and
  for ``script``/``style`` that token is emitted even when the body is empty.
"""

import re
import sys
from bisect import bisect_right

from .constants import RAWTEXT_ELEMENTS, SCRIPT_STYLE_ELEMENTS
from .tokens import (
    Attribute,
    CharacterTokens,
    CommentToken,
    DoctypeToken,
    ParseError,
    Quote,
    StrictModeError,
    Tag,
)

_ASCII_LOWER_TABLE = str.maketrans({chr(code): chr(code + 32) for code in range(65, 91)})
_WHITESPACE = ("\t", "\n", "\f", " ")

_TAG_NAME_RUN_PATTERN = re.compile(r"[^\t\n\f />]+")
_ATTR_NAME_RUN_PATTERN = re.compile(r"[^\t\n\f />=]+")
_ATTR_VALUE_UNQUOTED_RUN_PATTERN = re.compile(r"[^\t\n\f >]+")
_WHITESPACE_PATTERN = re.compile(r"[\t\n\f ]+")
_COMMENT_END_PATTERN = re.compile(r"--!?>")
_RAWTEXT_END_PATTERNS = {
    name: re.compile(r"</" + name + r"[\t\n\f />]", re.IGNORECASE) for name in RAWTEXT_ELEMENTS
}


class TokenizerOpts:
    __slots__ = ("discard_bom", "initial_rawtext_tag", "initial_state")

    def __init__(self, discard_bom=True, initial_state=None, initial_rawtext_tag=None):
        self.discard_bom = bool(discard_bom)
        self.initial_state = initial_state
        self.initial_rawtext_tag = initial_rawtext_tag


class Tokenizer:
    DATA = 0
    TAG_OPEN = 1
    END_TAG_OPEN = 2
    TAG_NAME = 3
    BEFORE_ATTRIBUTE_NAME = 4
    ATTRIBUTE_NAME = 5
    AFTER_ATTRIBUTE_NAME = 6
    BEFORE_ATTRIBUTE_VALUE = 7
    ATTRIBUTE_VALUE_DOUBLE = 8
    ATTRIBUTE_VALUE_SINGLE = 9
    ATTRIBUTE_VALUE_UNQUOTED = 10
    AFTER_ATTRIBUTE_VALUE_QUOTED = 11
    SELF_CLOSING_START_TAG = 12
    MARKUP_DECLARATION_OPEN = 13
    COMMENT = 14
    BOGUS_COMMENT = 15
    DOCTYPE = 16
    RAWTEXT = 17
    PLAINTEXT = 18

    __slots__ = (
        "_newline_positions",
        "buffer",
        "collect_errors",
        "current_attr_name",
        "current_attr_quote",
        "current_attr_value",
        "current_tag_attrs",
        "current_tag_kind",
        "current_tag_name",
        "current_tag_self_closing",
        "errors",
        "length",
        "opts",
        "pos",
        "rawtext_tag_name",
        "state",
        "strict",
        "text_buffer",
        "token_start",
        "tokens",
    )

    # _STATE_HANDLERS is defined at the end of the file

    def __init__(self, opts=None, collect_errors=False, strict=False):
        self.opts = opts or TokenizerOpts()
        self.strict = bool(strict)
        # Strict mode needs error positions to report.
        self.collect_errors = bool(collect_errors) or self.strict
        self.errors = []
        self.tokens = []

        self.state = self.DATA
        self.buffer = ""
        self.length = 0
        self.pos = 0
        self.token_start = 0
        self._newline_positions = None

        self.text_buffer = []
        self.current_tag_name = []
        self.current_tag_attrs = []
        self.current_tag_kind = Tag.START
        self.current_tag_self_closing = False
        self.current_attr_name = []
        self.current_attr_value = ""
        self.current_attr_quote = Quote.NONE
        self.rawtext_tag_name = None

    def initialize(self, html):
        html = html or ""
        if html and html[0] == "\ufeff" and self.opts.discard_bom:
            html = html[1:]
        if "\r" in html:
            html = html.replace("\r\n", "\n").replace("\r", "\n")

        self.buffer = html
        self.length = len(html)
        self.pos = 0
        self.token_start = 0
        self.errors = []
        self.tokens = []
        self.text_buffer.clear()
        self.current_tag_name.clear()
        self.current_tag_attrs = []
        self.current_tag_kind = Tag.START
        self.current_tag_self_closing = False
        self.current_attr_name.clear()
        self.current_attr_value = ""
        self.current_attr_quote = Quote.NONE
        self.rawtext_tag_name = self.opts.initial_rawtext_tag

        initial_state = self.opts.initial_state
        if isinstance(initial_state, int):
            self.state = initial_state
        else:
            self.state = self.DATA

        # Pre-compute newline positions for O(log n) line lookups
        if self.collect_errors:
            self._newline_positions = [index for index, ch in enumerate(html) if ch == "\n"]
        else:
            self._newline_positions = None

    def step(self):
        """Run one step of the tokenizer state machine. Returns True if EOF reached."""
        handler = self._STATE_HANDLERS[self.state]
        return handler(self)

    def run(self, html):
        self.initialize(html)
        while True:
            if self.step():
                break
        return self.tokens

    # ---------------------
    # State handlers
    # ---------------------

    def _state_data(self):
        buffer = self.buffer
        pos = self.pos
        end = buffer.find("<", pos)
        if end == -1:
            if pos < self.length:
                self.text_buffer.append(buffer[pos:])
            self.pos = self.length
            self._flush_text()
            return True
        if end > pos:
            self.text_buffer.append(buffer[pos:end])
        self.token_start = end
        self.pos = end + 1
        self.state = self.TAG_OPEN
        return False

    def _state_tag_open(self):
        c = self._get_char()
        if c is None:
            self._emit_error("eof-before-tag-name")
            self.text_buffer.append("<")
            self._flush_text()
            return True
        if c == "!":
            self.state = self.MARKUP_DECLARATION_OPEN
            return False
        if c == "/":
            self.state = self.END_TAG_OPEN
            return False
        if c == "?":
            self._emit_error("unexpected-question-mark-instead-of-tag-name")
            self.state = self.BOGUS_COMMENT
            return False
        if c.isascii() and c.isalpha():
            self._start_tag(Tag.START)
            self._reconsume_current()
            self.state = self.TAG_NAME
            return False

        self._emit_error("invalid-first-character-of-tag-name")
        self.text_buffer.append("<")
        self._reconsume_current()
        self.state = self.DATA
        return False

    def _state_end_tag_open(self):
        c = self._get_char()
        if c is None:
            self._emit_error("eof-before-tag-name")
            self.text_buffer.append("</")
            self._flush_text()
            return True
        if c.isascii() and c.isalpha():
            self._start_tag(Tag.END)
            self._reconsume_current()
            self.state = self.TAG_NAME
            return False
        if c == ">":
            self._emit_error("missing-end-tag-name")
            self.state = self.DATA
            return False

        self._emit_error("invalid-first-character-of-tag-name")
        self.state = self.BOGUS_COMMENT
        return False

    def _state_tag_name(self):
        match = _TAG_NAME_RUN_PATTERN.match(self.buffer, self.pos)
        if match:
            self.current_tag_name.append(match.group(0).translate(_ASCII_LOWER_TABLE))
            self.pos = match.end()
        c = self._get_char()
        if c is None:
            return self._eof_in_tag()
        if c in _WHITESPACE:
            self.state = self.BEFORE_ATTRIBUTE_NAME
            return False
        if c == "/":
            self.state = self.SELF_CLOSING_START_TAG
            return False
        # Only ">" is left once the name run stops.
        self._emit_current_tag()
        return False

    def _state_before_attribute_name(self):
        self._skip_whitespace()
        c = self._get_char()
        if c is None:
            return self._eof_in_tag()
        if c == "/":
            self.state = self.SELF_CLOSING_START_TAG
            return False
        if c == ">":
            self._emit_current_tag()
            return False
        self._start_attribute()
        if c == "=":
            self._emit_error("unexpected-equals-sign-before-attribute-name")
            self.current_attr_name.append(c)
        else:
            self._reconsume_current()
        self.state = self.ATTRIBUTE_NAME
        return False

    def _state_attribute_name(self):
        match = _ATTR_NAME_RUN_PATTERN.match(self.buffer, self.pos)
        if match:
            name = match.group(0)
            for ch in ('"', "'", "<"):
                if ch in name:
                    self._emit_error("unexpected-character-in-attribute-name")
                    break
            self.current_attr_name.append(name.translate(_ASCII_LOWER_TABLE))
            self.pos = match.end()
        c = self._get_char()
        if c is None:
            return self._eof_in_tag()
        if c in _WHITESPACE:
            self.state = self.AFTER_ATTRIBUTE_NAME
            return False
        if c == "/":
            self._finish_attribute()
            self.state = self.SELF_CLOSING_START_TAG
            return False
        if c == "=":
            self.state = self.BEFORE_ATTRIBUTE_VALUE
            return False
        self._finish_attribute()
        self._emit_current_tag()
        return False

    def _state_after_attribute_name(self):
        self._skip_whitespace()
        c = self._get_char()
        if c is None:
            return self._eof_in_tag()
        if c == "/":
            self._finish_attribute()
            self.state = self.SELF_CLOSING_START_TAG
            return False
        if c == "=":
            self.state = self.BEFORE_ATTRIBUTE_VALUE
            return False
        self._finish_attribute()
        if c == ">":
            self._emit_current_tag()
            return False
        self._start_attribute()
        self._reconsume_current()
        self.state = self.ATTRIBUTE_NAME
        return False

    def _state_before_attribute_value(self):
        self._skip_whitespace()
        c = self._get_char()
        if c is None:
            return self._eof_in_tag()
        if c == '"':
            self.current_attr_quote = Quote.DOUBLE
            self.state = self.ATTRIBUTE_VALUE_DOUBLE
            return False
        if c == "'":
            self.current_attr_quote = Quote.SINGLE
            self.state = self.ATTRIBUTE_VALUE_SINGLE
            return False
        if c == ">":
            self._emit_error("missing-attribute-value")
            self._finish_attribute()
            self._emit_current_tag()
            return False
        self._reconsume_current()
        self.state = self.ATTRIBUTE_VALUE_UNQUOTED
        return False

    def _state_attribute_value_double(self):
        return self._consume_quoted_value('"')

    def _state_attribute_value_single(self):
        return self._consume_quoted_value("'")

    def _state_attribute_value_unquoted(self):
        match = _ATTR_VALUE_UNQUOTED_RUN_PATTERN.match(self.buffer, self.pos)
        if match:
            value = match.group(0)
            for ch in ('"', "'", "<", "=", "`"):
                if ch in value:
                    self._emit_error("unexpected-character-in-unquoted-attribute-value")
                    break
            self.current_attr_value += value
            self.pos = match.end()
        c = self._get_char()
        if c is None:
            return self._eof_in_tag()
        self._finish_attribute()
        if c in _WHITESPACE:
            self.state = self.BEFORE_ATTRIBUTE_NAME
            return False
        self._emit_current_tag()
        return False

    def _state_after_attribute_value_quoted(self):
        c = self._get_char()
        if c is None:
            return self._eof_in_tag()
        if c in _WHITESPACE:
            self.state = self.BEFORE_ATTRIBUTE_NAME
            return False
        if c == "/":
            self.state = self.SELF_CLOSING_START_TAG
            return False
        if c == ">":
            self._emit_current_tag()
            return False
        self._emit_error("missing-whitespace-between-attributes")
        self._reconsume_current()
        self.state = self.BEFORE_ATTRIBUTE_NAME
        return False

    def _state_self_closing_start_tag(self):
        c = self._get_char()
        if c is None:
            return self._eof_in_tag()
        if c == ">":
            self.current_tag_self_closing = True
            self._emit_current_tag()
            return False
        self._emit_error("unexpected-solidus-in-tag")
        self._reconsume_current()
        self.state = self.BEFORE_ATTRIBUTE_NAME
        return False

    def _state_markup_declaration_open(self):
        if self._consume_if("--"):
            self.state = self.COMMENT
            return False
        if self._consume_case_insensitive("DOCTYPE"):
            self.state = self.DOCTYPE
            return False
        # Covers <![if ...]>, <![endif]> and <![CDATA[...]]> outside foreign content.
        self._emit_error("incorrectly-opened-comment")
        self.state = self.BOGUS_COMMENT
        return False

    def _state_comment(self):
        buffer = self.buffer
        pos = self.pos
        if buffer.startswith(">", pos) or buffer.startswith("->", pos):
            self._emit_error("abrupt-closing-of-empty-comment")
            end = buffer.index(">", pos) + 1
        else:
            match = _COMMENT_END_PATTERN.search(buffer, pos)
            if match is None:
                self._emit_error("eof-in-comment")
                end = self.length
            else:
                if match.group(0) == "--!>":
                    self._emit_error("incorrectly-closed-comment")
                end = match.end()
        self._emit_token(CommentToken(buffer[self.token_start : end]))
        self.pos = end
        self.state = self.DATA
        return False

    def _state_bogus_comment(self):
        end = self.buffer.find(">", self.pos)
        end = self.length if end == -1 else end + 1
        self._emit_token(CommentToken(self.buffer[self.token_start : end]))
        self.pos = end
        self.state = self.DATA
        return False

    def _state_doctype(self):
        end = self.buffer.find(">", self.pos)
        if end == -1:
            self._emit_error("eof-in-doctype")
            end = self.length
        else:
            end += 1
        self._emit_token(DoctypeToken(self.buffer[self.token_start : end]))
        self.pos = end
        self.state = self.DATA
        return False

    def _state_rawtext(self):
        name = self.rawtext_tag_name
        if not name:
            return self._state_plaintext()
        pattern = _RAWTEXT_END_PATTERNS.get(name)
        if pattern is None:
            pattern = re.compile(r"</" + re.escape(name) + r"[\t\n\f />]", re.IGNORECASE)
        match = pattern.search(self.buffer, self.pos)
        end = match.start() if match else self.length
        body = self.buffer[self.pos : end]
        if body or name in SCRIPT_STYLE_ELEMENTS:
            self.tokens.append(CharacterTokens(body))
        self.pos = end
        self.rawtext_tag_name = None
        self.state = self.DATA
        return False

    def _state_plaintext(self):
        if self.pos < self.length:
            self.tokens.append(CharacterTokens(self.buffer[self.pos :]))
        self.pos = self.length
        return True

    # ---------------------
    # Low-level helpers
    # ---------------------

    def _get_char(self):
        if self.pos >= self.length:
            return None
        c = self.buffer[self.pos]
        self.pos += 1
        return c

    def _reconsume_current(self):
        self.pos -= 1

    def _skip_whitespace(self):
        match = _WHITESPACE_PATTERN.match(self.buffer, self.pos)
        if match:
            self.pos = match.end()

    def _consume_if(self, literal):
        if not self.buffer.startswith(literal, self.pos):
            return False
        self.pos += len(literal)
        return True

    def _consume_case_insensitive(self, literal):
        end = self.pos + len(literal)
        if end > self.length:
            return False
        segment = self.buffer[self.pos : end]
        if segment.lower() != literal.lower():
            return False
        self.pos = end
        return True

    def _consume_quoted_value(self, quote):
        end = self.buffer.find(quote, self.pos)
        if end == -1:
            return self._eof_in_tag()
        self.current_attr_value = self.buffer[self.pos : end]
        self.pos = end + 1
        self._finish_attribute()
        self.state = self.AFTER_ATTRIBUTE_VALUE_QUOTED
        return False

    def _eof_in_tag(self):
        # An unterminated tag stays in the output as plain text.
        self._emit_error("eof-in-tag")
        self.text_buffer.append(self.buffer[self.token_start :])
        self.pos = self.length
        self._flush_text()
        return True

    def _flush_text(self):
        if not self.text_buffer:
            return
        data = "".join(self.text_buffer)
        self.text_buffer.clear()
        if data:
            self.tokens.append(CharacterTokens(data))

    def _start_tag(self, kind):
        self.current_tag_kind = kind
        self.current_tag_name.clear()
        self.current_tag_attrs = []
        self.current_tag_self_closing = False
        self._start_attribute()

    def _start_attribute(self):
        self.current_attr_name.clear()
        self.current_attr_value = ""
        self.current_attr_quote = Quote.NONE

    def _finish_attribute(self):
        if not self.current_attr_name:
            return
        name = "".join(self.current_attr_name)
        self.current_tag_attrs.append(Attribute(name, self.current_attr_value, self.current_attr_quote))
        self._start_attribute()

    def _emit_current_tag(self):
        self._finish_attribute()
        name = sys.intern("".join(self.current_tag_name))
        attrs = self.current_tag_attrs
        self_closing = self.current_tag_self_closing
        kind = self.current_tag_kind
        self.state = self.DATA
        if kind == Tag.END:
            if attrs:
                self._emit_error("end-tag-with-attributes")
                attrs = []
            if self_closing:
                self._emit_error("end-tag-with-trailing-solidus")
                self_closing = False
        else:
            seen = set()
            for attr in attrs:
                if attr.name in seen:
                    self._emit_error("duplicate-attribute")
                    break
                seen.add(attr.name)
            if name in RAWTEXT_ELEMENTS:
                self.state = self.RAWTEXT
                self.rawtext_tag_name = name
            elif name == "plaintext":
                self.state = self.PLAINTEXT
        self._emit_token(Tag(kind, name, attrs, self_closing))
        self.current_tag_name.clear()
        self.current_tag_attrs = []
        self.current_tag_self_closing = False
        self.current_tag_kind = Tag.START

    def _emit_token(self, token):
        self._flush_text()
        self.tokens.append(token)

    def _get_line_at_pos(self, pos):
        """Get line number (1-indexed) for a position using binary search."""
        return bisect_right(self._newline_positions, pos - 1) + 1

    def _emit_error(self, code):
        if not self.collect_errors:
            return
        pos = max(0, self.pos - 1)
        last_newline = self.buffer.rfind("\n", 0, pos + 1)
        if last_newline == -1:
            column = pos + 1
        else:
            column = pos - last_newline
        error = ParseError(code, line=self._get_line_at_pos(pos), column=column)
        self.errors.append(error)
        if self.strict:
            raise StrictModeError(error)


Tokenizer._STATE_HANDLERS = [
    Tokenizer._state_data,
    Tokenizer._state_tag_open,
    Tokenizer._state_end_tag_open,
    Tokenizer._state_tag_name,
    Tokenizer._state_before_attribute_name,
    Tokenizer._state_attribute_name,
    Tokenizer._state_after_attribute_name,
    Tokenizer._state_before_attribute_value,
    Tokenizer._state_attribute_value_double,
    Tokenizer._state_attribute_value_single,
    Tokenizer._state_attribute_value_unquoted,
    Tokenizer._state_after_attribute_value_quoted,
    Tokenizer._state_self_closing_start_tag,
    Tokenizer._state_markup_declaration_open,
    Tokenizer._state_comment,
    Tokenizer._state_bogus_comment,
    Tokenizer._state_doctype,
    Tokenizer._state_rawtext,
    Tokenizer._state_plaintext,
]


def tokenize(html, *, opts=None, collect_errors=False, strict=False):
    """Tokenize ``html`` and return the token list."""
    return Tokenizer(opts, collect_errors=collect_errors, strict=strict).run(html)
