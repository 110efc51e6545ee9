"""Context-aware whitespace collapsing for character tokens."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .constants import HTML_WHITESPACE, SCRIPT_STYLE_ELEMENTS, UNEDITABLE_ELEMENTS, is_inline_tag
from .tokens import CharacterTokens, Tag

if TYPE_CHECKING:
    from .options import MinifyOptions

_WHITESPACE_RUN_PATTERN = re.compile(r"[ \t\f\n]+")


def _collapse_run(match: re.Match[str]) -> str:
    # A newline in the run wins over any spaces next to it.
    return "\n" if "\n" in match.group(0) else " "


def collapse_text(characters: str) -> str:
    """Collapse each whitespace run to a single space, or a single newline."""
    return _WHITESPACE_RUN_PATTERN.sub(_collapse_run, characters)


def _is_inline_neighbour(token) -> bool:
    return isinstance(token, Tag) and is_inline_tag(token.name)


def _should_trim(tokens: list, index: int, token_before, before_inline: bool) -> bool:
    after = tokens[index + 1]
    is_after_tag = isinstance(after, Tag)
    is_after_inline = _is_inline_neighbour(after)

    if isinstance(token_before, Tag) and is_after_tag and (not before_inline or not is_after_inline):
        return True
    return not before_inline and not is_after_inline


def collapse_whitespace(tokens: list, options: MinifyOptions) -> list:
    """Rewrite character token payloads in place and return ``tokens``.

    Text inside ``pre``, ``textarea``, ``script`` and ``style`` is left alone,
    except that ADVANCED mode trims the padding around script and style bodies.
    ``before_inline`` tracks the most recent start or end tag, which is not
    necessarily the token directly before the text.
    """
    advanced = options.advanced
    editable = True
    uneditable_tag = None
    uneditable_depth = 0
    before_inline = False
    last = len(tokens) - 1
    token = None

    for index in range(len(tokens)):
        token_before = token
        token = tokens[index]

        if isinstance(token, Tag):
            name = token.name.lower()
            before_inline = is_inline_tag(name)
            if token.kind == Tag.START:
                if editable and name in UNEDITABLE_ELEMENTS:
                    editable = False
                    uneditable_tag = name
                    uneditable_depth = 1
                elif name == uneditable_tag:
                    uneditable_depth += 1
            elif name == uneditable_tag:
                uneditable_depth -= 1
                if not uneditable_depth:
                    editable = True
                    uneditable_tag = None
            continue

        if not isinstance(token, CharacterTokens):
            continue

        characters = token.data
        if editable:
            if advanced and index < last:
                if index == 0:
                    # The document edge constrains nothing; only the next tag decides.
                    if not _is_inline_neighbour(tokens[1]):
                        characters = characters.rstrip(HTML_WHITESPACE)
                elif _should_trim(tokens, index, token_before, before_inline):
                    characters = characters.strip(HTML_WHITESPACE)
            characters = collapse_text(characters)
            # Document head and tail carry no meaningful whitespace.
            if index == 0:
                characters = characters.lstrip(HTML_WHITESPACE)
            if index == last:
                characters = characters.rstrip(HTML_WHITESPACE)
        elif advanced and uneditable_tag in SCRIPT_STYLE_ELEMENTS:
            characters = characters.strip(HTML_WHITESPACE)
        token.data = characters

    return tokens
