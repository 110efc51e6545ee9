"""Comment filtering.

Removes comments from a token list while keeping conditional comments and
comments matched by a caller-supplied exclude pattern. Text on both sides of a
removed comment is joined back into one character token.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .constants import SCRIPT_STYLE_ELEMENTS
from .tokens import CharacterTokens, CommentToken, is_start_tag

if TYPE_CHECKING:
    from .options import MinifyOptions

logger = logging.getLogger(__name__)

# downlevel-hidden   : <!--[if expression]> HTML <![endif]-->
# downlevel-revealed : <![if expression]> HTML <![endif]>
_CONDITIONAL_START_PATTERN = re.compile(r"\A<!(?:--)?\[if [^\]]+\]>", re.DOTALL)
_CONDITIONAL_END_PATTERN = re.compile(r"<!\[endif\](?:--)?>\Z", re.DOTALL)


def is_conditional_comment(token) -> bool:
    if not isinstance(token, CommentToken):
        return False
    comment = token.data
    return bool(_CONDITIONAL_START_PATTERN.search(comment) or _CONDITIONAL_END_PATTERN.search(comment))


def is_excluded_comment(token: CommentToken, patterns) -> bool:
    return any(pattern.search(token.data) for pattern in patterns)


def filter_comments(tokens: list, options: MinifyOptions) -> list:
    """Return a new token list without removable comments.

    The token right after a ``script``/``style`` start tag is the element body
    and is passed through without inspection.
    """
    kept: list = []
    removed = 0
    skip_next = False
    for token in tokens:
        if skip_next:
            skip_next = False
            kept.append(token)
            continue
        if is_start_tag(token):
            skip_next = token.name in SCRIPT_STYLE_ELEMENTS
        elif isinstance(token, CommentToken) and options.comment and not is_conditional_comment(token):
            if not is_excluded_comment(token, options.exclude_comment):
                removed += 1
                continue
        kept.append(token)

    if removed:
        logger.debug("Removed %d comment(s)", removed)
    return merge_characters(kept)


def merge_characters(tokens: list) -> list:
    """Join runs of adjacent character tokens into the first token of the run."""
    merged: list = []
    for token in tokens:
        if isinstance(token, CharacterTokens) and merged and isinstance(merged[-1], CharacterTokens):
            merged[-1].data += token.data
            continue
        merged.append(token)
    return merged
