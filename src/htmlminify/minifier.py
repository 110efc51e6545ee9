"""HTMLMinify entry point."""

from __future__ import annotations

import logging

from .attributes import dedupe_attributes
from .comments import filter_comments
from .constants import HTML_WHITESPACE
from .options import resolve_options
from .serialize import to_html
from .tokenizer import Tokenizer
from .tokens import CharacterTokens
from .whitespace import collapse_whitespace

logger = logging.getLogger(__name__)


class HTMLMinify:
    """Minify one document.

    The input is left-trimmed and tokenized once at construction; `process`
    runs the comment filter, the whitespace collapser and (when enabled) the
    attribute deduplicator over the tokens, then renders them. Tokens are
    rewritten in place, so the pipeline only runs on the first call and later
    calls return the same result.

    ``collect_errors`` and ``strict`` are passed to the tokenizer; in strict
    mode the first parse error raises `StrictModeError` from the constructor.
    """

    __slots__ = ("_result", "_tokens", "errors", "html", "options")

    def __init__(
        self,
        html,
        options=None,
        *,
        collect_errors=False,
        strict=False,
        tokenizer_opts=None,
    ):
        html = html or ""
        self.html = html.lstrip(HTML_WHITESPACE)
        self.options = resolve_options(options)
        self._result = None

        # The untrimmed input is tokenized so error positions match the caller's text.
        tokenizer = Tokenizer(tokenizer_opts, collect_errors=collect_errors, strict=strict)
        self._tokens = _lstrip_tokens(tokenizer.run(html))
        self.errors = tokenizer.errors
        logger.debug("Tokenized %d characters into %d tokens", len(self.html), len(self._tokens))

    @staticmethod
    def minify(html, options=None, **kwargs):
        return HTMLMinify(html, options, **kwargs).process()

    @property
    def tokens(self):
        """Read-only view of the current tokens."""
        return tuple(self._tokens)

    def process(self):
        if self._result is not None:
            return self._result

        options = self.options
        tokens = filter_comments(self._tokens, options)
        tokens = collapse_whitespace(tokens, options)
        if options.delete_duplicate_attribute:
            tokens = dedupe_attributes(tokens)
        self._tokens = tokens

        self._result = to_html(tokens, options.start_tag_before_slash)
        logger.debug("Minified %d characters to %d", len(self.html), len(self._result))
        return self._result


def _lstrip_tokens(tokens):
    if tokens and isinstance(tokens[0], CharacterTokens):
        data = tokens[0].data.lstrip(HTML_WHITESPACE)
        if data:
            tokens[0].data = data
        else:
            del tokens[0]
    return tokens


def minify(html, options=None, **kwargs):
    """Minify ``html`` in one call. See `HTMLMinify` for the arguments."""
    return HTMLMinify.minify(html, options, **kwargs)
