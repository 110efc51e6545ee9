from .constants import TAG_DISPLAY, tag_display
from .minifier import HTMLMinify, minify
from .options import MinifyOptions, OptimizationLevel, SlashStyle
from .tokenizer import Tokenizer, TokenizerOpts, tokenize
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

__all__ = [
    "TAG_DISPLAY",
    "Attribute",
    "CharacterTokens",
    "CommentToken",
    "DoctypeToken",
    "HTMLMinify",
    "MinifyOptions",
    "OptimizationLevel",
    "ParseError",
    "Quote",
    "SlashStyle",
    "StrictModeError",
    "Tag",
    "Tokenizer",
    "TokenizerOpts",
    "minify",
    "tag_display",
    "tokenize",
]
