"""Token serialization.

Values are written back exactly as tokenized: nothing is escaped or
re-quoted here.
"""

# ruff: noqa: PERF401

from __future__ import annotations

from .options import SlashStyle
from .tokens import CharacterTokens, CommentToken, DoctypeToken, Quote, Tag


def serialize_attribute(attr) -> str:
    if attr.quote is Quote.NONE and attr.value == "":
        return attr.name
    quote = attr.quote.value
    return f"{attr.name}={quote}{attr.value}{quote}"


def serialize_start_tag(
    name: str,
    attrs: list | None,
    *,
    self_closing: bool = False,
    slash_style: SlashStyle = SlashStyle.REMOVE_WHITE_SPACE,
) -> str:
    parts: list[str] = ["<", name]
    if attrs:
        parts.append(" ")
        parts.append(" ".join(serialize_attribute(attr) for attr in attrs))
    if self_closing:
        parts.append("/>" if slash_style is SlashStyle.REMOVE_WHITE_SPACE else " />")
    else:
        parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def serialize_token(token, slash_style: SlashStyle = SlashStyle.REMOVE_WHITE_SPACE) -> str:
    if isinstance(token, Tag):
        if token.kind == Tag.START:
            return serialize_start_tag(
                token.name,
                token.attrs,
                self_closing=token.self_closing,
                slash_style=slash_style,
            )
        return serialize_end_tag(token.name)
    if isinstance(token, (CharacterTokens, CommentToken, DoctypeToken)):
        return token.data
    msg = f"Cannot serialize token: {token!r}"
    raise TypeError(msg)


def to_html(tokens, slash_style: SlashStyle = SlashStyle.REMOVE_WHITE_SPACE) -> str:
    """Render a token list back to markup."""
    parts = []
    for token in tokens:
        parts.append(serialize_token(token, slash_style))
    return "".join(parts)
