from __future__ import annotations

import logging

from .tokens import is_start_tag

logger = logging.getLogger(__name__)


def dedupe_attributes(tokens: list) -> list:
    """Drop repeated attribute names on start tags; the first occurrence wins."""
    dropped = 0
    for token in tokens:
        if not is_start_tag(token) or len(token.attrs) < 2:
            continue
        seen = set()
        attrs = []
        for attr in token.attrs:
            if attr.name in seen:
                continue
            seen.add(attr.name)
            attrs.append(attr)
        if len(attrs) != len(token.attrs):
            dropped += len(token.attrs) - len(attrs)
            token.attrs = attrs
    if dropped:
        logger.debug("Dropped %d duplicate attribute(s)", dropped)
    return tokens
