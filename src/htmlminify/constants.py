"""HTML element constants used by the minifier.

Usage:
    from htmlminify.constants import TAG_DISPLAY, RAWTEXT_ELEMENTS

The display table mirrors the user-agent default stylesheet closely enough to
decide whether whitespace next to a tag can be dropped. Lookups use lowercase
tag names; anything missing from the table is treated as ``inline``.

References:
    - https://html.spec.whatwg.org/multipage/rendering.html
    - https://html.spec.whatwg.org/multipage/parsing.html#parsing-html-fragments
"""

from types import MappingProxyType

DISPLAY_BLOCK = "block"
DISPLAY_INLINE = "inline"
DISPLAY_INLINE_BLOCK = "inline-block"
DISPLAY_NONE = "none"
DISPLAY_LIST_ITEM = "list-item"
DISPLAY_TABLE = "table"
DISPLAY_TABLE_ROW = "table-row"
DISPLAY_TABLE_CELL = "table-cell"
DISPLAY_TABLE_CAPTION = "table-caption"
DISPLAY_TABLE_COLUMN = "table-column"
DISPLAY_TABLE_COLUMN_GROUP = "table-column-group"
DISPLAY_TABLE_ROW_GROUP = "table-row-group"
DISPLAY_TABLE_HEADER_GROUP = "table-header-group"
DISPLAY_TABLE_FOOTER_GROUP = "table-footer-group"

DISPLAY_CATEGORIES = frozenset({
    DISPLAY_BLOCK,
    DISPLAY_INLINE,
    DISPLAY_INLINE_BLOCK,
    DISPLAY_NONE,
    DISPLAY_LIST_ITEM,
    DISPLAY_TABLE,
    DISPLAY_TABLE_ROW,
    DISPLAY_TABLE_CELL,
    DISPLAY_TABLE_CAPTION,
    DISPLAY_TABLE_COLUMN,
    DISPLAY_TABLE_COLUMN_GROUP,
    DISPLAY_TABLE_ROW_GROUP,
    DISPLAY_TABLE_HEADER_GROUP,
    DISPLAY_TABLE_FOOTER_GROUP,
})

# Read-only after import; shared by every minification.
TAG_DISPLAY = MappingProxyType({
    "a": DISPLAY_INLINE,
    "abbr": DISPLAY_INLINE,
    "acronym": DISPLAY_INLINE,
    "address": DISPLAY_BLOCK,
    "applet": DISPLAY_INLINE,
    "area": DISPLAY_NONE,
    "article": DISPLAY_BLOCK,
    "aside": DISPLAY_BLOCK,
    "audio": DISPLAY_INLINE,
    "b": DISPLAY_INLINE,
    "base": DISPLAY_INLINE,
    "basefont": DISPLAY_INLINE,
    "bdo": DISPLAY_INLINE,
    "bgsound": DISPLAY_INLINE,
    "big": DISPLAY_INLINE,
    "blockquote": DISPLAY_BLOCK,
    "body": DISPLAY_BLOCK,
    "br": DISPLAY_INLINE,
    "button": DISPLAY_INLINE_BLOCK,
    "canvas": DISPLAY_INLINE,
    "caption": DISPLAY_TABLE_CAPTION,
    "center": DISPLAY_BLOCK,
    "cite": DISPLAY_INLINE,
    "code": DISPLAY_INLINE,
    "col": DISPLAY_TABLE_COLUMN,
    "colgroup": DISPLAY_TABLE_COLUMN_GROUP,
    "command": DISPLAY_INLINE,
    "datalist": DISPLAY_NONE,
    "dd": DISPLAY_BLOCK,
    "del": DISPLAY_INLINE,
    "details": DISPLAY_BLOCK,
    "dfn": DISPLAY_INLINE,
    "dir": DISPLAY_BLOCK,
    "div": DISPLAY_BLOCK,
    "dl": DISPLAY_BLOCK,
    "dt": DISPLAY_BLOCK,
    "em": DISPLAY_INLINE,
    "embed": DISPLAY_INLINE,
    "fieldset": DISPLAY_BLOCK,
    "figcaption": DISPLAY_BLOCK,
    "figure": DISPLAY_BLOCK,
    "font": DISPLAY_INLINE,
    "footer": DISPLAY_BLOCK,
    "form": DISPLAY_BLOCK,
    "frame": DISPLAY_BLOCK,
    "frameset": DISPLAY_BLOCK,
    "h1": DISPLAY_BLOCK,
    "h2": DISPLAY_BLOCK,
    "h3": DISPLAY_BLOCK,
    "h4": DISPLAY_BLOCK,
    "h5": DISPLAY_BLOCK,
    "h6": DISPLAY_BLOCK,
    "head": DISPLAY_NONE,
    "header": DISPLAY_BLOCK,
    "hgroup": DISPLAY_BLOCK,
    "hr": DISPLAY_BLOCK,
    "html": DISPLAY_BLOCK,
    "i": DISPLAY_INLINE,
    "iframe": DISPLAY_INLINE,
    "image": DISPLAY_INLINE,
    "img": DISPLAY_INLINE,
    "input": DISPLAY_INLINE_BLOCK,
    "ins": DISPLAY_INLINE,
    "isindex": DISPLAY_INLINE_BLOCK,
    "kbd": DISPLAY_INLINE,
    "keygen": DISPLAY_INLINE_BLOCK,
    "label": DISPLAY_INLINE,
    "layer": DISPLAY_BLOCK,
    "legend": DISPLAY_BLOCK,
    "li": DISPLAY_LIST_ITEM,
    "link": DISPLAY_NONE,
    "listing": DISPLAY_BLOCK,
    "map": DISPLAY_INLINE,
    "mark": DISPLAY_INLINE,
    "marquee": DISPLAY_INLINE_BLOCK,
    "menu": DISPLAY_BLOCK,
    "meta": DISPLAY_NONE,
    "meter": DISPLAY_INLINE_BLOCK,
    "nav": DISPLAY_BLOCK,
    "nobr": DISPLAY_INLINE,
    "noembed": DISPLAY_INLINE,
    "noframes": DISPLAY_NONE,
    "nolayer": DISPLAY_INLINE,
    "noscript": DISPLAY_INLINE,
    "object": DISPLAY_INLINE,
    "ol": DISPLAY_BLOCK,
    "optgroup": DISPLAY_INLINE,
    "option": DISPLAY_INLINE,
    "output": DISPLAY_INLINE,
    "p": DISPLAY_BLOCK,
    "param": DISPLAY_NONE,
    "plaintext": DISPLAY_BLOCK,
    "pre": DISPLAY_BLOCK,
    "progress": DISPLAY_INLINE_BLOCK,
    "q": DISPLAY_INLINE,
    "rp": DISPLAY_INLINE,
    "rt": DISPLAY_INLINE,
    "ruby": DISPLAY_INLINE,
    "s": DISPLAY_INLINE,
    "samp": DISPLAY_INLINE,
    "script": DISPLAY_NONE,
    "section": DISPLAY_BLOCK,
    "select": DISPLAY_INLINE_BLOCK,
    "small": DISPLAY_INLINE,
    "source": DISPLAY_INLINE,
    "span": DISPLAY_INLINE,
    "strike": DISPLAY_INLINE,
    "strong": DISPLAY_INLINE,
    "style": DISPLAY_NONE,
    "sub": DISPLAY_INLINE,
    "summary": DISPLAY_BLOCK,
    "sup": DISPLAY_INLINE,
    "table": DISPLAY_TABLE,
    "tbody": DISPLAY_TABLE_ROW_GROUP,
    "td": DISPLAY_TABLE_CELL,
    "textarea": DISPLAY_INLINE_BLOCK,
    "tfoot": DISPLAY_TABLE_FOOTER_GROUP,
    "th": DISPLAY_TABLE_CELL,
    "thead": DISPLAY_TABLE_HEADER_GROUP,
    "title": DISPLAY_NONE,
    "tr": DISPLAY_TABLE_ROW,
    "track": DISPLAY_INLINE,
    "tt": DISPLAY_INLINE,
    "u": DISPLAY_INLINE,
    "ul": DISPLAY_INLINE_BLOCK,
    "var": DISPLAY_INLINE,
    "video": DISPLAY_INLINE,
    "wbr": DISPLAY_INLINE,
    "xmp": DISPLAY_BLOCK,
})


def tag_display(name):
    """Return the display category for a tag name, ``inline`` when unknown."""
    return TAG_DISPLAY.get(name.lower(), DISPLAY_INLINE)


def is_inline_tag(name):
    return tag_display(name) == DISPLAY_INLINE


# Elements whose body the tokenizer hands over as a single text token.
RAWTEXT_ELEMENTS = frozenset({
    "iframe",
    "noembed",
    "noframes",
    "script",
    "style",
    "textarea",
    "title",
    "xmp",
})

# Bodies the comment filter never looks into.
SCRIPT_STYLE_ELEMENTS = frozenset({"script", "style"})

# Regions where whitespace collapsing is switched off.
UNEDITABLE_ELEMENTS = frozenset({"pre", "script", "style", "textarea"})

# HTML whitespace removed when trimming a text token.
HTML_WHITESPACE = " \t\n\r\f"
