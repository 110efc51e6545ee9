"""Tests for the bundled tokenizer."""

import unittest

from htmlminify import (
    Attribute,
    CharacterTokens,
    CommentToken,
    DoctypeToken,
    ParseError,
    Quote,
    StrictModeError,
    Tag,
    Tokenizer,
    TokenizerOpts,
    tokenize,
)


def _kinds(tokens):
    return [type(token).__name__ for token in tokens]


class TestTags(unittest.TestCase):
    def test_start_tag_attributes_and_quoting(self):
        tokens = tokenize("<p class=\"a\" id=b data-x='c' hidden>Hi</p>")
        assert _kinds(tokens) == ["Tag", "CharacterTokens", "Tag"]
        start, text, end = tokens
        assert start.kind == Tag.START
        assert start.name == "p"
        assert start.attrs == [
            Attribute("class", "a", Quote.DOUBLE),
            Attribute("id", "b", Quote.NONE),
            Attribute("data-x", "c", Quote.SINGLE),
            Attribute("hidden", "", Quote.NONE),
        ]
        assert text.data == "Hi"
        assert end.kind == Tag.END
        assert end.name == "p"

    def test_names_are_lowercased_values_are_not(self):
        (tag,) = tokenize('<DIV CLASS="Mixed">')
        assert tag.name == "div"
        assert tag.attrs == [Attribute("class", "Mixed", Quote.DOUBLE)]

    def test_values_are_not_decoded(self):
        (tag,) = tokenize('<a href="?a=1&amp;b=2">')
        assert tag.attrs[0].value == "?a=1&amp;b=2"

    def test_self_closing_flag(self):
        for html in ("<br/>", "<br />", "<br\n/>"):
            (tag,) = tokenize(html)
            assert tag.self_closing, html
        (tag,) = tokenize("<br>")
        assert not tag.self_closing

    def test_empty_unquoted_value(self):
        (tag,) = tokenize("<input value=>")
        assert tag.attrs == [Attribute("value", "", Quote.NONE)]

    def test_duplicate_attributes_are_kept(self):
        (tag,) = tokenize('<img src="a.png" SRC="b.png">')
        assert [attr.value for attr in tag.attrs] == ["a.png", "b.png"]
        assert [attr.name for attr in tag.attrs] == ["src", "src"]

    def test_end_tag_attributes_are_dropped(self):
        (tag,) = tokenize('</p class="x">')
        assert tag.kind == Tag.END
        assert tag.attrs == []

    def test_missing_end_tag_name_is_dropped(self):
        tokens = tokenize("a</>b")
        assert [token.data for token in tokens] == ["ab"]


class TestText(unittest.TestCase):
    def test_text_is_verbatim(self):
        (text,) = tokenize("caf&eacute;  &amp; more")
        assert text.data == "caf&eacute;  &amp; more"

    def test_stray_less_than_joins_text(self):
        (text,) = tokenize("a < b")
        assert isinstance(text, CharacterTokens)
        assert text.data == "a < b"

    def test_newlines_are_normalized(self):
        (text,) = tokenize("a\r\nb\rc")
        assert text.data == "a\nb\nc"

    def test_bom_is_discarded(self):
        (text,) = tokenize("\ufeffhello")
        assert text.data == "hello"

    def test_bom_kept_when_requested(self):
        (text,) = tokenize("\ufeffhello", opts=TokenizerOpts(discard_bom=False))
        assert text.data == "\ufeffhello"

    def test_unterminated_tag_stays_as_text(self):
        (text,) = tokenize('a<div class="x')
        assert text.data == 'a<div class="x'


class TestCommentsAndDoctype(unittest.TestCase):
    def test_comment_keeps_delimiters(self):
        tokens = tokenize("a<!-- b -->c")
        assert _kinds(tokens) == ["CharacterTokens", "CommentToken", "CharacterTokens"]
        assert tokens[1].data == "<!-- b -->"

    def test_downlevel_hidden_conditional_is_one_comment(self):
        html = '<!--[if IE]><p class="ie">x</p><![endif]-->'
        (comment,) = tokenize(html)
        assert isinstance(comment, CommentToken)
        assert comment.data == html

    def test_downlevel_revealed_conditional_is_two_bogus_comments(self):
        tokens = tokenize("<![if !IE]>x<![endif]>")
        assert [token.data for token in tokens] == ["<![if !IE]>", "x", "<![endif]>"]
        assert isinstance(tokens[0], CommentToken)
        assert isinstance(tokens[2], CommentToken)

    def test_abrupt_and_bang_closed_comments(self):
        assert tokenize("<!-->")[0].data == "<!-->"
        assert tokenize("<!--->")[0].data == "<!--->"
        assert tokenize("<!-- a --!>b")[0].data == "<!-- a --!>"

    def test_processing_instruction_is_bogus_comment(self):
        tokens = tokenize('<?xml version="1.0"?><p>')
        assert isinstance(tokens[0], CommentToken)
        assert tokens[0].data == '<?xml version="1.0"?>'

    def test_doctype_is_literal(self):
        tokens = tokenize('<!doctype HTML PUBLIC "-//W3C//DTD HTML 4.01//EN">\n<html>')
        assert isinstance(tokens[0], DoctypeToken)
        assert tokens[0].data == '<!doctype HTML PUBLIC "-//W3C//DTD HTML 4.01//EN">'


class TestRawText(unittest.TestCase):
    def test_script_body_is_one_token(self):
        body = 'if (a < b) { x = "</p>"; } // <!-- not a comment -->'
        tokens = tokenize(f"<script>{body}</script>")
        assert _kinds(tokens) == ["Tag", "CharacterTokens", "Tag"]
        assert tokens[1].data == body
        assert tokens[2].kind == Tag.END

    def test_end_tag_match_is_case_insensitive(self):
        tokens = tokenize("<style>a{}</STYLE>")
        assert tokens[1].data == "a{}"
        assert tokens[2].name == "style"

    def test_empty_script_and_style_still_get_a_body(self):
        for name in ("script", "style"):
            tokens = tokenize(f"<{name}></{name}>")
            assert _kinds(tokens) == ["Tag", "CharacterTokens", "Tag"]
            assert tokens[1].data == ""

    def test_empty_textarea_has_no_body(self):
        tokens = tokenize("<textarea></textarea>")
        assert _kinds(tokens) == ["Tag", "Tag"]

    def test_textarea_body_is_not_markup(self):
        tokens = tokenize("<textarea><b> x </b></textarea>")
        assert tokens[1].data == "<b> x </b>"

    def test_unclosed_script_runs_to_end(self):
        tokens = tokenize("<script>var a;")
        assert tokens[-1].data == "var a;"

    def test_plaintext_consumes_everything(self):
        tokens = tokenize("<plaintext><b>x</b>")
        assert _kinds(tokens) == ["Tag", "CharacterTokens"]
        assert tokens[1].data == "<b>x</b>"

    def test_initial_rawtext_state(self):
        opts = TokenizerOpts(initial_state=Tokenizer.RAWTEXT, initial_rawtext_tag="textarea")
        tokens = tokenize("a <b></textarea>c", opts=opts)
        assert [type(token).__name__ for token in tokens] == ["CharacterTokens", "Tag", "CharacterTokens"]
        assert tokens[0].data == "a <b>"


class TestTokenizerErrors(unittest.TestCase):
    def test_no_errors_by_default(self):
        tokenizer = Tokenizer()
        tokenizer.run("<p a=1 a=2>")
        assert tokenizer.errors == []

    def test_collect_errors(self):
        tokenizer = Tokenizer(collect_errors=True)
        tokenizer.run("<p a=1 a=2>")
        assert [error.code for error in tokenizer.errors] == ["duplicate-attribute"]
        assert all(isinstance(error, ParseError) for error in tokenizer.errors)

    def test_markup_characters_in_attribute_name(self):
        tokenizer = Tokenizer(collect_errors=True)
        (tag,) = tokenizer.run("<x\n<script>")
        assert tag.attrs == [Attribute("<script", "", Quote.NONE)]
        assert [error.code for error in tokenizer.errors] == ["unexpected-character-in-attribute-name"]

    def test_error_line(self):
        tokenizer = Tokenizer(collect_errors=True)
        tokenizer.run("x\n<div")
        assert tokenizer.errors[0].code == "eof-in-tag"
        assert tokenizer.errors[0].line == 2

    def test_strict_mode_raises(self):
        with self.assertRaises(StrictModeError) as ctx:
            tokenize("<p a=1 a=2>", strict=True)
        assert ctx.exception.error.code == "duplicate-attribute"

    def test_strict_mode_valid_html(self):
        tokenizer = Tokenizer(strict=True)
        tokenizer.run("<!DOCTYPE html><html><body><p class=\"x\">ok</p></body></html>")
        assert tokenizer.errors == []


if __name__ == "__main__":
    unittest.main()
