"""Tests for error collection and strict mode."""

import unittest

from htmlminify import HTMLMinify, ParseError, StrictModeError


class TestErrorCollection(unittest.TestCase):
    """Test that errors are collected when collect_errors=True."""

    def test_no_errors_by_default(self):
        """By default, errors list is not populated."""
        doc = HTMLMinify("<div att")
        assert doc.errors == []

    def test_collect_errors_enabled(self):
        doc = HTMLMinify("<div att", collect_errors=True)
        assert len(doc.errors) > 0
        assert all(isinstance(e, ParseError) for e in doc.errors)

    def test_error_has_line_and_column(self):
        doc = HTMLMinify('<p a="1" a="2">x</p>', collect_errors=True)
        error = doc.errors[0]
        assert error.code == "duplicate-attribute"
        assert isinstance(error.line, int)
        assert isinstance(error.column, int)

    def test_valid_html_no_errors(self):
        html = '<!DOCTYPE html>\n<html><head><title>T</title></head><body><p class="x">ok</p><br/></body></html>'
        doc = HTMLMinify(html, collect_errors=True)
        assert doc.errors == []

    def test_error_column_after_newline(self):
        """Error column is relative to the last newline."""
        doc = HTMLMinify("line1\nline2</p x>", collect_errors=True)
        assert [e.code for e in doc.errors] == ["end-tag-with-attributes"]
        error = doc.errors[0]
        assert error.line == 2
        assert 0 < error.column <= len("line2</p x>")

    def test_error_position_counts_leading_whitespace(self):
        """Positions refer to the input as given, before left-trimming."""
        doc = HTMLMinify("\n\n<a href=x href=y>", collect_errors=True)
        assert doc.errors == [ParseError("duplicate-attribute", line=3, column=17)]
        doc = HTMLMinify("   <div att", collect_errors=True)
        assert doc.errors[0].line == 1
        assert doc.errors[0].column == 11
        assert doc.process() == "<div att"

    def test_malformed_markup_reports_errors(self):
        for html in ("<</>VAUPy<iframe>", "<wBrKENj\n<script>x</script>", "a <div class"):
            assert HTMLMinify(html, collect_errors=True).errors, html

    def test_errors_do_not_change_output(self):
        html = '<img src="a" src="b"></p class="x">'
        assert HTMLMinify(html, collect_errors=True).process() == HTMLMinify(html).process()


class TestStrictMode(unittest.TestCase):
    """Test strict mode that raises on parse errors."""

    def test_strict_mode_raises(self):
        with self.assertRaises(StrictModeError) as ctx:
            HTMLMinify("<div att", strict=True)
        assert isinstance(ctx.exception.error, ParseError)
        assert ctx.exception.error.code == "eof-in-tag"

    def test_strict_mode_valid_html(self):
        doc = HTMLMinify(
            "<!DOCTYPE html><html><head><title>Test</title></head><body></body></html>",
            strict=True,
        )
        assert doc.errors == []
        assert doc.process() == "<!DOCTYPE html><html><head><title>Test</title></head><body></body></html>"

    def test_strict_mode_error_message(self):
        with self.assertRaises(StrictModeError) as ctx:
            HTMLMinify("\n\n<a href=x href=y>", strict=True)
        assert str(ctx.exception) == str(ctx.exception.error)
        assert ctx.exception.error.line == 3


class TestParseError(unittest.TestCase):
    """Test ParseError class behavior."""

    def test_parse_error_str(self):
        error = ParseError("test-error", line=1, column=5)
        assert str(error) == "(1,5): test-error"

    def test_parse_error_repr(self):
        error = ParseError("test-error", line=1, column=5)
        assert "test-error" in repr(error)
        assert "line=1" in repr(error)
        assert "column=5" in repr(error)

    def test_parse_error_equality(self):
        e1 = ParseError("error-code", line=1, column=5)
        e2 = ParseError("error-code", line=1, column=5)
        e3 = ParseError("other-error", line=1, column=5)
        assert e1 == e2
        assert e1 != e3

    def test_parse_error_equality_with_non_parseerror(self):
        e1 = ParseError("error-code", line=1, column=5)
        assert e1.__eq__("not a ParseError") is NotImplemented

    def test_parse_error_no_location(self):
        error = ParseError("test-error")
        assert str(error) == "test-error"
        assert "line=" not in repr(error)

    def test_parse_error_no_location_with_message(self):
        error = ParseError("test-error", message="This is a test error")
        assert str(error) == "test-error - This is a test error"

    def test_parse_error_with_location_and_message(self):
        error = ParseError("test-error", line=2, column=3, message="details")
        assert str(error) == "(2,3): test-error - details"


if __name__ == "__main__":
    unittest.main()
