"""Tests for option resolution."""

import dataclasses
import re
import unittest

from htmlminify import MinifyOptions, OptimizationLevel, SlashStyle
from htmlminify.options import resolve_options


class TestDefaults(unittest.TestCase):
    def test_defaults(self):
        options = MinifyOptions()
        assert options.start_tag_before_slash is SlashStyle.REMOVE_WHITE_SPACE
        assert options.comment is True
        assert options.delete_duplicate_attribute is True
        assert options.exclude_comment == ()
        assert options.optimization_level is OptimizationLevel.SIMPLE
        assert not options.advanced

    def test_none_and_empty_mapping(self):
        assert resolve_options(None) == MinifyOptions()
        assert resolve_options({}) == MinifyOptions()

    def test_frozen(self):
        options = MinifyOptions()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            options.comment = False


class TestFromMapping(unittest.TestCase):
    def test_camel_case_keys(self):
        options = resolve_options({
            "startTagBeforeSlash": SlashStyle.REMOVE_SPACE_ONLY,
            "comment": False,
            "deleteDuplicateAttribute": False,
            "excludeComment": [r"nocache"],
            "optimizationLevel": OptimizationLevel.ADVANCED,
        })
        assert options.start_tag_before_slash is SlashStyle.REMOVE_SPACE_ONLY
        assert options.comment is False
        assert options.delete_duplicate_attribute is False
        assert [pattern.pattern for pattern in options.exclude_comment] == ["nocache"]
        assert options.advanced

    def test_snake_case_keys(self):
        options = resolve_options({"optimization_level": "advanced", "delete_duplicate_attribute": 0})
        assert options.optimization_level is OptimizationLevel.ADVANCED
        assert options.delete_duplicate_attribute is False

    def test_partial_mapping_keeps_defaults(self):
        options = resolve_options({"comment": False})
        assert options.comment is False
        assert options.optimization_level is OptimizationLevel.SIMPLE
        assert options.delete_duplicate_attribute is True

    def test_unknown_keys_are_ignored(self):
        options = resolve_options({"collapseBooleanAttributes": True, "comment": False})
        assert options == MinifyOptions(comment=False)

    def test_string_enum_values(self):
        options = resolve_options({"startTagBeforeSlash": "REMOVE_SPACE_ONLY"})
        assert options.start_tag_before_slash is SlashStyle.REMOVE_SPACE_ONLY

    def test_invalid_enum_value(self):
        with self.assertRaises(ValueError) as ctx:
            resolve_options({"optimizationLevel": "EXTREME"})
        assert "optimizationLevel" in str(ctx.exception)

    def test_instance_is_used_as_is(self):
        options = MinifyOptions(comment=False)
        assert resolve_options(options) is options


class TestExcludePatterns(unittest.TestCase):
    def test_strings_are_compiled_with_dotall(self):
        options = MinifyOptions(exclude_comment=["a.b"])
        (pattern,) = options.exclude_comment
        assert pattern.flags & re.DOTALL
        assert pattern.search("a\nb")

    def test_compiled_patterns_pass_through(self):
        compiled = re.compile("keep", re.IGNORECASE)
        options = MinifyOptions(exclude_comment=[compiled])
        assert options.exclude_comment == (compiled,)

    def test_single_string(self):
        options = MinifyOptions(exclude_comment="nocache")
        assert len(options.exclude_comment) == 1


if __name__ == "__main__":
    unittest.main()
