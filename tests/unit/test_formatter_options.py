#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_formatter_options.py
"""Unit tests for FormatterOptions."""

import pytest

from canonmark.exceptions import InvalidOptionsError, ValidationError
from canonmark.options import BaseRendererOptions, FormatterOptions
from canonmark.renderers.markdown import CanonicalMarkdownRenderer


@pytest.mark.unit
class TestFormatterOptions:
    """Tests for defaults, validation and updates."""

    def test_defaults(self):
        options = FormatterOptions()
        assert options.line_width == 80
        assert options.code_fence_char == "~"
        assert options.code_fence_min == 4
        assert options.unordered_marker == "-"
        assert options.thematic_break == "*  *  *  *  *"
        assert options.link_style == "inline"
        assert options.escape_special is True

    def test_options_are_frozen(self):
        options = FormatterOptions()
        with pytest.raises(AttributeError):
            options.line_width = 10  # type: ignore[misc]

    def test_create_updated_returns_new_instance(self):
        options = FormatterOptions()
        updated = options.create_updated(line_width=60)
        assert updated.line_width == 60
        assert options.line_width == 80

    def test_create_updated_rejects_unknown_fields(self):
        with pytest.raises(TypeError, match="colour"):
            FormatterOptions().create_updated(colour="blue")

    def test_create_updated_validates(self):
        with pytest.raises(ValueError):
            FormatterOptions().create_updated(line_width=0)

    def test_to_dict(self):
        data = FormatterOptions(line_width=72).to_dict()
        assert data["line_width"] == 72
        assert set(data) == FormatterOptions.field_names()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"line_width": 0},
            {"line_width": -5},
            {"code_fence_min": 2},
            {"code_fence_char": "'"},
            {"unordered_marker": "o"},
            {"link_style": "footnote"},
            {"thematic_break": "--"},
            {"thematic_break": "-*-"},
            {"thematic_break": "==="},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            FormatterOptions(**kwargs)

    @pytest.mark.parametrize("thematic_break", ["---", "***", "_ _ _", "*  *  *  *  *"])
    def test_valid_thematic_breaks(self, thematic_break):
        assert FormatterOptions(thematic_break=thematic_break).thematic_break == thematic_break


@pytest.mark.unit
class TestFromMapping:
    """Tests for building options from configuration mappings."""

    def test_dashed_and_underscored_keys(self):
        options = FormatterOptions.from_mapping({"line-width": 100, "link_style": "reference"})
        assert options.line_width == 100
        assert options.link_style == "reference"

    def test_base_options_are_kept(self):
        base = FormatterOptions(code_fence_char="`")
        options = FormatterOptions.from_mapping({"line_width": 72}, base=base)
        assert options.code_fence_char == "`"
        assert options.line_width == 72

    def test_unknown_key(self):
        with pytest.raises(ValidationError) as exc_info:
            FormatterOptions.from_mapping({"wrap": 80})
        assert exc_info.value.parameter_name == "wrap"

    def test_invalid_value(self):
        with pytest.raises(ValidationError):
            FormatterOptions.from_mapping({"line_width": 0})

    def test_wrong_type(self):
        with pytest.raises(ValidationError):
            FormatterOptions.from_mapping({"line_width": "wide"})


@pytest.mark.unit
class TestRendererOptionsValidation:
    """Tests for renderer options type checking."""

    def test_wrong_options_class(self):
        with pytest.raises(InvalidOptionsError):
            CanonicalMarkdownRenderer(BaseRendererOptions())  # type: ignore[arg-type]

    def test_none_uses_defaults(self):
        renderer = CanonicalMarkdownRenderer(None)
        assert renderer.options == FormatterOptions()
