"""
Unit Tests for Tool Argument Models
===================================
"""

import pytest
from pydantic import ValidationError

from pdfgenstudio_mcp.models.schemas import (
    GetTemplateArguments,
    ListTemplatesArguments,
    RenderHtmlArguments,
    RenderJsonArguments,
    RenderUrlArguments,
    mime_type_for,
)


class TestArgumentModels:
    """Test validation and camelCase aliases."""

    def test_camel_case_input(self):
        args = RenderHtmlArguments.model_validate(
            {
                "html": "<p>x</p>",
                "pdfOptions": {"pageFormat": "A4", "margin": {"top": "1cm"}},
                "apiKey": "k",
            }
        )

        assert args.format == "pdf"
        assert args.api_key == "k"
        assert args.pdf_options.as_options() == {"pageFormat": "A4", "margin": {"top": "1cm"}}

    def test_unknown_keys_are_ignored(self):
        args = RenderJsonArguments.model_validate({"document": {}, "unexpected": 1})
        assert args.validate_only is False

    def test_invalid_format(self):
        with pytest.raises(ValidationError):
            RenderJsonArguments.model_validate({"document": {}, "format": "gif"})

    def test_invalid_page_format(self):
        with pytest.raises(ValidationError):
            RenderHtmlArguments.model_validate({"html": "x", "pdfOptions": {"pageFormat": "B5"}})

    @pytest.mark.parametrize("url", ["not a url", "/relative/path", ""])
    def test_url_must_be_absolute(self, url):
        with pytest.raises(ValidationError, match="Invalid url"):
            RenderUrlArguments.model_validate({"url": url})

    def test_url_spelling_is_kept(self):
        args = RenderUrlArguments.model_validate({"url": "https://example.com"})
        assert args.url == "https://example.com"

    def test_numeric_options_accept_fractions(self):
        args = RenderHtmlArguments.model_validate(
            {"html": "x", "format": "jpg", "imageOptions": {"quality": 82.5, "width": 800}}
        )

        options = args.image_options.as_options()
        assert options == {"width": 800, "quality": 82.5}
        assert isinstance(options["width"], int)

    def test_list_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            ListTemplatesArguments.model_validate({"limit": 0})

    def test_include_json_defaults_to_true(self):
        assert GetTemplateArguments.model_validate({"templateId": "t"}).include_json is True

    def test_template_id_required(self):
        with pytest.raises(ValidationError):
            GetTemplateArguments.model_validate({})


class TestJsonSchema:
    """Test the input schemas exposed to MCP clients."""

    def test_schema_uses_public_names(self):
        schema = RenderJsonArguments.model_json_schema(by_alias=True)

        assert "validateOnly" in schema["properties"]
        assert "apiKey" in schema["properties"]
        assert schema["required"] == ["document"]

    def test_url_schema_format(self):
        schema = RenderUrlArguments.model_json_schema(by_alias=True)
        assert schema["properties"]["url"]["format"] == "uri"


def test_mime_type_for():
    assert mime_type_for("png") == "image/png"
    assert mime_type_for("jpg") == "image/jpeg"
