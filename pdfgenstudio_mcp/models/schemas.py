"""
Pydantic Models and Schemas
===========================

Argument models for every MCP tool. Field names are snake_case with camelCase
aliases; the aliases are what MCP callers see in each tool's input schema and
what ends up in the outbound query string.
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

OutputFormat = Literal["pdf", "png", "jpg"]
ImageFormat = Literal["png", "jpg"]
PageFormat = Literal["A4", "A3", "A5", "Letter", "Legal", "Tabloid"]
TextOverflow = Literal["ellipsis", "clip", "visible"]
WaitUntil = Literal["load", "domcontentloaded", "networkidle0", "networkidle2"]

# Numeric options accept any JSON number; integers stay integers on the wire.
Number = Union[int, float]

API_KEY_DESCRIPTION = "API key (optional if PDFGENSTUDIO_API_KEY env var is set)"

_url_adapter = TypeAdapter(AnyUrl)


class ToolModel(BaseModel):
    """Base model for tool arguments and option groups."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def as_options(self) -> Dict[str, Any]:
        """Defined values keyed by their public (camelCase) names."""
        return self.model_dump(by_alias=True, exclude_none=True)


# Option groups
class TemplateRenderOptions(ToolModel):
    text_overflow: Optional[TextOverflow] = Field(
        None, alias="textOverflow", description="How to handle text overflow"
    )
    table_pagination: Optional[bool] = Field(
        None, alias="tablePagination", description="Enable table pagination across pages"
    )
    table_header_on_new_page: Optional[bool] = Field(
        None, alias="tableHeaderOnNewPage", description="Repeat table headers on new pages"
    )
    pixel_ratio: Optional[Number] = Field(
        None, alias="pixelRatio", description="Pixel ratio for image output (1-3)"
    )
    quality: Optional[Number] = Field(None, description="Image quality (0-100)")
    page_index: Optional[Number] = Field(
        None, alias="pageIndex", description="Specific page index to render"
    )


class JsonRenderOptions(ToolModel):
    scale: Optional[Number] = Field(None, description="Scale factor for rendering")
    quality: Optional[Number] = Field(None, description="Image quality (0-100)")
    print_background: Optional[bool] = Field(
        None, alias="printBackground", description="Include background in output"
    )
    display_header_footer: Optional[bool] = Field(
        None, alias="displayHeaderFooter", description="Display header and footer"
    )
    header_template: Optional[str] = Field(
        None, alias="headerTemplate", description="HTML template for header"
    )
    footer_template: Optional[str] = Field(
        None, alias="footerTemplate", description="HTML template for footer"
    )
    timeout: Optional[Number] = Field(None, description="Rendering timeout in milliseconds")
    full_page: Optional[bool] = Field(None, alias="fullPage", description="Capture full page")
    omit_background: Optional[bool] = Field(
        None, alias="omitBackground", description="Omit background"
    )
    raw: Optional[bool] = Field(None, description="Return raw output")


class Margin(ToolModel):
    top: Optional[str] = None
    right: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None


class PdfOptions(ToolModel):
    page_format: Optional[PageFormat] = Field(
        None, alias="pageFormat", description="PDF page format"
    )
    landscape: Optional[bool] = Field(None, description="Landscape orientation")
    print_background: Optional[bool] = Field(
        None, alias="printBackground", description="Print background graphics"
    )
    display_header_footer: Optional[bool] = Field(
        None, alias="displayHeaderFooter", description="Display header and footer"
    )
    header_template: Optional[str] = Field(
        None, alias="headerTemplate", description="HTML template for header"
    )
    footer_template: Optional[str] = Field(
        None, alias="footerTemplate", description="HTML template for footer"
    )
    margin: Optional[Margin] = Field(None, description="Page margins")


class ImageOptions(ToolModel):
    width: Optional[Number] = Field(None, description="Viewport width")
    height: Optional[Number] = Field(None, description="Viewport height")
    full_page: Optional[bool] = Field(None, alias="fullPage", description="Capture full page")
    omit_background: Optional[bool] = Field(
        None, alias="omitBackground", description="Omit default white background"
    )
    quality: Optional[Number] = Field(None, description="Image quality (0-100, JPG only)")


class ViewportOptions(ToolModel):
    width: Optional[Number] = Field(None, description="Viewport width in pixels")
    height: Optional[Number] = Field(None, description="Viewport height in pixels")
    device_scale_factor: Optional[Number] = Field(
        None, alias="deviceScaleFactor", description="Device scale factor (1-3)"
    )
    is_mobile: Optional[bool] = Field(None, alias="isMobile", description="Emulate mobile device")
    has_touch: Optional[bool] = Field(None, alias="hasTouch", description="Enable touch events")


class NavigationOptions(ToolModel):
    wait_until: Optional[WaitUntil] = Field(None, alias="waitUntil", description="Wait condition")
    timeout: Optional[Number] = Field(None, description="Navigation timeout in milliseconds")
    wait_for_selector: Optional[str] = Field(
        None, alias="waitForSelector", description="CSS selector to wait for"
    )
    wait_for_timeout: Optional[Number] = Field(
        None, alias="waitForTimeout", description="Additional wait time in milliseconds"
    )


# Tool arguments
class ApiKeyArguments(ToolModel):
    api_key: Optional[str] = Field(None, alias="apiKey", description=API_KEY_DESCRIPTION)


class RenderTemplateArguments(ApiKeyArguments):
    template_id: str = Field(..., alias="templateId", description="The ID of the template to render")
    data: Optional[Dict[str, Any]] = Field(
        None,
        description="JSON data to inject into the template. Leave empty to use template defaults.",
    )
    format: OutputFormat = Field("pdf", description="Output format: pdf, png, or jpg")
    options: Optional[TemplateRenderOptions] = Field(
        None, description="Additional rendering options"
    )


class RenderTemplateImageArguments(ApiKeyArguments):
    template_id: str = Field(..., alias="templateId", description="The ID of the template to render")
    data: Optional[Dict[str, Any]] = Field(
        None, description="JSON data to inject into the template"
    )
    format: ImageFormat = Field("png", description="Image format: png or jpg")


class RenderJsonArguments(ApiKeyArguments):
    document: Dict[str, Any] = Field(
        ..., description="JSON design document following PDF Gen Studio schema"
    )
    format: OutputFormat = Field("pdf", description="Output format: pdf, png, or jpg")
    validate_only: bool = Field(
        False, alias="validateOnly", description="Only validate the document without rendering"
    )
    options: Optional[JsonRenderOptions] = Field(None, description="Additional rendering options")


class RenderJsonImageArguments(ApiKeyArguments):
    document: Dict[str, Any] = Field(
        ..., description="JSON design document following PDF Gen Studio schema"
    )
    format: ImageFormat = Field("png", description="Image format: png or jpg")


class RenderHtmlArguments(ApiKeyArguments):
    html: str = Field(..., description="HTML content to render (can include CSS)")
    format: OutputFormat = Field("pdf", description="Output format: pdf, png, or jpg")
    pdf_options: Optional[PdfOptions] = Field(
        None, alias="pdfOptions", description="PDF-specific options (only for PDF format)"
    )
    image_options: Optional[ImageOptions] = Field(
        None, alias="imageOptions", description="Image-specific options (only for PNG/JPG format)"
    )


class RenderHtmlImageArguments(ApiKeyArguments):
    html: str = Field(..., description="HTML content to render")
    format: ImageFormat = Field("png", description="Image format: png or jpg")
    width: Optional[Number] = Field(None, description="Viewport width")
    height: Optional[Number] = Field(None, description="Viewport height")


class UrlArguments(ApiKeyArguments):
    url: str = Field(
        ...,
        description="The URL of the webpage to capture",
        json_schema_extra={"format": "uri"},
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute URL; the caller's spelling is kept as-is."""
        try:
            _url_adapter.validate_python(v)
        except ValueError:
            raise ValueError("Invalid url: must be an absolute URL") from None
        return v


class RenderUrlArguments(UrlArguments):
    format: OutputFormat = Field("pdf", description="Output format: pdf, png, or jpg")
    pdf_options: Optional[PdfOptions] = Field(
        None, alias="pdfOptions", description="PDF-specific options (only for PDF format)"
    )
    image_options: Optional[ImageOptions] = Field(
        None, alias="imageOptions", description="Image-specific options (only for PNG/JPG format)"
    )
    viewport_options: Optional[ViewportOptions] = Field(
        None, alias="viewportOptions", description="Viewport/device emulation options"
    )
    navigation_options: Optional[NavigationOptions] = Field(
        None, alias="navigationOptions", description="Navigation and timing options"
    )


class RenderUrlImageArguments(UrlArguments):
    format: ImageFormat = Field("png", description="Image format: png or jpg")
    full_page: Optional[bool] = Field(None, alias="fullPage", description="Capture full page")
    width: Optional[Number] = Field(None, description="Viewport width")
    height: Optional[Number] = Field(None, description="Viewport height")


class ListTemplatesArguments(ApiKeyArguments):
    limit: Optional[Number] = Field(
        None, ge=1, description="Maximum number of templates to return (default: all)"
    )


class GetTemplateArguments(ApiKeyArguments):
    template_id: str = Field(..., alias="templateId", description="The ID of the template to retrieve")
    include_json: bool = Field(
        True, alias="includeJson", description="Include the full JSON structure in response"
    )


class GetTemplateSchemaArguments(ApiKeyArguments):
    template_id: str = Field(..., alias="templateId", description="The ID of the template")


def mime_type_for(image_format: str) -> str:
    return "image/png" if image_format == "png" else "image/jpeg"
