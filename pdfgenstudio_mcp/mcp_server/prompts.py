"""
MCP Server Prompts
==================

Static prompt templates that walk an agent through common document tasks.
Prompts only produce text; they never call the API.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent

PromptRenderer = Callable[[Mapping[str, str]], str]


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    description: str
    render: PromptRenderer
    arguments: List[PromptArgument] = field(default_factory=list)

    def definition(self) -> Prompt:
        return Prompt(name=self.name, description=self.description, arguments=self.arguments)

    def get(self, arguments: Optional[Mapping[str, str]]) -> GetPromptResult:
        """
        Render the prompt.

        Raises:
            ValueError: if a required argument is missing
        """
        arguments = dict(arguments or {})
        missing = [a.name for a in self.arguments if a.required and not arguments.get(a.name)]
        if missing:
            raise ValueError(f"Missing required arguments for prompt {self.name}: {', '.join(missing)}")

        return GetPromptResult(
            description=self.description,
            messages=[
                PromptMessage(
                    role="user", content=TextContent(type="text", text=self.render(arguments))
                )
            ],
        )


def _arg(name: str, description: str, required: bool = False) -> PromptArgument:
    return PromptArgument(name=name, description=description, required=required)


def _generate_invoice(args: Mapping[str, str]) -> str:
    return f"""Generate an invoice PDF with the following details:

Invoice Number: {args['invoiceNumber']}
Customer: {args['customerName']}
Items: {args['items']}

Please:
1. First check if there's an invoice template available using list_templates
2. If found, use render_template with the appropriate data
3. If not, use render_html to create a professional invoice

Format the invoice professionally with:
- Company header
- Invoice details
- Item table with totals
- Payment terms"""


def _generate_report(args: Mapping[str, str]) -> str:
    return f"""Generate a {args.get('format') or 'PDF'} report with the following:

Title: {args['title']}
Content: {args['content']}

Create a professional report document using render_html with:
- Professional header with title
- Well-formatted content sections
- Page numbers and date
- Clean, readable typography"""


def _capture_webpage(args: Mapping[str, str]) -> str:
    scope = (
        "Capture the full page content."
        if args.get("fullPage") == "true"
        else "Capture only the visible viewport."
    )
    return f"""Capture the webpage at {args['url']} as a {args.get('format') or 'PDF'}.

{scope}

Use the render_url tool with appropriate options."""


def _use_template(args: Mapping[str, str]) -> str:
    data = args.get("data")
    with_data = f" with this data: {data}" if data else ""
    return f"""Find and render a template matching "{args['templateName']}".

Steps:
1. Use list_templates to find templates
2. Identify the best matching template by name
3. Use get_template_schema to understand what data can be modified
4. Render the template using render_template{with_data}

Return the rendered document."""


def _html_to_pdf(args: Mapping[str, str]) -> str:
    options = args.get("options")
    settings = f"Options: {options}" if options else "Use default PDF settings (A4, portrait)."
    return f"""Convert the following HTML to PDF:

```html
{args['html']}
```

{settings}

Use the render_html tool to generate the PDF."""


PROMPTS: List[PromptTemplate] = [
    PromptTemplate(
        name="generate-invoice",
        description="Generate an invoice PDF from provided data",
        arguments=[
            _arg("invoiceNumber", "Invoice number", required=True),
            _arg("customerName", "Customer name", required=True),
            _arg(
                "items",
                "Invoice items (JSON array with description, quantity, price)",
                required=True,
            ),
        ],
        render=_generate_invoice,
    ),
    PromptTemplate(
        name="generate-report",
        description="Generate a report document from data",
        arguments=[
            _arg("title", "Report title", required=True),
            _arg("content", "Report content or data", required=True),
            _arg("format", "Output format (pdf, png, jpg)"),
        ],
        render=_generate_report,
    ),
    PromptTemplate(
        name="capture-webpage",
        description="Capture a webpage as PDF or image",
        arguments=[
            _arg("url", "URL to capture", required=True),
            _arg("format", "Output format (pdf, png, jpg)"),
            _arg("fullPage", "Capture full page (true/false)"),
        ],
        render=_capture_webpage,
    ),
    PromptTemplate(
        name="use-template",
        description="Render a template with custom data",
        arguments=[
            _arg("templateName", "Name or description of the template to use", required=True),
            _arg("data", "Data to inject into the template (JSON)"),
        ],
        render=_use_template,
    ),
    PromptTemplate(
        name="html-to-pdf",
        description="Convert HTML content to PDF",
        arguments=[
            _arg("html", "HTML content to convert", required=True),
            _arg("options", "PDF options (page size, margins, etc.)"),
        ],
        render=_html_to_pdf,
    ),
]


def get_prompts() -> Dict[str, PromptTemplate]:
    return {prompt.name: prompt for prompt in PROMPTS}
