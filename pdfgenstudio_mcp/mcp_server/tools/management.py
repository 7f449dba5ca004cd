"""
Template Management Tools
=========================

List saved templates and inspect their structure.
"""

from typing import Any, Dict, List

from pdfgenstudio_mcp.mcp_server.tools.base import BaseTool, ToolContent, json_result
from pdfgenstudio_mcp.models.schemas import (
    GetTemplateArguments,
    GetTemplateSchemaArguments,
    ListTemplatesArguments,
)


def summarize_template(template: Dict[str, Any]) -> Dict[str, Any]:
    """Template metadata as shown in listings."""
    return {
        "id": template.get("id"),
        "name": template.get("name"),
        "description": template.get("description") or "No description",
        "createdAt": template.get("createdAt"),
        "updatedAt": template.get("updatedAt"),
    }


def modifiable_elements(structure: Dict[str, Any]) -> List[Dict[str, Any]]:
    """The elements of a template structure, reduced to what callers can override."""
    elements = structure.get("elements") or []
    result = []
    for element in elements:
        if not isinstance(element, dict):
            continue
        entry: Dict[str, Any] = {"id": element.get("id"), "type": element.get("type")}
        if element.get("text") is not None:
            entry["currentText"] = element["text"]
        if element.get("src") is not None:
            entry["currentSrc"] = element["src"]
        if element.get("name"):
            entry["name"] = element["name"]
        result.append(entry)
    return result


class ListTemplatesTool(BaseTool):
    name = "list_templates"
    title = "List Templates"
    description = """List all saved templates in your PDF Gen Studio account.

Use this tool to:
- Get a list of all available templates
- Find template IDs for rendering
- Browse your template library

Returns template metadata including ID, name, description, and timestamps."""
    arguments_model = ListTemplatesArguments

    async def run(self, args: ListTemplatesArguments) -> List[ToolContent]:
        response = await self.client.list_templates(api_key=args.api_key)
        templates = response.get("data")

        if not response.get("success") or not isinstance(templates, list):
            return json_result(
                {"success": False, "templates": [], "message": "Failed to retrieve templates"}
            )

        if args.limit:
            templates = templates[: int(args.limit)]

        formatted = [summarize_template(t) for t in templates if isinstance(t, dict)]
        return json_result({"success": True, "count": len(formatted), "templates": formatted})


class GetTemplateTool(BaseTool):
    name = "get_template"
    title = "Get Template Details"
    description = """Get detailed information about a specific template.

Use this tool to:
- View template details before rendering
- Get the template's JSON schema/structure
- Understand what data can be injected

Returns full template metadata and optionally the JSON structure."""
    arguments_model = GetTemplateArguments

    async def run(self, args: GetTemplateArguments) -> List[ToolContent]:
        response = await self.client.get_template(args.template_id, api_key=args.api_key)
        template = response.get("data")

        if not response.get("success") or not isinstance(template, dict):
            return json_result(
                {
                    "success": False,
                    "message": f"Failed to retrieve template: {args.template_id}",
                }
            )

        result: Dict[str, Any] = {
            "success": True,
            "id": template.get("id"),
            "name": template.get("name"),
            "description": template.get("description"),
            "createdAt": template.get("createdAt"),
            "updatedAt": template.get("updatedAt"),
        }
        if args.include_json and template.get("json"):
            result["json"] = template["json"]

        return json_result(result)


class GetTemplateSchemaTool(BaseTool):
    name = "get_template_schema"
    title = "Get Template Schema"
    description = """Get the modifiable elements/schema of a template.

Use this tool to understand what data fields can be customized when rendering a template.
This is helpful for building dynamic data injection."""
    arguments_model = GetTemplateSchemaArguments

    async def run(self, args: GetTemplateSchemaArguments) -> List[ToolContent]:
        response = await self.client.get_template(args.template_id, api_key=args.api_key)
        template = response.get("data")
        structure = template.get("json") if isinstance(template, dict) else None

        if not response.get("success") or not isinstance(structure, dict):
            return json_result(
                {
                    "success": False,
                    "message": f"Failed to retrieve template schema: {args.template_id}",
                }
            )

        elements = modifiable_elements(structure)
        return json_result(
            {
                "success": True,
                "templateId": args.template_id,
                "templateName": template.get("name"),
                "elementCount": len(elements),
                "elements": elements,
                "hint": "Modify element properties (text, src, etc.) in the data parameter when rendering",
            }
        )


TOOLS = [ListTemplatesTool, GetTemplateTool, GetTemplateSchemaTool]
