"""
MCP Server Implementation
========================

Model Context Protocol server exposing the PDF Gen Studio API.

Tools provided:
- render_template / render_template_image: Render a saved template
- render_json / render_json_image: Render a JSON design document
- render_html / render_html_image: Render HTML/CSS content
- render_url / render_url_image: Capture a webpage
- list_templates, get_template, get_template_schema: Template management
"""
