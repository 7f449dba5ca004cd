"""
Core Components
===============

HTTP request translation against the PDF Gen Studio REST API.

Components:
- api_client: Request building and response decoding
- query_mapping: Declarative option-to-query rules
- errors: Error taxonomy
"""
