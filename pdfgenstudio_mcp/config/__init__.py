"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Application settings resolved from environment and CLI flags
- logging: Structured logging configuration
"""
