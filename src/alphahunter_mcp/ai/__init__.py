"""Boundary for the external AI judge's output."""

from alphahunter_mcp.ai.judgment import parse_ai_judgment

__all__ = ["parse_ai_judgment"]
