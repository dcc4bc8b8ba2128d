"""Utility modules."""

from alphahunter_mcp.utils.financial import calc_ttm, compute_cagr, safe_divide, yoy_growth
from alphahunter_mcp.utils.indicators import calculate_52_week_range, calculate_sma
from alphahunter_mcp.utils.normalize import to_jsonable
from alphahunter_mcp.utils.provenance import build_error_response, build_meta
from alphahunter_mcp.utils.sanitize import sanitize_list, sanitize_text, split_bullets
from alphahunter_mcp.utils.validators import (
    coerce_bool,
    coerce_float,
    coerce_optional_float,
    parse_choice,
)

__all__ = [
    "calc_ttm",
    "compute_cagr",
    "safe_divide",
    "yoy_growth",
    "calculate_52_week_range",
    "calculate_sma",
    "to_jsonable",
    "build_error_response",
    "build_meta",
    "sanitize_list",
    "sanitize_text",
    "split_bullets",
    "coerce_bool",
    "coerce_float",
    "coerce_optional_float",
    "parse_choice",
]
