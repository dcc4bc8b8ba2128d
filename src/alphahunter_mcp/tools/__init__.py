"""Scoring tools exposed by the MCP server."""

from alphahunter_mcp.tools.analyze import analyze_company, build_final_analysis
from alphahunter_mcp.tools.scan import scan_companies
from alphahunter_mcp.tools.scoring import (
    classify_squeeze,
    evaluate_risk_flags,
    score_multibagger,
    score_technicals,
    score_valuation,
)

__all__ = [
    "analyze_company",
    "build_final_analysis",
    "classify_squeeze",
    "evaluate_risk_flags",
    "scan_companies",
    "score_multibagger",
    "score_technicals",
    "score_valuation",
]
