"""Deterministic scoring core."""

from alphahunter_mcp.scoring.final import aggregate_final_score, compute_ai_score
from alphahunter_mcp.scoring.multibagger import compute_multibagger_score
from alphahunter_mcp.scoring.risk_flags import calculate_risk_flags
from alphahunter_mcp.scoring.squeeze import compute_squeeze_setup
from alphahunter_mcp.scoring.technical import compute_technical_score
from alphahunter_mcp.scoring.thresholds import DEFAULT_CONFIG, ScoringConfig
from alphahunter_mcp.scoring.valuation import calc_valuation_score

__all__ = [
    "aggregate_final_score",
    "compute_ai_score",
    "compute_multibagger_score",
    "calculate_risk_flags",
    "compute_squeeze_setup",
    "compute_technical_score",
    "DEFAULT_CONFIG",
    "ScoringConfig",
    "calc_valuation_score",
]
