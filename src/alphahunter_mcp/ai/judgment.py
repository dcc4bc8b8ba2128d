"""
Parse the AI judge's JSON object into an AIJudgment.

The judge is an untrusted collaborator: every field is validated against the
fixed schema, free text is sanitized, and anything out of range is clamped
or dropped. Nothing here re-derives the judgment itself.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from alphahunter_mcp.models import AIJudgment, AIStatus
from alphahunter_mcp.utils.sanitize import sanitize_list, sanitize_text, split_bullets
from alphahunter_mcp.utils.validators import coerce_bool, coerce_optional_float, parse_choice

logger = logging.getLogger(__name__)

AI_TIERS = {"Tier 1", "Tier 2", "Tier 3", "Not Interesting", "Disqualified"}
MULTIBAGGER_POTENTIALS = {"LOW", "MODERATE", "HIGH", "EXTREME"}
POSITION_SIZING_HINTS = {"NONE", "SMALL", "CORE", "AGGRESSIVE"}
MOAT_TYPES = {
    "switching_costs",
    "network_effects",
    "brand",
    "scale_economies",
    "regulation",
    "niche_dominance",
    "none",
}
TAM_CATEGORIES = {"small", "medium", "large", "huge"}
TAM_PENETRATIONS = {"low", "medium", "high"}

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def _pick(value: Any, allowed: set[str], upper: bool = False) -> str | None:
    """Return the normalized value if it is one of ``allowed``, else None."""
    if value is None:
        return None
    text = str(value).strip()
    text = text.upper() if upper else text
    if text in allowed:
        return text
    lowered = text.lower()
    for option in allowed:
        if option.lower() == lowered:
            return option
    return None


def _number(raw: Mapping[str, Any], key: str) -> float | None:
    """Numeric field, or None (with a warning) when it is not a number."""
    try:
        return coerce_optional_float(raw.get(key), field=key)
    except ValueError as e:
        logger.warning(f"{e}, ignoring")
        return None


def _flag(raw: Mapping[str, Any], key: str) -> bool | None:
    value = raw.get(key)
    if value is None:
        return None
    try:
        return coerce_bool(value, field=key)
    except ValueError as e:
        logger.warning(f"{e}, ignoring")
        return None


def _load(payload: Mapping[str, Any] | str) -> Mapping[str, Any]:
    if isinstance(payload, str):
        text = _CODE_FENCE.sub("", payload.strip())
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"AI judgment is not valid JSON: {e}") from e
    if not isinstance(payload, Mapping):
        raise ValueError(f"AI judgment must be a JSON object, got {type(payload).__name__}")
    return payload


def parse_ai_judgment(payload: Mapping[str, Any] | str) -> AIJudgment:
    """
    Validate an AI judge response.

    A non-numeric value in a numeric field, or a non-boolean founderLed, is
    logged and treated as missing.

    Args:
        payload: Decoded JSON object, or the raw JSON text (a surrounding
            markdown code fence is tolerated)

    Returns:
        AIJudgment with enum fields falling back to UNKNOWN/None, conviction
        clamped to 0..100, moat score to 0..10, insider ownership to 0..1

    Raises:
        ValueError: if the payload is not a JSON object
    """
    raw = _load(payload)

    status = parse_choice(AIStatus, raw.get("aiStatus"), AIStatus.UNKNOWN)
    if status is AIStatus.UNKNOWN and raw.get("aiStatus") is not None:
        logger.warning(f"Unrecognized aiStatus {raw.get('aiStatus')!r}, treating as UNKNOWN")

    conviction = _number(raw, "aiConviction")
    moat_score = _number(raw, "moatScore")
    horizon = _number(raw, "timeHorizonYears")
    insider = _number(raw, "insiderOwnership")

    # Legacy responses carry "warnings" instead of "warningFlags"
    warning_flags = raw.get("warningFlags")
    if warning_flags is None:
        warning_flags = raw.get("warnings")

    return AIJudgment(
        status=status,
        tier=_pick(raw.get("aiTier"), AI_TIERS),
        conviction=int(round(_clamp(conviction, 0, 100))) if conviction is not None else 0,
        thesis_summary=sanitize_text(raw.get("thesisSummary")) or "",
        bull_case=split_bullets(raw.get("bullCase")),
        bear_case=split_bullets(raw.get("bearCase")),
        key_drivers=sanitize_list(raw.get("keyDrivers")),
        warning_flags=sanitize_list(warning_flags),
        positive_catalysts=sanitize_list(raw.get("positiveCatalysts")),
        time_horizon_years=int(round(horizon)) if horizon is not None and horizon > 0 else None,
        multibagger_potential=_pick(raw.get("multiBaggerPotential"), MULTIBAGGER_POTENTIALS, upper=True),
        position_sizing_hint=_pick(raw.get("positionSizingHint"), POSITION_SIZING_HINTS, upper=True),
        notes_for_ui=sanitize_text(raw.get("notesForUI")) or "",
        primary_moat_type=_pick(raw.get("primaryMoatType"), MOAT_TYPES) or "none",
        moat_score=int(round(_clamp(moat_score, 0, 10))) if moat_score is not None else 0,
        tam_category=_pick(raw.get("tamCategory"), TAM_CATEGORIES),
        tam_penetration=_pick(raw.get("tamPenetration"), TAM_PENETRATIONS),
        founder_led=_flag(raw, "founderLed"),
        insider_ownership=_clamp(insider, 0.0, 1.0) if insider is not None else None,
    )
