"""Build a FundamentalData snapshot from a JSON-like payload."""

from collections.abc import Mapping
from typing import Any

from alphahunter_mcp.data.statements import newest_first
from alphahunter_mcp.models import (
    FundamentalData,
    InsiderActivity,
    MarginTrend,
    PricingPower,
    Rating,
    RevenuePoint,
    RevenueType,
    Sector,
    TamPenetration,
)
from alphahunter_mcp.utils.validators import (
    coerce_bool,
    coerce_float,
    coerce_optional_float,
    parse_choice,
)

# field name -> accepted payload keys (snake_case first, then camelCase)
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "sector": ("sector",),
    "revenue_history": ("revenue_history", "revenueHistory"),
    "gross_margin": ("gross_margin", "grossMargin"),
    "gross_margin_trend": ("gross_margin_trend", "grossMarginTrend"),
    "revenue_type": ("revenue_type", "revenueType"),
    "roic": ("roic",),
    "is_profitable": ("is_profitable", "isProfitable"),
    "revenue_growth_forecast": ("revenue_growth_forecast", "revenueGrowthForecast"),
    "founder_led": ("founder_led", "founderLed"),
    "insider_ownership_pct": ("insider_ownership_pct", "insiderOwnershipPct"),
    "net_insider_buying": ("net_insider_buying", "netInsiderBuying"),
    "institutional_ownership_pct": ("institutional_ownership_pct", "institutionalOwnershipPct"),
    "ps_ratio": ("ps_ratio", "psRatio"),
    "pe_ratio": ("pe_ratio", "peRatio"),
    "forward_pe_ratio": ("forward_pe_ratio", "forwardPeRatio"),
    "catalyst_density": ("catalyst_density", "catalystDensity"),
    "asymmetry_score": ("asymmetry_score", "asymmetryScore"),
    "pricing_power": ("pricing_power", "pricingPower"),
    "tam_penetration": ("tam_penetration", "tamPenetration"),
    "roe": ("roe",),
    "fcf_margin": ("fcf_margin", "fcfMargin"),
    "revenue_growth": ("revenue_growth", "revenueGrowth"),
}


def _get(raw: Mapping[str, Any], name: str) -> Any:
    for key in FIELD_ALIASES[name]:
        if key in raw:
            return raw[key]
    return None


def _revenue_point(item: Any) -> RevenuePoint:
    if isinstance(item, Mapping):
        value = item.get("value", item.get("revenue"))
        return RevenuePoint(
            date=str(item.get("date", "")),
            value=coerce_float(value, field="revenue_history.value"),
        )
    return RevenuePoint(date="", value=coerce_float(item, field="revenue_history"))


def parse_revenue_history(items: Any) -> tuple[RevenuePoint, ...]:
    """
    Parse quarterly revenue points, newest first.

    Accepts ``{"date", "value"}`` objects (``revenue`` is accepted for
    ``value``) or bare numbers already ordered newest first. When every
    point carries a parseable date they are re-sorted newest first;
    otherwise input order is kept.
    """
    if items is None:
        return ()
    if not isinstance(items, (list, tuple)):
        raise ValueError(f"revenue_history must be a list, got {type(items).__name__}")
    return newest_first(_revenue_point(item) for item in items)


def fundamentals_from_dict(ticker: str, payload: Mapping[str, Any]) -> FundamentalData:
    """
    Build FundamentalData from a JSON payload.

    Categorical strings that are missing or unrecognized become the UNKNOWN
    member of their enum (Other for sector) so the scorers can name them.

    Raises:
        ValueError: if the payload is not an object or a numeric field holds
            a non-numeric value
    """
    if not isinstance(payload, Mapping):
        raise ValueError(f"Fundamentals payload must be a JSON object, got {type(payload).__name__}")

    def num(name: str) -> float:
        return coerce_float(_get(payload, name), field=name)

    def opt(name: str) -> float | None:
        return coerce_optional_float(_get(payload, name), field=name)

    return FundamentalData(
        ticker=ticker.upper(),
        sector=parse_choice(Sector, _get(payload, "sector"), Sector.OTHER),
        revenue_history=parse_revenue_history(_get(payload, "revenue_history")),
        gross_margin=opt("gross_margin"),
        gross_margin_trend=parse_choice(MarginTrend, _get(payload, "gross_margin_trend"), MarginTrend.UNKNOWN),
        revenue_type=parse_choice(RevenueType, _get(payload, "revenue_type"), RevenueType.UNKNOWN),
        roic=opt("roic"),
        is_profitable=coerce_bool(_get(payload, "is_profitable"), field="is_profitable"),
        revenue_growth_forecast=num("revenue_growth_forecast"),
        founder_led=coerce_bool(_get(payload, "founder_led"), field="founder_led"),
        insider_ownership_pct=num("insider_ownership_pct"),
        net_insider_buying=parse_choice(
            InsiderActivity, _get(payload, "net_insider_buying"), InsiderActivity.UNKNOWN
        ),
        institutional_ownership_pct=num("institutional_ownership_pct"),
        ps_ratio=num("ps_ratio"),
        pe_ratio=opt("pe_ratio"),
        forward_pe_ratio=opt("forward_pe_ratio"),
        catalyst_density=parse_choice(Rating, _get(payload, "catalyst_density"), Rating.UNKNOWN),
        asymmetry_score=parse_choice(Rating, _get(payload, "asymmetry_score"), Rating.UNKNOWN),
        pricing_power=parse_choice(PricingPower, _get(payload, "pricing_power"), PricingPower.UNKNOWN),
        tam_penetration=parse_choice(TamPenetration, _get(payload, "tam_penetration"), TamPenetration.UNKNOWN),
        roe=num("roe"),
        fcf_margin=num("fcf_margin"),
        revenue_growth=num("revenue_growth"),
    )
