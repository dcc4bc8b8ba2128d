"""Immutable value objects shared by the scoring core.

Every entity here is created once per analysis call and never mutated.
Categorical inputs are ``str`` enums so they serialize as their display
value; members named ``UNKNOWN`` stand for a missing or unrecognized source
string and always score the documented default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from alphahunter_mcp.utils.normalize import to_jsonable


class Sector(str, Enum):
    SAAS = "SaaS"
    BIOTECH = "Biotech"
    SPACE_TECH = "SpaceTech"
    QUANTUM = "Quantum"
    HARDWARE = "Hardware"
    FINTECH = "FinTech"
    CONSUMER = "Consumer"
    INDUSTRIAL = "Industrial"
    OTHER = "Other"


class MarginTrend(str, Enum):
    EXPANDING = "Expanding"
    STABLE = "Stable"
    CONTRACTING = "Contracting"
    UNKNOWN = "Unknown"


class RevenueType(str, Enum):
    RECURRING = "Recurring"
    CONSUMABLE = "Consumable"
    TRANSACTIONAL = "Transactional"
    ONE_TIME = "One-time"
    PROJECT_BASED = "Project-based"
    UNKNOWN = "Unknown"


class InsiderActivity(str, Enum):
    BUYING = "Buying"
    NEUTRAL = "Neutral"
    SELLING = "Selling"
    UNKNOWN = "Unknown"


class TamPenetration(str, Enum):
    BELOW_1 = "<1%"
    FROM_1_TO_5 = "1-5%"
    FROM_5_TO_10 = "5-10%"
    ABOVE_10 = ">10%"
    UNKNOWN = "Unknown"


class Rating(str, Enum):
    """Shared High/Medium/Low scale for catalyst density and asymmetry."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    UNKNOWN = "Unknown"


class PricingPower(str, Enum):
    STRONG = "Strong"
    NEUTRAL = "Neutral"
    WEAK = "Weak"
    UNKNOWN = "Unknown"


class MultiBaggerTier(str, Enum):
    TIER_1 = "Tier 1"
    TIER_2 = "Tier 2"
    TIER_3 = "Tier 3"
    NOT_INTERESTING = "Not Interesting"


class FinalTier(str, Enum):
    TIER_1 = "Tier 1"
    TIER_2 = "Tier 2"
    TIER_3 = "Tier 3"
    NOT_INTERESTING = "Not Interesting"
    DISQUALIFIED = "Disqualified"


class Verdict(str, Enum):
    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    WATCH = "Watch"
    PASS = "Pass"
    DISQUALIFIED = "Disqualified"


class EarningsQuality(str, Enum):
    PASS = "Pass"
    WARN = "Warn"
    FAIL = "Fail"


class SqueezeTier(str, Enum):
    NONE = "None"
    WATCH = "Watch"
    MODERATE = "Moderate"
    STRONG = "Strong"


# ============================================================================
# FUNDAMENTALS & SCORES
# ============================================================================


@dataclass(frozen=True)
class RevenuePoint:
    date: str
    value: float


@dataclass(frozen=True)
class FundamentalData:
    """Normalized per-run snapshot of a company's fundamentals.

    Units: margins, ROIC, ownership and forecast growth are percentages
    (``72.0`` means 72%); ``roe``, ``fcf_margin`` and ``revenue_growth`` are
    fractions (``0.35`` means 35%). ``revenue_history`` is quarterly, newest
    first.
    """

    ticker: str
    sector: Sector = Sector.OTHER
    revenue_history: tuple[RevenuePoint, ...] = ()
    gross_margin: float | None = None
    gross_margin_trend: MarginTrend = MarginTrend.UNKNOWN
    revenue_type: RevenueType = RevenueType.UNKNOWN
    roic: float | None = None
    is_profitable: bool = False
    revenue_growth_forecast: float = 0.0
    founder_led: bool = False
    insider_ownership_pct: float = 0.0
    net_insider_buying: InsiderActivity = InsiderActivity.UNKNOWN
    institutional_ownership_pct: float = 0.0
    ps_ratio: float = 0.0
    pe_ratio: float | None = None
    forward_pe_ratio: float | None = None
    catalyst_density: Rating = Rating.UNKNOWN
    asymmetry_score: Rating = Rating.UNKNOWN
    pricing_power: PricingPower = PricingPower.UNKNOWN
    tam_penetration: TamPenetration = TamPenetration.UNKNOWN
    roe: float = 0.0
    fcf_margin: float = 0.0
    revenue_growth: float = 0.0

    @property
    def revenue_values(self) -> list[float]:
        return [point.value for point in self.revenue_history]


@dataclass(frozen=True)
class PillarScore:
    score: int
    max_score: int
    rationale: tuple[str, ...]


@dataclass(frozen=True)
class MultiBaggerScore:
    total_score: int
    raw_score: int
    tier: MultiBaggerTier
    pillars: dict[str, PillarScore]
    bonuses: tuple[str, ...]
    summary: str


# ============================================================================
# FINANCIAL STATEMENTS & RISK
# ============================================================================


@dataclass(frozen=True)
class IncomeStatement:
    date: str
    revenue: float = 0.0
    gross_profit: float = 0.0
    operating_income: float = 0.0
    net_income: float = 0.0
    weighted_average_shares_diluted: float = 0.0
    gross_profit_ratio: float | None = None

    @property
    def gross_margin_ratio(self) -> float:
        """Reported gross-profit ratio, else gross profit over revenue (0 when revenue is 0)."""
        if self.gross_profit_ratio is not None:
            return self.gross_profit_ratio
        if self.revenue == 0:
            return 0.0
        return self.gross_profit / self.revenue


@dataclass(frozen=True)
class BalanceSheet:
    date: str
    cash_and_equivalents: float = 0.0
    short_term_investments: float = 0.0
    total_current_assets: float = 0.0
    total_assets: float = 0.0
    total_current_liabilities: float = 0.0
    total_liabilities: float = 0.0
    retained_earnings: float = 0.0


@dataclass(frozen=True)
class CashFlowStatement:
    date: str
    operating_cash_flow: float = 0.0
    capital_expenditure: float = 0.0
    free_cash_flow: float | None = None

    @property
    def fcf(self) -> float:
        """Reported free cash flow, else OCF + CapEx (CapEx is reported negative)."""
        if self.free_cash_flow is not None:
            return self.free_cash_flow
        return self.operating_cash_flow + self.capital_expenditure


INFINITE_RUNWAY = 999.0


@dataclass(frozen=True)
class RiskFlags:
    beneish_m_score: float
    altman_z_score: float
    dilution_rate: float
    cash_runway_quarters: float
    short_interest_pct: float
    disqualified: bool
    disqualify_reasons: tuple[str, ...]
    warnings: tuple[str, ...]
    risk_penalty: int
    quality_of_earnings: EarningsQuality
    fcf_conversion_ratio: float
    consecutive_negative_fcf_quarters: int

    def __post_init__(self) -> None:
        if self.disqualified != bool(self.disqualify_reasons):
            raise ValueError("disqualified must be True exactly when disqualify_reasons is non-empty")
        if self.risk_penalty > 0:
            raise ValueError(f"risk_penalty must be <= 0, got {self.risk_penalty}")

    @property
    def has_infinite_runway(self) -> bool:
        return self.cash_runway_quarters == INFINITE_RUNWAY


# ============================================================================
# TECHNICALS
# ============================================================================


@dataclass(frozen=True)
class PriceSnapshot:
    """Current price plus daily closes, newest first."""

    price: float
    history: tuple[float, ...] = ()
    sma200: float | None = None
    week52_high: float | None = None
    week52_low: float | None = None


@dataclass(frozen=True)
class TechnicalScore:
    total_score: int
    relative_strength_score: int
    sma200_score: int
    week52_high_score: int
    rationale: tuple[str, ...]


@dataclass(frozen=True)
class SqueezeSetup:
    tier: SqueezeTier
    rationale: tuple[str, ...]


# ============================================================================
# AI JUDGMENT & FINAL OUTPUT
# ============================================================================


class AIStatus(str, Enum):
    STRONG_PASS = "STRONG_PASS"
    SOFT_PASS = "SOFT_PASS"
    MONITOR_ONLY = "MONITOR_ONLY"
    AVOID = "AVOID"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class AIJudgment:
    """Externally produced qualitative judgment. Merged, never re-derived."""

    status: AIStatus = AIStatus.UNKNOWN
    tier: str | None = None
    conviction: int = 0
    thesis_summary: str = ""
    bull_case: tuple[str, ...] = ()
    bear_case: tuple[str, ...] = ()
    key_drivers: tuple[str, ...] = ()
    warning_flags: tuple[str, ...] = ()
    positive_catalysts: tuple[str, ...] = ()
    time_horizon_years: int | None = None
    multibagger_potential: str | None = None
    position_sizing_hint: str | None = None
    notes_for_ui: str = ""
    primary_moat_type: str = "none"
    moat_score: int = 0
    tam_category: str | None = None
    tam_penetration: str | None = None
    founder_led: bool | None = None
    insider_ownership: float | None = None


@dataclass(frozen=True)
class FinalAnalysis:
    ticker: str
    final_score: int
    raw_score: int
    tier: FinalTier
    verdict: Verdict
    quant_score: int
    ai_score: int
    risk_penalty: int
    bonuses: tuple[str, ...]
    suggested_position_size: str
    warnings: tuple[str, ...]
    disqualify_reasons: tuple[str, ...]
    multibagger: MultiBaggerScore
    risk_flags: RiskFlags
    technical: TechnicalScore | None = None
    squeeze: SqueezeSetup | None = None
    ai_judgment: AIJudgment | None = None
    ai_rationale: tuple[str, ...] = field(default_factory=tuple)

    @property
    def disqualified(self) -> bool:
        return self.risk_flags.disqualified

    def to_dict(self) -> dict[str, Any]:
        return to_jsonable(self)
