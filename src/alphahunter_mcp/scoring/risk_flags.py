"""Forensic risk flags and kill switches.

Computes manipulation (Beneish-style), bankruptcy (Altman-style), dilution,
cash runway and earnings-quality checks from newest-first quarterly
statements, then applies the decision policy:

- hard kills populate ``disqualify_reasons`` and make the company
  uninvestable regardless of any other score
- warnings carry a penalty (possibly zero) summed into ``risk_penalty``

Disqualification is never expressed through the penalty value.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from alphahunter_mcp.models import (
    INFINITE_RUNWAY,
    BalanceSheet,
    CashFlowStatement,
    EarningsQuality,
    IncomeStatement,
    RiskFlags,
)
from alphahunter_mcp.utils.financial import safe_divide

logger = logging.getLogger(__name__)

EARLY_STAGE_REVENUE = 50_000_000
SMALL_MID_CAP_CUTOFF = 20_000_000_000

BENEISH_KILL = -0.5
BENEISH_WARN = -1.78
ALTMAN_KILL = 0.0
ALTMAN_WARN = 1.8

RUNWAY_QUARTERS = 4
POSITIVE_FCF_QUARTERS_FOR_INFINITE = 3

QOE_MIN_QUARTERS = 4
QOE_MAX_QUARTERS = 8
QOE_FAIL_STREAK = 6
QOE_WARN_STREAK = 4

# Not derivable from summary statements; held at the neutral index value
DSRI = AQI = DEPI = SGAI = 1.0


def _prior(items: Sequence, lookback: int = 4):
    """Year-ago period, else previous quarter, else the current period."""
    if len(items) > lookback:
        return items[lookback]
    if len(items) > 1:
        return items[1]
    return items[0]


def calculate_beneish_m_score(
    current_income: IncomeStatement,
    prior_income: IncomeStatement,
    current_balance: BalanceSheet,
    prior_balance: BalanceSheet,
) -> float:
    """
    Beneish-style M-Score. Above -1.78 suggests possible manipulation.

    DSRI, AQI, DEPI and SGAI need receivables, depreciation and SG&A detail
    that summary statements lack, so they are fixed at 1.0.
    """
    gm_prior = prior_income.gross_margin_ratio
    current_gm = current_income.gross_margin_ratio
    gmi = safe_divide(gm_prior, current_gm) if gm_prior > 0 else 1.0

    sgi = safe_divide(current_income.revenue, prior_income.revenue)

    cash_change = current_balance.cash_and_equivalents - prior_balance.cash_and_equivalents
    tata = safe_divide(current_income.net_income - cash_change, current_balance.total_assets)

    leverage_current = safe_divide(current_balance.total_liabilities, current_balance.total_assets)
    leverage_prior = safe_divide(prior_balance.total_liabilities, prior_balance.total_assets)
    lvgi = safe_divide(leverage_current, leverage_prior) if leverage_prior > 0 else 1.0

    return (
        -4.84
        + 0.92 * DSRI
        + 0.528 * gmi
        + 0.404 * AQI
        + 0.892 * sgi
        + 0.115 * DEPI
        - 0.172 * SGAI
        + 4.679 * tata
        - 0.327 * lvgi
    )


def calculate_altman_z_score(income: IncomeStatement, balance: BalanceSheet, market_cap: float) -> float:
    """
    Altman-style Z-Score.

    Z > 2.99 safe, 1.81-2.99 grey zone, below 1.81 distress.
    """
    total_assets = balance.total_assets or 1
    working_capital = balance.total_current_assets - balance.total_current_liabilities

    x1 = safe_divide(working_capital, total_assets)
    x2 = safe_divide(balance.retained_earnings, total_assets)
    x3 = safe_divide(income.operating_income, total_assets)
    x4 = safe_divide(market_cap, balance.total_liabilities or 1)
    x5 = safe_divide(income.revenue, total_assets)

    return 1.2 * x1 + 1.4 * x2 + 3.3 * x3 + 0.6 * x4 + 1.0 * x5


def calculate_dilution_rate(current_income: IncomeStatement, prior_income: IncomeStatement) -> float:
    """YoY % change in diluted weighted-average shares (0 when prior is unknown)."""
    current = current_income.weighted_average_shares_diluted or 0
    prior = prior_income.weighted_average_shares_diluted or 0
    if prior == 0:
        return 0.0
    return (current - prior) / prior * 100


def calculate_cash_runway(balance: BalanceSheet, cash_flows: Sequence[CashFlowStatement]) -> float:
    """
    Cash runway in quarters: (cash + short-term investments) / average burn.

    Returns INFINITE_RUNWAY when at least 3 of the last 4 quarters had
    positive free cash flow or the 4-quarter average FCF is non-negative.
    Returns 0 when there is no cash-flow history at all.
    """
    cash = (balance.cash_and_equivalents or 0) + (balance.short_term_investments or 0)

    if not cash_flows:
        return 0.0

    recent = [cf.fcf for cf in cash_flows[:RUNWAY_QUARTERS]]
    positive_quarters = sum(1 for fcf in recent if fcf > 0)
    if positive_quarters >= POSITIVE_FCF_QUARTERS_FOR_INFINITE:
        return INFINITE_RUNWAY

    avg_fcf = sum(recent) / len(recent)
    if avg_fcf >= 0:
        return INFINITE_RUNWAY

    return cash / abs(avg_fcf)


@dataclass(frozen=True)
class EarningsQualityResult:
    status: EarningsQuality
    consecutive_negative: int
    conversion_ratio: float
    sufficient_history: bool = True


def _is_divergent(income: IncomeStatement, cash_flow: CashFlowStatement) -> bool:
    ni = income.net_income
    ocf = cash_flow.operating_cash_flow
    return ni > 0 and (ocf < 0 or ocf < ni * 0.5)


def calculate_quality_of_earnings(
    incomes: Sequence[IncomeStatement],
    cash_flows: Sequence[CashFlowStatement],
) -> EarningsQualityResult:
    """
    Quality of earnings from net income vs operating cash flow.

    Counts the unbroken streak, walking back from the newest quarter, of
    quarters where net income is positive but OCF is negative or below half
    of net income. Streak >= 6 fails, >= 4 warns.
    """
    if len(incomes) < QOE_MIN_QUARTERS or len(cash_flows) < QOE_MIN_QUARTERS:
        return EarningsQualityResult(
            status=EarningsQuality.WARN,
            consecutive_negative=0,
            conversion_ratio=1.0,
            sufficient_history=False,
        )

    periods = min(len(incomes), len(cash_flows), QOE_MAX_QUARTERS)
    streak = 0
    for i in range(periods):
        if not _is_divergent(incomes[i], cash_flows[i]):
            break
        streak += 1

    ttm_net_income = sum(i.net_income for i in incomes[:4])
    ttm_fcf = sum(c.fcf for c in cash_flows[:4])
    # Conversion is not meaningful for loss-makers
    conversion = ttm_fcf / ttm_net_income if ttm_net_income > 0 else 1.0

    if streak >= QOE_FAIL_STREAK:
        status = EarningsQuality.FAIL
    elif streak >= QOE_WARN_STREAK:
        status = EarningsQuality.WARN
    else:
        status = EarningsQuality.PASS

    return EarningsQualityResult(status=status, consecutive_negative=streak, conversion_ratio=conversion)


class _FlagCollector:
    def __init__(self) -> None:
        self.kills: list[str] = []
        self.warnings: list[str] = []
        self.penalty = 0

    def kill(self, message: str) -> None:
        self.kills.append(message)

    def warn(self, message: str, penalty: int = 0) -> None:
        self.warnings.append(message)
        self.penalty -= penalty


def calculate_risk_flags(
    income_statements: Sequence[IncomeStatement],
    balance_sheets: Sequence[BalanceSheet],
    cash_flow_statements: Sequence[CashFlowStatement],
    market_cap: float,
    ttm_revenue: float,
    short_interest_pct: float = 0.0,
) -> RiskFlags:
    """
    Run every forensic check and apply the kill-switch policy.

    Args:
        income_statements: Quarterly income statements, newest first (at least one)
        balance_sheets: Quarterly balance sheets, newest first (at least one)
        cash_flow_statements: Quarterly cash-flow statements, newest first
        market_cap: Current market capitalization
        ttm_revenue: Trailing-twelve-month revenue (early-stage gate)
        short_interest_pct: Short interest as % of float (default: 0)

    Returns:
        RiskFlags with hard kills, warnings and the summed warning penalty

    Raises:
        ValueError: if no income statement or balance sheet is given
    """
    if not income_statements or not balance_sheets:
        raise ValueError("At least one income statement and one balance sheet are required")

    current_income = income_statements[0]
    prior_income = _prior(income_statements)
    current_balance = balance_sheets[0]
    prior_balance = _prior(balance_sheets)

    beneish = calculate_beneish_m_score(current_income, prior_income, current_balance, prior_balance)
    altman = calculate_altman_z_score(current_income, current_balance, market_cap)
    dilution = calculate_dilution_rate(current_income, prior_income)
    runway = calculate_cash_runway(current_balance, cash_flow_statements)
    qoe = calculate_quality_of_earnings(income_statements, cash_flow_statements)

    flags = _FlagCollector()

    # 1. Manipulation: relaxed for early-stage companies
    if beneish > BENEISH_KILL:
        if ttm_revenue < EARLY_STAGE_REVENUE:
            flags.warn(
                f"Beneish M-Score {beneish:.2f} > -0.5 (high manipulation risk, but early stage)",
                penalty=10,
            )
        else:
            flags.kill(f"Beneish M-Score {beneish:.2f} > -0.5 (extreme manipulation risk)")
    elif beneish > BENEISH_WARN:
        flags.warn(f"Beneish M-Score {beneish:.2f} > -1.78 (possible manipulation)", penalty=5)

    # 2. Dilution
    if dilution > 300:
        flags.kill(f"Dilution rate {dilution:.1f}% > 300% (massive dilution)")
    elif dilution > 25:
        flags.warn(f"Dilution rate {dilution:.1f}% > 25% (high dilution)", penalty=10)
    elif dilution > 10:
        flags.warn(f"Dilution rate {dilution:.1f}% > 10% (moderate dilution)", penalty=5)

    # 3. Cash runway
    if runway < RUNWAY_QUARTERS and runway != INFINITE_RUNWAY:
        if current_income.net_income < 0:
            if runway < 1:
                flags.kill(f"Cash runway {runway:.1f} quarters < 1 (imminent insolvency risk)")
            else:
                flags.warn(f"Cash runway tight: {runway:.1f} quarters", penalty=10)
        else:
            flags.warn(f"Cash runway low: {runway:.1f} quarters", penalty=5)

    # 4. Bankruptcy: hard kill only for small/mid caps
    if altman < ALTMAN_KILL and market_cap < SMALL_MID_CAP_CUTOFF:
        flags.kill(f"Altman Z-Score {altman:.2f} < 0 (severe distress)")
    elif altman < ALTMAN_WARN:
        flags.warn(f"Altman Z-Score {altman:.2f} < 1.8 (distress zone)", penalty=5)

    # 5. Short interest
    if short_interest_pct > 25:
        flags.warn(
            f"Short interest {short_interest_pct:.1f}% > 25% (extreme bearish sentiment)",
            penalty=5,
        )
    elif short_interest_pct > 15:
        flags.warn(f"High Short Interest: {short_interest_pct:.1f}%")

    # 6. Quality of earnings
    if qoe.status is EarningsQuality.FAIL:
        flags.warn(
            f"Quality of Earnings Fail: {qoe.consecutive_negative} consecutive quarters of divergence",
            penalty=5,
        )
    elif qoe.status is EarningsQuality.WARN:
        if qoe.sufficient_history:
            flags.warn(
                f"Quality of Earnings Warning: {qoe.consecutive_negative} consecutive quarters of divergence"
            )
        else:
            flags.warn("Quality of Earnings Warning: insufficient history (need 4 quarters)")

    if flags.kills:
        logger.debug(f"Risk kill switches fired: {flags.kills}")

    return RiskFlags(
        beneish_m_score=beneish,
        altman_z_score=altman,
        dilution_rate=dilution,
        cash_runway_quarters=runway,
        short_interest_pct=short_interest_pct,
        disqualified=bool(flags.kills),
        disqualify_reasons=tuple(flags.kills),
        warnings=tuple(flags.warnings),
        risk_penalty=flags.penalty,
        quality_of_earnings=qoe.status,
        fcf_conversion_ratio=qoe.conversion_ratio,
        consecutive_negative_fcf_quarters=qoe.consecutive_negative,
    )
