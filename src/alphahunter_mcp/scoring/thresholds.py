"""Scoring configuration.

The sector benchmark table and tier cut-offs live in one immutable
``ScoringConfig`` that is passed explicitly into every scorer.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from alphahunter_mcp.models import FinalTier, MultiBaggerTier, Sector


@dataclass(frozen=True)
class SectorThresholds:
    """Gross margin and ROIC cut-offs (percent) for one sector."""

    gross_margin_top: float
    gross_margin_mid: float
    roic_top: float
    roic_mid: float


SECTOR_THRESHOLDS: Mapping[Sector, SectorThresholds] = MappingProxyType(
    {
        Sector.SAAS: SectorThresholds(gross_margin_top=75, gross_margin_mid=60, roic_top=20, roic_mid=12),
        # High margins only once commercial
        Sector.BIOTECH: SectorThresholds(gross_margin_top=85, gross_margin_mid=70, roic_top=15, roic_mid=8),
        Sector.SPACE_TECH: SectorThresholds(gross_margin_top=40, gross_margin_mid=25, roic_top=15, roic_mid=8),
        Sector.QUANTUM: SectorThresholds(gross_margin_top=50, gross_margin_mid=30, roic_top=15, roic_mid=8),
        Sector.HARDWARE: SectorThresholds(gross_margin_top=45, gross_margin_mid=30, roic_top=15, roic_mid=8),
        Sector.FINTECH: SectorThresholds(gross_margin_top=60, gross_margin_mid=45, roic_top=18, roic_mid=10),
        Sector.CONSUMER: SectorThresholds(gross_margin_top=50, gross_margin_mid=35, roic_top=15, roic_mid=8),
        Sector.INDUSTRIAL: SectorThresholds(gross_margin_top=35, gross_margin_mid=20, roic_top=12, roic_mid=6),
        Sector.OTHER: SectorThresholds(gross_margin_top=50, gross_margin_mid=30, roic_top=15, roic_mid=8),
    }
)

# Multi-bagger (quant) tiers, checked top-down
MULTIBAGGER_TIER_THRESHOLDS: tuple[tuple[int, MultiBaggerTier], ...] = (
    (80, MultiBaggerTier.TIER_1),
    (65, MultiBaggerTier.TIER_2),
    (55, MultiBaggerTier.TIER_3),
)

# Final (quant + AI + risk) tiers, checked top-down
FINAL_TIER_THRESHOLDS: tuple[tuple[int, FinalTier], ...] = (
    (85, FinalTier.TIER_1),
    (65, FinalTier.TIER_2),
    (50, FinalTier.TIER_3),
)


@dataclass(frozen=True)
class ScoringConfig:
    sectors: Mapping[Sector, SectorThresholds] = field(default_factory=lambda: SECTOR_THRESHOLDS)
    multibagger_tiers: tuple[tuple[int, MultiBaggerTier], ...] = MULTIBAGGER_TIER_THRESHOLDS
    final_tiers: tuple[tuple[int, FinalTier], ...] = FINAL_TIER_THRESHOLDS
    score_cap: int = 100

    def for_sector(self, sector: Sector) -> SectorThresholds:
        """Thresholds for ``sector``, falling back to the Other row."""
        return self.sectors.get(sector) or self.sectors[Sector.OTHER]

    def multibagger_tier(self, score: float) -> MultiBaggerTier:
        for cutoff, tier in self.multibagger_tiers:
            if score >= cutoff:
                return tier
        return MultiBaggerTier.NOT_INTERESTING

    def final_tier(self, score: float) -> FinalTier:
        for cutoff, tier in self.final_tiers:
            if score >= cutoff:
                return tier
        return FinalTier.NOT_INTERESTING


DEFAULT_CONFIG = ScoringConfig()
