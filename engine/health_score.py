# engine/health_score.py

from models import HouseholdSnapshot, HealthScoreBreakdown
from engine.tiers import (
    PROTECTION_POINTS,
    SAVINGS_RATE_POINTS,
    EMERGENCY_FUND_POINTS,
    DEBT_TO_INCOME_POINTS,
    NET_WORTH_POINTS,
    first_tier_at_least,
    first_tier_at_most,
    round_half_up,
)


def protection_score(snapshot: HouseholdSnapshot, life_insurance_gap: float) -> float:
    score = 0
    if snapshot.has_umbrella_policy:
        score += PROTECTION_POINTS["umbrella"]
    if snapshot.has_disability_insurance:
        score += PROTECTION_POINTS["disability"]
    if life_insurance_gap == 0:
        score += PROTECTION_POINTS["life_gap_closed"]
    if snapshot.has_estate_plan:
        score += PROTECTION_POINTS["estate_plan"]
    return score


def savings_rate_score(savings_rate: float) -> float:
    tier = first_tier_at_least(savings_rate, SAVINGS_RATE_POINTS)
    if tier is not None:
        return tier.score
    # Below the lowest tier, one point per percent saved
    return max(0.0, savings_rate)


def emergency_fund_score(months: float) -> float:
    tier = first_tier_at_least(months, EMERGENCY_FUND_POINTS)
    if tier is not None:
        return tier.score
    return max(0.0, months * 5)


def debt_to_income_score(ratio: float) -> float:
    tier = first_tier_at_most(ratio, DEBT_TO_INCOME_POINTS)
    return tier.score if tier is not None else 0


def net_worth_score(snapshot: HouseholdSnapshot, total_income: float) -> float:
    """Liquid + invested assets as a multiple of income."""
    if total_income <= 0:
        return 0
    invested = (snapshot.checking + snapshot.savings + snapshot.retirement_401k
                + snapshot.retirement_ira + snapshot.brokerage)
    ratio = invested / total_income
    tier = first_tier_at_least(ratio, NET_WORTH_POINTS)
    if tier is not None:
        return tier.score
    return max(0.0, ratio * 5)


def calculate_health_score(
    snapshot: HouseholdSnapshot,
    savings_rate: float,
    emergency_fund_months: float,
    debt_to_income_ratio: float,
    life_insurance_gap: float,
    total_income: float,
) -> HealthScoreBreakdown:
    """
    Financial health score (0-100) from five capped subscores:
    protection 25, savings rate 25, emergency fund 20, debt-to-income 15,
    net worth 15. Each subscore is rounded; the total is their sum.
    """
    return HealthScoreBreakdown(
        protection_coverage=round_half_up(protection_score(snapshot, life_insurance_gap)),
        savings_rate=round_half_up(savings_rate_score(savings_rate)),
        emergency_fund=round_half_up(emergency_fund_score(emergency_fund_months)),
        debt_to_income=round_half_up(debt_to_income_score(debt_to_income_ratio)),
        net_worth_growth=round_half_up(net_worth_score(snapshot, total_income)),
    )
