# engine/tiers.py
#
# Ordered threshold tables used by the health scorer and the risk assessor.
# Each table is evaluated top-down; the first row whose bound is satisfied wins.
#

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Tier:
    bound: float
    score: float
    status: str = ""
    message: str = ""
    recommendations: Tuple[str, ...] = ()


def first_tier_at_least(value: float, tiers: Sequence[Tier]) -> Optional[Tier]:
    """First tier with value >= bound (tables sorted by descending bound)."""
    for tier in tiers:
        if value >= tier.bound:
            return tier
    return None


def first_tier_at_most(value: float, tiers: Sequence[Tier]) -> Optional[Tier]:
    """First tier with value <= bound (tables sorted by ascending bound)."""
    for tier in tiers:
        if value <= tier.bound:
            return tier
    return None


def fill_recommendations(tier: Tier, **context) -> List[str]:
    return [rec.format(**context) for rec in tier.recommendations]


# =============================================================================
# Health score subscore tables
# =============================================================================
PROTECTION_POINTS = {
    "umbrella": 7,
    "disability": 6,
    "life_gap_closed": 8,
    "estate_plan": 4,
}

SAVINGS_RATE_POINTS: List[Tier] = [
    Tier(20, 25), Tier(15, 20), Tier(10, 15), Tier(5, 10),
]

EMERGENCY_FUND_POINTS: List[Tier] = [
    Tier(6, 20), Tier(3, 15), Tier(1, 10),
]

DEBT_TO_INCOME_POINTS: List[Tier] = [
    Tier(2, 15), Tier(3, 12), Tier(4, 8), Tier(5, 4),
]

NET_WORTH_POINTS: List[Tier] = [
    Tier(5, 15), Tier(3, 12), Tier(1, 8),
]

# Subscore caps, summing to 100
HEALTH_SCORE_WEIGHTS = {
    "protection_coverage": 25,
    "savings_rate": 25,
    "emergency_fund": 20,
    "debt_to_income": 15,
    "net_worth_growth": 15,
}

# =============================================================================
# Risk category tables (score: 0-100, higher is riskier)
# =============================================================================
LIFE_INSURANCE_TIERS: List[Tier] = [
    Tier(1.0, 10, "excellent", "Excellent life insurance coverage"),
    Tier(0.7, 40, "good", "Good life insurance coverage, minor gap exists"),
    Tier(0.3, 70, "warning", "Significant life insurance gap detected"),
    Tier(float("-inf"), 95, "critical", "CRITICAL: Severe life insurance protection gap"),
]
LIFE_INSURANCE_RECOMMENDATIONS = (
    "Recommended coverage: {needed}",
    "Current gap: {gap}",
    "Consider term life insurance for cost-effective protection",
)

DISABILITY_NO_POLICY = Tier(
    0.0, 90, "critical", "No disability insurance coverage",
    (
        "Get disability insurance to protect income",
        "Recommended: {needed} annual coverage",
        "Aim for 60% income replacement",
    ),
)
DISABILITY_TIERS: List[Tier] = [
    Tier(0.6, 20, "good", "Adequate disability coverage",
         ("Maintain current coverage", "Review annually")),
    Tier(0.0, 60, "warning", "Disability coverage below recommended level",
         ("Recommended: {needed} annual coverage", "Current gap: {gap}")),
]

EMERGENCY_FUND_TIERS: List[Tier] = [
    Tier(6, 10, "excellent", "Excellent emergency fund reserves",
         ("Maintain current level", "Keep in high-yield savings")),
    Tier(3, 40, "good", "Good emergency fund, could be stronger",
         ("Build to 6 months of expenses", "Automate monthly contributions")),
    Tier(1, 70, "warning", "Insufficient emergency reserves",
         ("Priority: Build to 3-6 months expenses", "Start with $1,000 starter fund")),
    Tier(float("-inf"), 95, "critical", "CRITICAL: No emergency fund",
         ("URGENT: Build emergency fund immediately",
          "Target: 3-6 months of expenses",
          "Goal amount: {target}")),
]

DEBT_LEVEL_TIERS: List[Tier] = [
    Tier(2, 15, "excellent", "Excellent debt-to-income ratio",
         ("Maintain low debt levels", "Continue debt paydown")),
    Tier(3, 45, "good", "Manageable debt levels",
         ("Consider accelerated debt payoff", "Avoid new debt")),
    Tier(4, 70, "warning", "High debt burden",
         ("Create debt reduction plan", "Consider debt consolidation")),
    Tier(float("inf"), 90, "critical", "CRITICAL: Excessive debt levels",
         ("URGENT: Debt reduction required",
          "Seek credit counseling",
          "Stop accumulating new debt")),
]

# Age -> target retirement savings as a multiple of income
RETIREMENT_TARGET_BY_AGE: List[Tier] = [
    Tier(60, 8), Tier(50, 6), Tier(40, 3), Tier(30, 1),
]
# Bound is the share of the age target reached
RETIREMENT_TIERS: List[Tier] = [
    Tier(1.0, 15, "excellent"),
    Tier(0.7, 40, "good"),
    Tier(0.4, 65, "warning"),
    Tier(float("-inf"), 85, "critical"),
]
RETIREMENT_MESSAGE = "Retirement savings at {multiple:.1f}x income"
RETIREMENT_RECOMMENDATIONS = (
    "Target for age {age}: {target}x annual income",
    "Maximize employer 401(k) match",
    "Consider increasing contribution rate by 1-2%",
)

ESTATE_PLAN_IN_PLACE = Tier(
    1, 10, "excellent", "Estate plan in place",
    ("Review every 3-5 years", "Update after major life events"),
)
ESTATE_PLAN_MISSING = Tier(
    0, 75, "warning", "No estate plan",
    ("Create will and healthcare directives",
     "Consider living trust",
     "Designate beneficiaries on all accounts"),
)

UMBRELLA_IN_PLACE = Tier(
    1, 15, "excellent", "Umbrella policy in place",
    ("Maintain coverage", "Review limits annually"),
)
UMBRELLA_MISSING = Tier(
    0, 70, "warning", "No umbrella liability coverage",
    ("Consider $1-2M umbrella policy",
     "Protects assets from lawsuits",
     "Very cost-effective coverage"),
)

SAVINGS_RATE_TIERS: List[Tier] = [
    Tier(20, 10, "excellent", "Excellent savings rate",
         ("Maintain current discipline", "Maximize tax-advantaged accounts")),
    Tier(10, 40, "good", "Good savings rate",
         ("Aim to increase to 15-20%", "Automate savings")),
    Tier(5, 65, "warning", "Low savings rate",
         ("Increase to minimum 10%", "Review budget for opportunities")),
    Tier(float("-inf"), 90, "critical", "CRITICAL: Very low savings",
         ("URGENT: Start saving immediately",
          "Target: Save at least 10% of income",
          "Create and follow a budget")),
]


def round_half_up(value: float) -> int:
    """Half-up rounding: 2.5 -> 3, 14.5 -> 15."""
    return int(math.floor(value + 0.5))
