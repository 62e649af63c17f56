# engine/risk_assessment.py
#
# Classifies eight protection/savings categories into
# excellent / good / warning / critical, each with a 0-100 risk score.
#

from typing import Dict

from models import HouseholdSnapshot, DerivedMetrics, RiskAssessment, RiskCategory
from utils.currency import format_currency_output
from engine.tiers import (
    Tier,
    LIFE_INSURANCE_TIERS,
    LIFE_INSURANCE_RECOMMENDATIONS,
    DISABILITY_NO_POLICY,
    DISABILITY_TIERS,
    EMERGENCY_FUND_TIERS,
    DEBT_LEVEL_TIERS,
    RETIREMENT_TARGET_BY_AGE,
    RETIREMENT_TIERS,
    RETIREMENT_MESSAGE,
    RETIREMENT_RECOMMENDATIONS,
    ESTATE_PLAN_IN_PLACE,
    ESTATE_PLAN_MISSING,
    UMBRELLA_IN_PLACE,
    UMBRELLA_MISSING,
    SAVINGS_RATE_TIERS,
    first_tier_at_least,
    first_tier_at_most,
    fill_recommendations,
    round_half_up,
)


def _category(name: str, tier: Tier, **context) -> RiskCategory:
    return RiskCategory(
        name=name,
        score=tier.score,
        status=tier.status,
        message=tier.message,
        recommendations=fill_recommendations(tier, **context),
    )


# =============================================================================
# Per-category assessors
# =============================================================================

def assess_life_insurance(snapshot: HouseholdSnapshot, metrics: DerivedMetrics) -> RiskCategory:
    needed = metrics.life_insurance_needed
    coverage_ratio = snapshot.life_insurance_coverage / needed if needed > 0 else 1.0
    tier = first_tier_at_least(coverage_ratio, LIFE_INSURANCE_TIERS)

    return RiskCategory(
        name="Life Insurance",
        score=tier.score,
        status=tier.status,
        message=tier.message,
        recommendations=[
            rec.format(
                needed=format_currency_output(needed),
                gap=format_currency_output(metrics.life_insurance_gap),
            )
            for rec in LIFE_INSURANCE_RECOMMENDATIONS
        ],
    )


def assess_disability(snapshot: HouseholdSnapshot, metrics: DerivedMetrics) -> RiskCategory:
    needed = metrics.disability_insurance_needed
    context = dict(
        needed=format_currency_output(needed),
        gap=format_currency_output(metrics.disability_insurance_gap),
    )

    if not snapshot.has_disability_insurance:
        return _category("Disability Insurance", DISABILITY_NO_POLICY, **context)

    coverage_ratio = snapshot.disability_insurance_coverage / needed if needed > 0 else 1.0
    tier = first_tier_at_least(coverage_ratio, DISABILITY_TIERS)
    return _category("Disability Insurance", tier, **context)


def assess_emergency_fund(metrics: DerivedMetrics) -> RiskCategory:
    tier = first_tier_at_least(metrics.emergency_fund_months, EMERGENCY_FUND_TIERS)
    return _category(
        "Emergency Fund",
        tier,
        target=format_currency_output(metrics.total_monthly_expenses * 6),
    )


def assess_debt(metrics: DerivedMetrics) -> RiskCategory:
    tier = first_tier_at_most(metrics.debt_to_income_ratio, DEBT_LEVEL_TIERS)
    return _category("Debt Level", tier)


def retirement_target_multiple(age: int) -> int:
    """Age-banded retirement savings benchmark, as a multiple of income."""
    tier = first_tier_at_least(age, RETIREMENT_TARGET_BY_AGE)
    return int(tier.score) if tier is not None else 0


def assess_retirement(snapshot: HouseholdSnapshot, metrics: DerivedMetrics) -> RiskCategory:
    retirement_savings = snapshot.retirement_401k + snapshot.retirement_ira
    income = metrics.total_income
    multiple = retirement_savings / income if income > 0 else 0.0
    target = retirement_target_multiple(snapshot.age)

    # RETIREMENT_TIERS bounds are shares of the age target
    tier = next(t for t in RETIREMENT_TIERS if multiple >= target * t.bound)

    return RiskCategory(
        name="Retirement Savings",
        score=tier.score,
        status=tier.status,
        message=RETIREMENT_MESSAGE.format(multiple=multiple),
        recommendations=[
            rec.format(age=snapshot.age, target=target)
            for rec in RETIREMENT_RECOMMENDATIONS
        ],
    )


def assess_estate(snapshot: HouseholdSnapshot) -> RiskCategory:
    tier = ESTATE_PLAN_IN_PLACE if snapshot.has_estate_plan else ESTATE_PLAN_MISSING
    return _category("Estate Planning", tier)


def assess_liability(snapshot: HouseholdSnapshot) -> RiskCategory:
    tier = UMBRELLA_IN_PLACE if snapshot.has_umbrella_policy else UMBRELLA_MISSING
    return _category("Liability Protection", tier)


def assess_savings(metrics: DerivedMetrics) -> RiskCategory:
    tier = first_tier_at_least(metrics.savings_rate, SAVINGS_RATE_TIERS)
    return _category("Savings Rate", tier)


# =============================================================================
# Main assessment
# =============================================================================

def generate_risk_assessment(snapshot: HouseholdSnapshot, metrics: DerivedMetrics) -> RiskAssessment:
    """
    Runs all eight category assessors.

    Returns:
        RiskAssessment with the categories keyed by id, the rounded mean score,
        and the names of categories in critical status (in category order).
    """
    categories: Dict[str, RiskCategory] = {
        "life_insurance": assess_life_insurance(snapshot, metrics),
        "disability": assess_disability(snapshot, metrics),
        "emergency": assess_emergency_fund(metrics),
        "debt": assess_debt(metrics),
        "retirement": assess_retirement(snapshot, metrics),
        "estate": assess_estate(snapshot),
        "liability": assess_liability(snapshot),
        "savings": assess_savings(metrics),
    }

    scores = [cat.score for cat in categories.values()]
    overall = round_half_up(sum(scores) / len(scores))

    critical_gaps = [cat.name for cat in categories.values() if cat.status == "critical"]

    return RiskAssessment(
        categories=categories,
        overall_risk_score=overall,
        critical_gaps=critical_gaps,
    )
