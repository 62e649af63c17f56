# engine/retirement.py
#
# Deterministic retirement projection and the Social Security estimate it nets
# against. The stochastic view lives in engine/simulator.py.
#

import logging
from datetime import date
from typing import Optional

from models import HouseholdSnapshot, DerivedMetrics, RetirementAnalysis, SocialSecurityEstimate
from engine.goals import monthly_payment_for_goal
from engine.rmd_tables import get_rmd_start_age
from engine.tiers import round_half_up
from utils.ss_utils import (
    get_full_retirement_age,
    estimate_pia,
    clamp_claim_age,
    claiming_adjustment_factor,
)
from config.market_assumptions import (
    default_inflation_rate,
    default_investment_return_rate,
    default_retirement_age,
    default_income_replacement,
    safe_withdrawal_multiple,
)

logger = logging.getLogger(__name__)


def _assumption(value: Optional[float], default: float) -> float:
    return default if value is None else value


def estimate_social_security(
    annual_income: float,
    current_age: int,
    as_of: date,
    claim_age: Optional[float] = None,
) -> SocialSecurityEstimate:
    """
    Simplified PIA estimate treating current income as representative of
    lifetime indexed earnings.

    Args:
        annual_income: Household earned income.
        current_age: Age today, used to derive the birth year.
        as_of: Valuation date.
        claim_age: Planned claiming age (clamped to 62-70). Defaults to FRA.
    """
    birth_year = as_of.year - current_age
    fra = get_full_retirement_age(birth_year)

    claiming_age = fra if claim_age is None else clamp_claim_age(claim_age)

    pia = estimate_pia(annual_income / 12)
    monthly = pia * claiming_adjustment_factor(claiming_age, fra)

    return SocialSecurityEstimate(
        monthly_benefit=round_half_up(monthly),
        annual_benefit=round_half_up(monthly * 12),
        full_retirement_age=fra,
        claiming_age=claiming_age,
    )


def future_value_of_contributions(monthly_contribution: float, months: int, annual_rate: float) -> float:
    """FV of a level end-of-month contribution stream."""
    if monthly_contribution <= 0 or months <= 0:
        return 0.0
    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return monthly_contribution * months
    return monthly_contribution * (((1 + monthly_rate) ** months - 1) / monthly_rate)


def retirement_savings_balance(snapshot: HouseholdSnapshot) -> float:
    savings = snapshot.retirement_401k + snapshot.retirement_ira
    if snapshot.brokerage_is_retirement:
        savings += snapshot.brokerage
    return savings


def calculate_retirement_analysis(
    snapshot: HouseholdSnapshot,
    metrics: DerivedMetrics,
    as_of: date,
) -> RetirementAnalysis:
    """
    Projects retirement savings to the target retirement age and sizes the gap
    against a 4%-rule savings target net of Social Security.
    """
    goals = snapshot.goals
    retirement_age = (goals.retirement_age if goals is not None else None) or default_retirement_age
    years_to_retirement = max(0, retirement_age - snapshot.age)
    months_to_retirement = years_to_retirement * 12

    inflation_rate = _assumption(snapshot.assumptions.inflation_rate, default_inflation_rate)
    return_rate = _assumption(snapshot.assumptions.investment_return_rate, default_investment_return_rate)
    inflation_factor = (1 + inflation_rate) ** years_to_retirement

    # --- 1. Income needed from savings, in retirement-year dollars ---
    desired_income_today = (goals.retirement_income if goals is not None else None) \
        or metrics.total_income * default_income_replacement
    future_desired_income = desired_income_today * inflation_factor

    if snapshot.assumptions.estimated_monthly_ss is not None:
        social_security = snapshot.assumptions.estimated_monthly_ss * 12
    else:
        social_security = estimate_social_security(
            metrics.total_income,
            snapshot.age,
            as_of,
            claim_age=snapshot.assumptions.social_security_start_age,
        ).annual_benefit
    future_social_security = social_security * inflation_factor

    income_from_savings = max(0.0, future_desired_income - future_social_security)
    savings_needed = income_from_savings * safe_withdrawal_multiple

    # --- 2. Projected savings ---
    current_savings = retirement_savings_balance(snapshot)
    projected = current_savings * (1 + return_rate) ** years_to_retirement
    projected += future_value_of_contributions(
        snapshot.monthly_retirement_contribution, months_to_retirement, return_rate
    )

    # --- 3. Gap and the contribution that closes it ---
    gap = max(0.0, savings_needed - projected)
    monthly_needed = 0.0
    if gap > 0 and months_to_retirement > 0:
        monthly_needed = monthly_payment_for_goal(0.0, gap, months_to_retirement, return_rate)

    logger.debug(
        f"Retirement at {retirement_age}: projected ${projected:,.0f} vs needed "
        f"${savings_needed:,.0f} (gap ${gap:,.0f})"
    )

    return RetirementAnalysis(
        years_to_retirement=years_to_retirement,
        projected_savings_at_retirement=projected,
        savings_needed_at_retirement=savings_needed,
        gap=gap,
        monthly_savings_needed=monthly_needed,
        estimated_social_security=social_security,
        inflation_adjusted_income=future_desired_income,
        rmd_start_age=get_rmd_start_age(as_of.year - snapshot.age),
    )
