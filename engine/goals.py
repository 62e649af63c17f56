# engine/goals.py
#
# Generic contribution solver and its application to the household's goals.
#

import logging
import math
from datetime import date
from typing import Optional

from models import (
    HouseholdSnapshot,
    DerivedMetrics,
    GoalProgress,
    GoalMonthlySavings,
    RetirementAnalysis,
)
from engine.metrics import liquid_assets, clamp_percent
from engine.tiers import round_half_up
from config.market_assumptions import (
    default_goal_return_rate,
    default_income_replacement,
    safe_withdrawal_multiple,
)
from config.planning_assumptions import (
    emergency_fund_horizon_months,
    emergency_fund_return_rate,
    down_payment_horizon_months,
    education_horizon_months,
    education_brokerage_share,
    major_purchase_horizon_months,
    major_purchase_return_rate,
    days_per_month,
)

logger = logging.getLogger(__name__)


def _is_invalid(value) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(value) or value < 0
    except TypeError:
        return True


def monthly_payment_for_goal(
    current_amount: float,
    target_amount: float,
    months_remaining: float,
    annual_return_rate: float,
) -> float:
    """
    Level end-of-month contribution that grows `current_amount` to
    `target_amount` in `months_remaining` months at a monthly-compounded
    `annual_return_rate` (decimal).

    Invalid input (None, NaN, negative) is logged and yields 0.
    """
    inputs = (current_amount, target_amount, months_remaining, annual_return_rate)
    if any(_is_invalid(v) for v in inputs):
        logger.warning(
            f"Invalid goal inputs (current={current_amount}, target={target_amount}, "
            f"months={months_remaining}, rate={annual_return_rate}). Returning 0."
        )
        return 0.0

    if months_remaining <= 0:
        return max(0.0, target_amount - current_amount)

    if target_amount <= current_amount:
        return 0.0

    monthly_rate = annual_return_rate / 12
    if monthly_rate == 0:
        return (target_amount - current_amount) / months_remaining

    growth = (1 + monthly_rate) ** months_remaining
    future_value_of_current = current_amount * growth
    remaining_gap = target_amount - future_value_of_current
    if remaining_gap <= 0:
        return 0.0

    # Ordinary annuity future-value inversion
    payment = remaining_gap / ((growth - 1) / monthly_rate)
    return max(0.0, payment)


def goal_return_rate(snapshot: HouseholdSnapshot) -> float:
    rate = snapshot.assumptions.investment_return_rate
    return default_goal_return_rate if rate is None else rate


def months_until(target: Optional[date], as_of: date, default_months: int) -> int:
    """Whole 30-day months from as_of to target, at least 1."""
    if target is None:
        return default_months
    days = (target - as_of).days
    return max(1, round_half_up(days / days_per_month))


# =============================================================================
# Goal progress (percent complete, 0-100)
# =============================================================================

def calculate_goal_progress(
    snapshot: HouseholdSnapshot,
    metrics: DerivedMetrics,
    retirement: Optional[RetirementAnalysis] = None,
) -> Optional[GoalProgress]:
    goals = snapshot.goals
    if goals is None:
        return None

    progress = GoalProgress()
    liquid = liquid_assets(snapshot)

    # --- Retirement readiness ---
    if goals.retirement_age:
        if retirement is not None:
            needed = retirement.savings_needed_at_retirement
            readiness = (retirement.projected_savings_at_retirement / needed * 100
                         if needed > 0 else 100.0)
        else:
            savings = snapshot.retirement_401k + snapshot.retirement_ira + snapshot.brokerage
            desired = goals.retirement_income or metrics.total_income * default_income_replacement
            needed = desired * safe_withdrawal_multiple
            readiness = savings / needed * 100 if needed > 0 else 100.0
        progress.retirement_readiness = clamp_percent(readiness)

    # --- Emergency fund ---
    if goals.emergency_fund_months:
        target = metrics.total_monthly_expenses * goals.emergency_fund_months
        progress.emergency_fund = clamp_percent(liquid / target * 100) if target > 0 else 100.0

    # --- Home down payment ---
    if goals.home_down_payment and goals.home_down_payment > 0:
        available = liquid + snapshot.brokerage
        progress.home_down_payment = clamp_percent(available / goals.home_down_payment * 100)

    # --- Education ---
    if goals.education_savings and goals.education_savings > 0:
        earmarked = snapshot.brokerage * education_brokerage_share
        progress.education_savings = clamp_percent(earmarked / goals.education_savings * 100)

    # --- Debt free (binary until payments are tracked) ---
    if metrics.total_liabilities == 0:
        progress.debt_free_progress = 100.0
    elif goals.debt_free_date is not None:
        progress.debt_free_progress = 0.0

    # --- Net worth ---
    if goals.net_worth_target and goals.net_worth_target > 0:
        progress.net_worth_progress = clamp_percent(metrics.net_worth / goals.net_worth_target * 100)

    # --- Annual savings ---
    if goals.annual_savings_target and goals.annual_savings_target > 0:
        annual_savings = metrics.total_income - metrics.annual_expenses
        progress.savings_progress = clamp_percent(annual_savings / goals.annual_savings_target * 100)

    # --- Major purchase ---
    purchase = goals.major_purchase
    if purchase is not None and purchase.amount and purchase.amount > 0:
        progress.major_purchase_progress = clamp_percent(liquid / purchase.amount * 100)

    return progress


# =============================================================================
# Required monthly contribution per goal
# =============================================================================

def calculate_goal_monthly_savings(
    snapshot: HouseholdSnapshot,
    metrics: DerivedMetrics,
    as_of: date,
    retirement: Optional[RetirementAnalysis] = None,
) -> Optional[GoalMonthlySavings]:
    goals = snapshot.goals
    if goals is None:
        return None

    savings = GoalMonthlySavings()
    return_rate = goal_return_rate(snapshot)
    liquid = liquid_assets(snapshot)

    if goals.emergency_fund_months:
        savings.emergency_fund = monthly_payment_for_goal(
            liquid,
            metrics.total_monthly_expenses * goals.emergency_fund_months,
            emergency_fund_horizon_months,
            emergency_fund_return_rate,
        )

    if goals.home_down_payment and goals.home_down_payment > 0:
        savings.home_down_payment = monthly_payment_for_goal(
            liquid + snapshot.brokerage,
            goals.home_down_payment,
            down_payment_horizon_months,
            return_rate,
        )

    if goals.education_savings and goals.education_savings > 0:
        savings.education_savings = monthly_payment_for_goal(
            snapshot.brokerage * education_brokerage_share,
            goals.education_savings,
            education_horizon_months,
            return_rate,
        )

    purchase = goals.major_purchase
    if purchase is not None and purchase.amount and purchase.amount > 0:
        months = months_until(purchase.target_date, as_of, major_purchase_horizon_months)
        savings.major_purchase = monthly_payment_for_goal(
            liquid,
            purchase.amount,
            months,
            major_purchase_return_rate,
        )

    if retirement is not None and retirement.gap > 0:
        savings.retirement_shortfall = retirement.monthly_savings_needed

    return savings
