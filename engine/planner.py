# engine/planner.py
#
# Entry point: one household snapshot in, one FinancialPlan out.
# Nothing here keeps state between calls.
#

import logging
from datetime import date
from typing import Optional

import numpy as np

from models import HouseholdSnapshot, DerivedMetrics, FinancialPlan
from engine.metrics import calculate_core_metrics
from engine.retirement import calculate_retirement_analysis, estimate_social_security
from engine.goals import calculate_goal_progress, calculate_goal_monthly_savings
from engine.portfolio import calculate_portfolio_analysis
from engine.debt_engine import calculate_debt_payoff_analysis
from engine.college import calculate_college_planning
from engine.tax_planning import generate_tax_optimization
from engine.insurance import generate_insurance_recommendations
from engine.simulator import run_monte_carlo
from engine.risk_assessment import generate_risk_assessment
from engine.action_items import generate_action_items
from config.market_assumptions import mc_num_simulations

logger = logging.getLogger(__name__)


def calculate_financial_metrics(
    snapshot: HouseholdSnapshot,
    as_of: Optional[date] = None,
    rng: Optional[np.random.Generator] = None,
    nsims: int = mc_num_simulations,
) -> DerivedMetrics:
    """
    Computes totals, ratios, the health score and every optional sub-analysis
    that the snapshot has data for. Action items are added by
    analyze_household once the risk assessment exists.

    Args:
        snapshot: Household data.
        as_of: Valuation date for age and target-date arithmetic (default today).
        rng: Generator for the Monte Carlo run.
        nsims: Monte Carlo path count; 0 skips the simulation.
    """
    as_of = as_of or date.today()

    # --- 1. Core metrics (everything else consumes these) ---
    metrics = calculate_core_metrics(snapshot)

    # --- 2. Retirement ---
    goals = snapshot.goals
    if goals is not None and goals.retirement_age:
        metrics.retirement_analysis = calculate_retirement_analysis(snapshot, metrics, as_of)

    if metrics.total_income > 0:
        metrics.social_security_estimate = estimate_social_security(
            metrics.total_income,
            snapshot.age,
            as_of,
            claim_age=snapshot.assumptions.social_security_start_age,
        )

    # --- 3. Goals ---
    metrics.goal_progress = calculate_goal_progress(snapshot, metrics, metrics.retirement_analysis)
    metrics.goal_monthly_savings = calculate_goal_monthly_savings(
        snapshot, metrics, as_of, metrics.retirement_analysis
    )

    # --- 4. Portfolio, debt, college, taxes, insurance ---
    metrics.portfolio_analysis = calculate_portfolio_analysis(snapshot)
    metrics.debt_payoff_analysis = calculate_debt_payoff_analysis(snapshot, metrics)
    metrics.college_planning = calculate_college_planning(snapshot)
    metrics.tax_optimization = generate_tax_optimization(snapshot, metrics, as_of)
    metrics.insurance_recommendations = generate_insurance_recommendations(snapshot, metrics)

    # --- 5. Monte Carlo (the only stochastic piece) ---
    if nsims > 0:
        metrics.monte_carlo = run_monte_carlo(snapshot, metrics, nsims=nsims, rng=rng)

    logger.debug(
        f"Metrics for '{snapshot.name}': net worth ${metrics.net_worth:,.0f}, "
        f"health score {metrics.health_score}"
    )
    return metrics


def analyze_household(
    snapshot: HouseholdSnapshot,
    rng: Optional[np.random.Generator] = None,
    as_of: Optional[date] = None,
    nsims: int = mc_num_simulations,
) -> FinancialPlan:
    """
    Full analysis: metrics, risk assessment, then the prioritized action items
    that draw on both.
    """
    as_of = as_of or date.today()

    metrics = calculate_financial_metrics(snapshot, as_of=as_of, rng=rng, nsims=nsims)
    risk = generate_risk_assessment(snapshot, metrics)
    metrics.action_items = generate_action_items(snapshot, metrics, risk)

    return FinancialPlan(metrics=metrics, risk=risk)
