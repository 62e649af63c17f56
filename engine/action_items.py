# engine/action_items.py

from typing import List

from models import HouseholdSnapshot, DerivedMetrics, RiskAssessment, ActionItem
from utils.currency import format_currency_output
from config.planning_assumptions import (
    retirement_gap_action_floor,
    high_interest_apr_floor,
    max_action_items,
)

PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2}


def generate_action_items(
    snapshot: HouseholdSnapshot,
    metrics: DerivedMetrics,
    risk: RiskAssessment,
) -> List[ActionItem]:
    """
    Collects action items from the risk assessment and the sub-analyses,
    sorts them critical -> high -> medium (stable), keeps one item per
    category and returns at most eight.
    """
    items: List[ActionItem] = []

    # --- 1. Critical gaps from the risk assessment ---
    for category in risk.categories.values():
        if category.status != "critical":
            continue
        items.append(ActionItem(
            priority="critical",
            category=category.name,
            action=category.recommendations[0] if category.recommendations else category.message,
            impact="Protects family from financial disaster",
            deadline="30 days",
        ))

    # --- 2. Emergency fund ---
    if metrics.emergency_fund_months < 3:
        items.append(ActionItem(
            priority="critical",
            category="Emergency Fund",
            action=f"Build emergency fund to 3-6 months ({format_currency_output(metrics.total_monthly_expenses * 6)})",
            impact="Prevents debt spiral in emergencies",
            deadline="90 days",
        ))

    # --- 3. Retirement shortfall ---
    retirement = metrics.retirement_analysis
    if retirement is not None and retirement.gap > retirement_gap_action_floor:
        items.append(ActionItem(
            priority="high",
            category="Retirement Planning",
            action=f"Increase retirement savings by {format_currency_output(retirement.monthly_savings_needed)}/month",
            impact=f"Close {format_currency_output(retirement.gap)} retirement gap",
            deadline="Start immediately",
        ))

    # --- 4. High-interest credit card debt ---
    high_interest = [
        d for d in snapshot.detailed_debts
        if d.kind == "credit_card" and d.apr > high_interest_apr_floor
    ]
    if high_interest:
        total = sum(d.balance for d in high_interest)
        items.append(ActionItem(
            priority="high",
            category="Debt Reduction",
            action=f"Pay off {format_currency_output(total)} in high-interest credit card debt",
            impact="Save thousands in interest charges",
            deadline="12 months",
        ))

    # --- 5. Low savings rate ---
    if metrics.savings_rate < 10:
        items.append(ActionItem(
            priority="high",
            category="Savings Rate",
            action="Increase savings rate to at least 10% of income",
            impact="Build wealth and reach financial goals faster",
            deadline="60 days",
        ))

    # --- 6. Portfolio rebalancing ---
    portfolio = metrics.portfolio_analysis
    if portfolio is not None and portfolio.rebalancing_needed:
        items.append(ActionItem(
            priority="medium",
            category="Investments",
            action="Rebalance portfolio to target allocation",
            impact="Optimize risk/return for your age and goals",
            deadline="30 days",
        ))

    items.sort(key=lambda item: PRIORITY_ORDER[item.priority])

    # One item per category; after the sort the first one has the highest priority
    seen = set()
    unique = []
    for item in items:
        if item.category in seen:
            continue
        seen.add(item.category)
        unique.append(item)

    return unique[:max_action_items]
