# engine/portfolio.py

from typing import Dict, List, Optional

from models import HouseholdSnapshot, PortfolioAllocation, PortfolioAnalysis
from engine.tiers import round_half_up
from config.market_assumptions import asset_class_returns
from config.planning_assumptions import (
    stock_target_base,
    stock_target_floor,
    stock_target_ceiling,
    rebalance_tolerance_pct,
    allocation_sum_tolerance_pct,
    high_cash_pct,
    high_expense_ratio_pct,
)

# (max age exclusive, description); last row catches everyone older
TARGET_ALLOCATION_BANDS = [
    (35, "Aggressive (80-90% stocks, 10-20% bonds)"),
    (50, "Moderate-Aggressive (70-80% stocks, 20-30% bonds)"),
    (60, "Moderate (60-70% stocks, 30-40% bonds)"),
    (None, "Conservative (40-50% stocks, 50-60% bonds)"),
]


def _weights(portfolio: PortfolioAllocation) -> Dict[str, float]:
    return {
        "stocks": portfolio.stocks_percent or 0.0,
        "bonds": portfolio.bonds_percent or 0.0,
        "cash": portfolio.cash_percent or 0.0,
        "other": portfolio.other_percent or 0.0,
    }


def target_stock_percent(age: int) -> float:
    """Rule of thumb: 110 - age in stocks, bounded to 40-90%."""
    return max(stock_target_floor, min(stock_target_ceiling, stock_target_base - age))


def target_allocation_description(age: int) -> str:
    for max_age, description in TARGET_ALLOCATION_BANDS:
        if max_age is None or age < max_age:
            return description
    return TARGET_ALLOCATION_BANDS[-1][1]


def expected_portfolio_return(portfolio: PortfolioAllocation) -> float:
    """
    Blend of long-run asset-class returns (percent). Weights are normalized
    when they do not total 100; an empty allocation returns 0.
    """
    weights = _weights(portfolio)
    total = sum(weights.values())
    if total <= 0:
        return 0.0

    scale = 100.0 / total if abs(total - 100) > allocation_sum_tolerance_pct else 1.0
    blended = sum(weights[k] * scale / 100 * asset_class_returns[k] for k in weights)
    return round(blended, 1)


def allocation_warnings(portfolio: PortfolioAllocation, age: int) -> List[str]:
    weights = _weights(portfolio)
    total = sum(weights.values())
    stocks = weights["stocks"]
    cash = weights["cash"]
    warnings = []

    if abs(total - 100) > allocation_sum_tolerance_pct:
        warnings.append(f"Portfolio allocation totals {total:.1f}% instead of 100%")
    if cash > high_cash_pct:
        warnings.append(f"High cash allocation ({cash:g}%) may reduce long-term returns")
    if stocks > 90 and age > 50:
        warnings.append(f"Very aggressive allocation for age {age} - consider more bonds for stability")
    if stocks < 50 and age < 40:
        warnings.append(f"Conservative allocation for age {age} - missing growth opportunities")
    expense_ratio = portfolio.average_expense_ratio
    if expense_ratio and expense_ratio > high_expense_ratio_pct:
        warnings.append(f"High expense ratio ({expense_ratio:g}%) - consider low-cost index funds")

    return warnings


def calculate_portfolio_analysis(snapshot: HouseholdSnapshot) -> Optional[PortfolioAnalysis]:
    portfolio = snapshot.portfolio
    if portfolio is None:
        return None

    age = snapshot.age
    stocks = portfolio.stocks_percent or 0.0
    target = target_stock_percent(age)

    return PortfolioAnalysis(
        risk_score=max(0, min(100, round_half_up(stocks))),
        expected_return=expected_portfolio_return(portfolio),
        target_stocks_percent=target,
        target_allocation=target_allocation_description(age),
        rebalancing_needed=abs(stocks - target) > rebalance_tolerance_pct,
        allocation_warnings=allocation_warnings(portfolio, age),
    )
