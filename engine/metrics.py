# engine/metrics.py
#
# Totals, ratios and insurance gaps for one household snapshot.
# Every other analysis consumes the DerivedMetrics produced here.
#

from models import HouseholdSnapshot, DerivedMetrics
from engine.health_score import calculate_health_score

from config.planning_assumptions import (
    life_insurance_income_multiple,
    disability_income_replacement,
)


def total_assets(snapshot: HouseholdSnapshot) -> float:
    return (
        snapshot.checking
        + snapshot.savings
        + snapshot.retirement_401k
        + snapshot.retirement_ira
        + snapshot.brokerage
        + snapshot.college_savings_529
        + snapshot.home_value
        + snapshot.other_assets
    )


def total_liabilities(snapshot: HouseholdSnapshot) -> float:
    return (
        snapshot.mortgage
        + snapshot.student_loans
        + snapshot.car_loans
        + snapshot.credit_cards
        + snapshot.other_debts
    )


def total_monthly_expenses(snapshot: HouseholdSnapshot) -> float:
    return (
        snapshot.monthly_housing
        + snapshot.monthly_transportation
        + snapshot.monthly_food
        + snapshot.monthly_utilities
        + snapshot.monthly_insurance
        + snapshot.monthly_entertainment
        + snapshot.monthly_other
    )


def household_income(snapshot: HouseholdSnapshot) -> float:
    return snapshot.income + (snapshot.spouse_income or 0.0)


def liquid_assets(snapshot: HouseholdSnapshot) -> float:
    return snapshot.checking + snapshot.savings


def clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def calculate_core_metrics(snapshot: HouseholdSnapshot) -> DerivedMetrics:
    """
    Sums the snapshot into totals and ratios, sizes the insurance gaps and
    scores financial health. Optional sub-analyses are left unset.

    Zero denominators produce 0 rather than an error.
    """
    # --- 1. Totals ---
    assets = total_assets(snapshot)
    liabilities = total_liabilities(snapshot)
    income = household_income(snapshot)
    monthly_expenses = total_monthly_expenses(snapshot)
    annual_expenses = monthly_expenses * 12

    # --- 2. Ratios ---
    debt_to_income = liabilities / income if income > 0 else 0.0
    annual_savings = income - annual_expenses
    savings_rate = clamp_percent(annual_savings / income * 100) if income > 0 else 0.0
    emergency_months = liquid_assets(snapshot) / monthly_expenses if monthly_expenses > 0 else 0.0

    # --- 3. Insurance gaps ---
    life_needed = income * life_insurance_income_multiple
    life_gap = max(0.0, life_needed - snapshot.life_insurance_coverage)
    disability_needed = income * disability_income_replacement
    disability_gap = max(0.0, disability_needed - snapshot.disability_insurance_coverage)

    # --- 4. Health score ---
    breakdown = calculate_health_score(
        snapshot,
        savings_rate=savings_rate,
        emergency_fund_months=emergency_months,
        debt_to_income_ratio=debt_to_income,
        life_insurance_gap=life_gap,
        total_income=income,
    )

    return DerivedMetrics(
        total_assets=assets,
        total_liabilities=liabilities,
        net_worth=assets - liabilities,
        total_income=income,
        total_monthly_expenses=monthly_expenses,
        annual_expenses=annual_expenses,
        debt_to_income_ratio=debt_to_income,
        savings_rate=savings_rate,
        emergency_fund_months=emergency_months,
        life_insurance_needed=life_needed,
        life_insurance_gap=life_gap,
        disability_insurance_needed=disability_needed,
        disability_insurance_gap=disability_gap,
        health_score=breakdown.total,
        health_score_breakdown=breakdown,
    )
