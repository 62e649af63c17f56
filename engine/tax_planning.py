# tax_planning.py
#
# Tax-reduction opportunities for the household. Savings estimates use the
# household's effective rate from tax_engine.py, not marginal rates.
#

from datetime import date
from typing import List

from models import HouseholdSnapshot, DerivedMetrics, TaxOptimization, TaxRecommendation
from engine.tax_engine import calculate_taxes
from engine.rmd_tables import get_rmd_start_age, required_minimum_distribution
from utils.currency import format_currency_output
from utils.tax_utils import normalize_state
from config.market_assumptions import default_investment_return_rate
from config.planning_assumptions import (
    max_401k_contribution,
    hsa_income_floor,
    hsa_limit_family,
    hsa_limit_self,
    tax_loss_brokerage_floor,
    tax_loss_harvest_rate,
    capital_loss_deduction_limit,
    backdoor_roth_income_floor,
    charitable_income_floor,
    charitable_giving_rate,
    plan_529_contribution,
    plan_529_state_rates,
    roth_conversion_min_age,
    roth_conversion_pretax_floor,
)


def is_joint_filer(filing_status: str) -> bool:
    return (filing_status or "").strip().lower().replace("-", "_") == "married_joint"


def projected_first_rmd(pretax_balance: float, age: int, as_of: date) -> float:
    """
    First-year RMD if the pre-tax balance grows at the default return until
    the SECURE 2.0 start age.
    """
    birth_year = as_of.year - age
    start_age = get_rmd_start_age(birth_year)
    years = max(0, start_age - age)
    grown = pretax_balance * (1 + default_investment_return_rate) ** years
    return required_minimum_distribution(grown, max(age, start_age), birth_year)


def generate_tax_optimization(
    snapshot: HouseholdSnapshot,
    metrics: DerivedMetrics,
    as_of: date,
) -> TaxOptimization:
    """
    Builds the catalog of applicable strategies with estimated annual savings.

    Returns:
        TaxOptimization; the optimized bill is the current bill less the sum of
        the estimates, and goes negative when the estimates exceed the bill.
    """
    income = metrics.total_income
    taxes = calculate_taxes(income, snapshot.state)
    effective = taxes.effective_rate / 100
    joint = is_joint_filer(snapshot.filing_status)
    state_code = normalize_state(snapshot.state)

    recommendations: List[TaxRecommendation] = []

    # --- 1. Max out 401(k) contributions ---
    current_401k = (snapshot.monthly_retirement_contribution or 0.0) * 12
    if current_401k < max_401k_contribution:
        additional = max_401k_contribution - current_401k
        recommendations.append(TaxRecommendation(
            strategy="Maximize 401(k) contributions",
            estimated_savings=additional * effective,
            difficulty="easy",
            description=(
                f"Increase 401(k) to {format_currency_output(max_401k_contribution)}/year "
                f"(currently {format_currency_output(current_401k)}). "
                f"Saves {taxes.effective_rate:.1f}% in taxes."
            ),
        ))

    # --- 2. HSA contributions ---
    if income > hsa_income_floor:
        hsa_max = hsa_limit_family if joint else hsa_limit_self
        recommendations.append(TaxRecommendation(
            strategy="Contribute to HSA",
            estimated_savings=hsa_max * effective,
            difficulty="easy",
            description=(
                f"Max out HSA contributions ({format_currency_output(hsa_max)}/year). "
                "Triple tax advantage: deductible, grows tax-free, tax-free withdrawals for medical."
            ),
        ))

    # --- 3. Tax-loss harvesting ---
    if snapshot.brokerage > tax_loss_brokerage_floor:
        harvestable = min(capital_loss_deduction_limit, snapshot.brokerage * tax_loss_harvest_rate)
        recommendations.append(TaxRecommendation(
            strategy="Tax-loss harvesting",
            estimated_savings=harvestable * effective,
            difficulty="moderate",
            description=(
                "Harvest investment losses to offset gains. Can deduct up to "
                f"{format_currency_output(capital_loss_deduction_limit)} in net losses "
                "against ordinary income annually."
            ),
        ))

    # --- 4. Backdoor Roth IRA ---
    if income > backdoor_roth_income_floor and joint:
        recommendations.append(TaxRecommendation(
            strategy="Backdoor Roth IRA",
            estimated_savings=0.0,
            difficulty="moderate",
            description=(
                "Convert traditional IRA to Roth via backdoor method. "
                "Enables tax-free growth despite income limits."
            ),
        ))

    # --- 5. Donor-advised fund ---
    if income > charitable_income_floor:
        charity = income * charitable_giving_rate
        recommendations.append(TaxRecommendation(
            strategy="Donor-Advised Fund",
            estimated_savings=charity * effective,
            difficulty="moderate",
            description=(
                "Bunch charitable contributions into one year for larger deduction, "
                "then distribute over time."
            ),
        ))

    # --- 6. 529 plan state deduction ---
    if snapshot.dependents > 0 and state_code in plan_529_state_rates:
        recommendations.append(TaxRecommendation(
            strategy="529 College Savings Plan",
            estimated_savings=plan_529_contribution * plan_529_state_rates[state_code],
            difficulty="easy",
            description=(
                f"Contribute to 529 plan for state tax deduction ({state_code} offers deduction). "
                "Tax-free growth for education."
            ),
        ))

    # --- 7. Roth conversions ahead of RMDs ---
    pretax = snapshot.retirement_401k + snapshot.retirement_ira
    if snapshot.age >= roth_conversion_min_age and pretax >= roth_conversion_pretax_floor:
        first_rmd = projected_first_rmd(pretax, snapshot.age, as_of)
        start_age = get_rmd_start_age(as_of.year - snapshot.age)
        recommendations.append(TaxRecommendation(
            strategy="Roth conversions before RMDs",
            estimated_savings=0.0,
            difficulty="complex",
            description=(
                f"Pre-tax balances could force a first RMD of about {format_currency_output(first_rmd)} "
                f"at age {start_age}. Converting in lower-income years spreads the tax."
            ),
        ))

    potential = sum(rec.estimated_savings for rec in recommendations)

    return TaxOptimization(
        current_tax_bill=taxes.total_tax,
        optimized_tax_bill=taxes.total_tax - potential,
        potential_savings=potential,
        effective_rate=taxes.effective_rate,
        recommendations=recommendations,
    )
