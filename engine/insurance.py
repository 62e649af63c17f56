# engine/insurance.py
#
# Rough premium estimates and product suggestions for the protection gaps
# found by the metrics engine. Rates are illustrative, not underwritten.
#

from typing import List, Optional

from models import HouseholdSnapshot, DerivedMetrics, InsuranceProduct, InsuranceQuote
from engine.tiers import round_half_up
from config.planning_assumptions import (
    life_insurance_income_multiple,
    disability_income_replacement,
)

# Term life: monthly dollars per $1,000 of coverage
TERM_LIFE_BASE_RATE = 0.05
TERM_LIFE_AGE_FACTORS = [(30, 0.8), (40, 1.0), (50, 1.5), (60, 2.5), (None, 4.0)]
TERM_LIFE_TERM_FACTORS = {10: 0.8, 20: 1.0, 30: 1.3}

# Disability: monthly premium as a share of the monthly benefit
DISABILITY_BASE_RATE = 0.02
DISABILITY_AGE_FACTORS = [(30, 0.9), (40, 1.0), (50, 1.3), (60, 1.7), (None, 2.2)]
DISABILITY_WAITING_FACTORS = {30: 1.4, 60: 1.15, 90: 1.0}
DEFAULT_WAITING_PERIOD = 90
DISABILITY_BENEFIT_PERIOD = "To Age 65"

UMBRELLA_COVERAGE = 1_000_000
PREMIUM_RANGE = (0.8, 1.2)

PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}


def _age_factor(age: int, bands) -> float:
    for max_age, factor in bands:
        if max_age is None or age < max_age:
            return factor
    return bands[-1][1]


def calculate_term_life_premium(age: int, coverage_amount: float, term: int = 20) -> int:
    """Estimated monthly premium for level term life."""
    rate = TERM_LIFE_BASE_RATE * _age_factor(age, TERM_LIFE_AGE_FACTORS)
    rate *= TERM_LIFE_TERM_FACTORS.get(term, 1.0)
    return round_half_up(coverage_amount / 1000 * rate)


def calculate_disability_premium(age: int, monthly_benefit: float,
                                 waiting_period: int = DEFAULT_WAITING_PERIOD) -> int:
    """Estimated monthly premium; longer waiting periods cost less."""
    rate = DISABILITY_BASE_RATE * _age_factor(age, DISABILITY_AGE_FACTORS)
    rate *= DISABILITY_WAITING_FACTORS.get(waiting_period, 1.0)
    return round_half_up(monthly_benefit * rate)


def generate_insurance_recommendations(
    snapshot: HouseholdSnapshot,
    metrics: DerivedMetrics,
) -> List[InsuranceProduct]:
    age = snapshot.age
    income = metrics.total_income
    life_gap = metrics.life_insurance_gap
    low, high = PREMIUM_RANGE
    products: List[InsuranceProduct] = []

    # Term Life Insurance
    if not snapshot.has_life_insurance or life_gap > 0:
        coverage = income * life_insurance_income_multiple
        premium = calculate_term_life_premium(age, coverage, 20)
        products.append(InsuranceProduct(
            id="term-life-20",
            type="life",
            name="20-Year Term Life Insurance",
            priority="critical",
            cost_min=premium * low,
            cost_max=premium * high,
            cost_unit="month",
            coverage_amount=coverage,
            recommended=True,
            reason=(f"You have a ${life_gap / 1000:.0f}K protection gap" if life_gap > 0
                    else "Essential protection for your family"),
        ))

    # Disability Insurance
    if not snapshot.has_disability_insurance:
        monthly_benefit = income * disability_income_replacement / 12
        premium = calculate_disability_premium(age, monthly_benefit)
        products.append(InsuranceProduct(
            id="disability-insurance",
            type="disability",
            name="Disability Income Protection",
            priority="critical",
            cost_min=premium * low,
            cost_max=premium * high,
            cost_unit="month",
            coverage_amount=monthly_benefit * 12,
            recommended=True,
            reason="Your income is your most valuable asset",
        ))

    # Umbrella Liability
    if not snapshot.has_umbrella_policy:
        products.append(InsuranceProduct(
            id="umbrella-policy",
            type="umbrella",
            name="Personal Umbrella Policy",
            priority="high",
            cost_min=200,
            cost_max=400,
            cost_unit="year",
            coverage_amount=UMBRELLA_COVERAGE,
            recommended=True,
            reason="Protects your assets from unexpected liability claims",
        ))

    # Long-term Care (for older clients)
    if age >= 50:
        products.append(InsuranceProduct(
            id="long-term-care",
            type="long-term-care",
            name="Long-Term Care Insurance",
            priority="medium",
            cost_min=150,
            cost_max=350,
            cost_unit="month",
            coverage_amount=None,
            recommended=age >= 55,
            reason="Protect retirement savings from long-term care expenses",
        ))

    return sorted(products, key=lambda p: PRIORITY_ORDER[p.priority])


def generate_insurance_quote(
    product_type: str,
    age: int,
    coverage_amount: float,
    term: Optional[int] = None,
    waiting_period: Optional[int] = None,
) -> InsuranceQuote:
    """
    Quote for 'life' (term in years, default 20) or 'disability'
    (coverage is the annual benefit). Other product types quote at zero.
    """
    if product_type == "life":
        term = term or 20
        monthly = calculate_term_life_premium(age, coverage_amount, term)
        return InsuranceQuote(
            product_type=f"{term}-Year Term Life",
            coverage_amount=coverage_amount,
            monthly_premium=monthly,
            annual_premium=monthly * 12,
            term=term,
        )
    elif product_type == "disability":
        waiting_period = waiting_period or DEFAULT_WAITING_PERIOD
        monthly = calculate_disability_premium(age, coverage_amount / 12, waiting_period)
        return InsuranceQuote(
            product_type="Disability Income",
            coverage_amount=coverage_amount,
            monthly_premium=monthly,
            annual_premium=monthly * 12,
            waiting_period=waiting_period,
            benefit_period=DISABILITY_BENEFIT_PERIOD,
        )

    return InsuranceQuote(
        product_type="Unknown",
        coverage_amount=0.0,
        monthly_premium=0.0,
        annual_premium=0.0,
    )
