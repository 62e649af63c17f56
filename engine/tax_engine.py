"""
Progressive federal and state income tax for household planning.
Bracket tables and the standard deduction come from utils.tax_utils; this
module only evaluates them.
"""
from typing import List, Optional
import logging

from models import TaxResult
from utils.tax_utils import (
    FEDERAL_BRACKETS_2024,
    FEDERAL_STANDARD_DEDUCTION_2024,
    STATE_TAX_BRACKETS,
    NO_INCOME_TAX_STATES,
    Bracket,
    is_supported_state,
    normalize_state,
)

logger = logging.getLogger(__name__)


def _apply_brackets(amount: float, brackets: List[Bracket]) -> float:
    """
    Apply a set of tax brackets to a given amount.

    Args:
        amount: Taxable income
        brackets: Ordered (upper_bound, cumulative_tax_below, rate) rows

    Returns:
        Total tax owed
    """
    if amount <= 0:
        return 0.0

    lower = 0.0
    for upper, cumulative, rate in brackets:
        if amount <= upper:
            return cumulative + (amount - lower) * rate
        lower = upper


def federal_income_tax(taxable_income: float) -> float:
    """Federal tax after the standard deduction."""
    federal_taxable = max(0.0, taxable_income - FEDERAL_STANDARD_DEDUCTION_2024)
    return _apply_brackets(federal_taxable, FEDERAL_BRACKETS_2024)


def state_income_tax(taxable_income: float, state: Optional[str]) -> float:
    """State tax on gross taxable income. Unknown states are taxed at zero."""
    code = normalize_state(state)
    if code is None or code in NO_INCOME_TAX_STATES:
        return 0.0

    if not is_supported_state(code):
        logger.warning(
            f"State Tax Calculations Not Available for '{state}'. "
            "Defaulting to $0 state income taxes."
        )
        return 0.0

    return _apply_brackets(taxable_income, STATE_TAX_BRACKETS[code])


def calculate_taxes(taxable_income: float, state: Optional[str] = None) -> TaxResult:
    """
    Calculates federal and state income tax on a household's taxable income.

    Returns:
        TaxResult with state, federal and total tax and the effective rate
        (percent of income, 0 when income is 0).
    """
    income = max(0.0, taxable_income or 0.0)

    state_tax = state_income_tax(income, state)
    federal_tax = federal_income_tax(income)
    total_tax = state_tax + federal_tax
    effective_rate = (total_tax / income) * 100 if income > 0 else 0.0

    return TaxResult(
        state_tax=state_tax,
        federal_tax=federal_tax,
        total_tax=total_tax,
        effective_rate=effective_rate,
        state=normalize_state(state),
    )
