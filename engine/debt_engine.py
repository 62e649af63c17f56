# debt_engine.py

import logging
from typing import List, Optional, Sequence

from models import (
    HouseholdSnapshot,
    DerivedMetrics,
    DebtAccount,
    DebtPayoffResult,
    DebtPayoffAnalysis,
)
from config.planning_assumptions import (
    debt_max_months,
    debt_min_extra_payment,
    debt_surplus_share,
)

logger = logging.getLogger(__name__)

GROWING_DEBT_WARNING = "Debt will continue growing: monthly payment does not cover interest"
MAX_MONTHS_WARNING = "Debt not repaid within {months} months at the current payment"

# Balances below half a cent count as paid off
PAID_OFF_TOLERANCE = 0.005


# Handles logic for prioritizing debt payments
#
class DebtPayoffEngine:
    """
    Month-by-month payoff of a set of debts under a fixed monthly budget,
    ordered by strategy (avalanche or snowball).
    """
    def __init__(self, debts: Sequence[DebtAccount], monthly_budget: float, max_months: int = debt_max_months):
        self.debts = list(debts)
        self.monthly_budget = monthly_budget
        self.max_months = max_months

    def _get_payoff_order(self, method: str) -> List[DebtAccount]:
        """
        Determines the payment priority. Sorts are stable, so ties keep
        their input order.
        """
        if method == 'avalanche':
            # Highest APR first
            return sorted(self.debts, key=lambda d: d.apr, reverse=True)
        elif method == 'snowball':
            # Smallest balance first
            return sorted(self.debts, key=lambda d: d.balance)
        else:
            raise ValueError(f"Unknown payoff method '{method}'")

    def simulate(self, method: str) -> DebtPayoffResult:
        """
        The Core Engine: each month accrue interest and pay minimums on every
        open debt in priority order, then put whatever budget is left on the
        first debt that still has a balance.

        Returns:
            DebtPayoffResult with months to payoff, total interest and the
            month each debt reached zero. Non-convergence is reported through
            `converged=False` and a warning, never by looping forever.
        """
        order = self._get_payoff_order(method)

        # Working balances (never mutate the caller's accounts)
        balances = [max(0.0, d.balance) for d in order]
        paid_off_month: List[Optional[int]] = [0 if b <= PAID_OFF_TOLERANCE else None for b in balances]

        total_interest = 0.0
        month = 0

        while any(b > PAID_OFF_TOLERANCE for b in balances):
            if month >= self.max_months:
                logger.info(f"{method}: debt not repaid within {self.max_months} months")
                return self._result(method, month, total_interest, order, paid_off_month,
                                    converged=False,
                                    warning=MAX_MONTHS_WARNING.format(months=self.max_months))

            month += 1
            remaining = self.monthly_budget

            # Budget must exceed the interest accruing on open balances
            interest_due = sum(b * d.apr / 100 / 12 for b, d in zip(balances, order)
                               if b > PAID_OFF_TOLERANCE)
            if self.monthly_budget <= interest_due:
                logger.warning(f"{method}: monthly budget ${self.monthly_budget:,.2f} "
                               f"does not cover ${interest_due:,.2f} of interest")
                return self._result(method, month, total_interest, order, paid_off_month,
                                    converged=False, warning=GROWING_DEBT_WARNING)

            # --- 1. Interest and minimum payments ---
            for i, debt in enumerate(order):
                if balances[i] <= PAID_OFF_TOLERANCE:
                    continue

                interest = balances[i] * debt.apr / 100 / 12
                total_interest += interest
                balances[i] += interest

                payment = min(debt.minimum_payment, balances[i], remaining)
                balances[i] -= payment
                remaining -= payment

            # --- 2. Leftover budget to the first open debt ---
            if remaining > 0:
                for i in range(len(order)):
                    if balances[i] > PAID_OFF_TOLERANCE:
                        balances[i] -= min(remaining, balances[i])
                        break

            for i, balance in enumerate(balances):
                if paid_off_month[i] is None and balance <= PAID_OFF_TOLERANCE:
                    balances[i] = 0.0
                    paid_off_month[i] = month

        return self._result(method, month, total_interest, order, paid_off_month)

    @staticmethod
    def _result(method, months, total_interest, order, paid_off_month,
                converged=True, warning=None) -> DebtPayoffResult:
        # Payoff order: by month reached zero, ties in priority order
        paid = [(order[i].name, m) for i, m in enumerate(paid_off_month) if m is not None]
        paid.sort(key=lambda item: item[1])
        return DebtPayoffResult(
            method=method,
            months_to_payoff=months,
            total_interest=total_interest,
            payoff_order=paid,
            converged=converged,
            warning=warning,
        )


def extra_payment_from_surplus(monthly_surplus: float) -> float:
    """max(100, 10% of surplus) when there is a surplus, else nothing."""
    if monthly_surplus > 0:
        return max(debt_min_extra_payment, monthly_surplus * debt_surplus_share)
    return 0.0


def calculate_debt_payoff_analysis(
    snapshot: HouseholdSnapshot,
    metrics: DerivedMetrics,
    extra_payment: Optional[float] = None,
) -> Optional[DebtPayoffAnalysis]:
    """
    Compares avalanche and snowball payoff of the detailed debts.
    Returns None when no detailed debts are present.
    """
    debts = [d for d in snapshot.detailed_debts if d.balance > 0]
    if not debts:
        return None

    if extra_payment is None:
        monthly_surplus = metrics.total_income / 12 - metrics.total_monthly_expenses
        extra_payment = extra_payment_from_surplus(monthly_surplus)

    total_payment = sum(d.minimum_payment for d in debts) + extra_payment

    engine = DebtPayoffEngine(debts, total_payment)
    avalanche = engine.simulate('avalanche')
    snowball = engine.simulate('snowball')

    recommended = 'avalanche' if avalanche.total_interest < snowball.total_interest else 'snowball'

    warning = avalanche.warning or snowball.warning

    return DebtPayoffAnalysis(
        total_monthly_payment=total_payment,
        extra_payment=extra_payment,
        avalanche=avalanche,
        snowball=snowball,
        recommended_method=recommended,
        interest_saved_by_avalanche=snowball.total_interest - avalanche.total_interest,
        months_saved_by_avalanche=snowball.months_to_payoff - avalanche.months_to_payoff,
        warning=warning,
    )
