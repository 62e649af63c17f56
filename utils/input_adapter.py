import logging
import re
from dataclasses import fields
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models import (
    HouseholdSnapshot,
    Goals,
    MajorPurchase,
    DebtAccount,
    PortfolioAllocation,
    Assumptions,
)
from utils.currency import clean_currency, clean_percent

logger = logging.getLogger(__name__)

# Keys the camelCase -> snake_case rule cannot derive on its own
KEY_ALIASES = {
    "retirement401k": "retirement_401k",
    "collegeSavings529": "college_savings_529",
    "minPayment": "minimum_payment",
    "monthlyPayment": "minimum_payment",
    "type": "kind",
}

# Grouped debt lists -> DebtAccount.kind
DEBT_GROUPS = {
    "credit_card_debts": "credit_card",
    "student_loan_debts": "student_loan",
    "car_loan_debts": "car_loan",
    "other_debts": "other",
}

# Assumptions given as rates ("3%", 3, 0.03 all mean 0.03)
RATE_FIELDS = ("inflation_rate", "investment_return_rate", "salary_growth_rate")


def to_snake_case(key: str) -> str:
    if key in KEY_ALIASES:
        return KEY_ALIASES[key]
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", key).replace("-", "_").lower()


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {to_snake_case(str(k)): v for k, v in data.items()}


def _clean_number(val) -> float:
    """Currency or percent string to float, keeping percent units ('18.99%' -> 18.99)."""
    if isinstance(val, str):
        val = val.replace('%', '')
    return clean_currency(val)


def _to_bool(val) -> bool:
    if isinstance(val, str):
        return val.strip().lower() in ("true", "yes", "y", "1")
    return bool(val)


def _to_int(val) -> int:
    return int(round(_clean_number(val)))


def _to_date(val) -> Optional[date]:
    if val is None or val == "":
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    try:
        return date.fromisoformat(str(val).strip()[:10])
    except ValueError:
        logger.warning(f"Ignoring unparseable date '{val}'")
        return None


def _coerce_fields(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Keeps only keys that are fields of `cls` (reflection via dataclasses.fields)
    and coerces plain bool/int/float fields from loose input.
    """
    coerced = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if f.type is bool:
            value = _to_bool(value)
        elif f.type is int:
            value = _to_int(value)
        elif f.type is float:
            value = _clean_number(value)
        coerced[f.name] = value
    return coerced


def _optional_number(val) -> Optional[float]:
    if val is None or val == "":
        return None
    return _clean_number(val)


# ----------------------------------------------------------------------
# Nested structures
# ----------------------------------------------------------------------

def _build_goals(raw: Optional[Mapping]) -> Optional[Goals]:
    if not raw:
        return None
    goals = _normalize_keys(raw)

    purchase = None
    raw_purchase = goals.get("major_purchase")
    if raw_purchase:
        p = _normalize_keys(raw_purchase)
        purchase = MajorPurchase(
            description=str(p.get("description", "")),
            amount=_clean_number(p.get("amount")),
            target_date=_to_date(p.get("target_date")),
        )

    retirement_age = goals.get("retirement_age")
    return Goals(
        retirement_age=_to_int(retirement_age) if retirement_age not in (None, "") else None,
        retirement_income=_optional_number(goals.get("retirement_income")),
        emergency_fund_months=_optional_number(goals.get("emergency_fund_months")),
        home_down_payment=_optional_number(goals.get("home_down_payment")),
        education_savings=_optional_number(goals.get("education_savings")),
        debt_free_date=_to_date(goals.get("debt_free_date")),
        net_worth_target=_optional_number(goals.get("net_worth_target")),
        annual_savings_target=_optional_number(goals.get("annual_savings_target")),
        major_purchase=purchase,
    )


def _build_debt(raw: Mapping, kind: Optional[str] = None) -> DebtAccount:
    row = _normalize_keys(raw)
    if kind is not None:
        row["kind"] = kind
    row.setdefault("name", "Debt")
    row.setdefault("balance", 0.0)
    row.setdefault("apr", 0.0)
    row.setdefault("minimum_payment", 0.0)
    values = _coerce_fields(DebtAccount, row)
    values["name"] = str(values["name"])
    return DebtAccount(**values)


def _build_debts(raw) -> Tuple[DebtAccount, ...]:
    """Accepts a flat list of debts or a mapping of grouped lists."""
    if not raw:
        return ()
    if isinstance(raw, Mapping):
        debts: List[DebtAccount] = []
        for group, rows in _normalize_keys(raw).items():
            kind = DEBT_GROUPS.get(group)
            if kind is None:
                logger.warning(f"Ignoring unknown debt group '{group}'")
                continue
            debts.extend(_build_debt(row, kind) for row in rows or [])
        return tuple(debts)
    return tuple(_build_debt(row) for row in raw)


def _build_portfolio(raw: Optional[Mapping]) -> Optional[PortfolioAllocation]:
    if not raw:
        return None
    row = _normalize_keys(raw)
    expense_ratio = _optional_number(row.pop("average_expense_ratio", None))
    return PortfolioAllocation(**_coerce_fields(PortfolioAllocation, row),
                               average_expense_ratio=expense_ratio)


def _build_assumptions(raw: Optional[Mapping]) -> Assumptions:
    if not raw:
        return Assumptions()
    row = _normalize_keys(raw)
    values = {}
    for name in RATE_FIELDS:
        if row.get(name) not in (None, ""):
            values[name] = clean_percent(row[name])
    for name in ("social_security_start_age", "estimated_monthly_ss"):
        values[name] = _optional_number(row.get(name))
    return Assumptions(**values)


# ----------------------------------------------------------------------
# Main entry point
# ----------------------------------------------------------------------

def get_household_snapshot(
    data: Optional[Mapping[str, Any]] = None,
    **kwargs: Any              # Catch individual overrides dynamically
) -> HouseholdSnapshot:
    """
    Builds a HouseholdSnapshot from a loosely-typed mapping, as a form or a
    stored client record would supply it, using reflection (dataclasses.fields)
    to ensure only valid fields are passed.

    camelCase and snake_case keys are both accepted; currency strings
    ("$1,200"), percent strings and ISO dates are converted; unknown keys are
    dropped.
    """

    # 1. Merge the record with any keyword overrides
    inputs_dict = _normalize_keys(data or {})
    inputs_dict.update(_normalize_keys(kwargs))

    # 2. Handle the nested structures
    nested = {
        "goals": _build_goals(inputs_dict.pop("goals", None)),
        "detailed_debts": _build_debts(inputs_dict.pop("detailed_debts", None)),
        "portfolio": _build_portfolio(inputs_dict.pop("portfolio", None)),
        "assumptions": _build_assumptions(inputs_dict.pop("assumptions", None)),
    }

    children = inputs_dict.pop("children_ages", None) or ()
    nested["children_ages"] = tuple(_to_int(a) for a in children)

    if "filing_status" in inputs_dict:
        nested["filing_status"] = str(inputs_dict.pop("filing_status") or "married_joint").replace("-", "_")

    state = inputs_dict.pop("state", None)
    nested["state"] = str(state).strip() if state else None

    # 3. DYNAMIC FIELD MAPPING AND FILTERING (Reflection)
    final_inputs = _coerce_fields(HouseholdSnapshot, inputs_dict)
    final_inputs.update(nested)

    if "name" in final_inputs:
        final_inputs["name"] = str(final_inputs["name"] or "")

    # 4. Create the HouseholdSnapshot object
    return HouseholdSnapshot(**final_inputs)
