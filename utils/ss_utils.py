# utils/ss_utils.py
from typing import Optional

# 2024 PIA formula
PIA_BEND_POINT_1 = 1174
PIA_BEND_POINT_2 = 7078
PIA_RATE_1 = 0.90
PIA_RATE_2 = 0.32
PIA_RATE_3 = 0.15
MAX_MONTHLY_BENEFIT_AT_FRA = 3822

EARLIEST_CLAIM_AGE = 62
LATEST_CLAIM_AGE = 70
EARLY_REDUCTION_PER_YEAR = 0.07
DELAYED_CREDIT_PER_YEAR = 0.08


def get_full_retirement_age(birth_year: int, birth_month: Optional[int] = None) -> float:
    """
    Calculates the Full Retirement Age (FRA) in years based on the birth year
    and birth month according to US Social Security Administration rules.
    Birth years before 1955 are treated as 66.
    """

    # SSA Rule: Persons born on January 1st refer to the FRA of the previous year.
    # Only applied when the birth month is actually known.
    if birth_month == 1:
        year_for_fra_calc = birth_year - 1
    else:
        year_for_fra_calc = birth_year

    if year_for_fra_calc <= 1954:
        return 66.0
    elif 1955 <= year_for_fra_calc <= 1959:
        # FRA is 66 plus 2 months for each year after 1954
        months_over_66 = (year_for_fra_calc - 1954) * 2
        return 66.0 + (months_over_66 / 12.0)
    else: # 1960 and later
        return 67.0


def estimate_pia(average_monthly_earnings: float) -> float:
    """
    Simplified Primary Insurance Amount at FRA: 90% / 32% / 15% across the two
    bend points, capped at the maximum benefit.
    """
    aime = max(0.0, average_monthly_earnings)

    if aime <= PIA_BEND_POINT_1:
        pia = aime * PIA_RATE_1
    elif aime <= PIA_BEND_POINT_2:
        pia = PIA_BEND_POINT_1 * PIA_RATE_1 + (aime - PIA_BEND_POINT_1) * PIA_RATE_2
    else:
        pia = (PIA_BEND_POINT_1 * PIA_RATE_1
               + (PIA_BEND_POINT_2 - PIA_BEND_POINT_1) * PIA_RATE_2
               + (aime - PIA_BEND_POINT_2) * PIA_RATE_3)

    return min(pia, MAX_MONTHLY_BENEFIT_AT_FRA)


def clamp_claim_age(claim_age: float) -> float:
    return min(max(claim_age, EARLIEST_CLAIM_AGE), LATEST_CLAIM_AGE)


def claiming_adjustment_factor(claim_age: float, full_retirement_age: float) -> float:
    """-7% per year claimed before FRA, +8% per year claimed after."""
    years_diff = claim_age - full_retirement_age
    if years_diff < 0:
        return 1 + years_diff * EARLY_REDUCTION_PER_YEAR
    elif years_diff > 0:
        return 1 + years_diff * DELAYED_CREDIT_PER_YEAR
    return 1.0
