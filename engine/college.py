# engine/college.py

from typing import Optional

from models import HouseholdSnapshot, CollegePlan
from engine.goals import monthly_payment_for_goal
from config.market_assumptions import (
    college_base_cost,
    college_inflation_rate,
    college_savings_growth_rate,
    college_start_age,
)


def calculate_college_planning(snapshot: HouseholdSnapshot) -> Optional[CollegePlan]:
    """
    Four-year college cost per child, inflated to the year each child turns 18,
    against current education savings growing until the youngest enrolls.
    Children without a recorded age are treated as newborns.
    """
    if not snapshot.dependents or snapshot.dependents <= 0:
        return None

    children_ages = list(snapshot.children_ages) or [0] * snapshot.dependents

    cost_per_child = [
        college_base_cost * (1 + college_inflation_rate) ** max(0, college_start_age - age)
        for age in children_ages
    ]
    total_cost = sum(cost_per_child)

    # Timeline follows the youngest child
    years_until_college = max(0, college_start_age - min(children_ages))

    goals = snapshot.goals
    current_savings = (
        snapshot.college_savings_529
        or (goals.education_savings if goals is not None else None)
        or 0.0
    )

    months_until_college = max(1, years_until_college * 12)
    monthly_needed = monthly_payment_for_goal(
        current_savings,
        total_cost,
        months_until_college,
        college_savings_growth_rate,
    )

    projected_savings = current_savings * (1 + college_savings_growth_rate) ** years_until_college

    return CollegePlan(
        years_until_college=years_until_college,
        estimated_total_cost=total_cost,
        cost_per_child=cost_per_child,
        current_savings=current_savings,
        projected_savings=projected_savings,
        monthly_savings_needed=monthly_needed,
        projected_shortfall=max(0.0, total_cost - projected_savings),
    )
