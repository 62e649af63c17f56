from __future__ import annotations

import sys
import unittest
from dataclasses import replace
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from engine.goals import monthly_payment_for_goal
from engine.metrics import calculate_core_metrics
from engine.retirement import (
    calculate_retirement_analysis,
    estimate_social_security,
    future_value_of_contributions,
)
from engine.rmd_tables import get_rmd_factor, get_rmd_start_age, required_minimum_distribution
from factories import AS_OF, make_snapshot
from models import Assumptions
from utils.ss_utils import estimate_pia, get_full_retirement_age


class SocialSecurityTests(unittest.TestCase):
    def test_full_retirement_age_by_birth_year(self) -> None:
        self.assertEqual(get_full_retirement_age(1950), 66.0)
        self.assertEqual(get_full_retirement_age(1954), 66.0)
        self.assertAlmostEqual(get_full_retirement_age(1957), 66.5)
        self.assertAlmostEqual(get_full_retirement_age(1959), 66 + 10 / 12)
        self.assertEqual(get_full_retirement_age(1960), 67.0)
        self.assertEqual(get_full_retirement_age(1990), 67.0)

    def test_january_births_use_previous_year(self) -> None:
        self.assertAlmostEqual(get_full_retirement_age(1960, birth_month=1), 66 + 10 / 12)
        self.assertEqual(get_full_retirement_age(1960, birth_month=6), 67.0)

    def test_pia_bend_points(self) -> None:
        self.assertAlmostEqual(estimate_pia(1_000), 900.0)
        self.assertAlmostEqual(estimate_pia(5_000), 1_174 * 0.9 + (5_000 - 1_174) * 0.32)
        self.assertEqual(estimate_pia(50_000), 3_822)
        self.assertEqual(estimate_pia(-10), 0.0)

    def test_benefit_at_full_retirement_age_is_capped(self) -> None:
        estimate = estimate_social_security(180_000, 42, AS_OF, claim_age=67)
        self.assertEqual(estimate.full_retirement_age, 67.0)
        self.assertEqual(estimate.monthly_benefit, 3_822)
        self.assertEqual(estimate.annual_benefit, 45_864)

    def test_claiming_age_adjustments(self) -> None:
        early = estimate_social_security(180_000, 42, AS_OF, claim_age=62)
        late = estimate_social_security(180_000, 42, AS_OF, claim_age=70)
        self.assertEqual(early.monthly_benefit, 2_484)
        self.assertEqual(late.monthly_benefit, 4_739)

    def test_claiming_age_is_clamped(self) -> None:
        self.assertEqual(estimate_social_security(60_000, 40, AS_OF, claim_age=75).claiming_age, 70)
        self.assertEqual(estimate_social_security(60_000, 40, AS_OF, claim_age=55).claiming_age, 62)

    def test_default_claim_is_full_retirement_age(self) -> None:
        estimate = estimate_social_security(12_000, 40, AS_OF)
        self.assertEqual(estimate.claiming_age, 67.0)
        self.assertEqual(estimate.monthly_benefit, 900)


class RmdTests(unittest.TestCase):
    def test_start_age_by_birth_year(self) -> None:
        self.assertEqual(get_rmd_start_age(None), 72)
        self.assertEqual(get_rmd_start_age(1949), 72)
        self.assertEqual(get_rmd_start_age(1955), 73)
        self.assertEqual(get_rmd_start_age(1965), 75)

    def test_no_factor_before_start_age(self) -> None:
        self.assertEqual(get_rmd_factor(74, 1965), 0.0)
        self.assertEqual(get_rmd_factor(75, 1965), 24.6)
        self.assertEqual(get_rmd_factor(125, 1940), 2.0)

    def test_required_minimum_distribution(self) -> None:
        self.assertAlmostEqual(required_minimum_distribution(246_000, 75, 1965), 10_000)
        self.assertEqual(required_minimum_distribution(246_000, 70, 1965), 0.0)
        self.assertEqual(required_minimum_distribution(0, 80, 1945), 0.0)


class RetirementAnalysisTests(unittest.TestCase):
    def analyze(self, snapshot):
        return calculate_retirement_analysis(snapshot, calculate_core_metrics(snapshot), AS_OF)

    def test_reference_household(self) -> None:
        analysis = self.analyze(make_snapshot())
        self.assertEqual(analysis.years_to_retirement, 23)
        self.assertEqual(analysis.estimated_social_security, 45_864)
        self.assertEqual(analysis.rmd_start_age, 75)
        self.assertAlmostEqual(analysis.inflation_adjusted_income, 120_000 * 1.03 ** 23)

        expected_projection = 310_000 * 1.07 ** 23 + future_value_of_contributions(1_000, 276, 0.07)
        self.assertAlmostEqual(analysis.projected_savings_at_retirement, expected_projection)

        self.assertAlmostEqual(
            analysis.gap,
            max(0.0, analysis.savings_needed_at_retirement - analysis.projected_savings_at_retirement),
        )
        if analysis.gap > 0:
            self.assertAlmostEqual(
                analysis.monthly_savings_needed,
                monthly_payment_for_goal(0.0, analysis.gap, 276, 0.07),
            )

    def test_explicit_social_security_overrides_estimate(self) -> None:
        snapshot = make_snapshot(assumptions=Assumptions(estimated_monthly_ss=2_000))
        self.assertEqual(self.analyze(snapshot).estimated_social_security, 24_000)

    def test_explicit_zero_social_security_is_honoured(self) -> None:
        snapshot = make_snapshot(assumptions=Assumptions(estimated_monthly_ss=0.0))
        self.assertEqual(self.analyze(snapshot).estimated_social_security, 0.0)

    def test_explicit_zero_inflation_is_honoured(self) -> None:
        snapshot = make_snapshot(assumptions=Assumptions(inflation_rate=0.0))
        self.assertAlmostEqual(self.analyze(snapshot).inflation_adjusted_income, 120_000)

    def test_missing_assumptions_use_defaults(self) -> None:
        snapshot = make_snapshot(assumptions=Assumptions())
        analysis = self.analyze(snapshot)
        self.assertAlmostEqual(analysis.inflation_adjusted_income, 120_000 * 1.03 ** 23)

    def test_brokerage_counts_when_flagged(self) -> None:
        plain = self.analyze(make_snapshot())
        flagged = self.analyze(make_snapshot(brokerage_is_retirement=True))
        self.assertGreater(flagged.projected_savings_at_retirement, plain.projected_savings_at_retirement)
        self.assertLessEqual(flagged.gap, plain.gap)

    def test_large_balance_has_no_gap(self) -> None:
        analysis = self.analyze(make_snapshot(retirement_401k=5_000_000))
        self.assertEqual(analysis.gap, 0.0)
        self.assertEqual(analysis.monthly_savings_needed, 0.0)

    def test_past_retirement_age(self) -> None:
        goals = replace(make_snapshot().goals, retirement_age=60)
        analysis = self.analyze(make_snapshot(age=63, goals=goals))
        self.assertEqual(analysis.years_to_retirement, 0)
        self.assertEqual(analysis.monthly_savings_needed, 0.0)


if __name__ == "__main__":
    unittest.main()
