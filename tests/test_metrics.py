from __future__ import annotations

import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from engine.health_score import (
    debt_to_income_score,
    emergency_fund_score,
    protection_score,
    savings_rate_score,
)
from engine.metrics import calculate_core_metrics
from engine.tiers import HEALTH_SCORE_WEIGHTS, round_half_up
from factories import make_empty_snapshot, make_snapshot


class CoreMetricsTests(unittest.TestCase):
    def test_totals_and_ratios(self) -> None:
        metrics = calculate_core_metrics(make_snapshot())
        self.assertEqual(metrics.total_assets, 1_120_000)
        self.assertEqual(metrics.total_liabilities, 459_500)
        self.assertEqual(metrics.net_worth, metrics.total_assets - metrics.total_liabilities)
        self.assertEqual(metrics.total_income, 180_000)
        self.assertEqual(metrics.total_monthly_expenses, 7_600)
        self.assertEqual(metrics.annual_expenses, 91_200)
        self.assertAlmostEqual(metrics.debt_to_income_ratio, 459_500 / 180_000)
        self.assertAlmostEqual(metrics.savings_rate, (180_000 - 91_200) / 180_000 * 100)
        self.assertAlmostEqual(metrics.emergency_fund_months, 45_000 / 7_600)

    def test_insurance_needs_and_gaps(self) -> None:
        metrics = calculate_core_metrics(make_snapshot())
        self.assertEqual(metrics.life_insurance_needed, 1_800_000)
        self.assertEqual(metrics.life_insurance_gap, 1_300_000)
        self.assertAlmostEqual(metrics.disability_insurance_needed, 108_000)
        self.assertAlmostEqual(metrics.disability_insurance_gap, 108_000)

        covered = calculate_core_metrics(make_snapshot(life_insurance_coverage=2_500_000))
        self.assertEqual(covered.life_insurance_gap, 0.0)

    def test_zero_denominators_give_zero(self) -> None:
        metrics = calculate_core_metrics(make_empty_snapshot())
        self.assertEqual(metrics.debt_to_income_ratio, 0.0)
        self.assertEqual(metrics.savings_rate, 0.0)
        self.assertEqual(metrics.emergency_fund_months, 0.0)
        self.assertEqual(metrics.net_worth, 0.0)

    def test_savings_rate_is_clamped(self) -> None:
        overspending = calculate_core_metrics(make_snapshot(income=30_000, spouse_income=0))
        self.assertEqual(overspending.savings_rate, 0.0)

        no_expenses = make_empty_snapshot(income=100_000)
        self.assertEqual(calculate_core_metrics(no_expenses).savings_rate, 100.0)

    def test_missing_spouse_income_counts_as_zero(self) -> None:
        metrics = calculate_core_metrics(make_snapshot(spouse_income=0))
        self.assertEqual(metrics.total_income, 120_000)


class HealthScoreTests(unittest.TestCase):
    def test_weights_sum_to_one_hundred(self) -> None:
        self.assertEqual(sum(HEALTH_SCORE_WEIGHTS.values()), 100)

    def test_reference_household_breakdown(self) -> None:
        metrics = calculate_core_metrics(make_snapshot())
        breakdown = metrics.health_score_breakdown
        self.assertEqual(breakdown.protection_coverage, 4)
        self.assertEqual(breakdown.savings_rate, 25)
        self.assertEqual(breakdown.emergency_fund, 15)
        self.assertEqual(breakdown.debt_to_income, 12)
        self.assertEqual(breakdown.net_worth_growth, 8)
        self.assertEqual(metrics.health_score, 64)

    def test_total_equals_sum_of_subscores(self) -> None:
        for snapshot in (make_snapshot(), make_empty_snapshot(), make_snapshot(checking=0, savings=2_000)):
            metrics = calculate_core_metrics(snapshot)
            b = metrics.health_score_breakdown
            self.assertEqual(
                metrics.health_score,
                b.protection_coverage + b.savings_rate + b.emergency_fund + b.debt_to_income + b.net_worth_growth,
            )
            self.assertGreaterEqual(metrics.health_score, 0)
            self.assertLessEqual(metrics.health_score, 100)

    def test_subscores_respect_caps(self) -> None:
        protected = make_snapshot(
            has_umbrella_policy=True,
            has_disability_insurance=True,
            has_estate_plan=True,
        )
        self.assertEqual(protection_score(protected, life_insurance_gap=0.0), HEALTH_SCORE_WEIGHTS["protection_coverage"])
        self.assertEqual(savings_rate_score(80), HEALTH_SCORE_WEIGHTS["savings_rate"])
        self.assertEqual(emergency_fund_score(24), HEALTH_SCORE_WEIGHTS["emergency_fund"])
        self.assertEqual(debt_to_income_score(0.0), HEALTH_SCORE_WEIGHTS["debt_to_income"])

    def test_linear_fallbacks_below_lowest_tier(self) -> None:
        self.assertEqual(savings_rate_score(3.4), 3.4)
        self.assertEqual(emergency_fund_score(0.5), 2.5)
        self.assertEqual(round_half_up(emergency_fund_score(0.5)), 3)
        self.assertEqual(debt_to_income_score(7.5), 0)

    def test_empty_household_scores(self) -> None:
        breakdown = calculate_core_metrics(make_empty_snapshot()).health_score_breakdown
        # No income means no life-insurance need, so the gap is closed
        self.assertEqual(breakdown.protection_coverage, 8)
        self.assertEqual(breakdown.debt_to_income, 15)
        self.assertEqual(breakdown.net_worth_growth, 0)


if __name__ == "__main__":
    unittest.main()
