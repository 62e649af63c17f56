from __future__ import annotations

import math
import sys
import unittest
from dataclasses import replace
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from engine.goals import (
    calculate_goal_monthly_savings,
    calculate_goal_progress,
    monthly_payment_for_goal,
    months_until,
)
from engine.metrics import calculate_core_metrics
from factories import AS_OF, make_snapshot
from models import Goals


def future_value(current, payment, months, annual_rate):
    r = annual_rate / 12
    growth = (1 + r) ** months
    return current * growth + payment * (growth - 1) / r


class MonthlyPaymentTests(unittest.TestCase):
    def test_payment_reaches_target(self) -> None:
        for current, target, months, rate in [
            (0, 50_000, 60, 0.05),
            (10_000, 250_000, 240, 0.07),
            (5_000, 20_000, 18, 0.02),
        ]:
            payment = monthly_payment_for_goal(current, target, months, rate)
            self.assertGreater(payment, 0)
            self.assertAlmostEqual(future_value(current, payment, months, rate), target, places=4)

    def test_emergency_fund_goal(self) -> None:
        payment = monthly_payment_for_goal(5_000, 30_000, 12, 0.02)
        self.assertAlmostEqual(future_value(5_000, payment, 12, 0.02), 30_000, places=6)
        self.assertAlmostEqual(payment, 2_056.0, delta=1.0)

    def test_zero_rate_is_straight_line(self) -> None:
        self.assertAlmostEqual(monthly_payment_for_goal(0, 12_000, 12, 0.0), 1_000.0)
        self.assertAlmostEqual(monthly_payment_for_goal(2_000, 12_000, 10, 0.0), 1_000.0)

    def test_target_already_met(self) -> None:
        self.assertEqual(monthly_payment_for_goal(15_000, 10_000, 24, 0.05), 0.0)
        self.assertEqual(monthly_payment_for_goal(10_000, 10_000, 24, 0.05), 0.0)

    def test_growth_alone_reaches_target(self) -> None:
        self.assertEqual(monthly_payment_for_goal(10_000, 10_500, 60, 0.05), 0.0)

    def test_no_time_left_needs_whole_gap(self) -> None:
        self.assertEqual(monthly_payment_for_goal(4_000, 10_000, 0, 0.05), 6_000.0)

    def test_invalid_inputs_return_zero(self) -> None:
        for args in [
            (None, 10_000, 12, 0.05),
            (0, math.nan, 12, 0.05),
            (0, 10_000, -1, 0.05),
            (-100, 10_000, 12, 0.05),
            (0, 10_000, 12, None),
        ]:
            with self.assertLogs("engine.goals", level="WARNING"):
                self.assertEqual(monthly_payment_for_goal(*args), 0.0)

    def test_payment_is_never_negative(self) -> None:
        for target in (0, 1, 1_000, 1_000_000):
            self.assertGreaterEqual(monthly_payment_for_goal(5_000, target, 36, 0.06), 0.0)


class MonthsUntilTests(unittest.TestCase):
    def test_default_when_no_date(self) -> None:
        self.assertEqual(months_until(None, AS_OF, 24), 24)

    def test_thirty_day_months(self) -> None:
        self.assertEqual(months_until(date(2026, 6, 1), AS_OF, 24), 24)

    def test_past_dates_floor_at_one_month(self) -> None:
        self.assertEqual(months_until(date(2020, 1, 1), AS_OF, 24), 1)


class GoalProgressTests(unittest.TestCase):
    def test_no_goals_means_no_progress(self) -> None:
        snapshot = make_snapshot(goals=None)
        metrics = calculate_core_metrics(snapshot)
        self.assertIsNone(calculate_goal_progress(snapshot, metrics))
        self.assertIsNone(calculate_goal_monthly_savings(snapshot, metrics, AS_OF))

    def test_reference_household_progress(self) -> None:
        snapshot = make_snapshot()
        progress = calculate_goal_progress(snapshot, calculate_core_metrics(snapshot))

        self.assertAlmostEqual(progress.retirement_readiness, 390_000 / 3_000_000 * 100)
        self.assertAlmostEqual(progress.emergency_fund, 45_000 / 45_600 * 100)
        self.assertAlmostEqual(progress.education_savings, 24.0)
        self.assertAlmostEqual(progress.net_worth_progress, 660_500 / 1_500_000 * 100)
        self.assertEqual(progress.savings_progress, 100.0)
        self.assertEqual(progress.major_purchase_progress, 100.0)
        self.assertIsNone(progress.home_down_payment)
        self.assertIsNone(progress.debt_free_progress)

    def test_progress_is_clamped(self) -> None:
        snapshot = make_snapshot(
            mortgage=3_000_000,
            goals=Goals(net_worth_target=100_000, home_down_payment=10_000),
        )
        progress = calculate_goal_progress(snapshot, calculate_core_metrics(snapshot))
        self.assertEqual(progress.net_worth_progress, 0.0)
        self.assertEqual(progress.home_down_payment, 100.0)

    def test_debt_free_progress(self) -> None:
        debt_free = make_snapshot(mortgage=0, student_loans=0, car_loans=0, credit_cards=0)
        progress = calculate_goal_progress(debt_free, calculate_core_metrics(debt_free))
        self.assertEqual(progress.debt_free_progress, 100.0)

        goals = replace(make_snapshot().goals, debt_free_date=date(2030, 1, 1))
        indebted = make_snapshot(goals=goals)
        progress = calculate_goal_progress(indebted, calculate_core_metrics(indebted))
        self.assertEqual(progress.debt_free_progress, 0.0)


class GoalMonthlySavingsTests(unittest.TestCase):
    def test_reference_household_contributions(self) -> None:
        snapshot = make_snapshot()
        savings = calculate_goal_monthly_savings(snapshot, calculate_core_metrics(snapshot), AS_OF)

        # 45,000 at 2% for a year already exceeds 45,600
        self.assertEqual(savings.emergency_fund, 0.0)
        # Liquid savings already cover the remodel
        self.assertEqual(savings.major_purchase, 0.0)
        expected = monthly_payment_for_goal(24_000, 100_000, 120, 0.07)
        self.assertAlmostEqual(savings.education_savings, expected)
        self.assertIsNone(savings.home_down_payment)
        self.assertIsNone(savings.retirement_shortfall)

    def test_major_purchase_uses_months_to_target_date(self) -> None:
        goals = replace(make_snapshot().goals, major_purchase=replace(
            make_snapshot().goals.major_purchase, amount=100_000))
        snapshot = make_snapshot(goals=goals)
        savings = calculate_goal_monthly_savings(snapshot, calculate_core_metrics(snapshot), AS_OF)
        self.assertAlmostEqual(savings.major_purchase, monthly_payment_for_goal(45_000, 100_000, 24, 0.03))


if __name__ == "__main__":
    unittest.main()
