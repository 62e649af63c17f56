from __future__ import annotations

import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from engine.metrics import calculate_core_metrics
from engine.risk_assessment import (
    assess_retirement,
    generate_risk_assessment,
    retirement_target_multiple,
)
from factories import make_empty_snapshot, make_snapshot

CATEGORY_KEYS = ["life_insurance", "disability", "emergency", "debt", "retirement", "estate", "liability", "savings"]


def assess(snapshot):
    return generate_risk_assessment(snapshot, calculate_core_metrics(snapshot))


class RiskAssessmentTests(unittest.TestCase):
    def test_reference_household(self) -> None:
        risk = assess(make_snapshot())
        self.assertEqual(list(risk.categories), CATEGORY_KEYS)

        scores = {key: cat.score for key, cat in risk.categories.items()}
        self.assertEqual(scores, {
            "life_insurance": 95,
            "disability": 90,
            "emergency": 40,
            "debt": 45,
            "retirement": 65,
            "estate": 10,
            "liability": 70,
            "savings": 10,
        })
        self.assertEqual(risk.overall_risk_score, 53)
        self.assertEqual(risk.critical_gaps, ["Life Insurance", "Disability Insurance"])

    def test_recommendations_are_filled_with_currency(self) -> None:
        risk = assess(make_snapshot())
        life = risk.categories["life_insurance"]
        self.assertEqual(life.message, "CRITICAL: Severe life insurance protection gap")
        self.assertIn("Recommended coverage: $1,800,000", life.recommendations)
        self.assertIn("Current gap: $1,300,000", life.recommendations)

        disability = risk.categories["disability"]
        self.assertIn("Recommended: $108,000 annual coverage", disability.recommendations)

    def test_overall_is_rounded_mean(self) -> None:
        for snapshot in (make_snapshot(), make_empty_snapshot()):
            risk = assess(snapshot)
            mean = sum(c.score for c in risk.categories.values()) / 8
            self.assertLessEqual(abs(risk.overall_risk_score - mean), 0.5)

    def test_critical_gaps_match_statuses(self) -> None:
        risk = assess(make_empty_snapshot())
        expected = [c.name for c in risk.categories.values() if c.status == "critical"]
        self.assertEqual(risk.critical_gaps, expected)
        self.assertIn("Emergency Fund", risk.critical_gaps)
        self.assertIn("Savings Rate", risk.critical_gaps)

    def test_emergency_fund_critical_names_goal_amount(self) -> None:
        risk = assess(make_snapshot(checking=0, savings=0))
        emergency = risk.categories["emergency"]
        self.assertEqual(emergency.status, "critical")
        self.assertIn("Goal amount: $45,600", emergency.recommendations)

    def test_disability_coverage_tiers(self) -> None:
        adequate = assess(make_snapshot(has_disability_insurance=True, disability_insurance_coverage=70_000))
        self.assertEqual(adequate.categories["disability"].status, "good")
        self.assertEqual(adequate.categories["disability"].score, 20)

        thin = assess(make_snapshot(has_disability_insurance=True, disability_insurance_coverage=20_000))
        self.assertEqual(thin.categories["disability"].status, "warning")
        self.assertEqual(thin.categories["disability"].score, 60)

    def test_excessive_debt_is_critical(self) -> None:
        risk = assess(make_snapshot(mortgage=900_000))
        self.assertEqual(risk.categories["debt"].status, "critical")
        self.assertEqual(risk.categories["debt"].score, 90)

    def test_protected_household(self) -> None:
        risk = assess(make_snapshot(has_estate_plan=True, has_umbrella_policy=True))
        self.assertEqual(risk.categories["estate"].status, "excellent")
        self.assertEqual(risk.categories["liability"].score, 15)


class RetirementBenchmarkTests(unittest.TestCase):
    def test_target_multiple_by_age(self) -> None:
        self.assertEqual(retirement_target_multiple(25), 0)
        self.assertEqual(retirement_target_multiple(30), 1)
        self.assertEqual(retirement_target_multiple(45), 3)
        self.assertEqual(retirement_target_multiple(55), 6)
        self.assertEqual(retirement_target_multiple(64), 8)

    def test_young_saver_is_excellent(self) -> None:
        snapshot = make_snapshot(age=26, retirement_401k=0, retirement_ira=0)
        category = assess_retirement(snapshot, calculate_core_metrics(snapshot))
        self.assertEqual(category.status, "excellent")
        self.assertEqual(category.message, "Retirement savings at 0.0x income")

    def test_behind_target_is_critical(self) -> None:
        snapshot = make_snapshot(age=58, retirement_401k=100_000, retirement_ira=0)
        category = assess_retirement(snapshot, calculate_core_metrics(snapshot))
        self.assertEqual(category.status, "critical")
        self.assertEqual(category.score, 85)
        self.assertIn("Target for age 58: 6x annual income", category.recommendations)


if __name__ == "__main__":
    unittest.main()
