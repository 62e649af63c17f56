# engine/__init__.py

# Main entry point, which orchestrates all the analyses.
from .planner import analyze_household, calculate_financial_metrics
from .risk_assessment import generate_risk_assessment

# Tax calculation is also used on its own
from .tax_engine import calculate_taxes

# Expose the simulator and the reusable solvers
from .simulator import RetirementSimulator
from .goals import monthly_payment_for_goal
from .debt_engine import DebtPayoffEngine
from .insurance import generate_insurance_quote
