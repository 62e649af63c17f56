# models.py
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class MajorPurchase:
    description: str = ""
    amount: float = 0.0
    target_date: Optional[date] = None


@dataclass(frozen=True)
class Goals:
    retirement_age: Optional[int] = None
    retirement_income: Optional[float] = None     # annual, today's dollars
    emergency_fund_months: Optional[float] = None
    home_down_payment: Optional[float] = None
    education_savings: Optional[float] = None
    debt_free_date: Optional[date] = None
    net_worth_target: Optional[float] = None
    annual_savings_target: Optional[float] = None
    major_purchase: Optional[MajorPurchase] = None


@dataclass(frozen=True)
class DebtAccount:
    name: str
    balance: float
    apr: float                      # percent, e.g. 18.99
    minimum_payment: float
    kind: str = "other"             # credit_card | student_loan | car_loan | other


@dataclass(frozen=True)
class PortfolioAllocation:
    stocks_percent: float = 0.0
    bonds_percent: float = 0.0
    cash_percent: float = 0.0
    other_percent: float = 0.0
    average_expense_ratio: Optional[float] = None


@dataclass(frozen=True)
class Assumptions:
    # None means "use the configured default"
    inflation_rate: Optional[float] = None
    investment_return_rate: Optional[float] = None
    salary_growth_rate: Optional[float] = None
    social_security_start_age: Optional[float] = None
    estimated_monthly_ss: Optional[float] = None


@dataclass(frozen=True)
class HouseholdSnapshot:
    # Personal
    name: str = ""
    age: int = 0
    dependents: int = 0
    children_ages: Tuple[int, ...] = ()
    state: Optional[str] = None
    filing_status: str = "married_joint"

    # Income
    income: float = 0.0
    spouse_income: float = 0.0
    monthly_retirement_contribution: float = 0.0

    # Assets
    checking: float = 0.0
    savings: float = 0.0
    retirement_401k: float = 0.0
    retirement_ira: float = 0.0
    brokerage: float = 0.0
    brokerage_is_retirement: bool = False
    college_savings_529: float = 0.0
    home_value: float = 0.0
    other_assets: float = 0.0

    # Insurance
    life_insurance_coverage: float = 0.0
    disability_insurance_coverage: float = 0.0
    has_life_insurance: bool = False
    has_disability_insurance: bool = False
    has_umbrella_policy: bool = False
    has_estate_plan: bool = False

    # Liabilities
    mortgage: float = 0.0
    student_loans: float = 0.0
    car_loans: float = 0.0
    credit_cards: float = 0.0
    other_debts: float = 0.0

    # Monthly expenses
    monthly_housing: float = 0.0
    monthly_transportation: float = 0.0
    monthly_food: float = 0.0
    monthly_utilities: float = 0.0
    monthly_insurance: float = 0.0
    monthly_entertainment: float = 0.0
    monthly_other: float = 0.0

    # Optional detail
    goals: Optional[Goals] = None
    detailed_debts: Tuple[DebtAccount, ...] = ()
    portfolio: Optional[PortfolioAllocation] = None
    assumptions: Assumptions = field(default_factory=Assumptions)


# =============================================================================
# Outputs
# =============================================================================

@dataclass
class TaxResult:
    state_tax: float
    federal_tax: float
    total_tax: float
    effective_rate: float           # percent
    state: Optional[str] = None


@dataclass
class HealthScoreBreakdown:
    protection_coverage: int
    savings_rate: int
    emergency_fund: int
    debt_to_income: int
    net_worth_growth: int

    @property
    def total(self) -> int:
        return (self.protection_coverage + self.savings_rate + self.emergency_fund
                + self.debt_to_income + self.net_worth_growth)


@dataclass
class GoalProgress:
    retirement_readiness: Optional[float] = None
    emergency_fund: Optional[float] = None
    home_down_payment: Optional[float] = None
    education_savings: Optional[float] = None
    debt_free_progress: Optional[float] = None
    net_worth_progress: Optional[float] = None
    savings_progress: Optional[float] = None
    major_purchase_progress: Optional[float] = None


@dataclass
class GoalMonthlySavings:
    emergency_fund: Optional[float] = None
    home_down_payment: Optional[float] = None
    education_savings: Optional[float] = None
    retirement_shortfall: Optional[float] = None
    major_purchase: Optional[float] = None


@dataclass
class SocialSecurityEstimate:
    monthly_benefit: float
    annual_benefit: float
    full_retirement_age: float
    claiming_age: float


@dataclass
class RetirementAnalysis:
    years_to_retirement: int
    projected_savings_at_retirement: float
    savings_needed_at_retirement: float
    gap: float
    monthly_savings_needed: float
    estimated_social_security: float
    inflation_adjusted_income: float
    rmd_start_age: int


@dataclass
class MonteCarloResult:
    success_rate: float
    median: float
    percentile10: float
    percentile90: float
    target: float
    years_simulated: int
    simulations_run: int
    projection: Any = None          # pandas.DataFrame of fixed-rate paths


@dataclass
class PortfolioAnalysis:
    risk_score: float
    expected_return: float
    target_stocks_percent: float
    target_allocation: str
    rebalancing_needed: bool
    allocation_warnings: List[str] = field(default_factory=list)


@dataclass
class DebtPayoffResult:
    method: str
    months_to_payoff: int
    total_interest: float
    payoff_order: List[Tuple[str, int]] = field(default_factory=list)
    converged: bool = True
    warning: Optional[str] = None


@dataclass
class DebtPayoffAnalysis:
    total_monthly_payment: float
    extra_payment: float
    avalanche: DebtPayoffResult
    snowball: DebtPayoffResult
    recommended_method: str
    interest_saved_by_avalanche: float
    months_saved_by_avalanche: int
    warning: Optional[str] = None


@dataclass
class CollegePlan:
    years_until_college: int
    estimated_total_cost: float
    cost_per_child: List[float]
    current_savings: float
    projected_savings: float
    monthly_savings_needed: float
    projected_shortfall: float


@dataclass
class TaxRecommendation:
    strategy: str
    estimated_savings: float
    difficulty: str                 # easy | moderate | complex
    description: str


@dataclass
class TaxOptimization:
    current_tax_bill: float
    optimized_tax_bill: float
    potential_savings: float
    effective_rate: float
    recommendations: List[TaxRecommendation] = field(default_factory=list)


@dataclass
class InsuranceProduct:
    id: str
    type: str
    name: str
    priority: str
    cost_min: float
    cost_max: float
    cost_unit: str
    coverage_amount: Optional[float]
    recommended: bool
    reason: str


@dataclass
class InsuranceQuote:
    product_type: str
    coverage_amount: float
    monthly_premium: float
    annual_premium: float
    term: Optional[int] = None
    waiting_period: Optional[int] = None
    benefit_period: Optional[str] = None


@dataclass
class ActionItem:
    priority: str                   # critical | high | medium
    category: str
    action: str
    impact: str
    deadline: Optional[str] = None


@dataclass
class DerivedMetrics:
    # Totals
    total_assets: float
    total_liabilities: float
    net_worth: float
    total_income: float
    total_monthly_expenses: float
    annual_expenses: float

    # Ratios
    debt_to_income_ratio: float
    savings_rate: float
    emergency_fund_months: float

    # Insurance gaps
    life_insurance_needed: float
    life_insurance_gap: float
    disability_insurance_needed: float
    disability_insurance_gap: float

    # Health score
    health_score: int
    health_score_breakdown: HealthScoreBreakdown

    # Sub-analyses
    goal_progress: Optional[GoalProgress] = None
    goal_monthly_savings: Optional[GoalMonthlySavings] = None
    retirement_analysis: Optional[RetirementAnalysis] = None
    social_security_estimate: Optional[SocialSecurityEstimate] = None
    portfolio_analysis: Optional[PortfolioAnalysis] = None
    debt_payoff_analysis: Optional[DebtPayoffAnalysis] = None
    college_planning: Optional[CollegePlan] = None
    tax_optimization: Optional[TaxOptimization] = None
    insurance_recommendations: List[InsuranceProduct] = field(default_factory=list)
    action_items: List[ActionItem] = field(default_factory=list)

    # Stochastic, excluded from equality
    monte_carlo: Optional[MonteCarloResult] = field(default=None, compare=False)


@dataclass
class RiskCategory:
    name: str
    score: float                    # 0-100, higher is riskier
    status: str                     # excellent | good | warning | critical
    message: str
    recommendations: List[str] = field(default_factory=list)


@dataclass
class RiskAssessment:
    categories: Dict[str, RiskCategory]
    overall_risk_score: int
    critical_gaps: List[str]


@dataclass
class FinancialPlan:
    metrics: DerivedMetrics
    risk: RiskAssessment
