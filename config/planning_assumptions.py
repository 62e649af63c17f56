# config/planning_assumptions.py
# Limits, thresholds and default horizons. Most of these change yearly.
ASSUMPTIONS_YEAR = 2024

# Insurance needs
life_insurance_income_multiple = 10
disability_income_replacement = 0.60

# Goal horizons (months) and growth assumptions for the contribution solver
emergency_fund_horizon_months = 12
emergency_fund_return_rate = 0.02
down_payment_horizon_months = 36
education_horizon_months = 120
education_brokerage_share = 0.30        # share of brokerage assumed earmarked for education
major_purchase_horizon_months = 24
major_purchase_return_rate = 0.03
days_per_month = 30

# Debt payoff
debt_max_months = 360
debt_min_extra_payment = 100
debt_surplus_share = 0.10               # share of monthly surplus directed at debt

# Portfolio
stock_target_base = 110                 # target stocks % = base - age
stock_target_floor = 40
stock_target_ceiling = 90
rebalance_tolerance_pct = 10
allocation_sum_tolerance_pct = 0.1
high_cash_pct = 20
high_expense_ratio_pct = 1.0

# Tax optimization
max_401k_contribution = 23_000
hsa_income_floor = 60_000
hsa_limit_family = 8_300
hsa_limit_self = 4_150
tax_loss_brokerage_floor = 50_000
tax_loss_harvest_rate = 0.03
capital_loss_deduction_limit = 3_000
backdoor_roth_income_floor = 230_000
charitable_income_floor = 150_000
charitable_giving_rate = 0.05
plan_529_contribution = 10_000
plan_529_state_rates = {
    "CA": 0.093,
    "NY": 0.0685,
}
roth_conversion_min_age = 50
roth_conversion_pretax_floor = 500_000

# Action items
retirement_gap_action_floor = 50_000
high_interest_apr_floor = 15.0
max_action_items = 8
