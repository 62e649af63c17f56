# =============================================================================
# Market and economic assumptions used in projections and simulations
# =============================================================================
ASSUMPTIONS_YEAR = 2024

# Defaults when the household snapshot does not override them
default_inflation_rate = 0.03
default_investment_return_rate = 0.07
default_salary_growth_rate = 0.03
default_goal_return_rate = 0.05     # medium-horizon goals (down payment, education)

# Retirement
default_retirement_age = 67
default_income_replacement = 0.80   # deterministic model, desired income as share of today's
safe_withdrawal_multiple = 25       # 4% rule

# Monte Carlo (annual returns in percent)
mc_num_simulations = 1000
mc_return_mean_pct = 8.0
mc_return_stdev_pct = 12.0
mc_income_replacement = 0.70
mc_percentiles = (0.10, 0.50, 0.90)

# Fixed-rate chart paths (percent), not derived from the random paths
percentile_path_rates = {
    "conservative": 4.0,
    "median": 8.0,
    "optimistic": 12.0,
}

# Long-run returns by asset class (percent)
asset_class_returns = {
    "stocks": 8.0,
    "bonds": 4.5,
    "cash": 2.0,
    "other": 6.0,
}

# Education
college_base_cost = 150_000         # 4-year total, today's dollars
college_inflation_rate = 0.05
college_savings_growth_rate = 0.07
college_start_age = 18
