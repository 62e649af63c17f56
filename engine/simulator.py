# engine.simulator.py

import logging
from typing import Optional

import numpy as np
import pandas as pd

# --- Utilities and Models ---
from models import HouseholdSnapshot, DerivedMetrics, MonteCarloResult
from engine.tiers import round_half_up

# --- Configuration Imports
from config.market_assumptions import (
    mc_num_simulations,
    mc_return_mean_pct,
    mc_return_stdev_pct,
    mc_income_replacement,
    mc_percentiles,
    percentile_path_rates,
    default_retirement_age,
    safe_withdrawal_multiple,
)

from engine.market_generator import generate_annual_returns, fixed_rate_growth

logger = logging.getLogger(__name__)


class RetirementSimulator:
    """
    Runs Monte Carlo simulations of retirement savings growth from today to
    the target retirement age, plus the fixed-rate chart paths.
    """
    def __init__(
        self,
        snapshot: HouseholdSnapshot,
        metrics: DerivedMetrics,
        nsims: int = mc_num_simulations,
        rng: Optional[np.random.Generator] = None,
    ):

        # -----------------------
        # STEP 1: Initialize Inputs and Core Attributes
        # -----------------------
        self.snapshot = snapshot
        self.metrics = metrics
        self.nsims = max(1, int(nsims))
        self.rng = rng if rng is not None else np.random.default_rng()

        # -----------------------
        # STEP 2: Starting Balance and Cash Flow
        # -----------------------
        self.initial_balance = snapshot.retirement_401k + snapshot.retirement_ira
        # Annual surplus, negative when expenses exceed income
        self.annual_contribution = (metrics.total_income / 12 - metrics.total_monthly_expenses) * 12

        # -----------------------
        # STEP 3: Define Simulation Timeframe and Ages
        # -----------------------
        goals = snapshot.goals
        self.retirement_age = (goals.retirement_age if goals is not None else None) or default_retirement_age
        self.num_years = max(0, self.retirement_age - snapshot.age)
        self.ages = np.arange(snapshot.age, snapshot.age + self.num_years + 1)

        self.target = metrics.total_income * mc_income_replacement * safe_withdrawal_multiple

        # Filled by run_simulation
        self.portfolio_paths = None

    # =========================================================================
    # 1. CORE SIMULATION RUNNER
    # =========================================================================
    def run_simulation(self) -> MonteCarloResult:
        """Runs the Monte Carlo simulation over all paths."""
        returns = generate_annual_returns(
            self.nsims,
            self.num_years,
            mc_return_mean_pct,
            mc_return_stdev_pct,
            self.rng,
        )

        # Path storage includes the starting balance at column 0
        self.portfolio_paths = np.zeros((self.nsims, self.num_years + 1))
        balances = np.full(self.nsims, self.initial_balance, dtype=float)
        self.portfolio_paths[:, 0] = balances

        for year in range(self.num_years):
            balances = balances * (1 + returns[:, year] / 100) + self.annual_contribution
            self.portfolio_paths[:, year + 1] = balances

        return self._summarize_results()

    # =========================================================================
    # 2. CHART PATHS
    # =========================================================================
    def percentile_paths(self) -> pd.DataFrame:
        """
        Fixed-rate growth paths (conservative / median / optimistic) indexed by
        age. These are illustrative curves, not statistics of the random paths.
        """
        data = {
            name: fixed_rate_growth(self.initial_balance, self.annual_contribution, rate, self.num_years)
            for name, rate in percentile_path_rates.items()
        }
        return pd.DataFrame(data, index=pd.Index(self.ages, name="age"))

    # =========================================================================
    # 3. SUMMARY
    # =========================================================================
    def _summarize_results(self) -> MonteCarloResult:
        """
        Sorts the floored terminal balances and reads the percentiles by
        index floor(N * p).
        """
        terminal = np.sort(np.maximum(self.portfolio_paths[:, -1], 0.0))
        n = terminal.size

        p10, p50, p90 = (terminal[min(n - 1, int(np.floor(n * p)))] for p in mc_percentiles)
        success_rate = round_half_up(np.mean(terminal >= self.target) * 100)

        logger.debug(
            f"Monte Carlo: {n} paths over {self.num_years} years, success {success_rate}% "
            f"(median ${p50:,.0f}, target ${self.target:,.0f})"
        )

        return MonteCarloResult(
            success_rate=success_rate,
            median=float(p50),
            percentile10=float(p10),
            percentile90=float(p90),
            target=self.target,
            years_simulated=self.num_years,
            simulations_run=n,
            projection=self.percentile_paths(),
        )


def run_monte_carlo(
    snapshot: HouseholdSnapshot,
    metrics: DerivedMetrics,
    nsims: int = mc_num_simulations,
    rng: Optional[np.random.Generator] = None,
) -> MonteCarloResult:
    return RetirementSimulator(snapshot, metrics, nsims=nsims, rng=rng).run_simulation()
