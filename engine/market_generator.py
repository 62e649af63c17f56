# market_generator.py
#
# This code generates annual market returns for the retirement Monte Carlo.
# Returns are i.i.d. normal, drawn with the Box-Muller transform from an
# injected generator so a seeded run is reproducible.
#

import numpy as np
from numpy.typing import NDArray


def box_muller(u: NDArray[np.float64], v: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Standard normal draws from two uniform arrays.
    `u` must lie in (0, 1]; `v` in [0, 1).
    """
    return np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)


def generate_annual_returns(
    nsims: int,
    n_years: int,
    mean: float,
    sigma: float,
    rng: np.random.Generator,
) -> NDArray[np.float64]:
    """
    Generate Monte Carlo annual returns (in percent).

    Args:
        nsims: The number of Monte Carlo simulations to run.
        n_years: The number of full years to simulate.
        mean: Mean annual return, percent (e.g. 8.0).
        sigma: Standard deviation of the annual return, percent (e.g. 12.0).
        rng: Source of uniform draws.

    Returns:
        2D numpy array [nsims, n_years] of annual returns in percent.
    """
    # 1 - U(0,1) keeps log() away from zero
    u = 1.0 - rng.random((nsims, n_years))
    v = rng.random((nsims, n_years))

    return mean + sigma * box_muller(u, v)


def fixed_rate_growth(
    principal: float,
    annual_contribution: float,
    rate: float,
    n_years: int,
) -> NDArray[np.float64]:
    """
    Year-by-year balance at a constant annual rate (percent), contribution
    added at year end. Element 0 is the starting principal.
    """
    balances = np.empty(n_years + 1)
    balance = principal
    balances[0] = balance
    for year in range(1, n_years + 1):
        balance = balance * (1 + rate / 100) + annual_contribution
        balances[year] = balance
    return balances
