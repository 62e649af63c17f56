# utils/tax_utils.py
import numpy as np
from typing import Dict, List, Optional, Tuple

BASE_YEAR = 2024 # Tax year of every table below

# Each bracket row is (upper_bound, cumulative_tax_below_this_bracket, marginal_rate).
# Rows are ordered; the last row is open-ended (np.inf).
Bracket = Tuple[float, float, float]

# =============================================================================
# 1. Federal Ordinary Income Tax Brackets (married filing jointly)
# =============================================================================
FEDERAL_STANDARD_DEDUCTION_2024 = 29_200

FEDERAL_BRACKETS_2024: List[Bracket] = [
    (22_000,       0.0,       0.10),
    (89_075,       2_200.0,   0.12),
    (190_750,      10_249.0,  0.22),
    (364_200,      32_617.5,  0.24),
    (462_500,      74_245.5,  0.32),
    (693_750,      105_701.5, 0.35),
    (np.inf,       186_639.0, 0.37),
]

# =============================================================================
# 2. State Income Tax Brackets
# =============================================================================
HI_TAX_BRACKETS_2024: List[Bracket] = [
    (2_400,   0.0,      0.014),
    (4_800,   33.6,     0.032),
    (9_600,   110.4,    0.055),
    (14_400,  374.4,    0.064),
    (19_200,  681.6,    0.068),
    (24_000,  1_008.0,  0.072),
    (36_000,  1_353.6,  0.076),
    (48_000,  2_265.6,  0.079),
    (150_000, 3_213.6,  0.0825),
    (175_000, 11_628.6, 0.09),
    (200_000, 13_878.6, 0.10),
    (np.inf,  16_378.6, 0.11),
]

CA_TAX_BRACKETS_2024: List[Bracket] = [
    (20_198,    0.0,        0.01),
    (47_884,    201.98,     0.02),
    (75_576,    755.70,     0.04),
    (104_910,   1_863.38,   0.06),
    (132_590,   3_623.42,   0.08),
    (677_278,   5_837.82,   0.093),
    (812_728,   56_493.804, 0.103),
    (1_000_000, 70_445.154, 0.113),
    (np.inf,    91_606.89,  0.123),
]

NY_TAX_BRACKETS_2024: List[Bracket] = [
    (17_150,    0.0,         0.04),
    (23_600,    686.0,       0.045),
    (27_900,    976.25,      0.0525),
    (161_550,   1_202.0,     0.055),
    (323_200,   8_552.75,    0.06),
    (2_155_350, 18_251.75,   0.0685),
    (5_000_000, 143_754.025, 0.0965),
    (np.inf,    418_262.75,  0.109),
]

STATE_TAX_BRACKETS: Dict[str, List[Bracket]] = {
    "HI": HI_TAX_BRACKETS_2024,
    "CA": CA_TAX_BRACKETS_2024,
    "NY": NY_TAX_BRACKETS_2024,
}

# No state income tax
NO_INCOME_TAX_STATES = ("NV", "TX", "FL")

STATE_NAMES: Dict[str, str] = {
    "HAWAII": "HI",
    "CALIFORNIA": "CA",
    "NEVADA": "NV",
    "TEXAS": "TX",
    "FLORIDA": "FL",
    "NEW YORK": "NY",
}


def normalize_state(state: Optional[str]) -> Optional[str]:
    """
    Maps a state name or postal code ('California', 'ca', ' CA ') to its
    two-letter code. Returns the cleaned input unchanged if it is not known.
    """
    if state is None:
        return None
    cleaned = " ".join(str(state).replace("-", " ").replace("_", " ").split()).upper()
    if not cleaned:
        return None
    return STATE_NAMES.get(cleaned, cleaned)


def is_supported_state(code: Optional[str]) -> bool:
    return code in STATE_TAX_BRACKETS or code in NO_INCOME_TAX_STATES
