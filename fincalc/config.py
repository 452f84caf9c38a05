"""Policy constants and environment-driven settings."""

from __future__ import annotations

import os
from typing import List

# Retirement
SAFE_WITHDRAWAL_RATE_PERCENT = 4.0  # the "4% rule"

# Lending
DEFAULT_MAX_LTV_PERCENT = 80.0
BALANCE_TOLERANCE = 0.01  # final-row snap, in dollars

# RMD
MAX_RMD_AGE = 120
SECURE_2_0_AGE_75_YEAR = 2033

# Rent vs buy
ITEMIZED_DEDUCTION_THRESHOLD = 27_700.0  # married filing jointly
BREAK_EVEN_HORIZON_YEARS = 30

# Soft-validation thresholds
BUSINESS_LOAN_MAX_TERM_YEARS = 30
BUSINESS_LOAN_HIGH_RATE_PERCENT = 100.0
BUSINESS_LOAN_HIGH_ORIGINATION_PERCENT = 10.0

HOME_EQUITY_LENDER_CAP = 1_000_000.0
HOME_EQUITY_HIGH_RATE_PERCENT = 50.0
HOME_EQUITY_TYPICAL_MAX_TERM_YEARS = 30

MAX_AGE = 120
RETURN_RATE_BOUNDS = (-20.0, 30.0)
INFLATION_RATE_BOUNDS = (-5.0, 20.0)
EMPLOYER_MATCH_UNUSUAL_PERCENT = 100.0

MIN_BIRTH_YEAR = 1900
MIN_OWNER_AGE_YEARS = 20
RMD_YEAR_PAST_WINDOW = 5
RMD_YEAR_FUTURE_WINDOW = 10
RMD_RETURN_RATE_BOUNDS = (-50.0, 50.0)


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


LOG_LEVEL = os.environ.get("FINCALC_LOG_LEVEL", "WARNING").upper()

CORS_ORIGINS = _split_origins(
    os.environ.get(
        "FINCALC_CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173",
    )
)
