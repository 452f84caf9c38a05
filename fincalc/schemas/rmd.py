"""Data contracts for required minimum distributions."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class RMDProfile(BaseModel):
    """
    Owner and account details for one distribution year.

    ``account_balance`` is the balance on December 31 of the year before
    ``rmd_year``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    birth_year: int
    rmd_year: int
    account_balance: float
    has_spouse_beneficiary: bool = False
    spouse_birth_year: Optional[int] = None
    estimated_return_rate: Optional[float] = None
    years_to_project: Optional[int] = None


class LifeTable(str, Enum):
    UNIFORM = "Uniform"
    JOINT = "Joint"
    SINGLE = "Single"


class PeriodSource(str, Enum):
    EXACT = "exact"
    FALLBACK = "fallback"


class DistributionPeriod(BaseModel):
    """A divisor together with the table it came from and whether it was an exact hit."""

    period: float
    table: LifeTable
    source: PeriodSource


class RMDYearProjection(BaseModel):
    year: int
    age: int
    beginning_balance: float
    distribution_period: float
    rmd_amount: float
    earnings: float
    ending_balance: float


class RMDResults(BaseModel):
    owner_age: int
    spouse_age: Optional[int] = None
    distribution_period: float
    table_used: LifeTable
    period_source: PeriodSource
    rmd_amount: float

    rmd_required: bool
    rmd_start_age: int
    rmd_start_year: int
    first_rmd_deadline: str
    rmd_deadline: str

    projections: List[RMDYearProjection] = []
    total_rmds: Optional[float] = None
    final_balance: Optional[float] = None
    average_rmd: Optional[float] = None
