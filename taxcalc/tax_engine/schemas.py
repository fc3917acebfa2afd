"""
schemas.py — tax engine Pydantic v2 data contracts.

Defines:
  - AgeGroup, Regime enums
  - Deductions, Investments  (partial mappings — absent fields coalesce to 0)
  - TaxInput                 (validated request record consumed by compute())
  - DeductionSummary         (old-regime aggregation, internal to the engine)
  - TaxResult                (computed record returned by compute())
  - CalculationResponse      (TaxResult + tax-saving suggestions, HTTP response)
  - CalculationRecord        (one stored history entry)

Wire format is camelCase (ageGroup, hraExempt, taxableIncome, ...); Python
code uses the snake_case attribute names. populate_by_name=True accepts both.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AgeGroup(str, Enum):
    below_60 = "below-60"
    sixty_to_80 = "60-80"
    above_80 = "above-80"


class Regime(str, Enum):
    old = "old"
    new = "new"


# ---------------------------------------------------------------------------
# Partial input mappings
# ---------------------------------------------------------------------------

def _blank_to_zero(value: Any) -> Any:
    """None and "" (what an untouched form field sends) both mean 0."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    return value


class Deductions(BaseModel):
    """Chapter VI-A claims. Every field is optional and defaults to 0."""
    model_config = ConfigDict(
        extra="forbid", frozen=True, populate_by_name=True, allow_inf_nan=False,
    )

    section_80c: float = Field(default=0.0, ge=0, alias="section80c")
    section_80d: float = Field(default=0.0, ge=0, alias="section80d")
    section_80e: float = Field(default=0.0, ge=0, alias="section80e")
    section_80g: float = Field(default=0.0, ge=0, alias="section80g")
    other_deductions: float = Field(default=0.0, ge=0, alias="otherDeductions")

    @field_validator("*", mode="before")
    @classmethod
    def coalesce_blank_fields(cls, value: Any) -> Any:
        return _blank_to_zero(value)


class Investments(BaseModel):
    """
    Tax-saving investments.

    ppf, elss, fd and home_loan share the Section 80C pool with
    Deductions.section_80c; nps feeds the separate 80CCD(1B) bucket.
    """
    model_config = ConfigDict(
        extra="forbid", frozen=True, populate_by_name=True, allow_inf_nan=False,
    )

    ppf: float = Field(default=0.0, ge=0)
    elss: float = Field(default=0.0, ge=0)
    nps: float = Field(default=0.0, ge=0)
    fd: float = Field(default=0.0, ge=0)
    home_loan: float = Field(default=0.0, ge=0, alias="homeLoan")

    @field_validator("*", mode="before")
    @classmethod
    def coalesce_blank_fields(cls, value: Any) -> Any:
        return _blank_to_zero(value)


# ---------------------------------------------------------------------------
# TaxInput — what compute() consumes
# ---------------------------------------------------------------------------

class TaxInput(BaseModel):
    """
    One tax calculation request. Immutable once validated.

    income is required; everything else has a default so a caller can send
    just {"income": ...}. financial_year is a label stored with the record —
    the schedules themselves are fixed and do not vary by year.
    """
    model_config = ConfigDict(
        extra="forbid", frozen=True, populate_by_name=True, allow_inf_nan=False,
    )

    financial_year: str = Field(
        default="2023-24",
        alias="financialYear",
        pattern=r"^\d{4}-\d{2}$",
    )
    age_group: AgeGroup = Field(default=AgeGroup.below_60, alias="ageGroup")
    regime: Regime = Regime.new
    income: float = Field(..., ge=0, description="Gross annual income in INR.")
    hra_exempt: float = Field(default=0.0, ge=0, alias="hraExempt")
    deductions: Deductions = Field(default_factory=Deductions)
    investments: Investments = Field(default_factory=Investments)

    @field_validator("hra_exempt", mode="before")
    @classmethod
    def coalesce_blank_hra(cls, value: Any) -> Any:
        return _blank_to_zero(value)

    @field_validator("deductions", "investments", mode="before")
    @classmethod
    def coalesce_missing_mapping(cls, value: Any) -> Any:
        return {} if value is None else value


# ---------------------------------------------------------------------------
# DeductionSummary — old-regime aggregation
# ---------------------------------------------------------------------------

class DeductionSummary(BaseModel):
    """
    Aggregated old-regime deductions.

    section_80c_bucket is the capped pool (80C + PPF + ELSS + FD + home loan);
    nps_additional is the separate 80CCD(1B) bucket on top of it.
    """
    model_config = ConfigDict(frozen=True)

    section_80c_bucket: float
    total_deductions: float          # 80C bucket + 80D + 80E + 80G + other
    nps_additional: float
    total_with_nps: float            # total_deductions + nps_additional


# ---------------------------------------------------------------------------
# TaxResult — what compute() returns
# ---------------------------------------------------------------------------

class TaxResult(BaseModel):
    """
    Computed liability for one regime.

    Invariants: cess == tax * 0.04 and total_tax == tax + cess, unrounded.

    deductions is the old-regime aggregate even when regime == "new", where
    it plays no part in the tax. Clients rely on seeing it either way.

    effective_tax_rate is None when income is 0 (serialized as null).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    income: float
    taxable_income: float = Field(alias="taxableIncome")
    tax: float
    cess: float
    total_tax: float = Field(alias="totalTax")
    effective_tax_rate: Optional[float] = Field(alias="effectiveTaxRate")
    regime: Regime
    deductions: float


class CalculationResponse(TaxResult):
    """POST /api/tax/calculate response body."""

    suggestions: List[str] = Field(default_factory=list)


class CalculationRecord(BaseModel):
    """One entry of GET /api/tax/history."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    financial_year: str = Field(alias="financialYear")
    age_group: AgeGroup = Field(alias="ageGroup")
    regime: Regime
    income: float
    hra_exempt: float = Field(alias="hraExempt")
    deductions: dict
    investments: dict
    result: dict
    created_at: datetime = Field(alias="createdAt")


__all__ = [
    "AgeGroup",
    "Regime",
    "Deductions",
    "Investments",
    "TaxInput",
    "DeductionSummary",
    "TaxResult",
    "CalculationResponse",
    "CalculationRecord",
]
