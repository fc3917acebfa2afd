"""
Tax engine — FY 2023-24 (AY 2024-25) Old and New regime schedules.
Pure Python, no I/O, no state. Same input → same output, bit for bit.

compute() is the only entry point the HTTP layer uses:
  1. aggregate old-regime deductions (always — the result reports them)
  2. derive taxable income for the selected regime
  3. apply that regime's slab schedule and 87A rebate
  4. add 4% cess, derive the effective rate

Nothing is rounded. cess == tax * 0.04 exactly.
"""
from __future__ import annotations

from typing import NamedTuple

from taxcalc.tax_engine.schemas import (
    AgeGroup,
    Deductions,
    DeductionSummary,
    Investments,
    Regime,
    TaxInput,
    TaxResult,
)

# ===========================================================================
# DEDUCTION CAP CONSTANTS
# ===========================================================================

CAP_80C                  = 150_000   # 80C + PPF + ELSS + FD + home loan, combined
CAP_80CCD1B              = 50_000    # Employee NPS, on top of the 80C pool

NEW_STD_DEDUCTION        = 50_000    # New regime only, age-independent

CESS_RATE                = 0.04

# ===========================================================================
# OLD REGIME — basic exemption by age group
# ===========================================================================

OLD_EXEMPTION_LIMITS: dict[AgeGroup, float] = {
    AgeGroup.below_60:    250_000,
    AgeGroup.sixty_to_80: 300_000,
    AgeGroup.above_80:    500_000,
}

# ===========================================================================
# 87A REBATE PARAMETERS
# ===========================================================================
# Old regime: the ceiling is tested against the exemption-adjusted figure,
# not against taxable income. New regime: tested against taxable income.

OLD_87A_MAX_REBATE       = 12_500
OLD_87A_CEILING          = 500_000

NEW_87A_MAX_REBATE       = 25_000
NEW_87A_TAXABLE_CEILING  = 700_000


# ===========================================================================
# SLAB TABLES
# ===========================================================================

class Slab(NamedTuple):
    """Income up to `ceiling` pays `base_tax` + `rate` × (income − previous ceiling)."""
    ceiling: float
    base_tax: float
    rate: float


# Applied to income ABOVE the age-based exemption limit
OLD_REGIME_SLABS: list[Slab] = [
    Slab(250_000,      0.0,       0.00),
    Slab(500_000,      0.0,       0.05),
    Slab(1_000_000,    12_500.0,  0.20),
    Slab(float("inf"), 112_500.0, 0.30),
]

# Applied directly to taxable income
NEW_REGIME_SLABS: list[Slab] = [
    Slab(300_000,      0.0,       0.00),
    Slab(600_000,      0.0,       0.05),
    Slab(900_000,      15_000.0,  0.10),
    Slab(1_200_000,    45_000.0,  0.15),
    Slab(1_500_000,    90_000.0,  0.20),
    Slab(float("inf"), 150_000.0, 0.30),
]


# ===========================================================================
# INTERNAL HELPERS (pure functions — no side effects, no I/O)
# ===========================================================================

def _calculate_slab_tax(income: float, slabs: list[Slab]) -> float:
    """
    Find the first slab whose ceiling is >= income (inclusive upper bound)
    and tax the excess over the previous ceiling at that slab's rate.
    Negative income lands in the first, zero-rate slab.
    """
    floor = 0.0
    for slab in slabs:
        if income <= slab.ceiling:
            return slab.base_tax + (income - floor) * slab.rate
        floor = slab.ceiling
    # NaN compares false against every ceiling
    return float("nan")


def aggregate_deductions(deductions: Deductions, investments: Investments) -> DeductionSummary:
    """
    Fold the deduction and investment mappings into the old-regime total.

    80C pool: section_80c + ppf + elss + fd + home_loan, capped at ₹1.5L.
    80D / 80E / 80G / other: added as-is, no individual caps.
    NPS: separate 80CCD(1B) bucket capped at ₹50K, independent of the 80C cap.
    """
    section_80c_bucket = min(
        deductions.section_80c
        + investments.ppf
        + investments.elss
        + investments.fd
        + investments.home_loan,
        CAP_80C,
    )
    total_deductions = (
        section_80c_bucket
        + deductions.section_80d
        + deductions.section_80e
        + deductions.section_80g
        + deductions.other_deductions
    )
    nps_additional = min(investments.nps, CAP_80CCD1B)
    return DeductionSummary(
        section_80c_bucket=section_80c_bucket,
        total_deductions=total_deductions,
        nps_additional=nps_additional,
        total_with_nps=total_deductions + nps_additional,
    )


# ===========================================================================
# REGIME SCHEDULES
# ===========================================================================

def old_regime_tax(income: float, age_group: AgeGroup) -> float:
    """
    Old regime slab tax (before cess) on taxable income.

    Income at or below the age-based exemption limit pays nothing — this also
    covers negative taxable income. Above it, slabs run on the excess, and
    the 87A rebate (up to ₹12,500) applies while that excess is <= ₹5L.
    """
    exemption_limit = OLD_EXEMPTION_LIMITS[age_group]
    if income <= exemption_limit:
        return 0.0

    adjusted = income - exemption_limit
    tax = _calculate_slab_tax(adjusted, OLD_REGIME_SLABS)

    if adjusted <= OLD_87A_CEILING:
        tax = max(tax - OLD_87A_MAX_REBATE, 0.0)
    return tax


def new_regime_tax(income: float) -> float:
    """
    New regime slab tax (before cess) on taxable income.
    87A rebate of up to ₹25,000 while taxable income is <= ₹7L.
    """
    tax = _calculate_slab_tax(income, NEW_REGIME_SLABS)

    if income <= NEW_87A_TAXABLE_CEILING:
        tax = max(tax - NEW_87A_MAX_REBATE, 0.0)
    return tax


# ===========================================================================
# COMPUTE — public API
# ===========================================================================

def compute(tax_input: TaxInput) -> TaxResult:
    """
    Compute the liability for the regime selected in tax_input.

    Raises nothing for numeric input. Zero income yields
    effective_tax_rate=None instead of a division error.
    """
    summary = aggregate_deductions(tax_input.deductions, tax_input.investments)

    if tax_input.regime is Regime.old:
        taxable_income = tax_input.income - tax_input.hra_exempt - summary.total_with_nps
        tax = old_regime_tax(taxable_income, tax_input.age_group)
    else:
        taxable_income = tax_input.income - tax_input.hra_exempt - NEW_STD_DEDUCTION
        tax = new_regime_tax(taxable_income)

    cess = tax * CESS_RATE
    total_tax = tax + cess

    if tax_input.income == 0:
        effective_tax_rate = None
    else:
        effective_tax_rate = (total_tax / tax_input.income) * 100

    return TaxResult(
        income=tax_input.income,
        taxable_income=taxable_income,
        tax=tax,
        cess=cess,
        total_tax=total_tax,
        effective_tax_rate=effective_tax_rate,
        regime=tax_input.regime,
        deductions=summary.total_with_nps,
    )
