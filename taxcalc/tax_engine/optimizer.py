"""
Tax-saving suggestions shown next to a calculation result.
Pure functions. No I/O.

Each rule reads only the TaxResult, so suggestions for a stored calculation
can be regenerated from its history record.
"""
from __future__ import annotations

from taxcalc.tax_engine.engine import CAP_80C
from taxcalc.tax_engine.schemas import Regime, TaxResult

_OLD_80C_INCOME_FLOOR      = 500_000
_OLD_HIGH_INCOME           = 1_000_000
_NEW_REBATE_INCOME_CEILING = 750_000    # 7L rebate + 50K standard deduction
_NEW_HIGH_INCOME           = 1_500_000
_NEW_HIGH_DEDUCTIONS       = 200_000


def generate_old_suggestions(result: TaxResult) -> list[str]:
    """80C headroom, then ELSS/NPS for high earners."""
    suggestions: list[str] = []
    if result.deductions < CAP_80C and result.income > _OLD_80C_INCOME_FLOOR:
        suggestions.append(
            "You can invest more in tax-saving instruments under Section 80C "
            f"to maximize deductions (up to ₹{CAP_80C:,.0f})."
        )
    if result.income > _OLD_HIGH_INCOME:
        suggestions.append(
            "Consider tax-efficient investments like ELSS or NPS which offer "
            "additional deductions beyond 80C."
        )
    return suggestions


def generate_new_suggestions(result: TaxResult) -> list[str]:
    """
    Rebate eligibility for low incomes; a nudge toward the old regime when
    large old-regime deductions go unused. The second rule is the reason the
    result carries the old-regime deduction total under the new regime.
    """
    suggestions: list[str] = []
    if result.income < _NEW_REBATE_INCOME_CEILING:
        suggestions.append(
            "With income below ₹7.5 lakhs, you may be eligible for full tax "
            "rebate under the new regime."
        )
    if result.income > _NEW_HIGH_INCOME and result.deductions > _NEW_HIGH_DEDUCTIONS:
        suggestions.append(
            "Your deductions are substantial. Compare with old regime as it "
            "might be more beneficial."
        )
    return suggestions


def generate_suggestions(result: TaxResult) -> list[str]:
    if result.regime is Regime.old:
        return generate_old_suggestions(result)
    return generate_new_suggestions(result)
