"""
Tax HTTP routes — POST /api/tax/calculate,
                  GET  /api/tax/history

Both require the x-auth-token header. A calculation is computed by the pure
engine first and only then persisted for the caller.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from taxcalc.auth.security import get_current_user_id
from taxcalc.database import get_db
from taxcalc.store import get_calculation_history, save_calculation
from taxcalc.tax_engine.engine import compute
from taxcalc.tax_engine.optimizer import generate_suggestions
from taxcalc.tax_engine.schemas import CalculationResponse, TaxInput

router = APIRouter(prefix="/api/tax", tags=["tax"])
logger = logging.getLogger(__name__)


@router.post("/calculate")
async def calculate_tax(
    tax_input: TaxInput,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Compute tax for the selected regime, store it in the caller's history,
    and return the TaxResult plus tax-saving suggestions.
    """
    result = compute(tax_input)
    calculation_id = await save_calculation(db, user_id, tax_input, result)

    response = CalculationResponse(
        **result.model_dump(),
        suggestions=generate_suggestions(result),
    )
    logger.info(
        "Tax calculated calculation_id=%s regime=%s suggestions=%d",
        calculation_id,
        result.regime.value,
        len(response.suggestions),
    )
    return JSONResponse(status_code=200, content=response.model_dump(mode="json", by_alias=True))


@router.get("/history")
async def calculation_history(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """The caller's last 10 calculations, newest first."""
    records = await get_calculation_history(db, user_id)
    return JSONResponse(
        status_code=200,
        content=[record.model_dump(mode="json", by_alias=True) for record in records],
    )
