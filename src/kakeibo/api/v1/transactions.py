"""Transaction endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.api.deps import get_db, get_household_id
from kakeibo.schemas.transaction import OwnershipTagUpdate, TransactionResponse
from kakeibo.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.patch(
    "/{transaction_id}/tag",
    response_model=TransactionResponse,
    summary="Set ownership tag",
    description="""
    Assign a transaction to `papa`, `mama` or `shared`.

    Concurrent edits are not reconciled; the last write wins.

    ## Error Codes
    - API_004: Transaction not found
    - DB_001: Update rejected by the database
    """,
)
async def update_ownership_tag(
    transaction_id: UUID,
    payload: OwnershipTagUpdate,
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    txn = await TransactionService(db).set_ownership_tag(household_id, transaction_id, payload.tag)
    return TransactionResponse.model_validate(txn)
