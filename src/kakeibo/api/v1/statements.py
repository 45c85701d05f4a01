"""Statement endpoints for preview, upload, list, delete and transactions."""

from typing import Annotated
from urllib.parse import unquote
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.api.deps import get_current_user, get_db, get_household_id
from kakeibo.config import settings
from kakeibo.core.exceptions import LocalValidationError, NotFoundError
from kakeibo.models.transaction import OwnershipTag
from kakeibo.models.user import User
from kakeibo.schemas.statement import (
    MoneyMeta,
    StatementListResult,
    StatementPreviewResult,
    StatementResponse,
    StatementUploadResult,
)
from kakeibo.schemas.transaction import TransactionListResult, TransactionResponse
from kakeibo.services.statement import StatementService
from kakeibo.services.transaction import TransactionService

router = APIRouter(prefix="/statements", tags=["statements"])

ALLOWED_CONTENT_TYPES = {"text/csv", "application/csv", "text/plain", "application/octet-stream"}


def get_filename(
    x_filename: Annotated[
        str | None,
        Header(
            alias="X-Filename",
            description="Original filename, percent-encoded; YYYYMM in it sets the month.",
        ),
    ] = None,
) -> str | None:
    """Percent-decoded X-Filename header."""
    return unquote(x_filename) if x_filename else None


def money_meta() -> MoneyMeta:
    return MoneyMeta(currency=settings.currency, minor_unit=settings.currency_minor_unit)


async def read_csv_body(request: Request) -> bytes:
    """Read the raw request body as a statement file.

    Raises:
        LocalValidationError: Wrong content type (API_001) or too large (API_002)
    """
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip()
    if content_type.lower() not in ALLOWED_CONTENT_TYPES:
        raise LocalValidationError("API_001", {"content_type": content_type})

    # Read request body in-memory with a strict size cap (no disk spooling).
    max_bytes = settings.csv_max_size_mb * 1024 * 1024
    buf = bytearray()
    total = 0
    async for chunk in request.stream():
        if not chunk:
            continue
        total += len(chunk)
        if total > max_bytes:
            raise LocalValidationError("API_002", {"max_size_mb": settings.csv_max_size_mb})
        buf.extend(chunk)
    return bytes(buf)


@router.post(
    "/preview",
    response_model=StatementPreviewResult,
    summary="Parse a statement without saving it",
)
async def preview_statement(
    request: Request,
    filename: str | None = Depends(get_filename),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> StatementPreviewResult:
    """Return the rows that an upload of this file would store."""
    data = await read_csv_body(request)
    return StatementService(db).preview(data, filename)


@router.post(
    "/upload",
    response_model=StatementUploadResult,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a card statement CSV",
    description="""
    Upload and store one month of a card statement.

    ## File Requirements
    - Request body must be the raw CSV (`Content-Type: text/csv`)
    - UTF-8 (with or without BOM) or Shift-JIS
    - Maximum size: configurable via `CSV_MAX_SIZE_MB` (default: 5MB)

    `year` and `month` fall back to a `YYYYMM` found in `X-Filename`.
    Uploading the same year, month and source again replaces the earlier
    statement and its transactions.

    ## Error Codes
    - API_001: Invalid file type
    - API_002: File too large
    - VAL_001: Empty file
    - VAL_002: Year or month missing or invalid
    - VAL_003: No parsable rows
    - DB_001: Insert failed (details carry rows inserted so far)
    """,
)
async def upload_statement(
    request: Request,
    year: Annotated[int | None, Query(description="Statement year")] = None,
    month: Annotated[int | None, Query(description="Statement month (1-12)")] = None,
    source: Annotated[str | None, Query(max_length=50, description="Card / source name")] = None,
    filename: str | None = Depends(get_filename),
    current_user: User = Depends(get_current_user),
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> StatementUploadResult:
    data = await read_csv_body(request)
    service = StatementService(db)
    return await service.upload(
        data,
        household_id=household_id,
        user_id=current_user.id,
        filename=filename,
        year=year,
        month=month,
        source=source,
    )


@router.get(
    "",
    response_model=StatementListResult,
    summary="List household statements",
    description="Statements of the household, newest year and month first.",
)
async def list_statements(
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> StatementListResult:
    items = await StatementService(db).list_statements(household_id)
    statements = []
    for statement, count in items:
        response = StatementResponse.model_validate(statement)
        response.transactions_count = count
        statements.append(response)
    return StatementListResult(statements=statements)


@router.delete(
    "/{statement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete statement",
)
async def delete_statement(
    statement_id: UUID,
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a statement together with its transactions."""
    deleted = await StatementService(db).delete_statement(household_id, statement_id)
    if not deleted:
        raise NotFoundError("API_003")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{statement_id}/transactions",
    response_model=TransactionListResult,
    summary="List a statement's transactions",
)
async def list_statement_transactions(
    statement_id: UUID,
    tag: Annotated[OwnershipTag | None, Query(description="Only this ownership tag")] = None,
    household_id: UUID = Depends(get_household_id),
    db: AsyncSession = Depends(get_db),
) -> TransactionListResult:
    """Transactions by posting date, with count and total for the list header."""
    transactions, total = await TransactionService(db).list_for_statement(
        household_id, statement_id, tag
    )
    return TransactionListResult(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
        total_amount=total,
        money=money_meta(),
    )
