"""Unit tests for TransactionService and CommentService."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.exceptions import LocalValidationError, NotFoundError, RemoteQueryError
from kakeibo.models.transaction import OwnershipTag, Transaction
from kakeibo.services.comment import CommentService
from kakeibo.services.transaction import TransactionService


@pytest.fixture
def mock_db():
    return AsyncMock(spec=AsyncSession)


class TestSetOwnershipTag:
    @pytest.mark.asyncio
    async def test_updates_tag(self, mock_db):
        service = TransactionService(mock_db)
        txn = Transaction(id=uuid4(), ownership_tag="shared")
        service.transaction_repo = AsyncMock()
        service.transaction_repo.get_by_household.return_value = txn

        result = await service.set_ownership_tag(uuid4(), txn.id, OwnershipTag.MAMA)

        assert result.ownership_tag == "mama"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db):
        service = TransactionService(mock_db)
        service.transaction_repo = AsyncMock()
        service.transaction_repo.get_by_household.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.set_ownership_tag(uuid4(), uuid4(), OwnershipTag.PAPA)
        assert exc_info.value.error_code == "API_004"

    @pytest.mark.asyncio
    async def test_commit_failure_is_remote_query_error(self, mock_db):
        service = TransactionService(mock_db)
        service.transaction_repo = AsyncMock()
        service.transaction_repo.get_by_household.return_value = Transaction(id=uuid4())
        mock_db.commit.side_effect = SQLAlchemyError("permission denied")

        with pytest.raises(RemoteQueryError) as exc_info:
            await service.set_ownership_tag(uuid4(), uuid4(), OwnershipTag.PAPA)

        assert exc_info.value.details["backend_message"] == "permission denied"
        mock_db.rollback.assert_awaited_once()


class TestCommentService:
    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, mock_db):
        service = CommentService(mock_db)

        with pytest.raises(LocalValidationError) as exc_info:
            await service.add(uuid4(), uuid4(), "2025-01", "   ")
        assert exc_info.value.error_code == "VAL_004"

    @pytest.mark.asyncio
    async def test_invalid_month_rejected(self, mock_db):
        service = CommentService(mock_db)

        with pytest.raises(LocalValidationError) as exc_info:
            await service.list_for_month(uuid4(), "2025-13")
        assert exc_info.value.error_code == "API_005"

    @pytest.mark.asyncio
    async def test_content_is_trimmed(self, mock_db):
        service = CommentService(mock_db)
        service.comment_repo = AsyncMock()
        service.comment_repo.create.side_effect = lambda comment: comment

        comment = await service.add(uuid4(), uuid4(), "2025-01", "  食費が多め  ")

        assert comment.content == "食費が多め"
        assert comment.scope_type == "month"
        assert comment.scope_key == "2025-01"
