"""Local transaction list with optimistic ownership re-tagging.

A re-tag is a ``RetagCommand``: it is applied to the local list at once, then
persisted through the client. If persistence fails the command's inverse is
applied, so the list shows the tag the server still holds.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable
from uuid import UUID

from kakeibo.client.api import ApiError, KakeiboClient

logger = logging.getLogger(__name__)

TAGS = ("papa", "mama", "shared")
ALL = "all"


@dataclass
class TransactionView:
    id: UUID
    posting_date: str
    amount: Decimal
    description: str | None
    ownership_tag: str

    @classmethod
    def from_api(cls, data: dict) -> "TransactionView":
        return cls(
            id=UUID(str(data["id"])),
            posting_date=data["posting_date"],
            amount=Decimal(str(data["amount"])),
            description=data.get("description"),
            ownership_tag=data["ownership_tag"],
        )


@dataclass(frozen=True)
class RetagCommand:
    transaction_id: UUID
    previous_tag: str
    new_tag: str

    def apply(self, items: dict[UUID, TransactionView]) -> None:
        items[self.transaction_id].ownership_tag = self.new_tag

    def inverse(self) -> "RetagCommand":
        return replace(self, previous_tag=self.new_tag, new_tag=self.previous_tag)


class TransactionBoard:
    """Transactions of one statement as shown to a user."""

    def __init__(self, client: KakeiboClient, transactions: Iterable[TransactionView] = ()):
        self.client = client
        self._items: dict[UUID, TransactionView] = {t.id: t for t in transactions}
        self.error: str | None = None

    @classmethod
    async def load(cls, client: KakeiboClient, statement_id: UUID | str) -> "TransactionBoard":
        body = await client.list_transactions(statement_id)
        return cls(client, (TransactionView.from_api(t) for t in body["transactions"]))

    def __len__(self) -> int:
        return len(self._items)

    def get(self, transaction_id: UUID) -> TransactionView:
        return self._items[transaction_id]

    def filtered(self, tag_filter: str = ALL) -> list[TransactionView]:
        items = sorted(self._items.values(), key=lambda t: t.posting_date)
        if tag_filter == ALL:
            return items
        return [t for t in items if t.ownership_tag == tag_filter]

    def count(self, tag_filter: str = ALL) -> int:
        return len(self.filtered(tag_filter))

    def total(self, tag_filter: str = ALL) -> Decimal:
        return sum((t.amount for t in self.filtered(tag_filter)), Decimal("0"))

    async def retag(self, transaction_id: UUID, tag: str) -> TransactionView:
        """Set a transaction's tag locally, then persist it.

        Raises:
            KeyError: If the transaction is not on the board
            ValueError: If the tag is unknown
            ApiError: If persisting fails, network errors included; the previous
                tag is restored first
        """
        if tag not in TAGS:
            raise ValueError(f"Unknown ownership tag: {tag}")

        current = self._items[transaction_id]
        command = RetagCommand(transaction_id, current.ownership_tag, tag)
        command.apply(self._items)
        self.error = None

        try:
            await self.client.set_ownership_tag(transaction_id, tag)
        except ApiError as e:
            command.inverse().apply(self._items)
            self.error = e.message
            logger.warning(
                "Tag update rolled back",
                extra={"error_code": e.error_code, "status_code": e.status},
            )
            raise

        return self._items[transaction_id]
