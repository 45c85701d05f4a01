"""HTTP client for the Kakeibo API and the optimistic transaction board."""

from kakeibo.client.api import ApiError, ClientSettings, KakeiboClient
from kakeibo.client.board import RetagCommand, TransactionBoard, TransactionView

__all__ = [
    "ApiError",
    "ClientSettings",
    "KakeiboClient",
    "RetagCommand",
    "TransactionBoard",
    "TransactionView",
]
