"""Database models."""
from kakeibo.models.user import User
from kakeibo.models.profile import Profile
from kakeibo.models.household import Household, HouseholdMember
from kakeibo.models.statement import Statement
from kakeibo.models.transaction import OwnershipTag, Transaction
from kakeibo.models.category import Category
from kakeibo.models.comment import Comment

__all__ = [
    "User",
    "Profile",
    "Household",
    "HouseholdMember",
    "Statement",
    "OwnershipTag",
    "Transaction",
    "Category",
    "Comment",
]
