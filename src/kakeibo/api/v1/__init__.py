"""API version 1 routes."""

from fastapi import APIRouter

from kakeibo.api.v1 import analytics, auth, comments, statements, transactions

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(auth.router)
router.include_router(statements.router)
router.include_router(transactions.router)
router.include_router(analytics.router)
router.include_router(comments.router)
