"""Celery tasks for delayed payment-order settlement."""

import asyncio
import logging

from app.config import get_settings
from app.database import AsyncSessionLocal, engine
from app.services.order_service import get_family, run_settlement
from app.workers.celery_app import celery_app

logger = logging.getLogger(__name__)
settings = get_settings()


async def _settle_payment_order(kind: str, order_id: int) -> None:
    try:
        outcome = await run_settlement(AsyncSessionLocal, get_family(kind), order_id)
        logger.info("Settlement task for %s order %s finished: %s", kind, order_id, outcome)
    finally:
        # pooled connections are bound to this task's event loop
        await engine.dispose()


@celery_app.task(name="app.workers.tasks_settlement.settle_payment_order")
def settle_payment_order(kind: str, order_id: int) -> None:
    asyncio.run(_settle_payment_order(kind, order_id))


def enqueue_settlement(kind: str, order_id: int) -> None:
    """Schedule settlement after the configured delay; returns immediately."""
    settle_payment_order.apply_async(
        args=[kind, order_id],
        countdown=settings.ORDER_SETTLEMENT_DELAY_SECONDS,
    )
    logger.info(
        "Scheduled settlement of %s order %s in %ss",
        kind,
        order_id,
        settings.ORDER_SETTLEMENT_DELAY_SECONDS,
    )
