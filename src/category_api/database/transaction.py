"""
Transaction wrapper: one unit of work, one transaction.

Usage:
    async with transaction(session_factory) as session:
        category = await repository.save(session, Category(name="Gadget"))

- normal exit        -> COMMIT
- any exception      -> ROLLBACK, then the same exception object is re-raised
                        (including asyncio.CancelledError when the request is cancelled)
- COMMIT/ROLLBACK fails -> TransactionError, logged at CRITICAL

The session is closed in every case, which returns its connection to the pool.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..exceptions.base import TransactionError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def transaction(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    start = time.perf_counter()

    async with session_factory() as session:
        try:
            yield session
        except BaseException as exc:
            await _rollback(session, exc)
            raise
        else:
            await _commit(session, start)


async def _commit(session: AsyncSession, start: float) -> None:
    try:
        await session.commit()
    except Exception as exc:
        logger.critical("tx.commit.failed", exc_info=True, extra={"error_type": type(exc).__name__})
        raise TransactionError("transaction commit failed") from exc

    logger.debug("tx.commit", extra={"duration_ms": int((time.perf_counter() - start) * 1000)})


async def _rollback(session: AsyncSession, cause: BaseException) -> None:
    # INFO: expected client errors (not found, validation) also roll back here
    logger.info("tx.rollback", extra={"cause": type(cause).__name__})
    try:
        await session.rollback()
    except Exception as exc:
        # `cause` stays reachable through __context__ of the rollback failure
        logger.critical(
            "tx.rollback.failed",
            exc_info=True,
            extra={"cause": type(cause).__name__, "error_type": type(exc).__name__},
        )
        raise TransactionError("transaction rollback failed") from exc
