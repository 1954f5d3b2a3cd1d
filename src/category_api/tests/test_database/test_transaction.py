# src/category_api/tests/test_database/test_transaction.py
import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from category_api.database.transaction import transaction
from category_api.exceptions import NotFoundError, TransactionError
from category_api.models.category import Category


class FakeSession:
    """Stands in for AsyncSession; records commit/rollback/close calls."""

    def __init__(self, *, fail_commit: bool = False, fail_rollback: bool = False):
        self.fail_commit = fail_commit
        self.fail_rollback = fail_rollback
        self.committed = False
        self.rolled_back = False
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True
        return False

    async def commit(self):
        if self.fail_commit:
            raise OperationalError("COMMIT", {}, Exception("connection lost"))
        self.committed = True

    async def rollback(self):
        if self.fail_rollback:
            raise OperationalError("ROLLBACK", {}, Exception("connection lost"))
        self.rolled_back = True


def factory_for(session: FakeSession):
    return lambda: session


async def test_commits_on_normal_exit():
    session = FakeSession()

    async with transaction(factory_for(session)) as tx:
        assert tx is session

    assert session.committed
    assert not session.rolled_back
    assert session.closed


async def test_rolls_back_and_reraises_same_exception():
    session = FakeSession()
    error = NotFoundError()

    with pytest.raises(NotFoundError) as exc_info:
        async with transaction(factory_for(session)):
            raise error

    assert exc_info.value is error
    assert session.rolled_back
    assert not session.committed
    assert session.closed


async def test_rolls_back_on_cancellation():
    session = FakeSession()
    entered = asyncio.Event()

    async def unit_of_work():
        async with transaction(factory_for(session)):
            entered.set()
            await asyncio.sleep(10)

    task = asyncio.create_task(unit_of_work())
    await entered.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert session.rolled_back
    assert not session.committed


async def test_commit_failure_raises_transaction_error(caplog):
    session = FakeSession(fail_commit=True)

    with caplog.at_level("CRITICAL", logger="category_api.database.transaction"):
        with pytest.raises(TransactionError) as exc_info:
            async with transaction(factory_for(session)):
                pass

    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert exc_info.value.http_status() == 500
    assert any(r.getMessage() == "tx.commit.failed" for r in caplog.records)


async def test_rollback_failure_raises_transaction_error(caplog):
    session = FakeSession(fail_rollback=True)
    original = ValueError("bad input")

    with caplog.at_level("CRITICAL", logger="category_api.database.transaction"):
        with pytest.raises(TransactionError) as exc_info:
            async with transaction(factory_for(session)):
                raise original

    assert exc_info.value.__cause__.__context__ is original
    assert any(r.getMessage() == "tx.rollback.failed" for r in caplog.records)


async def test_rollback_discards_statements(session_factory, category_repository, count_categories):
    with pytest.raises(RuntimeError):
        async with transaction(session_factory) as session:
            await category_repository.save(session, Category(name="Gadget"))
            raise RuntimeError("abort")

    assert await count_categories() == 0


async def test_commit_persists_statements(session_factory, category_repository, count_categories):
    async with transaction(session_factory) as session:
        saved = await category_repository.save(session, Category(name="Gadget"))

    assert saved.id is not None
    assert await count_categories() == 1
