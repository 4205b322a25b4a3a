"""Tests for the invite lookup used by acceptance."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from src.buildor.repositories import ClientInviteRepository

pytestmark = pytest.mark.unit


def _repository() -> tuple[ClientInviteRepository, AsyncMock]:
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    return ClientInviteRepository(session), session.execute


def _compiled(execute: AsyncMock) -> str:
    statement = execute.call_args.args[0]
    return str(statement.compile(dialect=postgresql.dialect()))


async def test_lookup_for_accept_locks_the_row():
    repo, execute = _repository()

    await repo.get_by_token("tok-123", for_update=True)

    assert "FOR UPDATE" in _compiled(execute)


async def test_plain_lookup_does_not_lock():
    repo, execute = _repository()

    await repo.get_by_token("tok-123")

    assert "FOR UPDATE" not in _compiled(execute)
