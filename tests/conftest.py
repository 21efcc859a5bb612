from __future__ import annotations

from collections import deque
from datetime import datetime, timezone

import pytest

from dolmenwood_engine.core.dice import DiceEvaluator, NumberLeaf, RollResult, RollSequence
from dolmenwood_engine.persistence.memory import MemoryRepositoryFactory
from dolmenwood_engine.persistence.sqlalchemy.db import build_engine, build_session_factory, create_schema
from dolmenwood_engine.persistence.sqlalchemy.store import SQLAlchemyRepositoryFactory
from dolmenwood_engine.persistence.sqlalchemy.uow import SQLAlchemyUnitOfWork


class ScriptedDice:
    """Returns queued totals for ``d6`` and defers anything else to a seeded evaluator."""

    def __init__(self, *d6_totals: int, seed: int = 1):
        self.d6_totals = deque(d6_totals)
        self.notations: list[str] = []
        self._fallback = DiceEvaluator(seed=seed)

    def roll(self, notation: str) -> RollResult:
        self.notations.append(notation)
        if notation == "d6" and self.d6_totals:
            value = self.d6_totals.popleft()
            return RollResult(
                notation=notation,
                total=value,
                rolls=(RollSequence((NumberLeaf(value),)),),
                min_total=1,
                max_total=6,
            )
        return self._fallback.roll(notation)


class FixedClock:
    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


class CountingIds:
    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"{self.prefix}-{self.n}"


@pytest.fixture()
def session_factory():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    create_schema(engine)
    return build_session_factory(engine)


@pytest.fixture()
def uow_factory(session_factory):
    def _factory():
        return SQLAlchemyUnitOfWork(session_factory)

    return _factory


@pytest.fixture()
def sql_repositories(uow_factory):
    return SQLAlchemyRepositoryFactory(uow_factory)


@pytest.fixture()
def memory_repositories():
    return MemoryRepositoryFactory()


@pytest.fixture(params=["memory", "sqlalchemy"])
def repositories(request):
    if request.param == "memory":
        return request.getfixturevalue("memory_repositories")
    return request.getfixturevalue("sql_repositories")


@pytest.fixture()
def clock():
    return FixedClock()


@pytest.fixture()
def ids():
    return CountingIds()


@pytest.fixture()
def make_dice():
    return ScriptedDice
