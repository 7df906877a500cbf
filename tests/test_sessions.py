"""Tests for the session store and its cache."""

from dataclasses import dataclass

from cravesmart.domain.accounts import Account
from cravesmart.domain.analysis import AnalysisResult, PlanType
from cravesmart.services.cache import InMemoryCache
from cravesmart.services.sessions import SessionStore
from tests.conftest import sample_plan_payload


@dataclass
class FakeClock:
    now: float = 0.0

    def __call__(self) -> float:
        return self.now


def _account() -> Account:
    return Account(username="asha", password_hash="hash")


def test_cache_expires_entries() -> None:
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    cache.set("key", "value", ttl_seconds=10)

    clock.now = 9.5
    assert cache.get("key") == "value"
    clock.now = 10
    assert cache.get("key") is None


def test_session_round_trip() -> None:
    store = SessionStore(cache=InMemoryCache())
    account = _account()

    session = store.open(account)

    assert store.get(session.token) is session
    assert session.account_id == account.id
    assert store.get("unknown") is None


def test_session_expiry_slides_on_access() -> None:
    clock = FakeClock()
    store = SessionStore(cache=InMemoryCache(clock=clock), ttl_seconds=100)
    session = store.open(_account())

    clock.now = 90
    assert store.get(session.token) is session
    clock.now = 180
    assert store.get(session.token) is session
    clock.now = 281
    assert store.get(session.token) is None


def test_close_ends_session() -> None:
    store = SessionStore(cache=InMemoryCache())
    session = store.open(_account())

    store.close(session.token)

    assert store.get(session.token) is None


def test_store_result_resets_selection() -> None:
    session = SessionStore(cache=InMemoryCache()).open(_account())
    result = AnalysisResult.model_validate(sample_plan_payload())

    session.store_result(result, PlanType.FULL_DAY)

    assert session.selection.indices == [0, 0]
    session.clear_result()
    assert session.result is None
    assert session.selection is None
