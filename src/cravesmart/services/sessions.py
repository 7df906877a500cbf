"""Login sessions and the per-session working state."""

import secrets
from dataclasses import dataclass
from uuid import UUID

from cravesmart.domain.accounts import Account
from cravesmart.domain.analysis import AnalysisResult, PlanType
from cravesmart.services.cache import Cache
from cravesmart.services.plan_view import PlanSelection

_KEY_PREFIX = "session:"


@dataclass
class SessionContext:
    """Explicit current-user context handed to request handlers."""

    token: str
    account_id: UUID
    username: str
    result: AnalysisResult | None = None
    plan_type: PlanType | None = None
    selection: PlanSelection | None = None
    loading: bool = False

    def store_result(self, result: AnalysisResult, plan_type: PlanType) -> None:
        """Keep a fresh result and reset option selection to the first options."""
        self.result = result
        self.plan_type = plan_type
        self.selection = PlanSelection.for_result(result)

    def clear_result(self) -> None:
        """Forget the current result."""
        self.result = None
        self.plan_type = None
        self.selection = None


@dataclass
class SessionStore:
    """Token-addressed sessions with a sliding expiry."""

    cache: Cache
    ttl_seconds: int = 12 * 60 * 60

    def open(self, account: Account) -> SessionContext:
        """Start a new session for an authenticated account."""
        session = SessionContext(
            token=secrets.token_urlsafe(32),
            account_id=account.id,
            username=account.username,
        )
        self.cache.set(_KEY_PREFIX + session.token, session, self.ttl_seconds)
        return session

    def get(self, token: str) -> SessionContext | None:
        """Return the live session for a token and extend its expiry."""
        session = self.cache.get(_KEY_PREFIX + token)
        if not isinstance(session, SessionContext):
            return None
        self.cache.set(_KEY_PREFIX + token, session, self.ttl_seconds)
        return session

    def close(self, token: str) -> None:
        """End a session."""
        self.cache.delete(_KEY_PREFIX + token)
