"""Request bodies for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, Field

from cravesmart.domain.accounts import Account
from cravesmart.domain.analysis import PlanType
from cravesmart.domain.profiles import UserProfile
from cravesmart.services.preferences import Theme


class SignupRequest(BaseModel):
    """Account creation form."""

    username: str
    email: str | None = None
    password: str
    confirm_password: str


class LoginRequest(BaseModel):
    """Login form; the identifier may be a username or an email."""

    username_or_email: str = Field(alias="username")
    password: str

    model_config = {"populate_by_name": True}


class ThemeRequest(BaseModel):
    """Theme change."""

    theme: Theme


class ProfileCreateRequest(BaseModel):
    """Save the current form profile under a new name."""

    profile_name: str
    profile: UserProfile = Field(default_factory=UserProfile)


class AnalysisRequestBody(BaseModel):
    """Analysis form: plan type, options, optional photo and profile."""

    plan_type: PlanType = PlanType.ANALYZE
    meals_per_day: int = 3
    description: str = ""
    profile: UserProfile | None = None
    profile_id: UUID | None = None
    image_base64: str | None = None
    image_mime_type: str | None = None


def account_summary(account: Account) -> dict[str, object]:
    """Public view of an account without credentials."""
    return {
        "id": str(account.id),
        "username": account.username,
        "email": account.email,
        "profile_count": len(account.profiles),
    }
