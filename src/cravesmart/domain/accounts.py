"""Account models persisted in the account document."""

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cravesmart.domain.profiles import SavedProfile


class Account(BaseModel):
    """A user account and the profiles it owns."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(default_factory=uuid4)
    username: str
    email: str | None = None
    password_hash: str
    profiles: list[SavedProfile] = Field(default_factory=list)

    def find_profile(self, profile_id: UUID) -> SavedProfile | None:
        """Return the saved profile with the given id, if owned."""
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None


class AccountDocument(BaseModel):
    """Root document holding every account."""

    accounts: list[Account] = Field(default_factory=list)
