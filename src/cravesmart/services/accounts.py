"""Account and saved-profile management."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pydantic import ValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from cravesmart.domain.accounts import Account, AccountDocument
from cravesmart.domain.profiles import SavedProfile, UserProfile
from cravesmart.errors import AuthenticationError, InputValidationError, NotFoundError
from cravesmart.services.storage import ACCOUNTS_KEY, KeyValueStore

_IDENTITY_FIELDS = {"id", "profile_name"}

_logger = logging.getLogger(__name__)


class AccountRepository(Protocol):
    """Persistence interface for the account document."""

    def load(self) -> AccountDocument:
        """Return the stored account document, empty if absent."""

    def save(self, document: AccountDocument) -> None:
        """Persist the whole account document."""


@dataclass
class StoredAccountRepository(AccountRepository):
    """Account document kept as JSON under a single key."""

    store: KeyValueStore
    key: str = ACCOUNTS_KEY

    def load(self) -> AccountDocument:
        """Read and validate the document; unreadable data counts as empty."""
        raw = self.store.get(self.key)
        if not raw:
            return AccountDocument()
        try:
            return AccountDocument.model_validate_json(raw)
        except ValidationError:
            _logger.exception("Failed to load accounts", extra={"key": self.key})
            return AccountDocument()

    def save(self, document: AccountDocument) -> None:
        """Serialise the document and write it back."""
        self.store.set(self.key, document.model_dump_json(by_alias=True))


@dataclass
class AccountService:
    """Signup, login and saved-profile operations."""

    repository: AccountRepository

    def signup(
        self,
        username: str,
        email: str | None,
        password: str,
        confirm_password: str,
    ) -> Account:
        """Create an account after form-level validation."""
        username = username.strip()
        if not username or not password or not confirm_password:
            raise InputValidationError("Please fill in all required fields.")
        if password != confirm_password:
            raise InputValidationError("Passwords do not match.")

        document = self.repository.load()
        if any(account.username == username for account in document.accounts):
            _logger.info("Signup rejected for taken username %s", username)
            raise InputValidationError("Username already exists.")

        account = Account(
            username=username,
            email=(email or "").strip() or None,
            password_hash=generate_password_hash(password),
        )
        document.accounts.append(account)
        self.repository.save(document)
        return account

    def login(self, username_or_email: str, password: str) -> Account:
        """Return the account matching the credentials."""
        identifier = username_or_email.strip()
        if not identifier or not password:
            raise InputValidationError("Please enter username/email and password.")
        for account in self.repository.load().accounts:
            if identifier not in {account.username, account.email}:
                continue
            if check_password_hash(account.password_hash, password):
                return account
        _logger.info("Failed login for %s", identifier)
        raise AuthenticationError("Invalid username or password.")

    def get_account(self, account_id: UUID) -> Account:
        """Return an account by id."""
        return _find_account(self.repository.load(), account_id)

    def list_profiles(self, account_id: UUID) -> list[SavedProfile]:
        """Return the account's saved profiles."""
        return self.get_account(account_id).profiles

    def get_profile(self, account_id: UUID, profile_id: UUID) -> SavedProfile:
        """Return one saved profile owned by the account."""
        profile = self.get_account(account_id).find_profile(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found.")
        return profile

    def save_new_profile(
        self, account_id: UUID, profile_name: str, profile: UserProfile
    ) -> SavedProfile:
        """Store the profile under a new name."""
        name = profile_name.strip()
        if not name:
            raise InputValidationError("Please enter a profile name.")
        document = self.repository.load()
        account = _find_account(document, account_id)
        saved = SavedProfile(
            **profile.model_dump(exclude=_IDENTITY_FIELDS), profile_name=name
        )
        account.profiles.append(saved)
        self.repository.save(document)
        return saved

    def update_profile(
        self, account_id: UUID, profile_id: UUID, profile: UserProfile
    ) -> SavedProfile:
        """Overwrite a saved profile's fields, keeping its id and name."""
        document = self.repository.load()
        account = _find_account(document, account_id)
        current = account.find_profile(profile_id)
        if current is None:
            raise NotFoundError("Profile not found.")
        updated = SavedProfile(
            **profile.model_dump(exclude=_IDENTITY_FIELDS),
            id=current.id,
            profile_name=current.profile_name,
        )
        account.profiles = [
            updated if item.id == profile_id else item for item in account.profiles
        ]
        self.repository.save(document)
        return updated

    def delete_profile(self, account_id: UUID, profile_id: UUID) -> None:
        """Remove a saved profile."""
        document = self.repository.load()
        account = _find_account(document, account_id)
        if account.find_profile(profile_id) is None:
            raise NotFoundError("Profile not found.")
        account.profiles = [item for item in account.profiles if item.id != profile_id]
        self.repository.save(document)


def _find_account(document: AccountDocument, account_id: UUID) -> Account:
    for account in document.accounts:
        if account.id == account_id:
            return account
    raise AuthenticationError("Account no longer exists.")
