"""In-memory account and data store for the reference backend."""

import hashlib
import hmac
import re
import secrets
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from fitgenius.schemas.plan import WorkoutPlan
from fitgenius.schemas.user import UserProfile
from fitgenius.schemas.workout_log import WorkoutLog

PASSWORD_MIN_LENGTH = 8
HASH_ITERATIONS = 100_000


def password_problems(password: str) -> List[str]:
    """Reasons a registration password is too weak; empty when acceptable."""
    problems = []
    if len(password) < PASSWORD_MIN_LENGTH:
        problems.append(f"at least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"\d", password):
        problems.append("at least one digit")
    return problems


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, HASH_ITERATIONS)


class Account(BaseModel):
    username: str
    salt: bytes
    password_hash: bytes
    profile: Optional[UserProfile] = None
    logs: List[WorkoutLog] = Field(default_factory=list)
    plan: Optional[WorkoutPlan] = None

    def check_password(self, password: str) -> bool:
        return hmac.compare_digest(self.password_hash, _hash_password(password, self.salt))


class InMemoryStore:
    """Accounts keyed by username and bearer tokens keyed by value."""

    def __init__(self):
        self.accounts: Dict[str, Account] = {}
        self.tokens: Dict[str, str] = {}

    def create_account(self, username: str, password: str) -> Account:
        if username in self.accounts:
            raise KeyError(username)
        salt = secrets.token_bytes(16)
        account = Account(username=username, salt=salt, password_hash=_hash_password(password, salt))
        self.accounts[username] = account
        return account

    def authenticate(self, username: str, password: str) -> Optional[Account]:
        account = self.accounts.get(username)
        if account is None or not account.check_password(password):
            return None
        return account

    def issue_token(self, account: Account) -> str:
        token = secrets.token_urlsafe(32)
        self.tokens[token] = account.username
        return token

    def resolve_token(self, token: str) -> Optional[Account]:
        username = self.tokens.get(token)
        return self.accounts.get(username) if username else None

    def clear(self) -> None:
        self.accounts.clear()
        self.tokens.clear()


# Global store instance
store = InMemoryStore()
