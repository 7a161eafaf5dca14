"""
Registry of signed-up accounts, kept as a JSON array in the local store.

Demo-only: passwords are stored and compared in plaintext. Do not reuse
this as a real authentication mechanism.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from db import kvstore
from db.models import UserAccount
from utils.config import USERS_KEY
from utils.logger import get_logger

_logger = get_logger(__name__)


def decode_registry(raw: Optional[str]) -> List[UserAccount]:
    """Parse the stored registry. Missing or corrupt data yields an empty list."""
    if not raw:
        return []
    try:
        return [UserAccount.from_dict(entry) for entry in json.loads(raw)]
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        _logger.warning(f"Discarding unreadable account registry: {e}")
        return []


def encode_registry(accounts: Sequence[UserAccount]) -> str:
    return json.dumps([account.to_dict() for account in accounts])


def find_by_email(accounts: Sequence[UserAccount], email: str) -> Optional[UserAccount]:
    for account in accounts:
        if account.email == email:
            return account
    return None


def register(
    accounts: Sequence[UserAccount],
    name: str,
    email: str,
    password: str,
    now: Optional[datetime] = None,
) -> Tuple[List[UserAccount], Optional[UserAccount]]:
    """
    Return (new registry, new account). If the email is taken the registry is
    returned unchanged and the account is None.
    """
    if find_by_email(accounts, email):
        return list(accounts), None
    now = now or datetime.now(timezone.utc)
    account = UserAccount(
        id=int(now.timestamp() * 1000),
        name=name,
        email=email,
        password=password,
        created_at=now.isoformat(),
    )
    return [*accounts, account], account


def authenticate(
    accounts: Sequence[UserAccount], email: str, password: str
) -> Optional[UserAccount]:
    """Exact match on both email and plaintext password."""
    for account in accounts:
        if account.email == email and account.password == password:
            return account
    return None


class CredentialRegistry:
    async def load(self) -> List[UserAccount]:
        return decode_registry(await kvstore.get_item(USERS_KEY))

    async def save(self, accounts: Sequence[UserAccount]) -> None:
        await kvstore.set_item(USERS_KEY, encode_registry(accounts))

    async def create_account(
        self, name: str, email: str, password: str
    ) -> Optional[UserAccount]:
        """Persist a new account. Returns None if the email is already registered."""
        accounts, account = register(await self.load(), name, email, password)
        if account is None:
            _logger.info(f"Signup rejected, {email} already registered.")
            return None
        await self.save(accounts)
        _logger.info(f"Registered account {account.id} for {email}.")
        return account

    async def verify(self, email: str, password: str) -> Optional[UserAccount]:
        return authenticate(await self.load(), email, password)
