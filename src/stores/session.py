"""
Active login session.

At most one user is logged in at a time. The password-free projection of the
account is written to the local store so the session survives a restart.
"""

from __future__ import annotations

import asyncio
import json
from typing import Optional

from db import kvstore
from db.models import AuthResult, SessionUser
from stores.registry import CredentialRegistry
from utils.config import SESSION_KEY
from utils.logger import get_logger

_logger = get_logger(__name__)


def decode_session(raw: Optional[str]) -> Optional[SessionUser]:
    """Parse a stored session; anything unreadable counts as logged out."""
    if not raw:
        return None
    try:
        return SessionUser.from_dict(json.loads(raw))
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        _logger.warning(f"Failed to parse saved session: {e}")
        return None


def encode_session(user: SessionUser) -> str:
    return json.dumps(user.to_dict())


class SessionStore:
    """
    signup, login and logout run shielded: once started they finish even if
    the caller is cancelled, so the in-memory user and the stored session
    never disagree. current_user changes only after the write has committed.
    """

    def __init__(self, registry: Optional[CredentialRegistry] = None) -> None:
        self.registry = registry or CredentialRegistry()
        self.current_user: Optional[SessionUser] = None
        self.loading = True

    async def restore(self) -> Optional[SessionUser]:
        """Load the persisted session, if any. Called once at app start."""
        self.current_user = decode_session(await kvstore.get_item(SESSION_KEY))
        self.loading = False
        if self.current_user:
            _logger.info(f"Restored session for {self.current_user.email}.")
        return self.current_user

    async def _start(self, user: SessionUser) -> None:
        await kvstore.set_item(SESSION_KEY, encode_session(user))
        self.current_user = user

    async def _signup(self, name: str, email: str, password: str) -> AuthResult:
        account = await self.registry.create_account(name, email, password)
        if account is None:
            return AuthResult(False, "Email already registered")
        await self._start(SessionUser.from_account(account))
        return AuthResult(True, "Account created successfully!")

    async def _login(self, email: str, password: str) -> AuthResult:
        account = await self.registry.verify(email, password)
        if account is None:
            _logger.info(f"Failed login attempt for {email}.")
            return AuthResult(False, "Invalid email or password")
        await self._start(SessionUser.from_account(account))
        _logger.info(f"User {account.id} logged in.")
        return AuthResult(True, "Login successful!")

    async def _logout(self) -> None:
        await kvstore.remove_item(SESSION_KEY)
        if self.current_user is not None:
            _logger.info(f"User {self.current_user.id} logged out.")
        self.current_user = None

    async def signup(self, name: str, email: str, password: str) -> AuthResult:
        return await asyncio.shield(self._signup(name, email, password))

    async def login(self, email: str, password: str) -> AuthResult:
        return await asyncio.shield(self._login(email, password))

    async def logout(self) -> None:
        """Idempotent; also clears whatever is stored under the session key."""
        await asyncio.shield(self._logout())

    def is_logged_in(self) -> bool:
        return self.current_user is not None
