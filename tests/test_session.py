import asyncio
import json
import os
import sys
import tempfile
import unittest
from datetime import datetime, timezone
from unittest import mock

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from db import database as db_database  # noqa: E402
from db import kvstore  # noqa: E402
from db.models import SessionUser, UserAccount  # noqa: E402
from stores import registry  # noqa: E402
from stores.registry import CredentialRegistry  # noqa: E402
from stores.session import SessionStore, decode_session  # noqa: E402
from utils.config import SESSION_KEY, USERS_KEY  # noqa: E402


class RegistryRulesTestCase(unittest.TestCase):
    def test_register_derives_id_and_timestamp(self):
        now = datetime(2025, 11, 1, 12, 0, tzinfo=timezone.utc)
        accounts, account = registry.register([], "A", "a@x.com", "secret1", now)

        self.assertEqual(accounts, [account])
        self.assertEqual(account.id, int(now.timestamp() * 1000))
        self.assertEqual(account.created_at, now.isoformat())

    def test_register_rejects_duplicate_email(self):
        accounts, _ = registry.register([], "A", "a@x.com", "secret1")
        again, account = registry.register(accounts, "B", "a@x.com", "other12")
        self.assertIsNone(account)
        self.assertEqual(again, accounts)

    def test_authenticate_needs_exact_match(self):
        accounts, account = registry.register([], "A", "a@x.com", "secret1")
        self.assertEqual(registry.authenticate(accounts, "a@x.com", "secret1"), account)
        self.assertIsNone(registry.authenticate(accounts, "a@x.com", "Secret1"))
        self.assertIsNone(registry.authenticate(accounts, "A@x.com", "secret1"))

    def test_decode_registry_fails_open(self):
        self.assertEqual(registry.decode_registry(None), [])
        self.assertEqual(registry.decode_registry("{not json"), [])
        self.assertEqual(registry.decode_registry('{"id": 1}'), [])
        self.assertEqual(registry.decode_registry('[{"id": 1}]'), [])

    def test_registry_json_shape(self):
        account = UserAccount(1, "A", "a@x.com", "secret1", "2025-11-01T12:00:00")
        raw = registry.encode_registry([account])
        self.assertEqual(
            json.loads(raw),
            [
                {
                    "id": 1,
                    "name": "A",
                    "email": "a@x.com",
                    "password": "secret1",
                    "createdAt": "2025-11-01T12:00:00",
                }
            ],
        )
        self.assertEqual(registry.decode_registry(raw), [account])

    def test_decode_session(self):
        self.assertIsNone(decode_session(None))
        self.assertIsNone(decode_session(""))
        self.assertIsNone(decode_session("not json"))
        self.assertIsNone(decode_session('["a"]'))
        self.assertEqual(
            decode_session('{"id": 5, "name": "A", "email": "a@x.com"}'),
            SessionUser(5, "A", "a@x.com"),
        )


class SessionStoreTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        # Point the store to a temporary file and force re-initialization
        self.temp_dir = tempfile.TemporaryDirectory()
        db_database.DB_PATH = os.path.join(self.temp_dir.name, "test.sqlite")
        db_database._initialized = False
        self.session = SessionStore()

    def tearDown(self):
        self.temp_dir.cleanup()

    async def stored_accounts(self):
        return registry.decode_registry(await kvstore.get_item(USERS_KEY))

    async def test_signup_logs_in_and_persists(self):
        result = await self.session.signup("A", "a@x.com", "secret1")
        self.assertTrue(result.success)
        self.assertEqual(result.message, "Account created successfully!")
        self.assertTrue(self.session.is_logged_in())
        self.assertEqual(self.session.current_user.email, "a@x.com")

        stored = json.loads(await kvstore.get_item(SESSION_KEY))
        self.assertEqual(set(stored), {"id", "name", "email"})
        self.assertEqual([a.email for a in await self.stored_accounts()], ["a@x.com"])

    async def test_duplicate_signup_changes_nothing(self):
        await self.session.signup("A", "a@x.com", "secret1")
        session_before = await kvstore.get_item(SESSION_KEY)

        result = await self.session.signup("B", "a@x.com", "other12")
        self.assertFalse(result.success)
        self.assertIn("already registered", result.message)

        accounts = await self.stored_accounts()
        self.assertEqual([a.name for a in accounts], ["A"])
        self.assertEqual(self.session.current_user.name, "A")
        self.assertEqual(await kvstore.get_item(SESSION_KEY), session_before)

    async def test_login_success_and_failure(self):
        await self.session.signup("A", "a@x.com", "secret1")
        await self.session.logout()

        result = await self.session.login("a@x.com", "secret1")
        self.assertTrue(result.success)
        self.assertEqual(result.message, "Login successful!")
        self.assertEqual(self.session.current_user.name, "A")

        result = await self.session.login("nobody@x.com", "secret1")
        self.assertFalse(result.success)
        self.assertEqual(result.message, "Invalid email or password")

    async def test_wrong_password_keeps_existing_session(self):
        await self.session.signup("A", "a@x.com", "secret1")
        await self.session.signup("B", "b@x.com", "secret2")
        current = self.session.current_user
        stored = await kvstore.get_item(SESSION_KEY)

        result = await self.session.login("a@x.com", "wrong-password")
        self.assertFalse(result.success)
        self.assertEqual(self.session.current_user, current)
        self.assertEqual(await kvstore.get_item(SESSION_KEY), stored)

    async def test_logout_is_idempotent(self):
        await self.session.signup("A", "a@x.com", "secret1")

        await self.session.logout()
        self.assertFalse(self.session.is_logged_in())
        self.assertIsNone(await kvstore.get_item(SESSION_KEY))

        await self.session.logout()
        self.assertFalse(self.session.is_logged_in())
        self.assertIsNone(await kvstore.get_item(SESSION_KEY))
        # registry is untouched by logout
        self.assertEqual(len(await self.stored_accounts()), 1)

    async def test_restore_brings_back_session(self):
        await self.session.signup("A", "a@x.com", "secret1")

        fresh = SessionStore()
        self.assertTrue(fresh.loading)
        user = await fresh.restore()
        self.assertFalse(fresh.loading)
        self.assertEqual(user, self.session.current_user)
        self.assertTrue(fresh.is_logged_in())

    async def test_restore_with_corrupt_session_is_logged_out(self):
        await kvstore.set_item(SESSION_KEY, "{definitely not json")

        with self.assertLogs("stores.session", level="WARNING"):
            user = await self.session.restore()
        self.assertIsNone(user)
        self.assertFalse(self.session.is_logged_in())
        self.assertFalse(self.session.loading)

    async def test_corrupt_registry_is_treated_as_empty(self):
        await kvstore.set_item(USERS_KEY, "garbage")

        result = await self.session.signup("A", "a@x.com", "secret1")
        self.assertTrue(result.success)
        self.assertEqual(len(await self.stored_accounts()), 1)

    async def test_cancelled_signup_keeps_memory_and_storage_in_step(self):
        reached = asyncio.Event()
        release = asyncio.Event()
        real_set_item = kvstore.set_item

        async def slow_session_write(key, value):
            if key == SESSION_KEY:
                reached.set()
                await release.wait()
            await real_set_item(key, value)

        with mock.patch.object(kvstore, "set_item", slow_session_write):
            task = asyncio.create_task(self.session.signup("A", "a@x.com", "secret1"))
            # registry is written, session write is in flight
            await reached.wait()
            task.cancel()
            release.set()
            with self.assertRaises(asyncio.CancelledError):
                await task

            # the shielded signup finishes on its own
            for _ in range(100):
                if self.session.current_user is not None:
                    break
                await asyncio.sleep(0.01)
            stored = await kvstore.get_item(SESSION_KEY)

        self.assertIsNotNone(stored)
        self.assertEqual(decode_session(stored), self.session.current_user)
        self.assertEqual(self.session.current_user.email, "a@x.com")
        self.assertEqual([a.email for a in await self.stored_accounts()], ["a@x.com"])

        result = await self.session.signup("A", "a@x.com", "secret1")
        self.assertFalse(result.success)
        self.assertIn("already registered", result.message)
        self.assertEqual(decode_session(await kvstore.get_item(SESSION_KEY)), self.session.current_user)

    async def test_shared_registry_between_sessions(self):
        shared = CredentialRegistry()
        first = SessionStore(shared)
        await first.signup("A", "a@x.com", "secret1")

        second = SessionStore(shared)
        result = await second.login("a@x.com", "secret1")
        self.assertTrue(result.success)


if __name__ == "__main__":
    unittest.main()
