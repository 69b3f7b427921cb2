"""
Unit Tests - UserStore implementations

Module: tests.test_user_stores
Date: 2026-10-18
Version: 0.1.0

Every backend runs the same contract: exact case-sensitive lookup on
username OR email, atomic insert, UniqueViolationError naming the field,
and no partial row on a rejected insert.
"""

import os
import shutil
import tempfile
import threading
import unittest
from pathlib import Path

from credcore.core.config import AuthConfig
from credcore.persistence import (
    InMemoryUserStore,
    JSONStore,
    JSONStoreError,
    JSONUserStore,
    SQLiteUserStore,
    UniqueViolationError,
    UserStoreError,
    create_user_store,
)
from credcore.persistence.json_store import JSONStoreFormatError

HASH = "$2b$04$abcdefghijklmnopqrstuu5y0C2kV3ZHVqJlZrVkFwS7oYF1rQ7bO"


class UserStoreContract:
    """Shared tests; subclasses provide make_store()"""

    def make_store(self):
        raise NotImplementedError

    def setUp(self):
        """Setup before each test"""
        self.test_dir = tempfile.mkdtemp()
        self.store = self.make_store()

    def tearDown(self):
        """Cleanup after each test"""
        self.store.close()
        if os.path.exists(self.test_dir):
            shutil.rmtree(self.test_dir)

    def test_insert_assigns_id_and_timestamps(self):
        """Test store assigns id and timestamps"""
        record = self.store.insert_account("alice", "alice@example.com", HASH)

        self.assertTrue(record.account_id)
        self.assertEqual(record.username, "alice")
        self.assertEqual(record.email, "alice@example.com")
        self.assertEqual(record.password_hash, HASH)
        self.assertIsNotNone(record.created_at)
        self.assertEqual(record.created_at, record.updated_at)
        self.assertEqual(self.store.count(), 1)

    def test_ids_are_unique(self):
        """Test two accounts get different ids"""
        a = self.store.insert_account("alice", "alice@example.com", HASH)
        b = self.store.insert_account("bob01", "bob@example.com", HASH)
        self.assertNotEqual(a.account_id, b.account_id)

    def test_find_by_username(self):
        """Test lookup on the username column"""
        self.store.insert_account("alice", "alice@example.com", HASH)

        found = self.store.find_by_username_or_email("alice", "other@example.com")
        self.assertIsNotNone(found)
        self.assertEqual(found.username, "alice")

    def test_find_by_email(self):
        """Test lookup on the email column"""
        self.store.insert_account("alice", "alice@example.com", HASH)

        found = self.store.find_by_username_or_email("nobody", "alice@example.com")
        self.assertIsNotNone(found)
        self.assertEqual(found.email, "alice@example.com")

    def test_find_single_identifier(self):
        """Test one identifier matches either column"""
        self.store.insert_account("alice", "alice@example.com", HASH)

        by_name = self.store.find_by_username_or_email("alice", "alice")
        by_mail = self.store.find_by_username_or_email("alice@example.com", "alice@example.com")
        self.assertEqual(by_name.account_id, by_mail.account_id)

    def test_find_none(self):
        """Test lookup misses return None"""
        self.store.insert_account("alice", "alice@example.com", HASH)
        self.assertIsNone(self.store.find_by_username_or_email("bob01", "bob@example.com"))

    def test_find_is_case_sensitive(self):
        """Test exact matching"""
        self.store.insert_account("alice", "alice@example.com", HASH)
        self.assertIsNone(self.store.find_by_username_or_email("Alice", "Alice@example.com"))

    def test_find_prefers_username_match(self):
        """Test username match wins when rows match on different columns"""
        self.store.insert_account("alice", "alice@example.com", HASH)
        self.store.insert_account("bob01", "bob@example.com", HASH)

        found = self.store.find_by_username_or_email("bob01", "alice@example.com")
        self.assertEqual(found.username, "bob01")

    def test_duplicate_username(self):
        """Test duplicate username reports the username field"""
        self.store.insert_account("alice", "alice@example.com", HASH)

        with self.assertRaises(UniqueViolationError) as ctx:
            self.store.insert_account("alice", "other@example.com", HASH)
        self.assertEqual(ctx.exception.field, "username")
        self.assertEqual(self.store.count(), 1)

    def test_duplicate_email(self):
        """Test duplicate email reports the email field"""
        self.store.insert_account("alice", "alice@example.com", HASH)

        with self.assertRaises(UniqueViolationError) as ctx:
            self.store.insert_account("alice2", "alice@example.com", HASH)
        self.assertEqual(ctx.exception.field, "email")
        self.assertEqual(self.store.count(), 1)

    def test_unique_violation_is_store_error(self):
        """Test callers can catch the base class"""
        self.store.insert_account("alice", "alice@example.com", HASH)
        with self.assertRaises(UserStoreError):
            self.store.insert_account("alice", "alice@example.com", HASH)

    def test_case_variants_are_distinct(self):
        """Test uniqueness is case-sensitive"""
        self.store.insert_account("alice", "alice@example.com", HASH)
        self.store.insert_account("Alice", "Alice@example.com", HASH)
        self.assertEqual(self.store.count(), 2)

    def test_get_account(self):
        """Test lookup by id"""
        created = self.store.insert_account("alice", "alice@example.com", HASH)

        found = self.store.get_account(created.account_id)
        self.assertEqual(found.username, "alice")
        self.assertIsNone(self.store.get_account("missing-id"))

    def test_concurrent_inserts_same_username(self):
        """Test only one of many simultaneous inserts succeeds"""
        barrier = threading.Barrier(8)
        successes = []
        violations = []

        def worker(i):
            barrier.wait()
            try:
                successes.append(
                    self.store.insert_account("racer", f"racer{i}@example.com", HASH)
                )
            except UniqueViolationError as e:
                violations.append(e.field)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(successes), 1)
        self.assertEqual(violations, ["username"] * 7)
        self.assertEqual(self.store.count(), 1)


class TestInMemoryUserStore(UserStoreContract, unittest.TestCase):
    """InMemoryUserStore contract"""

    def make_store(self):
        return InMemoryUserStore()


class TestJSONUserStore(UserStoreContract, unittest.TestCase):
    """JSONUserStore contract plus file behaviour"""

    def make_store(self):
        return JSONUserStore(self.test_dir)

    def test_initialization_creates_file(self):
        """Test accounts.json is created"""
        self.assertTrue(self.store.accounts_file.exists())

    def test_persists_across_instances(self):
        """Test accounts survive a reopen"""
        created = self.store.insert_account("alice", "alice@example.com", HASH)

        reopened = JSONUserStore(self.test_dir)
        found = reopened.get_account(created.account_id)
        self.assertEqual(found.username, "alice")
        self.assertEqual(found.created_at, created.created_at)

    def test_file_permissions(self):
        """Test file has restrictive permissions"""
        self.store.insert_account("alice", "alice@example.com", HASH)
        mode = os.stat(self.store.accounts_file).st_mode & 0o777
        self.assertEqual(mode, 0o600)

    def test_rejected_insert_leaves_file_untouched(self):
        """Test no partial row is written"""
        self.store.insert_account("alice", "alice@example.com", HASH)
        before = self.store.accounts_file.read_text()

        with self.assertRaises(UniqueViolationError):
            self.store.insert_account("alice", "new@example.com", HASH)
        self.assertEqual(self.store.accounts_file.read_text(), before)

    def test_two_instances_share_accounts(self):
        """Test two stores on one data dir keep every reported insert"""
        other = JSONUserStore(self.test_dir)
        barrier = threading.Barrier(40)
        created = []
        errors = []
        lock = threading.Lock()

        def worker(i):
            store = self.store if i % 2 else other
            barrier.wait()
            try:
                record = store.insert_account(f"user{i}", f"user{i}@example.com", HASH)
            except UserStoreError as e:
                with lock:
                    errors.append(e)
                return
            with lock:
                created.append(record.account_id)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(40)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        self.assertEqual(len(created), 40)
        self.assertEqual(self.store.count(), 40)
        for account_id in created:
            self.assertIsNotNone(other.get_account(account_id))

    def test_two_instances_enforce_uniqueness(self):
        """Test a second store on the same file sees the first store's rows"""
        other = JSONUserStore(self.test_dir)
        self.store.insert_account("alice", "alice@example.com", HASH)

        with self.assertRaises(UniqueViolationError) as ctx:
            other.insert_account("alice", "new@example.com", HASH)
        self.assertEqual(ctx.exception.field, "username")
        self.assertEqual(self.store.count(), 1)

    def test_invalid_json_raises_store_error(self):
        """Test corrupt file surfaces as an infrastructure error"""
        self.store.accounts_file.write_text("{invalid json}")
        with self.assertRaises(JSONStoreFormatError):
            self.store.find_by_username_or_email("alice", "alice")
        with self.assertRaises(UserStoreError):
            self.store.count()


class TestSQLiteUserStore(UserStoreContract, unittest.TestCase):
    """SQLiteUserStore contract plus database behaviour"""

    def make_store(self):
        return SQLiteUserStore(os.path.join(self.test_dir, "accounts.db"))

    def test_check_connection(self):
        """Test connectivity probe returns the database time"""
        self.assertTrue(self.store.check_connection())

    def test_persists_across_instances(self):
        """Test accounts survive a reopen"""
        created = self.store.insert_account("alice", "alice@example.com", HASH)

        reopened = SQLiteUserStore(os.path.join(self.test_dir, "accounts.db"))
        try:
            self.assertEqual(reopened.get_account(created.account_id).email, "alice@example.com")
        finally:
            reopened.close()

    def test_two_connections_share_constraints(self):
        """Test uniqueness holds across separate connections"""
        other = SQLiteUserStore(os.path.join(self.test_dir, "accounts.db"))
        try:
            self.store.insert_account("alice", "alice@example.com", HASH)
            with self.assertRaises(UniqueViolationError) as ctx:
                other.insert_account("bob01", "alice@example.com", HASH)
            self.assertEqual(ctx.exception.field, "email")
        finally:
            other.close()

    def test_violated_field_parsing(self):
        """Test constraint messages map to fields"""
        parse = SQLiteUserStore._violated_field
        self.assertEqual(parse("UNIQUE constraint failed: accounts.username"), "username")
        self.assertEqual(parse("UNIQUE constraint failed: accounts.email"), "email")
        self.assertIsNone(parse("UNIQUE constraint failed: accounts.id"))

    def test_in_memory_database(self):
        """Test ":memory:" databases work"""
        store = SQLiteUserStore(":memory:")
        try:
            store.insert_account("alice", "alice@example.com", HASH)
            self.assertEqual(store.count(), 1)
        finally:
            store.close()


class TestJSONStore(unittest.TestCase):
    """Test suite for JSONStore"""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.store_path = os.path.join(self.test_dir, "nested", "test.json")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_initialization_with_default_data(self):
        """Test directory and file are created with default data"""
        store = JSONStore(self.store_path, {"key": "value"})
        self.assertEqual(store.load(), {"key": "value"})

    def test_update_saves(self):
        """Test update() writes the modified document"""
        store = JSONStore(self.store_path, {"items": []})
        with store.update() as data:
            data["items"].append(1)
        self.assertEqual(store.load(), {"items": [1]})
        leftovers = [n for n in os.listdir(os.path.dirname(self.store_path)) if n.endswith(".tmp")]
        self.assertEqual(leftovers, [])

    def test_update_aborts_on_error(self):
        """Test nothing is written when the block raises"""
        store = JSONStore(self.store_path, {"items": []})
        with self.assertRaises(RuntimeError):
            with store.update() as data:
                data["items"].append(1)
                raise RuntimeError("boom")
        self.assertEqual(store.load(), {"items": []})

    def test_lock_file_beside_document(self):
        """Test the transaction lock lives next to the JSON file"""
        store = JSONStore(self.store_path, {"items": []})
        self.assertEqual(store.lock_path, Path(self.store_path + ".lock"))

    def test_two_instances_serialize_updates(self):
        """Test updates through separate instances on one file are never lost"""
        first = JSONStore(self.store_path, {"items": []})
        second = JSONStore(self.store_path, {"items": []})
        barrier = threading.Barrier(20)
        errors = []

        def worker(i):
            store = first if i % 2 else second
            barrier.wait()
            try:
                with store.update() as data:
                    data["items"].append(i)
            except JSONStoreError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        self.assertEqual(sorted(first.load()["items"]), list(range(20)))


class TestStoreFactory(unittest.TestCase):
    """Test suite for create_user_store"""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_backends(self):
        """Test each configured backend yields the matching class"""
        expected = {
            "memory": InMemoryUserStore,
            "json": JSONUserStore,
            "sqlite": SQLiteUserStore,
        }
        for backend, cls in expected.items():
            with self.subTest(backend=backend):
                store = create_user_store(AuthConfig(store_backend=backend, data_dir=self.test_dir))
                try:
                    self.assertIsInstance(store, cls)
                finally:
                    store.close()


if __name__ == "__main__":
    unittest.main()
