import os
import tempfile
import unittest
from concurrent.futures import ThreadPoolExecutor

from sqlalchemy import inspect

from responsebot.services.responses.errors import (
    BackendUnavailableError,
    DuplicateNameError,
)
from responsebot.services.responses.store.sqlite_store import (
    DATABASE_FILENAME,
    SqliteResponseStore,
)

from store_contract import ResponseStoreContract


class TestSqliteResponseStore(ResponseStoreContract, unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.storage_path = os.path.join(self.tmp.name, "data")
        self.store = SqliteResponseStore.from_directory(self.storage_path)

    def tearDown(self):
        self.store.close()
        self.tmp.cleanup()

    def test_creates_directory_and_database_file(self):
        self.assertTrue(os.path.isfile(os.path.join(self.storage_path, DATABASE_FILENAME)))
        self.assertEqual(self.store.backend_type, "local")

    def test_unique_index_on_guild_and_name(self):
        indexes = inspect(self.store.engine).get_indexes("responses")
        index = next(i for i in indexes if i["name"] == "idx_guild_name")
        self.assertTrue(index["unique"])
        self.assertEqual(list(index["column_names"]), ["guild_id", "name"])

    def test_uses_wal_journal(self):
        with self.store.engine.connect() as conn:
            mode = conn.exec_driver_sql("PRAGMA journal_mode").scalar()
        self.assertEqual(mode.lower(), "wal")

    def test_records_survive_reopen(self):
        self.store.insert_unique("g1", "greet", "hello", "Hi", 1000)
        self.store.close()

        self.store = SqliteResponseStore.from_directory(self.storage_path)
        self.assertEqual(self.store.get_by_name("g1", "greet").response, "Hi")

    def test_concurrent_inserts_of_same_name_store_one(self):
        def insert(i):
            try:
                self.store.insert_unique("g1", "race", f"t{i}", f"r{i}", 1000 + i)
                return "ok"
            except DuplicateNameError:
                return "duplicate"

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(insert, range(8)))

        self.assertEqual(results.count("ok"), 1)
        self.assertEqual(results.count("duplicate"), 7)
        self.assertEqual(len(self.store.list_by_guild("g1")), 1)


class TestSqliteStoreUnavailable(unittest.TestCase):

    def test_path_that_is_a_file_is_unavailable(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = os.path.join(tmp, "not-a-dir")
            with open(blocker, "w") as f:
                f.write("x")
            with self.assertRaises(BackendUnavailableError):
                SqliteResponseStore.from_directory(blocker)


if __name__ == '__main__':
    unittest.main()
