import os
import tempfile
import unittest
from unittest.mock import patch

from responsebot.services.responses import BackendUnavailableError, open_store
from responsebot.services.responses.store.factory import is_mongo_target
from responsebot.services.responses.store.sqlite_store import (
    DATABASE_FILENAME,
    SqliteResponseStore,
)

FACTORY = "responsebot.services.responses.store.factory"


class TestStoreFactory(unittest.TestCase):

    def test_mongo_prefixes(self):
        self.assertTrue(is_mongo_target("mongodb://localhost:27017/bot"))
        self.assertTrue(is_mongo_target("mongodb+srv://user:pw@cluster.example.net/bot"))
        self.assertFalse(is_mongo_target("data"))
        self.assertFalse(is_mongo_target("/var/lib/bot/mongodb"))

    def test_connection_string_selects_mongo(self):
        with patch(f"{FACTORY}.MongoResponseStore.connect") as connect:
            store = open_store("mongodb://localhost:27017/bot", "custom")
        connect.assert_called_once_with("mongodb://localhost:27017/bot", "custom")
        self.assertIs(store, connect.return_value)

    def test_mongo_failure_propagates(self):
        with patch(
            f"{FACTORY}.MongoResponseStore.connect",
            side_effect=BackendUnavailableError("unreachable"),
        ):
            with self.assertRaises(BackendUnavailableError):
                open_store("mongodb+srv://cluster.example.net/bot")

    def test_directory_selects_sqlite(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "nested", "data")
            store = open_store(target)
            try:
                self.assertIsInstance(store, SqliteResponseStore)
                self.assertEqual(store.backend_type, "local")
                self.assertTrue(os.path.isfile(os.path.join(target, DATABASE_FILENAME)))
            finally:
                store.close()


if __name__ == '__main__':
    unittest.main()
