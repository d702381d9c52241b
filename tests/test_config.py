import os
import tempfile
import unittest
from unittest.mock import patch

from responsebot.config import Config, ConfigError
from responsebot.services.responses import MatchMode


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def write_config(self, text: str) -> str:
        path = os.path.join(self.tmp.name, "config.yaml")
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_defaults_for_empty_file(self):
        config = Config(self.write_config(""))
        self.assertEqual(config.prefix, "!")
        self.assertEqual(config.match_mode, MatchMode.EXACT)
        self.assertEqual(config.log_level, "info")
        self.assertEqual(config.storage, "data")
        self.assertIsNone(config.mongo_db_name)
        self.assertEqual(config.log_dir, "logs")

    def test_snake_case_keys(self):
        config = Config(self.write_config(
            "token: abc\n"
            "prefix: '?'\n"
            "match_mode: regex\n"
            "log_level: DEBUG\n"
            "storage: mongodb://localhost:27017\n"
            "mongo_db_name: bots\n"
        ))
        self.assertEqual(config.token, "abc")
        self.assertEqual(config.prefix, "?")
        self.assertEqual(config.match_mode, MatchMode.REGEX)
        self.assertEqual(config.log_level, "debug")
        self.assertEqual(config.storage, "mongodb://localhost:27017")
        self.assertEqual(config.mongo_db_name, "bots")

    def test_camel_case_keys(self):
        config = Config(self.write_config(
            "clientId: 1234567890\n"
            "matchMode: includes\n"
            "logLevel: warn\n"
            "mongoDbName: legacy\n"
        ))
        self.assertEqual(config.settings.client_id, "1234567890")
        self.assertEqual(config.match_mode, MatchMode.INCLUDES)
        self.assertEqual(config.log_level, "warn")
        self.assertEqual(config.mongo_db_name, "legacy")

    def test_unknown_match_mode(self):
        with self.assertRaises(ConfigError):
            Config(self.write_config("match_mode: fuzzy\n"))

    def test_unknown_log_level(self):
        with self.assertRaises(ConfigError):
            Config(self.write_config("log_level: chatty\n"))

    def test_blank_prefix(self):
        with self.assertRaises(ConfigError):
            Config(self.write_config("prefix: '  '\n"))

    def test_blank_storage(self):
        with self.assertRaises(ConfigError):
            Config(self.write_config("storage: ''\n"))

    def test_non_mapping_file(self):
        with self.assertRaises(ConfigError):
            Config(self.write_config("- just\n- a list\n"))

    def test_malformed_yaml(self):
        with self.assertRaises(ConfigError):
            Config(self.write_config("prefix: [unclosed\n"))

    def test_unreadable_path(self):
        # A directory exists but cannot be read as a file
        with self.assertRaises(ConfigError):
            Config(self.tmp.name)

    def test_missing_explicit_path(self):
        with self.assertRaises(ConfigError):
            Config(os.path.join(self.tmp.name, "absent.yaml"))

    def test_token_falls_back_to_environment(self):
        path = self.write_config("prefix: '!'\n")
        with patch.dict(os.environ, {"DISCORD_TOKEN": "from-env"}):
            self.assertEqual(Config(path).token, "from-env")

    def test_file_token_wins_over_environment(self):
        path = self.write_config("token: from-file\n")
        with patch.dict(os.environ, {"DISCORD_TOKEN": "from-env"}):
            self.assertEqual(Config(path).token, "from-file")


if __name__ == '__main__':
    unittest.main()
