import unittest

from responsebot.services.responses.errors import InvalidPatternError
from responsebot.services.responses.matching import trigger_matches
from responsebot.services.responses.models.match_mode import MatchMode


class TestTriggerMatches(unittest.TestCase):

    def test_exact_requires_identical_text(self):
        self.assertTrue(trigger_matches("hello", "hello", MatchMode.EXACT))
        self.assertFalse(trigger_matches("hello", "hello there", MatchMode.EXACT))
        self.assertFalse(trigger_matches("hello", "Hello", MatchMode.EXACT))

    def test_includes_matches_substring(self):
        self.assertTrue(trigger_matches("hello", "say hello now", MatchMode.INCLUDES))
        self.assertFalse(trigger_matches("hello", "say HELLO now", MatchMode.INCLUDES))
        self.assertFalse(trigger_matches("hello", "hell", MatchMode.INCLUDES))

    def test_regex_is_case_insensitive_and_unanchored(self):
        self.assertTrue(trigger_matches("hello", "HELLO", MatchMode.REGEX))
        self.assertTrue(trigger_matches(r"h[ae]llo\b", "well, hallo friend", MatchMode.REGEX))
        self.assertFalse(trigger_matches(r"^hello$", "hello there", MatchMode.REGEX))

    def test_regex_invalid_pattern_raises(self):
        with self.assertRaises(InvalidPatternError) as ctx:
            trigger_matches("(unclosed", "anything", MatchMode.REGEX)
        self.assertEqual(ctx.exception.pattern, "(unclosed")

    def test_invalid_pattern_is_plain_text_in_other_modes(self):
        self.assertTrue(trigger_matches("(unclosed", "x (unclosed y", MatchMode.INCLUDES))
        self.assertTrue(trigger_matches("(unclosed", "(unclosed", MatchMode.EXACT))

    def test_accepts_string_mode_values(self):
        self.assertTrue(trigger_matches("hi", "hi", MatchMode("exact")))


if __name__ == '__main__':
    unittest.main()
