"""
Unit tests for player_verify.core.identity.matching module.

Tests all matching strategies:
- Levenshtein distance and similarity
- Direct containment
- Segmented exact match
- Fuzzy window scan
- Segmented fuzzy match
- NameMatcher integration, including the screenshot scenarios
"""

import unittest

from player_verify.core.identity.matching import (
    NameMatcher,
    edit_distance,
    fuzzy_match,
    is_name_present,
    match_direct,
    match_fuzzy_window,
    match_fuzzy_words,
    match_segments,
    similarity,
)
from player_verify.core.identity.models import MatchThresholds, ScriptClass


class TestEditDistance(unittest.TestCase):
    def test_identical(self):
        self.assertEqual(edit_distance("aeris", "aeris"), 0)

    def test_classic_example(self):
        self.assertEqual(edit_distance("kitten", "sitting"), 3)

    def test_against_empty(self):
        self.assertEqual(edit_distance("", "abc"), 3)
        self.assertEqual(edit_distance("abc", ""), 3)

    def test_single_substitution_cjk(self):
        self.assertEqual(edit_distance("張三", "張彡"), 1)

    def test_insertion_and_deletion(self):
        self.assertEqual(edit_distance("karen", "kaxren"), 1)
        self.assertEqual(edit_distance("kaxren", "karen"), 1)


class TestSimilarity(unittest.TestCase):
    def test_range(self):
        self.assertEqual(similarity("abc", "abc"), 1.0)
        self.assertEqual(similarity("abc", "xyz"), 0.0)

    def test_both_empty(self):
        self.assertEqual(similarity("", ""), 1.0)

    def test_uses_longer_length(self):
        self.assertAlmostEqual(similarity("kitten", "sitting"), 1 - 3 / 7)

    def test_symmetric(self):
        pairs = [
            ("kitten", "sitting"),
            ("張三", "張彡"),
            ("", "abc"),
            ("shadowhunter", "shadcwhunter"),
            ("a", "ab"),
        ]
        for a, b in pairs:
            with self.subTest(a=a, b=b):
                self.assertEqual(similarity(a, b), similarity(b, a))

    def test_fuzzy_match_threshold(self):
        self.assertTrue(fuzzy_match("shadcwhunter", "shadowhunter", 0.75))
        self.assertFalse(fuzzy_match("張彡", "張三", 0.85))

    def test_fuzzy_match_empty_target_never_matches(self):
        self.assertFalse(fuzzy_match("", "", 0.0))
        self.assertFalse(fuzzy_match("abc", "", 0.0))


class TestMatchDirect(unittest.TestCase):
    def test_contained(self):
        result = match_direct("aeris99bio3og", "aeris")
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "direct")
        self.assertEqual(result.confidence, 1.0)

    def test_not_contained(self):
        self.assertFalse(match_direct("bobsmith", "aeris").matches)

    def test_empty_name_is_never_contained(self):
        self.assertFalse(match_direct("anything", "").matches)
        self.assertFalse(match_direct("", "").matches)


class TestMatchSegments(unittest.TestCase):
    def test_segment_normalizes_to_name(self):
        result = match_segments("【勇者－Ｏｎｅ】 4500", "勇者_One", ScriptClass.CJK)
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "segment_exact")

    def test_segment_must_equal_whole_name(self):
        self.assertFalse(match_segments("張三丰 999", "張三", ScriptClass.CJK).matches)

    def test_empty_name(self):
        self.assertFalse(match_segments("張三 999", "", ScriptClass.CJK).matches)


class TestMatchFuzzyWindow(unittest.TestCase):
    def test_single_substitution_latin(self):
        result = match_fuzzy_window("shadcwhunter3soo", "shadowhunter", 0.75)
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "fuzzy_window")
        self.assertAlmostEqual(result.confidence, 11 / 12)

    def test_below_threshold(self):
        self.assertFalse(match_fuzzy_window("張彡9995000", "張三", 0.85).matches)

    def test_name_longer_than_text_has_no_windows(self):
        self.assertFalse(match_fuzzy_window("abc", "abcdef", 0.0).matches)

    def test_window_at_end_of_text(self):
        self.assertTrue(match_fuzzy_window("xxxxaeris", "aeris", 1.0).matches)


class TestMatchFuzzyWords(unittest.TestCase):
    def test_exact_word(self):
        result = match_fuzzy_words("foo_aeris_bar", "aeris", 0.8)
        self.assertTrue(result.matches)
        self.assertEqual(result.confidence, 1.0)

    def test_word_with_insertion(self):
        result = match_fuzzy_words("kaxren_42oo", "karen", 0.8)
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "fuzzy_word")
        self.assertAlmostEqual(result.confidence, 1 - 1 / 6)

    def test_no_words(self):
        self.assertFalse(match_fuzzy_words("", "karen", 0.0).matches)


class TestNameMatcherScenarios(unittest.TestCase):
    def setUp(self):
        self.matcher = NameMatcher()

    def test_clean_transcript_matches_directly(self):
        result = self.matcher.match("Aeris 998 10306", "Aeris")
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "direct")

    def test_ocr_confusion_one_for_i(self):
        result = self.matcher.match("Aer1s 998 10306", "Aeris")
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "direct")

    def test_cjk_single_misread_below_threshold(self):
        self.assertFalse(self.matcher.match("張彡 999 5000", "張三").matches)

    def test_hyphen_and_underscore_unify(self):
        self.assertTrue(is_name_present("Rank 1 Player-One 4500", "Player_One"))

    def test_cjk_name_with_fullwidth_separator(self):
        self.assertTrue(is_name_present("【勇者－Ｏｎｅ】 4500", "勇者_One"))

    def test_latin_fuzzy_window(self):
        result = self.matcher.match("Shadcwhunter 3500", "Shadowhunter")
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "fuzzy_window")

    def test_latin_fuzzy_word(self):
        result = self.matcher.match("Kaxren-4200", "Karen")
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "fuzzy_word")

    def test_cjk_fuzzy_window_for_long_names(self):
        result = self.matcher.match("東京特許許司局 9000", "東京特許許可局")
        self.assertTrue(result.matches)
        self.assertEqual(result.strategy, "fuzzy_window")

    def test_cjk_transcript_uses_cjk_rules(self):
        # Latin folding would turn "l" into "i"; CJK names keep Latin letters as-is
        self.assertFalse(is_name_present("張三lin", "張三iin"))

    def test_unrelated_name(self):
        result = self.matcher.match("Aeris 998 10306", "Mordecai")
        self.assertFalse(result.matches)
        self.assertIsNone(result.strategy)

    def test_result_truthiness(self):
        self.assertTrue(self.matcher.match("Aeris", "Aeris"))
        self.assertFalse(self.matcher.match("Aeris", "Zed"))


class TestNameMatcherEdgeCases(unittest.TestCase):
    def test_empty_transcript(self):
        self.assertFalse(is_name_present("", "Aeris"))
        self.assertFalse(is_name_present("", "張三"))

    def test_empty_name(self):
        self.assertFalse(is_name_present("Aeris 998 10306", ""))
        self.assertFalse(is_name_present("", ""))

    def test_name_that_normalizes_to_nothing(self):
        self.assertFalse(is_name_present("!!! 998", "!!!"))

    def test_name_longer_than_transcript(self):
        self.assertFalse(is_name_present("Ae", "Aeris the Ancient"))

    def test_none_inputs_do_not_raise(self):
        self.assertFalse(is_name_present(None, "Aeris"))
        self.assertFalse(is_name_present("Aeris", None))

    def test_self_match_in_both_scripts(self):
        names = ["Aeris", "Player_One", "x", "張三", "さくら", "김철수", "Ｐｌａｙｅｒ１", "José"]
        for name in names:
            with self.subTest(name=name):
                self.assertTrue(is_name_present(name, name))

    def test_custom_thresholds_tighten_matching(self):
        strict = MatchThresholds(latin_window=1.0, latin_word=1.0)
        self.assertTrue(is_name_present("Shadcwhunter", "Shadowhunter"))
        self.assertFalse(is_name_present("Shadcwhunter", "Shadowhunter", strict))

    def test_custom_thresholds_loosen_cjk(self):
        loose = MatchThresholds(cjk_window=0.5)
        self.assertTrue(is_name_present("張彡 999 5000", "張三", loose))


if __name__ == "__main__":
    unittest.main()
