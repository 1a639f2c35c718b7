import random
import unittest

from wordpair_coverage import (
    Alphabet,
    AlphabetCodec,
    ConfigurationError,
    CoverageSearchEngine,
    DominanceFilter,
    PairScore,
    PairScorer,
    ResultReporter,
    SearchStatus,
    WordIndexBuilder,
    load_engine,
)
from wordpair_coverage.corpus import split_tokens
from wordpair_coverage.utils import chunk_ranges, is_strict_subset, popcount


class TestAlphabetCodec(unittest.TestCase):
    def setUp(self):
        self.codec = AlphabetCodec(Alphabet.from_letters())

    def test_strip_keeps_alphabet_letters_in_order(self):
        self.assertEqual(self.codec.strip("Hei!123"), "hei")
        self.assertEqual(self.codec.strip("tyttö-ä"), "tyttöä")
        self.assertEqual(self.codec.strip("1234"), "")

    def test_encode_is_presence_only(self):
        self.assertEqual(self.codec.encode(""), 0)
        self.assertEqual(self.codec.encode("a"), 1)
        self.assertEqual(self.codec.encode("aaa"), 1)
        self.assertEqual(self.codec.encode("dab"), 0b1011)
        self.assertEqual(self.codec.encode("dab"), self.codec.encode("bad"))

    def test_encode_scandinavian_letters(self):
        self.assertEqual(self.codec.encode("åäö"), (1 << 26) | (1 << 27) | (1 << 28))
        self.assertEqual(self.codec.full_mask, (1 << 29) - 1)

    def test_decode_lists_letters_in_alphabet_order(self):
        self.assertEqual(self.codec.decode(self.codec.encode("lola")), "alo")
        self.assertEqual(self.codec.decode(0), "")

    def test_alphabet_wider_than_mask_is_rejected(self):
        wide = Alphabet(tuple(chr(0x4E00 + i) for i in range(65)))
        with self.assertRaises(ConfigurationError):
            AlphabetCodec(wide)
        with self.assertRaises(ConfigurationError):
            AlphabetCodec(Alphabet.from_letters("abc"), mask_width=2)

    def test_sixty_four_letters_fit(self):
        alphabet = Alphabet(tuple(chr(0x4E00 + i) for i in range(64)))
        codec = AlphabetCodec(alphabet)
        self.assertEqual(popcount(codec.encode("".join(alphabet.letters))), 64)

    def test_bad_alphabets(self):
        with self.assertRaises(ConfigurationError):
            Alphabet.from_letters("aba")
        with self.assertRaises(ConfigurationError):
            Alphabet(("ab", "c"))

    def test_uppercase_letters_are_normalized(self):
        alphabet = Alphabet(("A", "B", "C", "D"))
        self.assertEqual(alphabet.letters, ("a", "b", "c", "d"))
        with self.assertRaises(ConfigurationError):
            Alphabet(("A", "a"))

        result = CoverageSearchEngine(alphabet).search(["ab", "cd"])
        self.assertEqual(result.summary_line(), "Score: 4, Words: ab cd")


class TestWordIndexBuilder(unittest.TestCase):
    def setUp(self):
        self.codec = AlphabetCodec(Alphabet.from_letters())

    def test_groups_words_by_mask(self):
        index = WordIndexBuilder(self.codec).build(["Ab", "ab", "b1a", "lola", "all"])

        self.assertEqual(index.stats["raw_word_count"], 5)
        self.assertEqual(index.stats["unique_word_count"], 4)
        self.assertEqual(index.stats["unique_mask_count"], 2)

        ab_mask = self.codec.encode("ab")
        al_mask = self.codec.encode("al")
        self.assertEqual(index.distinct_masks, (ab_mask, al_mask))
        self.assertEqual(index.words_for(ab_mask), ("ab", "ba"))
        self.assertEqual(index.words_for(al_mask), ("lola", "all"))
        self.assertEqual(index.words_for(12345), ())

    def test_collapsed_words_are_not_duplicated(self):
        index = WordIndexBuilder(self.codec).build(["ab1", "ab", "a-b"])
        self.assertEqual(index.stats["unique_word_count"], 3)
        self.assertEqual(index.all_words(), ["ab"])

    def test_completeness(self):
        tokens = split_tokens("Kissa istui, kissa nukkui. Koira: istui; koira haukkui\nkoira")
        index = WordIndexBuilder(self.codec).build(tokens)

        expected = {self.codec.strip(token) for token in tokens}
        words = index.all_words()
        self.assertEqual(set(words), expected)
        self.assertEqual(len(words), len(expected))
        for mask, group in index.mask_to_words.items():
            for word in group:
                self.assertEqual(self.codec.encode(word), mask)

    def test_rebuilding_starts_fresh(self):
        builder = WordIndexBuilder(self.codec)
        builder.build(["abc"])
        index = builder.build(["xyz"])
        self.assertEqual(index.all_words(), ["xyz"])


class TestDominanceFilter(unittest.TestCase):
    def setUp(self):
        self.filter = DominanceFilter()

    def test_chain_keeps_only_the_top(self):
        self.assertEqual(self.filter.filter([0b001, 0b011, 0b111]), [0b111])
        self.assertEqual(self.filter.filter([0b111, 0b011, 0b001]), [0b111])

    def test_one_mask_can_remove_several(self):
        self.assertEqual(self.filter.filter([0b0011, 0b1100, 0b1111]), [0b1111])

    def test_incomparable_masks_survive(self):
        self.assertEqual(self.filter.filter([0b0011, 0b1100]), [0b0011, 0b1100])

    def test_result_is_order_independent(self):
        masks = [1, 3, 7, 8, 12]
        self.assertEqual(set(self.filter.filter(masks)), {7, 12})
        self.assertEqual(set(self.filter.filter(list(reversed(masks)))), {7, 12})

    def test_empty_and_zero_masks(self):
        self.assertEqual(self.filter.filter([]), [])
        self.assertEqual(self.filter.filter([0]), [0])
        self.assertEqual(self.filter.filter([0, 5]), [5])

    def test_idempotent_and_dominating(self):
        rng = random.Random(7)
        for _ in range(20):
            masks = list(dict.fromkeys(rng.randrange(1, 1 << 10) for _ in range(60)))
            dominant = self.filter.filter(masks)

            self.assertEqual(self.filter.filter(dominant), dominant)
            shuffled = masks[:]
            rng.shuffle(shuffled)
            self.assertEqual(set(self.filter.filter(shuffled)), set(dominant))

            for mask in masks:
                if mask in dominant:
                    continue
                self.assertTrue(any(is_strict_subset(mask, d) for d in dominant))
            for first in dominant:
                for second in dominant:
                    self.assertFalse(is_strict_subset(first, second))


class TestPairScorer(unittest.TestCase):
    def setUp(self):
        self.scorer = PairScorer()

    def test_best_pair(self):
        result = self.scorer.score([0b0011, 0b1100, 0b0110])
        self.assertEqual(result.best_score, 4)
        self.assertEqual(result.winning_pairs, [(0b0011, 0b1100)])
        self.assertEqual(result.status, SearchStatus.FOUND)

    def test_ties_are_all_kept_in_scan_order(self):
        result = self.scorer.score([0b011, 0b101, 0b110])
        self.assertEqual(result.best_score, 3)
        self.assertEqual(result.winning_pairs, [(0b011, 0b101), (0b011, 0b110), (0b101, 0b110)])

    def test_fewer_than_two_masks(self):
        for masks in ([], [0b111]):
            result = self.scorer.score(masks)
            self.assertEqual(result.status, SearchStatus.NO_PAIRS_AVAILABLE)
            self.assertEqual(result.best_score, 0)
            self.assertEqual(result.winning_pairs, [])

    def test_maximality(self):
        rng = random.Random(11)
        masks = list(dict.fromkeys(rng.randrange(1, 1 << 12) for _ in range(40)))
        result = self.scorer.score(masks)
        scores = [popcount(a | b) for i, a in enumerate(masks) for b in masks[i + 1:]]
        self.assertEqual(result.best_score, max(scores))
        self.assertEqual(len(result.winning_pairs), scores.count(max(scores)))
        for first, second in result.winning_pairs:
            self.assertEqual(popcount(first | second), result.best_score)

    def test_score_rows_covers_a_slice(self):
        masks = [0b0001, 0b0010, 0b1100, 0b0100]
        head = self.scorer.score_rows(masks, 0, 2)
        tail = self.scorer.score_rows(masks, 2, 3)
        self.assertEqual(head.best_score, 3)
        self.assertEqual(head.winning_pairs, [(0b0001, 0b1100), (0b0010, 0b1100)])
        self.assertEqual(tail.best_score, 2)


class TestPairScoreMerge(unittest.TestCase):
    def test_higher_score_wins(self):
        low = PairScore(3, [(1, 2)])
        high = PairScore(5, [(3, 4)])
        self.assertEqual(low.merge(high), high)
        self.assertEqual(high.merge(low), high)

    def test_ties_concatenate(self):
        left = PairScore(4, [(1, 2)])
        right = PairScore(4, [(3, 4)])
        self.assertEqual(left.merge(right).winning_pairs, [(1, 2), (3, 4)])

    def test_empty_is_identity(self):
        score = PairScore(2, [(1, 2)])
        self.assertEqual(PairScore.empty().merge(score), score)
        self.assertEqual(score.merge(PairScore.empty()), score)


class TestResultReporter(unittest.TestCase):
    def test_cartesian_product_in_order(self):
        mask_to_words = {0b0011: ("ab", "ba"), 0b1100: ("cd",), 0b0110: ("bc",)}
        result = ResultReporter().expand(PairScore(4, [(0b0011, 0b1100)]), mask_to_words)
        self.assertEqual(result.word_pairs, [("ab", "cd"), ("ba", "cd")])
        self.assertEqual(result.format_pairs(), "ab cd, ba cd")
        self.assertEqual(result.summary_line(), "Score: 4, Words: ab cd, ba cd")

    def test_no_pairs(self):
        result = ResultReporter().expand(PairScore.empty(), {})
        self.assertFalse(result.found)
        self.assertEqual(result.word_pairs, [])
        self.assertEqual(result.to_dict()["status"], "no_pairs_available")


class TestExamples(unittest.TestCase):
    def test_single_superset_means_no_pairs(self):
        result = load_engine("abc").search(["ab", "bc", "ac", "abc"])
        self.assertEqual(result.stats["dominant_mask_count"], 1)
        self.assertEqual(result.status, SearchStatus.NO_PAIRS_AVAILABLE)

    def test_two_disjoint_words(self):
        result = load_engine("abcd").search(["ab", "cd"])
        self.assertEqual(result.score, 4)
        self.assertEqual(result.mask_pairs, [(0b0011, 0b1100)])
        self.assertEqual(result.format_pairs(), "ab cd")

    def test_subset_chain_means_no_pairs(self):
        result = load_engine("abc").search(["a", "ab", "abc"])
        self.assertEqual(result.stats["dominant_mask_count"], 1)
        self.assertFalse(result.found)

    def test_anagrams_share_one_mask(self):
        result = load_engine().search(["dab", "bad"])
        self.assertEqual(result.stats["unique_word_count"], 2)
        self.assertEqual(result.stats["unique_mask_count"], 1)
        self.assertFalse(result.found)


class TestUtils(unittest.TestCase):
    def test_chunk_ranges(self):
        self.assertEqual(chunk_ranges(5, 2), [(0, 2), (2, 4), (4, 5)])
        self.assertEqual(chunk_ranges(0, 3), [])
        self.assertEqual(chunk_ranges(3, 0), [(0, 1), (1, 2), (2, 3)])

    def test_split_tokens(self):
        self.assertEqual(
            split_tokens("Hei, Maailma.\tEi:  mitään;\r\nloppu"),
            ["hei", "maailma", "ei", "mitään", "loppu"]
        )


if __name__ == "__main__":
    unittest.main()
