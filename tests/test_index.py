#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
import random
import tempfile
from unittest import TestCase
from gridfill.fill.index import WordIndex, TrieNode, IndexLoader
import tests

tests.configure_logging()

_WORDS = [('CAT', 3), ('CAR', 5), ('COT', 1), ('DOG', 2), ('CART', 4), ('DO', 9)]


class TrieNodeTest(TestCase):

    def test_root(self):
        index = WordIndex()
        self.assertIsNone(index.root.contents)
        self.assertFalse(index.root.terminal)
        self.assertDictEqual({}, index.root.children)

    def test_insert_structure(self):
        index = tests.create_index(('AB', 1), ('AC', 2))
        a: TrieNode = index.root.children['A']
        self.assertEqual('A', a.contents)
        self.assertFalse(a.terminal)
        self.assertSetEqual({'B', 'C'}, set(a.children.keys()))
        self.assertTrue(a.children['B'].terminal)
        self.assertEqual(2, a.children['C'].weight)


class WordIndexTest(TestCase):

    def test_insert_overwrites_weight(self):
        index = tests.create_index(('CAT', 1), ('CAT', 7))
        self.assertEqual(7, index.weight('CAT'))
        self.assertEqual(1, index.size())

    def test_insert_rejects_unfillable_words(self):
        for word in ['', 'A B', ' ', 'A*B', 'AB*']:
            with self.subTest(word=word):
                with self.assertRaises(ValueError):
                    WordIndex.build(['CAT', word])

    def test_same_seed_same_order(self):
        index = tests.create_index('ABC', 'ABD', 'ABE', 'ABF', 'ABG', 'ABH')
        first = index.matching_words('AB ', random.Random(7))
        self.assertListEqual(first, index.matching_words('AB ', random.Random(7)))
        self.assertSetEqual(set(first), set(index.matching_words('AB ')))

    def test_build_bare_words(self):
        index = WordIndex.build(['CAT', 'DOG'])
        self.assertEqual(0, index.weight('CAT'))
        self.assertEqual(2, len(index))
        self.assertIn('DOG', index)
        self.assertNotIn('DO', index)
        self.assertNotIn(('D', 'O', 'G'), index)
        self.assertIsNone(index.weight('COW'))

    def test_prefix_is_not_word(self):
        index = tests.create_index('CART')
        self.assertFalse(index.has_word('CAR'))
        self.assertListEqual([], index.matching_words('CAR'))
        self.assertFalse(index.is_valid('CA '))

    def test_matching_words_ranked(self):
        index = tests.create_index(*_WORDS)
        self.assertListEqual(['CAR', 'CAT', 'DOG', 'COT'], index.matching_words('   '))
        self.assertListEqual(['CAR', 'CAT', 'COT'], index.matching_words('C  '))
        self.assertListEqual(['CAT', 'COT'], index.matching_words('  T'))
        self.assertListEqual(['CART'], index.matching_words('    '))
        self.assertListEqual(['DO'], index.matching_words('D '))
        self.assertListEqual(['CAT'], index.matching_words('CAT'))
        self.assertListEqual([], index.matching_words('X  '))

    def test_matching_words_accepts_iterables(self):
        index = tests.create_index(*_WORDS)
        self.assertListEqual(['CAT', 'COT'], index.matching_words(['C', ' ', 'T']))
        self.assertTrue(index.is_valid(iter(['D', 'O', ' '])))

    def test_matching_words_length(self):
        index = tests.create_index(*_WORDS)
        for pattern in ['', ' ', '  ', '   ', '    ', '     ', 'C ', 'CA  ']:
            with self.subTest():
                for word in index.matching_words(pattern):
                    self.assertEqual(len(pattern), len(word))
                    self.assertIn(word, index)

    def test_empty_pattern(self):
        index = tests.create_index(*_WORDS)
        self.assertListEqual([], index.matching_words(''))
        self.assertFalse(index.is_valid(''))

    def test_is_valid_iff_matches(self):
        rng = random.Random(0x5eed)
        alphabet = "ACDGORT "
        index = tests.create_index(*_WORDS)
        for _ in range(300):
            pattern = ''.join(rng.choice(alphabet) for _ in range(rng.randint(0, 5)))
            with self.subTest(pattern=pattern):
                self.assertEqual(len(index.matching_words(pattern)) > 0, index.is_valid(pattern))

    def test_equal_weights_ordered_by_rng(self):
        words = ['ABC', 'ABD', 'ABE', 'ABF', 'ABG', 'ABH', 'ABI', 'ABJ']
        index = tests.create_index(*words)
        orders = set()
        for seed in range(20):
            orders.add(tuple(index.matching_words('AB ', random.Random(seed))))
        self.assertGreater(len(orders), 1)
        for order in orders:
            self.assertSetEqual(set(words), set(order))

    def test_weights_dominate_shuffle(self):
        words = [('AAA', 1), ('BBB', 1), ('CCC', 2), ('DDD', 0), ('EEE', 2)]
        index = tests.create_index(*words)
        for seed in range(10):
            with self.subTest(seed=seed):
                matches = index.matching_words('   ', random.Random(seed))
                self.assertSetEqual({'CCC', 'EEE'}, set(matches[:2]))
                self.assertSetEqual({'AAA', 'BBB'}, set(matches[2:4]))
                self.assertEqual('DDD', matches[4])

    def test_negative_weights(self):
        index = tests.create_index(('ABC', -3), ('ABD', 0))
        self.assertListEqual(['ABD', 'ABC'], index.matching_words('AB '))

    def test___str__(self):
        self.assertEqual("WordIndex<num_words=6>", str(tests.create_index(*_WORDS)))


class IndexLoaderTest(TestCase):

    def _write_wordlist(self, tempdir: str, lines) -> str:
        pathname = os.path.join(tempdir, 'words.txt')
        with open(pathname, 'w') as ofile:
            for line in lines:
                print(line, file=ofile)
        return pathname

    def test_load_fresh(self):
        with tempfile.TemporaryDirectory() as tempdir:
            wordlist = self._write_wordlist(tempdir, ['cat;10', 'dog', 'ox', "mouse's"])
            index = IndexLoader().load(wordlist)
            self.assertEqual(10, index.weight('CAT'))
            self.assertEqual(0, index.weight('DOG'))
            self.assertIn('MOUSE', index)
            self.assertNotIn('OX', index)

    def test_load_cached(self):
        with tempfile.TemporaryDirectory() as tempdir:
            wordlist = self._write_wordlist(tempdir, ['alpha', 'beta;3', 'gamma'])
            cache_dir = os.path.join(tempdir, 'cache')
            loader = IndexLoader(cache_dir)
            index = loader.load(wordlist)
            cached_pathname = loader.cache_pathname(wordlist)
            self.assertTrue(os.path.isfile(cached_pathname))
            self.assertListEqual([os.path.basename(cached_pathname)], os.listdir(cache_dir))
            again = loader.load(wordlist)
            self.assertIsNot(index, again)
            self.assertEqual(index.size(), again.size())
            self.assertEqual(3, again.weight('BETA'))
            self.assertListEqual(['BETA'], again.matching_words('B   '))

    def test_cache_name_depends_on_content_and_min_length(self):
        with tempfile.TemporaryDirectory() as tempdir:
            wordlist = self._write_wordlist(tempdir, ['alpha'])
            a = IndexLoader(tempdir, min_length=3).cache_pathname(wordlist)
            b = IndexLoader(tempdir, min_length=4).cache_pathname(wordlist)
            self.assertNotEqual(a, b)
            self._write_wordlist(tempdir, ['alpha', 'beta'])
            c = IndexLoader(tempdir, min_length=3).cache_pathname(wordlist)
            self.assertNotEqual(a, c)

    def test_missing_wordlist(self):
        with tempfile.TemporaryDirectory() as tempdir:
            missing = os.path.join(tempdir, 'nonexistent.txt')
            for cache_dir in [None, tempdir]:
                with self.subTest(cache_dir=cache_dir):
                    with self.assertRaises(OSError):
                        IndexLoader(cache_dir).load(missing)
