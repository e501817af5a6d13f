#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import hashlib
import logging
import random
from typing import Dict, Iterable, List, Optional

from gridfill.fill.index import WordIndex

_log = logging.getLogger(__name__)


def content_hash(chars: Iterable[str]) -> int:
    """Return a 64-bit hash of the exact character sequence, blanks included."""
    text = chars if isinstance(chars, str) else ''.join(chars)
    h = hashlib.blake2b(text.encode('utf-8'), digest_size=8)
    return int.from_bytes(h.digest(), 'big')


class QueryCache(object):
    """
    Memo of word index queries for the duration of one fill.

    Ranked word lists are pinned on first computation, so a pattern that
    recurs later in the search yields the same order among equal-weight
    words.
    """

    def __init__(self, index: WordIndex, rng: Optional[random.Random]=None):
        self.index = index
        self.rng = rng
        self.words_cache: Dict[int, List[str]] = {}
        self.is_valid_cache: Dict[int, bool] = {}
        self.hits = 0
        self.misses = 0

    def words(self, pattern: Iterable[str]) -> List[str]:
        key = content_hash(pattern)
        try:
            result = self.words_cache[key]
            self.hits += 1
        except KeyError:
            self.misses += 1
            result = self.index.matching_words(pattern, self.rng)
            self.words_cache[key] = result
        return result

    def is_valid(self, pattern: Iterable[str]) -> bool:
        key = content_hash(pattern)
        try:
            result = self.is_valid_cache[key]
            self.hits += 1
        except KeyError:
            self.misses += 1
            result = self.index.is_valid(pattern)
            self.is_valid_cache[key] = result
        return result

    def __len__(self):
        return len(self.words_cache) + len(self.is_valid_cache)

    def __str__(self):
        return "QueryCache<words={},is_valid={},hits={},misses={}>".format(len(self.words_cache), len(self.is_valid_cache), self.hits, self.misses)
