#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import hashlib
import logging
import os
import os.path
import pickle
import random
from typing import Dict, Iterable, List, Optional, Tuple, Union

import gridfill.lexicon
from gridfill.grid import BLANK, BLOCK

_log = logging.getLogger(__name__)

WeightedWord = Tuple[str, int]
_DEFAULT_WORDLIST_PATHNAME = '/usr/share/dict/words'


class TrieNode(object):

    __slots__ = ('contents', 'children', 'terminal', 'weight')

    def __init__(self, contents: Optional[str]=None):
        self.contents = contents
        self.children: Dict[str, 'TrieNode'] = {}
        self.terminal = False
        self.weight: Optional[int] = None

    def __getstate__(self):
        return self.contents, self.children, self.terminal, self.weight

    def __setstate__(self, state):
        self.contents, self.children, self.terminal, self.weight = state

    def collect(self, pattern: str, depth: int, partial: List[str], result: List[WeightedWord]):
        if depth == len(pattern):
            if self.terminal:
                result.append((0 if self.weight is None else self.weight, ''.join(partial)))
            return
        ch = pattern[depth]
        if ch == BLANK:
            children = self.children.values()
        else:
            child = self.children.get(ch)
            children = () if child is None else (child,)
        for child in children:
            partial.append(child.contents)
            child.collect(pattern, depth + 1, partial, result)
            partial.pop()

    def accepts(self, pattern: str, depth: int) -> bool:
        if depth == len(pattern):
            return self.terminal
        ch = pattern[depth]
        if ch == BLANK:
            for child in self.children.values():
                if child.accepts(pattern, depth + 1):
                    return True
            return False
        child = self.children.get(ch)
        return child is not None and child.accepts(pattern, depth + 1)


def _as_pattern(pattern: Iterable[str]) -> str:
    if isinstance(pattern, str):
        return pattern
    return ''.join(pattern)


class WordIndex(object):
    """
    Prefix tree over a weighted dictionary.

    The index is built once and is read-only afterwards; it may be shared
    by any number of concurrent fills. Randomness used to order words of
    equal weight belongs to the caller.
    """

    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    @staticmethod
    def build(items: Iterable[Union[str, WeightedWord]]) -> 'WordIndex':
        """
        Build an index from words, each either a string or a (word, weight) pair.

        Bare strings get weight zero. A word that appears more than once keeps
        the weight of its last appearance.
        """
        index = WordIndex()
        for item in items:
            if isinstance(item, str):
                index.insert(item)
            else:
                word, weight = item
                index.insert(word, weight)
        _log.debug("built %s", index)
        return index

    def insert(self, word: str, weight: int=0):
        if not word or BLANK in word or BLOCK in word:
            raise ValueError("not a fillable word: {}".format(repr(word)))
        node = self.root
        for ch in word:
            child = node.children.get(ch)
            if child is None:
                child = TrieNode(ch)
                node.children[ch] = child
            node = child
        if not node.terminal:
            self._size += 1
        node.terminal = True
        node.weight = weight

    def _find(self, word: str) -> Optional[TrieNode]:
        node = self.root
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return None
        return node if node.terminal else None

    def matching_words(self, pattern: Iterable[str], rng: Optional[random.Random]=None) -> List[str]:
        """
        Return the words that match a pattern, highest weight first.

        Blank characters in the pattern accept any letter. Words of equal
        weight are returned in random order.
        @param pattern: sequence of characters, possibly including blanks
        @param rng: source of the order among words of equal weight; default is the random module
        @return: list of matching words
        """
        pattern = _as_pattern(pattern)
        result: List[WeightedWord] = []
        self.root.collect(pattern, 0, [], result)
        (rng or random).shuffle(result)
        result.sort(key=lambda pair: -pair[0])
        return [word for _, word in result]

    def is_valid(self, pattern: Iterable[str]) -> bool:
        """Check whether at least one word matches the pattern."""
        return self.root.accepts(_as_pattern(pattern), 0)

    def has_word(self, word: str) -> bool:
        return self._find(word) is not None

    def weight(self, word: str) -> Optional[int]:
        node = self._find(word)
        return None if node is None else node.weight

    def size(self) -> int:
        return self._size

    def __len__(self):
        return self._size

    def __contains__(self, word):
        return isinstance(word, str) and self.has_word(word)

    def __str__(self):
        return "WordIndex<num_words={}>".format(self._size)


class IndexLoader(object):
    """
    Loader of word indexes from word list files.

    Building the trie for a large word list takes a while, so if a cache
    directory is defined the built index is pickled there. The pickle is
    named after a digest of the word list bytes and the minimum word length,
    so editing the word list or changing the length filter invalidates it.
    """

    def __init__(self, cache_dir: Optional[str]=None, min_length: int=gridfill.lexicon.DEFAULT_MIN_LENGTH):
        self.cache_dir = cache_dir
        self.min_length = min_length

    def cache_pathname(self, wordlist_pathname: str) -> str:
        assert self.cache_dir, "cache directory must be defined for this loader"
        h = hashlib.sha256()
        with open(wordlist_pathname, 'rb') as ifile:
            h.update(ifile.read())
        h.update(str(self.min_length).encode('ascii'))
        return os.path.join(self.cache_dir, "index-{}.pickle".format(h.hexdigest()))

    def load(self, wordlist_pathname: str=_DEFAULT_WORDLIST_PATHNAME) -> WordIndex:
        """
        Load the index for a word list, from the cache if possible.

        @raise OSError: if the word list cannot be read
        """
        index_pathname = None
        if self.cache_dir is not None:
            index_pathname = self.cache_pathname(wordlist_pathname)
            try:
                with open(index_pathname, 'rb') as ifile:
                    index = pickle.load(ifile)
                _log.debug("cached index loaded from %s", index_pathname)
                return index
            except FileNotFoundError:
                pass
        entries = gridfill.lexicon.load_wordlist(wordlist_pathname, min_length=self.min_length)
        index = WordIndex.build(entries)
        if index_pathname is not None:
            os.makedirs(self.cache_dir, exist_ok=True)
            with open(index_pathname, 'wb') as ofile:
                pickle.dump(index, ofile)
            _log.debug("index written to %s", index_pathname)
        return index
