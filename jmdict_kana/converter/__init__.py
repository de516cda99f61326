"""Converter module for the phonetic index.

This module turns the source dictionary into release files:
- DictionaryIndexer: Reads the source JSON and writes the index files
- build_phonetic_index: Hiragana-keyed katakana/kanji buckets
- hiragana_to_katakana: Kana script conversion
"""

from .kana import hiragana_to_katakana
from .indexer import DictionaryIndexer, PhoneticIndexEntry, build_phonetic_index, simplify

__all__ = [
    "DictionaryIndexer",
    "PhoneticIndexEntry",
    "build_phonetic_index",
    "simplify",
    "hiragana_to_katakana",
]
