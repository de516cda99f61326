"""Phonetic index builder for JMdict-simplified dictionaries.

Folds the source word list into a hiragana-keyed index of katakana
readings and kanji spellings, and writes it as compact JSON with an
optional gzip copy.
"""

import gzip
import json
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Set, Union

from jmdict_kana.converter.kana import hiragana_to_katakana
from jmdict_kana.exceptions import ConversionError

logger = logging.getLogger("jmdict_kana.indexer")


GZIP_SUFFIX = ".gz"


@dataclass
class PhoneticIndexEntry:
    """Katakana forms and kanji spellings sharing one hiragana reading."""
    katakana: Set[str] = field(default_factory=set)
    kanji: Set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        """Convert to the output form with sorted arrays."""
        return {
            "katakana": sorted(self.katakana),
            "kanji": sorted(self.kanji),
        }


def _texts(elements) -> List[str]:
    return [element["text"] for element in elements or []]


def build_phonetic_index(words: Iterable[dict]) -> Dict[str, PhoneticIndexEntry]:
    """
    Build the hiragana-keyed index from JMdict-simplified word entries.

    Every kana reading of a word becomes a bucket key; the bucket collects
    the reading's katakana form and all kanji spellings of the word.

    Args:
        words: Word entries with optional "kanji" and "kana" lists of {"text": ...}

    Returns:
        Mapping of hiragana reading to PhoneticIndexEntry
    """
    index: Dict[str, PhoneticIndexEntry] = {}
    for entry in words:
        kanji_list = _texts(entry.get("kanji"))
        for hiragana in _texts(entry.get("kana")):
            bucket = index.get(hiragana)
            if bucket is None:
                bucket = index[hiragana] = PhoneticIndexEntry()
            bucket.katakana.add(hiragana_to_katakana(hiragana))
            bucket.kanji.update(kanji_list)
    return index


def simplify(dictionary: dict) -> dict:
    """
    Convert a parsed JMdict-simplified document into the simplified dictionary.

    Raises:
        ConversionError: If required fields are missing or entries are malformed
    """
    if not isinstance(dictionary, dict):
        raise ConversionError("Source dictionary is not a JSON object")
    missing = [key for key in ("version", "dictDate", "words") if key not in dictionary]
    if missing:
        raise ConversionError(f"Source dictionary is missing fields: {', '.join(missing)}")
    words = dictionary["words"]
    if not isinstance(words, list):
        raise ConversionError("Source dictionary 'words' is not a list")

    try:
        index = build_phonetic_index(words)
    except (KeyError, TypeError, AttributeError) as e:
        raise ConversionError("Malformed dictionary entry", e)

    return {
        "version": dictionary["version"],
        "dictDate": dictionary["dictDate"],
        "words": {hiragana: bucket.to_dict() for hiragana, bucket in index.items()},
    }


def gzip_file(source: Path, target: Path) -> None:
    """Stream-compress a file with gzip."""
    with open(source, "rb") as src, gzip.open(target, "wb") as dst:
        shutil.copyfileobj(src, dst)


class DictionaryIndexer:
    """Converts a source dictionary file into the phonetic index files."""

    def load(self, source_path: Path) -> dict:
        """Read and parse the source dictionary JSON."""
        if not source_path.is_file():
            raise ConversionError(f"Input file '{source_path}' does not exist")
        try:
            with open(source_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ConversionError(f"Error reading the input file '{source_path}'", e)
        except json.JSONDecodeError as e:
            raise ConversionError("Error parsing the source dictionary JSON", e)

    def index(
        self,
        source_path: Union[str, Path],
        output_path: Union[str, Path],
        gzip_output: bool = True
    ) -> Path:
        """
        Build the phonetic index and write it to disk.

        Args:
            source_path: JMdict-simplified JSON source file
            output_path: Target path for the compact JSON
            gzip_output: Also write a gzip copy at output_path + ".gz"

        Returns:
            Path of the plain JSON output

        Raises:
            ConversionError: If the source is invalid or an output cannot be written
        """
        source_path = Path(source_path)
        output_path = Path(output_path)

        logger.info(f"Converting source dictionary '{source_path.name}'")
        simplified = simplify(self.load(source_path))
        logger.info(f"Indexed {len(simplified['words'])} hiragana readings")

        json_string = json.dumps(simplified, ensure_ascii=False, separators=(",", ":"))
        try:
            output_path.write_text(json_string, encoding="utf-8")
        except OSError as e:
            raise ConversionError(f"Error writing '{output_path}'", e)
        logger.info(f"The simple dictionary JSON file was saved to: '{output_path}'")

        if gzip_output:
            gzip_path = output_path.with_name(output_path.name + GZIP_SUFFIX)
            try:
                gzip_file(output_path, gzip_path)
            except OSError as e:
                raise ConversionError(f"Error compressing '{output_path}'", e)
            logger.info(f"The gzip compressed copy was saved to: '{gzip_path}'")

        return output_path
