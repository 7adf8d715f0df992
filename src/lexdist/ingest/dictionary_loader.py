"""Load dictionary files into vocabularies."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from lexdist.config.schema import SourceDef
from lexdist.normalise.unicode_cleanup import clean_headword
from lexdist.vocab.models import Vocabulary, Word

logger = logging.getLogger(__name__)

_ENTRY_COUNT_RE = re.compile(r"^\d+$")
_STARTS_WITH_DIGIT_RE = re.compile(r"^\d")
_TWO_LETTERS_RE = re.compile(r"[^\W\d_]{2,}")

# (family keyword, [(filename marker, code), ...], fallback code)
_REGIONAL_VARIANTS: list[tuple[str, list[tuple[str, str]], str]] = [
    ("english", [("American", "EN_US"), ("British", "EN_GB"), ("Australian", "EN_AU"),
                 ("Canadian", "EN_CA"), ("South African", "EN_ZA")], "EN"),
    ("german", [("de_AT", "DE_AT"), ("de_CH", "DE_CH"), ("de_DE", "DE_DE"),
                ("OLDSPELL", "DE_OLD")], "DE"),
    ("portuguese", [("Brazilian", "PT_BR"), ("Before OA", "PT_EU_OLD"),
                    ("European", "PT_EU")], "PT"),
    ("armenian", [("Eastern", "HY_EA"), ("Western", "HY_WE")], "HY"),
    ("norwegian", [("Bokmal", "NO_BO"), ("Nynorsk", "NO_NY")], "NO"),
    ("serbian", [("Cyrillic", "SR_CY"), ("Latin", "SR_LA")], "SR"),
    ("romanian", [("Ante1993", "RO_OLD"), ("Modern", "RO_MOD")], "RO"),
]


@dataclass(frozen=True)
class LanguageInfo:
    code: str
    name: str


@dataclass
class CorpusSummary:
    languages: list[str] = field(default_factory=list)
    words_total: int = 0


def detect_language_from_filename(path: Path | str) -> LanguageInfo:
    """Guess a language code from a dictionary filename.

    Recognises regional variants of a few languages ("English (British).dic"
    gives ``EN_GB``); anything else takes the first three ASCII letters of the
    stem, upper-cased. The stem becomes the display name.
    """
    stem = Path(path).stem
    lowered = stem.lower()
    for keyword, variants, fallback in _REGIONAL_VARIANTS:
        if keyword not in lowered:
            continue
        for marker, code in variants:
            if marker in stem:
                return LanguageInfo(code, stem)
        return LanguageInfo(fallback, stem)

    letters = re.sub(r"[^a-zA-Z]", "", stem)
    return LanguageInfo(letters[:3].upper(), stem)


def _split_text_line(line: str) -> tuple[str, str]:
    for sep in ("\t", ";", ","):
        if sep in line:
            word, gloss = line.split(sep, 1)
            return word.strip(), gloss.strip()
    return line.strip(), ""


def iter_text_entries(lines: Iterable[str]) -> Iterator[Word]:
    """Entries of a word list: one word per line, optional gloss after tab, ';' or ','."""
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        raw, gloss = _split_text_line(line)
        if not raw:
            continue
        yield Word(clean_headword(raw), gloss)


def iter_dic_entries(lines: Iterable[str]) -> Iterator[Word]:
    """Entries of a Hunspell-style ``.dic`` file.

    The header runs up to the numeric entry-count line. Single-letter section
    markers and lines starting with a digit are skipped; text after ``/`` is
    kept as the word's gloss.
    """
    in_header = True
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if in_header:
            if _ENTRY_COUNT_RE.match(line):
                in_header = False
            continue
        if len(line) == 1 and line.isalpha():
            continue
        if len(line) <= 1 or _STARTS_WITH_DIGIT_RE.match(line):
            continue
        raw, _, metadata = line.partition("/")
        raw = raw.strip()
        if not _TWO_LETTERS_RE.search(raw):
            continue
        word = clean_headword(raw)
        if len(word) > 1:
            yield Word(word, metadata.strip())


def load_dictionary(path: Path | str, code: str, name: str | None = None) -> Vocabulary:
    """Read one dictionary file into a :class:`Vocabulary`."""
    path = Path(path)
    vocab = Vocabulary(code, name or code)
    with path.open("r", encoding="utf-8") as fh:
        if path.suffix.lower() == ".dic":
            vocab.add_words(iter_dic_entries(fh))
        else:
            vocab.add_words(iter_text_entries(fh))
    logger.info("Loaded %d words for %s from %s", len(vocab), code, path.name)
    return vocab


def load_dictionaries(sources: Iterable[SourceDef | Path | str]) -> dict[str, Vocabulary]:
    """Load every source, keyed by language code in source order.

    Raises ValueError when two sources resolve to the same code.
    """
    languages: dict[str, Vocabulary] = {}
    for source in sources:
        if not isinstance(source, SourceDef):
            source = SourceDef(path=Path(source))
        detected = detect_language_from_filename(source.path)
        code = source.code or detected.code
        name = source.name or detected.name
        if code in languages:
            raise ValueError(f"Duplicate language code {code!r} for {source.path}")
        languages[code] = load_dictionary(source.path, code, name)
    return languages


def summarize(languages: dict[str, Vocabulary]) -> CorpusSummary:
    return CorpusSummary(
        languages=list(languages),
        words_total=sum(len(v) for v in languages.values()),
    )
