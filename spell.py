# spell.py
from __future__ import annotations
import enum
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Set, Tuple

from rapidfuzz.distance import OSA

from lm import FrequencyModel, words

logger = logging.getLogger(__name__)

# Peter Norvig style edit distance candidate generation
letters = 'abcdefghijklmnopqrstuvwxyz'


def _splits(word: str) -> List[Tuple[str, str]]:
    return [(word[:i], word[i:]) for i in range(len(word) + 1)]


def deletes(word: str) -> Set[str]:
    return {L + R[1:] for L, R in _splits(word) if R}


def transposes(word: str) -> Set[str]:
    # len(R) > 1 keeps this empty for words shorter than two characters
    return {L + R[1] + R[0] + R[2:] for L, R in _splits(word) if len(R) > 1}


def replaces(word: str) -> Set[str]:
    return {L + c + R[1:] for L, R in _splits(word) if R for c in letters}


def inserts(word: str) -> Set[str]:
    return {L + c + R for L, R in _splits(word) for c in letters}


def edits1(word: str) -> Set[str]:
    """All strings one delete, transpose, replace or insert away from word."""
    return deletes(word) | transposes(word) | replaces(word) | inserts(word)


def edits2(word: str) -> Set[str]:
    """
    Second-order edits: edits1 of every member of edits1(word), collapsed
    into a single set. The first pass itself is not added to the result.
    """
    return {e2 for e1 in edits1(word) for e2 in edits1(e1)}


class EditDistanceLevel(enum.Enum):
    EXACT = "exact"
    ONE = "one"
    TWO = "two"
    NONE = "none"


def known(variants: Iterable[str], known_words: Set[str]) -> Set[str]:
    return {w for w in variants if w in known_words}


def candidates(word: str, known_words: Set[str]) -> Tuple[Set[str], EditDistanceLevel]:
    """
    Known candidates for word at the smallest edit distance that has any:
    the word itself, then distance 1, then distance 2. Falls back to the
    word unchanged. Later stages are only computed when earlier ones are empty.
    """
    if word in known_words:
        c, level = {word}, EditDistanceLevel.EXACT
    else:
        c = known(edits1(word), known_words)
        level = EditDistanceLevel.ONE
        if not c:
            c = known(edits2(word), known_words)
            level = EditDistanceLevel.TWO
        if not c:
            c, level = {word}, EditDistanceLevel.NONE
    logger.debug("%r: %s match, %d candidate(s)", word, level.value, len(c))
    return c, level


def pick_best(cands: Iterable[str], freq: FrequencyModel) -> str:
    """
    Highest-probability candidate. Candidates are visited in sorted order and
    only a strictly greater probability replaces the current best, so ties go
    to the lexically smallest word and all-zero sets return their first word.
    """
    ordered = sorted(cands)
    if not ordered:
        raise ValueError("pick_best() arg is an empty candidate set")
    best, best_p = ordered[0], freq.probability(ordered[0])
    for cand in ordered[1:]:
        p = freq.probability(cand)
        if p > best_p:
            best, best_p = cand, p
    return best


@dataclass(frozen=True)
class Correction:
    word: str
    correction: str
    level: EditDistanceLevel
    candidates: Tuple[str, ...]
    probability: float
    distance: int

    @property
    def changed(self) -> bool:
        return self.word != self.correction


class SpellCorrector:
    def __init__(self, tokens: Iterable[str], cache_size: Optional[int] = 4096) -> None:
        """
        tokens     : the corpus as a token sequence. Its distinct entries are the
                     known words; the full sequence feeds the frequency model, so
                     probabilities are over the total token count.
        cache_size : how many per-word results correct_word keeps (None = unbounded)
        """
        tokens = list(tokens)
        self.known_words: Set[str] = set(tokens)
        self.freq = FrequencyModel(tokens)
        self.correct_word = lru_cache(maxsize=cache_size)(self._correct_word)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "SpellCorrector":
        return cls(words(text), **kwargs)

    def _correct_word(self, word: str) -> Correction:
        cands, level = candidates(word, self.known_words)
        best = pick_best(cands, self.freq)
        return Correction(
            word=word,
            correction=best,
            level=level,
            candidates=tuple(sorted(cands)),
            probability=self.freq.probability(best),
            # adjacent transpositions count as one edit
            distance=OSA.distance(word, best),
        )

    def __call__(self, word: str) -> str:
        return self.correct_word(word).correction

    def correct(self, sentence: str) -> str:
        """Correct a sentence word by word, keeping punctuation, spacing and capitals."""
        toks = re.findall(r"(\s*)(\w+|[^\w\s])", sentence, re.UNICODE)
        corrected: List[Tuple[str, str]] = []

        for space, tok in toks:
            if not tok.isalpha() or tok in self.known_words:
                corrected.append((space, tok))
                continue
            best = self(tok.lower())
            # Preserve original case
            corrected.append((space, best.capitalize() if tok[0].isupper() else best))

        # Reconstruct the sentence, spacing only where the input had whitespace
        out = ""
        for space, t in corrected:
            if space and out:
                out += " " + t
            else:
                out += t
        return out
