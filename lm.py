# lm.py
from __future__ import annotations
from collections import Counter
from collections.abc import Iterable
import logging
import re

logger = logging.getLogger(__name__)

WORD_RE = re.compile(r"\w+")


def words(text: str) -> list[str]:
    """Maximal runs of word characters, in source order, duplicates kept."""
    return WORD_RE.findall(text)


class FrequencyModel:
    def __init__(self, tokens: Iterable[str]) -> None:
        """
        tokens: the collection to count. Each entry is lowercased before counting;
                num_words is the size of the collection, so a token sequence gives
                the total token count and a set gives the number of unique words.
        """
        tokens = list(tokens)
        self.counts: Counter[str] = Counter(w.lower() for w in tokens)
        self.num_words = len(tokens)
        logger.debug("Frequency model: %d distinct words over %d entries",
                     len(self.counts), self.num_words)

    def count(self, word: str) -> int:
        return self.counts.get(word.lower(), 0)

    def probability(self, word: str) -> float:
        """
        Unigram probability count(word) / num_words; 0.0 for unknown words
        and for an empty model.
        """
        occurrences = self.counts.get(word.lower())
        if not occurrences:
            return 0.0
        return occurrences / self.num_words

    def most_common(self, n: int | None = None) -> list[tuple[str, int]]:
        return self.counts.most_common(n)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self.counts

    def __len__(self) -> int:
        return len(self.counts)
