# correct.py
import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from spell import Correction, SpellCorrector

logger = logging.getLogger(__name__)

DEFAULT_CORPUS = "big.txt"
DEFAULT_WORD = "somthing"


def load_corpus(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding) as f:
        return f.read()


def build_corrector(path: str, encoding: str = "utf-8") -> SpellCorrector:
    start = time.time()
    corrector = SpellCorrector.from_text(load_corpus(path, encoding))
    elapsed = time.time() - start
    logger.info("Loaded %s: %d known words, %d tokens in %.2fs",
                path, len(corrector.known_words), corrector.freq.num_words, elapsed)
    return corrector


def format_correction(c: Correction, verbose: bool = False) -> str:
    if not verbose:
        return c.correction
    return (f"{c.word} -> {c.correction} "
            f"({c.level.value}, p={c.probability:.6g}, distance={c.distance})")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Correct misspelled words using corpus word frequencies",
        epilog='example: norvig-correct --corpus big.txt speling korrectud -v',
    )
    parser.add_argument("words", nargs="*", help=f"Words to correct (default: {DEFAULT_WORD})")
    parser.add_argument("--corpus", default=os.getenv("NORVIG_CORPUS", DEFAULT_CORPUS),
                        help="Path to the corpus text file (default: $NORVIG_CORPUS or big.txt)")
    parser.add_argument("--encoding", default="utf-8", help="Corpus file encoding")
    parser.add_argument("--sentence", help="Correct a whole sentence instead of single words")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show cascade stage and debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        corrector = build_corrector(args.corpus, args.encoding)
    except FileNotFoundError:
        logger.error("Corpus file not found: %s", args.corpus)
        return 1
    except UnicodeDecodeError as e:
        logger.error("Could not decode %s as %s: %s", args.corpus, args.encoding, e)
        return 1
    except OSError as e:
        logger.error("Could not read %s: %s", args.corpus, e)
        return 1

    if args.sentence is not None:
        print(corrector.correct(args.sentence))
        return 0

    for word in args.words or [DEFAULT_WORD]:
        print(format_correction(corrector.correct_word(word), args.verbose))
    return 0


if __name__ == "__main__":
    sys.exit(main())
