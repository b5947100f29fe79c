"""
Noun extraction and counting over post texts.

The tokenizer is expensive to build (janome loads its dictionary), so
TextAnalyzer builds it once and shares it between callers. Construct one
analyzer at startup and pass it to the services that need it.
"""

import threading
from collections import Counter
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from typing import NamedTuple, Protocol

from influencer_insights.core.models import NounCount
from influencer_insights.observability.logger import get_logger

logger = get_logger(__name__)

NOUN = "noun"
MIN_NOUN_LENGTH = 2


class Token(NamedTuple):
    surface_form: str
    part_of_speech: str


class Tokenizer(Protocol):
    def tokenize(self, text: str) -> list[Token]:
        ...


class JanomeTokenizer:
    """
    Japanese morphological tokenizer backed by janome.

    janome reports the part of speech as a comma-separated hierarchy
    ("名詞,固有名詞,地域,一般"); only the top level is kept, with 名詞
    mapped to "noun".
    """

    POS_NAMES = {"名詞": NOUN}

    def __init__(self):
        # Imported here so the dictionary only loads when a tokenizer is built
        from janome.tokenizer import Tokenizer as _JanomeTokenizer

        self._tokenizer = _JanomeTokenizer()

    def tokenize(self, text: str) -> list[Token]:
        tokens = []
        for token in self._tokenizer.tokenize(text):
            major_pos = token.part_of_speech.split(",", 1)[0]
            tokens.append(Token(token.surface, self.POS_NAMES.get(major_pos, major_pos)))
        return tokens


class TextAnalyzer:
    """
    Initialize-once tokenizer holder with noun frequency analysis.

    Concurrent callers of initialize() share one in-flight build through a
    Future instead of each building a tokenizer. A failed build clears the
    in-flight marker so a later call can try again.
    """

    def __init__(self, tokenizer_factory: Callable[[], Tokenizer] = JanomeTokenizer):
        """
        Initialize analyzer.

        Args:
            tokenizer_factory: Zero-argument callable building the tokenizer
        """
        self._factory = tokenizer_factory
        self._tokenizer: Tokenizer | None = None
        self._initializing: Future | None = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._tokenizer is not None

    def initialize(self) -> Tokenizer:
        """
        Build the tokenizer if it does not exist yet.

        Returns:
            The shared tokenizer

        Raises:
            Exception: Whatever the factory raised, for the building caller
                and every caller waiting on the same build
        """
        with self._lock:
            if self._tokenizer is not None:
                return self._tokenizer
            future = self._initializing
            is_builder = future is None
            if is_builder:
                future = self._initializing = Future()

        if not is_builder:
            return future.result()

        try:
            tokenizer = self._factory()
        except Exception as e:
            with self._lock:
                self._initializing = None
            future.set_exception(e)
            logger.error("Tokenizer initialization failed", exc_info=True)
            raise

        with self._lock:
            self._tokenizer = tokenizer
            self._initializing = None
        future.set_result(tokenizer)
        logger.info("Tokenizer initialized", extra={"tokenizer": type(tokenizer).__name__})
        return tokenizer

    def analyze_texts(self, texts: Iterable[str | None]) -> list[NounCount]:
        """
        Count nouns of at least MIN_NOUN_LENGTH characters across texts.

        Args:
            texts: Post texts; empty and None entries are ignored

        Returns:
            NounCount list by descending count; ties keep first-seen order
        """
        tokenizer = self.initialize()

        counts: Counter[str] = Counter()
        for text in texts:
            if not text:
                continue
            counts.update(
                token.surface_form
                for token in tokenizer.tokenize(text)
                if token.part_of_speech == NOUN and len(token.surface_form) >= MIN_NOUN_LENGTH
            )

        # sorted() is stable and Counter keeps insertion order
        return [
            NounCount(noun=noun, count=count)
            for noun, count in sorted(counts.items(), key=lambda item: item[1], reverse=True)
        ]
