"""
Lorem Ipsum generator.
"""

import random
from typing import Optional

WORDS = [
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing", "elit",
    "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore", "et", "dolore",
    "magna", "aliqua", "enim", "ad", "minim", "veniam", "quis", "nostrud",
    "exercitation", "ullamco", "laboris", "nisi", "aliquip", "ex", "ea", "commodo",
    "consequat", "duis", "aute", "irure", "in", "reprehenderit", "voluptate",
    "velit", "esse", "cillum", "fugiat", "nulla", "pariatur", "excepteur", "sint",
    "occaecat", "cupidatat", "non", "proident", "sunt", "culpa", "qui", "officia",
    "deserunt", "mollit", "anim", "id", "est", "laborum",
]


class LoremGenerator:
    """Placeholder text from the classic Lorem Ipsum vocabulary."""

    DEFAULT_WORD_COUNT = 50
    MIN_SENTENCE_WORDS = 8
    MAX_SENTENCE_WORDS = 14

    @staticmethod
    def generate(word_count: int = DEFAULT_WORD_COUNT, rng: Optional[random.Random] = None) -> str:
        """
        Generate ``word_count`` words split into capitalized sentences.

        Words are drawn uniformly with replacement. Each sentence gets its
        own random length between 8 and 14 words; the last one ends wherever
        the words run out.

        Args:
            word_count: Number of words to produce.
            rng: Source of randomness.

        Returns:
            The text, or ``""`` when ``word_count`` is not positive.
        """
        if word_count <= 0:
            return ""

        rng = rng or random
        sentences = []
        sentence = []
        target = LoremGenerator._sentence_length(rng)

        for _ in range(word_count):
            sentence.append(rng.choice(WORDS))
            if len(sentence) >= target:
                sentences.append(_sentence(sentence))
                sentence = []
                target = LoremGenerator._sentence_length(rng)

        if sentence:
            sentences.append(_sentence(sentence))

        return " ".join(sentences)

    @staticmethod
    def _sentence_length(rng) -> int:
        return rng.randint(LoremGenerator.MIN_SENTENCE_WORDS, LoremGenerator.MAX_SENTENCE_WORDS)


def _sentence(words: list[str]) -> str:
    text = " ".join(words)
    return text[0].upper() + text[1:] + "."
