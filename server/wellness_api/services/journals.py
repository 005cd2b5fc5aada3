"""Reading metrics derived from journal content."""
import math

WORDS_PER_MINUTE = 200


def count_words(content: str) -> int:
    return len(content.split())


def reading_time(word_count: int) -> int:
    """Minutes needed to read ``word_count`` words, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)
