"""Prefix tokenizer for the search index.

Each whitespace-separated word contributes itself and every prefix of at
least MIN_TOKEN_LENGTH characters, so a membership query on any typed
prefix finds the entry. Hyphens and punctuation stay inside words.
"""

from potracker.core.constants import MIN_TOKEN_LENGTH


def tokenize(text: str | None) -> set[str]:
    """Return the lowercased word and prefix tokens of text.

    Args:
        text: Arbitrary text; None or empty yields an empty set.

    Returns:
        Set of tokens, e.g. "Hello" -> {"he", "hel", "hell", "hello"}.
        A one-character word is kept whole, but one-character prefixes
        of longer words are not.
    """
    if not text:
        return set()
    tokens: set[str] = set()
    for word in text.lower().split():
        tokens.add(word)
        for end in range(MIN_TOKEN_LENGTH, len(word)):
            tokens.add(word[:end])
    return tokens
