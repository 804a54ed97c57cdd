"""
Data access layer for the quote store.
Provides read-only access to the fixed quote list with uniform random selection.
"""

import random
from typing import Optional, Sequence, Tuple


QUOTES: Tuple[str, ...] = (
    "The only way to do great work is to love what you do. - Steve Jobs",
    "Innovation distinguishes between a leader and a follower. - Steve Jobs",
    "Life is what happens to you while you're busy making other plans. - John Lennon",
    "The future belongs to those who believe in the beauty of their dreams. - Eleanor Roosevelt",
    "It is during our darkest moments that we must focus to see the light. - Aristotle",
    "The only impossible journey is the one you never begin. - Tony Robbins",
    "In the middle of difficulty lies opportunity. - Albert Einstein",
    "Believe you can and you're halfway there. - Theodore Roosevelt",
    "The way to get started is to quit talking and begin doing. - Walt Disney",
    "Don't let yesterday take up too much of today. - Will Rogers",
    "You learn more from failure than from success. - Unknown",
    "If you are working on something exciting that you really care about, you don't have to be pushed. The vision pulls you. - Steve Jobs",
    "People who are crazy enough to think they can change the world, are the ones who do. - Rob Siltanen",
    "Optimism is the one quality more associated with success and happiness than any other. - Brian Tracy",
    "The only limit to our realization of tomorrow will be our doubts of today. - Franklin D. Roosevelt",
)


class QuoteProvider:
    """
    Provides quotes from the in-memory store.
    Safe to share between sessions: the quote tuple is never written.
    """

    def __init__(self, quotes: Sequence[str] = QUOTES, rng: Optional[random.Random] = None):
        """
        Initialize the provider.

        Args:
            quotes: Quote texts to draw from (defaults to the built-in list)
            rng: Random source; the module-level generator is used when omitted
        """
        if not quotes:
            raise ValueError("Quote store cannot be empty")
        self._quotes = tuple(quotes)
        self._rng = rng or random

    @property
    def quotes(self) -> Tuple[str, ...]:
        return self._quotes

    def __len__(self) -> int:
        return len(self._quotes)

    def __contains__(self, quote: object) -> bool:
        return quote in self._quotes

    def random_index(self) -> int:
        """
        Draw an index uniformly over the store.

        Every index is equally likely and repeats are allowed; the previous
        pick is not excluded.
        """
        return int(self._rng.random() * len(self._quotes))

    def random_quote(self) -> str:
        """Get a random quote."""
        return self._quotes[self.random_index()]
