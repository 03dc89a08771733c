"""Card and Deck classes - immutable cards, a mutable 52-card deck."""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from functools import total_ordering
from random import Random
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

SHUFFLE_PASSES = 4


class InvalidRankIndex(ValueError):
    """Raised when an integer does not map to a rank."""

    def __init__(self, index: int) -> None:
        super().__init__(f"invalid rank index: {index}")
        self.index = index


class InvalidSuitIndex(ValueError):
    """Raised when an integer does not map to a suit."""

    def __init__(self, index: int) -> None:
        super().__init__(f"invalid suit index: {index}")
        self.index = index


class EmptyDeckError(IndexError):
    """Raised when dealing from a deck with no cards left."""

    def __init__(self) -> None:
        super().__init__("Cannot deal from empty deck")


class Suit(Enum):
    """Card suits, in canonical deck order."""

    DIAMONDS = auto()
    CLUBS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return self.name.title()


@total_ordering
class Rank(Enum):
    """Card ranks, valued by game rank (Ace low)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if Rank.TWO.value <= self.value <= Rank.TEN.value:
            return str(self.value)
        return self.name.title()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return self.value < other.value

    @property
    def point_value(self) -> int:
        """Return the base point value (Ace = 1, face cards = 10)."""
        return min(self.value, 10)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


_SUIT_ORDER: tuple[Suit, ...] = (Suit.DIAMONDS, Suit.CLUBS, Suit.HEARTS, Suit.SPADES)
_RANKS_BY_INDEX: dict[int, Rank] = {rank.value: rank for rank in Rank}


def rank_to_int(rank: Rank) -> int:
    """Return the game rank of ``rank`` in the range 1..13."""
    return rank.value


def int_to_rank(index: int) -> Rank:
    """
    Convert a game rank back to a Rank.

    Raises:
        InvalidRankIndex: if ``index`` is outside 1..13
    """
    try:
        return _RANKS_BY_INDEX[index]
    except KeyError:
        raise InvalidRankIndex(index) from None


def suit_to_int(suit: Suit) -> int:
    """Return the canonical index of ``suit`` in the range 0..3."""
    return _SUIT_ORDER.index(suit)


def int_to_suit(index: int) -> Suit:
    """
    Convert a canonical suit index back to a Suit.

    Raises:
        InvalidSuitIndex: if ``index`` is outside 0..3
    """
    if not 0 <= index < len(_SUIT_ORDER):
        raise InvalidSuitIndex(index)
    return _SUIT_ORDER[index]


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def point_value(self) -> int:
        """Return the card's point value; an Ace counts 1 at this level."""
        return self.rank.point_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a short string like 'AS', '10D', 'kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {str(rank.value): rank for rank in Rank if not rank.is_ace}
        rank_map.update({"A": Rank.ACE, "T": Rank.TEN, "J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING})
        suit_map = {suit.name[0]: suit for suit in Suit}

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


def format_cards(cards: Iterable[Card]) -> str:
    """Render cards as '[ Ace of Diamonds, 2 of Diamonds ]'; '[  ]' when empty."""
    return f"[ {', '.join(str(card) for card in cards)} ]"


class Deck:
    """
    A standard 52-card deck.

    The front of the deck is the next card dealt; returned cards go to the back.
    """

    def __init__(self, rng: Random | None = None, shuffle_passes: int = SHUFFLE_PASSES) -> None:
        """
        Initialize a new deck in canonical order.

        Args:
            rng: Random number generator for shuffling
            shuffle_passes: Number of full shuffles applied by shuffle()
        """
        if shuffle_passes < 1:
            raise ValueError("shuffle_passes must be at least 1")
        self._rng = rng or Random()
        self._shuffle_passes = shuffle_passes
        self._cards: deque[Card] = deque()
        self.reset()

    def reset(self) -> None:
        """Reset deck to all 52 cards, suit-major and rank-minor."""
        self._cards = deque(
            Card(int_to_rank(r), int_to_suit(s))
            for s in range(len(_SUIT_ORDER))
            for r in range(rank_to_int(Rank.ACE), rank_to_int(Rank.KING) + 1)
        )

    def shuffle(self) -> None:
        """Shuffle the cards currently in the deck, in place."""
        cards = list(self._cards)
        for _ in range(self._shuffle_passes):
            self._rng.shuffle(cards)
        self._cards = deque(cards)
        logger.debug("Shuffled %d cards (%d passes)", len(cards), self._shuffle_passes)

    def deal_card(self) -> Card:
        """Remove and return the card at the front of the deck."""
        if not self._cards:
            raise EmptyDeckError()
        return self._cards.popleft()

    def collect_played_cards(self, cards: Iterable[Card]) -> None:
        """Append returned cards to the back of the deck, keeping their order."""
        self._cards.extend(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __str__(self) -> str:
        return format_cards(self._cards)
