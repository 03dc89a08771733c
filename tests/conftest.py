"""Pytest fixtures for blackjack tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from blackjack.cards import Card, Deck, Rank, Suit
from blackjack.hand import Hand
from blackjack.participants import Action, Dealer, Player


class NoShuffle(Random):
    """Random whose shuffle leaves the order alone, for stacked decks."""

    def shuffle(self, x, *args, **kwargs) -> None:
        pass


class ScriptedDecisions:
    """Answers 'hit or stay?' from a fixed script, staying once it runs out."""

    def __init__(self, *actions: Action) -> None:
        self.actions = list(actions)
        self.asked = 0

    def ask_hit_or_stay(self) -> Action:
        self.asked += 1
        if self.actions:
            return self.actions.pop(0)
        return Action.STAY


def make_stacked_deck(*top: str) -> Deck:
    """
    Build a deck that deals ``top`` first (as 'AS', '10D', ...), then the
    rest of the 52 cards in canonical order. Shuffling it is a no-op.
    """
    deck = Deck(rng=NoShuffle())
    wanted = [Card.from_string(s) for s in top]
    rest = [card for card in deck if card not in wanted]
    while len(deck):
        deck.deal_card()
    deck.collect_played_cards(wanted + rest)
    return deck


def hand_of(*cards: str) -> Hand:
    """Build a hand from card strings."""
    hand = Hand()
    for s in cards:
        hand.add_card(Card.from_string(s))
    return hand


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A fresh, unshuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return hand_of("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return hand_of("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return hand_of("10S", "6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return hand_of("10S", "6H", "KC")


@pytest.fixture
def dealer():
    """A dealer with an empty hand."""
    return Dealer()


@pytest.fixture
def staying_player():
    """A player who always stays."""
    return Player("Player 1", ScriptedDecisions())


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=0, max_cards=8):
    """Generate a random hand of distinct cards."""
    cards = draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards, unique=True))
    hand = Hand()
    for card in cards:
        hand.add_card(card)
    return hand
