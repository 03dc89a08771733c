"""Core blackjack engine - UI-agnostic."""

from blackjack.cards import (
    Card,
    Deck,
    EmptyDeckError,
    InvalidRankIndex,
    InvalidSuitIndex,
    Rank,
    Suit,
    int_to_rank,
    int_to_suit,
    rank_to_int,
    suit_to_int,
)
from blackjack.hand import Hand
from blackjack.participants import Action, Dealer, Participant, Player

__all__ = [
    "Card",
    "Deck",
    "EmptyDeckError",
    "InvalidRankIndex",
    "InvalidSuitIndex",
    "Rank",
    "Suit",
    "int_to_rank",
    "int_to_suit",
    "rank_to_int",
    "suit_to_int",
    "Hand",
    "Action",
    "Dealer",
    "Participant",
    "Player",
]
