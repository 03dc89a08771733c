"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator

from blackjack.cards import Card, format_cards

BLACKJACK = 21
SOFT_ACE_BONUS = 10


@dataclass
class Hand:
    """A blackjack hand with value calculation. Cards are kept in the order received."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the end of the hand."""
        self.cards.append(card)

    def discard_hand(self) -> list[Card]:
        """Remove and return every card, leaving the hand empty."""
        discarded, self.cards = self.cards, []
        return discarded

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        Every Ace starts out worth 11; while the total is over 21 one Ace at a
        time drops back to 1. Returns the highest value that doesn't bust, or
        the lowest bust value.
        """
        total = 0
        aces = 0

        for card in self.cards:
            total += card.point_value
            if card.is_ace:
                aces += 1

        total += aces * SOFT_ACE_BONUS

        while total > BLACKJACK and aces > 0:
            total -= SOFT_ACE_BONUS
            aces -= 1

        return total

    @property
    def is_soft(self) -> bool:
        """Check if the hand holds an Ace currently counted as 11."""
        if not any(card.is_ace for card in self.cards):
            return False

        total_hard = sum(card.point_value for card in self.cards)
        return total_hard + SOFT_ACE_BONUS <= BLACKJACK

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == BLACKJACK

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > BLACKJACK

    @property
    def num_cards(self) -> int:
        """Return the number of cards in the hand."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return format_cards(self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare player and dealer hands.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    # Player busts always loses
    if player_hand.is_busted:
        return -1

    if dealer_hand.is_busted:
        return 1

    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack

    if player_bj and dealer_bj:
        return 0
    if player_bj:
        return 1
    if dealer_bj:
        return -1

    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0
