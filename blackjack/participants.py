"""Round participants: an interactive player and a fixed-strategy dealer."""

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Protocol

from blackjack.cards import Card
from blackjack.hand import BLACKJACK, Hand

DEALER_NAME = "Dealer"
DEALER_STANDS_ON = 17


class Action(Enum):
    """Possible turn decisions."""

    HIT = auto()
    STAY = auto()

    def __str__(self) -> str:
        return self.name.title()


class DecisionSource(Protocol):
    """Anything that can answer 'hit or stay?' for a player."""

    def ask_hit_or_stay(self) -> Action:
        ...


class Participant(ABC):
    """
    A named seat at the table owning exactly one hand.

    Subclasses only decide how to answer hit_or_stay().
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self.hand = Hand()

    @property
    def name(self) -> str:
        """Return the display name."""
        return self._name

    @abstractmethod
    def hit_or_stay(self) -> Action:
        """Decide the next action for the current hand."""
        ...

    def add_card_to_hand(self, card: Card) -> None:
        self.hand.add_card(card)

    def discard_hand(self) -> list[Card]:
        return self.hand.discard_hand()

    @property
    def point_value(self) -> int:
        return self.hand.value

    @property
    def num_cards(self) -> int:
        return self.hand.num_cards

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.hand!r})"


def hand_under_21(participant: Participant) -> bool:
    """True while the participant has not busted (value <= 21)."""
    return participant.point_value <= BLACKJACK


def blackjack_hand(participant: Participant) -> bool:
    """True for a two-card natural; a 21 reached by hitting does not count."""
    return participant.point_value == BLACKJACK and participant.num_cards == 2


class Player(Participant):
    """The human seat; decisions come from interactive input."""

    def __init__(self, name: str, decisions: DecisionSource) -> None:
        super().__init__(name)
        self._decisions = decisions

    def hit_or_stay(self) -> Action:
        return self._decisions.ask_hit_or_stay()


class Dealer(Participant):
    """
    The house seat; hits below 17 and stays on 17 or more.

    The dealer is always named "Dealer": a name passed to the constructor is
    accepted and ignored.
    """

    def __init__(self, name: str = DEALER_NAME) -> None:
        super().__init__(DEALER_NAME)

    def hit_or_stay(self) -> Action:
        if self.point_value >= DEALER_STANDS_ON:
            return Action.STAY
        return Action.HIT
