"""Blackjack round engine with state machine."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Callable

from transitions import Machine
from transitions.core import MachineError

from blackjack.cards import Card, Deck
from blackjack.hand import evaluate_hands
from blackjack.participants import (
    Action,
    Dealer,
    Participant,
    blackjack_hand,
    hand_under_21,
)
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.state import GameState

logger = logging.getLogger(__name__)


class RoundOutcome(Enum):
    """How a round was decided."""

    PLAYER_BUST = auto()
    PLAYER_BLACKJACK = auto()
    DEALER_BLACKJACK = auto()
    DEALER_BUST = auto()
    PLAYER_WINS = auto()
    DEALER_WINS = auto()
    PUSH = auto()

    @property
    def player_won(self) -> bool:
        return self in (RoundOutcome.PLAYER_BLACKJACK, RoundOutcome.DEALER_BUST, RoundOutcome.PLAYER_WINS)

    @property
    def dealer_won(self) -> bool:
        return self in (RoundOutcome.PLAYER_BUST, RoundOutcome.DEALER_BLACKJACK, RoundOutcome.DEALER_WINS)


OUTCOME_EVENTS: dict[RoundOutcome, EventType] = {
    RoundOutcome.PLAYER_BUST: EventType.PLAYER_BUSTS,
    RoundOutcome.PLAYER_BLACKJACK: EventType.PLAYER_BLACKJACK,
    RoundOutcome.DEALER_BLACKJACK: EventType.DEALER_BLACKJACK,
    RoundOutcome.DEALER_BUST: EventType.DEALER_BUSTS,
    RoundOutcome.PLAYER_WINS: EventType.PLAYER_WINS,
    RoundOutcome.DEALER_WINS: EventType.DEALER_WINS,
    RoundOutcome.PUSH: EventType.PUSH,
}


@dataclass(frozen=True)
class RoundResult:
    """Summary of a settled round."""

    outcome: RoundOutcome
    winner: str | None
    player_total: int
    dealer_total: int
    player_hand: str
    dealer_hand: str

    @property
    def is_push(self) -> bool:
        return self.outcome == RoundOutcome.PUSH


class BlackjackGame:
    """
    One player against the dealer, round after round, on a single deck.

    The engine owns the deck for its whole lifetime. Each round shuffles
    whatever the deck holds, deals, plays both turns and returns every card
    to the deck. Communication with a front end happens through events and
    return values only.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_deal", "source": "waiting", "dest": "dealing"},
        {"trigger": "deal_cards", "source": "dealing", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        # Bust or a natural ends the round without the dealer playing
        {"trigger": "player_decided", "source": "player_turn", "dest": "settlement"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "settlement"},
        {"trigger": "hands_collected", "source": "settlement", "dest": "round_complete"},
        {"trigger": "next_round", "source": "round_complete", "dest": "waiting"},
        # Every state but game_over itself
        {
            "trigger": "end_game",
            "source": [s.name.lower() for s in GameState if s != GameState.GAME_OVER],
            "dest": "game_over",
            "after": "_on_game_over",
        },
    ]

    def __init__(
        self,
        player: Participant,
        dealer: Participant | None = None,
        deck: Deck | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new game.

        Args:
            player: The player seat
            dealer: The house seat (a fresh Dealer if not provided)
            deck: Deck to play with (a fresh 52-card deck if not provided)
            rng: Random number generator for the fresh deck
        """
        self.player = player
        self.dealer = dealer if dealer is not None else Dealer()
        self.deck = deck if deck is not None else Deck(rng=rng)
        self.events = EventEmitter()
        self.rounds_played = 0
        self._outcome: RoundOutcome | None = None

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def _require(self, state: GameState) -> None:
        if self.state != state:
            raise MachineError(f"Expected state {state.name}, game is in {self.state.name}")

    def play_round(self) -> RoundResult:
        """Play one complete round and return its result."""
        self.start_round()
        if self.play_player_turn() is None:
            self.play_dealer_turn()
        return self.settle()

    def start_round(self) -> None:
        """Shuffle the deck and deal two cards each, player first."""
        self.begin_deal()
        self._outcome = None
        self.events.emit_new(EventType.ROUND_STARTED, round=self.rounds_played + 1)

        self.deck.shuffle()
        self.events.emit_new(EventType.DECK_SHUFFLED, cards=len(self.deck))

        self.events.emit_new(EventType.INITIAL_DEAL)
        for _ in range(2):
            self._deal_to(self.player)
            self._deal_to(self.dealer)

        self.deal_cards()

    def _deal_to(self, participant: Participant) -> Card:
        """Move the front card of the deck into a participant's hand."""
        card = self.deck.deal_card()
        participant.add_card_to_hand(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            to=participant.name,
            hand_value=participant.point_value,
        )
        return card

    def play_player_turn(self) -> RoundOutcome | None:
        """
        Run the player's turn.

        Returns:
            The round outcome if the turn decided the round (bust or a
            natural on either side), None if the player stayed and the
            dealer must play.
        """
        self._require(GameState.PLAYER_TURN)

        while True:
            if not hand_under_21(self.player):
                return self._decide(RoundOutcome.PLAYER_BUST)

            if blackjack_hand(self.player):
                if blackjack_hand(self.dealer):
                    return self._decide(RoundOutcome.PUSH)
                return self._decide(RoundOutcome.PLAYER_BLACKJACK)

            if blackjack_hand(self.dealer):
                return self._decide(RoundOutcome.DEALER_BLACKJACK)

            self.events.emit_new(
                EventType.PLAYER_TO_ACT,
                name=self.player.name,
                hand=str(self.player.hand),
                hand_value=self.player.point_value,
            )
            action = self.player.hit_or_stay()

            if action == Action.HIT:
                self.events.emit_new(EventType.PLAYER_HIT, name=self.player.name)
                self._deal_to(self.player)
                continue

            self.events.emit_new(
                EventType.PLAYER_STAYS,
                name=self.player.name,
                hand_value=self.player.point_value,
            )
            self.player_done()
            return None

    def play_dealer_turn(self) -> RoundOutcome:
        """Run the dealer's turn and decide the round."""
        self._require(GameState.DEALER_TURN)

        while True:
            if not hand_under_21(self.dealer):
                return self._decide(RoundOutcome.DEALER_BUST)

            # Only reachable with a two-card natural the player turn did not see
            if blackjack_hand(self.dealer):
                return self._decide(RoundOutcome.DEALER_BLACKJACK)

            if self.dealer.hit_or_stay() == Action.HIT:
                self.events.emit_new(EventType.DEALER_HITS, name=self.dealer.name)
                self._deal_to(self.dealer)
                continue

            self.events.emit_new(
                EventType.DEALER_STAYS,
                name=self.dealer.name,
                hand_value=self.dealer.point_value,
            )
            comparison = evaluate_hands(self.player.hand, self.dealer.hand)
            if comparison > 0:
                return self._decide(RoundOutcome.PLAYER_WINS)
            if comparison < 0:
                return self._decide(RoundOutcome.DEALER_WINS)
            return self._decide(RoundOutcome.PUSH)

    def _winner(self, outcome: RoundOutcome) -> str | None:
        if outcome.player_won:
            return self.player.name
        if outcome.dealer_won:
            return self.dealer.name
        return None

    def _decide(self, outcome: RoundOutcome) -> RoundOutcome:
        """Record the outcome and move to settlement."""
        self._outcome = outcome
        if self.state == GameState.PLAYER_TURN:
            turn = "player"
            self.player_decided()
        else:
            turn = "dealer"
            self.dealer_done()

        logger.debug(
            "Round decided: %s (%s %d, %s %d)",
            outcome.name,
            self.player.name,
            self.player.point_value,
            self.dealer.name,
            self.dealer.point_value,
        )
        self.events.emit_new(
            OUTCOME_EVENTS[outcome],
            player=self.player.name,
            dealer=self.dealer.name,
            player_total=self.player.point_value,
            dealer_total=self.dealer.point_value,
            winner=self._winner(outcome),
            turn=turn,
        )
        return outcome

    def settle(self) -> RoundResult:
        """Show both hands, return every card to the deck, and finish the round."""
        self._require(GameState.SETTLEMENT)
        if self._outcome is None:
            raise MachineError("Settlement reached without a decided outcome")

        result = RoundResult(
            outcome=self._outcome,
            winner=self._winner(self._outcome),
            player_total=self.player.point_value,
            dealer_total=self.dealer.point_value,
            player_hand=str(self.player.hand),
            dealer_hand=str(self.dealer.hand),
        )
        self.events.emit_new(
            EventType.HANDS_REVEALED,
            hands=[
                (self.player.name, result.player_hand),
                (self.dealer.name, result.dealer_hand),
            ],
        )

        collected = 0
        for participant in (self.player, self.dealer):
            cards = participant.discard_hand()
            collected += len(cards)
            self.deck.collect_played_cards(cards)
        self.events.emit_new(EventType.CARDS_COLLECTED, cards=collected, deck_size=len(self.deck))

        self.hands_collected()
        self.rounds_played += 1
        self.events.emit_new(EventType.ROUND_ENDED, result=result, round=self.rounds_played)

        self.next_round()
        return result

    def cards_in_circulation(self) -> list[Card]:
        """Return every card the game holds: deck, then player hand, then dealer hand."""
        return [*self.deck, *self.player.hand, *self.dealer.hand]

    def _on_game_over(self) -> None:
        self.events.emit_new(EventType.GAME_ENDED, rounds_played=self.rounds_played)
