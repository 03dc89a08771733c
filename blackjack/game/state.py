"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Game state machine states.

    Flow: WAITING → DEALING → PLAYER_TURN → DEALER_TURN → SETTLEMENT → ROUND_COMPLETE
    """

    # Between rounds
    WAITING = auto()

    # Shuffle and initial deal
    DEALING = auto()

    # Player decides hit/stay
    PLAYER_TURN = auto()

    # Dealer plays by threshold
    DEALER_TURN = auto()

    # Outcome decided, hands being collected
    SETTLEMENT = auto()

    # Round finished, ready for next
    ROUND_COMPLETE = auto()

    # Player chose to stop
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid state transitions
VALID_TRANSITIONS: dict[GameState, list[GameState]] = {
    GameState.WAITING: [GameState.DEALING, GameState.GAME_OVER],
    GameState.DEALING: [GameState.PLAYER_TURN, GameState.GAME_OVER],
    # SETTLEMENT directly on bust or a natural
    GameState.PLAYER_TURN: [GameState.DEALER_TURN, GameState.SETTLEMENT, GameState.GAME_OVER],
    GameState.DEALER_TURN: [GameState.SETTLEMENT, GameState.GAME_OVER],
    GameState.SETTLEMENT: [GameState.ROUND_COMPLETE, GameState.GAME_OVER],
    GameState.ROUND_COMPLETE: [GameState.WAITING, GameState.GAME_OVER],
    GameState.GAME_OVER: [],  # Terminal state
}


def is_valid_transition(from_state: GameState, to_state: GameState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
