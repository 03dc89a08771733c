"""Turns engine events into console transcript lines."""

from typing import Callable, TextIO

from blackjack.game.events import EventType, GameEvent


class TranscriptRenderer:
    """Writes one or more lines to ``writer`` for each game event it knows."""

    def __init__(self, writer: TextIO) -> None:
        self.writer = writer
        self._renderers: dict[EventType, Callable[[dict], list[str]]] = {
            EventType.DECK_SHUFFLED: lambda d: ["Shuffling the deck"],
            EventType.INITIAL_DEAL: lambda d: ["Dealing cards"],
            EventType.PLAYER_TO_ACT: lambda d: [f"{d['name']}'s hand: ", d["hand"]],
            EventType.PLAYER_STAYS: self._total,
            EventType.DEALER_STAYS: self._total,
            EventType.PLAYER_BUSTS: lambda d: [
                f"{d['player']} Total: {d['player_total']}",
                "BUST! You lost this round.",
            ],
            EventType.PLAYER_BLACKJACK: lambda d: [
                f"{d['player']} got BLACKJACK!!! {d['player'].upper()} WINS!!!"
            ],
            EventType.DEALER_BLACKJACK: self._dealer_blackjack,
            EventType.DEALER_BUSTS: lambda d: [
                f"{d['dealer']} Total: {d['dealer_total']}",
                f"{d['dealer']} BUSTS! {d['player']} wins this round!",
            ],
            EventType.PLAYER_WINS: self._winner,
            EventType.DEALER_WINS: self._winner,
            EventType.PUSH: lambda d: ["PUSH!"],
            EventType.HANDS_REVEALED: self._hands,
        }

    @staticmethod
    def _total(data: dict) -> list[str]:
        return [f"{data['name']} Total: {data['hand_value']}"]

    @staticmethod
    def _winner(data: dict) -> list[str]:
        return [f"{data['winner']} WINS!!!"]

    @staticmethod
    def _dealer_blackjack(data: dict) -> list[str]:
        line = f"{data['dealer']} got BLACKJACK!!! {data['dealer']} WINS!!!"
        # Caught in the dealer turn
        if data.get("turn") == "dealer":
            line += "???"
        return [line]

    @staticmethod
    def _hands(data: dict) -> list[str]:
        lines = []
        for name, hand in data["hands"]:
            lines.extend([f"{name}'s hand: ", hand])
        return lines

    def handle(self, event: GameEvent) -> None:
        """Render ``event``; events without a transcript line are ignored."""
        render = self._renderers.get(event.event_type)
        if render is None:
            return
        for line in render(event.data):
            self.writer.write(line + "\n")
        self.writer.flush()
