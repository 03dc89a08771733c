"""Console entry point: asks to play, then plays rounds until told to stop."""

import logging
import sys
from random import Random
from typing import TextIO

from blackjack.cards import Deck
from blackjack.game import BlackjackGame
from blackjack.participants import Dealer, Player
from blackjack.prompts import ConsolePrompter
from config import AppConfig, config
from console_ui.render import TranscriptRenderer

logger = logging.getLogger(__name__)


def run(reader: TextIO, writer: TextIO, app_config: AppConfig = config) -> int:
    """
    Hold the whole conversation over ``reader``/``writer``.

    One deck lives for the whole session; every round reshuffles it.

    Returns:
        Number of rounds played
    """
    settings = app_config.game
    deck = Deck(rng=Random(settings.seed), shuffle_passes=settings.shuffle_passes)
    if settings.show_deck:
        writer.write(f"{deck}\n")

    prompter = ConsolePrompter(reader, writer, max_attempts=settings.max_prompt_attempts)
    game = BlackjackGame(
        player=Player(settings.player_name, prompter),
        dealer=Dealer(),
        deck=deck,
    )
    renderer = TranscriptRenderer(writer)
    game.subscribe(renderer.handle)

    play = prompter.ask_play(first_game=True)
    while play:
        result = game.play_round()
        logger.info("Round %d: %s", game.rounds_played, result.outcome.name)
        # Drop the finished round's events
        game.events.clear_history()
        play = prompter.ask_play(first_game=False)

    game.end_game()
    game.events.unsubscribe(renderer.handle)
    return game.rounds_played


def main() -> int:
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    run(sys.stdin, sys.stdout)
    return 0
