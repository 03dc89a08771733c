"""Tests for the round engine and its state machine."""

import pytest
from collections import Counter
from random import Random

from transitions.core import MachineError

from blackjack.cards import Card, Deck
from blackjack.game import BlackjackGame, EventType, GameState, RoundOutcome
from blackjack.participants import Action, Dealer, Player
from conftest import ScriptedDecisions, make_stacked_deck


def make_game(*top, actions=()):
    """A game on a stacked deck with a scripted player."""
    decisions = ScriptedDecisions(*actions)
    game = BlackjackGame(
        player=Player("Player 1", decisions),
        dealer=Dealer(),
        deck=make_stacked_deck(*top),
    )
    return game, decisions


def event_types(game):
    return [event.event_type for event in game.events.history]


class TestRoundOutcomes:
    """Each way a round can be decided."""

    def test_player_busts_and_dealer_does_not_play(self):
        # Player A♠ 2♦ (13) vs Dealer J♣ Q♥ (20); player hits K♠ then 9♥
        game, decisions = make_game(
            "AS", "JC", "2D", "QH", "KS", "9H", actions=(Action.HIT, Action.HIT)
        )
        game.start_round()
        assert game.player.point_value == 13
        assert game.dealer.point_value == 20

        outcome = game.play_player_turn()
        assert outcome == RoundOutcome.PLAYER_BUST
        assert game.player.point_value == 22
        assert game.dealer.num_cards == 2
        assert decisions.asked == 2

        result = game.settle()
        assert result.winner == "Dealer"
        assert result.player_total == 22
        assert result.dealer_total == 20
        assert result.player_hand == "[ Ace of Spades, 2 of Diamonds, King of Spades, 9 of Hearts ]"
        assert result.dealer_hand == "[ Jack of Clubs, Queen of Hearts ]"
        assert EventType.DEALER_HITS not in event_types(game)

    def test_player_blackjack_wins_immediately(self):
        game, decisions = make_game("AS", "9C", "KH", "8D")
        result = game.play_round()
        assert result.outcome == RoundOutcome.PLAYER_BLACKJACK
        assert result.winner == "Player 1"
        assert decisions.asked == 0
        assert result.dealer_total == 17

    def test_both_naturals_push(self):
        game, decisions = make_game("AS", "AC", "KH", "QD")
        result = game.play_round()
        assert result.outcome == RoundOutcome.PUSH
        assert result.winner is None
        assert result.is_push
        assert decisions.asked == 0

    def test_dealer_natural_wins_before_player_acts(self):
        game, decisions = make_game("9S", "AC", "8H", "KD")
        result = game.play_round()
        assert result.outcome == RoundOutcome.DEALER_BLACKJACK
        assert result.winner == "Dealer"
        assert decisions.asked == 0

    def test_dealer_busts(self):
        game, _ = make_game("10S", "10C", "9S", "6D", "KH")
        result = game.play_round()
        assert result.outcome == RoundOutcome.DEALER_BUST
        assert result.winner == "Player 1"
        assert result.dealer_total == 26

    def test_dealer_stays_and_wins(self):
        game, _ = make_game("10S", "10C", "7S", "9D")
        result = game.play_round()
        assert result.outcome == RoundOutcome.DEALER_WINS
        assert result.winner == "Dealer"

    def test_player_wins_on_points(self):
        game, _ = make_game("10S", "10C", "9S", "7D")
        result = game.play_round()
        assert result.outcome == RoundOutcome.PLAYER_WINS
        assert result.winner == "Player 1"
        assert (result.player_total, result.dealer_total) == (19, 17)

    def test_equal_totals_push(self):
        game, _ = make_game("10S", "10C", "8S", "8D")
        result = game.play_round()
        assert result.outcome == RoundOutcome.PUSH
        assert result.winner is None

    def test_dealer_hits_until_17(self):
        game, _ = make_game("10S", "2C", "9S", "3D", "4H", "5H", "6H")
        result = game.play_round()
        assert result.dealer_total == 20
        assert result.dealer_hand == "[ 2 of Clubs, 3 of Diamonds, 4 of Hearts, 5 of Hearts, 6 of Hearts ]"
        assert event_types(game).count(EventType.DEALER_HITS) == 3
        assert result.outcome == RoundOutcome.DEALER_WINS

    def test_hit_to_21_is_not_a_natural(self):
        game, decisions = make_game("5S", "10C", "6S", "7D", "KH", actions=(Action.HIT,))
        result = game.play_round()
        assert decisions.asked == 2
        assert result.player_total == 21
        assert result.outcome == RoundOutcome.PLAYER_WINS

    def test_outcome_helpers(self):
        assert RoundOutcome.DEALER_BUST.player_won
        assert RoundOutcome.PLAYER_BUST.dealer_won
        assert not RoundOutcome.PUSH.player_won
        assert not RoundOutcome.PUSH.dealer_won


class TestDealing:
    """Tests for the initial deal and the deck lifecycle."""

    def test_initial_deal_alternates(self):
        game, _ = make_game("2S", "3S", "4S", "5S")
        game.start_round()
        assert [str(c) for c in game.player.hand] == ["2 of Spades", "4 of Spades"]
        assert [str(c) for c in game.dealer.hand] == ["3 of Spades", "5 of Spades"]
        assert len(game.deck) == 48
        assert game.state == GameState.PLAYER_TURN

    def test_settle_returns_player_cards_then_dealer_cards(self):
        game, _ = make_game("AS", "JC", "2D", "QH", "KS", "9H", actions=(Action.HIT, Action.HIT))
        game.play_round()
        tail = [str(card) for card in list(game.deck)[-6:]]
        assert tail == [
            "Ace of Spades",
            "2 of Diamonds",
            "King of Spades",
            "9 of Hearts",
            "Jack of Clubs",
            "Queen of Hearts",
        ]
        assert game.player.num_cards == 0
        assert game.dealer.num_cards == 0

    def test_every_round_reshuffles(self):
        game = BlackjackGame(player=Player("P", ScriptedDecisions()), rng=Random(3))
        game.play_round()
        game.play_round()
        shuffles = [e for e in game.events.history if e.event_type == EventType.DECK_SHUFFLED]
        assert len(shuffles) == 2
        assert all(e.data["cards"] == 52 for e in shuffles)

    def test_conservation_throughout_many_rounds(self):
        canonical = Counter(Deck())
        decisions = ScriptedDecisions(*([Action.HIT] * 200))
        game = BlackjackGame(player=Player("P", decisions), rng=Random(11))

        def check(_event):
            assert Counter(game.cards_in_circulation()) == canonical

        game.subscribe(check)
        for _ in range(25):
            game.play_round()
            assert len(game.deck) == 52
        assert game.rounds_played == 25


class TestStateMachine:
    """Tests for state transitions."""

    def test_initial_state(self):
        game, _ = make_game()
        assert game.state == GameState.WAITING

    def test_round_returns_to_waiting(self):
        game, _ = make_game("10S", "10C", "9S", "7D")
        game.play_round()
        assert game.state == GameState.WAITING
        assert game.rounds_played == 1

    def test_stay_moves_to_dealer_turn(self):
        game, _ = make_game("10S", "10C", "9S", "7D")
        game.start_round()
        assert game.play_player_turn() is None
        assert game.state == GameState.DEALER_TURN
        assert game.play_dealer_turn() == RoundOutcome.PLAYER_WINS
        assert game.state == GameState.SETTLEMENT

    def test_player_turn_out_of_order(self):
        game, _ = make_game()
        with pytest.raises(MachineError):
            game.play_player_turn()

    def test_dealer_turn_out_of_order(self):
        game, _ = make_game("10S", "10C", "9S", "7D")
        game.start_round()
        with pytest.raises(MachineError):
            game.play_dealer_turn()

    def test_settle_out_of_order(self):
        game, _ = make_game()
        with pytest.raises(MachineError):
            game.settle()

    def test_cannot_start_twice(self):
        game, _ = make_game()
        game.start_round()
        with pytest.raises(MachineError):
            game.start_round()

    def test_end_game(self):
        game, _ = make_game("10S", "10C", "9S", "7D")
        game.play_round()
        game.end_game()
        assert game.state == GameState.GAME_OVER
        ended = game.events.history[-1]
        assert ended.event_type == EventType.GAME_ENDED
        assert ended.data["rounds_played"] == 1

    def test_end_game_mid_round(self):
        game, _ = make_game("10S", "10C", "9S", "7D")
        game.start_round()
        game.end_game()
        assert game.state == GameState.GAME_OVER

    def test_game_over_is_final(self):
        game, _ = make_game()
        game.end_game()
        with pytest.raises(MachineError):
            game.end_game()
        with pytest.raises(MachineError):
            game.start_round()


class TestEvents:
    """Tests for the events a round emits."""

    def test_bust_round_event_sequence(self):
        game, _ = make_game("AS", "JC", "2D", "QH", "KS", "9H", actions=(Action.HIT, Action.HIT))
        game.play_round()
        assert event_types(game) == [
            EventType.ROUND_STARTED,
            EventType.DECK_SHUFFLED,
            EventType.INITIAL_DEAL,
            EventType.CARD_DEALT,
            EventType.CARD_DEALT,
            EventType.CARD_DEALT,
            EventType.CARD_DEALT,
            EventType.PLAYER_TO_ACT,
            EventType.PLAYER_HIT,
            EventType.CARD_DEALT,
            EventType.PLAYER_TO_ACT,
            EventType.PLAYER_HIT,
            EventType.CARD_DEALT,
            EventType.PLAYER_BUSTS,
            EventType.HANDS_REVEALED,
            EventType.CARDS_COLLECTED,
            EventType.ROUND_ENDED,
        ]

    def test_player_to_act_shows_hand(self):
        game, _ = make_game("AS", "JC", "2D", "QH")
        game.play_round()
        to_act = next(e for e in game.events.history if e.event_type == EventType.PLAYER_TO_ACT)
        assert to_act.data == {
            "name": "Player 1",
            "hand": "[ Ace of Spades, 2 of Diamonds ]",
            "hand_value": 13,
        }

    def test_round_ended_carries_result(self):
        game, _ = make_game("10S", "10C", "9S", "7D")
        result = game.play_round()
        ended = game.events.history[-1]
        assert ended.event_type == EventType.ROUND_ENDED
        assert ended.data["result"] == result
        assert ended.data["round"] == 1

    def test_card_dealt_names_recipient(self):
        game, _ = make_game("2S", "3S", "4S", "5S")
        game.start_round()
        dealt = [e.data for e in game.events.history if e.event_type == EventType.CARD_DEALT]
        assert [d["to"] for d in dealt] == ["Player 1", "Dealer", "Player 1", "Dealer"]
        assert dealt[0]["card"] == str(Card.from_string("2S"))

    def test_outcome_names_the_deciding_turn(self):
        game, _ = make_game("9S", "AC", "8H", "KD")
        game.play_round()
        decided = next(e for e in game.events.history if e.event_type == EventType.DEALER_BLACKJACK)
        assert decided.data["turn"] == "player"

    def test_dealer_natural_caught_in_dealer_turn(self):
        game, _ = make_game("10S", "10C", "9S", "7D")
        game.start_round()
        game.play_player_turn()
        assert game.state == GameState.DEALER_TURN

        game.dealer.discard_hand()
        game.dealer.add_card_to_hand(Card.from_string("AS"))
        game.dealer.add_card_to_hand(Card.from_string("KD"))

        assert game.play_dealer_turn() == RoundOutcome.DEALER_BLACKJACK
        decided = game.events.history[-1]
        assert decided.event_type == EventType.DEALER_BLACKJACK
        assert decided.data["turn"] == "dealer"
        assert decided.data["winner"] == "Dealer"
