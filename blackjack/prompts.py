"""Line-oriented prompts with bounded retries and a safe fallback."""

import logging
from dataclasses import dataclass
from typing import Generic, Mapping, TextIO, TypeVar

from blackjack.participants import Action

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 3

PLAY_PROMPT_FIRST = "Do you want to play Blackjack? (yes/no) "
PLAY_PROMPT_AGAIN = "Keep playing Blackjack? (yes/no) "
HIT_OR_STAY_PROMPT = "Hit or Stay? "
HIT_OR_STAY_RETRY = "Let's try again... Hit or Stay? "


@dataclass(frozen=True)
class Prompt(Generic[T]):
    """
    One question asked over a line-oriented conversation.

    Attributes:
        text: Written once, without a newline, before the first answer is read
        choices: Accepted lower-case tokens and the value each resolves to
        confirmations: Line echoed back for each resolved value
        miss_message: Line written after an unrecognized answer
        fallback: Value used when no answer is recognized
        fallback_message: Line written when the fallback is used
        retry_text: Written before each re-read, if set
        max_attempts: Number of answers read before giving up
    """

    text: str
    choices: Mapping[str, T]
    confirmations: Mapping[T, str]
    miss_message: str
    fallback: T
    fallback_message: str
    retry_text: str | None = None
    max_attempts: int = MAX_ATTEMPTS


def ask(prompt: Prompt[T], reader: TextIO, writer: TextIO) -> T:
    """
    Ask ``prompt`` and return the resolved value.

    Answers are trimmed and matched case-insensitively. An empty read at end
    of input counts as an unrecognized answer, and ``max_attempts`` of those
    resolve to the prompt's fallback. Nothing is raised for bad input.
    """
    writer.write(prompt.text)
    writer.flush()

    for attempt in range(1, prompt.max_attempts + 1):
        line = reader.readline()
        if not line:
            logger.debug("No input on attempt %d", attempt)

        token = line.strip().lower()
        if token in prompt.choices:
            value = prompt.choices[token]
            writer.write(prompt.confirmations[value] + "\n")
            writer.flush()
            return value

        writer.write(prompt.miss_message + "\n")
        if prompt.retry_text is not None and attempt < prompt.max_attempts:
            writer.write(prompt.retry_text)
        writer.flush()

    writer.write(prompt.fallback_message + "\n")
    writer.flush()
    return prompt.fallback


def play_prompt(first_game: bool, max_attempts: int = MAX_ATTEMPTS) -> Prompt[bool]:
    """Build the 'do you want to play' question."""
    return Prompt(
        text=PLAY_PROMPT_FIRST if first_game else PLAY_PROMPT_AGAIN,
        choices={"yes": True, "no": False},
        confirmations={True: "Alright! Let's play!", False: "Okay. Maybe another time."},
        miss_message="I didn't understand that.",
        fallback=False,
        fallback_message=(
            "There seems to be a failure to communicate between us. "
            "Perhaps we'll play another time."
        ),
        max_attempts=max_attempts,
    )


def hit_or_stay_prompt(max_attempts: int = MAX_ATTEMPTS) -> Prompt[Action]:
    """Build the 'hit or stay' question."""
    return Prompt(
        text=HIT_OR_STAY_PROMPT,
        choices={"hit": Action.HIT, "stay": Action.STAY},
        confirmations={
            Action.HIT: "Okay, you want to hit.",
            Action.STAY: "Okay, you want to stay.",
        },
        miss_message="That didn't make any sense...",
        fallback=Action.STAY,
        fallback_message="Let's just assume you want to stay.",
        retry_text=HIT_OR_STAY_RETRY,
        max_attempts=max_attempts,
    )


def ask_play_blackjack(first_game: bool, reader: TextIO, writer: TextIO) -> bool:
    """Ask whether to (keep) playing. Falls back to False."""
    return ask(play_prompt(first_game), reader, writer)


def ask_hit_or_stay(reader: TextIO, writer: TextIO) -> Action:
    """Ask the player to hit or stay. Falls back to Action.STAY."""
    return ask(hit_or_stay_prompt(), reader, writer)


class ConsolePrompter:
    """Asks the game's questions over a pair of text streams."""

    def __init__(self, reader: TextIO, writer: TextIO, max_attempts: int = MAX_ATTEMPTS) -> None:
        self.reader = reader
        self.writer = writer
        self.max_attempts = max_attempts

    def ask_play(self, first_game: bool) -> bool:
        return ask(play_prompt(first_game, self.max_attempts), self.reader, self.writer)

    def ask_hit_or_stay(self) -> Action:
        return ask(hit_or_stay_prompt(self.max_attempts), self.reader, self.writer)
