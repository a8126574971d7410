"""
Interactive Yes/No menu used to gate the optional bootstrap step.

The menu behaves like the shell ``select`` builtin: choices are listed with
numbers, the user answers with a number (or the choice label), invalid input
re-prompts and an empty line re-displays the menu. End of input ends the
prompt without a choice, which callers treat as "No".

The prompt is an explicit state machine so tests can drive it with canned
input:

    >>> answers = iter(["3", "1"])
    >>> prompt = YesNoPrompt("Install?", input_fn=lambda _: next(answers))
    >>> prompt.ask()
    True
"""

import logging
from enum import Enum
from typing import Callable, Optional, Sequence, TextIO

logger = logging.getLogger(__name__)

MENU_PROMPT = "#? "


class PromptState(Enum):
    """States of the Yes/No prompt."""

    PROMPTING = "prompting"
    VALIDATED = "validated"
    SKIPPED = "skipped"


class YesNoPrompt:
    """
    Blocking two-choice prompt with injectable input.

    Attributes:
        question: Question printed above the menu
        choices: Menu labels; the first one means "yes"
        state: Current PromptState
        answer: Selected label once VALIDATED, else None
        attempts: Number of lines read so far
    """

    def __init__(
        self,
        question: str,
        choices: Sequence[str] = ("Yes", "No"),
        input_fn: Optional[Callable[[str], str]] = None,
        output: Optional[TextIO] = None,
    ):
        if len(choices) != 2:
            raise ValueError(f"Expected exactly two choices, got {len(choices)}")

        self.question = question
        self.choices = tuple(choices)
        self.input_fn = input_fn if input_fn is not None else input
        self.output = output
        self.state = PromptState.PROMPTING
        self.answer: Optional[str] = None
        self.attempts = 0

    def _print(self, text: str) -> None:
        print(text, file=self.output)

    def _print_menu(self) -> None:
        for index, label in enumerate(self.choices, start=1):
            self._print(f"{index}) {label}")

    def match(self, reply: str) -> Optional[str]:
        """
        Map a reply to a choice label.

        Accepts the 1-based menu number or the label itself (case-insensitive).

        Returns:
            Matching label, or None if the reply is not a valid choice
        """
        reply = reply.strip()
        if reply.isdigit():
            index = int(reply)
            if 1 <= index <= len(self.choices):
                return self.choices[index - 1]
            return None

        for label in self.choices:
            if reply.lower() == label.lower():
                return label
        return None

    def step(self) -> PromptState:
        """
        Read one line of input and advance the state machine.

        Returns:
            The new state
        """
        if self.state is not PromptState.PROMPTING:
            return self.state

        try:
            reply = self.input_fn(MENU_PROMPT)
        except EOFError:
            logger.debug("Input closed before a choice was made")
            self.state = PromptState.SKIPPED
            return self.state

        self.attempts += 1

        if not reply.strip():
            self._print_menu()
            return self.state

        label = self.match(reply)
        if label is None:
            logger.debug(f"Invalid choice: {reply!r}")
            return self.state

        self.answer = label
        self.state = PromptState.VALIDATED
        return self.state

    def ask(self) -> bool:
        """
        Show the question and menu, then block until a valid choice is made.

        Returns:
            True if the first choice ("Yes") was selected, False otherwise
            (including when input ends before a choice is made)
        """
        self._print(self.question)
        self._print_menu()

        while self.step() is PromptState.PROMPTING:
            pass

        return self.state is PromptState.VALIDATED and self.answer == self.choices[0]
