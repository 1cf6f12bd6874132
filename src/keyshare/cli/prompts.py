"""Interactive line prompts for the CLI layer.

Implements :class:`~keyshare.core.protocols.Prompter` with questionary
text questions.  Answers are returned raw — an empty answer is a valid
way to decline, so no validation happens here.
"""

from __future__ import annotations

from typing import Any

from keyshare.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive input."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryPrompter:
    """Ask free-text questions on the terminal.

    Raises
    ------
    KeyboardInterrupt
        When the user cancels a question (questionary returns ``None``).
    """

    def ask(self, message: str) -> str:
        questionary = _import_questionary()
        answer: str | None = questionary.text(message).ask()
        if answer is None:
            raise KeyboardInterrupt
        return answer
