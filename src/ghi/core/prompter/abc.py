"""Abstract interface for interactive prompts."""

from abc import ABC, abstractmethod


class Prompter(ABC):
    """Terminal questions asked by the interactive survey.

    Callers only use a Prompter when stdin and stdout are terminals.
    """

    @abstractmethod
    def input(self, message: str, default: str = "") -> str:
        """Ask for a single line of text."""
        ...

    @abstractmethod
    def edit(self, message: str, default: str = "") -> str:
        """Compose multi-line text in the user's editor, seeded with `default`."""
        ...

    @abstractmethod
    def select(self, message: str, options: list[str], default: str | None = None) -> str:
        """Choose exactly one of `options` and return it."""
        ...

    @abstractmethod
    def multi_select(
        self, message: str, options: list[str], defaults: list[str] | None = None
    ) -> list[str]:
        """Choose any subset of `options`, returned in option order."""
        ...
