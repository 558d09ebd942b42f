"""Scripted prompter for testing."""

from ghi.core.prompter.abc import Prompter


class FakePrompter(Prompter):
    """Answers prompts from pre-scripted queues and records every question.

    This class has NO public setup methods. All answers are provided via
    constructor. Running out of answers fails the test with AssertionError.
    """

    def __init__(
        self,
        *,
        inputs: list[str] | None = None,
        edits: list[str] | None = None,
        selects: list[str] | None = None,
        multi_selects: list[list[str]] | None = None,
    ) -> None:
        """Create FakePrompter with scripted answers.

        Args:
            inputs: Answers to input(), in order
            edits: Editor results for edit(), in order
            selects: Options chosen by select(), in order (must be offered)
            multi_selects: Option subsets chosen by multi_select(), in order
        """
        self._inputs = list(inputs or [])
        self._edits = list(edits or [])
        self._selects = list(selects or [])
        self._multi_selects = list(multi_selects or [])
        self._questions: list[str] = []
        self._offered: list[list[str]] = []

    @property
    def questions(self) -> list[str]:
        """Messages of every prompt shown, in order."""
        return self._questions

    @property
    def offered(self) -> list[list[str]]:
        """Options shown by each select() and multi_select() call."""
        return self._offered

    def input(self, message: str, default: str = "") -> str:
        self._questions.append(message)
        if not self._inputs:
            raise AssertionError(f"Unexpected input prompt: {message}")
        return self._inputs.pop(0)

    def edit(self, message: str, default: str = "") -> str:
        self._questions.append(message)
        if not self._edits:
            raise AssertionError(f"Unexpected editor prompt: {message}")
        return self._edits.pop(0)

    def select(self, message: str, options: list[str], default: str | None = None) -> str:
        self._questions.append(message)
        self._offered.append(options)
        if not self._selects:
            raise AssertionError(f"Unexpected select prompt: {message}")
        answer = self._selects.pop(0)
        if answer not in options:
            raise AssertionError(f"{answer!r} not offered for {message!r}: {options}")
        return answer

    def multi_select(
        self, message: str, options: list[str], defaults: list[str] | None = None
    ) -> list[str]:
        self._questions.append(message)
        self._offered.append(options)
        if not self._multi_selects:
            raise AssertionError(f"Unexpected multi-select prompt: {message}")
        answers = self._multi_selects.pop(0)
        for answer in answers:
            if answer not in options:
                raise AssertionError(f"{answer!r} not offered for {message!r}: {options}")
        return answers
