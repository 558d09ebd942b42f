"""Prompts implemented with click."""

import click

from ghi.core.prompter.abc import Prompter


def _print_options(message: str, options: list[str]) -> None:
    click.echo(click.style("? ", fg="green") + click.style(message, bold=True), err=True)
    for index, option in enumerate(options, start=1):
        click.echo(f"  {index}) {option}", err=True)


class RealPrompter(Prompter):
    """Production prompter.

    Menus are numbered lists answered by number; the body is composed with
    `click.edit`, which honours the configured editor before VISUAL/EDITOR.
    """

    def __init__(self, editor: str | None) -> None:
        self._editor = editor

    def input(self, message: str, default: str = "") -> str:
        return click.prompt(
            click.style("? ", fg="green") + message,
            default=default,
            show_default=bool(default),
            err=True,
        )

    def edit(self, message: str, default: str = "") -> str:
        click.echo(
            click.style("? ", fg="green") + f"{message} [launching editor]",
            err=True,
        )
        edited = click.edit(default, editor=self._editor, extension=".md", require_save=False)
        if edited is None:
            return default
        return edited

    def select(self, message: str, options: list[str], default: str | None = None) -> str:
        _print_options(message, options)
        default_number = options.index(default) + 1 if default in options else 1
        number = click.prompt(
            "Choose",
            type=click.IntRange(1, len(options)),
            default=default_number,
            err=True,
        )
        return options[number - 1]

    def multi_select(
        self, message: str, options: list[str], defaults: list[str] | None = None
    ) -> list[str]:
        _print_options(message, options)
        default_numbers = [str(options.index(d) + 1) for d in defaults or [] if d in options]
        while True:
            answer = click.prompt(
                "Choose (comma-separated numbers, blank for none)",
                default=",".join(default_numbers),
                show_default=bool(default_numbers),
                err=True,
            )
            chosen = _parse_numbers(answer, len(options))
            if chosen is not None:
                return [options[i - 1] for i in sorted(chosen)]
            click.echo(click.style("Invalid selection: ", fg="red") + answer, err=True)


def _parse_numbers(answer: str, count: int) -> set[int] | None:
    numbers: set[int] = set()
    for part in answer.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit():
            return None
        number = int(part)
        if number < 1 or number > count:
            return None
        numbers.add(number)
    return numbers
