"""Terminal and plain-text rendering of issues.

On a terminal, lists are aligned rich tables colored by state and a single
issue is shown with its markdown body rendered. Otherwise output is stable
tab-separated or `key:\\tvalue` text for scripts.
"""

from datetime import datetime

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table
from rich.text import Text

from ghi.cli.display_utils import (
    STATE_COLORS,
    assignee_summary,
    format_timestamp,
    fuzzy_ago,
    label_summary,
    pluralize,
    project_summary,
    replace_excessive_whitespace,
    state_title,
)
from ghi.cli.output import machine_output, user_output
from ghi.github.issues.types import Issue, IssueListResult

# number, state, title, labels, updated_at
TSV_FIELD_COUNT = 5


def _stdout_console() -> Console:
    # No explicit file: rich writes to whatever sys.stdout is at print time
    return Console(force_terminal=True, highlight=False)


def _gray(text: str) -> str:
    return click.style(text, fg="bright_black")


def issue_tsv_row(issue: Issue) -> str:
    """One tab-separated line with exactly TSV_FIELD_COUNT fields."""
    fields = [
        str(issue.number),
        issue.state,
        replace_excessive_whitespace(issue.title),
        replace_excessive_whitespace(label_summary(issue)),
        format_timestamp(issue.updated_at),
    ]
    return "\t".join(fields)


def print_issues(
    issues: list[Issue],
    total_count: int,
    *,
    now: datetime,
    is_tty: bool,
    prefix: str = "",
) -> None:
    """Print issue rows followed by "And N more" when the page is incomplete.

    Off a terminal the "And N more" line goes to stderr so stdout stays a
    constant-width TSV stream.
    """
    if is_tty:
        table = Table(show_header=False, box=None, pad_edge=False, padding=(0, 2, 0, 0))
        table.add_column("number", no_wrap=True)
        table.add_column("title", no_wrap=True, overflow="ellipsis")
        table.add_column("labels", no_wrap=True, overflow="ellipsis", style="bright_black")
        table.add_column("updated", no_wrap=True, style="bright_black")
        for issue in issues:
            labels = label_summary(issue)
            table.add_row(
                Text(f"{prefix}#{issue.number}", style=STATE_COLORS.get(issue.state, "")),
                Text(replace_excessive_whitespace(issue.title)),
                Text(f"({labels})" if labels else ""),
                Text(fuzzy_ago(now - issue.updated_at)),
            )
        if issues:
            _stdout_console().print(table)
    else:
        for issue in issues:
            machine_output(f"{prefix}{issue_tsv_row(issue)}")

    remaining = total_count - len(issues)
    if remaining > 0:
        message = f"{prefix}And {remaining} more"
        if is_tty:
            machine_output(_gray(message))
        else:
            user_output(message)


def print_status_section(
    header: str, result: IssueListResult, empty_message: str, *, now: datetime, is_tty: bool
) -> None:
    """One block of the status report: bold header, rows or a gray empty notice."""
    machine_output(click.style(header, bold=True))
    if result.total_count > 0:
        print_issues(result.issues, result.total_count, now=now, is_tty=is_tty, prefix="  ")
    else:
        machine_output(_gray(f"  {empty_message}"))
    machine_output()


def print_raw_issue_preview(issue: Issue) -> None:
    """Metadata as `key:\\tvalue` lines, `--`, then the unrendered body.

    Empty values are still printed so every issue yields the same lines.
    """
    machine_output(f"title:\t{issue.title}")
    machine_output(f"state:\t{issue.state}")
    machine_output(f"author:\t{issue.author}")
    machine_output(f"labels:\t{label_summary(issue)}")
    machine_output(f"comments:\t{issue.comments_count}")
    machine_output(f"assignees:\t{assignee_summary(issue)}")
    machine_output(f"projects:\t{project_summary(issue)}")
    machine_output(f"milestone:\t{issue.milestone or ''}")
    machine_output("--")
    machine_output(issue.body)


def print_human_issue_preview(issue: Issue, *, now: datetime) -> None:
    """Colored issue summary with the markdown body rendered for the terminal."""
    machine_output(click.style(issue.title, bold=True))
    machine_output(
        click.style(state_title(issue.state), fg=STATE_COLORS.get(issue.state))
        + _gray(
            f" • {issue.author} opened {fuzzy_ago(now - issue.created_at)}"
            f" • {pluralize(issue.comments_count, 'comment')}"
        )
    )

    machine_output()
    metadata = [
        ("Assignees", assignee_summary(issue)),
        ("Labels", label_summary(issue)),
        ("Projects", project_summary(issue)),
        ("Milestone", issue.milestone or ""),
    ]
    for name, value in metadata:
        if value:
            machine_output(click.style(f"{name}: ", bold=True) + value)

    if issue.body:
        machine_output()
        _stdout_console().print(Markdown(issue.body))
    machine_output()

    machine_output(_gray(f"View this issue on GitHub: {issue.url}"))
