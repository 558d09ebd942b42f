"""Discovery of repository-local issue templates.

GitHub looks for templates in `.github/`, the repository root and `docs/`.
A directory named ISSUE_TEMPLATE holds multiple named templates; a single
ISSUE_TEMPLATE file (any extension, `-` or `_`) is the legacy form.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

ISSUE_TEMPLATE_NAME = "ISSUE_TEMPLATE"

_FRONTMATTER_PATTERN = re.compile(r"^---\r?\n(\s*\r?\n)?", re.MULTILINE)


def _candidate_dirs(root_dir: Path) -> list[Path]:
    return [root_dir / ".github", root_dir, root_dir / "docs"]


def _sorted_entries(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(directory.iterdir(), key=lambda p: p.name)


def find_non_legacy(root_dir: Path, name: str = ISSUE_TEMPLATE_NAME) -> list[Path]:
    """Find the templates in the first `name/` directory holding any markdown files."""
    for candidate in _candidate_dirs(root_dir):
        for entry in _sorted_entries(candidate):
            if entry.name.lower() != name.lower() or not entry.is_dir():
                continue
            templates = [p for p in _sorted_entries(entry) if p.name.endswith(".md")]
            if templates:
                return templates
            break
    return []


def find_legacy(root_dir: Path, name: str = ISSUE_TEMPLATE_NAME) -> Path | None:
    """Find a single-file template such as .github/ISSUE_TEMPLATE.md."""
    name_pattern = re.compile(
        r"^" + re.escape(name).replace("_", "[_-]") + r"(\.|$)", re.IGNORECASE
    )
    for candidate in _candidate_dirs(root_dir):
        for entry in _sorted_entries(candidate):
            if name_pattern.match(entry.name) and not entry.is_dir():
                return entry
    return None


def _split_frontmatter(contents: str) -> tuple[str, str] | None:
    """Split a file starting with `---` front matter into (front matter, body)."""
    matches = list(_FRONTMATTER_PATTERN.finditer(contents))
    if len(matches) > 1 and matches[0].start() == 0:
        return contents[matches[0].end() : matches[1].start()], contents[matches[1].end() :]
    return None


def extract_name(path: Path) -> str:
    """Template display name from its front matter, falling back to the file name."""
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError:
        return path.name

    split = _split_frontmatter(contents)
    if split is not None:
        try:
            data = yaml.safe_load(split[0])
        except yaml.YAMLError:
            data = None
        if isinstance(data, dict) and data.get("name"):
            return str(data["name"])
    return path.name


def extract_contents(path: Path) -> str:
    """Template body with any front matter removed."""
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError:
        return ""

    split = _split_frontmatter(contents)
    if split is not None:
        return split[1]
    return contents


@dataclass(frozen=True)
class IssueTemplates:
    """Issue templates found in a local clone."""

    non_legacy: list[Path] = field(default_factory=list)
    legacy: Path | None = None


def discover_issue_templates(root_dir: Path | None) -> IssueTemplates:
    """Find issue templates under `root_dir` (None means no local clone)."""
    if root_dir is None:
        return IssueTemplates()
    return IssueTemplates(non_legacy=find_non_legacy(root_dir), legacy=find_legacy(root_dir))
