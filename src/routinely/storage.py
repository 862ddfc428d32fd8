"""Markdown-with-frontmatter I/O and git helpers for persistent data files.

Each item is one `.md` file: a YAML mapping between `---` delimiters followed
by a free-text body. Files are named after a slug of the body and found again
by the `id` key in their frontmatter.
"""

import logging
import os
import re
import subprocess
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import yaml

from routinely.config import TZ as TZ

DATA_DIR = Path.home() / ".routinely"

T = TypeVar("T")
log = logging.getLogger(__name__)


def _find_repo(filepath: Path) -> Path | None:
    """Walk up from filepath to find the nearest git repo root."""
    for parent in filepath.parents:
        if (parent / ".git").is_dir():
            return parent
    return None


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True)


def git_commit(filepath: Path, message: str) -> None:
    """No-op when no git repo is found above filepath."""
    repo = _find_repo(filepath)
    if repo is None:
        return
    rel = str(filepath.relative_to(repo))
    _git(repo, "add", rel)
    _git(repo, "commit", "-m", message, "--", rel)


def git_rm_commit(filepath: Path, message: str) -> None:
    """Remove a file from git and commit. No-op when no git repo is found."""
    repo = _find_repo(filepath)
    if repo is None:
        return
    rel = str(filepath.relative_to(repo))
    _git(repo, "rm", "-f", "--cached", "--ignore-unmatch", rel)
    _git(repo, "commit", "-m", message, "--", rel)


def _slugify(text: str, max_len: int = 50) -> str:
    """Convert text to a filesystem-safe slug."""
    slug = text.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = slug.strip("-")
    if len(slug) > max_len:
        slug = slug[:max_len].rstrip("-")
    return slug or "item"


def dump_md(data: dict[str, Any], body: str) -> str:
    """Build YAML frontmatter + markdown body."""
    frontmatter = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return f"---\n{frontmatter}---\n{body}\n"


def parse_md(text: str) -> tuple[dict[str, Any], str]:
    """Split a markdown file into its frontmatter mapping and stripped body."""
    parts = text.split("---", 2)
    if len(parts) < 3:
        raise ValueError("Missing YAML frontmatter delimiters")
    data = yaml.safe_load(parts[1])
    if not isinstance(data, dict):
        raise ValueError("YAML frontmatter is not a mapping")
    return data, parts[2].strip()


def _read_id(filepath: Path) -> str | None:
    try:
        data, _ = parse_md(filepath.read_text())
    except (ValueError, yaml.YAMLError):
        return None
    item_id = data.get("id")
    return None if item_id is None else str(item_id)


def _find_by_id(dir_path: Path, item_id: str) -> Path | None:
    if not dir_path.is_dir():
        return None
    for filepath in sorted(dir_path.glob("*.md")):
        if _read_id(filepath) == item_id:
            return filepath
    return None


def read_md_dir(dir_path: Path, load: Callable[[dict[str, Any], str], T]) -> list[T]:
    """Read all .md files in a directory through `load(frontmatter, body)`."""
    if not dir_path.is_dir():
        return []
    result: list[T] = []
    for filepath in sorted(dir_path.glob("*.md")):
        try:
            data, body = parse_md(filepath.read_text())
            result.append(load(data, body))
        except (ValueError, yaml.YAMLError, TypeError, KeyError):
            log.warning("Skipping corrupt file: %s", filepath)
    return result


def read_md(dir_path: Path, item_id: str, load: Callable[[dict[str, Any], str], T]) -> T | None:
    """Load the single item whose frontmatter id matches, or None."""
    filepath = _find_by_id(dir_path, item_id)
    if filepath is None:
        return None
    try:
        data, body = parse_md(filepath.read_text())
        return load(data, body)
    except (ValueError, yaml.YAMLError, TypeError, KeyError):
        log.warning("Skipping corrupt file: %s", filepath)
        return None


def write_md(dir_path: Path, data: dict[str, Any], body: str, commit_msg: str) -> Path:
    """Write one item as a slug-named .md file. Atomic write.

    An existing file for the same id is replaced; if the slug changed the old
    file is removed after the new one lands.
    """
    dir_path.mkdir(parents=True, exist_ok=True)
    item_id = str(data["id"])
    previous = _find_by_id(dir_path, item_id)

    slug = _slugify(body)
    target = dir_path / f"{slug}.md"
    counter = 2
    while target.exists() and target != previous:
        target = dir_path / f"{slug}-{counter}.md"
        counter += 1

    fd, tmp = tempfile.mkstemp(dir=dir_path, suffix=".tmp")
    try:
        os.write(fd, dump_md(data, body).encode())
    finally:
        os.close(fd)
    os.replace(tmp, target)

    if previous is not None and previous != target:
        previous.unlink()
        git_rm_commit(previous, commit_msg)
    git_commit(target, commit_msg)
    return target


def remove_md(dir_path: Path, item_id: str, commit_msg: str) -> bool:
    """Find and delete the .md file whose YAML id matches item_id."""
    filepath = _find_by_id(dir_path, item_id)
    if filepath is None:
        return False
    filepath.unlink()
    git_rm_commit(filepath, commit_msg)
    return True
