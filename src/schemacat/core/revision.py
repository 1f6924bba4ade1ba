"""Version-control revision lookup for scanned directories."""

import logging
import re
from pathlib import Path
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

RevisionProvider = Callable[[Path], Optional[str]]

COMMIT_PATTERN = re.compile(r"^[0-9a-f]{40}(?:[0-9a-f]{24})?$")


def no_revision(path: Path) -> Optional[str]:
    """Revision provider that never reports a revision."""
    return None


def find_git_dir(path: Union[str, Path]) -> Optional[Path]:
    """Locate the git directory for a path by walking up its parents.

    Handles both ``.git`` directories and ``.git`` files pointing elsewhere
    (worktrees and submodules).
    """
    current = Path(path).resolve()
    for candidate in [current, *current.parents]:
        dot_git = candidate / ".git"
        if dot_git.is_dir():
            return dot_git
        if dot_git.is_file():
            content = dot_git.read_text(encoding="utf-8").strip()
            if content.startswith("gitdir:"):
                git_dir = Path(content[len("gitdir:"):].strip())
                if not git_dir.is_absolute():
                    git_dir = (candidate / git_dir).resolve()
                return git_dir
    return None


def _read_packed_ref(git_dir: Path, ref: str) -> Optional[str]:
    packed = git_dir / "packed-refs"
    if not packed.is_file():
        return None
    for line in packed.read_text(encoding="utf-8").splitlines():
        if not line or line.startswith(("#", "^")):
            continue
        sha, _, name = line.partition(" ")
        if name.strip() == ref:
            return sha.strip()
    return None


def _resolve_ref(git_dir: Path, ref: str) -> Optional[str]:
    for base in (git_dir, _common_dir(git_dir)):
        loose = base / ref
        if loose.is_file():
            return loose.read_text(encoding="utf-8").strip()
        packed = _read_packed_ref(base, ref)
        if packed:
            return packed
    return None


def _common_dir(git_dir: Path) -> Path:
    commondir = git_dir / "commondir"
    if commondir.is_file():
        return (git_dir / commondir.read_text(encoding="utf-8").strip()).resolve()
    return git_dir


def git_revision(path: Path) -> Optional[str]:
    """Return the commit hash checked out at ``path``, or None.

    Reads the repository metadata directly, without invoking git. Any
    failure to read it means no revision is reported.
    """
    try:
        git_dir = find_git_dir(path)
        if git_dir is None:
            return None
        head = (git_dir / "HEAD").read_text(encoding="utf-8").strip()
        if head.startswith("ref:"):
            sha = _resolve_ref(git_dir, head[len("ref:"):].strip())
        else:
            sha = head
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read git metadata for {path}: {e}")
        return None

    if sha and COMMIT_PATTERN.match(sha):
        return sha
    return None
