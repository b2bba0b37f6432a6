"""Disposable per-request clones of a remote repository.

WorkspaceManager creates a uniquely named directory, shallow-clones one
branch into it (GitPython, depth 1, single branch), and removes it again.
Every directory is tracked in a WorkspaceRegistry from the moment its
path is chosen until it is successfully removed, so shutdown() can sweep
anything a crashed or cancelled request left behind.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Callable, Optional
from urllib.parse import quote, urlsplit, urlunsplit

from git import Repo

from core.errors import RepositoryFetchError
from core.models import RepositoryRef
from workspace.registry import WorkspaceRegistry

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "context-bank"

# cloner(clone_url, dest, *, branch, origin_url)
Cloner = Callable[..., None]

_GIT_ENV = {
    # Never block on an interactive credential prompt (stdin is the MCP stream)
    "GIT_TERMINAL_PROMPT": "0",
}


def inject_credential(url: str, token: Optional[str]) -> str:
    """Embed `token` as userinfo in an https URL; other schemes pass through.

    SSH URLs (ssh:// or git@host:owner/repo) rely on ambient key-based auth.
    Userinfo already present in the URL is replaced.
    """
    if not token or not url.startswith("https://"):
        return url

    parts = urlsplit(url)
    host = parts.netloc.rsplit("@", 1)[-1]
    netloc = f"{quote(token, safe=':')}@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def redact(text: str, token: Optional[str]) -> str:
    if not token:
        return text
    for secret in {token, quote(token, safe=":")}:
        text = text.replace(secret, "***")
    return text


def git_clone(clone_url: str, dest: Path, *, branch: str, origin_url: str) -> None:
    """Shallow, single-branch clone of `branch` into `dest`."""
    repo = Repo.clone_from(
        clone_url,
        str(dest),
        env=_GIT_ENV,
        depth=1,
        branch=branch,
        single_branch=True,
    )
    try:
        # Keep the credential out of .git/config
        if clone_url != origin_url:
            repo.remote("origin").set_url(origin_url)
    finally:
        repo.close()


def _remove_tree(path: Path) -> None:
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        # Never created, or already gone
        return


def _clone_failure_message(repo: RepositoryRef, err: BaseException) -> str:
    detail = (getattr(err, "stderr", None) or str(err) or err.__class__.__name__).strip()
    detail = detail.removeprefix("stderr:").strip().strip("'").strip()
    return redact(
        f"Failed to fetch repository {repo.url} (branch '{repo.branch}'): {detail}",
        repo.access_token,
    )


class WorkspaceManager:
    def __init__(
        self,
        registry: Optional[WorkspaceRegistry] = None,
        *,
        base_dir: Path,
        cloner: Optional[Cloner] = None,
    ) -> None:
        self._registry = registry or WorkspaceRegistry()
        self._base_dir = Path(base_dir)
        self._cloner = cloner or git_clone

    @property
    def registry(self) -> WorkspaceRegistry:
        return self._registry

    def new_workspace_path(self) -> Path:
        stamp = int(time.time() * 1000)
        return self._base_dir / f"{WORKSPACE_PREFIX}-{stamp}-{uuid.uuid4().hex[:8]}"

    async def acquire(self, repo: RepositoryRef) -> Path:
        """Clone `repo` into a fresh workspace and return its path.

        Raises RepositoryFetchError if the clone fails for any reason; the
        partially created directory is removed first.
        """
        path = self.new_workspace_path()
        self._base_dir.mkdir(parents=True, exist_ok=True)
        self._registry.add(path)

        clone_url = inject_credential(repo.url, repo.access_token)
        logger.info("Cloning %s (branch %s) into %s", repo.url, repo.branch, path)

        try:
            await asyncio.to_thread(
                self._cloner,
                clone_url,
                path,
                branch=repo.branch,
                origin_url=repo.url,
            )
        except Exception as e:
            await self.release(path)
            if isinstance(e, RepositoryFetchError):
                raise
            raise RepositoryFetchError(_clone_failure_message(repo, e)) from e

        return path

    async def release(self, path: Path) -> bool:
        """Remove a workspace. Failures are logged and never raised.

        A path that could not be removed stays registered so the shutdown
        sweep tries again.
        """
        try:
            await asyncio.to_thread(_remove_tree, path)
        except OSError as e:
            logger.warning("Failed to clean up workspace %s: %s", path, e)
            return False

        self._registry.discard(path)
        logger.debug("Removed workspace %s", path)
        return True

    @asynccontextmanager
    async def workspace(self, repo: RepositoryRef) -> AsyncIterator[Path]:
        path = await self.acquire(repo)
        try:
            yield path
        finally:
            await self.release(path)

    def shutdown(self) -> int:
        """Synchronously remove every workspace still registered."""
        removed = 0
        for path in self._registry.drain():
            try:
                _remove_tree(path)
            except OSError as e:
                logger.warning("Failed to clean up workspace %s at shutdown: %s", path, e)
                continue
            removed += 1

        if removed:
            logger.info("Removed %d leftover workspace(s) at shutdown", removed)
        return removed
