from pathlib import Path

import pytest

from workspace.manager import WorkspaceManager


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


class FakeCloner:
    """Writes a fixed file tree instead of running git."""

    def __init__(self, files=None, error=None):
        self.files = dict(files or {})
        self.error = error
        self.calls = []

    def __call__(self, clone_url, dest, *, branch, origin_url):
        self.calls.append({"clone_url": clone_url, "dest": Path(dest), "branch": branch, "origin_url": origin_url})
        dest = Path(dest)
        dest.mkdir(parents=True)
        if self.error is not None:
            # Simulate a clone that dies half way
            (dest / ".git").mkdir()
            raise self.error
        for rel, content in self.files.items():
            p = dest / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                p.write_bytes(content)
            else:
                p.write_bytes(content.encode("utf-8"))


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def workspace_dir(tmp_path):
    d = tmp_path / "workspaces"
    d.mkdir()
    return d


@pytest.fixture
def make_manager(workspace_dir):
    def _make(files=None, error=None):
        cloner = FakeCloner(files=files, error=error)
        return WorkspaceManager(base_dir=workspace_dir, cloner=cloner), cloner
    return _make
