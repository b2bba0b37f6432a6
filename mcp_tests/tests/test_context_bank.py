import pytest

from core.errors import (
    ConfigurationError,
    NotFoundError,
    PathTraversalError,
    RepositoryFetchError,
    ValidationError,
)
from core.models import RemoteHit
from services.context_bank import ContextBank

REPO_URL = "https://example.com/team/context.git"

FIXTURE = {
    "README.md": "# Context\n",
    "docs/a.md": "# Title\nTODO: fix\ntodo later\ndone",
    "x/docs/b.md": "nothing to see\n",
    "notes.md": "TODO notes\n",
    "src/main.py": "# TODO in code\n",
    ".github/PULL_REQUEST_TEMPLATE.md": "TODO hidden\n",
}


class FakeGitHubClient:
    def __init__(self, hits=None):
        self._hits = hits or []
        self.calls = []

    async def search_code(self, *, repo_url: str, term: str, token: str):
        self.calls.append((repo_url, term, token))
        return list(self._hits)


@pytest.fixture
def bank_factory(make_manager):
    def _make(files=FIXTURE, error=None, **kwargs):
        mgr, cloner = make_manager(files=files, error=error)
        kwargs.setdefault("default_repository", REPO_URL)
        return ContextBank(mgr, **kwargs), mgr, cloner
    return _make


# ---------------------------
# resolve_repository
# ---------------------------

def test_resolve_repository_prefers_request_values(bank_factory):
    bank, _, _ = bank_factory(default_access_token="default-token")

    repo = bank.resolve_repository("https://example.com/other.git", " dev ", "req-token")
    assert (repo.url, repo.branch, repo.access_token) == ("https://example.com/other.git", "dev", "req-token")

    repo = bank.resolve_repository(None, None, "  ")
    assert (repo.url, repo.branch, repo.access_token) == (REPO_URL, "main", "default-token")


def test_resolve_repository_token_may_be_absent(bank_factory):
    bank, _, _ = bank_factory()
    assert bank.resolve_repository(None, "main", None).access_token is None


def test_resolve_repository_requires_url(bank_factory):
    bank, _, _ = bank_factory(default_repository=None)
    with pytest.raises(ConfigurationError) as exc:
        bank.resolve_repository("  ", "main", None)
    assert "MCP_CONTEXT_BANK_REPOSITORY" in str(exc.value)


@pytest.mark.asyncio
async def test_missing_repository_fails_before_any_fetch(bank_factory):
    bank, _, cloner = bank_factory(default_repository=None)

    with pytest.raises(ConfigurationError):
        await bank.list_markdown_files()
    with pytest.raises(ConfigurationError):
        await bank.get_file_content(file_path="README.md")
    with pytest.raises(ConfigurationError):
        await bank.search_markdown_content(search_term="TODO")

    assert cloner.calls == []


# ---------------------------
# list_markdown_files
# ---------------------------

@pytest.mark.asyncio
async def test_list_markdown_files(bank_factory, workspace_dir):
    bank, mgr, cloner = bank_factory()

    out = await bank.list_markdown_files(branch="main")

    assert out == {
        "repository": REPO_URL,
        "branch": "main",
        "files": ["README.md", "docs/a.md", "notes.md", "x/docs/b.md"],
        "total_files": 4,
    }
    assert cloner.calls[0]["branch"] == "main"
    assert list(workspace_dir.iterdir()) == []
    assert len(mgr.registry) == 0


@pytest.mark.asyncio
async def test_list_markdown_files_with_filter(bank_factory):
    bank, _, _ = bank_factory()

    out = await bank.list_markdown_files(path_filter="docs/")
    assert out["files"] == ["docs/a.md", "x/docs/b.md"]

    out = await bank.list_markdown_files(path_filter="notes")
    assert out["files"] == ["notes.md"]


@pytest.mark.asyncio
async def test_fetch_failure_propagates_and_cleans_up(bank_factory, workspace_dir):
    bank, mgr, _ = bank_factory(error=RuntimeError("Remote branch nope not found"))

    with pytest.raises(RepositoryFetchError) as exc:
        await bank.list_markdown_files(branch="nope")

    assert "Remote branch nope not found" in str(exc.value)
    assert list(workspace_dir.iterdir()) == []
    assert len(mgr.registry) == 0


# ---------------------------
# get_file_content
# ---------------------------

@pytest.mark.asyncio
async def test_get_file_content_round_trip(bank_factory, workspace_dir):
    content = "# Guide\r\n\nLine with ünïcode\n"
    bank, _, _ = bank_factory(files={"docs/guide.md": content})

    out = await bank.get_file_content(file_path="docs/guide.md", branch="dev")

    assert out == {
        "repository": REPO_URL,
        "branch": "dev",
        "file_path": "docs/guide.md",
        "content": content,
        "size": len(content),
    }
    assert list(workspace_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_get_file_content_not_found_cleans_up(bank_factory, workspace_dir):
    bank, mgr, _ = bank_factory()

    with pytest.raises(NotFoundError) as exc:
        await bank.get_file_content(file_path="docs/missing.md")

    assert str(exc.value) == "File not found: docs/missing.md"
    assert list(workspace_dir.iterdir()) == []
    assert len(mgr.registry) == 0


@pytest.mark.asyncio
async def test_get_file_content_traversal_cleans_up(bank_factory, workspace_dir):
    bank, _, _ = bank_factory()

    with pytest.raises(PathTraversalError):
        await bank.get_file_content(file_path="../../etc/passwd")

    assert list(workspace_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_get_file_content_requires_path_before_any_fetch(bank_factory):
    bank, _, cloner = bank_factory()

    with pytest.raises(ValidationError) as exc:
        await bank.get_file_content(file_path="   ")

    assert str(exc.value) == "File path cannot be empty"
    assert cloner.calls == []


# ---------------------------
# search_markdown_content
# ---------------------------

@pytest.mark.asyncio
async def test_search_case_insensitive(bank_factory, workspace_dir):
    bank, _, _ = bank_factory()

    out = await bank.search_markdown_content(search_term="TODO")

    assert out["search_term"] == "TODO"
    assert out["case_sensitive"] is False
    assert out["results"] == [
        {
            "file_path": "docs/a.md",
            "matches": [
                {"line_number": 2, "line_content": "TODO: fix"},
                {"line_number": 3, "line_content": "todo later"},
            ],
            "total_matches": 2,
        },
        {
            "file_path": "notes.md",
            "matches": [{"line_number": 1, "line_content": "TODO notes"}],
            "total_matches": 1,
        },
    ]
    assert out["total_files_with_matches"] == 2
    assert out["total_matches"] == 3
    assert list(workspace_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_search_case_sensitive(bank_factory):
    bank, _, _ = bank_factory()

    out = await bank.search_markdown_content(search_term="todo", case_sensitive=True)

    assert [r["file_path"] for r in out["results"]] == ["docs/a.md"]
    assert out["results"][0]["matches"] == [{"line_number": 3, "line_content": "todo later"}]
    assert out["total_matches"] == 1


@pytest.mark.asyncio
async def test_search_requires_term_before_any_fetch(bank_factory):
    bank, _, cloner = bank_factory()

    with pytest.raises(ValidationError) as exc:
        await bank.search_markdown_content(search_term="")

    assert str(exc.value) == "Search term cannot be empty"
    assert cloner.calls == []


@pytest.mark.asyncio
async def test_search_uses_github_api_for_github_repo_with_token(bank_factory):
    gh_url = "https://github.com/octocat/context.git"
    client = FakeGitHubClient(hits=[RemoteHit(file_path="docs/a.md", repository=gh_url, url="https://x")])
    bank, _, cloner = bank_factory(
        default_repository=gh_url,
        default_access_token="tok",
        github_client=client,
    )

    out = await bank.search_markdown_content(search_term="TODO", branch="main")

    assert cloner.calls == []
    assert client.calls == [(gh_url, "TODO", "tok")]
    assert out["results"] == [{"file_path": "docs/a.md", "repository": gh_url, "url": "https://x"}]
    assert out["total_files_with_matches"] == 1
    assert out["total_matches"] == 1


@pytest.mark.asyncio
async def test_search_clones_when_remote_search_disabled(bank_factory):
    gh_url = "https://github.com/octocat/context.git"
    client = FakeGitHubClient()
    bank, _, cloner = bank_factory(
        default_repository=gh_url,
        default_access_token="tok",
        github_client=client,
        remote_search_enabled=False,
    )

    out = await bank.search_markdown_content(search_term="TODO")

    assert client.calls == []
    assert len(cloner.calls) == 1
    assert out["total_matches"] == 3
