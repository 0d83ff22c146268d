"""Shared fakes for pr-commentator tests."""

import json

import httpx
import pytest

from pr_commentator.github import Comment, CommentApi, GitHubClient, NotFound

TEST_TOKEN = "ghp_1234567890abcdef"
TEST_API_URL = "https://api.github.com"


class FakeGitHub:
    """In-memory stand-in for the GitHub REST endpoints, served through httpx.MockTransport."""

    def __init__(self):
        self.pulls: list[dict] = []
        self.comments: dict[int, list[dict]] = {}
        self.requests: list[httpx.Request] = []
        # (method, path) -> canned response, checked before the default routes
        self.responses: dict[tuple[str, str], httpx.Response] = {}
        self._next_id = 1000

    def add_pull(self, number: int, ref: str) -> None:
        self.pulls.append({"number": number, "head": {"ref": ref, "sha": "abc123"}})

    def add_comment(self, pr_number: int, body: str | None) -> int:
        self._next_id += 1
        self.comments.setdefault(pr_number, []).append({"id": self._next_id, "body": body})
        return self._next_id

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        canned = self.responses.get((request.method, request.url.path))
        if canned is not None:
            return canned

        parts = request.url.path.strip("/").split("/")
        if len(parts) == 4 and parts[3] == "pulls" and request.method == "GET":
            return httpx.Response(200, json=self.pulls)

        if len(parts) == 6 and parts[3:5] == ["issues", "comments"] and request.method == "PATCH":
            comment_id = int(parts[5])
            for comments in self.comments.values():
                for comment in comments:
                    if comment["id"] == comment_id:
                        comment["body"] = json.loads(request.content)["body"]
                        return httpx.Response(200, json=comment)
            return httpx.Response(404, json={"message": "Not Found"})

        if len(parts) == 6 and parts[3] == "issues" and parts[5] == "comments":
            pr_number = int(parts[4])
            if request.method == "GET":
                return httpx.Response(200, json=self.comments.get(pr_number, []))
            if request.method == "POST":
                comment_id = self.add_comment(pr_number, json.loads(request.content)["body"])
                return httpx.Response(201, json={"id": comment_id})

        return httpx.Response(404, json={"message": "Not Found"})


class FakeCommentApi(CommentApi):
    """CommentApi that records calls instead of talking to a server."""

    def __init__(self, pulls: dict[str, int] | None = None, comments: list[Comment] | None = None):
        self.pulls = pulls or {}
        self.comments = comments or []
        self.calls: list[tuple] = []
        self.closed = False

    async def resolve_pr_for_ref(self, owner: str, repo: str, ref_name: str) -> int:
        self.calls.append(("resolve", owner, repo, ref_name))
        if ref_name not in self.pulls:
            raise NotFound(f"{owner}/{repo}", ref_name)
        return self.pulls[ref_name]

    async def list_comments(self, owner: str, repo: str, pr_number: int) -> list[Comment]:
        self.calls.append(("list", owner, repo, pr_number))
        return list(self.comments)

    async def create_comment(self, owner: str, repo: str, pr_number: int, body: str) -> None:
        self.calls.append(("create", owner, repo, pr_number, body))

    async def edit_comment(self, owner: str, repo: str, comment_id: int, body: str) -> None:
        self.calls.append(("edit", owner, repo, comment_id, body))

    async def close(self) -> None:
        self.closed = True

    def calls_named(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def client(fake_github):
    """GitHubClient wired to the in-memory GitHub."""
    return GitHubClient(
        base_url=TEST_API_URL,
        token=TEST_TOKEN,
        transport=httpx.MockTransport(fake_github.handler),
    )


@pytest.fixture
def make_api():
    """Factory for FakeCommentApi instances."""
    return FakeCommentApi
