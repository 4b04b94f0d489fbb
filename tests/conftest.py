from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from paper_to_github.github_client import GitHubClient
from paper_to_github.paper_client import PaperClient


class FakeResponse:
    def __init__(
        self
        ,status_code: int = 200
        ,*
        ,json_body: Any = None
        ,body: str = ""
        ,headers: Optional[Dict[str, str]] = None
        ,raw: Optional[bytes] = None
    ) -> None:
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.text = json.dumps(json_body) if json_body is not None else body
        self.content = raw if raw is not None else self.text.encode("utf-8")

    def json(self) -> Any:
        return json.loads(self.text)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


Route = Union[FakeResponse, Exception]


class FakeSession:
    """Stands in for requests.Session: answers from a (method, url) table and records every call."""

    def __init__(self, routes: Optional[Dict[Tuple[str, str], Route]] = None) -> None:
        self.routes = dict(routes or {})
        self.headers: Dict[str, str] = {}
        self.auth = None
        self.calls: List[Dict[str, Any]] = []

    def _dispatch(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        route = self.routes.get((method, url))
        if route is None:
            return FakeResponse(404, json_body={"message": "Not Found"})
        if isinstance(route, Exception):
            raise route
        return route

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._dispatch("PUT", url, **kwargs)


GITHUB = "https://api.github.test"
PAPER = "https://paper.test/2/paper"
CONTENTS = f"{GITHUB}/repos/octo/notes/contents"


def paper_response(title: str, content: str, owner: str = "owner@example.com", revision: int = 3) -> FakeResponse:
    result = json.dumps({"title": title, "owner": owner, "revision": revision, "mime_type": "text/html"})
    return FakeResponse(200, body=content, headers={"Dropbox-API-Result": result})


def put_response(path: str, sha: str = "newsha", commit_sha: str = "c0ffee") -> FakeResponse:
    name = path.rsplit("/", 1)[-1]
    return FakeResponse(
        200
        ,json_body={
            "content": {
                "name": name
                ,"path": path
                ,"sha": sha
                ,"html_url": f"https://github.test/octo/notes/blob/main/{path}"
            }
            ,"commit": {"sha": commit_sha, "message": "sync"}
        }
    )


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def github(session: FakeSession) -> GitHubClient:
    return GitHubClient("octo", "ghp_token", "notes", base_url=GITHUB, timeout=5, session=session)


@pytest.fixture
def paper(session: FakeSession) -> PaperClient:
    return PaperClient("paper-token", base_url=PAPER, timeout=5, session=session)
