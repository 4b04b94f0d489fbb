from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .config import DEFAULT_TIMEOUT, GITHUB_BASE_URL
from .errors import RepositoryListError, RequestTimeoutError, WriteConflictError, WriteError


logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github+json"
# GitHub answers a root listing of a repository without commits with this 404 message.
EMPTY_REPOSITORY = "repository is empty"


@dataclass(frozen=True)
class RemoteFile:
    name: str
    path: str
    sha: str
    commit_sha: Optional[str] = None
    html_url: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "RemoteFile":
        """Build a RemoteFile from the body returned by a contents PUT."""

        content = data.get("content") or {}
        commit = data.get("commit") or {}
        return cls(
            name=content.get("name", "")
            ,path=content.get("path", "")
            ,sha=content.get("sha", "")
            ,commit_sha=commit.get("sha")
            ,html_url=content.get("html_url") or commit.get("html_url")
        )


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    return data.get("message", response.text) if isinstance(data, dict) else response.text


class GitHubClient:
    def __init__(
        self
        ,username: str
        ,token: str
        ,repo_name: str
        ,*
        ,base_url: str = GITHUB_BASE_URL
        ,timeout: float = DEFAULT_TIMEOUT
        ,session: Optional[requests.Session] = None
    ) -> None:
        """Initialize a session authenticated against the given user's repository."""

        self.username = username
        self.repo_name = repo_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = (username, token)
        self.session.headers.update({"Accept": GITHUB_ACCEPT})

    def contents_url(self, path: str = "") -> str:
        return f"{self.base_url}/repos/{self.username}/{self.repo_name}/contents/{quote(path.strip('/'), safe='/')}"

    def list_contents(self, path: str = "") -> List[Dict[str, Any]]:
        """Return the entries of a repository directory (the root when path is empty)."""

        url = self.contents_url(path)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as exc:
            raise RequestTimeoutError(f"Listing '{path or '/'}'", self.timeout) from exc
        except requests.RequestException as exc:
            raise RepositoryListError(f"Could not reach GitHub to list '{path or '/'}': {exc}") from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as err:
            message = _error_message(response)
            if response.status_code == 404 and not path.strip("/") and EMPTY_REPOSITORY in message.lower():
                logger.info("Repository %s/%s is empty", self.username, self.repo_name)
                return []
            logger.error("GitHub listing of '%s' failed: %s", path or "/", message)
            raise RepositoryListError(
                f"GitHub returned {response.status_code} listing '{path or '/'}': {message}"
                ,status_code=response.status_code
            ) from err

        try:
            data = response.json()
        except ValueError as exc:
            raise RepositoryListError(f"GitHub listing of '{path or '/'}' is not JSON: {response.text[:200]!r}") from exc
        if not isinstance(data, list):
            raise RepositoryListError(f"'{path or '/'}' is a file, not a directory")
        return data

    def put_file(self, path: str, content_b64: str, message: str, sha: Optional[str] = None) -> RemoteFile:
        """Create or update a file; passing sha turns the write into an optimistic-concurrency update."""

        payload: Dict[str, str] = {"message": message, "content": content_b64}
        if sha:
            payload["sha"] = sha

        url = self.contents_url(path)
        try:
            response = self.session.put(url, json=payload, timeout=self.timeout)
        except requests.Timeout as exc:
            raise RequestTimeoutError(f"Writing '{path}'", self.timeout) from exc
        except requests.RequestException as exc:
            raise WriteError(f"Could not reach GitHub to write '{path}': {exc}") from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as err:
            message_text = _error_message(response)
            logger.error("GitHub write of '%s' failed: %s", path, message_text)
            # 409 is a stale sha; 422 mentioning sha means the file exists and no sha was sent.
            if response.status_code == 409 or (response.status_code == 422 and "sha" in message_text.lower()):
                raise WriteConflictError(
                    f"'{path}' changed on GitHub since it was inspected: {message_text}"
                    ,status_code=response.status_code
                ) from err
            raise WriteError(
                f"GitHub returned {response.status_code} writing '{path}': {message_text}"
                ,status_code=response.status_code
            ) from err

        try:
            data = response.json()
        except ValueError as exc:
            raise WriteError(f"GitHub write of '{path}' returned a non-JSON body: {response.text[:200]!r}") from exc
        if not isinstance(data, dict):
            raise WriteError(f"GitHub write of '{path}' returned an unexpected body: {response.text[:200]!r}")
        return RemoteFile.from_api_response(data)
