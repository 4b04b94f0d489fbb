from __future__ import annotations

import base64
import logging
from typing import Optional

from .config import DEFAULT_FILE_EXTENSION, DEFAULT_ROOT_FOLDER
from .github_client import GitHubClient, RemoteFile


logger = logging.getLogger(__name__)


def encode_content(content: str) -> str:
    """Return the UTF-8 bytes of content as the base64 text the contents API expects."""

    return base64.b64encode(content.encode("utf-8")).decode("ascii")


def target_path(file_name: str, root_folder: str = DEFAULT_ROOT_FOLDER, extension: str = DEFAULT_FILE_EXTENSION) -> str:
    return f"{root_folder.strip('/')}/{file_name}{extension}"


def write_file(
    client: GitHubClient
    ,file_name: str
    ,content: str
    ,commit_message: str
    ,prior_sha: Optional[str] = None
    ,*
    ,root_folder: str = DEFAULT_ROOT_FOLDER
    ,extension: str = DEFAULT_FILE_EXTENSION
) -> RemoteFile:
    """Commit content to root_folder/file_name, updating in place when prior_sha is given."""

    path = target_path(file_name, root_folder, extension)
    logger.info("%s %s (%d chars)", "Updating" if prior_sha else "Creating", path, len(content))
    return client.put_file(path, encode_content(content), commit_message, sha=prior_sha)
