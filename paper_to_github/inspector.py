from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Union

from .config import DEFAULT_ROOT_FOLDER
from .github_client import GitHubClient


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateFile:
    kind = "create"


@dataclass(frozen=True)
class UpdateFile:
    prior_sha: str
    kind = "update"


FileAction = Union[CreateFile, UpdateFile]


def find_entry(entries: Iterable[Dict[str, Any]], entry_type: str, name: str) -> Optional[Dict[str, Any]]:
    """Return the first listing entry of the given type ("file" or "dir") with an exact name match."""

    return next((entry for entry in entries if entry.get("type") == entry_type and entry.get("name") == name), None)


def decide_action(client: GitHubClient, file_name: str, root_folder: str = DEFAULT_ROOT_FOLDER) -> FileAction:
    """Decide whether root_folder/file_name has to be created or updated.

    The two listings are separate requests, so the folder or file can change
    between them; a stale answer surfaces later as a rejected write.
    """

    folder = find_entry(client.list_contents(), "dir", root_folder)
    if folder is None:
        logger.info("No '%s' folder in the repository; %s will be created", root_folder, file_name)
        return CreateFile()

    existing = find_entry(client.list_contents(root_folder), "file", file_name)
    if existing is None:
        logger.info("%s not found in '%s'; it will be created", file_name, root_folder)
        return CreateFile()

    logger.info("%s exists in '%s' at %s; it will be updated", file_name, root_folder, existing["sha"])
    return UpdateFile(prior_sha=existing["sha"])
