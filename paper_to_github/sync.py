from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Optional
from urllib.parse import urlparse

from .config import DEFAULT_FILE_EXTENSION, DEFAULT_ROOT_FOLDER
from .errors import DocumentFetchError, DocumentIdExtractionError
from .github_client import GitHubClient, RemoteFile
from .inspector import FileAction, UpdateFile, decide_action
from .paper_client import PaperClient, PaperDoc
from .writer import target_path, write_file


DOC_ID_RE = re.compile(r"^[A-Za-z0-9]+$")
PATH_SEPARATOR_RE = re.compile(r"[ /\\]")

logger = logging.getLogger(__name__)


def get_doc_id_from_url(doc_url: str) -> str:
    """Return the Paper doc ID, i.e. whatever follows the last hyphen of the URL's final path segment.

    Query strings and fragments are ignored, so
    ``https://paper.dropbox.com/doc/Release-Notes--AbC-sDlEjZ4dVnJNkCiKCDLAz?edit=1``
    yields ``sDlEjZ4dVnJNkCiKCDLAz``.
    """

    cleaned = doc_url.strip()
    path = urlparse(cleaned).path if "://" in cleaned else cleaned.split("?", 1)[0].split("#", 1)[0]
    last_segment = path.rstrip("/").rsplit("/", 1)[-1]
    if "-" not in last_segment:
        raise DocumentIdExtractionError(f"No '-<doc id>' suffix found in {doc_url!r}")

    doc_id = last_segment.rsplit("-", 1)[1]
    if not DOC_ID_RE.match(doc_id):
        raise DocumentIdExtractionError(f"{doc_id!r} from {doc_url!r} does not look like a Paper doc ID")
    return doc_id


def get_file_name_from_title(title: str) -> str:
    """Lower-cased, hyphen-separated file name for a doc title: "My Great Doc" -> "my-great-doc".

    Path separators become hyphens too, so the file always lands directly in the root folder.
    """

    return PATH_SEPARATOR_RE.sub("-", title.strip()).lower()


@dataclass
class SyncResult:
    doc: PaperDoc
    file_name: str
    path: str
    action: FileAction

    remote_file: Optional[RemoteFile] = None

    @property
    def written(self) -> bool:
        return self.remote_file is not None


def sync_document(
    doc_url: str
    ,commit_message: str
    ,*
    ,paper: PaperClient
    ,github: GitHubClient
    ,root_folder: str = DEFAULT_ROOT_FOLDER
    ,extension: str = DEFAULT_FILE_EXTENSION
    ,dry_run: bool = False
    ,debug_logger: Optional[logging.Logger] = None
) -> SyncResult:
    """Download the Paper doc behind doc_url and commit it to the repository, creating or updating the file.

    A literal ``{title}`` in commit_message is replaced with the doc title.
    """

    if not commit_message or not commit_message.strip():
        raise ValueError("A commit message is required")

    doc_id = get_doc_id_from_url(doc_url)
    logger.info("Downloading Paper doc %s", doc_id)
    doc = paper.download_doc(doc_id)

    file_name = get_file_name_from_title(doc.title)
    if not file_name:
        raise DocumentFetchError(f"Paper doc {doc_id} has a blank title")
    if debug_logger:
        debug_logger.info(
            "Fetched doc %s (owner=%s, revision=%s, %d chars) -> %s"
            ,doc_id, doc.owner, doc.revision, len(doc.content), file_name
        )

    action = decide_action(github, f"{file_name}{extension}", root_folder)
    result = SyncResult(
        doc=doc
        ,file_name=file_name
        ,path=target_path(file_name, root_folder, extension)
        ,action=action
    )
    if dry_run:
        logger.info("Dry run: would %s %s", action.kind, result.path)
        return result

    prior_sha = action.prior_sha if isinstance(action, UpdateFile) else None
    result.remote_file = write_file(
        github
        ,file_name
        ,doc.content
        ,commit_message.replace("{title}", doc.title)
        ,prior_sha
        ,root_folder=root_folder
        ,extension=extension
    )
    if debug_logger:
        debug_logger.info("Response for %s:\n%s", result.path, json.dumps(asdict(result.remote_file), indent=2))
    return result
