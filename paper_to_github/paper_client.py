from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .config import DEFAULT_TIMEOUT, PAPER_BASE_URL
from .errors import DocumentFetchError, RequestTimeoutError


logger = logging.getLogger(__name__)

RESULT_HEADER = "Dropbox-API-Result"


@dataclass(frozen=True)
class PaperDoc:
    doc_id: str
    title: str
    owner: str
    content: str
    revision: Optional[int] = None


class PaperClient:
    def __init__(
        self
        ,token: str
        ,*
        ,base_url: str = PAPER_BASE_URL
        ,timeout: float = DEFAULT_TIMEOUT
        ,session: Optional[requests.Session] = None
    ) -> None:
        """Initialize a session configured with the Paper API bearer token."""

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {token}"})

    def download_doc(self, doc_id: str) -> PaperDoc:
        """Export a Paper doc as HTML and return it with the title and owner from the result header."""

        if not doc_id:
            raise DocumentFetchError("Cannot download a Paper doc without a doc ID")

        url = f"{self.base_url}/docs/download"
        headers = {
            "Content-Type": "text/plain"
            ,"Dropbox-API-Arg": json.dumps({"doc_id": doc_id, "export_format": {".tag": "html"}})
        }
        try:
            response = self.session.post(url, headers=headers, timeout=self.timeout)
        except requests.Timeout as exc:
            raise RequestTimeoutError(f"Downloading Paper doc {doc_id}", self.timeout) from exc
        except requests.RequestException as exc:
            logger.error("Paper download transport failure for %s: %s", doc_id, exc)
            raise DocumentFetchError(f"Could not reach Dropbox Paper: {exc}") from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as err:
            logger.error("Paper download failed for %s: %s", doc_id, response.text)
            raise DocumentFetchError(
                f"Dropbox Paper returned {response.status_code} for doc {doc_id}: {response.text}"
                ,status_code=response.status_code
            ) from err

        raw_result = response.headers.get(RESULT_HEADER)
        if not raw_result:
            raise DocumentFetchError(f"Dropbox Paper response for doc {doc_id} has no {RESULT_HEADER} header")
        try:
            metadata = json.loads(raw_result)
        except ValueError as exc:
            raise DocumentFetchError(f"Could not decode {RESULT_HEADER} header: {raw_result!r}") from exc

        if not isinstance(metadata, dict):
            raise DocumentFetchError(f"{RESULT_HEADER} header is not a JSON object: {raw_result!r}")

        title = metadata.get("title")
        if not isinstance(title, str) or not title.strip():
            raise DocumentFetchError(f"Dropbox Paper doc {doc_id} has no title")

        try:
            content = response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentFetchError(f"Dropbox Paper doc {doc_id} is not valid UTF-8 HTML: {exc}") from exc

        return PaperDoc(
            doc_id=doc_id
            ,title=title
            ,owner=metadata.get("owner", "")
            ,content=content
            ,revision=metadata.get("revision")
        )
