from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from .errors import ConfigurationError


GITHUB_BASE_URL = "https://api.github.com"
PAPER_BASE_URL = "https://api.dropboxapi.com/2/paper"
DEFAULT_ROOT_FOLDER = "docs"
DEFAULT_FILE_EXTENSION = ".html"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class EnvConfig:
    '''Expected variables in the environment or .env file'''

    github_username: str
    github_token: str
    paper_token: str
    repo_name: str
    root_folder: str = DEFAULT_ROOT_FOLDER
    file_extension: str = DEFAULT_FILE_EXTENSION
    request_timeout: float = DEFAULT_TIMEOUT
    github_base_url: str = GITHUB_BASE_URL
    paper_base_url: str = PAPER_BASE_URL


def _read_sources(path: Optional[Path], environ: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    if path is not None and path.is_file():
        raw.update({key: value for key, value in dotenv_values(path).items() if value is not None})
    # Real environment variables win over the .env file.
    raw.update(environ)
    return {key: value.strip() for key, value in raw.items()}


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number of seconds, got {value!r}") from exc
    if timeout <= 0:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be positive, got {value!r}")
    return timeout


def normalize_root_folder(value: str) -> str:
    """Strip surrounding slashes and require a single top-level folder name such as 'docs'."""

    root_folder = value.strip().strip("/")
    if not root_folder or "/" in root_folder:
        raise ConfigurationError(f"Root folder must name a single top-level folder, e.g. 'docs', got {value!r}")
    return root_folder


def load_env_config(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> EnvConfig:
    """Merge the optional .env file with the process environment and return a structured EnvConfig."""

    raw = _read_sources(path, os.environ if environ is None else environ)

    # GITHUB_PASSWORD is the historical name for the credential.
    github_token = raw.get("GITHUB_TOKEN") or raw.get("GITHUB_PASSWORD")
    required = {
        "GITHUB_USERNAME": raw.get("GITHUB_USERNAME")
        ,"GITHUB_TOKEN": github_token
        ,"PAPER_API": raw.get("PAPER_API")
        ,"REPO_NAME": raw.get("REPO_NAME")
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ConfigurationError(f"Missing env var(s): {', '.join(missing)}")

    root_folder = normalize_root_folder(raw.get("ROOT_FOLDER") or DEFAULT_ROOT_FOLDER)

    extension = raw.get("FILE_EXTENSION", DEFAULT_FILE_EXTENSION)
    if extension and not extension.startswith("."):
        extension = f".{extension}"

    return EnvConfig(
        github_username=raw["GITHUB_USERNAME"]
        ,github_token=github_token
        ,paper_token=raw["PAPER_API"]
        ,repo_name=raw["REPO_NAME"]
        ,root_folder=root_folder
        ,file_extension=extension
        ,request_timeout=_parse_timeout(raw.get("REQUEST_TIMEOUT"))
        ,github_base_url=(raw.get("GITHUB_BASE_URL") or GITHUB_BASE_URL).rstrip("/")
        ,paper_base_url=(raw.get("PAPER_BASE_URL") or PAPER_BASE_URL).rstrip("/")
    )
