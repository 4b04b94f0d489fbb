from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import load_env_config, normalize_root_folder
from .errors import PaperSyncError
from .github_client import GitHubClient
from .inspector import UpdateFile
from .paper_client import PaperClient
from .sync import sync_document


DEFAULT_COMMIT_MESSAGE = "Sync {title} from Dropbox Paper"
USAGE_EXIT_CODE = 64


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the command-line parser for the sync CLI."""

    parser = argparse.ArgumentParser(description="Commit a single Dropbox Paper doc into a GitHub repository.")
    parser.add_argument("--env", default=".env", help="Path to the .env file with GitHub and Paper credentials.")
    parser.add_argument(
        "-m"
        ,"--message"
        ,default=DEFAULT_COMMIT_MESSAGE
        ,help="Commit message; '{title}' is replaced with the doc title. Default: %(default)r"
    )
    parser.add_argument("--root-folder", help="Repository folder to write into (overrides ROOT_FOLDER).")
    parser.add_argument("--dry-run", action="store_true", help="Download and inspect, but do not commit.")
    parser.add_argument(
        "--debug-log",
        action="store_true",
        help="Write doc metadata and GitHub responses to paper_sync.debug.log",
    )
    parser.add_argument("doc_url", help="URL of the Dropbox Paper doc to sync.")
    return parser


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Entry point invoked by sync_paper_doc.py, the console script, or tests. Returns the exit code."""

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if not args.message.strip():
        print("[error] The commit message must not be empty.", file=sys.stderr)
        return USAGE_EXIT_CODE

    logger = configure_logging()
    debug_logger = configure_debug_logger() if args.debug_log else None

    try:
        env_config = load_env_config(Path(args.env))
        root_folder = env_config.root_folder
        if args.root_folder is not None:
            root_folder = normalize_root_folder(args.root_folder)

        paper = PaperClient(
            env_config.paper_token
            ,base_url=env_config.paper_base_url
            ,timeout=env_config.request_timeout
        )
        github = GitHubClient(
            env_config.github_username
            ,env_config.github_token
            ,env_config.repo_name
            ,base_url=env_config.github_base_url
            ,timeout=env_config.request_timeout
        )

        logger.info("Starting sync for %s", args.doc_url)
        result = sync_document(
            args.doc_url
            ,args.message
            ,paper=paper
            ,github=github
            ,root_folder=root_folder
            ,extension=env_config.file_extension
            ,dry_run=args.dry_run
            ,debug_logger=debug_logger
        )
    except PaperSyncError as exc:
        print(f"[error] {type(exc).__name__}: {exc}", file=sys.stderr)
        logger.error("Sync of %s failed: %s: %s", args.doc_url, type(exc).__name__, exc)
        return exc.exit_code

    verb = "Updated" if isinstance(result.action, UpdateFile) else "Created"
    if not result.written:
        print(f"[info] Dry run: would {result.action.kind} {result.path} from '{result.doc.title}'")
        logger.info("Dry-run complete for %s (%s %s)", args.doc_url, result.action.kind, result.path)
        return 0

    remote = result.remote_file
    print(f"[info] {verb} {remote.path}")
    if remote.html_url:
        print(f"[info] {remote.html_url}")
    logger.info("%s %s from %s at commit %s", verb, remote.path, args.doc_url, remote.commit_sha)
    return 0


LOG_PATH = Path("paper_sync.log")
DEBUG_LOG_PATH = Path("paper_sync.debug.log")
LOGGER_NAME = "paper_to_github"


def configure_logging() -> logging.Logger:
    """Set up the primary info-level logger that writes to paper_sync.log."""

    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(handler)
    return logger


def configure_debug_logger() -> logging.Logger:
    """Create or return the debug logger that captures doc metadata and API responses."""

    debug_logger = logging.getLogger(f"{LOGGER_NAME}.debug")
    if not debug_logger.handlers:
        debug_logger.setLevel(logging.INFO)
        debug_logger.propagate = False
        handler = logging.FileHandler(DEBUG_LOG_PATH, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s [DEBUG] %(message)s"))
        debug_logger.addHandler(handler)
    return debug_logger


def main() -> None:
    sys.exit(run_cli(sys.argv[1:]))
