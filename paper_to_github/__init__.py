"""
Commit a single Dropbox Paper doc into a GitHub repository.

The doc is exported as HTML and written under a root folder (``docs`` by
default) through the GitHub contents API, creating the file the first time
and updating it in place afterwards.
"""
__all__ = [
    "cli",
    "config",
    "errors",
    "github_client",
    "inspector",
    "paper_client",
    "sync",
    "writer",
]
