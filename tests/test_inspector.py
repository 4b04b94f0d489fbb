from conftest import CONTENTS, FakeResponse

from paper_to_github.inspector import CreateFile, UpdateFile, decide_action, find_entry


ROOT = f"{CONTENTS}/"
DOCS = f"{CONTENTS}/docs"


def test_missing_docs_folder_means_create(session, github):
    session.routes[("GET", ROOT)] = FakeResponse(
        json_body=[
            {"type": "file", "name": "README.md", "sha": "r1"}
            ,{"type": "file", "name": "docs", "sha": "not-a-dir"}
        ]
    )

    assert decide_action(github, "anything.html") == CreateFile()
    assert [call["url"] for call in session.calls] == [ROOT]


def test_existing_file_means_update_with_its_sha(session, github):
    session.routes[("GET", ROOT)] = FakeResponse(json_body=[{"type": "dir", "name": "docs", "sha": "d1"}])
    session.routes[("GET", DOCS)] = FakeResponse(
        json_body=[
            {"type": "file", "name": "other.html", "sha": "o1"}
            ,{"type": "file", "name": "my-great-doc.html", "sha": "abc123sha"}
        ]
    )

    action = decide_action(github, "my-great-doc.html")

    assert action == UpdateFile(prior_sha="abc123sha")
    assert action.kind == "update"


def test_folder_without_matching_file_means_create(session, github):
    session.routes[("GET", ROOT)] = FakeResponse(json_body=[{"type": "dir", "name": "docs", "sha": "d1"}])
    session.routes[("GET", DOCS)] = FakeResponse(
        json_body=[
            {"type": "file", "name": "my-great-doc.md", "sha": "o1"}
            ,{"type": "dir", "name": "my-great-doc.html", "sha": "o2"}
        ]
    )

    action = decide_action(github, "my-great-doc.html")

    assert action == CreateFile()
    assert action.kind == "create"


def test_custom_root_folder_is_listed(session, github):
    session.routes[("GET", ROOT)] = FakeResponse(json_body=[{"type": "dir", "name": "papers", "sha": "d1"}])
    session.routes[("GET", f"{CONTENTS}/papers")] = FakeResponse(
        json_body=[{"type": "file", "name": "a.html", "sha": "s1"}]
    )

    assert decide_action(github, "a.html", root_folder="papers") == UpdateFile(prior_sha="s1")


def test_find_entry_requires_exact_name():
    entries = [{"type": "file", "name": "Doc.html"}, {"type": "file", "name": "doc.html", "sha": "x"}]

    assert find_entry(entries, "file", "doc.html") == {"type": "file", "name": "doc.html", "sha": "x"}
    assert find_entry(entries, "dir", "doc.html") is None


def test_empty_repository_means_create(session, github):
    session.routes[("GET", ROOT)] = FakeResponse(404, json_body={"message": "This repository is empty."})

    assert decide_action(github, "release-notes-v2.html") == CreateFile()
