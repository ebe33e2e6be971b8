"""Bitbucket payload builders shared by the tests."""

from __future__ import annotations

import json
from typing import Any


def user(name: str = "Jane Doe", avatar: str = "https://avatars.example/jane.png") -> dict[str, Any]:
    return {"display_name": name, "links": {"avatar": {"href": avatar}}}


def repository(name: str = "api", full_name: str = "acme/api") -> dict[str, Any]:
    return {"name": name, "full_name": full_name}


def pullrequest(**overrides: Any) -> dict[str, Any]:
    pr: dict[str, Any] = {
        "title": "Add login",
        "description": "Adds the login form.",
        "state": "OPEN",
        "source": {
            "branch": {"name": "feature/login"},
            "repository": {"full_name": "acme/api"},
        },
        "destination": {
            "branch": {"name": "main"},
            "repository": {"full_name": "acme/api-upstream"},
        },
        "author": user("Pat Author"),
        "closed_by": user("Casey Closer", "https://avatars.example/casey.png"),
        "links": {"html": {"href": "https://bitbucket.org/acme/api/pull-requests/7"}},
        "participants": [],
        "reviewers": [],
    }
    pr.update(overrides)
    return pr


def comment(raw: str = "Looks good", name: str = "Rae Reviewer") -> dict[str, Any]:
    return {
        "user": user(name),
        "content": {"raw": raw},
        "links": {"html": {"href": "https://bitbucket.org/acme/api/pull-requests/7#comment-1"}},
    }


def push_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "actor": user(),
        "repository": repository(),
        "push": {
            "changes": [
                {
                    "new": {"name": "main", "type": "branch"},
                    "commits": [{"hash": "a1"}, {"hash": "b2"}],
                }
            ]
        },
    }
    payload.update(overrides)
    return payload


def commit_status_payload(**overrides: Any) -> dict[str, Any]:
    status: dict[str, Any] = {
        "name": "build #42",
        "state": "SUCCESSFUL",
        "url": "https://ci.example/builds/42",
        "commit": {"author": {"user": user("Chris Committer")}},
    }
    status.update(overrides)
    return {"actor": user(), "repository": repository(), "commit_status": status}


def pr_payload(**pr_overrides: Any) -> dict[str, Any]:
    return {
        "actor": user(),
        "repository": repository(),
        "pullrequest": pullrequest(**pr_overrides),
    }


def approval_payload(**pr_overrides: Any) -> dict[str, Any]:
    payload = pr_payload(**pr_overrides)
    payload["approval"] = {"user": user("Alex Approver", "https://avatars.example/alex.png")}
    return payload


def comment_payload(raw: str = "Looks good", **pr_overrides: Any) -> dict[str, Any]:
    payload = pr_payload(**pr_overrides)
    payload["comment"] = comment(raw)
    return payload


def encode(payload: Any) -> bytes:
    return json.dumps(payload).encode()


def field_value(embed: Any, name: str) -> str | None:
    """Value of the first embed field called ``name``."""
    for item in embed.fields:
        if item.name == name:
            return item.value
    return None
