"""Bitbucket webhook payload schemas.

Only the fields used by the formatters are declared; anything else Bitbucket
sends is ignored. Every field is optional and ``null`` is read as absent, so a
well-formed payload always decodes and the formatters decide what is missing.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                k: [item for item in v if item is not None] if isinstance(v, list) else v
                for k, v in data.items()
                if v is not None
            }
        return data


class Link(_Payload):
    href: str = ""


class Links(_Payload):
    avatar: Link = Field(default_factory=Link)
    html: Link = Field(default_factory=Link)


class Actor(_Payload):
    """A Bitbucket user (actor, author, reviewer, ...)."""

    display_name: str = ""
    links: Links = Field(default_factory=Links)


class Repository(_Payload):
    name: str = ""
    full_name: str = ""


class Branch(_Payload):
    name: str = ""


class Endpoint(_Payload):
    """Source or destination side of a pull request."""

    branch: Branch = Field(default_factory=Branch)
    repository: Repository = Field(default_factory=Repository)


class Participant(_Payload):
    user: Actor = Field(default_factory=Actor)
    approved: bool = False


class PullRequest(_Payload):
    title: str = ""
    description: str = ""
    state: str = ""
    source: Endpoint = Field(default_factory=Endpoint)
    destination: Endpoint = Field(default_factory=Endpoint)
    author: Actor = Field(default_factory=Actor)
    closed_by: Actor = Field(default_factory=Actor)
    links: Links = Field(default_factory=Links)
    participants: list[Participant] = Field(default_factory=list)
    reviewers: list[Actor] = Field(default_factory=list)


class CommentContent(_Payload):
    raw: str = ""


class Comment(_Payload):
    user: Actor = Field(default_factory=Actor)
    content: CommentContent = Field(default_factory=CommentContent)
    links: Links = Field(default_factory=Links)


class Approval(_Payload):
    user: Actor = Field(default_factory=Actor)


class CommitAuthor(_Payload):
    user: Actor = Field(default_factory=Actor)


class Commit(_Payload):
    author: CommitAuthor = Field(default_factory=CommitAuthor)


class CommitStatus(_Payload):
    name: str = ""
    state: str = ""
    url: str = ""
    commit: Commit = Field(default_factory=Commit)


class Reference(_Payload):
    """Branch or tag a push landed on."""

    name: str = ""
    type: str = ""


class Change(_Payload):
    new: Reference = Field(default_factory=Reference)
    commits: list[dict[str, Any]] = Field(default_factory=list)


class Push(_Payload):
    changes: list[Change] = Field(default_factory=list)


class BitbucketEvent(_Payload):
    """Fields shared by every Bitbucket event."""

    actor: Actor = Field(default_factory=Actor)
    repository: Repository = Field(default_factory=Repository)


class RepoPushEvent(BitbucketEvent):
    push: Push = Field(default_factory=Push)


class CommitStatusEvent(BitbucketEvent):
    commit_status: CommitStatus = Field(default_factory=CommitStatus)


class PullRequestEvent(BitbucketEvent):
    pullrequest: PullRequest = Field(default_factory=PullRequest)


class PullRequestApprovalEvent(PullRequestEvent):
    approval: Approval = Field(default_factory=Approval)


class PullRequestCommentEvent(PullRequestEvent):
    comment: Comment = Field(default_factory=Comment)
