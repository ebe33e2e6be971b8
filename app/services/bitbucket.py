"""Discord embeds for Bitbucket webhook events."""

from __future__ import annotations

from enum import Enum
from functools import wraps
from typing import Callable, NamedTuple, Optional, TypeVar, Union

from loguru import logger
from pydantic import ValidationError

from app.config import Settings, settings as default_settings
from app.embed import Embed, EmbedAuthor, EmbedColor, EmbedField
from app.schemas import (
    Actor,
    BitbucketEvent,
    CommitStatusEvent,
    PullRequest,
    PullRequestApprovalEvent,
    PullRequestCommentEvent,
    PullRequestEvent,
    RepoPushEvent,
)
from app.utils import truncate

UNKNOWN = "unknown"
NO_REVIEWERS = "none"
NO_COMMENT = "no comment"

DESCRIPTION_LIMIT = 200
DESCRIPTION_KEEP = 199
COMMENT_LIMIT = 105
COMMENT_KEEP = 100

Body = Union[bytes, str]
# A bare JSON null decodes like an empty object.
NULL_BODIES = (b"null", "null")
E = TypeVar("E", bound=BitbucketEvent)


class EventKind(str, Enum):
    """Bitbucket ``X-Event-Key`` values we know how to render."""

    PUSH = "repo:push"
    COMMIT_STATUS_UPDATED = "repo:commit_status_updated"
    PR_CREATED = "pullrequest:created"
    PR_UPDATED = "pullrequest:updated"
    PR_APPROVED = "pullrequest:approved"
    PR_UNAPPROVED = "pullrequest:unapproved"
    PR_MERGED = "pullrequest:fulfilled"
    PR_REJECTED = "pullrequest:rejected"
    PR_COMMENT_CREATED = "pullrequest:comment_created"
    PR_COMMENT_UPDATED = "pullrequest:comment_updated"
    PR_COMMENT_DELETED = "pullrequest:comment_deleted"


class HandleResult(NamedTuple):
    """``(repository, embed, error)``; all empty when nothing should be sent."""

    repository: str = ""
    embed: Optional[Embed] = None
    error: Optional[Exception] = None


EMPTY = HandleResult()

Handler = Callable[[Body, Settings], HandleResult]


def _formatter(
    schema: type[E],
    *,
    skip: Optional[Callable[[Settings], bool]] = None,
) -> Callable[[Callable[[E], Optional[Embed]]], Handler]:
    """
    Turn ``build(event) -> Embed | None`` into a handler over the raw body.

    The handler decodes ``body`` into ``schema``; a decode failure is returned
    as the result's ``error``. ``build`` returning ``None`` (a guard failed) or
    a payload without ``repository.name`` yields an empty result.
    """

    def wrap(build: Callable[[E], Optional[Embed]]) -> Handler:
        @wraps(build)
        def handler(body: Body, cfg: Settings) -> HandleResult:
            if skip is not None and skip(cfg):
                return EMPTY
            if body.strip() in NULL_BODIES:
                body = "{}"
            try:
                event = schema.model_validate_json(body)
            except ValidationError as exc:
                return HandleResult(error=exc)
            embed = build(event)
            if embed is None or not event.repository.name:
                return EMPTY
            return HandleResult(event.repository.name, embed, None)

        return handler

    return wrap


def _author(name: str, actor: Actor) -> Optional[EmbedAuthor]:
    if not name:
        return None
    return EmbedAuthor(name=name, icon_url=actor.links.avatar.href)


def _branches(pr: PullRequest) -> str:
    source = pr.source.branch.name
    dest = pr.destination.branch.name
    if source and dest:
        return f"`{source}` > `{dest}`"
    return ""


def _reviewer_names(pr: PullRequest) -> str:
    names = [reviewer.display_name for reviewer in pr.reviewers]
    return ", ".join(names) if names else NO_REVIEWERS


def _participants(pr: PullRequest) -> str:
    lines = [
        ("**✓**" if p.approved else "**x **") + p.user.display_name
        for p in pr.participants
    ]
    return "\n".join(lines) if lines else NO_REVIEWERS


def _pr_description(pr: PullRequest) -> str:
    if not pr.description:
        return ""
    desc = truncate(pr.description, DESCRIPTION_LIMIT, DESCRIPTION_KEEP)
    return f"**{desc}**"


def _fields(*pairs: tuple[str, str]) -> tuple[EmbedField, ...]:
    """Keep the given order, drop pairs whose value is empty."""
    return tuple(EmbedField(name, value) for name, value in pairs if value)


@_formatter(RepoPushEvent, skip=lambda cfg: cfg.skip_repo_push_messages)
def _handle_push(event: RepoPushEvent) -> Optional[Embed]:
    commits = 0
    resource_name = UNKNOWN
    resource_type = UNKNOWN
    if event.push.changes:
        change = event.push.changes[0]
        commits = len(change.commits)
        resource_name = change.new.name
        resource_type = change.new.type

    actor = event.actor.display_name
    return Embed(
        title="Push happened",
        color=EmbedColor.SUCCESS,
        description=f"{actor} pushed" if actor else "",
        fields=_fields(
            ("Number of commits", str(commits)),
            ("Resource name", resource_name),
            ("Resource type", resource_type),
        ),
    )


STATUS_COLORS = {
    "FAILED": EmbedColor.FAILURE,
    "SUCCESSFUL": EmbedColor.SUCCESS,
}


@_formatter(CommitStatusEvent)
def _handle_commit_status_updated(event: CommitStatusEvent) -> Optional[Embed]:
    status = event.commit_status
    if not status.name:
        return None

    author = status.commit.author.user
    return Embed(
        title=f"[{event.repository.full_name}]: {status.name}",
        color=STATUS_COLORS.get(status.state, EmbedColor.GRAY),
        author=_author(author.display_name, author),
        url=status.url,
        fields=_fields(("Status", status.state)),
    )


@_formatter(PullRequestEvent)
def _handle_pr_created(event: PullRequestEvent) -> Optional[Embed]:
    pr = event.pullrequest
    if not event.actor.display_name or not pr.title:
        return None

    return Embed(
        title=f"[{pr.source.repository.full_name}]: Pull request opened: {pr.title}",
        color=EmbedColor.PR_CREATED,
        author=_author(event.actor.display_name, event.actor),
        description=_branches(pr),
        url=pr.links.html.href,
        fields=_fields(
            ("Reviewers", _reviewer_names(pr)),
            ("Status", pr.state),
            ("PR Description", _pr_description(pr)),
        ),
    )


@_formatter(PullRequestEvent)
def _handle_pr_updated(event: PullRequestEvent) -> Optional[Embed]:
    pr = event.pullrequest
    if not event.actor.display_name or not pr.title:
        return None

    return Embed(
        title=f"[{pr.source.repository.full_name}]: Pull request updated: {pr.title}",
        color=EmbedColor.PR_UPDATED,
        author=_author(event.actor.display_name, event.actor),
        description=_branches(pr),
        url=pr.links.html.href,
        fields=_fields(
            ("Reviewers", _participants(pr)),
            ("Status", pr.state),
            ("PR Description", _pr_description(pr)),
        ),
    )


def _approval_embed(
    event: PullRequestApprovalEvent, verb: str, color: EmbedColor
) -> Optional[Embed]:
    pr = event.pullrequest
    if not event.actor.display_name or not pr.title:
        return None

    approver = event.approval.user
    return Embed(
        title=f"[{pr.source.repository.full_name}]: Pull request {verb}: {pr.title}",
        color=color,
        author=_author(approver.display_name, approver),
        description=_branches(pr),
        url=pr.links.html.href,
        fields=_fields(("Created by", pr.author.display_name)),
    )


@_formatter(PullRequestApprovalEvent)
def _handle_pr_approved(event: PullRequestApprovalEvent) -> Optional[Embed]:
    return _approval_embed(event, "approved", EmbedColor.SUCCESS)


@_formatter(PullRequestApprovalEvent)
def _handle_pr_unapproved(event: PullRequestApprovalEvent) -> Optional[Embed]:
    return _approval_embed(event, "unapproved", EmbedColor.FAILURE)


def _closed_embed(
    event: PullRequestEvent,
    verb: str,
    color: EmbedColor,
    *,
    with_reviewers: bool,
) -> Optional[Embed]:
    pr = event.pullrequest
    if not pr.closed_by.display_name or not pr.title:
        return None

    pairs = [("Reviewers", _participants(pr))] if with_reviewers else []
    pairs += [("Created by", event.actor.display_name), ("Status", pr.state)]
    # Name comes from the actor, the avatar from whoever closed the PR.
    return Embed(
        title=f"[{event.repository.full_name}]: Pull request {verb}: {pr.title}",
        color=color,
        author=_author(event.actor.display_name, pr.closed_by),
        description=_branches(pr),
        url=pr.links.html.href,
        fields=_fields(*pairs),
    )


@_formatter(PullRequestEvent)
def _handle_pr_merged(event: PullRequestEvent) -> Optional[Embed]:
    return _closed_embed(event, "merged", EmbedColor.SUCCESS, with_reviewers=True)


@_formatter(PullRequestEvent)
def _handle_pr_rejected(event: PullRequestEvent) -> Optional[Embed]:
    return _closed_embed(event, "rejected", EmbedColor.FAILURE, with_reviewers=False)


def _comment_embed(
    event: PullRequestCommentEvent,
    verb: str,
    color: EmbedColor,
    field: tuple[str, str],
) -> Optional[Embed]:
    pr = event.pullrequest
    if not event.comment.user.display_name or not pr.title:
        return None

    repo = pr.destination.repository.full_name
    return Embed(
        title=f"[{repo}]: Comment {verb} on pull request: {pr.title}",
        color=color,
        author=_author(event.actor.display_name, event.actor),
        description=_branches(pr),
        url=event.comment.links.html.href,
        fields=_fields(field),
    )


@_formatter(PullRequestCommentEvent)
def _handle_pr_comment_created(event: PullRequestCommentEvent) -> Optional[Embed]:
    raw = event.comment.content.raw
    comment = truncate(raw, COMMENT_LIMIT, COMMENT_KEEP) if raw else NO_COMMENT
    return _comment_embed(event, "created", EmbedColor.PR_CREATED, ("Comment", comment))


@_formatter(PullRequestCommentEvent)
def _handle_pr_comment_updated(event: PullRequestCommentEvent) -> Optional[Embed]:
    author = ("Author:", event.comment.user.display_name)
    return _comment_embed(event, "updated", EmbedColor.PR_UPDATED, author)


@_formatter(PullRequestCommentEvent)
def _handle_pr_comment_deleted(event: PullRequestCommentEvent) -> Optional[Embed]:
    author = ("Author:", event.comment.user.display_name)
    return _comment_embed(event, "deleted", EmbedColor.FAILURE, author)


HANDLERS: dict[str, Handler] = {
    EventKind.PUSH: _handle_push,
    EventKind.COMMIT_STATUS_UPDATED: _handle_commit_status_updated,
    EventKind.PR_CREATED: _handle_pr_created,
    EventKind.PR_UPDATED: _handle_pr_updated,
    EventKind.PR_APPROVED: _handle_pr_approved,
    EventKind.PR_UNAPPROVED: _handle_pr_unapproved,
    EventKind.PR_MERGED: _handle_pr_merged,
    EventKind.PR_REJECTED: _handle_pr_rejected,
    EventKind.PR_COMMENT_CREATED: _handle_pr_comment_created,
    EventKind.PR_COMMENT_UPDATED: _handle_pr_comment_updated,
    EventKind.PR_COMMENT_DELETED: _handle_pr_comment_deleted,
}


def handle(
    event_type: str,
    body: Body,
    cfg: Settings = default_settings,
) -> HandleResult:
    """
    Render a Bitbucket event as a Discord embed.

    Returns
    -------
    HandleResult
        ``(repository name, embed, None)`` on success, ``("", None, error)`` if
        the body cannot be decoded, and ``("", None, None)`` for unknown event
        kinds or payloads missing what the message needs.
    """
    event_key = (event_type or "").strip().lower()
    handler = HANDLERS.get(event_key)
    if handler is None:
        logger.debug("Ignoring unsupported Bitbucket event {!r}", event_type)
        return EMPTY
    return handler(body, cfg)
