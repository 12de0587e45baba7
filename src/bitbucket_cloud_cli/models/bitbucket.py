from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class BitbucketModel(BaseModel):
    """Base for API payloads.

    Every field the API may omit is optional. Whether a field was present in the
    JSON (even as null) is kept in ``model_fields_set``; payloads are sent with
    ``exclude_unset`` so untouched fields never reach the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


T = TypeVar("T")


class Link(BitbucketModel):
    href: str | None = None
    name: str | None = None


class Links(BitbucketModel):
    self_: Link | None = Field(default=None, alias="self")
    html: Link | None = None
    avatar: Link | None = None


class Paginated(BitbucketModel, Generic[T]):
    """One page of a list endpoint.

    ``next``/``previous`` are full URLs; following them is left to the caller.
    """

    size: int | None = None
    page: int | None = None
    pagelen: int | None = None
    next: str | None = None
    previous: str | None = None
    values: list[T] = Field(default_factory=list)


class User(BitbucketModel):
    type: str | None = None
    uuid: str | None = None
    account_id: str | None = None
    nickname: str | None = None
    display_name: str | None = None
    links: Links | None = None

    def __str__(self):
        return f"User {self.display_name or self.nickname or self.uuid}"


class Team(BitbucketModel):
    type: str | None = None
    uuid: str | None = None
    username: str | None = None
    display_name: str | None = None
    links: Links | None = None


class Repository(BitbucketModel):
    type: str | None = None
    uuid: str | None = None
    name: str | None = None
    full_name: str | None = None
    slug: str | None = None
    is_private: bool | None = None
    links: Links | None = None

    def __str__(self):
        return f"<Repo: {self.full_name}>"


class Commit(BitbucketModel):
    type: str | None = None
    hash: str | None = None
    date: datetime | None = None
    message: str | None = None
    links: Links | None = None


class Content(BitbucketModel):
    raw: str | None = None
    markup: str | None = None
    html: str | None = None
    type: str | None = None


class CommitParticipant(BitbucketModel):
    type: str | None = None
    user: User | None = None
    # PARTICIPANT or REVIEWER
    role: str | None = None
    approved: bool | None = None
    state: str | None = None
    participated_on: datetime | None = None


class CommitCommentLinks(BitbucketModel):
    self_: Link | None = Field(default=None, alias="self")
    html: Link | None = None


class CommentParent(BitbucketModel):
    id: int | None = None
    links: CommitCommentLinks | None = None


class InlineAnchor(BitbucketModel):
    path: str | None = None
    from_: int | None = Field(default=None, alias="from")
    to: int | None = None


class CommitComment(BitbucketModel):
    id: int | None = None
    type: str | None = None
    links: CommitCommentLinks | None = None
    deleted: bool | None = None
    content: Content | None = None
    created_on: datetime | None = None
    updated_on: datetime | None = None
    user: User | None = None
    commit: Commit | None = None
    parent: CommentParent | None = None
    # only present on inline comments
    inline: InlineAnchor | None = None


CommitComments = Paginated[CommitComment]


class ParentCommentRef(BitbucketModel):
    id: int


class CommitCommentRequest(BitbucketModel):
    """Body for creating a commit comment, a reply when ``parent`` is set."""

    content: Content
    parent: ParentCommentRef | None = None

    @classmethod
    def text(cls, raw: str, parent_id: int | None = None) -> "CommitCommentRequest":
        if parent_id is None:
            return cls(content=Content(raw=raw))
        return cls(content=Content(raw=raw), parent=ParentCommentRef(id=parent_id))


class ComponentLinks(BitbucketModel):
    self_: Link | None = Field(default=None, alias="self")


class Component(BitbucketModel):
    # Not part of the payload, recovered from links.self.href
    id: int | None = Field(default=None, exclude=True)
    type: str | None = None
    name: str | None = None
    repository: Repository | None = None
    links: ComponentLinks | None = None

    def __str__(self):
        return f"Component(id={self.id}, name={self.name})"


Components = Paginated[Component]


class ComponentRequest(BitbucketModel):
    """Reference to an existing component, used when attaching it to an issue.

    The API has no endpoint to create or update components.
    """

    name: str


class TeamPermission(BitbucketModel):
    # owner, admin, collaborator, member
    permission: str | None = None
    type: str | None = None
    user: User | None = None
    team: Team | None = None


TeamPermissions = Paginated[TeamPermission]


class TeamRepoPermission(BitbucketModel):
    # admin, write, read
    permission: str | None = None
    type: str | None = None
    user: User | None = None
    repository: Repository | None = None


TeamRepoPermissions = Paginated[TeamRepoPermission]


class SearchSegment(BitbucketModel):
    text: str | None = None
    match: bool | None = None


class SearchLine(BitbucketModel):
    line: int | None = None
    segments: list[SearchSegment] | None = None


class SearchContentMatch(BitbucketModel):
    lines: list[SearchLine] | None = None


class SearchFile(BitbucketModel):
    path: str | None = None
    type: str | None = None
    links: Links | None = None


class SearchCodeResult(BitbucketModel):
    type: str | None = None
    content_match_count: int | None = None
    content_matches: list[SearchContentMatch] | None = None
    path_matches: list[SearchSegment] | None = None
    file: SearchFile | None = None


class SearchCodeResults(Paginated[SearchCodeResult]):
    # true when the server rewrote the query, e.g. to fix a typo
    query_substituted: bool | None = None
