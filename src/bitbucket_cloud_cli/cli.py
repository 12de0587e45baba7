import logging
from collections.abc import Callable
from typing import Annotated, TypeVar

import httpx
import typer
from pydantic import BaseModel, ValidationError

from bitbucket_cloud_cli.config import AppConfig
from bitbucket_cloud_cli.errors import BitbucketError
from bitbucket_cloud_cli.models.bitbucket import CommitCommentRequest
from bitbucket_cloud_cli.models.options import FilterSortOptions, PageOptions, SearchCodeOptions
from bitbucket_cloud_cli.services.api import Bitbucket

app = typer.Typer(help="Bitbucket Cloud CLI", no_args_is_help=True)
auth_app = typer.Typer(help="Authentication commands")
commit_app = typer.Typer(help="Commit approval and comment commands")
component_app = typer.Typer(help="Issue tracker component commands")
team_app = typer.Typer(help="Team permission and code search commands")

app.add_typer(auth_app, name="auth")
app.add_typer(commit_app, name="commit")
app.add_typer(component_app, name="component")
app.add_typer(team_app, name="team")

T = TypeVar("T")
OptionsT = TypeVar("OptionsT", bound=BaseModel)

Query = Annotated[str | None, typer.Option("--q", help="Bitbucket query language filter")]
Sort = Annotated[str | None, typer.Option(help="Field to sort by, '-' prefix for descending")]
Page = Annotated[int | None, typer.Option(min=1)]
PageLen = Annotated[int | None, typer.Option(min=1, max=100)]


def build_api() -> Bitbucket:
    return Bitbucket(AppConfig())


def call(operation: Callable[[Bitbucket], T]) -> T:
    with build_api() as api:
        try:
            return operation(api)
        except BitbucketError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        except httpx.TransportError as exc:
            typer.echo(f"Transport error: {exc}", err=True)
            raise typer.Exit(code=2) from exc


def build_options(options_type: type[OptionsT], **values) -> OptionsT:
    try:
        return options_type(**values)
    except ValidationError as exc:
        typer.echo(f"Invalid options: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def echo_model(model: BaseModel) -> None:
    typer.echo(model.model_dump_json(indent=2, by_alias=True, exclude_none=True))


@app.callback()
def main(verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log HTTP traffic")] = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@auth_app.command("status")
def auth_status() -> None:
    config = AppConfig()
    if config.token:
        method = "bearer token"
    elif config.username and config.app_password:
        method = f"app password for {config.username}"
    else:
        method = "anonymous"
    typer.echo(f"Target Bitbucket: {config.bitbucket_url} ({method})")


@commit_app.command("approve")
def commit_approve(owner: str, repo_slug: str, sha: str) -> None:
    participant, _ = call(lambda api: api.commits.approve(owner, repo_slug, sha))
    if participant is not None:
        echo_model(participant)


@commit_app.command("unapprove")
def commit_unapprove(owner: str, repo_slug: str, sha: str) -> None:
    call(lambda api: api.commits.unapprove(owner, repo_slug, sha))
    typer.echo(f"Approval of {sha} removed")


@commit_app.command("comments")
def commit_comments(
    owner: str,
    repo_slug: str,
    sha: str,
    q: Query = None,
    sort: Sort = None,
    page: Page = None,
    pagelen: PageLen = None,
) -> None:
    options = build_options(FilterSortOptions, q=q, sort=sort, page=page, pagelen=pagelen)
    comments, _ = call(lambda api: api.commits.list_comments(owner, repo_slug, sha, options))
    echo_model(comments)


@commit_app.command("comment")
def commit_comment(owner: str, repo_slug: str, sha: str, comment_id: int) -> None:
    comment, _ = call(lambda api: api.commits.get_comment(owner, repo_slug, sha, comment_id))
    echo_model(comment)


@commit_app.command("add-comment")
def commit_add_comment(
    owner: str,
    repo_slug: str,
    sha: str,
    text: str,
    parent: Annotated[int | None, typer.Option(help="Id of the comment to reply to")] = None,
) -> None:
    payload = CommitCommentRequest.text(text, parent_id=parent)
    comment, _ = call(lambda api: api.commits.create_comment(owner, repo_slug, sha, payload))
    echo_model(comment)


@component_app.command("list")
def component_list(owner: str, repo_slug: str, page: Page = None, pagelen: PageLen = None) -> None:
    options = build_options(PageOptions, page=page, pagelen=pagelen)
    components, _ = call(lambda api: api.components.list(owner, repo_slug, options))
    for component in components.values:
        typer.echo(f"{component.id}\t{component.name}")


@component_app.command("get")
def component_get(owner: str, repo_slug: str, component_id: int) -> None:
    component, _ = call(lambda api: api.components.get(owner, repo_slug, component_id))
    typer.echo(f"{component.id}\t{component.name}")


@team_app.command("permissions")
def team_permissions(team: str, q: Query = None, sort: Sort = None) -> None:
    options = build_options(FilterSortOptions, q=q, sort=sort)
    permissions, _ = call(lambda api: api.teams.list_permissions(team, options))
    echo_model(permissions)


@team_app.command("repo-permissions")
def team_repo_permissions(
    team: str,
    repo_slug: Annotated[str | None, typer.Argument(help="Limit to one repository")] = None,
    q: Query = None,
    sort: Sort = None,
) -> None:
    options = build_options(FilterSortOptions, q=q, sort=sort)
    if repo_slug is None:
        permissions, _ = call(lambda api: api.teams.list_repository_permissions(team, options))
    else:
        permissions, _ = call(lambda api: api.teams.get_repository_permissions(team, repo_slug, options))
    echo_model(permissions)


@team_app.command("search-code")
def team_search_code(team: str, query: str, page: Page = None, pagelen: PageLen = None) -> None:
    options = build_options(SearchCodeOptions, search_query=query, page=page, pagelen=pagelen)
    results, _ = call(lambda api: api.teams.search_code(team, options))
    for result in results.values:
        path = result.file.path if result.file else "?"
        typer.echo(f"{path}\t{result.content_match_count or 0} match(es)")


if __name__ == "__main__":
    app()
