import httpx

from bitbucket_cloud_cli.models.bitbucket import SearchCodeResults, TeamPermissions, TeamRepoPermissions
from bitbucket_cloud_cli.models.options import FilterSortOptions, SearchCodeOptions
from bitbucket_cloud_cli.services.bitbucket_client import Service


class TeamsService(Service):
    def list_permissions(
        self, team_username: str, options: FilterSortOptions | None = None
    ) -> tuple[TeamPermissions, httpx.Response]:
        """Effective permission of each team member.

        A user in several groups is reported once, with the highest level.
        """
        url = self.client.add_options(self.client.request_url("/teams/%s/permissions", team_username), options)
        return self.client.execute("GET", url, TeamPermissions)

    def list_repository_permissions(
        self, team_username: str, options: FilterSortOptions | None = None
    ) -> tuple[TeamRepoPermissions, httpx.Response]:
        """Repository permissions across all of a team's repositories.

        For a user account this lists the permissions on that user's repositories.
        """
        url = self.client.add_options(
            self.client.request_url("/teams/%s/permissions/repositories", team_username), options
        )
        return self.client.execute("GET", url, TeamRepoPermissions)

    def get_repository_permissions(
        self, team_username: str, repo_slug: str, options: FilterSortOptions | None = None
    ) -> tuple[TeamRepoPermissions, httpx.Response]:
        url = self.client.add_options(
            self.client.request_url("/teams/%s/permissions/repositories/%s", team_username, repo_slug), options
        )
        return self.client.execute("GET", url, TeamRepoPermissions)

    def search_code(
        self, team_username: str, options: SearchCodeOptions
    ) -> tuple[SearchCodeResults, httpx.Response]:
        """Search code in the team's repositories.

        ``team_username`` may be a username, an account id or a ``{uuid}``; the
        latter two are preferred.
        """
        url = self.client.add_options(self.client.request_url("/teams/%s/search/code", team_username), options)
        return self.client.execute("GET", url, SearchCodeResults)
