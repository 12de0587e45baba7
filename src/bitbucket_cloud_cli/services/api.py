import httpx

from bitbucket_cloud_cli.config import AppConfig
from bitbucket_cloud_cli.services.bitbucket_client import BitbucketClient, build_http_client
from bitbucket_cloud_cli.services.commits import CommitService
from bitbucket_cloud_cli.services.components import ComponentsService
from bitbucket_cloud_cli.services.teams import TeamsService


class Bitbucket:
    """Entry point wiring one shared client into every service.

    >>> with Bitbucket() as bb:
    ...     components, _ = bb.components.list("acme", "widgets")
    """

    def __init__(self, config: AppConfig | None = None, http: httpx.Client | None = None):
        config = config or AppConfig()
        if http is None:
            http = build_http_client(config)
        self.client = BitbucketClient(base_url=config.bitbucket_url, http=http)
        self.commits = CommitService(self.client)
        self.components = ComponentsService(self.client)
        self.teams = TeamsService(self.client)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Bitbucket":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
