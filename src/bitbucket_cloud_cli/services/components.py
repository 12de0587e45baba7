import re

import httpx

from bitbucket_cloud_cli.errors import MalformedResponseError
from bitbucket_cloud_cli.models.bitbucket import Component, Components
from bitbucket_cloud_cli.models.options import PageOptions
from bitbucket_cloud_cli.services.bitbucket_client import Service, parse_resource_id

COMPONENTS_PATH = "/repositories/%s/%s/components"
COMPONENT_SELF_URL = re.compile(r"https?://.*/2\.0/repositories/[^/]+/[^/]+/components/(\d+)/?$", re.IGNORECASE)


def with_id(component: Component | None, response: httpx.Response | None = None) -> Component:
    if component is None:
        raise MalformedResponseError("Empty component response", response)
    href = None
    if component.links and component.links.self_:
        href = component.links.self_.href
    return component.model_copy(update={"id": parse_resource_id(COMPONENT_SELF_URL, href, response)})


class ComponentsService(Service):
    """Issue tracker components of a repository. Read-only."""

    def list(
        self, owner: str, repo_slug: str, options: PageOptions | None = None
    ) -> tuple[Components, httpx.Response]:
        url = self.client.add_options(self.client.request_url(COMPONENTS_PATH, owner, repo_slug), options)
        components, response = self.client.execute("GET", url, Components)
        if components is None:
            raise MalformedResponseError("Empty component list response", response)
        return components.model_copy(update={"values": [with_id(c, response) for c in components.values]}), response

    def get(self, owner: str, repo_slug: str, component_id: int) -> tuple[Component, httpx.Response]:
        """Fetch one component.

        The id is the number at the end of ``links.self.href``, not the name.
        """
        url = self.client.request_url(COMPONENTS_PATH + "/%s", owner, repo_slug, component_id)
        component, response = self.client.execute("GET", url, Component)
        return with_id(component, response), response
