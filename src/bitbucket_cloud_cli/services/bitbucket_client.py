import logging
import re
from dataclasses import dataclass, field
from typing import TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from bitbucket_cloud_cli.config import AppConfig
from bitbucket_cloud_cli.errors import BitbucketAPIError, MalformedResponseError, OptionsError
from bitbucket_cloud_cli.models.bitbucket import BitbucketModel
from bitbucket_cloud_cli.models.options import QueryOptions

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def build_http_client(config: AppConfig, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    headers = {
        "Accept": "application/json",
        "User-Agent": config.user_agent,
    }
    auth = None
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    elif config.username and config.app_password:
        auth = httpx.BasicAuth(config.username, config.app_password)
    return httpx.Client(
        timeout=httpx.Timeout(config.timeout_seconds),
        headers=headers,
        auth=auth,
        follow_redirects=True,
        transport=transport,
    )


@dataclass
class BitbucketClient:
    """Shared transport for all services.

    Retries, rate limiting and connection reuse are left to the ``httpx.Client``.
    """

    base_url: str
    http: httpx.Client = field(default_factory=lambda: httpx.Client(follow_redirects=True))

    def request_url(self, template: str, *args: object) -> str:
        # Path arguments are inserted as given; callers encode unsafe values.
        return self.base_url.rstrip("/") + template % args

    def add_options(self, url: str, options: QueryOptions | None) -> str:
        if options is None:
            return url
        if not isinstance(options, QueryOptions):
            raise OptionsError(f"Unsupported options type: {type(options).__name__}")
        params = options.to_params()
        if not params:
            return url
        if "?" not in url:
            separator = "?"
        elif url.endswith(("?", "&")):
            separator = ""
        else:
            separator = "&"
        return f"{url}{separator}{urlencode(params)}"

    def execute(
        self,
        method: str,
        url: str,
        result_type: type[M] | None = None,
        body: BitbucketModel | None = None,
    ) -> tuple[M | None, httpx.Response]:
        payload = body.to_payload() if body is not None else None
        logger.debug("%s %s", method, url)
        response = self.http.request(method, url, json=payload)
        logger.debug("%s %s -> %s", method, url, response.status_code)

        if not response.is_success:
            error = BitbucketAPIError(response)
            logger.warning("Bitbucket request failed: %s", error)
            raise error

        if result_type is None or not response.content:
            return None, response
        try:
            return result_type.model_validate_json(response.content), response
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Could not decode {result_type.__name__} from {method} {url}: {exc}", response
            ) from exc

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "BitbucketClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@dataclass
class Service:
    client: BitbucketClient


def parse_resource_id(
    pattern: str | re.Pattern[str], href: str | None, response: httpx.Response | None = None
) -> int:
    """Recover a numeric id from a resource's own API link.

    Some resources (components) only expose their id inside ``links.self.href``.
    """
    if not href:
        raise MalformedResponseError("Resource has no self link to read its id from", response)
    match = re.search(pattern, href)
    if match is None:
        raise MalformedResponseError(f"No resource id found in link {href!r}", response)
    return int(match.group(1))
