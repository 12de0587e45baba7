from typing import Any

import httpx


class BitbucketError(Exception):
    """Base class for every error raised by this package."""


class OptionsError(BitbucketError, TypeError):
    """An options value that cannot be turned into query parameters.

    Raised before any request is sent.
    """


class MalformedResponseError(BitbucketError, ValueError):
    def __init__(self, message: str, response: httpx.Response | None = None):
        super().__init__(message)
        self.response = response


class BitbucketAPIError(BitbucketError):
    """The API answered with a non-2xx status."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.status_code = response.status_code
        self.body: Any = _decode_body(response)
        self.message = _error_message(self.body) or response.reason_phrase
        super().__init__(f"{response.request.method} {response.request.url}: {self.status_code} {self.message}")


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(body: Any) -> str | None:
    # Bitbucket wraps failures as {"type": "error", "error": {"message": ...}}
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message")
    return None
