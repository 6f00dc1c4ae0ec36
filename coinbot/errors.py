"""Errors raised while fulfilling a single webhook request.

Every error here ends the request with an HTTP 500 and a plain-text body;
none of them is retried and none of them outlives the request.
"""

from __future__ import annotations


class WebhookError(RuntimeError):
    """Base class for failures that map to a plain-text 500 response."""


class MalformedRequest(WebhookError):
    pass


class MissingParameter(WebhookError):
    def __init__(self, name: str):
        super().__init__(f"missing parameter '{name}'")
        self.name = name


class UnknownIntent(WebhookError):
    def __init__(self, intent: str):
        super().__init__(f"unknown intent: {intent}")
        self.intent = intent


class NetworkError(WebhookError):
    """Upstream unreachable or answered with a non-2xx status."""


class DecodeError(WebhookError):
    """Upstream payload is not JSON or does not have the expected shape."""


class UnknownAsset(WebhookError):
    def __init__(self, asset_id: str):
        super().__init__(f"unknown asset: {asset_id}")
        self.asset_id = asset_id


class ParseError(WebhookError):
    def __init__(self, field: str, value: object):
        super().__init__(f"cannot parse {field}={value!r} as a decimal number")
        self.field = field
        self.value = value


class InsufficientHistory(WebhookError):
    def __init__(self, asset_id: str, received: int):
        super().__init__(
            f"need at least 2 history points for {asset_id}, received {received}"
        )
        self.asset_id = asset_id
        self.received = received


class RequestTimeout(WebhookError):
    pass
