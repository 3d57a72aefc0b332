# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Single HTTP round trip for a signed request.

The dispatcher never interprets the response.  It returns whatever
status and body came back, and captures transport failures instead of
raising them so the outcome classifier sees every case the same way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from s3ops.credentials import Endpoint
from s3ops.signing import SignedRequest


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestOutcome:
    """Raw result of one dispatch.

    Attributes:
        http_status: Response status, or None if no response arrived.
        body: Response body (empty without a response).
        transport_error: The transport failure, if any.
    """

    http_status: int | None
    body: bytes = b""
    transport_error: Exception | None = None


def dispatch(
    request: SignedRequest,
    endpoint: Endpoint,
    *,
    timeout: float | None = None,
    transport: httpx.BaseTransport | None = None,
) -> RequestOutcome:
    """Send *request* to *endpoint* exactly once.

    Args:
        request: The signed request.
        endpoint: Endpoint providing the URL scheme.
        timeout: Overall timeout in seconds; None keeps the httpx
            default.
        transport: Optional httpx transport (for example a
            ``MockTransport``); None uses the network.

    Returns:
        The request outcome.
    """
    url = request.url(endpoint.scheme)
    logger.info("%s %s", request.method, url)

    client_kwargs: dict[str, object] = {"follow_redirects": False}
    if timeout is not None:
        client_kwargs["timeout"] = timeout
    if transport is not None:
        client_kwargs["transport"] = transport

    try:
        with httpx.Client(**client_kwargs) as client:
            response = client.request(
                request.method,
                url,
                headers=list(request.headers),
                content=request.body or None,
            )
            body = response.content
    except httpx.TransportError as e:
        logger.info("%s %s failed: %s", request.method, url, str(e))
        return RequestOutcome(http_status=None, transport_error=e)

    logger.info(
        "%s %s -> %d (%d bytes)",
        request.method,
        url,
        response.status_code,
        len(body),
    )
    return RequestOutcome(http_status=response.status_code, body=body)
