"""Publish outline snapshots to the remote share store."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Final

import httpx
from pydantic import ValidationError as PydanticValidationError

from tocideator.config import (
    TOC_IDEATOR_PUBLISH_BACKOFF_S,
    TOC_IDEATOR_PUBLISH_MAX_RETRIES,
    TOC_IDEATOR_PUBLISH_TIMEOUT_S,
    TOC_IDEATOR_PUBLISH_URL,
    TOC_IDEATOR_USER_AGENT,
)
from tocideator.exceptions import PublishError
from tocideator.schemas import Forest, ShareResponse
from tocideator.snapshot import build_export_payload
from tocideator.utils.logging_config import get_logger

logger = get_logger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True)
class ShareLink:
    """A published snapshot: its share id and absolute read-only URL."""

    id: str
    url: str


async def publish_snapshot(
    forest: Forest,
    *,
    endpoint: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> ShareLink:
    """POST the outline snapshot to the share store and return its link.

    The payload is built before the first network call, so edits made while
    the request is in flight do not leak into the published snapshot. The
    outline itself is never modified, whether publishing succeeds or not.

    Args:
        forest: The outline to publish.
        endpoint: Store URL. Defaults to ``TOC_IDEATOR_PUBLISH_URL``.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.

    Returns:
        The share id and the absolute URL of the read-only page.

    Raises:
        PublishError: Network failure after all retries, a non-2xx status,
            or a response that is not a successful share answer.
    """
    url = endpoint or TOC_IDEATOR_PUBLISH_URL
    payload = build_export_payload(forest)

    if client is not None:
        response = await _post_with_retries(client, url, payload)
    else:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(TOC_IDEATOR_PUBLISH_TIMEOUT_S),
            headers={"User-Agent": TOC_IDEATOR_USER_AGENT},
        ) as new_client:
            response = await _post_with_retries(new_client, url, payload)

    link = _parse_share_response(response, url)
    logger.info("Snapshot published", extra={"share_id": link.id})
    return link


async def _post_with_retries(
    client: httpx.AsyncClient,
    url: str,
    payload: dict[str, Any],
) -> httpx.Response:
    last_exc: Exception | None = None

    for attempt in range(TOC_IDEATOR_PUBLISH_MAX_RETRIES + 1):
        try:
            response = await client.post(url, json=payload)
            if response.status_code not in RETRY_STATUS_CODES:
                return response
            last_exc = PublishError(f"HTTP {response.status_code} from {url}")
        except httpx.RequestError as exc:
            last_exc = exc

        if attempt < TOC_IDEATOR_PUBLISH_MAX_RETRIES:
            backoff = TOC_IDEATOR_PUBLISH_BACKOFF_S * (2**attempt)
            logger.debug("Retrying publish", extra={"attempt": attempt + 1, "backoff_s": backoff})
            await asyncio.sleep(backoff)

    logger.warning("Publish failed", extra={"url": url, "error": str(last_exc)})
    raise PublishError(f"Failed to publish to {url}: {last_exc}")


def _parse_share_response(response: httpx.Response, endpoint: str) -> ShareLink:
    try:
        body = response.json()
    except ValueError:
        body = None

    if not response.is_success:
        message = body.get("msg") if isinstance(body, dict) else None
        raise PublishError(message or f"HTTP {response.status_code}")

    if not isinstance(body, dict) or body.get("ok") is not True:
        message = body.get("msg") if isinstance(body, dict) else None
        raise PublishError(message or "share store returned an unexpected response")

    try:
        share = ShareResponse.model_validate(body)
    except PydanticValidationError as exc:
        raise PublishError(f"share store returned a malformed response: {exc.error_count()} error(s)") from exc

    return ShareLink(id=share.id, url=str(httpx.URL(endpoint).join(share.url)))
