"""HTTP client for the Kuma control-plane API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from kumarecon.adapters.http_resilience import ResilientClient, build_limiter
from kumarecon.config.kuma import KumaConfig, get_kuma_config
from kumarecon.domain.catalog import ResourceTypeEntry
from kumarecon.domain.errors import MalformedCatalogError, TransportError
from kumarecon.domain.ports.resources import CatalogSnapshot, ResourceAPI

from .schema import IndexResponse, PoliciesResponse

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aiolimiter import AsyncLimiter

    from kumarecon.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

INDEX_PATH = "/"
POLICIES_PATH = "/policies"

type ClientFactory = Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient]


def resource_path(mesh: str, path_segment: str, name: str) -> str:
    return f"/meshes/{mesh}/{path_segment}/{name}"


def _default_client_factory(
    config: ResilienceConfig,
    limiter: AsyncLimiter | None,
) -> ResilientClient:
    return ResilientClient(config, limiter=limiter)


@dataclass(slots=True)
class KumaClient:
    """``ResourceAPI`` implementation talking to a Kuma control plane over HTTP.

    Every call opens a short-lived ``ResilientClient`` against the configured
    ``base_url``. The rate limiter is built once so it throttles across calls.
    """

    config: KumaConfig = field(default_factory=get_kuma_config)
    client_factory: ClientFactory = field(default=_default_client_factory)
    limiter: AsyncLimiter | None = field(init=False)

    def __post_init__(self) -> None:
        self.limiter = build_limiter(self.config.resilience.ratelimit)

    def heartbeat_and_catalog(self) -> CatalogSnapshot:
        return asyncio.run(self._heartbeat_and_catalog_async())

    def fetch(self, mesh: str, path_segment: str, name: str) -> bytes | None:
        return asyncio.run(self._fetch_async(resource_path(mesh, path_segment, name)))

    def put(self, mesh: str, path_segment: str, name: str, body: str) -> None:
        asyncio.run(self._put_async(resource_path(mesh, path_segment, name), body))

    def delete(self, mesh: str, path_segment: str, name: str) -> None:
        asyncio.run(self._delete_async(resource_path(mesh, path_segment, name)))

    def _open(self) -> ResilientClient:
        return self.client_factory(self.config.resilience, self.limiter)

    async def _heartbeat_and_catalog_async(self) -> CatalogSnapshot:
        async with self._open() as client:
            index_response = await _send("GET", INDEX_PATH, client.get(INDEX_PATH))
            _expect_status(index_response, "GET", INDEX_PATH, {httpx.codes.OK})
            policies_response = await _send("GET", POLICIES_PATH, client.get(POLICIES_PATH))
            _expect_status(policies_response, "GET", POLICIES_PATH, {httpx.codes.OK})

        try:
            index = IndexResponse.model_validate_json(index_response.content)
            policies = PoliciesResponse.model_validate_json(policies_response.content)
        except ValidationError as exc:
            log.error("Failed to decode control-plane catalog: %s", exc)
            msg = f"failed to decode json for heartbeat request: {exc}"
            raise MalformedCatalogError(msg) from exc

        return CatalogSnapshot(
            product=index.product or "",
            version=index.version,
            entries=tuple(
                ResourceTypeEntry(
                    logical_name=policy.name,
                    path_segment=policy.path,
                    read_only=policy.read_only,
                    is_policy=True,
                )
                for policy in policies.policies
            ),
        )

    async def _fetch_async(self, path: str) -> bytes | None:
        async with self._open() as client:
            response = await _send("GET", path, client.get(path))
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        _expect_status(response, "GET", path, {httpx.codes.OK})
        return response.content

    async def _put_async(self, path: str, body: str) -> None:
        async with self._open() as client:
            response = await _send(
                "PUT",
                path,
                client.put(
                    path,
                    content=body.encode("utf-8"),
                    headers={"Content-Type": "application/json"},
                ),
            )
        _expect_status(response, "PUT", path, {httpx.codes.OK, httpx.codes.CREATED})

    async def _delete_async(self, path: str) -> None:
        async with self._open() as client:
            response = await _send("DELETE", path, client.delete(path))
        _expect_status(response, "DELETE", path, {httpx.codes.OK})


async def _send(method: str, path: str, request: Awaitable[httpx.Response]) -> httpx.Response:
    try:
        return await request
    except httpx.HTTPError as exc:
        raise TransportError(f"{method} '{path}' request failed: {exc}") from exc


def _expect_status(
    response: httpx.Response,
    method: str,
    path: str,
    accepted: set[int],
) -> None:
    if response.status_code in accepted:
        return
    body = response.text
    raise TransportError(
        f"invalid http response '{response.status_code} {response.reason_phrase}' "
        f"for {method} '{path}' request. Response: '{body}'",
        status=response.status_code,
        body=body,
    )


if TYPE_CHECKING:
    _api_check: ResourceAPI = KumaClient()
