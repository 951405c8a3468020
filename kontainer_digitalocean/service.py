"""DigitalOcean Kubernetes (DOKS) operations used by the driver."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

from loguru import logger

from kontainer_digitalocean.options import Tristate

if TYPE_CHECKING:
    from pydo import Client

    from kontainer_digitalocean.state import NodePool, State


class ProviderResponseError(RuntimeError):
    """DigitalOcean answered successfully but without the expected payload."""


@runtime_checkable
class ClusterService(Protocol):
    """Provider boundary: the single network call made by ``create``."""

    async def create_cluster(self, state: State) -> str:
        """Create the cluster described by ``state`` and return its id."""
        ...


ServiceFactory: TypeAlias = Callable[[str], ClusterService]
"""Builds a ClusterService authenticated with the given API token."""


# =============================================================================
# Request Body
# =============================================================================


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v not in (None, "", 0, [], {})}


def node_pool_body(pool: NodePool) -> dict[str, Any]:
    body = _compact(
        {
            "name": pool.name,
            "size": pool.size,
            "count": pool.count,
            "tags": pool.tags,
            "labels": pool.labels,
        }
    )
    if pool.auto_scale is not Tristate.UNSET:
        body["auto_scale"] = pool.auto_scale.to_bool()
    if pool.auto_scale is Tristate.ON:
        body["min_nodes"] = pool.min_nodes
        body["max_nodes"] = pool.max_nodes
    return body


def cluster_body(state: State) -> dict[str, Any]:
    """Translate a State into the ``POST /v2/kubernetes/clusters`` body.

    The cluster is named after the display name, falling back to the
    internal name. Empty fields and unset tri-states are left out so the
    API applies its own defaults.
    """
    body = _compact(
        {
            "name": state.display_name or state.name,
            "region": state.region_slug,
            "version": state.version_slug,
            "vpc_uuid": state.vpc_id,
            "tags": state.tags,
        }
    )
    if state.auto_upgrade is not Tristate.UNSET:
        body["auto_upgrade"] = state.auto_upgrade.to_bool()
    body["node_pools"] = [node_pool_body(state.node_pool)]
    return body


# =============================================================================
# Service
# =============================================================================


class DigitalOceanService:
    """ClusterService backed by a pydo client.

    pydo is synchronous; calls run in a worker thread so the awaiting task
    stays cancellable.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    async def create_cluster(self, state: State) -> str:
        body = cluster_body(state)
        logger.debug(
            f"Creating DOKS cluster {body.get('name')!r} in region {body.get('region')!r}"
        )

        resp = await asyncio.to_thread(self._client.kubernetes.create_cluster, body=body)

        cluster = (resp or {}).get("kubernetes_cluster") or {}
        cluster_id = cluster.get("id")
        if not cluster_id:
            raise ProviderResponseError("DigitalOcean response carries no cluster id")

        logger.info(f"DOKS cluster {cluster_id} requested")
        return cluster_id


def default_service_factory(token: str) -> ClusterService:
    """Build a DigitalOceanService around an authenticated pydo client."""
    from kontainer_digitalocean.client import get_client

    return DigitalOceanService(get_client(token))


__all__ = [
    "ClusterService",
    "DigitalOceanService",
    "ProviderResponseError",
    "ServiceFactory",
    "cluster_body",
    "default_service_factory",
    "node_pool_body",
]
