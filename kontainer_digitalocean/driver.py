"""kontainer-engine driver for DigitalOcean Kubernetes.

Example:
    from kontainer_digitalocean import DigitalOceanDriver, DriverOptions, ClusterInfo

    driver = DigitalOceanDriver()
    info = await driver.create(
        DriverOptions(
            string_options={"token": "...", "name": "c1", "region-slug": "nyc1"},
            int_options={"node-pool-count": 3},
        ),
        ClusterInfo(),
    )
    info.metadata["state"]  # persisted State JSON
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from loguru import logger

from kontainer_digitalocean.config import DriverConfig, load_config, merge_options
from kontainer_digitalocean.flags import build_create_options
from kontainer_digitalocean.logging import disable_logging, enable_logging
from kontainer_digitalocean.service import ServiceFactory, default_service_factory
from kontainer_digitalocean.state import StateBuilder
from kontainer_digitalocean.types import (
    Capabilities,
    ClusterInfo,
    DriverFlags,
    DriverOptions,
    K8SCapabilities,
    KubernetesVersion,
    NodeCount,
)


class MissingTokenError(ValueError):
    """Create was requested without a DigitalOcean API token."""


# =============================================================================
# Host Interface
# =============================================================================


@runtime_checkable
class KontainerDriver(Protocol):
    """Lifecycle interface the kontainer-engine host drives.

    Every method is a coroutine so the host's cancellation and timeouts
    reach the provider calls. A ``None`` result from a query or mutation
    means the driver does not support it, not that it succeeded.
    """

    async def get_driver_create_options(self) -> DriverFlags | None: ...

    async def get_driver_update_options(self) -> DriverFlags | None: ...

    async def create(self, options: DriverOptions, info: ClusterInfo) -> ClusterInfo | None: ...

    async def update(self, info: ClusterInfo, options: DriverOptions) -> ClusterInfo | None: ...

    async def post_check(self, info: ClusterInfo) -> ClusterInfo | None: ...

    async def remove(self, info: ClusterInfo) -> None: ...

    async def get_version(self, info: ClusterInfo) -> KubernetesVersion | None: ...

    async def set_version(self, info: ClusterInfo, version: KubernetesVersion) -> None: ...

    async def get_cluster_size(self, info: ClusterInfo) -> NodeCount | None: ...

    async def set_cluster_size(self, info: ClusterInfo, count: NodeCount) -> None: ...

    async def get_capabilities(self) -> Capabilities | None: ...

    async def get_k8s_capabilities(self, options: DriverOptions) -> K8SCapabilities | None: ...

    async def remove_legacy_service_account(self, info: ClusterInfo) -> None: ...

    async def etcd_save(
        self, info: ClusterInfo, options: DriverOptions, snapshot_name: str
    ) -> None: ...

    async def etcd_restore(
        self, info: ClusterInfo, options: DriverOptions, snapshot_name: str
    ) -> ClusterInfo | None: ...

    async def etcd_remove_snapshot(
        self, info: ClusterInfo, options: DriverOptions, snapshot_name: str
    ) -> None: ...


# =============================================================================
# Driver
# =============================================================================


class DigitalOceanDriver:
    """KontainerDriver provisioning DOKS clusters.

    Only ``create`` and ``get_driver_create_options`` do work. The remaining
    lifecycle methods are no-ops returning ``None``.

    A host that instantiates the class with no arguments gets the TOML
    configuration from ``load_config()``. Logging handlers are installed
    whenever the configuration carries a ``[logging]`` table; ``close``
    removes them.

    Args:
        config: Option defaults and logging settings. Loaded from the
            global and project TOML files when omitted.
        state_builder: Builds State from options or persisted metadata.
        service_factory: Returns a ClusterService for an API token.
    """

    def __init__(
        self,
        config: DriverConfig | None = None,
        state_builder: StateBuilder | None = None,
        service_factory: ServiceFactory | None = None,
    ) -> None:
        self._config = config if config is not None else load_config()
        self._state_builder = state_builder or StateBuilder()
        self._service_factory = service_factory or default_service_factory
        self._log_handlers: list[int] = []

        if self._config.logging is not None:
            self._log_handlers = enable_logging(self._config.logging)

    @property
    def config(self) -> DriverConfig:
        return self._config

    def close(self) -> None:
        """Remove the logging handlers installed by this driver."""
        disable_logging(self._log_handlers)
        self._log_handlers = []

    async def get_driver_create_options(self) -> DriverFlags:
        logger.debug("DigitalOcean.Driver.get_driver_create_options called")
        return build_create_options(self._config.defaults)

    async def get_driver_update_options(self) -> DriverFlags | None:
        return None

    async def create(self, options: DriverOptions, info: ClusterInfo) -> ClusterInfo:
        """Provision a cluster and persist its State into ``info.metadata``.

        Nothing is written to ``info`` unless the provider call succeeds.

        Raises:
            MissingTokenError: No token among the options.
            OptionTypeError: An option holds a value of the wrong kind.
            StateSerializationError: The State could not be persisted.
        """
        logger.debug("DigitalOcean.Driver.create called")

        try:
            state = self._state_builder.build_state_from_opts(
                merge_options(self._config.defaults, options)
            )
        except Exception as e:
            logger.debug(f"Error building state: {e}")
            raise

        if not state.token:
            logger.debug("Error building state: token not found")
            raise MissingTokenError("token was not reported")

        service = self._service_factory(state.token)

        try:
            cluster_id = await service.create_cluster(state)
        except Exception as e:
            logger.debug(f"Error creating cluster: {e}")
            raise

        state.cluster_id = cluster_id

        try:
            state.save(info)
        except Exception as e:
            logger.debug(f"Error saving state: {e}")
            raise

        return info

    # TODO: fetch the kubeconfig of the new cluster and fill endpoint/credentials.
    async def post_check(self, info: ClusterInfo) -> ClusterInfo | None:
        return None

    async def update(self, info: ClusterInfo, options: DriverOptions) -> ClusterInfo | None:
        return None

    async def remove(self, info: ClusterInfo) -> None:
        return None

    async def get_version(self, info: ClusterInfo) -> KubernetesVersion | None:
        return None

    async def set_version(self, info: ClusterInfo, version: KubernetesVersion) -> None:
        return None

    async def get_cluster_size(self, info: ClusterInfo) -> NodeCount | None:
        return None

    async def set_cluster_size(self, info: ClusterInfo, count: NodeCount) -> None:
        return None

    async def get_capabilities(self) -> Capabilities | None:
        return None

    async def get_k8s_capabilities(self, options: DriverOptions) -> K8SCapabilities | None:
        return None

    async def remove_legacy_service_account(self, info: ClusterInfo) -> None:
        return None

    async def etcd_save(
        self, info: ClusterInfo, options: DriverOptions, snapshot_name: str
    ) -> None:
        return None

    async def etcd_restore(
        self, info: ClusterInfo, options: DriverOptions, snapshot_name: str
    ) -> ClusterInfo | None:
        return None

    async def etcd_remove_snapshot(
        self, info: ClusterInfo, options: DriverOptions, snapshot_name: str
    ) -> None:
        return None


__all__ = ["DigitalOceanDriver", "KontainerDriver", "MissingTokenError"]
