"""kontainer-engine driver for DigitalOcean Kubernetes clusters.

Example:
    from kontainer_digitalocean import ClusterInfo, DigitalOceanDriver, DriverOptions

    driver = DigitalOceanDriver()
    info = await driver.create(
        DriverOptions(string_options={"token": "...", "name": "c1"}),
        ClusterInfo(),
    )
"""

from kontainer_digitalocean.config import DriverConfig, LogConfig, load_config
from kontainer_digitalocean.driver import DigitalOceanDriver, KontainerDriver, MissingTokenError
from kontainer_digitalocean.logging import disable_logging, enable_logging
from kontainer_digitalocean.options import OptionTypeError, Tristate
from kontainer_digitalocean.service import ClusterService, DigitalOceanService, ProviderResponseError
from kontainer_digitalocean.state import (
    NodePool,
    State,
    StateBuilder,
    StateNotFoundError,
    StateSerializationError,
)
from kontainer_digitalocean.types import (
    Capabilities,
    ClusterInfo,
    DriverFlags,
    DriverOptions,
    Flag,
    FlagType,
    K8SCapabilities,
    KubernetesVersion,
    NodeCount,
)

__all__ = [
    "Capabilities",
    "ClusterInfo",
    "ClusterService",
    "DigitalOceanDriver",
    "DigitalOceanService",
    "DriverConfig",
    "DriverFlags",
    "DriverOptions",
    "Flag",
    "FlagType",
    "K8SCapabilities",
    "KontainerDriver",
    "KubernetesVersion",
    "LogConfig",
    "MissingTokenError",
    "NodeCount",
    "NodePool",
    "OptionTypeError",
    "ProviderResponseError",
    "State",
    "StateBuilder",
    "StateNotFoundError",
    "StateSerializationError",
    "Tristate",
    "load_config",
    "enable_logging",
    "disable_logging",
]
