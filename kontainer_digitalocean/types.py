"""Host-side records exchanged with the kontainer-engine runtime.

These mirror the structures the host passes into (and expects back from)
every driver lifecycle method. The driver never owns them; it only reads
options and writes into ``ClusterInfo.metadata``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# =============================================================================
# Option Kinds
# =============================================================================


class FlagType(StrEnum):
    """Value kind of a driver option, as named by the host."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    BOOL_POINTER = "boolPointer"
    STRING_SLICE = "stringSlice"


# =============================================================================
# Option Bag
# =============================================================================


@dataclass
class DriverOptions:
    """Generic key/typed-value store supplied by the host for create/update.

    Each kind lives in its own section. A key is "present" when it exists in
    the section for the requested kind, whatever its value.
    """

    bool_options: dict[str, bool] = field(default_factory=dict)
    string_options: dict[str, str] = field(default_factory=dict)
    int_options: dict[str, int] = field(default_factory=dict)
    string_slice_options: dict[str, list[str]] = field(default_factory=dict)


# =============================================================================
# Option Descriptors
# =============================================================================


@dataclass(frozen=True, slots=True)
class Flag:
    """Description of one accepted option, used by the host for UI/CLI generation."""

    type: FlagType
    usage: str = ""
    default: str | int | bool | list[str] | None = None


@dataclass
class DriverFlags:
    options: dict[str, Flag] = field(default_factory=dict)


# =============================================================================
# Cluster Records
# =============================================================================


@dataclass
class ClusterInfo:
    """Host-owned description of a cluster.

    ``metadata`` is the only field this driver writes; it is the sole
    durable record of the driver's state.
    """

    version: str = ""
    service_account_token: str = ""
    endpoint: str = ""
    username: str = ""
    password: str = ""
    root_ca_certificate: str = ""
    client_certificate: str = ""
    client_key: str = ""
    node_count: int = 0
    status: str = ""
    metadata: dict[str, str] | None = None


@dataclass(frozen=True, slots=True)
class KubernetesVersion:
    version: str = ""


@dataclass(frozen=True, slots=True)
class NodeCount:
    count: int = 0


@dataclass
class Capabilities:
    """Set of capability ids the driver advertises."""

    capabilities: dict[int, bool] = field(default_factory=dict)


@dataclass
class K8SCapabilities:
    l4_load_balancer: dict[str, str | bool] | None = None
    ingress_controllers: list[dict[str, str | bool]] = field(default_factory=list)
    node_pool_scaling_supported: bool = False


__all__ = [
    "Capabilities",
    "ClusterInfo",
    "DriverFlags",
    "DriverOptions",
    "Flag",
    "FlagType",
    "K8SCapabilities",
    "KubernetesVersion",
    "NodeCount",
]
