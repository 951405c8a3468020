"""Persisted cluster state.

The State is rebuilt from host options on every ``create`` and stored as a
JSON blob under ``ClusterInfo.metadata["state"]``. That blob is the only
durable record the driver keeps; later operations reconstruct the State
from it.
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, field_serializer, field_validator, model_serializer
from pydantic_core import PydanticSerializationError

from kontainer_digitalocean.flags import option_keys
from kontainer_digitalocean.options import (
    Tristate,
    get_int,
    get_string,
    get_string_list,
    get_tristate,
)
from kontainer_digitalocean.types import ClusterInfo, DriverOptions

STATE_KEY = "state"


class StateNotFoundError(LookupError):
    """Cluster info carries no persisted state."""


class StateSerializationError(ValueError):
    """State could not be encoded to JSON."""


# =============================================================================
# Serialization Helpers
# =============================================================================


def _is_empty(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return value is None
    return value in ("", 0) or value == [] or value == {}


def _to_tristate(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return Tristate.from_bool(value)
    return value


class _OmitEmpty(BaseModel):
    """Drops empty strings, zeros, empty containers and unset tri-states on dump.

    Nested models are dropped too when all their fields are empty, so a
    default ``node_pool`` is absent from the blob rather than written as
    ``"node_pool": {}`` the way the Go driver writes it. Both forms load
    back to the same State.
    """

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: Any) -> dict[str, Any]:
        return {k: v for k, v in handler(self).items() if not _is_empty(v)}


# =============================================================================
# Models
# =============================================================================


class NodePool(_OmitEmpty):
    """Worker pool sizing and scaling.

    ``min_nodes`` and ``max_nodes`` only carry meaning when ``auto_scale``
    is ``Tristate.ON``.
    """

    name: str = ""
    size: str = ""
    count: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)
    labels: dict[str, str] = Field(default_factory=dict)
    auto_scale: Tristate = Tristate.UNSET
    min_nodes: int = 0
    max_nodes: int = 0

    @field_validator("auto_scale", mode="before")
    @classmethod
    def _parse_auto_scale(cls, value: Any) -> Any:
        return _to_tristate(value)

    @field_serializer("auto_scale")
    def _dump_auto_scale(self, value: Tristate) -> bool | None:
        return value.to_bool()


class State(_OmitEmpty):
    """Full configuration of one cluster-creation request."""

    cluster_id: str = ""
    token: str = Field(default="", repr=False)
    display_name: str = ""
    name: str = ""
    tags: list[str] = Field(default_factory=list)
    auto_upgrade: Tristate = Tristate.UNSET
    region_slug: str = ""
    vpc_id: str = ""
    version_slug: str = ""
    node_pool: NodePool = Field(default_factory=NodePool)

    @field_validator("auto_upgrade", mode="before")
    @classmethod
    def _parse_auto_upgrade(cls, value: Any) -> Any:
        return _to_tristate(value)

    @field_serializer("auto_upgrade")
    def _dump_auto_upgrade(self, value: Tristate) -> bool | None:
        return value.to_bool()

    def save(self, info: ClusterInfo) -> None:
        """Write this state into ``info.metadata``, replacing any previous blob.

        Raises:
            StateSerializationError: The state could not be encoded.
        """
        try:
            blob = self.model_dump_json()
        except PydanticSerializationError as e:
            raise StateSerializationError("could not marshal state") from e

        if info.metadata is None:
            info.metadata = {}

        info.metadata[STATE_KEY] = blob


# =============================================================================
# Builder
# =============================================================================


def parse_labels(tokens: list[str]) -> dict[str, str]:
    """Parse ``key=value`` tokens into a label map.

    Tokens that do not contain exactly one ``=`` are dropped.
    """
    labels: dict[str, str] = {}
    for token in tokens:
        parts = token.split("=")
        if len(parts) != 2:
            logger.debug(f"Dropping malformed node pool label {token!r}")
            continue
        labels[parts[0]] = parts[1]
    return labels


class StateBuilder:
    """Builds State from host options or from a persisted cluster info."""

    def build_state_from_opts(self, options: DriverOptions) -> State:
        """Map the create options into a State.

        Performs no business validation; a missing token is left empty.
        """
        auto_scale = get_tristate(options, *option_keys("node-pool-autoscale"))

        min_nodes = max_nodes = 0
        if auto_scale is Tristate.ON:
            max_nodes = get_int(options, *option_keys("node-pool-max"))
            min_nodes = get_int(options, *option_keys("node-pool-min"))

        node_pool = NodePool(
            name=get_string(options, *option_keys("node-pool-name")),
            size=get_string(options, *option_keys("node-pool-size")),
            count=get_int(options, *option_keys("node-pool-count")),
            labels=parse_labels(
                get_string_list(options, *option_keys("node-pool-labels"))
            ),
            auto_scale=auto_scale,
            min_nodes=min_nodes,
            max_nodes=max_nodes,
        )

        return State(
            token=get_string(options, *option_keys("token")),
            display_name=get_string(options, *option_keys("display-name")),
            name=get_string(options, *option_keys("name")),
            tags=get_string_list(options, *option_keys("tags")),
            auto_upgrade=get_tristate(options, *option_keys("auto-upgraded")),
            region_slug=get_string(options, *option_keys("region-slug")),
            vpc_id=get_string(options, *option_keys("vpc-id")),
            version_slug=get_string(options, *option_keys("version-slug")),
            node_pool=node_pool,
        )

    def build_state_from_cluster_info(self, info: ClusterInfo) -> State:
        """Reconstruct the State persisted by ``State.save``.

        Raises:
            StateNotFoundError: ``info`` holds no state entry.
            pydantic.ValidationError: The stored blob is not a valid State.
        """
        blob = (info.metadata or {}).get(STATE_KEY)
        if blob is None:
            raise StateNotFoundError("there is no state in the cluster info")

        return State.model_validate_json(blob)


__all__ = [
    "STATE_KEY",
    "NodePool",
    "State",
    "StateBuilder",
    "StateNotFoundError",
    "StateSerializationError",
    "parse_labels",
]
