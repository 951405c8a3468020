"""Create-options descriptor advertised to the host.

Every option has a hyphenated name and, for most, a camel-case alias kept
from older host versions. ``OPTION_KEYS`` is the single table of those
spellings; readers and default merging both go through it.
"""

from __future__ import annotations

from dataclasses import replace

from kontainer_digitalocean.types import DriverFlags, DriverOptions, Flag, FlagType

OPTION_KEYS: dict[str, tuple[str, ...]] = {
    "token": ("token",),
    "display-name": ("display-name", "displayName"),
    "name": ("name",),
    "tags": ("tags",),
    "auto-upgraded": ("auto-upgraded", "autoUpgraded"),
    "region-slug": ("region-slug", "regionSlug"),
    "vpc-id": ("vpc-id", "vpcID"),
    "version-slug": ("version-slug", "versionSlug"),
    "node-pool-name": ("node-pool-name", "nodePoolName"),
    "node-pool-autoscale": ("node-pool-autoscale", "nodePoolAutoscale"),
    "node-pool-max": ("node-pool-max", "nodePoolMax"),
    "node-pool-min": ("node-pool-min", "nodePoolMin"),
    "node-pool-count": ("node-pool-count", "nodePoolCount"),
    "node-pool-labels": ("node-pool-labels", "nodePoolLabels"),
    "node-pool-size": ("node-pool-size", "nodePoolSize"),
}

CREATE_FLAGS: dict[str, Flag] = {
    "token": Flag(FlagType.STRING, "The DigitalOcean API token"),
    "display-name": Flag(FlagType.STRING, "The name of the cluster shown in the UI"),
    "name": Flag(FlagType.STRING, "The internal name of the cluster"),
    "tags": Flag(FlagType.STRING_SLICE, "Tags applied to the Kubernetes cluster"),
    "auto-upgraded": Flag(
        FlagType.BOOL_POINTER,
        "Whether the cluster is upgraded automatically during the maintenance window",
    ),
    "region-slug": Flag(FlagType.STRING, "Slug of the region where the cluster is created"),
    "vpc-id": Flag(FlagType.STRING, "UUID of the VPC the cluster is placed in"),
    "version-slug": Flag(FlagType.STRING, "Slug of the Kubernetes version to install"),
    "node-pool-name": Flag(FlagType.STRING, "Name of the worker node pool"),
    "node-pool-autoscale": Flag(
        FlagType.BOOL_POINTER, "Whether the node pool scales automatically"
    ),
    "node-pool-max": Flag(FlagType.INT, "Maximum number of nodes when autoscaling"),
    "node-pool-min": Flag(FlagType.INT, "Minimum number of nodes when autoscaling"),
    "node-pool-count": Flag(FlagType.INT, "Number of nodes in the pool"),
    "node-pool-labels": Flag(
        FlagType.STRING_SLICE, "Kubernetes labels for pool nodes, as key=value"
    ),
    "node-pool-size": Flag(FlagType.STRING, "Droplet size slug of the pool nodes"),
}

_CANONICAL: dict[str, str] = {
    key: name for name, keys in OPTION_KEYS.items() for key in keys
}


def option_keys(name: str) -> tuple[str, ...]:
    """All spellings of option ``name``, hyphenated first."""
    return OPTION_KEYS[name]


def canonical_name(key: str) -> str:
    """Hyphenated option name for any spelling; unknown keys map to themselves."""
    return _CANONICAL.get(key, key)


def supplied_options(options: DriverOptions) -> set[str]:
    """Canonical names of every option present in the bag, in any section."""
    keys = (
        options.bool_options.keys()
        | options.string_options.keys()
        | options.int_options.keys()
        | options.string_slice_options.keys()
    )
    return {canonical_name(key) for key in keys}


def build_create_options(defaults: DriverOptions | None = None) -> DriverFlags:
    """Describe every option accepted by ``create``.

    Configured ``defaults`` are reported as each flag's default value.
    """
    flags = dict(CREATE_FLAGS)
    if defaults is None:
        return DriverFlags(options=flags)

    for section in (
        defaults.bool_options,
        defaults.string_options,
        defaults.int_options,
        defaults.string_slice_options,
    ):
        for key, value in section.items():
            name = canonical_name(key)
            if name in flags:
                flags[name] = replace(flags[name], default=value)

    return DriverFlags(options=flags)


__all__ = [
    "CREATE_FLAGS",
    "OPTION_KEYS",
    "build_create_options",
    "canonical_name",
    "option_keys",
    "supplied_options",
]
