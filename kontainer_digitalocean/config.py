"""TOML-based driver configuration.

Loads ~/.kontainer-digitalocean/defaults.toml (global) and
kontainer-digitalocean.toml (project), merges them, and exposes option
defaults and logging settings.

Example ``kontainer-digitalocean.toml``:

    [defaults]
    region-slug = "nyc1"
    node-pool-size = "s-2vcpu-4gb"
    node-pool-count = 3
    tags = ["rancher"]

    [logging]
    level = "DEBUG"
    file = "driver.log"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, TypeAlias, TypeVar

from kontainer_digitalocean.flags import canonical_name, supplied_options
from kontainer_digitalocean.types import DriverOptions

RawConfig: TypeAlias = dict[str, Any]
LogLevel: TypeAlias = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"]

V = TypeVar("V")

GLOBAL_CONFIG_PATH = Path.home() / ".kontainer-digitalocean" / "defaults.toml"
PROJECT_CONFIG_NAME = "kontainer-digitalocean.toml"


@dataclass(frozen=True, slots=True)
class LogConfig:
    """The ``[logging]`` table.

    Attributes:
        level: Minimum level written to stderr.
        file: Optional log file; it always receives DEBUG and above.
        console: Whether to write to stderr.
    """

    level: LogLevel = "INFO"
    file: str | None = None
    console: bool = True


@dataclass(frozen=True, slots=True)
class DriverConfig:
    """Resolved driver configuration.

    Attributes:
        defaults: Option values used when the host does not supply the
            option under any of its spellings. Keys are hyphenated names.
        logging: Logging settings, or None to leave logging disabled.
    """

    defaults: DriverOptions = field(default_factory=DriverOptions)
    logging: LogConfig | None = None


def _deep_merge(base: RawConfig, override: RawConfig) -> RawConfig:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> RawConfig:
    if not path.is_file():
        return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def options_from_table(table: RawConfig) -> DriverOptions:
    """Sort a flat TOML table into the option bag sections by value type.

    Camel-case spellings are stored under the hyphenated option name.
    """
    options = DriverOptions()
    for raw_key, value in table.items():
        key = canonical_name(raw_key)
        match value:
            case bool():
                options.bool_options[key] = value
            case int():
                options.int_options[key] = value
            case str():
                options.string_options[key] = value
            case list() if all(isinstance(v, str) for v in value):
                options.string_slice_options[key] = list(value)
            case _:
                raise ValueError(
                    f"Unsupported default for option '{raw_key}': {type(value).__name__}"
                )
    return options


def merge_options(defaults: DriverOptions, options: DriverOptions) -> DriverOptions:
    """Overlay host-supplied options on configured defaults.

    A default applies only when the host supplied its option under none of
    its spellings, so ``regionSlug`` from the host hides a ``region-slug``
    default.
    """
    supplied = supplied_options(options)

    def unsupplied(section: dict[str, V]) -> dict[str, V]:
        return {k: v for k, v in section.items() if canonical_name(k) not in supplied}

    return DriverOptions(
        bool_options={**unsupplied(defaults.bool_options), **options.bool_options},
        string_options={**unsupplied(defaults.string_options), **options.string_options},
        int_options={**unsupplied(defaults.int_options), **options.int_options},
        string_slice_options={
            **unsupplied(defaults.string_slice_options),
            **options.string_slice_options,
        },
    )


def load_config(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> DriverConfig:
    global_cfg = _read_toml(global_path or GLOBAL_CONFIG_PATH)
    project_path = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    project_cfg = _read_toml(project_path)

    merged = _deep_merge(global_cfg, project_cfg)

    raw_logging = merged.get("logging")
    return DriverConfig(
        defaults=options_from_table(merged.get("defaults", {})),
        logging=LogConfig(**raw_logging) if raw_logging is not None else None,
    )


__all__ = [
    "DriverConfig",
    "LogConfig",
    "LogLevel",
    "GLOBAL_CONFIG_PATH",
    "PROJECT_CONFIG_NAME",
    "load_config",
    "merge_options",
    "options_from_table",
]
