"""Typed reads from the host option bag.

Each logical option may be spelled two ways (``node-pool-size`` and
``nodePoolSize``). Readers try every candidate key in order and return the
first one present, falling back to the kind's default.

Example:
    from kontainer_digitalocean.options import get_string, get_tristate

    region = get_string(opts, "region-slug", "regionSlug")
    autoscale = get_tristate(opts, "node-pool-autoscale", "nodePoolAutoscale")
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from kontainer_digitalocean.types import DriverOptions, FlagType


class OptionTypeError(TypeError):
    """Stored option value does not match the requested kind."""


# =============================================================================
# Tri-state
# =============================================================================


class Tristate(Enum):
    """Optional boolean: explicitly on, explicitly off, or never supplied."""

    UNSET = "unset"
    ON = "on"
    OFF = "off"

    @classmethod
    def from_bool(cls, value: bool | None) -> Tristate:
        if value is None:
            return cls.UNSET
        return cls.ON if value else cls.OFF

    def to_bool(self) -> bool | None:
        match self:
            case Tristate.ON:
                return True
            case Tristate.OFF:
                return False
            case _:
                return None


# =============================================================================
# Generic Lookup
# =============================================================================

_SECTIONS: dict[FlagType, str] = {
    FlagType.STRING: "string_options",
    FlagType.INT: "int_options",
    FlagType.BOOL: "bool_options",
    FlagType.BOOL_POINTER: "bool_options",
    FlagType.STRING_SLICE: "string_slice_options",
}


def _default_for(kind: FlagType) -> Any:
    match kind:
        case FlagType.STRING:
            return ""
        case FlagType.INT:
            return 0
        case FlagType.BOOL:
            return False
        case FlagType.BOOL_POINTER:
            return None
        case FlagType.STRING_SLICE:
            return []


def _check_kind(kind: FlagType, key: str, value: Any) -> None:
    match kind:
        case FlagType.STRING:
            ok = isinstance(value, str)
        case FlagType.INT:
            ok = isinstance(value, int) and not isinstance(value, bool)
        case FlagType.BOOL | FlagType.BOOL_POINTER:
            ok = isinstance(value, bool)
        case FlagType.STRING_SLICE:
            ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
    if not ok:
        raise OptionTypeError(
            f"Option '{key}' holds {type(value).__name__}, expected {kind.value}"
        )


def get_value(options: DriverOptions, kind: FlagType, *keys: str) -> Any:
    """Return the value under the first present key, or the kind's default.

    Args:
        options: Host option bag.
        kind: Value kind to read.
        keys: Candidate key names, tried in order.

    Returns:
        The stored value, or "" / 0 / False / None / [] when no key is present.

    Raises:
        OptionTypeError: The stored value does not match ``kind``.
        ValueError: ``kind`` is not a known option kind.
    """
    if kind not in _SECTIONS:
        raise ValueError(f"Unknown option kind '{kind}'")

    section: dict[str, Any] = getattr(options, _SECTIONS[kind])
    for key in keys:
        if key in section:
            value = section[key]
            _check_kind(kind, key, value)
            return value

    return _default_for(kind)


# =============================================================================
# Typed Readers
# =============================================================================


def get_string(options: DriverOptions, *keys: str) -> str:
    return get_value(options, FlagType.STRING, *keys)


def get_int(options: DriverOptions, *keys: str) -> int:
    return get_value(options, FlagType.INT, *keys)


def get_tristate(options: DriverOptions, *keys: str) -> Tristate:
    """Read a boolean option that distinguishes "not supplied" from false."""
    return Tristate.from_bool(get_value(options, FlagType.BOOL_POINTER, *keys))


def get_string_list(options: DriverOptions, *keys: str) -> list[str]:
    """Read a string-list option. Always returns a fresh list."""
    return list(get_value(options, FlagType.STRING_SLICE, *keys))


__all__ = [
    "OptionTypeError",
    "Tristate",
    "get_int",
    "get_string",
    "get_string_list",
    "get_tristate",
    "get_value",
]
