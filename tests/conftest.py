from __future__ import annotations

import asyncio

import pytest

from kontainer_digitalocean.state import State
from kontainer_digitalocean.types import DriverOptions


class FakeClusterService:
    """Records create calls and answers with a fixed id, or raises."""

    def __init__(self, cluster_id: str = "c-123", error: Exception | None = None) -> None:
        self.cluster_id = cluster_id
        self.error = error
        self.calls: list[State] = []

    async def create_cluster(self, state: State) -> str:
        self.calls.append(state)
        if self.error is not None:
            raise self.error
        return self.cluster_id


class BlockingClusterService:
    """Never answers until cancelled."""

    def __init__(self) -> None:
        self.started = asyncio.Event()

    async def create_cluster(self, state: State) -> str:
        self.started.set()
        await asyncio.Event().wait()
        return "unreachable"


@pytest.fixture
def full_options() -> DriverOptions:
    return DriverOptions(
        string_options={
            "token": "do-token",
            "display-name": "Production",
            "name": "c-prod",
            "region-slug": "nyc1",
            "vpc-id": "vpc-1",
            "version-slug": "1.29.1-do.0",
            "node-pool-name": "workers",
            "node-pool-size": "s-2vcpu-4gb",
        },
        int_options={
            "node-pool-count": 3,
            "node-pool-min": 2,
            "node-pool-max": 5,
        },
        bool_options={
            "auto-upgraded": True,
            "node-pool-autoscale": True,
        },
        string_slice_options={
            "tags": ["rancher", "prod"],
            "node-pool-labels": ["env=prod", "broken", "tier=web"],
        },
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep drivers built without a config away from real TOML files."""
    import kontainer_digitalocean.config as config_module

    monkeypatch.setattr(config_module, "GLOBAL_CONFIG_PATH", tmp_path / "no-global.toml")
    monkeypatch.chdir(tmp_path)
    return tmp_path
