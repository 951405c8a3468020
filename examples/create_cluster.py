"""Create a DOKS cluster the way the kontainer-engine host would.

The driver reads ``kontainer-digitalocean.toml`` from the working directory
(and ~/.kontainer-digitalocean/defaults.toml), so a ``[logging]`` table
there turns on its log output. Run with DIGITALOCEAN_TOKEN set:

    DIGITALOCEAN_TOKEN=... python examples/create_cluster.py
"""

import asyncio
import os

from kontainer_digitalocean import ClusterInfo, DigitalOceanDriver, DriverOptions, StateBuilder


async def main() -> None:
    driver = DigitalOceanDriver()

    try:
        options = DriverOptions(
            string_options={
                "token": os.environ["DIGITALOCEAN_TOKEN"],
                "displayName": "example",
                "regionSlug": "nyc1",
                "versionSlug": "latest",
                "nodePoolName": "workers",
                "nodePoolSize": "s-2vcpu-4gb",
            },
            int_options={"nodePoolCount": 1, "nodePoolMin": 1, "nodePoolMax": 3},
            bool_options={"nodePoolAutoscale": True},
            string_slice_options={"nodePoolLabels": ["env=dev"]},
        )

        async with asyncio.timeout(60):
            info = await driver.create(options, ClusterInfo())

        state = StateBuilder().build_state_from_cluster_info(info)
        print(f"Cluster {state.cluster_id} requested in {state.region_slug}")
    finally:
        driver.close()


if __name__ == "__main__":
    asyncio.run(main())
