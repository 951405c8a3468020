from pathlib import Path

import pytest

from kontainer_digitalocean.config import (
    DriverConfig,
    _deep_merge,
    load_config,
    merge_options,
    options_from_table,
)
from kontainer_digitalocean.config import LogConfig
from kontainer_digitalocean.types import DriverOptions


class TestDeepMerge:
    def test_shallow_override(self):
        base = {"a": 1, "b": 2}
        override = {"b": 3}
        assert _deep_merge(base, override) == {"a": 1, "b": 3}

    def test_nested_merge(self):
        base = {"defaults": {"region-slug": "nyc1", "node-pool-count": 1}}
        override = {"defaults": {"region-slug": "ams3"}}
        result = _deep_merge(base, override)
        assert result == {"defaults": {"region-slug": "ams3", "node-pool-count": 1}}

    def test_empty_base(self):
        assert _deep_merge({}, {"a": 1}) == {"a": 1}


class TestOptionsFromTable:
    def test_sorts_by_type(self):
        opts = options_from_table(
            {
                "region-slug": "nyc1",
                "node-pool-count": 3,
                "auto-upgraded": True,
                "tags": ["a", "b"],
            }
        )
        assert opts.string_options == {"region-slug": "nyc1"}
        assert opts.int_options == {"node-pool-count": 3}
        assert opts.bool_options == {"auto-upgraded": True}
        assert opts.string_slice_options == {"tags": ["a", "b"]}

    def test_unsupported_type_raises(self):
        with pytest.raises(ValueError, match="node-pool-labels"):
            options_from_table({"node-pool-labels": {"env": "prod"}})


class TestMergeOptions:
    def test_host_options_win(self):
        defaults = DriverOptions(string_options={"region-slug": "nyc1", "name": "d"})
        host = DriverOptions(string_options={"region-slug": "ams3"})
        merged = merge_options(defaults, host)
        assert merged.string_options == {"region-slug": "ams3", "name": "d"}

    def test_inputs_not_mutated(self):
        defaults = DriverOptions(int_options={"node-pool-count": 1})
        host = DriverOptions(int_options={"node-pool-min": 1})
        merge_options(defaults, host)
        assert defaults.int_options == {"node-pool-count": 1}
        assert host.int_options == {"node-pool-min": 1}


class TestLoadConfig:
    def test_no_files(self, tmp_path: Path):
        config = load_config(project_dir=tmp_path / "nope", global_path=tmp_path / "nope.toml")
        assert config == DriverConfig()

    def test_project_overrides_global(self, tmp_path: Path):
        global_toml = tmp_path / "defaults.toml"
        global_toml.write_text('[defaults]\nregion-slug = "nyc1"\nnode-pool-count = 1\n')
        project_dir = tmp_path / "project"
        project_dir.mkdir()
        (project_dir / "kontainer-digitalocean.toml").write_text(
            '[defaults]\nregion-slug = "fra1"\n'
        )

        config = load_config(project_dir=project_dir, global_path=global_toml)

        assert config.defaults.string_options == {"region-slug": "fra1"}
        assert config.defaults.int_options == {"node-pool-count": 1}
        assert config.logging is None

    def test_logging_section(self, tmp_path: Path):
        (tmp_path / "kontainer-digitalocean.toml").write_text(
            '[logging]\nlevel = "DEBUG"\nconsole = false\n'
        )
        config = load_config(project_dir=tmp_path, global_path=tmp_path / "nope.toml")
        assert config.logging == LogConfig(level="DEBUG", console=False)

    def test_unknown_logging_key_raises(self, tmp_path: Path):
        (tmp_path / "kontainer-digitalocean.toml").write_text('[logging]\ncolour = true\n')
        with pytest.raises(TypeError):
            load_config(project_dir=tmp_path, global_path=tmp_path / "nope.toml")


class TestAliasHandling:
    def test_camel_case_default_stored_under_hyphenated_name(self):
        opts = options_from_table({"regionSlug": "ams3", "nodePoolCount": 2})
        assert opts.string_options == {"region-slug": "ams3"}
        assert opts.int_options == {"node-pool-count": 2}

    def test_host_alias_hides_default(self):
        defaults = DriverOptions(string_options={"region-slug": "fra1", "vpc-id": "v1"})
        host = DriverOptions(string_options={"regionSlug": "ams3"})
        merged = merge_options(defaults, host)
        assert merged.string_options == {"vpc-id": "v1", "regionSlug": "ams3"}

    def test_host_option_in_other_section_hides_default(self):
        defaults = DriverOptions(int_options={"node-pool-count": 2})
        host = DriverOptions(string_options={"nodePoolCount": "5"})
        assert merge_options(defaults, host).int_options == {}

    def test_project_alias_overrides_global_spelling(self, tmp_path: Path):
        global_toml = tmp_path / "defaults.toml"
        global_toml.write_text('[defaults]\nregion-slug = "nyc1"\n')
        project_dir = tmp_path / "project"
        project_dir.mkdir()
        (project_dir / "kontainer-digitalocean.toml").write_text(
            '[defaults]\nregionSlug = "fra1"\n'
        )

        config = load_config(project_dir=project_dir, global_path=global_toml)

        assert config.defaults.string_options == {"region-slug": "fra1"}
