import json

import pytest

from graph_augment.config import Config


def write_config(project, data):
    path = Config.config_path(project)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


class TestConfig:

    def test_defaults(self):
        config = Config()

        assert config.enabled is True
        assert config.marker_name == ".gitnexus"
        assert config.max_depth == 5
        assert config.timeout_ms == 8000
        assert config.min_token_length == 3
        assert config.command is None

    def test_missing_file_gives_defaults(self, plain_project):
        assert Config.load(plain_project) == Config()

    def test_loads_values(self, plain_project):
        write_config(plain_project, {
            "enabled": False,
            "marker_name": ".codegraph",
            "max_depth": 3,
            "timeout_ms": 2500,
            "min_token_length": 4,
            "command": "node ./dist/cli.js",
        })

        config = Config.load(plain_project)

        assert config.enabled is False
        assert config.marker_name == ".codegraph"
        assert config.max_depth == 3
        assert config.timeout_ms == 2500
        assert config.min_token_length == 4
        assert config.command == ["node", "./dist/cli.js"]

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", ""])
    def test_malformed_file_gives_defaults(self, plain_project, raw):
        write_config(plain_project, raw)

        assert Config.load(plain_project) == Config()

    def test_wrong_types_fall_back_per_key(self, plain_project):
        write_config(plain_project, {
            "enabled": "no",
            "max_depth": True,
            "timeout_ms": -1,
            "marker_name": "",
            "command": [1, 2],
        })

        assert Config.load(plain_project) == Config()


class TestEnvOverrides:

    def test_disabled(self, plain_project, monkeypatch):
        monkeypatch.setenv("GRAPH_AUGMENT_DISABLED", "1")

        assert Config.load(plain_project).enabled is False

    def test_timeout_and_command(self, plain_project, monkeypatch):
        write_config(plain_project, {"timeout_ms": 2500, "command": ["gitnexus"]})
        monkeypatch.setenv("GRAPH_AUGMENT_TIMEOUT_MS", "1200")
        monkeypatch.setenv("GRAPH_AUGMENT_COMMAND", "npx -y gitnexus@latest")

        config = Config.load(plain_project)

        assert config.timeout_ms == 1200
        assert config.command == ["npx", "-y", "gitnexus@latest"]

    def test_bad_timeout_ignored(self):
        config = Config()
        config.apply_env({"GRAPH_AUGMENT_TIMEOUT_MS": "soon"})

        assert config.timeout_ms == 8000


class TestDiscover:
    """Config lookup from nested working directories."""

    def test_finds_config_in_ancestor(self, plain_project):
        write_config(plain_project, {"enabled": False, "timeout_ms": 1500})
        nested = plain_project / "src" / "api" / "handlers"
        nested.mkdir(parents=True)

        config = Config.discover(nested)

        assert config.enabled is False
        assert config.timeout_ms == 1500

    def test_nearest_config_wins(self, plain_project):
        write_config(plain_project, {"timeout_ms": 1500})
        package = plain_project / "packages" / "web"
        write_config(package, {"timeout_ms": 3000})

        assert Config.discover(package / "src").timeout_ms == 3000

    def test_respects_depth_bound(self, plain_project):
        write_config(plain_project, {"enabled": False})
        deep = plain_project / "a" / "b" / "c" / "d" / "e"
        deep.mkdir(parents=True)

        assert Config.discover(deep).enabled is True
        assert Config.discover(deep, max_depth=6).enabled is False

    def test_defaults_without_config(self, plain_project):
        assert Config.discover(plain_project) == Config()

    def test_env_still_applies(self, plain_project, monkeypatch):
        monkeypatch.setenv("GRAPH_AUGMENT_DISABLED", "yes")

        assert Config.discover(plain_project).enabled is False
