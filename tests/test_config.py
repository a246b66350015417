"""Tests for BuildConfig."""

from pathlib import Path

import pytest

from slpc.compiler.errors import ConfigError
from slpc.compiler.ir import OutputTarget
from slpc.config import BuildConfig


pytestmark = pytest.mark.usefixtures("clean_env")


def test_defaults():
    config = BuildConfig.from_env()

    assert config.source == Path("index.html")
    assert config.target == OutputTarget.JS
    assert config.output_path == "bin/index.js"
    assert config.exposed_name is None
    assert config.defines == set()


def test_native_default_output():
    assert BuildConfig(target="native").output_path == "bin/index.json"


def test_env_values(monkeypatch):
    monkeypatch.setenv("SLPC_TARGET", "native")
    monkeypatch.setenv("SLPC_OUTPUT", "dist/site.json")
    monkeypatch.setenv("SLPC_EXPOSED_NAME", "Site")

    config = BuildConfig.from_env()

    assert config.target == OutputTarget.NATIVE
    assert config.output_path == "dist/site.json"
    assert config.exposed_name == "Site"


def test_overrides_beat_env_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("SLPC_OUTPUT", "dist/site.js")

    config = BuildConfig.from_env(output="build/app.js", exposed_name=None)

    assert config.output_path == "build/app.js"
    assert config.exposed_name is None


def test_dotenv_file_is_loaded(tmp_path):
    (tmp_path / ".env").write_text("SLPC_EXPOSED_NAME=FromDotenv\n", encoding="utf-8")

    config = BuildConfig.from_env()

    assert config.exposed_name == "FromDotenv"


def test_invalid_target():
    with pytest.raises(ConfigError, match="invalid build configuration"):
        BuildConfig.from_env(target="flash")
