"""Build configuration.

Values come from environment variables (a .env file is loaded first) and
are overridden by explicit arguments, usually from the command line.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from slpc.compiler.errors import ConfigError
from slpc.compiler.ir import OutputTarget

DEFAULT_SOURCE = "index.html"

# Default program artifact per target
DEFAULT_OUTPUTS = {
    OutputTarget.JS: "bin/index.js",
    OutputTarget.NATIVE: "bin/index.json",
}

# Environment variable -> config field
ENV_VARS = {
    "SLPC_TARGET": "target",
    "SLPC_OUTPUT": "output",
    "SLPC_EXPOSED_NAME": "exposed_name",
    "SLPC_REGISTRY": "registry",
}


class BuildConfig(BaseModel):
    """Settings for one build invocation."""

    source: Path = Path(DEFAULT_SOURCE)
    target: OutputTarget = OutputTarget.JS
    output: str | None = None

    # Exposed name set outside the document; wins over jsExposedName
    exposed_name: str | None = None

    # Compile-time flags defined outside the document
    defines: set[str] = Field(default_factory=set)

    # Component manifest (JSON)
    registry: Path | None = None

    @property
    def output_path(self) -> str:
        return self.output or DEFAULT_OUTPUTS[self.target]

    @classmethod
    def from_env(cls, **overrides) -> BuildConfig:
        """Build a config from the environment, then explicit overrides.

        Overrides that are None are ignored, so argparse results can be
        passed straight through.

        Raises:
            ConfigError: If a value is invalid (e.g. unknown target)
        """
        load_dotenv(find_dotenv(usecwd=True))
        values = {}
        for env_var, field_name in ENV_VARS.items():
            value = os.getenv(env_var)
            if value:
                values[field_name] = value
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"invalid build configuration: {e}") from e
