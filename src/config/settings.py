from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract.artifacts import MAVEN_CENTRAL

CONFIG_FILENAME = "javacg.toml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class HttpConfig(BaseModel):
    """Settings for POM/JAR downloads."""

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds",
    )


class AnalyzerConfig(BaseModel):
    """External call-graph analyzer invocation."""

    model_config = ConfigDict(extra="forbid")

    command: list[str] = Field(
        default_factory=list,
        description="Analyzer command; classpath entries are appended",
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds before the analyzer is killed (default: no limit)",
    )


class JavaCGConfig(BaseModel):
    """Configuration for call graph generation."""

    model_config = ConfigDict(extra="forbid")

    repositories: list[str] = Field(
        default_factory=lambda: [MAVEN_CENTRAL],
        description="Maven repository base URLs, tried in order",
    )
    output_dir: str | None = Field(
        default=None,
        description="Directory for emitted call graphs (default: none)",
    )
    log_level: LogLevel = Field(default="INFO")
    http: HttpConfig = Field(default_factory=HttpConfig)
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)

    @field_validator("repositories", mode="before")
    @classmethod
    def validate_repositories(cls, v: Any) -> Any:
        """Require at least one http(s) repository URL."""
        if not isinstance(v, list) or not v:
            msg = "repositories must be a non-empty list of URLs"
            raise ValueError(msg)
        for repo in v:
            if not isinstance(repo, str) or not repo.startswith(("http://", "https://")):
                msg = f"Invalid repository URL: {repo!r}"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path, path: Path | None = None) -> JavaCGConfig:
    """Load configuration from ``path`` or from javacg.toml under ``root``.

    A missing default file yields the defaults; a missing explicit ``path``
    is an error.
    """
    config_path = path if path is not None else Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        if path is not None:
            msg = f"Config file not found: {config_path}"
            raise ConfigError(msg)
        return JavaCGConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return JavaCGConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
