from __future__ import annotations

import fnmatch
import sys
from contextvars import ContextVar
from pathlib import Path, PurePath
from typing import Any, Literal, Self

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lintbridge.constants import (
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_MAX_NUMBER_OF_PROBLEMS,
    DEFAULT_PATTERN,
    MAX_NUMBER_OF_PROBLEMS_LIMIT,
    PROJECT_CONFIG_FILENAME,
)
from lintbridge.diagnostics import NormalizedSeverity
from lintbridge.exceptions import ConfigError, PatternError
from lintbridge.logging import get_logger
from lintbridge.runners.parsers.pattern import PatternMatcher

__all__ = [
    "LintBridgeConfig",
    "LintingConfig",
    "ToolConfig",
    "FormatterConfig",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

_project_config_path: ContextVar[Path | None] = ContextVar(
    "lintbridge_project_config_path", default=None
)


class LintingConfig(BaseModel):
    """Settings shared by every linter run.

    Attributes:
        enabled: Master switch; when False no tool is run.
        max_number_of_problems: Cap on diagnostics returned per run.
        ignore_patterns: Glob patterns of documents that are never linted.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    max_number_of_problems: int = Field(
        default=DEFAULT_MAX_NUMBER_OF_PROBLEMS, ge=1, le=MAX_NUMBER_OF_PROBLEMS_LIMIT
    )
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS)
    )

    def is_ignored(self, document_path: str) -> bool:
        """Check whether a document matches one of the ignore patterns."""
        path = PurePath(document_path)
        for pattern in self.ignore_patterns:
            if fnmatch.fnmatch(document_path, pattern):
                return True
            try:
                if path.match(pattern):
                    return True
            except ValueError:
                # PurePath.match rejects empty patterns
                continue
        return False


class _ExecutableConfig(BaseModel):
    """Fields shared by linters and formatters."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    command: str | None = None
    module_name: str | None = None
    args: list[str] = Field(default_factory=list)
    stdin_support: bool = False
    timeout_seconds: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_executable(self) -> Self:
        if not self.command and not self.module_name:
            raise ValueError("either 'command' or 'module_name' must be set")
        return self


class ToolConfig(_ExecutableConfig):
    """Configuration for one linter.

    Attributes:
        enabled: Whether this linter runs at all.
        command: Executable to run. Ignored when module_name is set.
        module_name: Run as ``<python_path> -m <module_name>``.
        args: Static arguments placed before the document path.
        stdin_support: Stream the document over stdin instead of passing its path.
        column_offset: Subtracted from positive columns (1 for 1-based tools).
        pattern: Output pattern with named groups line, column, type, code,
            message and optionally file.
        category_severity: Raw category label to severity name or alias.
        timeout_seconds: Kill the tool after this many seconds.

    Example lintbridge.yaml:
        tools:
          pylint:
            module_name: pylint
            args:
              - "--msg-template={line},{column},{category},{symbol}:{msg}"
              - "--reports=n"
            category_severity:
              convention: Hint
              error: Error
              fatal: Error
              refactor: Hint
              warning: Warning
    """

    column_offset: int = 0
    pattern: str = DEFAULT_PATTERN
    category_severity: dict[str, str] = Field(default_factory=dict)

    @field_validator("pattern")
    @classmethod
    def check_pattern_compiles(cls, v: str) -> str:
        try:
            PatternMatcher(v)
        except PatternError as e:
            raise ValueError(e.message) from e
        return v

    @field_validator("category_severity")
    @classmethod
    def check_severity_names(cls, v: dict[str, str]) -> dict[str, str]:
        """Warn about severity names that will fall back to Information."""
        canonical = {severity.value for severity in NormalizedSeverity}
        for category, name in v.items():
            if name not in canonical and NormalizedSeverity.from_alias(name) is None:
                logger.warning(
                    f"Unknown severity '{name}' for category '{category}'; "
                    "it will be reported as Information."
                )
        return v

    def is_enabled(self, document_path: str, linting: LintingConfig) -> bool:
        """Decide whether this linter runs for a document.

        Args:
            document_path: Filesystem path of the document.
            linting: Shared linting settings.

        Returns:
            False if linting or this tool is disabled or the path is ignored.
        """
        if not linting.enabled or not self.enabled:
            return False
        return not linting.is_ignored(document_path)


class FormatterConfig(_ExecutableConfig):
    """Configuration for one formatter.

    Attributes:
        command: Executable to run. Ignored when module_name is set.
        module_name: Run as ``<python_path> -m <module_name>``.
        args: Static arguments placed before the document path.
        stdin_support: Stream the document over stdin instead of passing its path.
        timeout_seconds: Kill the formatter after this many seconds.

    Example lintbridge.yaml:
        formatters:
          darker:
            module_name: darker
            args: ["--diff"]
    """


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e
            if loaded is None:
                logger.warning(f"Config file {yaml_file} is empty, using defaults.")
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    value=type(loaded).__name__,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class LintBridgeConfig(BaseSettings):
    """Root configuration object containing all lintbridge settings.

    Built once at startup and passed to every coordinator; runs only ever
    read it.
    """

    model_config = SettingsConfigDict(
        env_prefix="LINTBRIDGE_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    python_path: str = Field(default_factory=lambda: sys.executable or "python3")
    workspace_root: Path | None = None
    linting: LintingConfig = Field(default_factory=LintingConfig)
    tools: dict[str, ToolConfig] = Field(default_factory=dict)
    formatters: dict[str, FormatterConfig] = Field(default_factory=dict)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @field_validator("workspace_root")
    @classmethod
    def check_workspace_root_exists(cls, v: Path | None) -> Path | None:
        """Warn if workspace_root path doesn't exist."""
        if v is not None and not v.is_dir():
            logger.warning(
                f"Configured workspace_root does not exist: {v}. "
                "Tool runs will fail."
            )
        return v

    @property
    def working_directory(self) -> Path:
        """Directory tools are started in."""
        return self.workspace_root if self.workspace_root is not None else Path.cwd()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init arguments
        2. Environment variables (LINTBRIDGE_*)
        3. Project YAML config (./lintbridge.yaml or the path given to load_config)
        4. User YAML config (~/.config/lintbridge/config.yaml)
        """
        project_config_path = (
            _project_config_path.get() or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/lintbridge/config.yaml
    """
    return Path.home() / ".config" / "lintbridge" / "config.yaml"


def load_config(config_path: Path | None = None) -> LintBridgeConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file. Defaults to
            ./lintbridge.yaml.

    Returns:
        LintBridgeConfig instance with merged configuration

    Raises:
        ConfigError: If the file named by config_path is missing or the
            configuration is invalid
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError(
            message=f"Config file not found: {config_path}",
            value=str(config_path),
        )
    if config_path is None and not (Path.cwd() / PROJECT_CONFIG_FILENAME).exists():
        logger.info("No project configuration found, using defaults.")

    token = _project_config_path.set(config_path)
    try:
        return LintBridgeConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
