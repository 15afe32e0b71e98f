"""
Pydantic Settings for svnbridge configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .di import default_logger
from .models.config import (
    AuthConfig,
    EncodingConfig,
    ExecutionConfig,
    LoggingConfig,
    RootsConfig,
    SvnBridgeConfig,
    TimeoutsConfig,
)

CONFIG_DIR_NAME = ".svnbridge"
CONFIG_FILE_NAME = "config.toml"
PYPROJECT_TOOL_KEY = "svnbridge"


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .svnbridge/config.toml by walking up from start_dir (or cwd).

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        # Also check for pyproject.toml with [tool.svnbridge] section
        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
                if "tool" in data and PYPROJECT_TOOL_KEY in data["tool"]:
                    return pyproject
            except tomllib.TOMLDecodeError as e:
                default_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
            except OSError as e:
                default_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get(PYPROJECT_TOOL_KEY, {})

            self._data = data
            self._data["_config_file"] = str(path)

        except tomllib.TOMLDecodeError as e:
            default_logger().warning("Failed to parse config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to parse config file: {e}"
        except OSError as e:
            default_logger().warning("Failed to read config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to read config file: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        field_value = data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return {k: v for k, v in self._load_toml().items() if not k.startswith("_")}


class SvnBridgeSettings(BaseSettings):
    """svnbridge configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (SVNBRIDGE_<section>__<field>)
    3. TOML config file (.svnbridge/config.toml or pyproject.toml [tool.svnbridge])
    4. Model defaults
    """

    model_config = {
        "env_prefix": "SVNBRIDGE_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    execution: ExecutionConfig = ExecutionConfig()
    encoding: EncodingConfig = EncodingConfig()
    auth: AuthConfig = AuthConfig()
    roots: RootsConfig = RootsConfig()
    timeouts: TimeoutsConfig = TimeoutsConfig()
    logging: LoggingConfig = LoggingConfig()

    # Internal fields (not from config)
    _config_file: str | None = None
    _config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        Note: config_path/start_dir cannot be passed through here, so they
        travel via module-level variables set by load_settings().
        """
        toml_source = TomlConfigSource(
            settings_cls,
            config_path=_current_config_path,
            start_dir=_current_start_dir,
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    @property
    def config_file(self) -> str | None:
        return self._config_file

    @property
    def config_error(self) -> str | None:
        return self._config_error

    def to_config(self) -> SvnBridgeConfig:
        """Snapshot the settings as a plain config model."""
        return SvnBridgeConfig.model_validate(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a nested dict."""
        result: dict[str, Any] = {
            "execution": self.execution.model_dump(),
            "encoding": self.encoding.model_dump(),
            "auth": self.auth.model_dump(),
            "roots": self.roots.model_dump(),
            "timeouts": self.timeouts.model_dump(),
            "logging": self.logging.model_dump(),
        }
        return result


# Module-level variables for passing to settings_customise_sources
_current_config_path: Path | None = None
_current_start_dir: str | None = None


def load_settings(config_path: Path | None = None, start_dir: str | None = None) -> SvnBridgeSettings:
    """Load svnbridge settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        SvnBridgeSettings instance with all sources merged
    """
    global _current_config_path, _current_start_dir

    _current_config_path = config_path
    _current_start_dir = start_dir

    try:
        settings = SvnBridgeSettings()

        # Copy internal fields from TOML source
        toml_source = TomlConfigSource(SvnBridgeSettings, config_path, start_dir)
        toml_data = toml_source._load_toml()
        if "_config_file" in toml_data:
            settings._config_file = toml_data["_config_file"]
        if "_config_error" in toml_data:
            settings._config_error = toml_data["_config_error"]

        return settings
    finally:
        _current_config_path = None
        _current_start_dir = None
