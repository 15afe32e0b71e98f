"""Configuration loading and management for svnbridge."""

from pathlib import Path
from typing import Any

from .core.exceptions import ConfigValidationError
from .core.settings import CONFIG_DIR_NAME, CONFIG_FILE_NAME, find_config_file, load_settings

# Config keys that can be set via `svnbridge config`
CONFIGURABLE_KEYS = {
    "execution.svn_binary": {
        "type": str,
        "default": "svn",
        "description": "svn executable name or absolute path",
    },
    "execution.force_utf8_locale": {
        "type": bool,
        "default": True,
        "description": "Force an English UTF-8 locale for every svn call",
    },
    "execution.locale": {
        "type": str,
        "default": "en_US.UTF-8",
        "description": "Locale exported as LANG/LC_* when forcing is enabled",
    },
    "encoding.fallbacks": {
        "type": list,
        "default": ["utf-8", "gbk", "gb2312", "big5"],
        "description": "Encodings tried when repairing garbled output (comma-separated)",
    },
    "encoding.repair": {
        "type": bool,
        "default": True,
        "description": "Re-decode output that looks garbled",
    },
    "auth.interactive_prompt": {
        "type": bool,
        "default": True,
        "description": "Prompt for credentials when saved ones are missing or rejected",
    },
    "auth.auto_save_credentials": {
        "type": bool,
        "default": True,
        "description": "Store prompted credentials when the user opts in",
    },
    "roots.custom_root": {
        "type": str,
        "default": None,
        "description": "Working-copy root that overrides detection (empty to clear)",
    },
    "timeouts.default": {
        "type": float,
        "default": None,
        "description": "Timeout in seconds for ordinary svn calls (empty for none)",
    },
    "timeouts.credential_validation": {
        "type": float,
        "default": 10,
        "description": "Timeout in seconds when validating credentials",
    },
    "timeouts.file_count": {
        "type": float,
        "default": 120,
        "description": "Timeout in seconds for counting repository files before checkout",
    },
    "timeouts.checkout": {
        "type": float,
        "default": 1800,
        "description": "Timeout in seconds for checkout",
    },
    "logging.level": {
        "type": str,
        "default": "warning",
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": True,
        "description": "Output debug logs to ~/.svnbridge/svnbridge.log",
    },
}

VALID_LOG_LEVELS = {"debug", "info", "warning", "error"}


def _get_default_config() -> dict:
    """Get default config from Pydantic models."""
    from .core.models.config import SvnBridgeConfig

    return SvnBridgeConfig().to_dict()


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'auth.interactive_prompt'."""
    parts = key.split(".")
    for part in parts:
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def _set_nested(d: dict, key: str, value):
    """Set a nested key like 'auth.interactive_prompt'."""
    parts = key.split(".")
    for part in parts[:-1]:
        if part not in d:
            d[part] = {}
        d = d[part]
    d[parts[-1]] = value


def _format_toml_value(val: Any) -> str:
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, str):
        escaped = val.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(val, list):
        items = ", ".join(_format_toml_value(v) for v in val)
        return f"[{items}]"
    return str(val)


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    Load configuration from file.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        Configuration dict with defaults applied
    """
    settings = load_settings(config_path=config_path, start_dir=start_dir)
    return settings.to_dict()


def get_svnbridge_dir(start_dir: str | None = None) -> Path:
    """
    Get the .svnbridge directory path, creating it if needed.

    Returns:
        Path to .svnbridge directory in start_dir or cwd.
    """
    base = Path(start_dir) if start_dir else Path.cwd()
    config_dir = base / CONFIG_DIR_NAME
    config_dir.mkdir(exist_ok=True)
    return config_dir


def get_config_path_for_write(start_dir: str | None = None, create: bool = True) -> Path:
    """
    Get the path where config should be written.

    Prefers existing .svnbridge/config.toml, otherwise one in start_dir or cwd
    (whose directory is created unless ``create`` is false).
    """
    existing = find_config_file(start_dir)
    if existing and existing.name == CONFIG_FILE_NAME:
        return existing

    if not create:
        base = Path(start_dir) if start_dir else Path.cwd()
        return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    return get_svnbridge_dir(start_dir) / CONFIG_FILE_NAME


def save_config(config: dict, config_path: Path):
    """
    Save configuration to a .svnbridge/config.toml file.

    Only saves non-default values. Unset optional values are omitted since
    TOML has no null.
    """
    lines = []
    defaults = _get_default_config()

    for section, values in config.items():
        if not isinstance(values, dict):
            continue
        section_defaults = defaults.get(section, {})
        section_lines = []
        for key, val in values.items():
            if val is None or val == section_defaults.get(key):
                continue
            section_lines.append(f"{key} = {_format_toml_value(val)}")

        if section_lines:
            lines.append(f"[{section}]")
            lines.extend(section_lines)
            lines.append("")

    config_path.write_text("\n".join(lines))


def config_get(key: str, start_dir: str | None = None):
    """Get a config value."""
    config = load_config(start_dir=start_dir)
    return _get_nested(config, key)


def _parse_value(key: str, value: str) -> Any:
    """Convert a raw CLI string to the type declared for ``key``."""
    key_info = CONFIGURABLE_KEYS[key]
    key_type = key_info["type"]

    if key_type is bool:
        if value.lower() in ("true", "1", "yes", "on"):
            return True
        if value.lower() in ("false", "0", "no", "off"):
            return False
        raise ConfigValidationError(f"Invalid boolean value: {value}", key=key, value=value)

    if key_type is list:
        if value.strip() == "":
            return []
        return [v.strip() for v in value.split(",") if v.strip()]

    if key_type is float:
        if value.strip() == "" and key_info["default"] is None:
            return None
        try:
            number = float(value)
        except ValueError as e:
            raise ConfigValidationError(
                f"Invalid number of seconds: {value}", key=key, value=value, cause=e
            ) from e
        if number <= 0:
            raise ConfigValidationError(
                f"Timeout must be positive: {value}", key=key, value=value
            )
        return int(number) if number.is_integer() else number

    if key == "logging.level" and value.lower() not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"Invalid log level: {value}. Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}",
            key=key,
            value=value,
        )
    if key == "logging.level":
        return value.lower()

    if value == "" and key_info["default"] is None:
        return None
    return value


def config_set(key: str, value: str, start_dir: str | None = None):
    """Set a config value and save to .svnbridge/config.toml."""
    if key not in CONFIGURABLE_KEYS:
        raise ConfigValidationError(
            f"Unknown config key: {key}. Valid keys: {', '.join(CONFIGURABLE_KEYS.keys())}",
            key=key,
        )

    typed_value = _parse_value(key, value)

    # Load existing config, update, and save
    config = load_config(start_dir=start_dir)
    _set_nested(config, key, typed_value)

    config_path = get_config_path_for_write(start_dir)
    save_config(config, config_path)

    return config_path, typed_value


def config_list(start_dir: str | None = None) -> dict[str, dict[str, Any]]:
    """
    Describe every configurable key together with its effective value.

    The effective value already reflects the config file and any
    SVNBRIDGE_* environment overrides.
    """
    config = load_config(start_dir=start_dir)
    return {key: {**info, "value": _get_nested(config, key)} for key, info in CONFIGURABLE_KEYS.items()}
