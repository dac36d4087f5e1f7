"""Configuration management for issue-explorer."""

import copy
import os
from pathlib import Path
from typing import Any

import toml

from issue_explorer.errors import ConfigError

DEFAULT_CONFIG: dict[str, Any] = {
    "github": {
        "api_url": "https://api.github.com",
        "per_page": 30,
        "timeout": None,
        "user_agent": "issue-explorer",
    },
    "auth": {
        "credentials_file": "~/.issue-explorer",
    },
    "log": {
        "file": "issue-explorer.log",
        "level": "WARNING",
    },
}


def merge_config(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_config(config_path: str | None = None) -> dict[str, Any]:
    """
    Get configuration from config.toml file, merged over the defaults.

    Args:
        config_path: Optional path to config file. If None, looks for config.toml
                    in current directory and falls back to the defaults.

    Returns:
        Dictionary containing configuration values

    Raises:
        FileNotFoundError: If an explicitly given config file does not exist
        ConfigError: If config file is invalid TOML
    """
    if config_path:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found at {config_file}.")
    else:
        config_file = Path("config.toml")
        if not config_file.exists():
            return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_file) as f:
            return merge_config(DEFAULT_CONFIG, toml.load(f))
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {config_file}: {e}") from e


def get_github_config(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Get GitHub API settings.

    Returns:
        Dictionary with api_url (no trailing slash), per_page, timeout and user_agent

    Raises:
        ConfigError: If api_url is not an http(s) URL or per_page is out of range
    """
    config = config if config is not None else get_config()
    result = merge_config(DEFAULT_CONFIG["github"], config.get("github", {}))

    api_url = result["api_url"]
    if not api_url.startswith(("http://", "https://")):
        raise ConfigError(
            f"GitHub api_url must start with http:// or https://, got: {api_url}"
        )
    result["api_url"] = api_url.rstrip("/")

    # GitHub caps page sizes at 100
    if not 1 <= int(result["per_page"]) <= 100:
        raise ConfigError(f"GitHub per_page must be within 1-100, got: {result['per_page']}")
    result["per_page"] = int(result["per_page"])

    return result


def get_credentials_path(config: dict[str, Any] | None = None) -> Path:
    """Get the absolute path of the credentials file."""
    config = config if config is not None else get_config()
    auth_config = config.get("auth", {})
    path = auth_config.get("credentials_file", DEFAULT_CONFIG["auth"]["credentials_file"])
    return Path(path).expanduser()


def load_credentials(config: dict[str, Any] | None = None) -> dict[str, str] | None:
    """
    Read the stored credentials.

    Returns:
        Dictionary with username and token, or None if nothing usable is stored

    Raises:
        ConfigError: If the credentials file is not valid TOML
    """
    path = get_credentials_path(config)
    if not path.exists():
        return None

    try:
        data = toml.load(path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Invalid TOML in credentials file {path}: {e}") from e

    if not (data.get("username") and data.get("token")):
        return None
    return {"username": str(data["username"]), "token": str(data["token"])}


def save_credentials(
    username: str, token: str, config: dict[str, Any] | None = None
) -> Path:
    """Write the credentials file, readable by the current user only."""
    path = get_credentials_path(config)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        toml.dump({"username": username, "token": token}, f)
    os.chmod(path, 0o600)
    return path
