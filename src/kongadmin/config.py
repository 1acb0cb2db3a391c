"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for kongadmin:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.kongadmin/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_profiles_dir`.
* **Global config** -- a single :class:`~kongadmin.models.GlobalConfig`
  JSON file recording the default profile.
* **Profiles** -- one JSON file per Admin API, each deserialised into a
  :class:`~kongadmin.models.Profile`.
* **Precedence resolution** -- :func:`resolve_profile` merges CLI flags,
  environment variables and the stored default into the effective profile.
* **Credential resolution** -- :func:`resolve_credential` reads the admin
  token from an env var, a file, or an interactive prompt.

All file writes go through :func:`_atomic_write` (temp file, then rename).
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Optional

from kongadmin.exceptions import ConfigError
from kongadmin.models import GlobalConfig, Profile

_APP_NAME = "kongadmin"
_CONFIG_FILENAME = "config.json"
_DEFAULT_PROFILE_NAME = "default"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/kongadmin/`` (default ``~/.config/kongadmin/``).
    On macOS/Windows: ``~/.kongadmin/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_profiles_dir() -> Path:
    """Return ``<config_dir>/profiles/``, creating it if necessary."""
    path = get_config_dir() / "profiles"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the exception re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Profiles ---


def _profile_path(name: str) -> Path:
    return get_profiles_dir() / f"{name}.json"


def list_profiles() -> list[str]:
    """Return all profile names found in the profiles directory, sorted alphabetically."""
    return sorted(p.stem for p in get_profiles_dir().glob("*.json") if p.is_file())


def load_profile(name: str) -> Profile:
    """Load and validate a profile from disk.

    Raises:
        ConfigError: If the profile file does not exist, contains invalid
            JSON, or fails validation.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Profile.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid profile '{name}' at {path}: {exc}") from exc


def save_profile(profile: Profile) -> None:
    """Persist a profile atomically; the file name is derived from ``profile.name``."""
    data = profile.model_dump(mode="json")
    _atomic_write(_profile_path(profile.name), json.dumps(data, indent=2) + "\n")


def delete_profile(name: str) -> None:
    """Delete a profile's JSON file from disk.

    Raises:
        ConfigError: If the profile does not exist.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    path.unlink()


# --- Precedence resolution ---


def resolve_profile(
    cli_profile: Optional[str] = None,
    cli_base_url: Optional[str] = None,
) -> Profile:
    """Resolve the effective profile.

    Precedence (high to low):
        1. CLI flags (``cli_profile``, ``cli_base_url``)
        2. Environment variables (``KONGADMIN_PROFILE``, ``KONGADMIN_BASE_URL``)
        3. ``default_profile`` in the global config
        4. An unsaved profile pointing at ``http://localhost:8001``

    A profile named explicitly (flag, env or global default) must exist on
    disk; otherwise :class:`ConfigError` is raised.
    """
    global_cfg = load_global_config()

    name: Optional[str] = global_cfg.default_profile
    env_profile = os.environ.get("KONGADMIN_PROFILE")
    if env_profile:
        name = env_profile
    if cli_profile is not None:
        name = cli_profile

    if name is not None:
        profile = load_profile(name)
    else:
        profile = Profile(name=_DEFAULT_PROFILE_NAME)

    env_base_url = os.environ.get("KONGADMIN_BASE_URL")
    if cli_base_url is not None:
        profile.base_url = cli_base_url
    elif env_base_url:
        profile.base_url = env_base_url

    return profile


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts interactively (requires a TTY)

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Admin token: ")

    raise ConfigError(f"Unknown credential source format: {source}")
