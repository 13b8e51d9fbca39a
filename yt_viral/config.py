from __future__ import annotations

import logging
import os
from pathlib import Path

from yt_viral.errors import MissingCredentialError

logger = logging.getLogger(__name__)

DEFAULT_TOP = 20
DEFAULT_DURATION = "any"
DEFAULT_MIN_SCORE = 0.5
DEFAULT_MODEL = "gemini-2.0-flash"

_ENV_FILENAME = ".env"
_KEY_NAME = "YOUTUBE_API_KEY"
_GEMINI_KEY_NAME = "GEMINI_API_KEY"


def get_api_key() -> str:
    """
    Returns the YouTube API key.

    Lookup order:
      1) Real environment variable: YOUTUBE_API_KEY
      2) Repo-local .env (dev convenience)
      3) Per-user config file (saved with `yt-viral set-key`)
    """
    return _lookup(_KEY_NAME)


def get_gemini_api_key() -> str:
    """Returns the Gemini API key, same lookup order as get_api_key()."""
    return _lookup(_GEMINI_KEY_NAME)


def save_api_key(key: str) -> Path:
    """
    Saves the YouTube API key to the per-user config file.
    Does NOT modify the process environment.
    """
    key = (key or "").strip()
    if not key:
        raise MissingCredentialError(_KEY_NAME, "refusing to save an empty API key")

    path = _user_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    # Simple KEY=VALUE format (like .env)
    path.write_text(f"{_KEY_NAME}={key}\n", encoding="utf-8")
    logger.info("saved %s to %s", _KEY_NAME, path)
    return path


def _lookup(name: str) -> str:
    key = os.getenv(name)
    if key:
        return key

    _load_dotenv_if_present()
    key = os.getenv(name)
    if key:
        return key

    _load_user_config_if_present()
    key = os.getenv(name)
    if key:
        return key

    raise MissingCredentialError(
        name,
        f"{name} not set.\n"
        "Set it in your environment, or create a config file:\n\n"
        f"  {_user_config_path()}\n"
        f"  {name}=YOUR_KEY_HERE\n",
    )


def _load_dotenv_if_present() -> None:
    """
    .env loader:
    Does not override already-set environment variables
    """
    env_path = _find_repo_root() / _ENV_FILENAME
    if not env_path.exists():
        return

    _load_env_file(env_path)


def _load_user_config_if_present() -> None:
    path = _user_config_path()
    if not path.exists():
        return

    _load_env_file(path)


def _load_env_file(path: Path) -> None:
    """
    Loads KEY=VALUE lines into os.environ via setdefault (won't override real env vars).
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("could not read %s: %s", path, e)
        return

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        k, v = line.split("=", 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")  # allow quoted values
        if not k:
            continue

        os.environ.setdefault(k, v)


def _user_config_path() -> Path:
    """
    %APPDATA%\\yt-viral\\config.env on Windows
    ~/.config/yt-viral/config.env on macOS/Linux
    """
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / "yt-viral" / "config.env"
    return Path.home() / ".config" / "yt-viral" / "config.env"


def _find_repo_root() -> Path:
    """
    Finds the repo root by walking upward until we see pyproject.toml or .git.
    Falls back to current working directory.
    """
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return cwd
