"""Application-facing configuration helpers.

The settings core takes explicit paths only; an application calls these once
at startup to pick up `.env`, resolve where its settings file lives and set up
logging before constructing a SettingsManager.
"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

DEFAULT_SETTINGS_PATH = Path.home() / ".jsonsettings" / "settings.json"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

def load_config(env_path: str | None = None) -> bool:
    """Load `.env` (or `env_path`) into the environment; True if a file was read."""
    env_file = Path(env_path) if env_path else Path(".env")
    if not env_file.is_file():
        logging.warning("No env file at %s – settings use defaults. Copy '.env.template' to '.env'.", env_file)
        return False
    load_dotenv(dotenv_path=env_file)
    logging.info("Configuration loaded from %s.", env_file)
    return True

def settings_path(default: Path | None = None) -> Path:
    override = os.getenv("SETTINGS_PATH")
    if override:
        return Path(override).expanduser()
    return default or DEFAULT_SETTINGS_PATH

def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
