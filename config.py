import tomllib
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
import os

from utils.scheduler import DEFAULT_INTERVALS

CONFIG_DIR = Path.home() / ".recallcoach"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"


def load_config() -> Dict[str, Any]:
    """Load config from ~/.recallcoach/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()  # .env may carry WEAK_INTERVAL_HOURS etc.
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        if PROJECT_CONFIG_EXAMPLE.exists():
            shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
        else:
            CONFIG_PATH.write_text("", encoding="utf-8")  # all defaults
    with open(CONFIG_PATH, "rb") as f:
        try:
            config = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid config file {CONFIG_PATH}: {exc}") from exc

    sr_cfg = config.get("spaced_repetition", {})
    config["spaced_repetition"] = {
        f"{strength}_interval_hours": float(os.getenv(
            f"{strength.upper()}_INTERVAL_HOURS",
            sr_cfg.get(f"{strength}_interval_hours", default_hours),
        ))
        for strength, default_hours in DEFAULT_INTERVALS.items()
    }
    validate_intervals(config["spaced_repetition"])

    server_cfg = config.get("server", {})
    config["server"] = {
        "host": os.getenv("RECALLCOACH_HOST", server_cfg.get("host", "127.0.0.1")),
        "port": int(os.getenv("RECALLCOACH_PORT", server_cfg.get("port", 8000))),
    }
    logging_cfg = config.get("logging", {})
    config["logging"] = {
        "level": os.getenv("RECALLCOACH_LOG_LEVEL", logging_cfg.get("level", "INFO")).upper(),
    }
    return config


def validate_intervals(sr_cfg: Dict[str, float]) -> None:
    """Reject interval tables that are non-positive or not weak <= medium <= strong."""
    weak = sr_cfg["weak_interval_hours"]
    medium = sr_cfg["medium_interval_hours"]
    strong = sr_cfg["strong_interval_hours"]
    if min(weak, medium, strong) <= 0:
        raise ValueError("Review intervals must be positive")
    if not weak <= medium <= strong:
        raise ValueError(
            "Review intervals must satisfy weak <= medium <= strong "
            f"(got {weak}, {medium}, {strong})"
        )


def get_config_value(section: str, key: str, default: Optional[Any] = None) -> Any:
    """Get nested config value, e.g., get_config_value('server', 'port')."""
    config = load_config()
    value = config.get(section, {}).get(key, default)
    return value
