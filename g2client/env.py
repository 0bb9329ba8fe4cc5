import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_SERVER_URL = "http://localhost:8258"


def load_env() -> None:
    """Load .env from the working directory if present.

    Variables already set in the environment are left untouched.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass
class Settings:
    """Client settings read from G2CLIENT_* environment variables."""

    server_url: str = DEFAULT_SERVER_URL
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    module_name: str = "g2client"
    ini_params: str = "{}"
    verbose_logging: int = 0
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "Settings":
        log_dir = os.getenv("G2CLIENT_LOG_DIR")
        return cls(
            server_url=os.getenv("G2CLIENT_SERVER_URL", DEFAULT_SERVER_URL),
            log_level=os.getenv("G2CLIENT_LOG_LEVEL", "INFO").upper(),
            log_dir=Path(log_dir) if log_dir else None,
            module_name=os.getenv("G2CLIENT_MODULE_NAME", "g2client"),
            ini_params=os.getenv("G2CLIENT_INI_PARAMS", "{}"),
            verbose_logging=int(os.getenv("G2CLIENT_VERBOSE_LOGGING", "0")),
            timeout=_optional_float(os.getenv("G2CLIENT_TIMEOUT")),
        )
