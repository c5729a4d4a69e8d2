"""Configuration helpers for the Outfit Log app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_API_BASE_URL = "http://127.0.0.1:8080"


@dataclass
class OutfitLogConfig:
    """Configuration values for the Outfit Log app.

    The same values drive both sides: the controllers read ``api_base_url``
    and the request timeout, the backend reads the database path and the
    bind address.
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_seconds: float = 5.0
    database_path: str = "data/outfits.db"
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "OutfitLogConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables, which take precedence.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("OUTFIT_LOG_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        api_base_url = get_value("api_base_url", DEFAULT_API_BASE_URL)
        timeout = get_value("request_timeout_seconds", "5.0")
        database_path = get_value("database_path", "data/outfits.db")
        host = get_value("host", "0.0.0.0")
        port = get_value("port", "8080")

        return cls(
            api_base_url=str(api_base_url or DEFAULT_API_BASE_URL).rstrip("/"),
            request_timeout_seconds=float(timeout or 5.0),
            database_path=str(database_path or "data/outfits.db"),
            host=str(host or "0.0.0.0"),
            port=int(port or 8080),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config of ``key: value`` lines."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
