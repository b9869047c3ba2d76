from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_FILE = Path(".env")
ENV_FILE_VARIABLE = "R2_ENV_FILE"

DEFAULT_REGION = "auto"
DEFAULT_ADDRESSING_STYLE = "auto"
DEFAULT_LOG_FORMAT = "plain"
DEFAULT_LOG_LEVEL = "WARNING"

REQUIRED_KEYS: tuple[str, ...] = (
    "R2_BUCKET_NAME",
    "R2_PUBLIC_ENDPOINT",
    "R2_ENDPOINT",
    "R2_ACCESS_KEY_ID",
    "R2_SECRET_ACCESS_KEY",
)


class ConfigError(Exception):
    """Base class for configuration failures."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file does not exist."""


class MissingConfigKeyError(ConfigError):
    """Raised when required configuration keys are absent or empty."""

    def __init__(self, keys: list[str]):
        self.keys = list(keys)
        super().__init__(f"Missing required configuration keys: {', '.join(keys)}")


def _parse_lines(lines: list[str]) -> dict[str, str]:
    entries: dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            entries[key] = value.strip()
    return entries


def load(path: str | os.PathLike[str]) -> dict[str, str]:
    """Parse a key=value file into a mapping."""
    env_path = Path(path)
    if not env_path.is_file():
        raise ConfigNotFoundError(f"Environment file not found: {env_path}")
    return _parse_lines(env_path.read_text(encoding="utf-8").splitlines())


def resolve_env_file(explicit: str | os.PathLike[str] | None = None) -> Path:
    if explicit:
        return Path(explicit)
    from_env = os.environ.get(ENV_FILE_VARIABLE)
    if from_env:
        return Path(from_env)
    return ENV_FILE


class ConfigLoader:
    """Read-only view over a key=value configuration file."""

    def __init__(self, path: str | os.PathLike[str] = ENV_FILE):
        self._path = Path(path)
        self._entries = load(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._entries.get(key, default)

    def all(self) -> dict[str, str]:
        return dict(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


@dataclass(frozen=True, slots=True)
class R2Settings:
    bucket_name: str
    public_endpoint: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    region: str = DEFAULT_REGION
    addressing_style: str = DEFAULT_ADDRESSING_STYLE
    log_format: str = DEFAULT_LOG_FORMAT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.log_format not in {"plain", "json"}:
            raise ConfigError(
                f"LOG_FORMAT must be 'plain' or 'json', got {self.log_format!r}"
            )

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> "R2Settings":
        entries = loader.all()
        missing = [key for key in REQUIRED_KEYS if not entries.get(key)]
        if missing:
            raise MissingConfigKeyError(missing)

        return cls(
            bucket_name=entries["R2_BUCKET_NAME"],
            public_endpoint=entries["R2_PUBLIC_ENDPOINT"],
            endpoint=entries["R2_ENDPOINT"],
            access_key_id=entries["R2_ACCESS_KEY_ID"],
            secret_access_key=entries["R2_SECRET_ACCESS_KEY"],
            region=entries.get("R2_REGION") or DEFAULT_REGION,
            addressing_style=(
                entries.get("R2_ADDRESSING_STYLE") or DEFAULT_ADDRESSING_STYLE
            ).lower(),
            log_format=(entries.get("LOG_FORMAT") or DEFAULT_LOG_FORMAT).lower(),
            log_level=(entries.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )


def load_settings(path: str | os.PathLike[str] | None = None) -> R2Settings:
    return R2Settings.from_loader(ConfigLoader(resolve_env_file(path)))
