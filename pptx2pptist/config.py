"""
Runtime settings read from the environment.

A ``.env`` file in the working directory is honoured through python-dotenv;
real environment variables take precedence over it.
"""

import os
from dataclasses import dataclass

import dotenv

_ENV_PREFIX = "PPTX2PPTIST_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_env(key: str) -> str | None:
    value = os.getenv(f"{_ENV_PREFIX}{key}")
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_int_env(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(
            f"Environment variable {_ENV_PREFIX}{key} must be an integer, got {value!r}"
        ) from exc


def _get_bool_env(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(
        f"Environment variable {_ENV_PREFIX}{key} must be a boolean, got {value!r}"
    )


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    default_font: str = "Arial"
    default_color: str = "#000000"
    max_zip_entries: int = 50_000
    max_uncompressed_mb: int = 4096
    include_media: bool = True

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "Settings":
        if load_dotenv_file:
            dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
        return cls(
            log_level=(_get_env("LOG_LEVEL") or cls.log_level).upper(),
            default_font=_get_env("DEFAULT_FONT") or cls.default_font,
            default_color=_get_env("DEFAULT_COLOR") or cls.default_color,
            max_zip_entries=_get_int_env("MAX_ZIP_ENTRIES", cls.max_zip_entries),
            max_uncompressed_mb=_get_int_env(
                "MAX_UNCOMPRESSED_MB", cls.max_uncompressed_mb
            ),
            include_media=_get_bool_env("INCLUDE_MEDIA", cls.include_media),
        )


DEFAULT_SETTINGS = Settings()
