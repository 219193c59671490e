"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors.internal import ConfigError
from ..logs.logger import logger
from .model import SessionConfig, normalize_rooms

DEFAULT_CONF_FILE = "tmi_client.conf"

# Environment variable -> SessionConfig field
ENV_FIELDS = {
    "TMI_TOKEN": "token",
    "TMI_NICK": "nick",
    "TMI_ROOMS": "rooms",
    "TMI_TRANSPORT": "transport",
    "TMI_USE_TLS": "use_tls",
}


class ConfigLoader:
    """Builds a ``SessionConfig`` from a JSON file and the environment.

    Environment values take precedence over file values, and explicit
    overrides take precedence over both.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def config_file(self) -> str:
        return self.environ.get("TMI_CONF_FILE", DEFAULT_CONF_FILE)

    def load_file(self, path: str | os.PathLike[str]) -> dict[str, Any]:
        """Load raw settings from a JSON file.

        A missing file yields an empty mapping.

        Raises:
            ConfigError: If the file cannot be read or is not a JSON object.
        """
        try:
            with Path(path).open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            raise ConfigError(
                f"Failed to read config file {path}: {e}", data={"path": str(path)}
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a JSON object",
                data={"path": str(path)},
            )
        return data

    def load_env(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for env_name, field_name in ENV_FIELDS.items():
            raw = self.environ.get(env_name)
            if raw is None or not raw.strip():
                continue
            if field_name == "use_tls":
                values[field_name] = raw.strip().lower() in ("true", "1", "yes")
            else:
                values[field_name] = raw.strip()
        return values

    def get_configuration(
        self,
        config_file: str | os.PathLike[str] | None = None,
        overrides: Mapping[str, Any] | None = None,
        *,
        extra_rooms: Sequence[str] = (),
    ) -> SessionConfig:
        """Load and validate the session configuration.

        ``overrides`` replace merged values; ``extra_rooms`` are joined after
        the configured rooms.

        Raises:
            ConfigError: If the merged settings are missing or invalid.
        """
        path = config_file or self.config_file()
        data = self.load_file(path)
        data.update(self.load_env())
        if overrides:
            data.update({k: v for k, v in overrides.items() if v is not None})
        if extra_rooms:
            try:
                configured = normalize_rooms(data.get("rooms"))
            except ValueError as e:
                raise ConfigError(
                    f"Invalid configuration: rooms ({e})", data={"fields": ["rooms"]}
                ) from e
            data["rooms"] = [*configured, *extra_rooms]
        try:
            config = SessionConfig.from_dict(data)
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            logger.log_event(
                "config", "invalid", level=logging.ERROR, error=", ".join(fields)
            )
            raise ConfigError(
                f"Invalid configuration: {', '.join(fields)}",
                data={"fields": fields},
            ) from e
        logger.log_event(
            "config",
            "loaded",
            source=str(path),
            nick=config.nick,
            rooms=len(config.rooms),
        )
        return config


def get_configuration(
    config_file: str | os.PathLike[str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> SessionConfig:
    return ConfigLoader().get_configuration(config_file, overrides)
