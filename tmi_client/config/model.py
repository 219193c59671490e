from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from ..constants import TRANSPORT_WEBSOCKET


def normalize_rooms(v: Any) -> tuple[str, ...]:
    """Accept a list, tuple or comma separated string of rooms.

    Blank entries are dropped; order and duplicates are preserved.
    """
    if v is None:
        return ()
    if isinstance(v, str):
        v = v.split(",")
    if not isinstance(v, list | tuple):
        raise ValueError("rooms must be a list of strings")
    rooms = []
    for room in v:
        if not isinstance(room, str):
            raise ValueError("rooms must be a list of strings")
        if room.strip():
            rooms.append(room.strip())
    return tuple(rooms)


class SessionConfig(BaseModel):
    """Settings for one TMI session.

    Attributes:
        token: Credential sent with ``PASS`` (usually ``oauth:<token>``).
        nick: Nickname sent with ``NICK``.
        rooms: Rooms joined after authentication, in this order. Duplicates
            are kept.
        transport: ``"websocket"`` or ``"tcp"``.
        use_tls: Wrap the TCP transport in TLS.
    """

    model_config = ConfigDict(frozen=True)

    token: SecretStr
    nick: str = Field(min_length=1)
    rooms: tuple[str, ...] = ()
    transport: Literal["websocket", "tcp"] = TRANSPORT_WEBSOCKET
    use_tls: bool = False

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("token must not be empty")
        return SecretStr(v.get_secret_value().strip())

    @field_validator("nick")
    @classmethod
    def validate_nick(cls, v: str) -> str:
        v = v.strip()
        if not v or " " in v:
            raise ValueError("nick must be a single non-empty word")
        return v

    @field_validator("rooms", mode="before")
    @classmethod
    def validate_rooms(cls, v: Any) -> tuple[str, ...]:
        return normalize_rooms(v)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionConfig:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary with the token masked."""
        return self.model_dump(mode="json")
