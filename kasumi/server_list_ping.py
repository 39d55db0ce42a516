"""The status payload shown in the client's server list."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from kasumi.codec import STRING, ReadError
from kasumi.text import TextComponent


@dataclass
class ServerListPingVersion:
    """Version name and protocol number the server supports."""

    name: str
    protocol: int


@dataclass
class ServerListPingPlayer:
    """One player in the sample list."""

    id: str
    name: str


@dataclass
class ServerListPingPlayers:
    """Player counts and a sample of online players."""

    max: int
    online: int
    sample: list[ServerListPingPlayer] = field(default_factory=list)


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


def _version_from_dict(data: Any) -> ServerListPingVersion:
    protocol = _field(data, "protocol")
    if not isinstance(protocol, int) or protocol < 0:
        raise ValueError(f"invalid protocol number {protocol!r}")
    return ServerListPingVersion(_field(data, "name"), protocol)


def _players_from_dict(data: Any) -> ServerListPingPlayers:
    return ServerListPingPlayers(
        _field(data, "max"),
        _field(data, "online"),
        [
            ServerListPingPlayer(_field(player, "id"), _field(player, "name"))
            for player in _field(data, "sample")
        ],
    )


@dataclass
class ServerListPing:
    """Server description sent in reply to a status request."""

    version: ServerListPingVersion
    players: ServerListPingPlayers | None = None
    description: TextComponent | None = None
    favicon: str | None = None
    enforces_secure_chat: bool | None = None

    def to_dict(self) -> dict:
        """Return the JSON object form; absent fields are left out."""
        result: dict[str, Any] = {"version": asdict(self.version)}
        if self.players is not None:
            result["players"] = asdict(self.players)
        if self.description is not None:
            result["description"] = self.description.to_dict()
        if self.favicon is not None:
            result["favicon"] = self.favicon
        if self.enforces_secure_chat is not None:
            result["enforces_secure_chat"] = self.enforces_secure_chat
        return result

    @classmethod
    def from_dict(cls, data: dict) -> ServerListPing:
        """Build the payload from its JSON object form; raise ValueError if invalid."""
        players = data.get("players") if isinstance(data, dict) else None
        description = data.get("description") if isinstance(data, dict) else None
        return cls(
            version=_version_from_dict(_field(data, "version")),
            players=_players_from_dict(players) if players is not None else None,
            description=TextComponent.from_dict(description) if description is not None else None,
            favicon=data.get("favicon"),
            enforces_secure_chat=data.get("enforces_secure_chat"),
        )

    @classmethod
    def read(cls, buffer) -> tuple[ServerListPing, int]:
        """Decode the payload from a protocol string holding JSON."""
        payload, consumed = STRING.read(buffer)
        try:
            return cls.from_dict(json.loads(payload)), consumed
        except (ValueError, TypeError) as exc:
            raise ReadError(f"failed to parse the JSON: {exc}") from exc

    def write(self) -> bytes:
        """Encode the payload as a protocol string holding compact JSON."""
        return STRING.write(json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False))