"""Binary wire format for the player states exchanged with the game server.

Values are written in network byte order: booleans as one byte, integers
as 32-bit signed, ports as 16-bit unsigned, sizes as 32-bit unsigned and
strings as a 32-bit length followed by their UTF-8 bytes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Mapping

_UINT8 = struct.Struct(">B")
_INT32 = struct.Struct(">i")
_UINT16 = struct.Struct(">H")
_UINT32 = struct.Struct(">I")


class PacketError(ValueError):
    """Raised when a packet cannot be written or read."""


class PacketWriter:
    """Accumulates values into a packet."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def _pack(self, fmt: struct.Struct, value: int) -> PacketWriter:
        try:
            self._buffer += fmt.pack(value)
        except struct.error as exc:
            raise PacketError(f"cannot pack {value!r}: {exc}") from exc
        return self

    def write_bool(self, value: bool) -> PacketWriter:
        return self._pack(_UINT8, 1 if value else 0)

    def write_int32(self, value: int) -> PacketWriter:
        return self._pack(_INT32, value)

    def write_uint16(self, value: int) -> PacketWriter:
        return self._pack(_UINT16, value)

    def write_uint32(self, value: int) -> PacketWriter:
        return self._pack(_UINT32, value)

    def write_string(self, value: str) -> PacketWriter:
        encoded = value.encode("utf-8")
        self.write_uint32(len(encoded))
        self._buffer += encoded
        return self

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buffer)


class PacketReader:
    """Reads values from a packet in the order they were written."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise PacketError(
                f"packet truncated: need {size} bytes at offset {self._pos}, "
                f"have {len(self._data) - self._pos}"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _unpack(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self._take(fmt.size))[0]

    def read_bool(self) -> bool:
        return self._unpack(_UINT8) != 0

    def read_int32(self) -> int:
        return self._unpack(_INT32)

    def read_uint16(self) -> int:
        return self._unpack(_UINT16)

    def read_uint32(self) -> int:
        return self._unpack(_UINT32)

    def read_string(self) -> str:
        size = self.read_uint32()
        raw = self._take(size)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PacketError(f"invalid string data: {exc}") from exc

    def at_end(self) -> bool:
        """Whether every byte of the packet has been read."""
        return self._pos >= len(self._data)


Vector = tuple[int, int]


@dataclass
class DemonData:
    """A demon as shared between players."""

    id: int = 0
    base_number: int = 0
    health: int = 0
    position: Vector = (0, 0)


@dataclass
class InGameData:
    """Snapshot of the local player's robots handed to the client."""

    is_spectating: bool = False
    health: int = -1
    ally_health: int = -1
    player_position: Vector = (-1, -1)
    ally_position: Vector = (-1, -1)
    velocity: Vector = (-1, -1)
    ally_velocity: Vector = (-1, -1)


@dataclass
class PlayerState:
    """Everything one player reports to the others."""

    is_spectating: bool = False
    grid: list[list[int]] = field(default_factory=list)
    demons: list[DemonData] = field(default_factory=list)
    position: Vector = (-1, -1)
    ally_position: Vector = (-1, -1)
    velocity: Vector = (-1, -1)
    ally_velocity: Vector = (-1, -1)
    shooting_robot_index: int = -1
    fire_direction: Vector = (-1, -1)
    shooting_ally_robot_index: int = -1
    ally_fire_direction: Vector = (-1, -1)
    health: int = -1
    ally_health: int = -1

    def write(self, writer: PacketWriter) -> None:
        """Append this state to ``writer``."""
        writer.write_uint32(len(self.grid))
        for row in self.grid:
            writer.write_uint32(len(row))
            for cell in row:
                writer.write_int32(cell)

        writer.write_uint32(len(self.demons))
        for demon in self.demons:
            writer.write_int32(demon.id)
            writer.write_int32(demon.base_number)
            writer.write_int32(demon.health)
            writer.write_int32(demon.position[0])
            writer.write_int32(demon.position[1])

        writer.write_bool(self.is_spectating)
        for vector in (self.position, self.ally_position, self.velocity, self.ally_velocity):
            writer.write_int32(vector[0])
            writer.write_int32(vector[1])
        writer.write_int32(self.shooting_robot_index)
        writer.write_int32(self.fire_direction[0])
        writer.write_int32(self.fire_direction[1])
        writer.write_int32(self.shooting_ally_robot_index)
        writer.write_int32(self.ally_fire_direction[0])
        writer.write_int32(self.ally_fire_direction[1])
        writer.write_int32(self.health)
        writer.write_int32(self.ally_health)

    @classmethod
    def read(cls, reader: PacketReader) -> PlayerState:
        """Read one state from ``reader``."""

        def vector() -> Vector:
            return (reader.read_int32(), reader.read_int32())

        grid = []
        for _ in range(reader.read_uint32()):
            grid.append([reader.read_int32() for _ in range(reader.read_uint32())])

        demons = []
        for _ in range(reader.read_uint32()):
            demon_id = reader.read_int32()
            base_number = reader.read_int32()
            health = reader.read_int32()
            demons.append(DemonData(demon_id, base_number, health, vector()))

        is_spectating = reader.read_bool()
        position = vector()
        ally_position = vector()
        velocity = vector()
        ally_velocity = vector()
        shooting_robot_index = reader.read_int32()
        fire_direction = vector()
        shooting_ally_robot_index = reader.read_int32()
        ally_fire_direction = vector()
        health = reader.read_int32()
        ally_health = reader.read_int32()
        return cls(
            is_spectating=is_spectating,
            grid=grid,
            demons=demons,
            position=position,
            ally_position=ally_position,
            velocity=velocity,
            ally_velocity=ally_velocity,
            shooting_robot_index=shooting_robot_index,
            fire_direction=fire_direction,
            shooting_ally_robot_index=shooting_ally_robot_index,
            ally_fire_direction=ally_fire_direction,
            health=health,
            ally_health=ally_health,
        )

    def to_bytes(self) -> bytes:
        writer = PacketWriter()
        self.write(writer)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> PlayerState:
        return cls.read(PacketReader(data))


def _split_player_id(player_id: str) -> tuple[str, int]:
    address, sep, port = player_id.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"player id must look like 'address:port', got {player_id!r}")
    return address, int(port)


def encode_game_state(players: Mapping[str, PlayerState]) -> bytes:
    """Encode a game state keyed by ``"address:port"`` player ids."""
    writer = PacketWriter()
    for player_id, state in players.items():
        address, port = _split_player_id(player_id)
        writer.write_string(address)
        writer.write_uint16(port)
        state.write(writer)
    return writer.getvalue()


def decode_game_state(data: bytes) -> dict[str, PlayerState]:
    """Decode a game state into a mapping of ``"address:port"`` to state."""
    reader = PacketReader(data)
    players: dict[str, PlayerState] = {}
    while not reader.at_end():
        address = reader.read_string()
        port = reader.read_uint16()
        players[f"{address}:{port}"] = PlayerState.read(reader)
    return players