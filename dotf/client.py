"""UDP client that exchanges player states with the game server."""

from __future__ import annotations

import copy
import logging
import socket
import threading
import time
from typing import Any, Mapping, Optional

from dotf.protocol import (
    DemonData,
    InGameData,
    PacketError,
    PlayerState,
    decode_game_state,
)

log = logging.getLogger(__name__)

_MAX_DATAGRAM = 65535
_FRAME_SECONDS = 0.016


class GameClient:
    """Sends the local player's state and collects everyone else's."""

    def __init__(self, server_address: str, server_port: int, sock: Any = None) -> None:
        self.server_address = server_address
        self.server_port = server_port
        if sock is None:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                sock.bind(("", 0))
            except OSError:
                log.error("Failed to bind client socket to a port.")
        sock.setblocking(False)
        self._sock = sock

        self._running = threading.Event()
        self._running.set()
        self._lock = threading.Lock()

        now = time.monotonic()
        self._ping_started = now
        self._ping_check_started = now
        self._on_lag = False
        self.ms = 0

        self._local_player_id = ""
        self._local_state = PlayerState()
        self._shared_state: dict[str, PlayerState] = {}

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def on_lag(self) -> bool:
        return self._on_lag

    @property
    def local_player_id(self) -> str:
        with self._lock:
            return self._local_player_id

    @property
    def local_player_state(self) -> PlayerState:
        """A copy of the state this client reports."""
        with self._lock:
            return copy.deepcopy(self._local_state)

    def run(self) -> None:
        """Exchange states with the server until stopped."""
        log.info("Client started.")
        while self._running.is_set():
            self.send_input()
            self.receive_game_state()
            with self._lock:
                active = len(self._shared_state)
            log.info("Game state received: %d players active.", active)
            time.sleep(_FRAME_SECONDS)

    def stop(self) -> None:
        self._running.clear()

    def send_input(self) -> None:
        """Send the local player's state to the server."""
        with self._lock:
            data = self._local_state.to_bytes()
        try:
            self._sock.sendto(data, (self.server_address, self.server_port))
        except OSError:
            log.error("Failed to send input to server.")

    def receive_game_state(self) -> int:
        """Read every pending datagram; return how many were received."""
        received = 0
        while True:
            try:
                data, sender = self._sock.recvfrom(_MAX_DATAGRAM)
            except BlockingIOError:
                log.debug("Server is not ready. No data received yet.")
                break
            except OSError:
                log.error("Error receiving data from server.")
                break

            received += 1
            if sender[0] == self.server_address and sender[1] == self.server_port:
                local_port = self._sock.getsockname()[1]
                with self._lock:
                    self._local_player_id = f"{self.server_address}:{local_port}"
                try:
                    self.parse_game_state(data)
                except PacketError as exc:
                    log.warning("Malformed game state from server: %s", exc)

            now = time.monotonic()
            log.info("Ping: %dms", int((now - self._ping_started) * 1000))
            self._ping_started = now
            self._ping_check_started = now
            self._on_lag = False

            with self._lock:
                spectating = self._local_state.is_spectating
            if spectating:
                time.sleep(self.ms / 1000)
        return received

    def parse_game_state(self, data: bytes) -> None:
        """Replace the shared game state with the one encoded in ``data``."""
        game_state = decode_game_state(data)
        for player_id, state in game_state.items():
            log.info(
                "IP & Port: %s Is Spectating?: %s",
                player_id,
                "true" if state.is_spectating else "false",
            )
        with self._lock:
            self._shared_state = game_state
            own = game_state.get(self._local_player_id)
            if own is not None:
                self._local_state.shooting_robot_index = own.shooting_robot_index
                self._local_state.shooting_ally_robot_index = own.shooting_ally_robot_index

    def check_lag_on_server(self, ms_limit: float) -> bool:
        """Report lag if no packet arrived within ``ms_limit`` milliseconds."""
        now = time.monotonic()
        ping = int((now - self._ping_check_started) * 1000)
        if ping > ms_limit:
            self._on_lag = True
            log.info("LAG! Ping: %dms", ping)
            self._ping_check_started = now
            return True
        return False

    def set_map_data(self, grid: list[list[int]]) -> None:
        with self._lock:
            self._local_state.grid = [list(row) for row in grid]

    def set_demon_data(self, demons: list[DemonData]) -> None:
        with self._lock:
            self._local_state.demons = list(demons)

    def set_in_game_data(self, data: InGameData) -> None:
        with self._lock:
            state = self._local_state
            state.is_spectating = data.is_spectating
            state.health = data.health
            state.ally_health = data.ally_health
            state.position = tuple(data.player_position)
            state.ally_position = tuple(data.ally_position)
            state.velocity = tuple(data.velocity)
            state.ally_velocity = tuple(data.ally_velocity)

    def set_bullet_data(
        self, shooting_robot_index: int = -1, fire_x: int = 0, fire_y: int = 0
    ) -> None:
        with self._lock:
            self._local_state.shooting_robot_index = shooting_robot_index
            self._local_state.fire_direction = (fire_x, fire_y)

    def set_ally_bullet_data(
        self, shooting_ally_robot_index: int = -1, fire_x: int = 0, fire_y: int = 0
    ) -> None:
        with self._lock:
            self._local_state.shooting_ally_robot_index = shooting_ally_robot_index
            self._local_state.ally_fire_direction = (fire_x, fire_y)

    def game_state(self) -> dict[str, PlayerState]:
        """A copy of the latest game state received from the server."""
        with self._lock:
            return dict(self._shared_state)

    def set_spectating(self, is_spectating: bool) -> None:
        with self._lock:
            self._local_state.is_spectating = is_spectating

    def first_active_opponent(
        self, game_state: Mapping[str, PlayerState]
    ) -> Optional[PlayerState]:
        """The first other player who is not spectating, or None."""
        with self._lock:
            for player_id, state in game_state.items():
                if player_id != self._local_player_id and not state.is_spectating:
                    return state
        return None