from collections import deque

from dotf.client import GameClient
from dotf.protocol import (
    DemonData,
    InGameData,
    PlayerState,
    encode_game_state,
)

SERVER = ("127.0.0.1", 5000)
LOCAL_PORT = 40000


class FakeSocket:
    def __init__(self, port=LOCAL_PORT):
        self.sent = []
        self.incoming = deque()
        self.port = port
        self.blocking = None
        self.on_send = None

    def setblocking(self, flag):
        self.blocking = flag

    def getsockname(self):
        return ("0.0.0.0", self.port)

    def sendto(self, data, address):
        self.sent.append((bytes(data), address))
        if self.on_send is not None:
            self.on_send()
        return len(data)

    def recvfrom(self, size):
        if not self.incoming:
            raise BlockingIOError
        return self.incoming.popleft()


def make_client():
    sock = FakeSocket()
    return GameClient(SERVER[0], SERVER[1], sock), sock


def local_id():
    return f"{SERVER[0]}:{LOCAL_PORT}"


def test_socket_is_made_non_blocking():
    _, sock = make_client()
    assert sock.blocking is False


def test_send_input_carries_local_state():
    client, sock = make_client()
    client.set_map_data([[1, 2], [3]])
    client.set_demon_data([DemonData(4, 1, 50, (7, 8))])
    client.set_in_game_data(
        InGameData(
            is_spectating=False,
            health=90,
            ally_health=60,
            player_position=(10, 11),
            ally_position=(12, 13),
            velocity=(1, 0),
            ally_velocity=(0, 1),
        )
    )
    client.set_bullet_data(1, 5, -5)
    client.set_ally_bullet_data(0, -3, 3)
    client.send_input()

    assert len(sock.sent) == 1
    data, address = sock.sent[0]
    assert address == SERVER
    state = PlayerState.from_bytes(data)
    assert state.grid == [[1, 2], [3]]
    assert state.demons == [DemonData(4, 1, 50, (7, 8))]
    assert state.health == 90 and state.ally_health == 60
    assert state.position == (10, 11) and state.ally_position == (12, 13)
    assert state.velocity == (1, 0) and state.ally_velocity == (0, 1)
    assert state.shooting_robot_index == 1 and state.fire_direction == (5, -5)
    assert state.shooting_ally_robot_index == 0
    assert state.ally_fire_direction == (-3, 3)


def test_bullet_defaults():
    client, _ = make_client()
    client.set_bullet_data(2, 1, 1)
    client.set_bullet_data()
    state = client.local_player_state
    assert state.shooting_robot_index == -1
    assert state.fire_direction == (0, 0)


def test_receive_from_server_updates_state_and_id():
    client, sock = make_client()
    client.set_bullet_data(2, 1, 1)
    players = {
        local_id(): PlayerState(shooting_robot_index=-1, shooting_ally_robot_index=-1),
        "10.0.0.9:7000": PlayerState(health=33),
    }
    sock.incoming.append((encode_game_state(players), SERVER))

    assert client.receive_game_state() == 1
    assert client.local_player_id == local_id()
    assert client.game_state() == players
    assert client.local_player_state.shooting_robot_index == -1


def test_datagram_from_stranger_is_not_parsed():
    client, sock = make_client()
    players = {"10.0.0.9:7000": PlayerState(health=33)}
    sock.incoming.append((encode_game_state(players), ("10.0.0.9", 7000)))

    assert client.receive_game_state() == 1
    assert client.game_state() == {}
    assert client.local_player_id == ""


def test_malformed_datagram_keeps_previous_state():
    client, sock = make_client()
    good = {"10.0.0.9:7000": PlayerState(health=33)}
    sock.incoming.append((encode_game_state(good), SERVER))
    sock.incoming.append((b"\x00\x00\x00\x09ab", SERVER))

    assert client.receive_game_state() == 2
    assert client.game_state() == good


def test_first_active_opponent_skips_self_and_spectators():
    client, sock = make_client()
    sock.incoming.append((encode_game_state({}), SERVER))
    client.receive_game_state()

    opponent = PlayerState(health=70)
    game_state = {
        local_id(): PlayerState(health=1),
        "10.0.0.2:1": PlayerState(is_spectating=True, health=2),
        "10.0.0.3:1": opponent,
    }
    assert client.first_active_opponent(game_state) == opponent


def test_first_active_opponent_none_when_alone():
    client, sock = make_client()
    sock.incoming.append((encode_game_state({}), SERVER))
    client.receive_game_state()
    assert client.first_active_opponent({local_id(): PlayerState()}) is None


def test_set_spectating_is_sent():
    client, sock = make_client()
    client.set_spectating(True)
    client.send_input()
    assert PlayerState.from_bytes(sock.sent[0][0]).is_spectating is True


def test_check_lag_on_server():
    client, _ = make_client()
    assert client.check_lag_on_server(1_000_000) is False
    assert client.on_lag is False
    assert client.check_lag_on_server(-1) is True
    assert client.on_lag is True


def test_receiving_clears_lag():
    client, sock = make_client()
    client.check_lag_on_server(-1)
    sock.incoming.append((encode_game_state({}), SERVER))
    client.receive_game_state()
    assert client.on_lag is False


def test_run_until_stopped():
    client, sock = make_client()
    sock.on_send = client.stop
    client.run()
    assert client.running is False
    assert len(sock.sent) == 1