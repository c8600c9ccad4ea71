# dotf

The game-logic core of a small robot defence game. It has no drawing or
sound code. It provides:

- `dotf.sprite`: rectangles and sprite movement.
  - `Rect` is an immutable axis-aligned rectangle. It has `offset`,
    `inflate`, `contains` and `intersects`.
  - `Sprite` handles frame animation, collision rectangles and bounds.
    - When a sprite reaches the edge of its bounds, its `BoundsAction`
      decides what happens: `STOP`, `WRAP`, `BOUNCE` or `DIE`.
    - `update()` returns a `SpriteAction`.
    - `frame_source()` gives the part of the image that belongs to the
      current frame.
  - `WallSprite` is a sprite that starts with 150 health. `take_hit` lowers
    that health, and `percent_health` reports it as a percentage.
- `dotf.robots`: robots with two timed abilities each.
  - `Robot` is the base class.
  - `Constrobot` builds walls and can become "Unbreakable".
  - `Wololo` has two abilities. One heals a nearby robot by 25. The other
    heals each robot it is given by 10.
  - Every robot takes an optional `clock` callable, which makes ability
    timing easy to control.
- `dotf.protocol`: the big-endian packet format used to sync game state.
  - `PacketWriter` and `PacketReader` write and read packets. A malformed
    packet raises `PacketError`.
  - `PlayerState`, `DemonData` and `InGameData` hold the game data.
  - `encode_game_state` and `decode_game_state` convert a mapping of
    `"address:port"` ids to states.
- `dotf.client`: `GameClient` is a non-blocking UDP client.
  - It sends the local player's state to the server.
  - It receives the game state of every player.
  - It tracks lag.
- `dotf.resources`: the `IconId`, `BitmapId` and `SoundId` identifiers.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from dotf.sprite import Sprite, Rect, BoundsAction

ball = Sprite(
    32, 32,
    position=(10, 10),
    velocity=(-20, 0),
    bounds=Rect(0, 0, 640, 480),
    bounds_action=BoundsAction.BOUNCE,
)
ball.update()
print(ball.rect, ball.velocity)  # left edge clamped to 0, velocity (20, 0)
```

Round-tripping a player's state through the wire format:

```python
from dotf.protocol import PlayerState

state = PlayerState(health=80, grid=[[0, 1], [1, 0]])
assert PlayerState.from_bytes(state.to_bytes()) == state
```

## What it does not do

- **No rendering or audio.** Sprites describe geometry and frames only. A
  robot does not play the sounds it triggers: it appends their `SoundId`s
  to its `sounds` list.
- **No server.** `GameClient` talks to a server that this package does not
  include.
- **No game loop, window or command-line program.** Robots do not move or
  path-find by themselves.