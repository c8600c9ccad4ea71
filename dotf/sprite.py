"""Moving, animated sprites and destructible walls."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional


class SpriteAction(IntEnum):
    """What the owner should do with a sprite after an update."""

    NONE = 0
    KILL = 1
    ADD_SPRITE = 2


class BoundsAction(IntEnum):
    """How a sprite reacts on reaching the edge of its bounds."""

    STOP = 0
    WRAP = 1
    BOUNCE = 2
    DIE = 3


class SpriteType(IntEnum):
    """Kind of game object a sprite stands for."""

    OTHER = 0
    CHARACTER = 1
    DEMON = 2
    WALL = 3
    BASE = 4
    ALLY_BULLET = 5
    ENEMY_BULLET = 6


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; right and bottom edges are exclusive for points."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def offset(self, dx: int, dy: int) -> Rect:
        """Return the rectangle moved by (dx, dy)."""
        return Rect(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def inflate(self, dx: int, dy: int) -> Rect:
        """Return the rectangle grown by dx on each side and dy on top and bottom."""
        return Rect(self.left - dx, self.top - dy, self.right + dx, self.bottom + dy)

    def contains(self, x: int, y: int) -> bool:
        """Whether the point lies inside, counting the left and top edges only."""
        return self.left <= x < self.right and self.top <= y < self.bottom

    def intersects(self, other: Rect) -> bool:
        """Whether the two rectangles overlap or touch."""
        return (
            self.left <= other.right
            and other.left <= self.right
            and self.top <= other.bottom
            and other.top <= self.bottom
        )


DEFAULT_BOUNDS = Rect(0, 0, 1024, 768)


class Sprite:
    """A rectangular image that moves, animates and reacts to its bounds."""

    def __init__(
        self,
        width: int,
        height: int,
        position: tuple[int, int] = (0, 0),
        velocity: tuple[int, int] = (0, 0),
        bounds: Optional[Rect] = None,
        bounds_action: BoundsAction = BoundsAction.STOP,
        sprite_type: SpriteType = SpriteType.OTHER,
        z_order: int = 0,
    ) -> None:
        self.image_width = width
        self.image_height = height
        self.num_frames = 1
        self.cur_frame = 0
        self.frame_delay = 0
        self.frame_trigger = 0
        x, y = position
        self.rect = Rect(x, y, x + width, y + height)
        self.collision_rect = self._collision_for(self.rect)
        self.velocity = tuple(velocity)
        self.z_order = z_order
        self.bounds = bounds if bounds is not None else DEFAULT_BOUNDS
        self.bounds_action = BoundsAction(bounds_action)
        self.sprite_type = SpriteType(sprite_type)
        self.hidden = False
        self.dying = False
        self.one_cycle = False
        self.character: Any = None

    @classmethod
    def placed_randomly(
        cls,
        width: int,
        height: int,
        bounds: Rect,
        bounds_action: BoundsAction = BoundsAction.STOP,
        rng: Any = None,
    ) -> Sprite:
        """Create a sprite at a random offset within the size of ``bounds``."""
        rng = rng if rng is not None else random
        x = rng.randrange(bounds.width)
        y = rng.randrange(bounds.height)
        sprite = cls(width, height)
        sprite.bounds = bounds
        sprite.bounds_action = BoundsAction(bounds_action)
        sprite.move_to(x, y)
        return sprite

    @property
    def width(self) -> int:
        """Width of a single animation frame."""
        return self.image_width // self.num_frames

    @property
    def height(self) -> int:
        return self.image_height

    @staticmethod
    def _collision_for(rect: Rect) -> Rect:
        x_shrink = _trunc_div(rect.left - rect.right, 12)
        y_shrink = _trunc_div(rect.top - rect.bottom, 12)
        return rect.inflate(x_shrink, y_shrink)

    def _update_frame(self) -> None:
        if self.frame_delay < 0:
            return
        self.frame_trigger -= 1
        if self.frame_trigger > 0:
            return
        self.frame_trigger = self.frame_delay
        self.cur_frame += 1
        if self.cur_frame >= self.num_frames:
            if self.one_cycle:
                self.dying = True
            else:
                self.cur_frame = 0

    def update(self) -> SpriteAction:
        """Advance the animation and position by one step."""
        if self.dying:
            return SpriteAction.KILL

        self._update_frame()

        vx, vy = self.velocity
        x = self.rect.left + vx
        y = self.rect.top + vy
        w = self.rect.width
        h = self.rect.height
        b = self.bounds

        if self.bounds_action is BoundsAction.WRAP:
            if x + w < b.left:
                x = b.right
            elif x > b.right:
                x = b.left - w
            if y + h < b.top:
                y = b.bottom
            elif y > b.bottom:
                y = b.top - h
        elif self.bounds_action is BoundsAction.BOUNCE:
            bounced = False
            nvx, nvy = vx, vy
            if x < b.left:
                bounced, x, nvx = True, b.left, -nvx
            elif x + w > b.right:
                bounced, x, nvx = True, b.right - w, -nvx
            if y < b.top:
                bounced, y, nvy = True, b.top, -nvy
            elif y + h > b.bottom:
                bounced, y, nvy = True, b.bottom - h, -nvy
            if bounced:
                self.velocity = (nvx, nvy)
        elif self.bounds_action is BoundsAction.DIE:
            if x + w < b.left or x > b.right or y + h < b.top or y > b.bottom:
                return SpriteAction.KILL
        else:
            if x < b.left or x > b.right - w:
                x = max(b.left, min(x, b.right - w))
                self.velocity = (0, 0)
            if y < b.top or y > b.bottom - h:
                y = max(b.top, min(y, b.bottom - h))
                self.velocity = (0, 0)

        self.move_to(x, y)
        return SpriteAction.NONE

    def set_num_frames(self, num_frames: int, one_cycle: bool = False) -> None:
        """Split the image into frames; a one-cycle animation dies at its end."""
        if num_frames < 1:
            raise ValueError("num_frames must be at least 1")
        self.num_frames = num_frames
        self.one_cycle = one_cycle
        r = self.rect
        self.set_rect(Rect(r.left, r.top, r.left + r.width // num_frames, r.bottom))

    def move_to(self, x: int, y: int) -> None:
        """Move the top-left corner to (x, y)."""
        self.offset(x - self.rect.left, y - self.rect.top)

    def set_rect(self, rect: Rect) -> None:
        self.rect = rect
        self.collision_rect = self._collision_for(rect)

    def offset(self, dx: int, dy: int) -> None:
        self.set_rect(self.rect.offset(dx, dy))

    def kill(self) -> None:
        self.dying = True

    def is_point_inside(self, x: int, y: int) -> bool:
        return self.rect.contains(x, y)

    def collides_with(self, other: Sprite) -> bool:
        return self.collision_rect.intersects(other.collision_rect)

    def frame_source(self) -> Optional[Rect]:
        """Region of the image to draw for the current frame, or None if hidden."""
        if self.hidden:
            return None
        if self.num_frames == 1:
            return Rect(0, 0, self.image_width, self.image_height)
        left = self.cur_frame * self.width
        return Rect(left, 0, left + self.width, self.height)


class WallSprite(Sprite):
    """A wall that can be damaged."""

    MAX_HEALTH = 150

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self.max_health = self.MAX_HEALTH
        self.health = self.MAX_HEALTH

    def take_hit(self, damage: int) -> None:
        self.health -= damage

    @property
    def percent_health(self) -> int:
        return int(self.health / self.max_health * 100)