"""Robots that fight alongside the player, with their two abilities each."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, NamedTuple, Optional

from dotf.resources import SoundId

Clock = Callable[[], float]

# A nearby robot is only picked as a heal target when its health is below this.
_HEAL_SEARCH_LIMIT = 10000


class RobotType(Enum):
    """Kinds of robot."""

    CAPTAIN = 0
    WOLOLO = 1
    CONSTROBOT = 2


class ControlStatus(Enum):
    """Who steers a robot."""

    PLAYER = "player"
    AI = "ai"


@dataclass
class Ability:
    """One ability of a robot and its charge state."""

    name: str
    cooldown: int
    duration: int
    ready: bool = True
    active: bool = False
    used_time: float = 0.0


class StatusMessage(NamedTuple):
    """Text shown over a robot until ``expires_at``."""

    text: str
    expires_at: float


@dataclass
class Robot:
    """A robot with health, two abilities and transient status messages."""

    name: str
    description: str
    health: int
    control_status: ControlStatus = ControlStatus.AI
    clock: Optional[Clock] = None
    max_health: int = field(init=False)
    armor: int = field(init=False, default=0)
    robot_type: RobotType = field(init=False, default=RobotType.WOLOLO)
    menu_hover: bool = field(init=False, default=False)
    abilities: list[Ability] = field(init=False)
    nearby_robots: list[Robot] = field(init=False, default_factory=list)
    status_messages: list[StatusMessage] = field(init=False, default_factory=list)
    sounds: list[SoundId] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        if self.clock is None:
            self.clock = time.time
        self.max_health = self.health
        now = self.now()
        self.abilities = [
            Ability("", 0, 0, used_time=now),
            Ability("", 0, 0, used_time=now),
        ]

    def now(self) -> float:
        """Current time according to the robot's clock."""
        return self.clock()

    def heal(self, amount: int) -> None:
        """Restore health, never beyond the robot's maximum."""
        self.health = min(self.max_health, self.health + amount)

    def add_status_message(self, text: str, expires_at: float) -> None:
        self.status_messages.append(StatusMessage(text, expires_at))

    def ability(self, index: int) -> Ability:
        """Return ability 0 or 1."""
        if index not in (0, 1):
            raise IndexError(f"robots have abilities 0 and 1, not {index}")
        return self.abilities[index]

    def use_ability1(self) -> None:
        """Use the first ability; a plain robot has none."""

    def use_ability2(self, robots: Optional[Iterable[Robot]] = None) -> None:
        """Use the second ability; a plain robot has none."""


class Constrobot(Robot):
    """Builds walls and can turn unbreakable for a while."""

    def __init__(self, health: int, clock: Optional[Clock] = None) -> None:
        super().__init__(
            "Constrobot",
            "Builds a wall or demolish a wall at a stroke",
            health,
            ControlStatus.AI,
            clock,
        )
        self.robot_type = RobotType.CONSTROBOT
        self.armor = 5
        now = self.now()
        self.abilities = [
            Ability("Build Wall", cooldown=10, duration=0, used_time=now),
            Ability("Unbreakable", cooldown=20, duration=5, used_time=now),
        ]

    def use_ability1(self) -> None:
        """Build a wall."""
        self.sounds.append(SoundId.CONSTROBOT_1)
        ability = self.abilities[0]
        ability.used_time = self.now()
        ability.ready = False
        self.add_status_message("*built!*", self.now() + 2)

    def use_ability2(self, robots: Optional[Iterable[Robot]] = None) -> None:
        """Become unbreakable for the ability's duration."""
        ability = self.abilities[1]
        ability.used_time = self.now()
        ability.active = True
        ability.ready = False
        self.add_status_message("*destructive*", self.now() + 3)


class Wololo(Robot):
    """Heals other robots."""

    def __init__(self, health: int, clock: Optional[Clock] = None) -> None:
        super().__init__("Wololo", "Heal other robots.", health, ControlStatus.AI, clock)
        self.robot_type = RobotType.WOLOLO
        now = self.now()
        self.abilities = [
            Ability("Heal", cooldown=10, duration=0, used_time=now),
            Ability("Heal All", cooldown=20, duration=0, used_time=now),
        ]

    def use_ability1(self) -> None:
        """Heal the first nearby robot by 25."""
        ability = self.abilities[0]
        if not self.nearby_robots or not ability.ready:
            return
        target = next(
            (r for r in self.nearby_robots if r.health < _HEAL_SEARCH_LIMIT), None
        )
        if target is None:
            return
        target.heal(25)
        ability.used_time = self.now()
        ability.ready = False

    def use_ability2(self, robots: Optional[Iterable[Robot]] = None) -> None:
        """Heal every given robot by 10."""
        ability = self.abilities[1]
        if not ability.ready:
            return
        for robot in robots or ():
            robot.heal(10)
        ability.used_time = self.now()
        ability.ready = False