"""
Game State - Immutable puzzle state and the actors it tracks.

Design principles:
- Immutable: every transition returns a new GameState
- Snapshot-based history: undo restores a stored Snapshot, no diffs
- Observable: the presentation layer renders whatever state it is handed
- Fixed cast: actors are created once per game, only their location changes
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum


# Two seats on the ferry
FERRY_CAPACITY = 2

# Size of the fixed roster
ACTOR_COUNT = 8


class Location(Enum):
    """Where an actor currently stands."""
    START = "start"
    FERRY = "ferry"
    DESTINATION = "destination"


# The two places the ferry can dock at
SHORES = (Location.START, Location.DESTINATION)


def other_shore(shore: Location) -> Location:
    """Return the opposite shore."""
    if shore == Location.START:
        return Location.DESTINATION
    if shore == Location.DESTINATION:
        return Location.START
    raise ValueError(f"{shore} is not a shore")


class ActorRole(Enum):
    """Semantic role of an actor; the safety rules are written against roles."""
    FATHER = "father"
    MOTHER = "mother"
    SON = "son"
    DAUGHTER = "daughter"
    POLICE = "police"
    THIEF = "thief"


FAMILY_ROLES = frozenset({ActorRole.FATHER, ActorRole.MOTHER, ActorRole.SON, ActorRole.DAUGHTER})
GUARDIAN_ROLES = frozenset({ActorRole.FATHER, ActorRole.MOTHER})


class Severity(Enum):
    """Severity class of the current status message."""
    INFO = "info"
    ERROR = "error"
    SUCCESS = "success"
    WARNING = "warning"


class MachineStatus(Enum):
    """High-level machine state, derived from the terminal flags."""
    PLAYING = "playing"
    LOST = "lost"
    WON = "won"


@dataclass(frozen=True)
class Actor:
    """
    One member of the fixed cast.

    Display attributes (emoji, colors) carry no meaning for the rules.
    """
    actor_id: str
    name: str
    role: ActorRole
    is_driver: bool
    location: Location = Location.START

    # Display only
    emoji: str = ""
    color: str = ""
    bg_color: str = ""

    @property
    def is_family(self) -> bool:
        return self.role in FAMILY_ROLES

    def with_location(self, location: Location) -> Actor:
        """Return a copy of this actor standing somewhere else."""
        return replace(self, location=location)


@dataclass(frozen=True)
class Snapshot:
    """
    Everything undo needs to restore: actor placement, ferry side, move count.

    Taken just before a sail is applied.
    """
    locations: tuple[tuple[str, Location], ...]
    ferry_side: Location
    move_count: int


@dataclass(frozen=True)
class GameState:
    """
    Complete puzzle state at a point in time.

    This is the canonical state the reducer operates on. It is never mutated;
    transitions build a new instance through _copy_with().
    """
    actors: tuple[Actor, ...]
    ferry_side: Location = Location.START
    move_count: int = 0

    # Terminal flags
    is_over: bool = False
    is_won: bool = False

    # Status line for the presentation layer
    message: str = ""
    severity: Severity = Severity.INFO

    # Snapshots taken before each successful sail, oldest first
    history: tuple[Snapshot, ...] = field(default_factory=tuple)

    @property
    def status(self) -> MachineStatus:
        if self.is_won:
            return MachineStatus.WON
        if self.is_over:
            return MachineStatus.LOST
        return MachineStatus.PLAYING

    @property
    def is_terminal(self) -> bool:
        return self.is_over or self.is_won

    @property
    def history_depth(self) -> int:
        return len(self.history)

    @property
    def aboard(self) -> tuple[Actor, ...]:
        """Actors currently seated on the ferry."""
        return self.actors_at(Location.FERRY)

    @property
    def has_driver_aboard(self) -> bool:
        return any(a.is_driver for a in self.aboard)

    def get_actor(self, actor_id: str) -> Actor | None:
        """Get actor by ID."""
        for actor in self.actors:
            if actor.actor_id == actor_id:
                return actor
        return None

    def actors_at(self, location: Location) -> tuple[Actor, ...]:
        """Actors at a location, in roster order."""
        return tuple(a for a in self.actors if a.location == location)

    def location_counts(self) -> dict[Location, int]:
        """Head count per location (every location present, possibly zero)."""
        counts = {location: 0 for location in Location}
        for actor in self.actors:
            counts[actor.location] += 1
        return counts

    def all_at(self, location: Location) -> bool:
        return all(a.location == location for a in self.actors)

    def with_actor_location(self, actor_id: str, location: Location) -> GameState:
        """Return new state with one actor moved."""
        new_actors = tuple(
            a.with_location(location) if a.actor_id == actor_id else a
            for a in self.actors
        )
        return self._copy_with(actors=new_actors)

    def with_message(self, message: str, severity: Severity = Severity.INFO) -> GameState:
        """Return new state with a different status line."""
        return self._copy_with(message=message, severity=severity)

    def snapshot(self) -> Snapshot:
        """Capture what undo needs to come back to this point."""
        return Snapshot(
            locations=tuple((a.actor_id, a.location) for a in self.actors),
            ferry_side=self.ferry_side,
            move_count=self.move_count,
        )

    def restore(self, snapshot: Snapshot) -> GameState:
        """
        Return new state with placement, ferry side and move count taken
        from a snapshot. Flags, message and history are left untouched.
        """
        placement = dict(snapshot.locations)
        new_actors = tuple(
            a.with_location(placement.get(a.actor_id, a.location))
            for a in self.actors
        )
        return self._copy_with(
            actors=new_actors,
            ferry_side=snapshot.ferry_side,
            move_count=snapshot.move_count,
        )

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
