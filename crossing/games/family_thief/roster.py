"""
Family and Thief roster.

Eight actors, three of whom can drive the ferry. Colors and emoji are
presentation hints only.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.state import Actor, ActorRole, Location


PUZZLE_ID = "family_thief"
PUZZLE_NAME = "Family and Thief River Crossing"


@dataclass(frozen=True)
class ActorDefinition:
    """Static definition of one roster member."""
    actor_id: str
    name: str
    role: ActorRole
    is_driver: bool
    emoji: str
    color: str
    bg_color: str

    def create(self, location: Location = Location.START) -> Actor:
        """Instantiate the actor at a location."""
        return Actor(
            actor_id=self.actor_id,
            name=self.name,
            role=self.role,
            is_driver=self.is_driver,
            location=location,
            emoji=self.emoji,
            color=self.color,
            bg_color=self.bg_color,
        )


ROSTER: tuple[ActorDefinition, ...] = (
    ActorDefinition("father", "Father", ActorRole.FATHER, True, "\U0001F468", "#2563eb", "#dbeafe"),
    ActorDefinition("mother", "Mother", ActorRole.MOTHER, True, "\U0001F469", "#db2777", "#fce7f3"),
    ActorDefinition("son1", "Son 1", ActorRole.SON, False, "\U0001F466", "#059669", "#d1fae5"),
    ActorDefinition("son2", "Son 2", ActorRole.SON, False, "\U0001F466", "#059669", "#d1fae5"),
    ActorDefinition("daughter1", "Daughter 1", ActorRole.DAUGHTER, False, "\U0001F467", "#7c3aed", "#ede9fe"),
    ActorDefinition("daughter2", "Daughter 2", ActorRole.DAUGHTER, False, "\U0001F467", "#7c3aed", "#ede9fe"),
    ActorDefinition("police", "Police", ActorRole.POLICE, True, "\U0001F46E", "#1e40af", "#bfdbfe"),
    ActorDefinition("thief", "Thief", ActorRole.THIEF, False, "\U0001F9B9", "#dc2626", "#fee2e2"),
)

ACTOR_IDS = tuple(d.actor_id for d in ROSTER)

# Rule text shown to players
RULES = (
    "Drivers: only Father, Mother, or Police can operate the ferry.",
    "Capacity: the ferry carries at most 2 people.",
    "Thief: cannot be with any family member without the Police.",
    "Daughters: cannot be with Father unless Mother is present.",
    "Sons: cannot be with Mother unless Father is present.",
    "Win: move all 8 characters to the destination shore!",
)


def create_initial_actors() -> tuple[Actor, ...]:
    """The whole cast standing on the start shore."""
    return tuple(d.create(Location.START) for d in ROSTER)
