"""
Constraint Checker - Safety rules over an arrangement of actors.

check_violation() is pure: it looks at where every actor stands and reports
the first broken rule, or None. It knows nothing about ferries, moves or
history, so any location (shore or ferry) is evaluated the same way.

Rules, checked in this order at each location:
1. The thief may not be with any family member unless the police is there.
2. Daughters may not be with the father unless the mother is there.
3. Sons may not be with the mother unless the father is there.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .state import Actor, ActorRole, Location


# Stable evaluation order; the first location holding a violation wins
CHECK_ORDER = (Location.START, Location.DESTINATION, Location.FERRY)


class ViolationRule(Enum):
    THIEF_WITHOUT_POLICE = "thief_without_police"
    DAUGHTERS_WITHOUT_MOTHER = "daughters_without_mother"
    SONS_WITHOUT_FATHER = "sons_without_father"


@dataclass(frozen=True)
class Violation:
    """A broken safety rule at one location."""
    rule: ViolationRule
    location: Location
    message: str
    actor_id: str | None = None  # Family member the thief was left with


def describe_location(location: Location) -> str:
    """Human-readable place name used in status messages."""
    if location == Location.FERRY:
        return "ferry"
    return f"{location.value} shore"


def check_violation(actors: Iterable[Actor]) -> Violation | None:
    """
    Return the first safety violation in an arrangement, or None.

    Locations are evaluated in CHECK_ORDER; only one violation is ever
    reported even when several exist.
    """
    groups: dict[Location, list[Actor]] = {location: [] for location in CHECK_ORDER}
    for actor in actors:
        groups.setdefault(actor.location, []).append(actor)

    for location in CHECK_ORDER:
        group = groups[location]
        if not group:
            continue
        violation = _check_group(group, location)
        if violation:
            return violation
    return None


def _check_group(group: list[Actor], location: Location) -> Violation | None:
    """Evaluate the three rules against actors standing together."""
    roles = {a.role for a in group}
    place = describe_location(location)

    has_thief = ActorRole.THIEF in roles
    has_police = ActorRole.POLICE in roles
    has_father = ActorRole.FATHER in roles
    has_mother = ActorRole.MOTHER in roles
    has_sons = ActorRole.SON in roles
    has_daughters = ActorRole.DAUGHTER in roles

    if has_thief and not has_police:
        family = [a for a in group if a.is_family]
        if family:
            return Violation(
                rule=ViolationRule.THIEF_WITHOUT_POLICE,
                location=location,
                message=f"The Thief is with {family[0].name} without the Police on the {place}!",
                actor_id=family[0].actor_id,
            )

    if has_daughters and has_father and not has_mother:
        return Violation(
            rule=ViolationRule.DAUGHTERS_WITHOUT_MOTHER,
            location=location,
            message=f"Daughter(s) left with Father without Mother on the {place}!",
        )

    if has_sons and has_mother and not has_father:
        return Violation(
            rule=ViolationRule.SONS_WITHOUT_FATHER,
            location=location,
            message=f"Son(s) left with Mother without Father on the {place}!",
        )

    return None
