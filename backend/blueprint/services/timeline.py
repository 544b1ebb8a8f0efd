# backend/blueprint/services/timeline.py
"""Placement of scenario events on the move/group grid of an MSEL."""
from dataclasses import dataclass
from typing import Dict, List, Tuple
from uuid import UUID

from blueprint.models.msel import Msel
from blueprint.models.scenario_event import ScenarioEvent
from blueprint.services.ordering import created_sort_key

# Move number of events scheduled before the first move starts
BEFORE_EXERCISE = -1


@dataclass(frozen=True)
class Placement:
    move: int
    group: int

    @property
    def tag(self) -> str:
        """Sortable "<move>-<group>" prefix, two digits each."""
        return f"{self.move:02d}-{self.group:02d}"


def event_sort_key(event: ScenarioEvent):
    return (event.delta_seconds, event.group_order, created_sort_key(event), str(event.id))


def walk_timeline(msel: Msel) -> List[Tuple[ScenarioEvent, Placement]]:
    """
    Scenario events in execution order, each with its move and group.

    An event belongs to the last move (by move number) whose delta_seconds is
    not after the event's. Within a move, each distinct delta_seconds is one
    group, numbered from 0.
    """
    moves = sorted(msel.moves, key=lambda m: m.move_number)
    placed: List[Tuple[ScenarioEvent, int]] = []
    for event in sorted(msel.scenario_events, key=event_sort_key):
        move_number = BEFORE_EXERCISE
        for move in moves:
            if move.delta_seconds <= event.delta_seconds:
                move_number = move.move_number
        placed.append((event, move_number))

    placed.sort(key=lambda pair: (pair[1], event_sort_key(pair[0])))

    result = []
    current_move = None
    group = -1
    last_delta = None
    for event, move_number in placed:
        if move_number != current_move:
            current_move = move_number
            group = 0
        elif event.delta_seconds != last_delta:
            group += 1
        last_delta = event.delta_seconds
        result.append((event, Placement(move_number, group)))
    return result


def moves_and_groups(msel: Msel) -> Dict[UUID, Placement]:
    return {event.id: placement for event, placement in walk_timeline(msel)}
