# SPDX-License-Identifier: MIT

from typing import TypeAlias, TypedDict

from cadence.model.deadline_item import DeadlineKind
from cadence.model.entity_id import EntityId

ReadMarker: TypeAlias = tuple[DeadlineKind, EntityId]


class PersistedReadMarker(TypedDict):
    kind: DeadlineKind
    id: EntityId


class ReadMarkers(TypedDict):
    markers: dict[str, list[PersistedReadMarker]]  # keyed by user id
