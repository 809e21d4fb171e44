# SPDX-License-Identifier: MIT

from typing import Optional, cast, get_args

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from cadence import configuration
from cadence.errors import MarkerPersistenceFailure
from cadence.model.deadline_item import DeadlineKind
from cadence.model.entity_id import EntityId
from cadence.model.read_marker import PersistedReadMarker, ReadMarker, ReadMarkers

DEADLINE_KINDS = get_args(DeadlineKind)


class ReadMarkerRepository:
    """
    Per-user read markers in read_markers.yaml.

    Unlike the other repositories, writes go to disk immediately rather than
    on flush, so a failed write is reported to the caller that made it.
    """

    def __init__(self) -> None:
        self._read_markers: Optional[ReadMarkers] = None

    @property
    def read_markers(self) -> ReadMarkers:
        if self._read_markers is None:
            self.__load_data()
        if self._read_markers is None:
            raise ValueError()
        return self._read_markers

    def __load_data(self) -> None:
        path = configuration.DATA_READ_MARKERS_PATH
        if not path.is_file():
            self._read_markers = {"markers": {}}
            return
        try:
            read_markers_data = load(path.read_text(), Loader=Loader)
        except (OSError, YAMLError) as e:
            raise MarkerPersistenceFailure(
                f"Cannot read markers from {path}: {e}"
            ) from e
        if read_markers_data is None or read_markers_data.get("markers") is None:
            read_markers_data = {"markers": {}}
        self._read_markers = cast(ReadMarkers, read_markers_data)

    def __save_data(self, read_markers: ReadMarkers) -> None:
        path = configuration.DATA_READ_MARKERS_PATH
        try:
            path.write_text(dump(read_markers, Dumper=Dumper))
        except OSError as e:
            raise MarkerPersistenceFailure(
                f"Cannot write markers to {path}: {e}"
            ) from e

    def reset(self) -> None:
        self._read_markers = None

    def load_markers(self, user_id: str) -> set[ReadMarker]:
        markers: set[ReadMarker] = set()
        for marker in self.read_markers["markers"].get(user_id) or []:
            if marker["kind"] in DEADLINE_KINDS:
                markers.add((marker["kind"], str(marker["id"])))
        return markers

    def save_marker(self, user_id: str, kind: DeadlineKind, id: EntityId) -> None:
        user_markers = self.read_markers["markers"].setdefault(user_id, [])
        if any(
            marker["kind"] == kind and str(marker["id"]) == id
            for marker in user_markers
        ):
            return
        new_marker: PersistedReadMarker = {"kind": kind, "id": id}
        user_markers.append(new_marker)
        try:
            self.__save_data(self.read_markers)
        except MarkerPersistenceFailure as e:
            user_markers.remove(new_marker)
            e.entity_kind = kind
            e.entity_id = id
            raise

    def delete_marker(self, user_id: str, kind: DeadlineKind, id: EntityId) -> None:
        user_markers = self.read_markers["markers"].get(user_id) or []
        removed = [
            marker
            for marker in user_markers
            if marker["kind"] == kind and str(marker["id"]) == id
        ]
        if not removed:
            return
        self.read_markers["markers"][user_id] = [
            marker for marker in user_markers if marker not in removed
        ]
        try:
            self.__save_data(self.read_markers)
        except MarkerPersistenceFailure as e:
            self.read_markers["markers"][user_id] = user_markers
            e.entity_kind = kind
            e.entity_id = id
            raise


READ_MARKER_REPO = ReadMarkerRepository()
