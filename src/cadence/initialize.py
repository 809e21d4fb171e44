# SPDX-License-Identifier: MIT

from typing import Any

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from cadence import configuration
from cadence.log import configure_logging
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config: configuration.Configuration = configuration.DEFAULT_CONFIGURATION
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_ACTIVITIES_PATH.is_file():
        activities: dict[str, Any] = {"activities": []}
        configuration.DATA_ACTIVITIES_PATH.write_text(dump(activities, Dumper=Dumper))
    if not configuration.DATA_DEADLINES_PATH.is_file():
        deadlines: dict[str, Any] = {"deadlines": []}
        configuration.DATA_DEADLINES_PATH.write_text(dump(deadlines, Dumper=Dumper))
    if not configuration.DATA_TIMELINE_PATH.is_file():
        timeline: dict[str, Any] = {"items": []}
        configuration.DATA_TIMELINE_PATH.write_text(dump(timeline, Dumper=Dumper))
    if not configuration.DATA_READ_MARKERS_PATH.is_file():
        read_markers: dict[str, Any] = {"markers": {}}
        configuration.DATA_READ_MARKERS_PATH.write_text(
            dump(read_markers, Dumper=Dumper)
        )
