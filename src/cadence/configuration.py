# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "cadence"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_ACTIVITIES_PATH: Path = DATA_PATH / "activities.yaml"
DATA_DEADLINES_PATH: Path = DATA_PATH / "deadlines.yaml"
DATA_TIMELINE_PATH: Path = DATA_PATH / "timeline.yaml"
DATA_READ_MARKERS_PATH: Path = DATA_PATH / "read_markers.yaml"


class Configuration(TypedDict):
    data_path: Optional[str]
    user_id: str
    due_soon_minutes: int
    preview_limit: int
    refresh_seconds: float
    show_header: bool
    log_level: str


DEFAULT_CONFIGURATION: Configuration = {
    "data_path": None,
    "user_id": "default",
    "due_soon_minutes": 30,
    "preview_limit": 5,
    "refresh_seconds": 1,
    "show_header": True,
    "log_level": "WARNING",
}


def set_data_path(data_path: Path) -> None:
    global \
        DATA_PATH, \
        DATA_ACTIVITIES_PATH, \
        DATA_DEADLINES_PATH, \
        DATA_TIMELINE_PATH, \
        DATA_READ_MARKERS_PATH

    DATA_PATH = data_path
    DATA_ACTIVITIES_PATH = DATA_PATH / "activities.yaml"
    DATA_DEADLINES_PATH = DATA_PATH / "deadlines.yaml"
    DATA_TIMELINE_PATH = DATA_PATH / "timeline.yaml"
    DATA_READ_MARKERS_PATH = DATA_PATH / "read_markers.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are used.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
