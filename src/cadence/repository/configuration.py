# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from cadence import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if configuration.APP_CONFIG_PATH.is_file():
            self._config = load(
                configuration.APP_CONFIG_PATH.read_text(), Loader=Loader
            )
        if self._config is None:
            self._config = deepcopy(configuration.DEFAULT_CONFIGURATION)

        # Back-fill keys added after the config file was written
        for key, value in configuration.DEFAULT_CONFIGURATION.items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        """Drop the cached configuration so the next access reloads it."""
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def get_due_soon_window(self) -> pendulum.Duration:
        return pendulum.duration(minutes=self.config["due_soon_minutes"])

    def update_config(
        self,
        user_id: Optional[str] = None,
        due_soon_minutes: Optional[int] = None,
        preview_limit: Optional[int] = None,
        refresh_seconds: Optional[float] = None,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        self.is_dirty = True

        if user_id is not None:
            self.config["user_id"] = user_id
        if due_soon_minutes is not None:
            self.config["due_soon_minutes"] = due_soon_minutes
        if preview_limit is not None:
            self.config["preview_limit"] = preview_limit
        if refresh_seconds is not None:
            self.config["refresh_seconds"] = refresh_seconds
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
