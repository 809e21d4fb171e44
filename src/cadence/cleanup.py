# SPDX-License-Identifier: MIT

import atexit

from cadence.repository.configuration import CONFIGURATION_REPO


def flush() -> None:
    # Read markers are written through on every change; only the
    # configuration is buffered.
    CONFIGURATION_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
