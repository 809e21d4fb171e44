# SPDX-License-Identifier: MIT

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DataLoader(Loader):
    """
    Loader for the data files.

    Unquoted dates and timestamps stay strings, so an invalid one such as
    2024-13-45 is rejected by the record it belongs to instead of failing
    the whole file.
    """


DataLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG
    ]
    for first_char, resolvers in Loader.yaml_implicit_resolvers.items()
}
