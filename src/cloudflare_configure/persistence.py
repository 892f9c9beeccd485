"""Read and write the desired-state JSON document."""

import json
from pathlib import Path

from cloudflare_configure.state import ConfigItems


class ConfigFileError(ValueError):
    """The document is valid JSON but not a settings object."""


def save_config_items(items: ConfigItems, path: str | Path) -> None:
    """Write settings to ``path`` as indented JSON, truncating the file.

    NaN and infinities are rejected with ValueError before the file is opened.
    """
    content = json.dumps(
        items, indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False
    )

    with open(path, "w", encoding="utf-8") as f:
        f.write(content + "\n")


def load_config_items(path: str | Path) -> ConfigItems:
    """Read settings from the JSON document at ``path``.

    OSError and json.JSONDecodeError are left to the caller.
    """

    def reject_constant(name: str) -> None:
        raise ConfigFileError(f"{path}: {name} is not a valid JSON value")

    with open(path, encoding="utf-8") as f:
        data = json.load(f, parse_constant=reject_constant)

    if not isinstance(data, dict):
        raise ConfigFileError(
            f"{path}: expected a JSON object, got {type(data).__name__}"
        )

    return data
