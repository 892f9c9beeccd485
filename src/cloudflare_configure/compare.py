"""Comparison of desired and observed zone settings."""

import logging

from cloudflare_configure.state import (
    ABSENT,
    ConfigItemForUpdate,
    ConfigItems,
    ConfigItemsForUpdate,
    values_equal,
)

logger = logging.getLogger(__name__)


class ConfigMismatch(Exception):
    """Settings reported remotely that are not declared locally."""

    def __init__(self, missing: ConfigItems):
        if not missing:
            raise ValueError("ConfigMismatch requires at least one missing setting")
        self.missing = dict(missing)
        super().__init__(
            f"Missing from local configuration: {', '.join(sorted(self.missing))}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigMismatch):
            return NotImplemented
        return self.missing == other.missing

    __hash__ = Exception.__hash__


def compare_config_items_for_update(
    local: ConfigItems, remote: ConfigItems
) -> ConfigItemsForUpdate:
    """Compute the updates that move ``remote`` to ``local``.

    Every key of ``remote`` must be declared in ``local``; otherwise
    ConfigMismatch is raised before any diff is computed.
    """
    missing = {key: value for key, value in remote.items() if key not in local}
    if missing:
        raise ConfigMismatch(missing)

    plan: ConfigItemsForUpdate = {}
    for key, expected in local.items():
        if key not in remote:
            plan[key] = ConfigItemForUpdate(current=ABSENT, expected=expected)
        elif not values_equal(remote[key], expected):
            plan[key] = ConfigItemForUpdate(current=remote[key], expected=expected)

    logger.debug(f"Compared {len(local)} local settings: {len(plan)} to update")
    return plan
