"""CloudFlare zone settings reconciliation."""

from cloudflare_configure.compare import ConfigMismatch, compare_config_items_for_update
from cloudflare_configure.items import difference_config_items, union_config_items
from cloudflare_configure.persistence import (
    ConfigFileError,
    load_config_items,
    save_config_items,
)
from cloudflare_configure.state import (
    ABSENT,
    ConfigItemForUpdate,
    ConfigItems,
    ConfigItemsForUpdate,
)

__all__ = [
    "ABSENT",
    "ConfigFileError",
    "ConfigItemForUpdate",
    "ConfigItems",
    "ConfigItemsForUpdate",
    "ConfigMismatch",
    "compare_config_items_for_update",
    "difference_config_items",
    "load_config_items",
    "save_config_items",
    "union_config_items",
]
