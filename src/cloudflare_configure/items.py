"""Set operations over ConfigItems maps."""

from cloudflare_configure.state import ConfigItems, values_equal


def union_config_items(a: ConfigItems, b: ConfigItems) -> ConfigItems:
    """Merge two maps, values from ``a`` win on shared keys."""
    merged = dict(b)
    merged.update(a)
    return merged


def difference_config_items(a: ConfigItems, b: ConfigItems) -> ConfigItems:
    """Return the entries of ``b`` that are missing from or differ in ``a``.

    Keys only present in ``a`` are never part of the result.
    """
    return {
        key: value
        for key, value in b.items()
        if key not in a or not values_equal(a[key], value)
    }
