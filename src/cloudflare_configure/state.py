"""State definitions for zone settings reconciliation."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Setting name -> JSON value (str, number, bool, None, dict, list)
ConfigItems = dict[str, Any]


class _Absent(Enum):
    """Marker for a setting that has no value at all."""

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


# Distinct from None, which is a present JSON null
ABSENT = _Absent.ABSENT


def values_equal(a: Any, b: Any) -> bool:
    """Compare two JSON values structurally.

    Booleans never equal numbers, ints and floats compare by value.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b

    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[key], b[key]) for key in a)

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))

    return a == b


@dataclass(frozen=True)
class ConfigItemForUpdate:
    """A single setting that must change to reach the desired state."""

    current: Any
    expected: Any

    @property
    def is_new(self) -> bool:
        """True when the setting does not exist remotely yet."""
        return self.current is ABSENT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        if self.is_new:
            return {"expected": self.expected}
        return {"current": self.current, "expected": self.expected}


# Setting name -> pending change
ConfigItemsForUpdate = dict[str, ConfigItemForUpdate]


def plan_to_dict(plan: ConfigItemsForUpdate) -> dict[str, Any]:
    """Convert a reconciliation plan to dictionary."""
    return {
        "update_count": len(plan),
        "new_count": sum(1 for item in plan.values() if item.is_new),
        "updates": {name: item.to_dict() for name, item in sorted(plan.items())},
    }
