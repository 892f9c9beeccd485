"""Zone settings reconciliation engine."""

import logging
from datetime import datetime, timezone
from typing import Any

from cloudflare_configure.cloudflare import CloudFlareClient, CloudFlareError
from cloudflare_configure.compare import compare_config_items_for_update
from cloudflare_configure.state import (
    ConfigItems,
    ConfigItemsForUpdate,
    plan_to_dict,
)

logger = logging.getLogger(__name__)


class ZoneReconciler:
    """Reconciles the settings of one zone between desired and actual."""

    def __init__(self, client: CloudFlareClient, zone_id: str):
        """Initialize reconciler."""
        self.client = client
        self.zone_id = zone_id

    async def get_current_state(self) -> ConfigItems:
        """Fetch current zone settings."""
        items = await self.client.get_config_items(self.zone_id)
        logger.debug(f"Fetched {len(items)} settings for zone {self.zone_id}")
        return items

    async def plan(self, desired: ConfigItems) -> ConfigItemsForUpdate:
        """Compare desired settings with the zone, return the updates."""
        current = await self.get_current_state()
        return compare_config_items_for_update(desired, current)

    async def apply_plan(
        self, plan: ConfigItemsForUpdate, dry_run: bool = True
    ) -> dict[str, list[dict[str, Any]]]:
        """Apply reconciliation plan."""
        results: dict[str, list[dict[str, Any]]] = {
            "applied": [],
            "failed": [],
            "skipped": [],
        }

        for name, item in sorted(plan.items()):
            update = {"setting": name, **item.to_dict()}

            if dry_run:
                results["skipped"].append({"update": update, "reason": "dry_run"})
                continue

            try:
                await self.client.update_setting(self.zone_id, name, item.expected)
            except CloudFlareError as e:
                logger.error(f"Failed to update {name}: {e}")
                results["failed"].append({"update": update, "reason": str(e)})
                continue

            if item.is_new:
                logger.info(f"Set {name} to {item.expected!r}")
            else:
                logger.info(f"Changed {name} from {item.current!r} to {item.expected!r}")
            results["applied"].append(update)

        return results

    async def reconcile(self, desired: ConfigItems, dry_run: bool = True) -> dict[str, Any]:
        """Full reconciliation: detect differences and optionally push them."""
        plan = await self.plan(desired)
        results = await self.apply_plan(plan, dry_run=dry_run)

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "zone_id": self.zone_id,
            "plan": plan_to_dict(plan),
            "results": results,
            "dry_run": dry_run,
        }
