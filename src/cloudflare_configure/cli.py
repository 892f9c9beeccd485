#!/usr/bin/env python3
"""CLI for reconciling CloudFlare zone settings with a JSON file."""

import argparse
import asyncio
import json
import logging
import sys

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cloudflare_configure.cloudflare import CloudFlareClient, CloudFlareError
from cloudflare_configure.compare import ConfigMismatch
from cloudflare_configure.config import CloudFlareConfig
from cloudflare_configure.logging_config import setup_logging
from cloudflare_configure.persistence import load_config_items, save_config_items
from cloudflare_configure.reconciler import ZoneReconciler
from cloudflare_configure.state import plan_to_dict

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def _format_value(value: object) -> str:
    return escape(json.dumps(value, sort_keys=True))


def print_plan(plan: dict, format_type: str = "text") -> None:
    """Print reconciliation plan."""
    if format_type == "json":
        print(json.dumps(plan, indent=2))
        return

    if not plan["updates"]:
        console.print("[green]✓ No changes - zone is in desired state[/green]")
        return

    table = Table(title=f"Settings to update ({plan['update_count']})", box=box.ROUNDED)
    table.add_column("Setting", style="cyan")
    table.add_column("Current")
    table.add_column("Expected", style="green")

    for name, update in plan["updates"].items():
        current = _format_value(update["current"]) if "current" in update else "[dim](unset)[/dim]"
        table.add_row(escape(name), current, _format_value(update["expected"]))

    console.print(table)


def print_results(results: dict, format_type: str = "text") -> None:
    """Print reconciliation results."""
    if format_type == "json":
        print(json.dumps(results, indent=2))
        return

    outcome = results["results"]

    for update in outcome["applied"]:
        console.print(f"  [green]✓[/green] {update['setting']} = {_format_value(update['expected'])}")

    for item in outcome["failed"]:
        console.print(f"  [red]✗[/red] {item['update']['setting']}: {escape(item['reason'])}")

    if outcome["skipped"]:
        console.print(f"[yellow]Skipped: {len(outcome['skipped'])} updates (dry run)[/yellow]")


def print_mismatch(error: ConfigMismatch) -> None:
    """Report settings that must be declared in the local file."""
    err_console.print("[red]Settings missing from local configuration:[/red]")
    for name, value in sorted(error.missing.items()):
        err_console.print(f"  {name}: {_format_value(value)}")


def build_config(args: argparse.Namespace) -> CloudFlareConfig:
    """Environment configuration with command-line overrides."""
    config = CloudFlareConfig()
    if args.email:
        config.email = args.email
    if args.key:
        config.key = args.key
    if args.token:
        config.token = args.token
    return config


async def cmd_download(args: argparse.Namespace, client: CloudFlareClient) -> int:
    """Save the current zone settings to a file."""
    zone_id = await client.get_zone_id(args.zone)
    reconciler = ZoneReconciler(client, zone_id)

    items = await reconciler.get_current_state()
    save_config_items(items, args.file)

    logger.info(f"Saved {len(items)} settings for {args.zone} to {args.file}")
    return 0


async def cmd_diff(args: argparse.Namespace, client: CloudFlareClient) -> int:
    """Show the updates needed to reach the settings in a file."""
    desired = load_config_items(args.file)
    zone_id = await client.get_zone_id(args.zone)
    reconciler = ZoneReconciler(client, zone_id)

    plan = await reconciler.plan(desired)
    print_plan(plan_to_dict(plan), args.format)
    return 0


async def cmd_upload(args: argparse.Namespace, client: CloudFlareClient) -> int:
    """Push the settings in a file to the zone."""
    desired = load_config_items(args.file)
    zone_id = await client.get_zone_id(args.zone)
    reconciler = ZoneReconciler(client, zone_id)

    results = await reconciler.reconcile(desired, dry_run=args.dry_run)
    if args.format == "json":
        print_results(results, args.format)
    else:
        print_plan(results["plan"], args.format)
        print_results(results, args.format)

    return 1 if results["results"]["failed"] else 0


async def run(args: argparse.Namespace) -> int:
    """Run a subcommand, turning expected failures into exit codes."""
    config = build_config(args)
    if not config.has_credentials:
        logger.error("No credentials: set --token, or --email and --key")
        return 1

    try:
        async with CloudFlareClient(config) as client:
            return await args.func(args, client)
    except ConfigMismatch as e:
        print_mismatch(e)
        return 1
    except CloudFlareError as e:
        logger.error(f"CloudFlare API error: {e}")
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {args.file}: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cloudflare-configure",
        description="Reconcile CloudFlare zone settings with a JSON file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cloudflare-configure -z example.com download -f example.json
  cloudflare-configure -z example.com diff -f example.json
  cloudflare-configure -z example.com upload -f example.json --dry-run
  cloudflare-configure -z example.com upload -f example.json

Credentials default to CF_API_TOKEN, or CF_EMAIL and CF_KEY.
        """,
    )
    parser.add_argument("-z", "--zone", required=True, help="Zone (domain) name")
    parser.add_argument("--email", help="Account email (default: $CF_EMAIL)")
    parser.add_argument("--key", help="Global API key (default: $CF_KEY)")
    parser.add_argument("--token", help="API token (default: $CF_API_TOKEN)")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    parser.add_argument("--log-level", default="INFO", help="Log level (default: INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--log-file", help="Also write log lines to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # download command
    download_parser = subparsers.add_parser(
        "download", help="Save current zone settings to a file"
    )
    download_parser.add_argument(
        "-f", "--file", required=True, help="Path to write the settings JSON file"
    )
    download_parser.set_defaults(func=cmd_download)

    # diff command
    diff_parser = subparsers.add_parser(
        "diff", help="Show updates needed to match a settings file"
    )
    diff_parser.add_argument(
        "-f", "--file", required=True, help="Path to desired settings JSON file"
    )
    diff_parser.set_defaults(func=cmd_diff)

    # upload command
    upload_parser = subparsers.add_parser(
        "upload", help="Push a settings file to the zone"
    )
    upload_parser.add_argument(
        "-f", "--file", required=True, help="Path to desired settings JSON file"
    )
    upload_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the updates without applying them",
    )
    upload_parser.set_defaults(func=cmd_upload)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(
        level=args.log_level, json_format=args.json_logs, log_to_file=args.log_file
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
