#!/usr/bin/env python3
"""
Layout preview.

Places the items described in a YAML/JSON file on the hex spiral and prints
the resulting slot table.

Usage:
    python tools/layout_preview.py items.yaml
    python tools/layout_preview.py items.yaml --rank usage_time --buckets 11
    python tools/layout_preview.py items.yaml --positions state/positions.json --commit
"""

from __future__ import annotations

from pathlib import Path
import sys

import click
from pydantic import ValidationError
import yaml

from hexlayout.config.loader import build_layout_config
from hexlayout.exceptions import HexLayoutError
from hexlayout.layout.models import Item
from hexlayout.layout.placement import PlacementResult
from hexlayout.layout.ranking import RankKey
from hexlayout.layout.spiral import PartitionStrategy
from hexlayout.runner.session import LayoutSession
from hexlayout.storage.position_storage import JsonFilePositionStore
from hexlayout.utils import json
from hexlayout.utils.logger_setup import setup_logger


def format_table(result: PlacementResult, committed: dict[str, int]) -> list[str]:
    lines = [f"{'idx':>4} {'ring':>4} {'q':>4} {'r':>4} {'sector':>6}  {'key':<32} {'stable':>6}"]
    for index, (item, slot) in enumerate(zip(result.items, result.slots)):
        key = "." if item.is_placeholder else item.key
        stable = "" if item.is_placeholder else str(committed.get(item.key, index))
        lines.append(
            f"{index:>4} {slot.ring:>4} {slot.coordinate.q:>4} {slot.coordinate.r:>4} "
            f"{slot.sector_label:>6}  {key:<32} {stable:>6}"
        )
    return lines


@click.command()
@click.argument(
    "items_file",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--rank",
    type=click.Choice([k.value for k in RankKey]),
    default=None,
    help="Ranking key (default: from file or usage_frequency).",
)
@click.option(
    "--partition",
    type=click.Choice([p.value for p in PartitionStrategy]),
    default=None,
    help="Sector partition strategy (default: windmill).",
)
@click.option("--buckets", type=int, default=None, help="Number of color buckets.")
@click.option("--inner-size", type=int, default=None, help="Items exempt from bucketing.")
@click.option(
    "--positions",
    type=click.Path(path_type=Path),
    default=None,
    help="JSON file with stabilized positions from previous passes.",
)
@click.option("--commit", is_flag=True, help="Write stabilized positions back.")
@click.option("--as-json", is_flag=True, help="Emit the placement as JSON.")
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def main(
    items_file: Path,
    rank: str | None,
    partition: str | None,
    buckets: int | None,
    inner_size: int | None,
    positions: Path | None,
    commit: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    """
    Place the items listed in ITEMS_FILE.

    ITEMS_FILE is YAML (or JSON) with an ``items`` list and an optional
    ``layout`` section of LayoutConfig overrides.
    """
    setup_logger(level="DEBUG" if verbose else "WARNING")

    try:
        data = yaml.safe_load(items_file.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        click.echo(click.style(f"Failed to load {items_file}: {e}", fg="red"), err=True)
        sys.exit(1)
    if not isinstance(data, dict):
        click.echo(
            click.style(f"{items_file} must hold a mapping with an 'items' list", fg="red"),
            err=True,
        )
        sys.exit(1)

    overrides = {
        "rank_key": rank,
        "partition": partition,
        "bucket_count": buckets,
        "inner_size": inner_size,
    }
    try:
        config = build_layout_config(
            data.get("layout") or {},
            **{k: v for k, v in overrides.items() if v is not None},
        )
        items = [Item.model_validate(raw) for raw in data.get("items") or []]
    except (HexLayoutError, ValidationError, TypeError, ValueError) as e:
        click.echo(click.style("Invalid input:", fg="red"), err=True)
        click.echo(f"   {e}", err=True)
        sys.exit(1)

    store = JsonFilePositionStore(positions) if positions else None
    try:
        session = LayoutSession(config, store=store)
        result = session.set_items(items)
        if commit and store is not None:
            session.commit()
    except HexLayoutError as e:
        click.echo(click.style(f"Placement failed: {e}", fg="red"), err=True)
        sys.exit(1)

    if as_json:
        payload = {
            "stats": result.stats.to_dict(),
            "slots": [
                {
                    "index": i,
                    "q": slot.coordinate.q,
                    "r": slot.coordinate.r,
                    "sector": slot.sector_label,
                    "key": None if item.is_placeholder else item.key,
                }
                for i, (item, slot) in enumerate(zip(result.items, result.slots))
            ],
            "positions": session.committed_indices,
        }
        click.echo(json.dumps(payload, indent=True))
        return

    for line in format_table(result, session.committed_indices):
        click.echo(line)
    stats = result.stats
    click.echo()
    click.echo(
        click.style(
            f"{stats.real_items} items, {stats.placeholders} placeholders, "
            f"{stats.rings_used} rings",
            fg="green",
        )
    )


if __name__ == "__main__":
    main()
