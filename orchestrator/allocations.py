"""
Allocation Source

Turns a reward report (CSV with a header row) into Allocation records.

Expected columns by default:
    wallet,rewardTotal
    0xAbC...,12.5

Rows whose reward is zero or negative are skipped. Rewards are decimal
amounts in `unit` (ether by default) and are converted to base units.
"""

from __future__ import annotations

import csv
import io
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from eth_utils import from_wei, to_wei

from core.config.runtime import SourceConfig
from core.http import HttpClient, HttpError
from core.merkle.leaf_codec import normalize_recipient
from core.schemas.allocation import Allocation
from core.schemas.errors import AllocationException, SourceUnavailableException


logger = logging.getLogger(__name__)


def parse_allocation_csv(
    text: str,
    *,
    recipient_column: str = "wallet",
    amount_column: str = "rewardTotal",
    unit: str = "ether",
) -> list[Allocation]:
    """
    Parse a CSV allocation report.

    Args:
        text: CSV content including the header row
        recipient_column: Header of the address column
        amount_column: Header of the reward column
        unit: Denomination of the reward column (see eth_utils.to_wei)

    Returns:
        Allocations in file order, rewards <= 0 dropped

    Raises:
        AllocationException: If a column is missing or a row cannot be parsed
    """
    reader = csv.DictReader(io.StringIO(text))
    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    reader.fieldnames = fieldnames
    missing = [c for c in (recipient_column, amount_column) if c not in fieldnames]
    if missing:
        raise AllocationException(
            f"Allocation table is missing column(s): {', '.join(missing)}",
            details={"columns": fieldnames},
        )

    allocations: list[Allocation] = []
    skipped = 0
    # Header is line 1
    for line_no, row in enumerate(reader, start=2):
        raw_recipient = (row.get(recipient_column) or "").strip()
        raw_amount = (row.get(amount_column) or "").strip()
        if not raw_recipient and not raw_amount:
            continue

        try:
            recipient = normalize_recipient(raw_recipient)
        except (TypeError, ValueError):
            raise AllocationException(
                f"Invalid recipient address {raw_recipient!r}", row=line_no
            ) from None

        try:
            reward = Decimal(raw_amount)
        except InvalidOperation:
            reward = None
        if reward is None or not reward.is_finite():
            raise AllocationException(
                f"Invalid reward {raw_amount!r} for {recipient}", row=line_no
            )

        if reward <= 0:
            skipped += 1
            logger.info(f"Skipping {recipient}: reward {raw_amount} is not positive")
            continue

        try:
            amount = to_wei(reward, unit)
        except ValueError as e:
            raise AllocationException(
                f"Cannot convert reward {raw_amount!r} ({unit}) for {recipient}: {e}",
                row=line_no,
            ) from e
        if from_wei(amount, unit) != reward:
            raise AllocationException(
                f"Reward {raw_amount!r} for {recipient} is finer than one base unit",
                row=line_no,
            )

        allocations.append(Allocation(recipient=recipient, amount=amount))

    logger.info(f"Parsed {len(allocations)} allocations ({skipped} skipped)")
    return allocations


def _read_source_text(config: SourceConfig, client: Optional[HttpClient]) -> str:
    if config.path:
        path = Path(config.path)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise SourceUnavailableException(str(path), str(e)) from e

    if not config.url:
        raise SourceUnavailableException("<none>", "neither a path nor a URL is configured")

    own_client = client is None
    http = client or HttpClient()
    try:
        logger.info(f"Fetching allocations from {config.url}")
        response = http.get(config.url)
    except HttpError as e:
        raise SourceUnavailableException(config.url, str(e)) from e
    finally:
        if own_client:
            http.close()

    if not response.ok:
        raise SourceUnavailableException(config.url, f"HTTP {response.status_code}")
    return response.text


def load_allocation_source(
    config: SourceConfig,
    client: Optional[HttpClient] = None,
) -> list[Allocation]:
    """
    Read the configured source (local path first, then URL) and parse it.

    Raises:
        SourceUnavailableException: If the source cannot be read or fetched
        AllocationException: If the content is not a valid allocation table
    """
    text = _read_source_text(config, client)
    return parse_allocation_csv(
        text,
        recipient_column=config.recipient_column,
        amount_column=config.amount_column,
        unit=config.unit,
    )
