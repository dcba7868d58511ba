"""
Route rate table.

Rates are keyed by the exact (origin, destination) port-code pair. Codes are
compared as stored: UN/LOCODEs are canonical uppercase, so no case folding
happens here. Default pricing for unknown routes is a separate, explicit
policy (FallbackRates) applied by the caller.
"""

import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("lcl.calculator.rates")

# Column names of the rate sheet export
CSV_COLUMNS = ("POL_code", "POD_code", "Rate_USD_per_CBM", "Rate_USD_per_Ton")


@dataclass(frozen=True)
class RateEntry:
    origin_code: str
    destination_code: str
    rate_per_cbm: float
    rate_per_ton: float


@dataclass(frozen=True)
class FallbackRates:
    """Default per-unit rates for routes missing from the table."""

    rate_per_cbm: float
    rate_per_ton: float

    def as_rate_entry(self, origin_code: str, destination_code: str) -> RateEntry:
        return RateEntry(origin_code, destination_code, self.rate_per_cbm, self.rate_per_ton)


DEFAULT_RATE_TABLE: tuple[RateEntry, ...] = (
    RateEntry("AEJEA", "CNSHA", rate_per_cbm=45, rate_per_ton=35),
    RateEntry("CNSHA", "AEJEA", rate_per_cbm=42, rate_per_ton=32),
    RateEntry("AEJEA", "USNYC", rate_per_cbm=55, rate_per_ton=45),
    RateEntry("USNYC", "AEJEA", rate_per_cbm=52, rate_per_ton=42),
)


def find_rate(
    origin_code: str,
    destination_code: str,
    rate_table: Iterable[RateEntry],
) -> RateEntry | None:
    """Exact-match scan. Returns None when the route is not in the table."""
    for entry in rate_table:
        if entry.origin_code == origin_code and entry.destination_code == destination_code:
            return entry
    return None


def load_rate_table(path: str | Path) -> list[RateEntry]:
    """Read a rate sheet exported as CSV.

    Expected header: POL_code,POD_code,Rate_USD_per_CBM,Rate_USD_per_Ton.
    Raises ValueError on a missing column or a non-numeric rate.
    """
    entries: list[RateEntry] = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [c for c in CSV_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"Rate table {path} is missing columns: {', '.join(missing)}")

        for line_no, row in enumerate(reader, start=2):
            try:
                entries.append(RateEntry(
                    origin_code=row["POL_code"].strip(),
                    destination_code=row["POD_code"].strip(),
                    rate_per_cbm=float(row["Rate_USD_per_CBM"]),
                    rate_per_ton=float(row["Rate_USD_per_Ton"]),
                ))
            except (TypeError, ValueError) as e:
                raise ValueError(f"Rate table {path}, line {line_no}: {e}") from e

    logger.info("Loaded %d rate entries from %s", len(entries), path)
    return entries
