"""Static port directory loaded from a JSON list of {name, country, code}."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("lcl.ports.directory")

BUNDLED_DIRECTORY = Path(__file__).parent / "data" / "ports.json"


@dataclass(frozen=True)
class Port:
    name: str
    country: str
    code: str


def load_port_directory(path: str | Path | None = None) -> tuple[Port, ...]:
    """Load the directory, keeping file order (search ties rely on it)."""
    source = Path(path) if path else BUNDLED_DIRECTORY
    with open(source, encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"Port directory {source} must be a JSON list")

    ports = tuple(
        Port(name=str(item["name"]), country=str(item["country"]), code=str(item["code"]))
        for item in raw
    )
    logger.info("Loaded %d ports from %s", len(ports), source)
    return ports
