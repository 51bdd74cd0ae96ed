"""
Load rating batches from files.

Supported formats:
- CSV with a header row containing title, id and rating columns
- JSON list of objects
- YAML list of mappings
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from app.schemas import RatingRequest

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["title", "id", "rating"]


def _read_csv(path: Path) -> List[Dict[str, Any]]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        missing = {"rating"} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"{path} is missing required column(s): {sorted(missing)}")
        rows = []
        for row in reader:
            # Empty cells mean "not given"
            rows.append({k: v for k, v in row.items() if k in CSV_COLUMNS and v not in (None, "")})
        return rows


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


READERS = {
    ".csv": _read_csv,
    ".json": _read_json,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
}


def load_rating_requests(path: Path | str) -> List[RatingRequest]:
    """
    Read a ratings file into validated RatingRequest objects.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the content is not a list
        pydantic.ValidationError: If an entry is not a valid rating
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Ratings file not found: {path}")

    reader = READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported ratings file format: {path.suffix or path.name}")

    entries = reader(path)
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise ValueError(f"{path} must contain a list of ratings, got {type(entries).__name__}")

    requests = [RatingRequest.model_validate(entry) for entry in entries]
    logger.info("Loaded %d rating(s) from %s", len(requests), path)
    return requests
