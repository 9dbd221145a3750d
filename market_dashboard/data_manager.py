"""Data manager for loading the working market dataset.

The dashboard works on one dataset per session.  This module reads it
from local JSON files, either a single combined document or the split
``value.json`` / ``volume.json`` / ``segmentation_analysis.json`` files
written by the upstream processor, and keeps the parsed result in memory
so repeated preset clicks do not re-read the disk.  Failures are logged
with ``logging`` and reported as ``None`` so callers fall back to the
minimal preset configurations.
"""

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from .config import (
    DATA_DIR_ENV,
    DATASET_FILE,
    SEGMENTATION_FILE,
    VALUE_FILE,
    VOLUME_FILE,
)
from .dataset import MarketDataset

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data directory
# ---------------------------------------------------------------------------


def resolve_data_dir() -> Path:
    """Select the directory holding the dataset files.

    The lookup order is:

    1. The ``MARKET_DATA_DIR`` environment variable, if set.
    2. A ``data`` folder at the repository root.
    """
    env = os.getenv(DATA_DIR_ENV)
    if env:
        # Expand relative or user paths to absolute
        return Path(env).expanduser().resolve()
    # Repo root /data (two levels up from this file)
    return Path(__file__).resolve().parent.parent / "data"


def _read_json(path: Path) -> Optional[Any]:
    """Decode a JSON file, or ``None`` (with a warning) if that fails."""
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        logger.warning("Dataset file not found: %s", path)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read dataset file %s: %s", path, exc)
    return None


def _as_dict(obj: Any) -> Dict[str, Any]:
    return dict(obj) if isinstance(obj, dict) else {}


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------
# Only successful parses are cached; a missing or unreadable file raises
# ``_DatasetUnavailable`` inside the cached function so ``lru_cache``
# stores nothing and the next call reads the disk again.


class _DatasetUnavailable(Exception):
    pass


def _log_loaded(name: str, dataset: MarketDataset) -> None:
    logger.info(
        "Loaded dataset %s: %d geographies, %d segment types, %d value records",
        name,
        len(dataset.all_geographies),
        len(dataset.segments),
        len(dataset.value_records or ()),
    )


@lru_cache(maxsize=4)
def _load_cached(path: Path) -> MarketDataset:
    payload = _read_json(path)
    if payload is None:
        raise _DatasetUnavailable(path)
    dataset = MarketDataset.from_dict(payload)
    _log_loaded(path.name, dataset)
    return dataset


@lru_cache(maxsize=4)
def _load_parts_cached(
    value_file: Path, volume_file: Path, seg_file: Path
) -> MarketDataset:
    value = _read_json(value_file)
    if value is None:
        raise _DatasetUnavailable(value_file)
    volume = _read_json(volume_file) if volume_file.exists() else None
    segmentation = _read_json(seg_file) if seg_file.exists() else None

    dataset = MarketDataset.from_dict(combine_payloads(value, volume, segmentation))
    _log_loaded(value_file.name, dataset)
    return dataset


def clear_cache() -> None:
    """Forget every dataset loaded so far."""
    _load_cached.cache_clear()
    _load_parts_cached.cache_clear()


def load_dataset(
    path: Optional[Path] = None, force_reload: bool = False
) -> Optional[MarketDataset]:
    """
    Load the combined dataset document, reusing the in-memory copy.

    Parameters
    ----------
    path : Path, optional
        JSON file to read.  Defaults to ``dataset.json`` in the
        directory returned by :func:`resolve_data_dir`.
    force_reload : bool, optional
        If ``True``, drop cached datasets and read the file again.

    Returns
    -------
    Optional[MarketDataset]
        The parsed dataset, or ``None`` when the file is missing or is
        not valid JSON.  Failures are not cached.
    """
    target = Path(path) if path is not None else resolve_data_dir() / DATASET_FILE
    if force_reload:
        clear_cache()
    try:
        return _load_cached(target.resolve())
    except _DatasetUnavailable:
        return None


def combine_payloads(
    value: Optional[Dict[str, Any]],
    volume: Optional[Dict[str, Any]] = None,
    segmentation: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge the split processor outputs into one dataset document.

    ``value`` supplies metadata, dimensions and ``data.value``; ``volume``
    contributes ``data.volume``.  ``segmentation`` supplies the segment
    taxonomy (``dimensions.segments`` or a top-level ``segments`` key)
    only when the value file carries none.  Inputs are not modified.
    """
    value = value if isinstance(value, dict) else {}
    combined: Dict[str, Any] = {
        "metadata": value.get("metadata", {}),
        "dimensions": _as_dict(value.get("dimensions")),
        "data": {},
    }
    value_data = value.get("data")
    if isinstance(value_data, dict) and "value" in value_data:
        combined["data"]["value"] = value_data["value"]

    if isinstance(volume, dict):
        volume_data = volume.get("data")
        if isinstance(volume_data, dict) and "volume" in volume_data:
            combined["data"]["volume"] = volume_data["volume"]
        if not combined["dimensions"]:
            combined["dimensions"] = _as_dict(volume.get("dimensions"))

    if isinstance(segmentation, dict) and not combined["dimensions"].get("segments"):
        seg_dims = segmentation.get("dimensions")
        if isinstance(seg_dims, dict) and "segments" in seg_dims:
            combined["dimensions"]["segments"] = seg_dims["segments"]
        elif "segments" in segmentation:
            combined["dimensions"]["segments"] = segmentation["segments"]
    return combined


def load_dataset_parts(
    value_path: Optional[Path] = None,
    volume_path: Optional[Path] = None,
    segmentation_path: Optional[Path] = None,
    force_reload: bool = False,
) -> Optional[MarketDataset]:
    """
    Load the split processor files and combine them into one dataset.

    Missing paths default to the standard file names in the data
    directory.  Only the value file is required; without it ``None`` is
    returned.  Like :func:`load_dataset`, a successful load is reused
    until ``force_reload`` is passed.
    """
    data_dir = resolve_data_dir()
    value_file = Path(value_path) if value_path else data_dir / VALUE_FILE
    volume_file = Path(volume_path) if volume_path else data_dir / VOLUME_FILE
    seg_file = Path(segmentation_path) if segmentation_path else data_dir / SEGMENTATION_FILE

    if force_reload:
        clear_cache()
    try:
        return _load_parts_cached(
            value_file.resolve(), volume_file.resolve(), seg_file.resolve()
        )
    except _DatasetUnavailable:
        return None
