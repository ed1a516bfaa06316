"""
Engine Settings
===============

YAML-backed configuration for data sources, required columns, centroids
and logging.

Usage:
    from health_engine.common import load_settings

    settings = load_settings("config/settings.yaml")
    print(settings.sources["loyalty"])
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from loguru import logger

from ..models import Centroid, DatasetName

DEFAULT_SOURCES: Dict[str, str] = {
    "loyalty": "https://raw.githubusercontent.com/abdulr2004/comployaltyscores/refs/heads/main/loyalty_scored_dataset.csv",
    "outreach": "https://raw.githubusercontent.com/Prudhvivarma0/Data/refs/heads/main/final_outreach_list.csv",
    "churn": "https://raw.githubusercontent.com/Darth-Freljord/Gargash-Hackathon-CltAltElite/refs/heads/main/augmented_car_bababababa_updated.csv",
}


@dataclass
class EngineSettings:
    """
    Resolved configuration for the engine and its collaborators.

    Attributes:
        sources: Dataset name -> CSV path or URL
        required_columns: Dataset name -> columns validation expects (the
            built-in column contract applies to datasets not listed)
        centroids: Pre-computed centroids in normalized feature space
        log_level: Minimum level for the stderr sink
        raw: The parsed YAML document, for collaborator-specific keys
    """

    sources: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SOURCES))
    required_columns: Dict[str, List[str]] = field(default_factory=dict)
    centroids: Tuple[Centroid, ...] = ()
    log_level: str = "INFO"
    raw: Dict[str, Any] = field(default_factory=dict)


def parse_centroids(entries: Optional[List[Any]]) -> Tuple[Centroid, ...]:
    """
    Build centroids from config entries.

    Each entry is either a 3-item list of coordinates or a mapping with
    `coordinates` and an optional `label`.

    Raises:
        ValueError: If an entry does not have exactly three numeric coordinates
    """
    centroids = []
    for i, entry in enumerate(entries or []):
        if isinstance(entry, dict):
            coords = entry.get("coordinates")
            label = entry.get("label")
        else:
            coords, label = entry, None

        if not isinstance(coords, (list, tuple)) or len(coords) != 3:
            raise ValueError(f"Centroid {i} must have exactly 3 coordinates, got {coords!r}")
        try:
            point = tuple(float(c) for c in coords)
        except (TypeError, ValueError):
            raise ValueError(f"Centroid {i} has non-numeric coordinates: {coords!r}")

        centroids.append(Centroid(coordinates=point, label=label))
    return tuple(centroids)


def load_settings(config_path: Optional[Union[str, Path]] = None) -> EngineSettings:
    """
    Load settings from YAML, falling back to defaults when the file is absent.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        EngineSettings
    """
    config: Dict[str, Any] = {}
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Loaded settings from {config_path}")
    elif config_path:
        logger.warning(f"Config file not found: {config_path}, using defaults")

    sources = dict(DEFAULT_SOURCES)
    for name, source in ((config.get('data') or {}).get('sources') or {}).items():
        sources[DatasetName.coerce(name).value] = str(source)

    required_columns = {}
    for name, columns in ((config.get('data') or {}).get('required_columns') or {}).items():
        if not isinstance(columns, (list, tuple)):
            raise ValueError(f"required_columns for {name!r} must be a list, got {columns!r}")
        required_columns[DatasetName.coerce(name).value] = [str(c) for c in columns]

    return EngineSettings(
        sources=sources,
        required_columns=required_columns,
        centroids=parse_centroids((config.get('clustering') or {}).get('centroids')),
        log_level=str((config.get('logging') or {}).get('level', 'INFO')).upper(),
        raw=config,
    )
