# services/snippets/config_loader.py
"""
Loads extraction profiles from ``configs/profiles.yaml`` and validates them
with the ``ExtractionRequest`` Pydantic model.  The file can contain a
top-level ``profiles`` key or just the mapping of profile names → settings.

Public API:
* ``get_profile_config(name)`` – returns a validated ``ExtractionRequest`` or
  raises ``ProfileNotFoundError``.
* ``list_available_profiles()`` – convenience helper for the CLI.
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel

from models.extraction_request import ExtractionRequest

from .exceptions import ProfileNotFoundError


class AllProfiles(BaseModel):
    """Top-level container – maps profile name → its settings."""
    profiles: Dict[str, ExtractionRequest]


# Resolve the path relative to this file (two levels up → project root)
CONFIG_PATH = (
    Path(__file__).resolve().parents[2] / "configs" / "profiles.yaml"
)

# Cache keyed by file so the YAML is read/validated only once per process
_cache: Dict[Path, AllProfiles] = {}


def _load_yaml(path: Path) -> dict:
    """Read the YAML file and return the inner ``profiles`` mapping."""
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    return raw.get("profiles", raw)


def _load_all(path: Optional[Path] = None) -> AllProfiles:
    """
    Parse the whole YAML and validate it against ``AllProfiles``.  A profile
    with no settings (``lenient: {}`` or ``lenient:``) gets every default.
    """
    path = Path(path or CONFIG_PATH)
    if path not in _cache:
        raw = _load_yaml(path)
        wrapped = {"profiles": {name: cfg or {} for name, cfg in raw.items()}}
        _cache[path] = AllProfiles(**wrapped)   # validation happens here
    return _cache[path]


def clear_cache() -> None:
    _cache.clear()


def get_profile_config(profile_name: str, path: Optional[Path] = None) -> ExtractionRequest:
    """
    Return a **validated** ``ExtractionRequest`` for the requested profile.

    Raises
    ------
    ProfileNotFoundError
        If the profile name is not present in the YAML.
    pydantic.ValidationError
        If the YAML exists but does not conform to the schema.
    """
    all_cfg = _load_all(path)
    try:
        return all_cfg.profiles[profile_name].model_copy(deep=True)
    except KeyError as exc:
        raise ProfileNotFoundError(profile_name) from exc


def list_available_profiles(path: Optional[Path] = None) -> List[str]:
    """Returns all profile identifiers."""
    return list(_load_all(path).profiles.keys())
