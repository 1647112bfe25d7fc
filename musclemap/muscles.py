"""
Muscle group allow-list and identifier validation.

Asset paths are only ever looked up by :class:`MuscleGroup` members, so the
set below is also the complete set of files a request can reach.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional

LOG = logging.getLogger(__name__)


class MuscleGroup(str, Enum):
    """Anatomical regions with a silhouette image."""

    ALL = "all"
    ALL_LOWER = "all_lower"
    ALL_UPPER = "all_upper"
    ABDUCTORS = "abductors"
    ABS = "abs"
    ADDUCTORS = "adductors"
    BACK = "back"
    BACK_LOWER = "back_lower"
    BACK_UPPER = "back_upper"
    BICEPS = "biceps"
    CALFS = "calfs"
    CHEST = "chest"
    CORE = "core"
    CORE_LOWER = "core_lower"
    CORE_UPPER = "core_upper"
    FOREARMS = "forearms"
    GLUTEUS = "gluteus"
    HAMSTRING = "hamstring"
    HANDS = "hands"
    LATISSIMUS = "latissimus"
    LEGS = "legs"
    NECK = "neck"
    QUADRICEPS = "quadriceps"
    SHOULDERS = "shoulders"
    SHOULDERS_BACK = "shoulders_back"
    SHOULDERS_FRONT = "shoulders_front"
    TRICEPS = "triceps"

    @classmethod
    def lookup(cls, identifier: str) -> Optional["MuscleGroup"]:
        try:
            return cls(identifier)
        except ValueError:
            return None


def split_identifiers(raw: Optional[str]) -> List[str]:
    """
    Split a comma separated identifier list, dropping empty tokens.

    Tokens are not stripped: ``" biceps"`` stays as-is and later fails
    validation like any other unknown name.
    """

    if not raw:
        return []
    return [token for token in raw.split(",") if token]


class MuscleValidator:
    """
    Resolve identifiers against the allow-list and an immutable asset table.
    """

    def __init__(self, asset_paths: Mapping[MuscleGroup, Path]) -> None:
        self._asset_paths: Mapping[MuscleGroup, Path] = MappingProxyType(dict(asset_paths))

    @property
    def asset_paths(self) -> Mapping[MuscleGroup, Path]:
        return self._asset_paths

    def validate(self, identifier: str) -> Optional[Path]:
        muscle = MuscleGroup.lookup(identifier)
        if muscle is None:
            LOG.warning("Invalid muscle group requested: %s", identifier)
            return None

        path = self._asset_paths.get(muscle)
        if path is None or not path.is_file():
            LOG.warning("Image file not found for muscle: %s", identifier)
            return None
        return path

    def has_asset(self, muscle: MuscleGroup) -> bool:
        """Report asset presence without logging; used for listings."""

        path = self._asset_paths.get(muscle)
        return path is not None and path.is_file()
