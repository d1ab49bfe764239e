"""Outcome of installing a single hook."""

from __future__ import annotations

import dataclasses
from enum import Enum
from pathlib import Path


class HookOutcome(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"


@dataclasses.dataclass(frozen=True)
class HookResult:
    """What an install pass did to one hook slot."""

    path: Path
    outcome: HookOutcome

    @property
    def name(self) -> str:
        return self.path.name
