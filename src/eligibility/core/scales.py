"""Ordinal scales for grades, education levels and experience tiers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

UNKNOWN_RANK = 0

_SEPARATORS = re.compile(r"[\s_]+")


@dataclass(frozen=True)
class OrdinalScale:
    """Total order over a small label set.

    Labels are matched after case folding, folding whitespace and underscores
    into ``-`` and stripping trailing ``modifiers``. Unknown labels rank
    :data:`UNKNOWN_RANK`, below every known tier.
    """

    name: str
    ranks: Mapping[str, int]
    aliases: Mapping[str, str] = field(default_factory=dict)
    modifiers: str = ""

    def __post_init__(self) -> None:
        ranks = {self._fold(key): int(value) for key, value in self.ranks.items()}
        aliases = {self._fold(key): self._fold(value) for key, value in self.aliases.items()}
        object.__setattr__(self, "ranks", MappingProxyType(ranks))
        object.__setattr__(self, "aliases", MappingProxyType(aliases))

    def normalize(self, label: Any) -> str | None:
        if not isinstance(label, str):
            return None
        key = self._fold(label)
        if self.modifiers:
            key = key.rstrip(self.modifiers)
        key = self.aliases.get(key, key)
        return key if key in self.ranks else None

    def rank(self, label: Any) -> int:
        key = self.normalize(label)
        if key is None:
            return UNKNOWN_RANK
        return self.ranks[key]

    @property
    def lowest(self) -> str:
        return min(self.ranks, key=lambda key: (self.ranks[key], key))

    def labels(self) -> list[str]:
        return sorted(self.ranks, key=lambda key: (self.ranks[key], key))

    def with_overrides(
        self,
        *,
        ranks: Mapping[str, int] | None = None,
        aliases: Mapping[str, str] | None = None,
    ) -> "OrdinalScale":
        merged_ranks = dict(self.ranks)
        merged_ranks.update(ranks or {})
        merged_aliases = dict(self.aliases)
        merged_aliases.update(aliases or {})
        return OrdinalScale(
            name=self.name,
            ranks=merged_ranks,
            aliases=merged_aliases,
            modifiers=self.modifiers,
        )

    @staticmethod
    def _fold(label: str) -> str:
        return _SEPARATORS.sub("-", label.strip().casefold())


GRADE_SCALE = OrdinalScale(
    name="grade",
    ranks={"F": 0, "E": 1, "D": 2, "C": 3, "B": 4, "A": 5},
    modifiers="+-",
)

# NOTE: diploma shares the associate tier until real requirement data says otherwise.
EDUCATION_SCALE = OrdinalScale(
    name="education",
    ranks={
        "high-school": 1,
        "associate": 2,
        "diploma": 2,
        "bachelor": 3,
        "master": 4,
        "phd": 5,
    },
    aliases={
        "highschool": "high-school",
        "secondary": "high-school",
        "associates": "associate",
        "associate's": "associate",
        "bachelors": "bachelor",
        "bachelor's": "bachelor",
        "masters": "master",
        "master's": "master",
        "ph.d": "phd",
        "ph.d.": "phd",
        "doctorate": "phd",
    },
)

EXPERIENCE_SCALE = OrdinalScale(
    name="experience",
    ranks={"entry": 1, "mid": 2, "senior": 3, "executive": 4},
    aliases={
        "entry-level": "entry",
        "junior": "entry",
        "mid-level": "mid",
        "intermediate": "mid",
        "senior-level": "senior",
    },
)


__all__ = [
    "OrdinalScale",
    "GRADE_SCALE",
    "EDUCATION_SCALE",
    "EXPERIENCE_SCALE",
    "UNKNOWN_RANK",
]
