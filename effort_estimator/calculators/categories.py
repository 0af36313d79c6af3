"""
Activity categories — the closed set the recalculation engine reasons about,
and the adapter that maps a caller's vocabulary onto it.

The line store keeps activity types as free text (locale- or tenant-specific
labels), and an external system may hand us integer option-set codes instead.
CategoryLabels resolves either representation to an ActivityCategory before
the engine runs, and maps back afterwards.
"""

import enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict


class ActivityCategory(str, enum.Enum):
    DEVELOPMENT = "development"
    PROCESS = "process"
    SUPPORT = "support"


class CategoryLabels(BaseModel):
    """The three labels naming Development/Process/Support for one call."""

    model_config = ConfigDict(frozen=True)

    development: str = "Development"
    process: str = "Process"
    support: str = "Support"
    # Option-set code → category, for callers that send coded values
    codes: Dict[int, ActivityCategory] = {}
    # Extra labels (locale synonyms) → category
    aliases: Dict[str, ActivityCategory] = {}

    def resolve(self, value: Union[str, int, ActivityCategory, None]) -> Optional[ActivityCategory]:
        """Map a label, a code or a category to the closed set. None if unrecognized."""
        if value is None:
            return None
        if isinstance(value, ActivityCategory):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return self.codes.get(value)
        if not isinstance(value, str):
            return None
        if value == self.development:
            return ActivityCategory.DEVELOPMENT
        if value == self.process:
            return ActivityCategory.PROCESS
        if value == self.support:
            return ActivityCategory.SUPPORT
        return self.aliases.get(value)

    def label_for(self, category: ActivityCategory) -> str:
        return {
            ActivityCategory.DEVELOPMENT: self.development,
            ActivityCategory.PROCESS: self.process,
            ActivityCategory.SUPPORT: self.support,
        }[category]


DEFAULT_LABELS = CategoryLabels()
