"""Moderation request/response shapes.

The moderation model is a constrained enum rather than a free-form string;
`create_moderation` rejects anything that is not a `ModerationModel`.
"""

from enum import Enum

from pydantic import Field

from assistantkit.types.common import FrozenModel


class ModerationModel(str, Enum):
    LATEST = "text-moderation-latest"
    STABLE = "text-moderation-stable"


class ModerationCategories(FrozenModel):
    sexual: bool
    hate: bool
    harassment: bool
    self_harm: bool = Field(alias="self-harm")
    sexual_minors: bool = Field(alias="sexual/minors")
    hate_threatening: bool = Field(alias="hate/threatening")
    violence_graphic: bool = Field(alias="violence/graphic")
    self_harm_intent: bool = Field(alias="self-harm/intent")
    self_harm_instructions: bool = Field(alias="self-harm/instructions")
    harassment_threatening: bool = Field(alias="harassment/threatening")
    violence: bool


class ModerationScores(FrozenModel):
    sexual: float
    hate: float
    harassment: float
    self_harm: float = Field(alias="self-harm")
    sexual_minors: float = Field(alias="sexual/minors")
    hate_threatening: float = Field(alias="hate/threatening")
    violence_graphic: float = Field(alias="violence/graphic")
    self_harm_intent: float = Field(alias="self-harm/intent")
    self_harm_instructions: float = Field(alias="self-harm/instructions")
    harassment_threatening: float = Field(alias="harassment/threatening")
    violence: float


class ModerationRecord(FrozenModel):
    flagged: bool
    categories: ModerationCategories
    category_scores: ModerationScores

    def is_flagged(self) -> bool:
        return self.flagged


class Moderation(FrozenModel):
    id: str
    model: str
    results: list[ModerationRecord]

    def is_flagged(self, idx: int = 0) -> bool:
        """Return whether the `idx`-th input was flagged."""
        return self.results[idx].is_flagged()
