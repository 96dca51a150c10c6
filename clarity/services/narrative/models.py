"""Narrative service models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CorrectionPrompt(BaseModel):
    """A "which is closer?" prompt shown when confidence is low."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: str
    option_a: str = Field(..., description="Description from the top archetype")
    option_b: str = Field(..., description="Description from the runner-up archetype")


class SnapshotPanes(BaseModel):
    """The three narrative panes of a snapshot."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    whats_happening: list[str] = Field(..., description="What's actually happening (max 3)")
    what_it_costs: list[str] = Field(..., description="What this is costing (max 3)")
    what_to_fix_first: list[str] = Field(..., description="What to fix first (max 2)")
    correction_prompt: CorrectionPrompt | None = None
