"""Engine settings and their YAML loader."""

from pathlib import Path
from typing import List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field


class EngineSettings(BaseModel):
    """Tunable behaviour of statement generation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rule_table: str = Field("default", description="Builtin rule table name or YAML path")
    reconciliation_tolerance: float = Field(
        0.01, ge=0, description="Largest |delta| still treated as reconciled"
    )
    cash_total_markers: List[str] = Field(
        default_factory=lambda: ["total bank", "total cash"],
        description="Account name fragments of the row carrying total cash",
    )
    combine_interest_dividend: bool = Field(
        True, description="One combined interest/dividend adjustment line instead of two"
    )


def load_settings(path: Union[str, Path, None] = None) -> EngineSettings:
    """
    Load settings from a YAML file; defaults when no path is given.

    Args:
        path: Optional path to a YAML mapping of EngineSettings fields

    Returns:
        EngineSettings instance
    """
    if path is None:
        return EngineSettings()

    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f) or {}
    return EngineSettings.model_validate(document)
