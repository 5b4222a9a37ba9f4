"""
Defines the per-model override layer for Tsugami Swiss-type lathes.

Each model starts with an empty override map; entries added here (or
merged in later from a dictionary document) take precedence over the
common descriptions for that model only.
"""
from typing import Dict
from .base_dialect import BaseDialect

TSUGAMI_MODELS = (
    "B012-Ⅱ",
    "B012-Ⅲ",
    "B012-F",
    "B018-Ⅲ",
    "B0125",
    "B0125-Ⅱ",
    "B0125-Ⅲ",
    "BE12",
    "BE20-V",
    "BS12-Ⅲ",
    "BS18-Ⅲ",
)

# Model-specific overrides or additions, keyed by model identifier
MODEL_OVERRIDES: Dict[str, Dict[str, str]] = {model: {} for model in TSUGAMI_MODELS}


class TsugamiDialect(BaseDialect):
    def __init__(self, model: str):
        self.model = model
        super().__init__()

    def _populate_code_map(self):
        """Populates the code map with this model's overrides."""
        self.code_map = dict(MODEL_OVERRIDES.get(self.model, {}))


def model_overrides() -> Dict[str, Dict[str, str]]:
    """Return the seed override map for every known model."""
    return {model: dict(TsugamiDialect(model).code_map) for model in TSUGAMI_MODELS}
