"""Feature items: class features, racial traits and monster abilities."""

from typing import Literal

from pydantic import Field

from rulecore.items.base_item import ActivatedItem


class Feature(ActivatedItem):
    """A feature that may have limited uses or a recharge."""

    item_type: Literal["feature"] = "feature"

    feature_type: str = Field(default="", description="The feature category.")
    source: str = Field(default="", description="Where the feature comes from.")
    themes: list[str] = Field(default_factory=list)
