"""
Pydantic model for a validated per-activity outfit.
"""

from typing import Dict, FrozenSet, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from recommendation.constants.clothing_categories import category_keys, get_category
from recommendation.context import ActivityType


class ClothingItems(BaseModel):
    """
    What to wear, keyed by the activity's category keys.

    Keys must belong to the activity. Values must be one of the category's
    listed options (matched case-insensitively and stored with the listed
    spelling) unless they are declared in ``custom_options``.
    """
    model_config = ConfigDict(frozen=True)

    activity: ActivityType
    custom_options: FrozenSet[str] = Field(default_factory=frozenset, description="User-defined values accepted as-is")
    items: Dict[str, str] = Field(default_factory=dict)

    @field_validator("custom_options", mode="before")
    @classmethod
    def normalize_custom(cls, v):
        if v is None:
            return frozenset()
        return frozenset(str(o).strip().lower() for o in v if str(o).strip())

    @field_validator("items")
    @classmethod
    def validate_items(cls, v: Dict[str, str], info: ValidationInfo) -> Dict[str, str]:
        activity = info.data.get("activity")
        if activity is None:
            return v
        custom = info.data.get("custom_options") or frozenset()

        cleaned: Dict[str, str] = {}
        for key, value in v.items():
            category = get_category(activity, key)
            if category is None:
                raise ValueError(
                    f"'{key}' is not a clothing category for {activity.value} "
                    f"(expected one of {', '.join(category_keys(activity))})"
                )
            value = (value or "").strip()
            if not value:
                raise ValueError(f"empty value for '{key}'")
            option = category.find_option(value)
            if option is None and value.lower() not in custom:
                raise ValueError(f"'{value}' is not an option for {category.label}")
            cleaned[key] = option or value
        return cleaned

    @classmethod
    def build(
        cls,
        activity: ActivityType,
        items: Mapping[str, str],
        custom_options: Optional[FrozenSet[str]] = None,
    ) -> "ClothingItems":
        return cls(activity=activity, items=dict(items), custom_options=custom_options or frozenset())

    def __getitem__(self, key: str) -> str:
        return self.items[key]

    def __contains__(self, key: str) -> bool:
        return key in self.items

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.items.get(key, default)

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items)
