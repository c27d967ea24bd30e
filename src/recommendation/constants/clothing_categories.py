"""
Per-activity clothing categories and their closed option lists.

Option tuples of ordinal categories run coldest/lightest first, so the
index is the option's warmth rank. Non-ordinal categories (shoes,
eyewear, accessories...) have no meaningful order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from recommendation.context import ActivityType


class CategoryKey(str, Enum):
    HEAD_COVER = "headCover"
    HELMET = "helmet"
    TOPS = "tops"
    BASE_LAYER = "baseLayer"
    MID_LAYER = "midLayer"
    OUTER_LAYER = "outerLayer"
    BOTTOMS = "bottoms"
    SHOES = "shoes"
    BOOTS = "boots"
    SOCKS = "socks"
    GLOVES = "gloves"
    ARM_WARMERS = "armWarmers"
    RAIN_GEAR = "rainGear"
    EYEWEAR = "eyewear"
    GAITERS = "gaiters"
    HYDRATION = "hydration"
    PACK = "pack"
    ACCESSORIES = "accessories"


CATEGORY_LABELS: Dict[str, str] = {
    CategoryKey.HEAD_COVER.value: "Head Cover",
    CategoryKey.HELMET.value: "Helmet",
    CategoryKey.TOPS.value: "Tops",
    CategoryKey.BASE_LAYER.value: "Base Layer",
    CategoryKey.MID_LAYER.value: "Mid Layer",
    CategoryKey.OUTER_LAYER.value: "Outer Layer",
    CategoryKey.BOTTOMS.value: "Bottoms",
    CategoryKey.SHOES.value: "Shoes",
    CategoryKey.BOOTS.value: "Boots",
    CategoryKey.SOCKS.value: "Socks",
    CategoryKey.GLOVES.value: "Gloves",
    CategoryKey.ARM_WARMERS.value: "Arm/Leg Warmers",
    CategoryKey.RAIN_GEAR.value: "Rain Gear",
    CategoryKey.EYEWEAR.value: "Eyewear",
    CategoryKey.GAITERS.value: "Gaiters",
    CategoryKey.HYDRATION.value: "Hydration",
    CategoryKey.PACK.value: "Pack",
    CategoryKey.ACCESSORIES.value: "Accessories",
}


@dataclass(frozen=True)
class CategoryConfig:
    key: str
    label: str
    options: Tuple[str, ...]
    ordinal: bool = False

    def find_option(self, value: str) -> Optional[str]:
        """Return the canonical spelling of ``value`` if it is a listed option."""
        needle = value.strip().lower()
        for option in self.options:
            if option.lower() == needle:
                return option
        return None

    def warmth_rank(self, value: str) -> Optional[int]:
        if not self.ordinal:
            return None
        option = self.find_option(value)
        return None if option is None else self.options.index(option)


def _cat(key: CategoryKey, options: Tuple[str, ...], ordinal: bool = False) -> CategoryConfig:
    return CategoryConfig(key=key.value, label=CATEGORY_LABELS[key.value], options=options, ordinal=ordinal)


_RUN_TOPS = ("Singlet", "T-shirt", "Long sleeve", "Long sleeve + vest", "Base layer + jacket")
_RUN_BOTTOMS = ("Short shorts", "Shorts", "Capris", "Tights", "Thermal tights")
_RUN_GLOVES = ("None", "Light gloves", "Heavy gloves", "Heavy mittens")
_RUN_RAIN = ("None", "Wind jacket", "Light rain jacket", "Waterproof jacket")

ACTIVITY_CATEGORIES: Dict[ActivityType, Tuple[CategoryConfig, ...]] = {
    ActivityType.RUNNING: (
        _cat(CategoryKey.HEAD_COVER, ("None", "Cap", "Headband", "Ear warmers", "Beanie", "Balaclava"), ordinal=True),
        _cat(CategoryKey.TOPS, _RUN_TOPS, ordinal=True),
        _cat(CategoryKey.BOTTOMS, _RUN_BOTTOMS, ordinal=True),
        _cat(CategoryKey.SHOES, ("Running shoes", "Waterproof running shoes")),
        _cat(CategoryKey.SOCKS, ("No-show", "Regular", "Wool"), ordinal=True),
        _cat(CategoryKey.GLOVES, _RUN_GLOVES, ordinal=True),
        _cat(CategoryKey.RAIN_GEAR, _RUN_RAIN, ordinal=True),
        _cat(CategoryKey.ACCESSORIES, ("None", "Sunglasses", "Neck gaiter", "Reflective vest", "Headlamp + reflective vest")),
    ),
    ActivityType.TRAIL_RUNNING: (
        _cat(CategoryKey.HEAD_COVER, ("None", "Cap", "Buff", "Beanie", "Balaclava"), ordinal=True),
        _cat(CategoryKey.TOPS, _RUN_TOPS, ordinal=True),
        _cat(CategoryKey.BOTTOMS, _RUN_BOTTOMS, ordinal=True),
        _cat(CategoryKey.SHOES, ("Light trail shoes", "Trail shoes", "Waterproof trail shoes")),
        _cat(CategoryKey.SOCKS, ("No-show", "Regular", "Wool"), ordinal=True),
        _cat(CategoryKey.GLOVES, _RUN_GLOVES, ordinal=True),
        _cat(CategoryKey.RAIN_GEAR, _RUN_RAIN, ordinal=True),
        _cat(CategoryKey.HYDRATION, ("None", "Handheld bottle", "Hydration vest")),
        _cat(CategoryKey.ACCESSORIES, ("None", "Sunglasses", "Neck gaiter", "Headlamp")),
    ),
    ActivityType.HIKING: (
        _cat(CategoryKey.HEAD_COVER, ("None", "Cap", "Sun hat", "Beanie", "Balaclava"), ordinal=True),
        _cat(CategoryKey.BASE_LAYER, ("T-shirt", "Long sleeve", "Merino base", "Expedition weight"), ordinal=True),
        _cat(CategoryKey.MID_LAYER, ("None", "Light fleece", "Fleece", "Heavy puffy"), ordinal=True),
        _cat(CategoryKey.OUTER_LAYER, ("None", "Wind jacket", "Rain jacket", "Softshell", "Hardshell", "Insulated jacket"), ordinal=True),
        _cat(CategoryKey.BOTTOMS, ("Shorts", "Convertible pants", "Hiking pants", "Rain pants", "Softshell pants", "Insulated pants"), ordinal=True),
        _cat(CategoryKey.SHOES, ("Trail runners", "Hiking shoes", "Hiking boots", "Waterproof boots")),
        _cat(CategoryKey.SOCKS, ("Light hiking", "Hiking socks", "Heavy wool"), ordinal=True),
        _cat(CategoryKey.GLOVES, ("None", "Light gloves", "Insulated gloves"), ordinal=True),
        _cat(CategoryKey.PACK, ("Waist pack", "Daypack (20L)", "Daypack (30L)")),
        _cat(CategoryKey.ACCESSORIES, ("None", "Sunglasses", "Trekking poles", "Headlamp")),
    ),
    ActivityType.WALKING: (
        _cat(CategoryKey.HEAD_COVER, ("None", "Cap", "Sun hat", "Ear warmers", "Beanie"), ordinal=True),
        _cat(CategoryKey.TOPS, ("T-shirt", "Long sleeve", "Sweater", "Fleece"), ordinal=True),
        _cat(CategoryKey.OUTER_LAYER, ("None", "Light jacket", "Rain jacket", "Down jacket", "Winter coat"), ordinal=True),
        _cat(CategoryKey.BOTTOMS, ("Shorts", "Casual pants", "Fleece-lined leggings", "Insulated pants"), ordinal=True),
        _cat(CategoryKey.SHOES, ("Sandals", "Sneakers", "Walking shoes", "Boots", "Waterproof boots")),
        _cat(CategoryKey.SOCKS, ("No-show", "Regular", "Wool", "Thick"), ordinal=True),
        _cat(CategoryKey.GLOVES, ("None", "Light gloves", "Warm gloves"), ordinal=True),
        _cat(CategoryKey.ACCESSORIES, ("None", "Sunglasses", "Umbrella", "Scarf")),
    ),
    ActivityType.CYCLING: (
        _cat(CategoryKey.HELMET, ("Road helmet", "Helmet + thermal cap"), ordinal=True),
        _cat(CategoryKey.TOPS, ("Sleeveless jersey", "Short sleeve jersey", "Jersey + vest", "Long sleeve jersey", "Jersey + jacket", "Thermal jersey"), ordinal=True),
        _cat(CategoryKey.BOTTOMS, ("Shorts", "Bib shorts", "3/4 bibs", "Bib tights"), ordinal=True),
        _cat(CategoryKey.SHOES, ("Road shoes", "Shoe covers")),
        _cat(CategoryKey.SOCKS, ("No-show", "Cycling socks", "Wool socks", "Thermal socks"), ordinal=True),
        _cat(CategoryKey.GLOVES, ("None", "Fingerless", "Full finger light", "Thermal gloves", "Lobster gloves"), ordinal=True),
        _cat(CategoryKey.ARM_WARMERS, ("None", "Arm warmers", "Knee warmers", "Leg warmers", "Arm + leg warmers"), ordinal=True),
        _cat(CategoryKey.EYEWEAR, ("None", "Sunglasses", "Photochromic", "Clear glasses")),
        _cat(CategoryKey.RAIN_GEAR, ("None", "Wind vest", "Full rain kit"), ordinal=True),
        _cat(CategoryKey.ACCESSORIES, ("None", "Lights", "Lights + vest")),
    ),
    ActivityType.SNOWSHOEING: (
        _cat(CategoryKey.HEAD_COVER, ("None", "Fleece headband", "Beanie", "Balaclava"), ordinal=True),
        _cat(CategoryKey.BASE_LAYER, ("Light synthetic", "Merino base", "Heavy merino", "Expedition weight"), ordinal=True),
        _cat(CategoryKey.MID_LAYER, ("None", "Light fleece", "Fleece", "Heavy puffy"), ordinal=True),
        _cat(CategoryKey.OUTER_LAYER, ("None", "Wind jacket", "Softshell", "Hardshell", "Insulated jacket"), ordinal=True),
        _cat(CategoryKey.BOTTOMS, ("Hiking pants", "Softshell pants", "Insulated pants", "Bibs"), ordinal=True),
        _cat(CategoryKey.BOOTS, ("Hiking boots", "Winter hiking boots", "Winter boots", "Pac boots")),
        _cat(CategoryKey.SOCKS, ("Wool", "Heavy wool", "Liner + wool"), ordinal=True),
        _cat(CategoryKey.GLOVES, ("None", "Light gloves", "Insulated gloves", "Heavy mittens", "Liner + mittens"), ordinal=True),
        _cat(CategoryKey.GAITERS, ("None", "Low gaiters", "Gaiters", "Full gaiters"), ordinal=True),
        _cat(CategoryKey.ACCESSORIES, ("None", "Poles", "Poles + sunglasses", "Poles + goggles", "Headlamp + poles")),
    ),
    ActivityType.CROSS_COUNTRY_SKIING: (
        _cat(CategoryKey.HEAD_COVER, ("None", "Headband", "Light beanie", "Beanie", "Balaclava"), ordinal=True),
        _cat(CategoryKey.BASE_LAYER, ("Light synthetic", "Merino base"), ordinal=True),
        _cat(CategoryKey.TOPS, ("Race suit top", "Soft shell", "XC jacket", "Wind jacket + fleece"), ordinal=True),
        _cat(CategoryKey.BOTTOMS, ("Race suit tights", "XC pants", "Wind pants over tights"), ordinal=True),
        _cat(CategoryKey.BOOTS, ("Classic boots", "Skate boots", "Insulated boots")),
        _cat(CategoryKey.SOCKS, ("Thin socks", "XC socks", "Wool socks"), ordinal=True),
        _cat(CategoryKey.GLOVES, ("None", "Light gloves", "XC gloves", "Lobster mitts", "Heavy mittens"), ordinal=True),
        _cat(CategoryKey.EYEWEAR, ("None", "Sunglasses", "Clear glasses", "Goggles")),
        _cat(CategoryKey.ACCESSORIES, ("None", "Neck gaiter", "Neck gaiter + hand warmers", "Headlamp")),
    ),
}

# Categories that can meaningfully add or shed warmth, per activity.
LAYERING_CATEGORIES: Dict[ActivityType, FrozenSet[str]] = {
    ActivityType.RUNNING: frozenset({"tops", "headCover", "gloves", "bottoms"}),
    ActivityType.TRAIL_RUNNING: frozenset({"tops", "headCover", "gloves", "bottoms"}),
    ActivityType.CYCLING: frozenset({"tops", "gloves", "bottoms"}),
    ActivityType.WALKING: frozenset({"outerLayer"}),
    ActivityType.HIKING: frozenset({"midLayer", "outerLayer"}),
    ActivityType.SNOWSHOEING: frozenset({"midLayer", "outerLayer"}),
    ActivityType.CROSS_COUNTRY_SKIING: frozenset({"tops", "headCover", "gloves"}),
}


def get_categories(activity: ActivityType) -> Tuple[CategoryConfig, ...]:
    return ACTIVITY_CATEGORIES[activity]


def get_category(activity: ActivityType, key: str) -> Optional[CategoryConfig]:
    for cat in ACTIVITY_CATEGORIES[activity]:
        if cat.key == key:
            return cat
    return None


def category_keys(activity: ActivityType) -> Tuple[str, ...]:
    return tuple(cat.key for cat in ACTIVITY_CATEGORIES[activity])
