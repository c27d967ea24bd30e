"""
Temperature-banded default outfits, one table per activity.

Keyed by the comfort band (see ``thermal_params.BAND_UPPER_BOUNDS_F``),
so the defaults already account for activity heat, feels-like and the
user's thermal preference. Every value is a listed option of the
activity's category configuration.
"""

from typing import Dict

from recommendation.context import ActivityType, TempBand

BandDefaults = Dict[TempBand, Dict[str, str]]


def _outfit(keys, *values) -> Dict[str, str]:
    return dict(zip(keys, values))


# ── Running ───────────────────────────────────────────────────────

_RUN = ("headCover", "tops", "bottoms", "shoes", "socks", "gloves", "rainGear", "accessories")

_RUNNING: BandDefaults = {
    TempBand.EXTREME_COLD: _outfit(_RUN, "Balaclava", "Base layer + jacket", "Thermal tights", "Running shoes", "Wool", "Heavy mittens", "None", "Neck gaiter"),
    TempBand.FREEZING: _outfit(_RUN, "Balaclava", "Base layer + jacket", "Tights", "Running shoes", "Wool", "Heavy gloves", "None", "None"),
    TempBand.VERY_COLD: _outfit(_RUN, "Beanie", "Base layer + jacket", "Tights", "Running shoes", "Wool", "Heavy gloves", "None", "None"),
    TempBand.COLD: _outfit(_RUN, "Beanie", "Long sleeve", "Tights", "Running shoes", "Wool", "Light gloves", "None", "None"),
    TempBand.COOL: _outfit(_RUN, "Headband", "Long sleeve", "Tights", "Running shoes", "Regular", "None", "None", "None"),
    TempBand.MILD: _outfit(_RUN, "None", "T-shirt", "Shorts", "Running shoes", "Regular", "None", "None", "None"),
    TempBand.WARM: _outfit(_RUN, "Cap", "T-shirt", "Shorts", "Running shoes", "No-show", "None", "None", "None"),
    TempBand.HOT: _outfit(_RUN, "Cap", "Singlet", "Short shorts", "Running shoes", "No-show", "None", "None", "None"),
}

# ── Trail running ─────────────────────────────────────────────────

_TRAIL = ("headCover", "tops", "bottoms", "shoes", "socks", "gloves", "rainGear", "hydration", "accessories")

_TRAIL_RUNNING: BandDefaults = {
    TempBand.EXTREME_COLD: _outfit(_TRAIL, "Balaclava", "Base layer + jacket", "Thermal tights", "Waterproof trail shoes", "Wool", "Heavy mittens", "Wind jacket", "Hydration vest", "Neck gaiter"),
    TempBand.FREEZING: _outfit(_TRAIL, "Balaclava", "Base layer + jacket", "Tights", "Trail shoes", "Wool", "Heavy gloves", "Wind jacket", "Hydration vest", "None"),
    TempBand.VERY_COLD: _outfit(_TRAIL, "Beanie", "Base layer + jacket", "Tights", "Trail shoes", "Wool", "Heavy gloves", "Wind jacket", "Hydration vest", "None"),
    TempBand.COLD: _outfit(_TRAIL, "Beanie", "Long sleeve", "Tights", "Trail shoes", "Wool", "Light gloves", "None", "Hydration vest", "None"),
    TempBand.COOL: _outfit(_TRAIL, "Buff", "Long sleeve", "Tights", "Trail shoes", "Regular", "None", "None", "Hydration vest", "None"),
    TempBand.MILD: _outfit(_TRAIL, "Cap", "T-shirt", "Shorts", "Trail shoes", "Regular", "None", "None", "Handheld bottle", "None"),
    TempBand.WARM: _outfit(_TRAIL, "Cap", "T-shirt", "Shorts", "Trail shoes", "No-show", "None", "None", "Hydration vest", "None"),
    TempBand.HOT: _outfit(_TRAIL, "Cap", "Singlet", "Short shorts", "Light trail shoes", "No-show", "None", "None", "Hydration vest", "None"),
}

# ── Hiking ────────────────────────────────────────────────────────

_HIKE = ("headCover", "baseLayer", "midLayer", "outerLayer", "bottoms", "shoes", "socks", "gloves", "pack", "accessories")

_HIKING: BandDefaults = {
    TempBand.EXTREME_COLD: _outfit(_HIKE, "Balaclava", "Expedition weight", "Heavy puffy", "Insulated jacket", "Insulated pants", "Waterproof boots", "Heavy wool", "Insulated gloves", "Daypack (30L)", "None"),
    TempBand.FREEZING: _outfit(_HIKE, "Balaclava", "Merino base", "Heavy puffy", "Insulated jacket", "Insulated pants", "Waterproof boots", "Heavy wool", "Insulated gloves", "Daypack (30L)", "None"),
    TempBand.VERY_COLD: _outfit(_HIKE, "Beanie", "Merino base", "Heavy puffy", "Hardshell", "Insulated pants", "Waterproof boots", "Heavy wool", "Insulated gloves", "Daypack (30L)", "Trekking poles"),
    TempBand.COLD: _outfit(_HIKE, "Beanie", "Merino base", "Fleece", "Wind jacket", "Softshell pants", "Hiking boots", "Hiking socks", "Light gloves", "Daypack (30L)", "Trekking poles"),
    TempBand.COOL: _outfit(_HIKE, "Cap", "Long sleeve", "Fleece", "None", "Hiking pants", "Hiking boots", "Hiking socks", "None", "Daypack (20L)", "Trekking poles"),
    TempBand.MILD: _outfit(_HIKE, "Cap", "T-shirt", "None", "None", "Hiking pants", "Hiking shoes", "Light hiking", "None", "Daypack (20L)", "None"),
    TempBand.WARM: _outfit(_HIKE, "Sun hat", "T-shirt", "None", "None", "Convertible pants", "Trail runners", "Light hiking", "None", "Daypack (20L)", "None"),
    TempBand.HOT: _outfit(_HIKE, "Sun hat", "T-shirt", "None", "None", "Shorts", "Trail runners", "Light hiking", "None", "Waist pack", "None"),
}

# ── Walking ───────────────────────────────────────────────────────

_WALK = ("headCover", "tops", "outerLayer", "bottoms", "shoes", "socks", "gloves", "accessories")

_WALKING: BandDefaults = {
    TempBand.EXTREME_COLD: _outfit(_WALK, "Beanie", "Fleece", "Winter coat", "Insulated pants", "Waterproof boots", "Thick", "Warm gloves", "Scarf"),
    TempBand.FREEZING: _outfit(_WALK, "Beanie", "Fleece", "Winter coat", "Insulated pants", "Boots", "Thick", "Warm gloves", "Scarf"),
    TempBand.VERY_COLD: _outfit(_WALK, "Beanie", "Fleece", "Winter coat", "Fleece-lined leggings", "Boots", "Thick", "Warm gloves", "Scarf"),
    TempBand.COLD: _outfit(_WALK, "Beanie", "Sweater", "Down jacket", "Fleece-lined leggings", "Boots", "Wool", "Light gloves", "None"),
    TempBand.COOL: _outfit(_WALK, "Ear warmers", "Long sleeve", "Light jacket", "Casual pants", "Walking shoes", "Regular", "None", "None"),
    TempBand.MILD: _outfit(_WALK, "None", "T-shirt", "Light jacket", "Casual pants", "Sneakers", "Regular", "None", "None"),
    TempBand.WARM: _outfit(_WALK, "Cap", "T-shirt", "None", "Shorts", "Sneakers", "No-show", "None", "None"),
    TempBand.HOT: _outfit(_WALK, "Sun hat", "T-shirt", "None", "Shorts", "Sandals", "No-show", "None", "None"),
}

# ── Cycling ───────────────────────────────────────────────────────

_CYCLE = ("helmet", "tops", "bottoms", "shoes", "socks", "gloves", "armWarmers", "eyewear", "rainGear", "accessories")

_CYCLING: BandDefaults = {
    TempBand.EXTREME_COLD: _outfit(_CYCLE, "Helmet + thermal cap", "Thermal jersey", "Bib tights", "Shoe covers", "Thermal socks", "Lobster gloves", "Arm + leg warmers", "Clear glasses", "None", "Lights"),
    TempBand.FREEZING: _outfit(_CYCLE, "Road helmet", "Thermal jersey", "Bib tights", "Shoe covers", "Thermal socks", "Lobster gloves", "Arm + leg warmers", "Clear glasses", "None", "Lights"),
    TempBand.VERY_COLD: _outfit(_CYCLE, "Road helmet", "Jersey + jacket", "Bib tights", "Shoe covers", "Thermal socks", "Lobster gloves", "Arm + leg warmers", "Clear glasses", "None", "Lights"),
    TempBand.COLD: _outfit(_CYCLE, "Road helmet", "Jersey + jacket", "Bib tights", "Road shoes", "Wool socks", "Thermal gloves", "Leg warmers", "Photochromic", "None", "None"),
    TempBand.COOL: _outfit(_CYCLE, "Road helmet", "Long sleeve jersey", "3/4 bibs", "Road shoes", "Cycling socks", "Full finger light", "Knee warmers", "Photochromic", "None", "None"),
    TempBand.MILD: _outfit(_CYCLE, "Road helmet", "Short sleeve jersey", "Bib shorts", "Road shoes", "Cycling socks", "Fingerless", "None", "Sunglasses", "None", "None"),
    TempBand.WARM: _outfit(_CYCLE, "Road helmet", "Short sleeve jersey", "Bib shorts", "Road shoes", "Cycling socks", "None", "None", "Sunglasses", "None", "None"),
    TempBand.HOT: _outfit(_CYCLE, "Road helmet", "Sleeveless jersey", "Shorts", "Road shoes", "No-show", "None", "None", "Sunglasses", "None", "None"),
}

# ── Snowshoeing ───────────────────────────────────────────────────
# Mild and warmer bands are unlikely for snowshoeing but still defined.

_SNOW = ("headCover", "baseLayer", "midLayer", "outerLayer", "bottoms", "boots", "socks", "gloves", "gaiters", "accessories")

_SNOWSHOEING: BandDefaults = {
    TempBand.EXTREME_COLD: _outfit(_SNOW, "Balaclava", "Expedition weight", "Heavy puffy", "Insulated jacket", "Bibs", "Pac boots", "Liner + wool", "Liner + mittens", "Full gaiters", "Poles + goggles"),
    TempBand.FREEZING: _outfit(_SNOW, "Balaclava", "Expedition weight", "Heavy puffy", "Insulated jacket", "Bibs", "Pac boots", "Liner + wool", "Liner + mittens", "Full gaiters", "Poles + goggles"),
    TempBand.VERY_COLD: _outfit(_SNOW, "Balaclava", "Heavy merino", "Heavy puffy", "Hardshell", "Insulated pants", "Winter boots", "Heavy wool", "Heavy mittens", "Gaiters", "Poles + goggles"),
    TempBand.COLD: _outfit(_SNOW, "Beanie", "Merino base", "Fleece", "Softshell", "Softshell pants", "Winter boots", "Heavy wool", "Insulated gloves", "Gaiters", "Poles + sunglasses"),
    TempBand.COOL: _outfit(_SNOW, "Fleece headband", "Light synthetic", "Light fleece", "Wind jacket", "Hiking pants", "Winter hiking boots", "Wool", "Light gloves", "Low gaiters", "Poles + sunglasses"),
    TempBand.MILD: _outfit(_SNOW, "Fleece headband", "Light synthetic", "Light fleece", "None", "Hiking pants", "Hiking boots", "Wool", "None", "Low gaiters", "Poles"),
    TempBand.WARM: _outfit(_SNOW, "Fleece headband", "Light synthetic", "None", "None", "Hiking pants", "Hiking boots", "Wool", "None", "None", "Poles"),
    TempBand.HOT: _outfit(_SNOW, "Fleece headband", "Light synthetic", "None", "None", "Hiking pants", "Hiking boots", "Wool", "None", "None", "Poles"),
}

# ── Cross-country skiing ──────────────────────────────────────────

_XC = ("headCover", "baseLayer", "tops", "bottoms", "boots", "socks", "gloves", "eyewear", "accessories")

_CROSS_COUNTRY_SKIING: BandDefaults = {
    TempBand.EXTREME_COLD: _outfit(_XC, "Balaclava", "Merino base", "Wind jacket + fleece", "Wind pants over tights", "Insulated boots", "Wool socks", "Heavy mittens", "Goggles", "Neck gaiter + hand warmers"),
    TempBand.FREEZING: _outfit(_XC, "Balaclava", "Merino base", "Wind jacket + fleece", "Wind pants over tights", "Insulated boots", "Wool socks", "Heavy mittens", "Goggles", "Neck gaiter + hand warmers"),
    TempBand.VERY_COLD: _outfit(_XC, "Beanie", "Merino base", "XC jacket", "XC pants", "Classic boots", "Wool socks", "Lobster mitts", "Goggles", "Neck gaiter"),
    TempBand.COLD: _outfit(_XC, "Light beanie", "Merino base", "XC jacket", "XC pants", "Classic boots", "XC socks", "XC gloves", "Sunglasses", "Neck gaiter"),
    TempBand.COOL: _outfit(_XC, "Headband", "Light synthetic", "XC jacket", "XC pants", "Classic boots", "XC socks", "Light gloves", "Sunglasses", "None"),
    TempBand.MILD: _outfit(_XC, "Headband", "Light synthetic", "Soft shell", "Race suit tights", "Classic boots", "Thin socks", "Light gloves", "Sunglasses", "None"),
    TempBand.WARM: _outfit(_XC, "Headband", "Light synthetic", "Race suit top", "Race suit tights", "Classic boots", "Thin socks", "None", "Sunglasses", "None"),
    TempBand.HOT: _outfit(_XC, "Headband", "Light synthetic", "Race suit top", "Race suit tights", "Classic boots", "Thin socks", "None", "Sunglasses", "None"),
}


ACTIVITY_TEMP_DEFAULTS: Dict[ActivityType, BandDefaults] = {
    ActivityType.RUNNING: _RUNNING,
    ActivityType.TRAIL_RUNNING: _TRAIL_RUNNING,
    ActivityType.HIKING: _HIKING,
    ActivityType.WALKING: _WALKING,
    ActivityType.CYCLING: _CYCLING,
    ActivityType.SNOWSHOEING: _SNOWSHOEING,
    ActivityType.CROSS_COUNTRY_SKIING: _CROSS_COUNTRY_SKIING,
}


def get_band_defaults(activity: ActivityType, band: TempBand) -> Dict[str, str]:
    """Return a fresh copy of the default outfit for ``band``."""
    return dict(ACTIVITY_TEMP_DEFAULTS[activity][band])
