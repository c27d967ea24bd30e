"""
Safety overrides.

Rules that force clothing values regardless of what history voted for,
whenever a physical risk is present. They run in a fixed order and each
one is recorded (fired or not, and what it changed) for transparency:

1. extreme_cold    T_comfort <= -9.4C: no exposed tops/legs, head and hands covered
2. dangerous_cold  T_comfort <  -15C: full face cover, band-level gloves
3. extreme_heat    T_comfort >  29.4C: nothing heavier than the hot defaults
4. precipitation   rain now or inside the session window: rain gear
5. snow            precipitation at or below freezing: waterproof footwear
6. wind            > 10 mph in the cool/mild bands: wind protection
7. darkness        headlamp / lights, sunglasses removed
8. sunglasses      sunny daytime only, so never together with darkness

Every rule is idempotent and no later rule undoes an earlier one, so
running the engine over its own output changes nothing.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Set, Tuple

from core.logging import LoggerMixin
from recommendation.constants.activity_defaults import get_band_defaults
from recommendation.constants.clothing_categories import get_category
from recommendation.constants.thermal_params import (
    COLD_BANDS,
    DANGEROUS_COLD_C,
    EXTREME_COLD_C,
    EXTREME_HEAT_C,
    WINDY_MPS,
)
from recommendation.context import (
    ActivityLevel,
    ActivityType,
    ComfortBreakdown,
    Hazard,
    OverrideRecord,
    SessionDuration,
    TempBand,
    WeatherObservation,
)
from recommendation.warmth import compare_warmth, has_term

# ── Darkness ──────────────────────────────────────────────────────
TWILIGHT_BUFFER_MIN = 15
LONG_SESSION_MIN = 60
DAWN_HOUR = 6
DUSK_HOUR = 19

# ── Sun ───────────────────────────────────────────────────────────
CLEAR_SKY_MAX_CLOUD = 30
PARTLY_CLOUDY_MAX_CLOUD = 60
PARTLY_CLOUDY_MIN_UV = 3

# ── Precipitation lookahead (hours) ───────────────────────────────
SHORT_SESSION_LOOKAHEAD_H = 1.0
LONG_SESSION_LOOKAHEAD_H = 2.0

_EXPOSED_TERMS = ("t-shirt", "singlet", "tank", "short", "sleeveless")


def _is_long(activity_level: Optional[ActivityLevel]) -> bool:
    return activity_level is not None and activity_level.duration == SessionDuration.LONG


def _minutes(t: datetime) -> int:
    return t.hour * 60 + t.minute


def is_dark_outside(weather: WeatherObservation, activity_level: Optional[ActivityLevel] = None) -> bool:
    """
    Whether any part of the session falls outside daylight.

    Uses sunrise/sunset with a 15 minute twilight buffer when both are
    known, otherwise treats 19:00-06:00 as dark. Without an observation
    time there is nothing to go on and it is assumed light.
    """
    if weather.observed_at is None:
        return False
    start = _minutes(weather.observed_at)
    end = start + (LONG_SESSION_MIN if _is_long(activity_level) else 0)

    if weather.sunrise is not None and weather.sunset is not None:
        light_from = _minutes(weather.sunrise) + TWILIGHT_BUFFER_MIN
        light_until = _minutes(weather.sunset) - TWILIGHT_BUFFER_MIN
        return start < light_from or end > light_until

    return start < DAWN_HOUR * 60 or end >= DUSK_HOUR * 60


def is_sunny(weather: WeatherObservation, dark: bool) -> bool:
    if dark:
        return False
    cloud = weather.cloud_cover
    return cloud <= CLEAR_SKY_MAX_CLOUD or (
        cloud <= PARTLY_CLOUDY_MAX_CLOUD and weather.uv_index >= PARTLY_CLOUDY_MIN_UV
    )


def expects_precipitation(weather: WeatherObservation, activity_level: Optional[ActivityLevel] = None) -> bool:
    """Precipitation now, or forecast within the session window."""
    if weather.has_precipitation:
        return True
    lookahead = LONG_SESSION_LOOKAHEAD_H if _is_long(activity_level) else SHORT_SESSION_LOOKAHEAD_H
    return any(
        0 <= point.hours_ahead <= lookahead and point.precipitation_mm > 0
        for point in weather.forecast
    )


@dataclass(frozen=True)
class SafetyConditions:
    """Everything the rules look at, evaluated once per pass."""
    activity: ActivityType
    comfort_c: float
    band: TempBand
    wet: bool
    snow: bool
    windy: bool
    dark: bool
    sunny: bool


@dataclass(frozen=True)
class SafetyResult:
    clothing: Dict[str, str]
    overrides: Tuple[OverrideRecord, ...]
    hazards: FrozenSet[Hazard] = field(default_factory=frozenset)

    @property
    def fired(self) -> Tuple[str, ...]:
        return tuple(o.name for o in self.overrides if o.fired)


class _Edit:
    """Working copy of an outfit that records what was forced."""

    def __init__(self, activity: ActivityType, outfit: Mapping[str, str]):
        self.activity = activity
        self.outfit = dict(outfit)
        self.changes: Dict[str, str] = {}
        # Keys some rule in this pass has decided, changed or not.
        self.claimed: Set[str] = set()

    def has(self, key: str) -> bool:
        return get_category(self.activity, key) is not None

    def get(self, key: str) -> str:
        return self.outfit.get(key) or "None"

    def is_none(self, key: str) -> bool:
        return self.get(key).lower() == "none"

    def set(self, key: str, value: str) -> None:
        if not self.has(key):
            return
        self.claimed.add(key)
        if self.get(key).lower() != value.lower():
            self.outfit[key] = value
            self.changes[key] = value

    def raise_to(self, key: str, minimum: str) -> None:
        """Replace the value when it is lighter than ``minimum``."""
        if self.has(key) and compare_warmth(get_category(self.activity, key), self.get(key), minimum) < 0:
            self.set(key, minimum)

    def lower_to(self, key: str, maximum: str) -> None:
        """Replace the value when it is heavier than ``maximum``."""
        if self.has(key) and compare_warmth(get_category(self.activity, key), self.get(key), maximum) > 0:
            self.set(key, maximum)


# ── Rules ─────────────────────────────────────────────────────────
# Each takes the working outfit and the conditions and returns whether
# its condition held. Changes are captured by the _Edit.

def _extreme_cold(edit: _Edit, cond: SafetyConditions) -> bool:
    if cond.comfort_c > EXTREME_COLD_C:
        return False
    defaults = get_band_defaults(cond.activity, cond.band)
    for key in ("tops", "baseLayer", "bottoms"):
        if edit.has(key) and has_term(edit.get(key), _EXPOSED_TERMS):
            edit.set(key, defaults[key])
    for key in ("headCover", "gloves", "armWarmers"):
        if edit.has(key) and edit.is_none(key):
            edit.set(key, defaults[key])
    return True


def _dangerous_cold(edit: _Edit, cond: SafetyConditions) -> bool:
    if cond.comfort_c >= DANGEROUS_COLD_C:
        return False
    head = get_category(cond.activity, "headCover")
    if head is not None and head.find_option("Balaclava"):
        edit.set("headCover", "Balaclava")
    if edit.has("gloves"):
        edit.raise_to("gloves", get_band_defaults(cond.activity, cond.band)["gloves"])
    return True


def _extreme_heat(edit: _Edit, cond: SafetyConditions) -> bool:
    if cond.comfort_c <= EXTREME_HEAT_C:
        return False
    hot = get_band_defaults(cond.activity, TempBand.HOT)
    for key in ("tops", "baseLayer", "bottoms", "headCover", "socks"):
        if key in hot:
            edit.lower_to(key, hot[key])
    for key in ("midLayer", "outerLayer", "gloves", "armWarmers"):
        edit.set(key, "None")
    return True


def _precipitation(edit: _Edit, cond: SafetyConditions) -> bool:
    if not cond.wet:
        return False
    activity = cond.activity
    if activity in (ActivityType.RUNNING, ActivityType.TRAIL_RUNNING):
        edit.set("rainGear", "Waterproof jacket" if cond.band in COLD_BANDS else "Light rain jacket")
    elif activity == ActivityType.HIKING:
        if edit.get("outerLayer") not in ("Rain jacket", "Hardshell", "Insulated jacket"):
            edit.set("outerLayer", "Rain jacket")
        if edit.get("bottoms") not in ("Rain pants", "Insulated pants", "Softshell pants"):
            edit.set("bottoms", "Rain pants")
    elif activity == ActivityType.WALKING:
        if edit.get("outerLayer") not in ("Rain jacket", "Winter coat"):
            edit.set("outerLayer", "Rain jacket")
        edit.set("accessories", "Umbrella")
    elif activity == ActivityType.CYCLING:
        edit.set("rainGear", "Full rain kit")
    return True


def _snow(edit: _Edit, cond: SafetyConditions) -> bool:
    if not cond.snow:
        return False
    if cond.activity in (ActivityType.HIKING, ActivityType.WALKING):
        edit.set("shoes", "Waterproof boots")
    return True


def _wind(edit: _Edit, cond: SafetyConditions) -> bool:
    if not cond.windy or cond.band not in (TempBand.COOL, TempBand.MILD):
        return False
    if cond.activity == ActivityType.RUNNING:
        edit.raise_to("tops", "Long sleeve")
    elif cond.activity == ActivityType.TRAIL_RUNNING:
        if edit.is_none("rainGear"):
            edit.set("rainGear", "Wind jacket")
    elif cond.activity == ActivityType.CYCLING and cond.band == TempBand.MILD:
        edit.raise_to("tops", "Jersey + vest")
    return True


_DARK_ITEMS: Dict[ActivityType, Dict[str, str]] = {
    ActivityType.RUNNING: {"accessories": "Headlamp + reflective vest"},
    ActivityType.TRAIL_RUNNING: {"accessories": "Headlamp"},
    ActivityType.HIKING: {"accessories": "Headlamp"},
    ActivityType.CYCLING: {"accessories": "Lights + vest", "eyewear": "Clear glasses"},
    ActivityType.SNOWSHOEING: {"accessories": "Headlamp + poles"},
    ActivityType.CROSS_COUNTRY_SKIING: {"accessories": "Headlamp"},
    ActivityType.WALKING: {},
}


def _darkness(edit: _Edit, cond: SafetyConditions) -> bool:
    if not cond.dark:
        return False
    for key, value in _DARK_ITEMS[cond.activity].items():
        edit.set(key, value)
    if edit.has("eyewear") and "sunglasses" in edit.get("eyewear").lower():
        edit.set("eyewear", "Clear glasses")
    if edit.has("accessories") and "sunglasses" in edit.get("accessories").lower():
        edit.set("accessories", "Poles" if cond.activity == ActivityType.SNOWSHOEING else "None")
    return True


def _sunglasses(edit: _Edit, cond: SafetyConditions) -> bool:
    if not cond.sunny:
        return False
    activity = cond.activity
    if activity == ActivityType.CYCLING:
        edit.set("eyewear", "Sunglasses")
    elif activity == ActivityType.CROSS_COUNTRY_SKIING:
        if "goggles" not in edit.get("eyewear").lower():
            edit.set("eyewear", "Sunglasses")
    elif activity == ActivityType.SNOWSHOEING:
        current = edit.get("accessories").lower()
        if "goggles" not in current and "sunglasses" not in current:
            edit.set("accessories", "Poles + sunglasses")
    elif "accessories" not in edit.claimed:
        # Rain gear such as an umbrella outranks sunglasses.
        edit.set("accessories", "Sunglasses")
    return True


Rule = Callable[[_Edit, SafetyConditions], bool]

RULES: Tuple[Tuple[str, Rule, Hazard], ...] = (
    ("extreme_cold", _extreme_cold, Hazard.EXTREME_COLD),
    ("dangerous_cold", _dangerous_cold, Hazard.DANGEROUS_COLD),
    ("extreme_heat", _extreme_heat, Hazard.EXTREME_HEAT),
    ("precipitation", _precipitation, Hazard.WET),
    ("snow", _snow, Hazard.SNOW),
    ("wind", _wind, Hazard.WIND),
    ("darkness", _darkness, Hazard.DARK),
    ("sunglasses", _sunglasses, Hazard.SUN),
)

RULE_NAMES = tuple(name for name, _, _ in RULES)

_WARN_HAZARDS = frozenset({Hazard.DANGEROUS_COLD, Hazard.EXTREME_HEAT})


class SafetyOverrideEngine(LoggerMixin):
    """
    Applies the safety rules to an outfit.

    Rules named in ``disabled`` are still reported, as not fired.
    """

    def __init__(self, disabled: Iterable[str] = ()):
        unknown = set(disabled) - set(RULE_NAMES)
        if unknown:
            raise ValueError(f"Unknown safety rules: {sorted(unknown)}")
        self.disabled = frozenset(disabled)

    def conditions(
        self,
        weather: WeatherObservation,
        activity: ActivityType,
        comfort: ComfortBreakdown,
        activity_level: Optional[ActivityLevel] = None,
    ) -> SafetyConditions:
        wet = expects_precipitation(weather, activity_level)
        dark = is_dark_outside(weather, activity_level)
        return SafetyConditions(
            activity=activity,
            comfort_c=comfort.comfort_temp_c,
            band=comfort.band,
            wet=wet,
            snow=wet and weather.temperature_c <= 0,
            windy=weather.wind_speed_mps > WINDY_MPS,
            dark=dark,
            sunny=is_sunny(weather, dark),
        )

    def apply(
        self,
        clothing: Mapping[str, str],
        weather: WeatherObservation,
        activity: ActivityType,
        comfort: ComfortBreakdown,
        activity_level: Optional[ActivityLevel] = None,
        log_hazards: bool = True,
    ) -> SafetyResult:
        cond = self.conditions(weather, activity, comfort, activity_level)
        edit = _Edit(activity, clothing)

        records = []
        hazards = set()
        changed = set()
        for name, rule, hazard in RULES:
            if name in self.disabled:
                records.append(OverrideRecord(name=name, fired=False))
                continue
            edit.changes = {}
            fired = rule(edit, cond)
            records.append(OverrideRecord(name=name, fired=fired, changes=dict(edit.changes)))
            changed.update(edit.changes)
            if fired:
                hazards.add(hazard)

        if not log_hazards:
            return SafetyResult(clothing=edit.outfit, overrides=tuple(records), hazards=frozenset(hazards))

        for hazard in sorted(hazards & _WARN_HAZARDS, key=lambda h: h.value):
            self.logger.warning(
                "safety_hazard",
                hazard=hazard.value,
                activity=activity.value,
                comfort_c=round(comfort.comfort_temp_c, 1),
            )
        self.logger.debug(
            "safety_overrides_applied",
            activity=activity.value,
            fired=[r.name for r in records if r.fired],
            changed=sorted(changed),
        )
        return SafetyResult(clothing=edit.outfit, overrides=tuple(records), hazards=frozenset(hazards))
