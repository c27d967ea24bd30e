"""
Tests for the safety override rules.

Covers:
- Cold and heat thresholds (inclusive/exclusive edges)
- Rain, snow and wind gear
- Darkness and sun detection, and that they never fire together
- Idempotency: re-applying the rules to their own output is a no-op
- Disabled rules and hazard logging
"""

from datetime import datetime

import pytest
from structlog.testing import capture_logs

from recommendation.comfort import band_for
from recommendation.constants.activity_defaults import get_band_defaults
from recommendation.context import (
    ActivityLevel,
    ActivityType,
    ComfortBreakdown,
    ForecastPoint,
    Hazard,
    SessionDuration,
    WeatherObservation,
)
from recommendation.safety import (
    RULE_NAMES,
    SafetyOverrideEngine,
    expects_precipitation,
    is_dark_outside,
    is_sunny,
)

RUN = ActivityType.RUNNING
LONG = ActivityLevel(duration=SessionDuration.LONG)


# =====================================================================
# Helpers
# =====================================================================

def _comfort(comfort_c: float, activity: ActivityType = RUN) -> ComfortBreakdown:
    return ComfortBreakdown(
        activity=activity,
        actual_temp_c=comfort_c,
        feels_like_temp_c=comfort_c,
        delta=0.0,
        B=0.0,
        w_delta=0.0,
        thermal_offset=0.0,
        activity_level_offset=0.0,
        comfort_temp_c=comfort_c,
        comfort_temp_f=comfort_c * 9 / 5 + 32,
        band=band_for(comfort_c * 9 / 5 + 32),
    )


def _weather(temp=10.0, **kw) -> WeatherObservation:
    kw.setdefault("cloud_cover", 100)
    return WeatherObservation(temperature_c=temp, **kw)


def _fired(result):
    return set(result.fired)


RUN_OUTFIT = {
    "headCover": "None",
    "tops": "T-shirt",
    "bottoms": "Shorts",
    "shoes": "Running shoes",
    "socks": "Regular",
    "gloves": "None",
    "rainGear": "None",
    "accessories": "None",
}


# =====================================================================
# Cold and heat
# =====================================================================

class TestColdRules:

    def test_extreme_cold_boundary_inclusive(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(-15.0), RUN, _comfort(-9.4))
        assert _fired(result) == {"extreme_cold"}
        assert result.clothing["tops"] == "Base layer + jacket"
        assert result.clothing["bottoms"] == "Tights"
        assert result.clothing["headCover"] == "Beanie"
        assert result.clothing["gloves"] == "Heavy gloves"

    def test_just_above_extreme_cold(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(-15.0), RUN, _comfort(-9.39))
        assert result.fired == ()
        assert result.clothing == RUN_OUTFIT

    def test_dangerous_cold(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(-22.0), RUN, _comfort(-15.01))
        assert {"extreme_cold", "dangerous_cold"} <= _fired(result)
        assert result.clothing["headCover"] == "Balaclava"
        assert result.clothing["gloves"] == "Heavy mittens"
        assert Hazard.DANGEROUS_COLD in result.hazards

    def test_dangerous_cold_boundary_exclusive(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(-22.0), RUN, _comfort(-15.0))
        assert "dangerous_cold" not in _fired(result)
        assert "extreme_cold" in _fired(result)

    def test_covered_items_left_alone(self, safety):
        outfit = dict(RUN_OUTFIT, tops="Long sleeve + vest", bottoms="Thermal tights", headCover="Ear warmers", gloves="Light gloves")
        result = safety.apply(outfit, _weather(-15.0), RUN, _comfort(-10.0))
        assert result.clothing["tops"] == "Long sleeve + vest"
        assert result.clothing["headCover"] == "Ear warmers"
        assert result.clothing["gloves"] == "Light gloves"

    def test_dangerous_cold_warning_logged(self, safety):
        with capture_logs() as logs:
            safety.apply(RUN_OUTFIT, _weather(-25.0), RUN, _comfort(-18.0))
        warnings = [e for e in logs if e["log_level"] == "warning"]
        assert [e["hazard"] for e in warnings] == ["dangerous_cold"]
        assert warnings[0]["event"] == "safety_hazard"

    def test_hazard_logging_can_be_silenced(self, safety):
        with capture_logs() as logs:
            safety.apply(RUN_OUTFIT, _weather(-25.0), RUN, _comfort(-18.0), log_hazards=False)
        assert logs == []


class TestHeatRule:

    def test_boundary_exclusive(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(25.0), RUN, _comfort(29.4))
        assert "extreme_heat" not in _fired(result)

    def test_strips_heavy_items(self, safety):
        outfit = dict(RUN_OUTFIT, headCover="Beanie", tops="Long sleeve", bottoms="Tights", socks="Wool", gloves="Light gloves")
        result = safety.apply(outfit, _weather(25.0), RUN, _comfort(29.5))
        assert "extreme_heat" in _fired(result)
        assert result.clothing["tops"] == "Singlet"
        assert result.clothing["bottoms"] == "Short shorts"
        assert result.clothing["headCover"] == "Cap"
        assert result.clothing["socks"] == "No-show"
        assert result.clothing["gloves"] == "None"

    def test_walking_layers_removed(self, safety):
        outfit = get_band_defaults(ActivityType.WALKING, band_for(50.0))
        outfit["outerLayer"] = "Light jacket"
        result = safety.apply(outfit, _weather(28.0), ActivityType.WALKING, _comfort(31.0, ActivityType.WALKING))
        assert result.clothing["outerLayer"] == "None"
        assert result.clothing["tops"] == "T-shirt"


# =====================================================================
# Weather gear
# =====================================================================

class TestPrecipitation:

    def test_running_cool_band(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(4.0, precipitation_mm=1.0), RUN, _comfort(8.0))
        assert result.clothing["rainGear"] == "Light rain jacket"
        assert Hazard.WET in result.hazards

    def test_running_cold_band(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(-2.0, precipitation_mm=1.0), RUN, _comfort(2.0))
        assert result.clothing["rainGear"] == "Waterproof jacket"

    def test_forecast_inside_window(self):
        weather = _weather(forecast=(ForecastPoint(hours_ahead=1.5, precipitation_mm=0.4),))
        assert expects_precipitation(weather, LONG) is True
        assert expects_precipitation(weather, None) is False

    def test_forecast_dry(self):
        weather = _weather(forecast=(ForecastPoint(hours_ahead=0.5, precipitation_mm=0.0),))
        assert expects_precipitation(weather) is False

    def test_hiking_keeps_waterproof_layers(self, safety):
        hiking = ActivityType.HIKING
        outfit = get_band_defaults(hiking, band_for(50.0))
        outfit.update(outerLayer="Hardshell", bottoms="Insulated pants")
        result = safety.apply(outfit, _weather(5.0, precipitation_mm=2.0), hiking, _comfort(10.0, hiking))
        assert result.clothing["outerLayer"] == "Hardshell"
        assert result.clothing["bottoms"] == "Insulated pants"

    def test_hiking_keeps_insulated_jacket(self, safety):
        hiking = ActivityType.HIKING
        outfit = get_band_defaults(hiking, band_for(10.0))
        assert outfit["outerLayer"] == "Insulated jacket"
        result = safety.apply(outfit, _weather(-3.0, precipitation_mm=1.0), hiking, _comfort(-12.0, hiking))
        assert result.clothing["outerLayer"] == "Insulated jacket"
        assert result.clothing["bottoms"] == "Insulated pants"

    def test_hiking_adds_rain_layers(self, safety):
        hiking = ActivityType.HIKING
        outfit = get_band_defaults(hiking, band_for(50.0))
        result = safety.apply(outfit, _weather(5.0, precipitation_mm=2.0), hiking, _comfort(10.0, hiking))
        assert result.clothing["outerLayer"] == "Rain jacket"
        assert result.clothing["bottoms"] == "Rain pants"

    def test_walking_umbrella(self, safety):
        walking = ActivityType.WALKING
        outfit = get_band_defaults(walking, band_for(60.0))
        result = safety.apply(outfit, _weather(15.0, precipitation_mm=0.5), walking, _comfort(15.0, walking))
        assert result.clothing["outerLayer"] == "Rain jacket"
        assert result.clothing["accessories"] == "Umbrella"

    def test_cycling_rain_kit(self, safety):
        cycling = ActivityType.CYCLING
        outfit = get_band_defaults(cycling, band_for(60.0))
        result = safety.apply(outfit, _weather(12.0, precipitation_mm=0.5), cycling, _comfort(16.0, cycling))
        assert result.clothing["rainGear"] == "Full rain kit"


class TestSnow:

    def test_walking_boots(self, safety):
        walking = ActivityType.WALKING
        outfit = get_band_defaults(walking, band_for(30.0))
        result = safety.apply(outfit, _weather(-2.0, precipitation_mm=1.0), walking, _comfort(-2.0, walking))
        assert result.clothing["shoes"] == "Waterproof boots"
        assert {Hazard.SNOW, Hazard.WET} <= result.hazards

    def test_above_freezing_is_rain(self, safety):
        walking = ActivityType.WALKING
        outfit = get_band_defaults(walking, band_for(40.0))
        result = safety.apply(outfit, _weather(1.0, precipitation_mm=1.0), walking, _comfort(1.0, walking))
        assert "snow" not in _fired(result)


class TestWind:

    def test_running_cool_band(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(6.0, wind_speed_mps=5.0), RUN, _comfort(12.0))
        assert "wind" in _fired(result)
        assert result.clothing["tops"] == "Long sleeve"

    def test_threshold_exclusive(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(6.0, wind_speed_mps=4.47), RUN, _comfort(12.0))
        assert "wind" not in _fired(result)

    def test_warm_band_ignored(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(14.0, wind_speed_mps=8.0), RUN, _comfort(20.0))
        assert "wind" not in _fired(result)
        assert result.clothing["tops"] == "T-shirt"

    def test_trail_wind_jacket(self, safety):
        trail = ActivityType.TRAIL_RUNNING
        outfit = get_band_defaults(trail, band_for(50.0))
        result = safety.apply(outfit, _weather(6.0, wind_speed_mps=6.0), trail, _comfort(10.0, trail))
        assert result.clothing["rainGear"] == "Wind jacket"


# =====================================================================
# Light
# =====================================================================

class TestDarkness:

    def test_evening_without_sun_times(self):
        assert is_dark_outside(_weather(observed_at=datetime(2024, 3, 1, 21, 0))) is True
        assert is_dark_outside(_weather(observed_at=datetime(2024, 3, 1, 5, 59))) is True
        assert is_dark_outside(_weather(observed_at=datetime(2024, 3, 1, 12, 0))) is False

    def test_no_observation_time(self):
        assert is_dark_outside(_weather()) is False

    @pytest.mark.parametrize("hour,minute,dark", [
        (7, 10, True),
        (7, 15, False),
        (7, 20, False),
        (17, 45, False),
        (17, 50, True),
    ])
    def test_twilight_buffer(self, hour, minute, dark):
        weather = _weather(
            observed_at=datetime(2024, 3, 1, hour, minute),
            sunrise=datetime(2024, 3, 1, 7, 0),
            sunset=datetime(2024, 3, 1, 18, 0),
        )
        assert is_dark_outside(weather) is dark

    def test_long_session_runs_into_dusk(self):
        weather = _weather(
            observed_at=datetime(2024, 3, 1, 17, 0),
            sunrise=datetime(2024, 3, 1, 7, 0),
            sunset=datetime(2024, 3, 1, 18, 0),
        )
        assert is_dark_outside(weather) is False
        assert is_dark_outside(weather, LONG) is True

    def test_running_headlamp(self, safety):
        weather = _weather(observed_at=datetime(2024, 3, 1, 21, 0))
        outfit = dict(RUN_OUTFIT, accessories="Sunglasses")
        result = safety.apply(outfit, weather, RUN, _comfort(15.0))
        assert result.clothing["accessories"] == "Headlamp + reflective vest"
        assert "sunglasses" not in _fired(result)

    def test_cycling_eyewear(self, safety):
        cycling = ActivityType.CYCLING
        outfit = dict(get_band_defaults(cycling, band_for(60.0)), eyewear="Sunglasses")
        weather = _weather(observed_at=datetime(2024, 3, 1, 22, 0))
        result = safety.apply(outfit, weather, cycling, _comfort(16.0, cycling))
        assert result.clothing["eyewear"] == "Clear glasses"
        assert result.clothing["accessories"] == "Lights + vest"


class TestSunglasses:

    @pytest.mark.parametrize("cloud,uv,sunny", [
        (20, 0, True),
        (30, 0, True),
        (50, 2, False),
        (50, 3, True),
        (70, 10, False),
    ])
    def test_sunny_rule(self, cloud, uv, sunny):
        weather = _weather(cloud_cover=cloud, uv_index=uv)
        assert is_sunny(weather, dark=False) is sunny

    def test_never_sunny_in_the_dark(self):
        assert is_sunny(_weather(cloud_cover=0, uv_index=8), dark=True) is False

    def test_running_sunglasses(self, safety):
        weather = _weather(cloud_cover=10, observed_at=datetime(2024, 6, 1, 12, 0))
        result = safety.apply(RUN_OUTFIT, weather, RUN, _comfort(18.0))
        assert result.clothing["accessories"] == "Sunglasses"

    def test_running_replaces_accessory(self, safety):
        weather = _weather(cloud_cover=10)
        outfit = dict(RUN_OUTFIT, accessories="Neck gaiter")
        result = safety.apply(outfit, weather, RUN, _comfort(18.0))
        sun = next(o for o in result.overrides if o.name == "sunglasses")
        assert sun.fired is True
        assert sun.changes == {"accessories": "Sunglasses"}
        assert result.clothing["accessories"] == "Sunglasses"

    def test_hiking_cool_band_sunglasses(self, safety):
        hiking = ActivityType.HIKING
        outfit = get_band_defaults(hiking, band_for(50.0))
        assert outfit["accessories"] == "Trekking poles"
        weather = _weather(8.0, cloud_cover=0, uv_index=6, observed_at=datetime(2024, 6, 1, 12, 0))
        result = safety.apply(outfit, weather, hiking, _comfort(10.0, hiking))
        assert result.clothing["accessories"] == "Sunglasses"

    def test_umbrella_outranks_sunglasses(self, safety):
        walking = ActivityType.WALKING
        outfit = get_band_defaults(walking, band_for(60.0))
        weather = _weather(15.0, precipitation_mm=0.5, cloud_cover=10, observed_at=datetime(2024, 6, 1, 12, 0))
        once = safety.apply(outfit, weather, walking, _comfort(15.0, walking))
        assert "sunglasses" in _fired(once)
        assert once.clothing["accessories"] == "Umbrella"

        twice = safety.apply(once.clothing, weather, walking, _comfort(15.0, walking))
        assert twice.clothing["accessories"] == "Umbrella"

    def test_skiing_keeps_goggles(self, safety):
        xc = ActivityType.CROSS_COUNTRY_SKIING
        outfit = get_band_defaults(xc, band_for(10.0))
        assert outfit["eyewear"] == "Goggles"
        result = safety.apply(outfit, _weather(-15.0, cloud_cover=0), xc, _comfort(-8.0, xc))
        assert result.clothing["eyewear"] == "Goggles"

    @pytest.mark.parametrize("hour", [0, 5, 6, 12, 18, 19, 23])
    @pytest.mark.parametrize("cloud", [0, 40, 100])
    def test_never_with_darkness(self, safety, hour, cloud):
        weather = _weather(cloud_cover=cloud, uv_index=5, observed_at=datetime(2024, 6, 1, hour, 0))
        fired = _fired(safety.apply(RUN_OUTFIT, weather, RUN, _comfort(15.0)))
        assert not {"darkness", "sunglasses"} <= fired


# =====================================================================
# Engine behaviour
# =====================================================================

_CONDITIONS = [
    (-20.0, _weather(-25.0, precipitation_mm=1.0, wind_speed_mps=8.0, observed_at=datetime(2024, 1, 5, 20, 0))),
    (-12.0, _weather(-16.0, cloud_cover=0, uv_index=2, observed_at=datetime(2024, 1, 5, 12, 0))),
    (2.0, _weather(-1.0, precipitation_mm=2.0)),
    (12.0, _weather(7.0, wind_speed_mps=6.0, precipitation_mm=0.5)),
    (17.0, _weather(13.0, wind_speed_mps=6.0, cloud_cover=10)),
    (32.0, _weather(28.0, precipitation_mm=0.3, cloud_cover=40, uv_index=9)),
]


class TestEngine:

    @pytest.mark.parametrize("activity", list(ActivityType))
    @pytest.mark.parametrize("comfort_c,weather", _CONDITIONS)
    def test_idempotent(self, safety, activity, comfort_c, weather):
        comfort = _comfort(comfort_c, activity)
        start = get_band_defaults(activity, comfort.band)
        once = safety.apply(start, weather, activity, comfort, log_hazards=False)
        twice = safety.apply(once.clothing, weather, activity, comfort, log_hazards=False)
        assert twice.clothing == once.clothing

    def test_every_rule_reported(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(), RUN, _comfort(15.0))
        assert tuple(o.name for o in result.overrides) == RULE_NAMES

    def test_input_not_mutated(self, safety):
        outfit = dict(RUN_OUTFIT)
        safety.apply(outfit, _weather(-20.0), RUN, _comfort(-20.0))
        assert outfit == RUN_OUTFIT

    def test_disabled_rule_reported_not_fired(self):
        engine = SafetyOverrideEngine(disabled=["darkness"])
        weather = _weather(observed_at=datetime(2024, 3, 1, 22, 0))
        result = engine.apply(RUN_OUTFIT, weather, RUN, _comfort(15.0))
        darkness = next(o for o in result.overrides if o.name == "darkness")
        assert darkness.fired is False
        assert result.clothing["accessories"] == "None"

    def test_unknown_rule_rejected(self):
        with pytest.raises(ValueError, match="Unknown safety rules"):
            SafetyOverrideEngine(disabled=["lightning"])

    def test_changes_recorded(self, safety):
        result = safety.apply(RUN_OUTFIT, _weather(4.0, precipitation_mm=1.0), RUN, _comfort(8.0))
        precip = next(o for o in result.overrides if o.name == "precipitation")
        assert precip.changes == {"rainGear": "Light rain jacket"}
