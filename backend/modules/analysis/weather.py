"""
modules/analysis/weather.py
---------------------------
Weather suitability of outdoor activities.

The forecast list is index-aligned to day_number - 1. Only activity types in
config.OUTDOOR_ACTIVITY_TYPES are ever judged; everything else is suitable
regardless of the forecast, as is any activity on a day with no forecast.
"""

from __future__ import annotations
from typing import Optional

import config
from schemas.trip import Activity, WeatherDay


def weather_for_day(weather: Optional[list[WeatherDay]], day_number: int) -> Optional[WeatherDay]:
    if not weather:
        return None
    index = day_number - 1
    if 0 <= index < len(weather):
        return weather[index]
    return None


def is_outdoor(activity: Activity) -> bool:
    return activity.type in config.OUTDOOR_ACTIVITY_TYPES


def is_adverse(day: WeatherDay) -> bool:
    """Heavy rain, strong wind, or a storm in the condition label."""
    return (
        day.precipitation > config.ADVERSE_PRECIPITATION_PCT
        or day.wind_speed > config.ADVERSE_WIND_SPEED
        or config.STORM_KEYWORD in day.condition.lower()
    )


def is_weather_suitable(
    activity: Activity,
    day_number: int,
    weather: Optional[list[WeatherDay]],
) -> bool:
    if not is_outdoor(activity):
        return True
    forecast = weather_for_day(weather, day_number)
    if forecast is None:
        return True
    return not is_adverse(forecast)
