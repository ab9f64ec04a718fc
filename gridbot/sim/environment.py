"""Environmental clock: time of day and a rotating weather forecast."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from gridbot.errors import EmptyForecast, WrongHour
from gridbot.sim.tile import TileType


class WeatherType(str, Enum):
    SUNNY = "sunny"
    RAINY = "rainy"
    FOGGY = "foggy"
    TROPICAL_MONSOON = "tropical_monsoon"
    TRENTINO_SNOW = "trentino_snow"


class DayTime(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


@dataclass
class EnvironmentalConditions:
    weather_forecast: deque[WeatherType]
    time_progression_minutes: int
    hour: int
    minute: int = 0

    @classmethod
    def new(
        cls,
        weather_forecast: Iterable[WeatherType],
        time_progression_minutes: int,
        starting_hour: int,
    ) -> EnvironmentalConditions:
        forecast = deque(weather_forecast)
        if not forecast:
            raise EmptyForecast()
        if starting_hour > 24:
            raise WrongHour()
        return cls(
            weather_forecast=forecast,
            time_progression_minutes=time_progression_minutes,
            hour=starting_hour,
        )

    def tick(self) -> bool:
        """Advance the clock; return True when the day rolled over."""
        minutes = self.minute + self.time_progression_minutes
        self.hour += minutes // 60
        self.minute = minutes % 60
        if self.hour > 23:
            self.hour -= 24
            self.weather_forecast.rotate(-1)
            return True
        return False

    @property
    def weather(self) -> WeatherType:
        return self.weather_forecast[0]

    @property
    def day_time(self) -> DayTime:
        if 7 <= self.hour <= 11:
            return DayTime.MORNING
        if 12 <= self.hour <= 20:
            return DayTime.AFTERNOON
        return DayTime.NIGHT

    def time_of_day_string(self) -> str:
        return f"{self.hour:02}:{self.minute:02}"

    def copy(self) -> EnvironmentalConditions:
        return EnvironmentalConditions(
            weather_forecast=deque(self.weather_forecast),
            time_progression_minutes=self.time_progression_minutes,
            hour=self.hour,
            minute=self.minute,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "weather": self.weather.value,
            "forecast": [weather.value for weather in self.weather_forecast],
            "time": self.time_of_day_string(),
            "day_time": self.day_time.value,
        }


_WEATHER_FACTORS: dict[WeatherType, float] = {
    WeatherType.RAINY: 1.1,
    WeatherType.TROPICAL_MONSOON: 2.0,
}

_SNOW_FACTORS: dict[TileType, float] = {
    TileType.HILL: 1.6,
    TileType.MOUNTAIN: 1.7,
    TileType.SNOW: 2.0,
}


def calculate_cost_go_with_environment(
    cost: int, conditions: EnvironmentalConditions, tile_type: TileType
) -> int:
    """Return the move cost onto `tile_type` under the current sky."""
    increment = 0.0
    weather = conditions.weather
    if weather in _WEATHER_FACTORS:
        increment += cost * _WEATHER_FACTORS[weather]
    elif tile_type == TileType.STREET and weather in (
        WeatherType.FOGGY,
        WeatherType.TRENTINO_SNOW,
    ):
        increment += 1.0
    elif weather == WeatherType.TRENTINO_SNOW and tile_type in _SNOW_FACTORS:
        increment += cost * _SNOW_FACTORS[tile_type]

    day_time = conditions.day_time
    if day_time == DayTime.AFTERNOON:
        if tile_type == TileType.SAND:
            increment += cost * 1.7
    elif day_time == DayTime.MORNING:
        increment += cost * 1.1
    else:
        increment += cost * 1.4

    return cost + math.ceil(increment)

