from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from weathercheck.models.state import AppState


@dataclass(frozen=True)
class HourlyRow:
    time: str
    label: str
    temperature: float | None
    precipitation_probability: float | None


def current_temperature(state: AppState) -> float | None:
    if not state.temperatures_today:
        return None
    return state.temperatures_today[0]


def _parse_time(value: str) -> datetime | None:
    # Open-Meteo returns local wall-clock times without offset, e.g. "2024-01-01T13:00"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None


def format_hour(value: str) -> str:
    """Format a timestamp as a 12 hour clock label, e.g. "1 PM"."""
    dt = _parse_time(value)
    if dt is None:
        return ""
    hour = dt.hour % 12 or 12
    return f"{hour} {'AM' if dt.hour < 12 else 'PM'}"


def format_date(value: str | None) -> str:
    """Format a timestamp as e.g. "Monday, January 1"."""
    if not value:
        return ""
    dt = _parse_time(value)
    if dt is None:
        return ""
    return f"{dt:%A}, {dt:%B} {dt.day}"


def date_label(state: AppState) -> str:
    return format_date(state.hours_today[0] if state.hours_today else None)


def hourly_rows(state: AppState) -> list[HourlyRow]:
    rows: list[HourlyRow] = []
    for index, time in enumerate(state.hours_today):
        rows.append(
            HourlyRow(
                time=time,
                label=format_hour(time),
                temperature=_at(state.temperatures_today, index),
                precipitation_probability=_at(state.precipitation_probabilities, index),
            )
        )
    return rows


def _at(values: tuple[float, ...], index: int) -> float | None:
    if index < len(values):
        return values[index]
    return None
