"""Derived read-only views over logged entries and weigh-ins."""

from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from calorie_tracker.domain.dates import format_date, parse_date
from calorie_tracker.domain.entries import FoodEntry, MealSlot, WeightLog
from calorie_tracker.domain.stats import (
    DayGroup,
    MealTotals,
    WeekDay,
    WeeklyStats,
    WeightTrend,
    WeightTrendPoint,
)
from calorie_tracker.services.energy import round_half_up

WEEK_DAYS = 7
MIN_TREND_POINTS = 2
DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

BREAKFAST_BEFORE_HOUR = 10
LUNCH_BEFORE_HOUR = 14
DINNER_BEFORE_HOUR = 18


def today_entries(entries: Iterable[FoodEntry], today: str) -> list[FoodEntry]:
    """Return entries logged on the given date."""
    return [entry for entry in entries if entry.date == today]


def total_calories(entries: Iterable[FoodEntry]) -> int:
    """Return the summed calories of entries."""
    return sum(entry.calories for entry in entries)


def meal_breakdown(entries: Iterable[FoodEntry]) -> dict[MealSlot, MealTotals]:
    """Group entries by meal slot; every slot is present."""
    breakdown = {slot: MealTotals() for slot in MealSlot}
    for entry in entries:
        totals = breakdown[MealSlot.parse(entry.meal_slot)]
        totals.entries.append(entry)
        totals.calories += entry.calories
    return breakdown


def group_by_day(entries: Iterable[FoodEntry]) -> list[DayGroup]:
    """Group all entries by date, newest calendar date first."""
    days: dict[str, list[FoodEntry]] = {}
    for entry in entries:
        days.setdefault(entry.date, []).append(entry)
    ordered = sorted(days.items(), key=lambda item: parse_date(item[0]), reverse=True)
    return [
        DayGroup(date=day, entries=day_entries, calories=total_calories(day_entries))
        for day, day_entries in ordered
    ]


def daily_calorie_totals(entries: Iterable[FoodEntry]) -> dict[str, int]:
    """Return summed calories keyed by date string."""
    totals: dict[str, int] = {}
    for entry in entries:
        totals[entry.date] = totals.get(entry.date, 0) + entry.calories
    return totals


def weekly_stats(entries: Iterable[FoodEntry], today: date) -> WeeklyStats:
    """Return calorie statistics for the trailing seven days including today.

    Days without any logged calories are left out of the average.
    """
    totals = daily_calorie_totals(entries)
    days: list[WeekDay] = []
    for offset in range(WEEK_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = format_date(day)
        days.append(
            WeekDay(
                date=key,
                day_name=DAY_NAMES[day.weekday()],
                day_number=day.day,
                calories=totals.get(key, 0),
                is_today=offset == 0,
            )
        )
    with_data = [day.calories for day in days if day.calories > 0]
    average = round_half_up(sum(with_data) / len(with_data)) if with_data else 0
    return WeeklyStats(
        days=days,
        average=average,
        total=sum(day.calories for day in days),
        days_with_data=len(with_data),
        max_calories=max([day.calories for day in days] + [1]),
    )


def weight_trend(
    weight_logs: Sequence[WeightLog], daily_totals: dict[str, int]
) -> WeightTrend:
    """Return weigh-ins in logging order, annotated with that day's intake."""
    ordered = sorted(weight_logs, key=lambda log: log.created_at)
    points: list[WeightTrendPoint] = []
    previous: WeightLog | None = None
    for log in ordered:
        points.append(
            WeightTrendPoint(
                date=log.date,
                weight_kg=log.weight_kg,
                created_at=log.created_at,
                calories=daily_totals.get(log.date) or None,
                change_kg=(
                    log.weight_kg - previous.weight_kg if previous is not None else None
                ),
            )
        )
        previous = log
    delta = None
    if len(points) >= MIN_TREND_POINTS:
        delta = points[-1].weight_kg - points[0].weight_kg
    return WeightTrend(
        points=points,
        delta_kg=delta,
        latest_kg=points[-1].weight_kg if points else None,
    )


def suggested_meal_slot(hour: int) -> MealSlot:
    """Return the default meal slot for a wall-clock hour."""
    if hour < BREAKFAST_BEFORE_HOUR:
        return MealSlot.BREAKFAST
    if hour < LUNCH_BEFORE_HOUR:
        return MealSlot.LUNCH
    if hour < DINNER_BEFORE_HOUR:
        return MealSlot.DINNER
    return MealSlot.SNACK
