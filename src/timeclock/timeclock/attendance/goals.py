"""Aggregate closed attendance days and match achievement goals."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus, GoalKind
from .model import AttendanceDay, AttendanceGoal, AttendanceStats


def goal_matches(goal: AttendanceGoal, stats: AttendanceStats) -> bool:
    if goal.kind == GoalKind.POSITIVE:
        return stats.days_missed <= goal.max_days_missed and stats.days_late <= goal.max_days_late
    return stats.days_missed >= goal.max_days_missed or stats.days_late >= goal.max_days_late


def match_goal(stats: AttendanceStats, goals: Sequence[AttendanceGoal]) -> Optional[AttendanceGoal]:
    """First active goal by display_order that matches, else None.

    Positive and negative thresholds can overlap; list order is the only
    tie-break.
    """

    ordered = sorted((g for g in goals if g.is_active), key=lambda g: g.display_order)
    for goal in ordered:
        if goal_matches(goal, stats):
            return goal
    return None


def aggregate(days: Iterable[AttendanceDay]) -> dict[int, AttendanceStats]:
    stats_by_employee: dict[int, AttendanceStats] = {}
    for day in days:
        stats = stats_by_employee.setdefault(day.employee_id, AttendanceStats(employee_id=day.employee_id))
        if day.status == AttendanceStatus.PRESENT:
            stats.days_present += 1
        elif day.status == AttendanceStatus.LATE:
            stats.days_late += 1
        elif day.status == AttendanceStatus.MISSED:
            stats.days_missed += 1
        elif day.status == AttendanceStatus.EXCUSED:
            stats.days_excused += 1
        stats.total_minutes_late += int(day.minutes_late or 0)
    return stats_by_employee


def summarize(days: Iterable[AttendanceDay], goals: Sequence[AttendanceGoal]) -> list[AttendanceStats]:
    summaries = list(aggregate(days).values())
    for stats in summaries:
        stats.achievement = match_goal(stats, goals)
    summaries.sort(key=lambda s: s.employee_id)
    return summaries
