from datetime import date

from src.timeclock.timeclock.attendance.goals import aggregate, match_goal, summarize
from src.timeclock.timeclock.attendance.model import AttendanceDay, AttendanceGoal, AttendanceStats
from src.timeclock.timeclock.core.enums import AttendanceStatus, GoalKind


def goal(goal_id, kind, missed, late, order, active=True):
    return AttendanceGoal(
        goal_id=goal_id,
        name=f"goal-{goal_id}",
        kind=kind,
        max_days_missed=missed,
        max_days_late=late,
        display_order=order,
        is_active=active,
    )


def test_positive_goal_thresholds():
    goals = [goal(1, GoalKind.POSITIVE, 0, 1, 1)]

    assert match_goal(AttendanceStats(employee_id=1, days_missed=0, days_late=1), goals) == goals[0]
    assert match_goal(AttendanceStats(employee_id=1, days_missed=1, days_late=1), goals) is None


def test_negative_goal_matches_on_either_threshold():
    goals = [goal(1, GoalKind.NEGATIVE, 3, 5, 1)]

    assert match_goal(AttendanceStats(employee_id=1, days_missed=3), goals) == goals[0]
    assert match_goal(AttendanceStats(employee_id=1, days_late=5), goals) == goals[0]
    assert match_goal(AttendanceStats(employee_id=1, days_missed=2, days_late=4), goals) is None


def test_first_match_by_display_order_wins():
    loose = goal(1, GoalKind.POSITIVE, 5, 5, 2)
    strict = goal(2, GoalKind.POSITIVE, 0, 0, 1)

    assert match_goal(AttendanceStats(employee_id=1), [loose, strict]) == strict


def test_inactive_goals_are_ignored():
    goals = [goal(1, GoalKind.POSITIVE, 0, 0, 1, active=False)]

    assert match_goal(AttendanceStats(employee_id=1), goals) is None


def test_summarize_counts_statuses_and_attaches_goal():
    days = [
        AttendanceDay(1, date(2025, 1, 6), AttendanceStatus.PRESENT),
        AttendanceDay(1, date(2025, 1, 7), AttendanceStatus.LATE, minutes_late=12),
        AttendanceDay(1, date(2025, 1, 8), AttendanceStatus.EXCUSED),
        AttendanceDay(2, date(2025, 1, 6), AttendanceStatus.MISSED),
    ]
    goals = [goal(1, GoalKind.POSITIVE, 0, 1, 1)]

    stats = summarize(days, goals)

    assert [s.employee_id for s in stats] == [1, 2]
    first, second = stats
    assert (first.days_present, first.days_late, first.days_excused) == (1, 1, 1)
    assert first.total_minutes_late == 12
    assert first.achievement == goals[0]
    assert second.days_missed == 1
    assert second.achievement is None


def test_aggregate_of_nothing_is_empty():
    assert aggregate([]) == {}
