"""
Habit health score: four sub-scores, a weighted overall score and a grade.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from you_first.metrics import round_half_up
from you_first.models import CATEGORIES, TrackableStatus

logger = logging.getLogger(__name__)

CONSISTENCY_DAYS = 7
MOMENTUM_FULL_STREAK = 21

WEIGHTS = {
    "consistency": 0.35,
    "momentum": 0.25,
    "balance": 0.20,
    "engagement": 0.20,
}

GRADES = (
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "C-"),
    (40, "D"),
)

NO_DATA_MESSAGE = "No data yet. Create your first habit to begin your journey!"


@dataclass(frozen=True)
class HealthScore:
    overall: int
    consistency: int
    momentum: int
    balance: int
    engagement: int
    grade: str
    has_data: bool = True
    message: str = ""
    recommendations: List[str] = field(default_factory=list)


def grade_for(score: float) -> str:
    for threshold, grade in GRADES:
        if score >= threshold:
            return grade
    return "F"


def _recommendations(consistency: float, momentum: float, balance: float, engagement: float, count: int) -> List[str]:
    out = []
    if consistency < 70:
        out.append("Set daily reminders")
    if momentum < 50:
        out.append("Focus on streak building")
    if balance < 50:
        out.append("Balance Mind, Body, Soul")
    if engagement < 60:
        out.append("Complete more habits today")
    if count < 3:
        out.append("Add foundational habits")
    return out


def health_score(statuses: Sequence[TrackableStatus]) -> HealthScore:
    """
    Score a set of trackables from their derived statuses.

    - consistency: completions in the trailing 7 days out of trackables x 7
    - momentum: average current streak, 21 days = 100, capped
    - balance: share of mind/body/soul with at least one trackable
    - engagement: share of trackables completed today
    """
    count = len(statuses)
    if count == 0:
        return HealthScore(
            overall=0,
            consistency=0,
            momentum=0,
            balance=0,
            engagement=0,
            grade="F",
            has_data=False,
            message=NO_DATA_MESSAGE,
            recommendations=["Create your first habit to begin your journey!"],
        )

    completions = sum(min(s.completed_last_7, CONSISTENCY_DAYS) for s in statuses)
    consistency = completions / (count * CONSISTENCY_DAYS) * 100

    avg_streak = sum(s.current_streak for s in statuses) / count
    momentum = min(avg_streak / MOMENTUM_FULL_STREAK * 100, 100)

    covered = {s.category for s in statuses} & set(CATEGORIES)
    balance = len(covered) / len(CATEGORIES) * 100

    engagement = sum(1 for s in statuses if s.completed_today) / count * 100

    overall = round_half_up(
        consistency * WEIGHTS["consistency"]
        + momentum * WEIGHTS["momentum"]
        + balance * WEIGHTS["balance"]
        + engagement * WEIGHTS["engagement"]
    )
    grade = grade_for(overall)
    logger.debug("health score %d (%s) over %d trackables", overall, grade, count)

    return HealthScore(
        overall=overall,
        consistency=round_half_up(consistency),
        momentum=round_half_up(momentum),
        balance=round_half_up(balance),
        engagement=round_half_up(engagement),
        grade=grade,
        message=f"Health score {overall} ({grade})",
        recommendations=_recommendations(consistency, momentum, balance, engagement, count),
    )


# Radar view: six axes over habits and rules, each 0-100.

RADAR_CATEGORIES = (
    "mind",
    "body",
    "soul",
    "digital wellness",
    "nutrition",
    "sleep hygiene",
    "mental health",
    "fitness",
)
RADAR_FULL_COUNT = 15
FOUNDATION_STREAK = 7

RADAR_GRADES = (
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C+"),
    (40, "C"),
)


@dataclass(frozen=True)
class RadarScores:
    consistency: int
    momentum: int
    balance: int
    engagement: int
    foundation: int
    growth: int
    overall: int
    grade: str

    def axes(self) -> List[tuple]:
        return [
            ("Consistency", self.consistency),
            ("Momentum", self.momentum),
            ("Balance", self.balance),
            ("Engagement", self.engagement),
            ("Foundation", self.foundation),
            ("Growth", self.growth),
        ]


@dataclass(frozen=True)
class DisciplineSummary:
    active: int
    kept_today: int
    weakest_streak: int


def radar_grade(score: float) -> str:
    for threshold, grade in RADAR_GRADES:
        if score >= threshold:
            return grade
    return "D"


def _avg_streak(statuses: Sequence[TrackableStatus]) -> float:
    return sum(s.current_streak for s in statuses) / max(len(statuses), 1)


def radar_scores(statuses: Sequence[TrackableStatus]) -> RadarScores:
    """
    - consistency: share of all trackables completed today
    - momentum: mean of the habit and rule average streaks, x3, capped
    - balance: share of the eight radar categories in use
    - engagement: trackable count against a full set of 15
    - foundation: share of trackables with a streak of 7 or more
    - growth: consistency plus 30% of momentum, capped
    The overall score is the mean of the six axes.
    """
    rules = [s for s in statuses if s.trackable.kind == "rule"]
    habits = [s for s in statuses if s.trackable.kind != "rule"]
    total = len(statuses)

    consistency = round_half_up(sum(1 for s in statuses if s.completed_today) / total * 100) if total else 0
    momentum = min(100, round_half_up((_avg_streak(habits) + _avg_streak(rules)) / 2 * 3))
    used = {s.category.lower() for s in statuses} & set(RADAR_CATEGORIES)
    balance = round_half_up(len(used) / len(RADAR_CATEGORIES) * 100)
    engagement = min(100, round_half_up(total / RADAR_FULL_COUNT * 100))
    foundation = round_half_up(sum(1 for s in statuses if s.current_streak >= FOUNDATION_STREAK) / max(total, 1) * 100)
    growth = round_half_up(max(0, min(100, consistency + momentum * 0.3)))

    axes = (consistency, momentum, balance, engagement, foundation, growth)
    overall = round_half_up(sum(axes) / len(axes))
    return RadarScores(
        consistency=consistency,
        momentum=momentum,
        balance=balance,
        engagement=engagement,
        foundation=foundation,
        growth=growth,
        overall=overall,
        grade=radar_grade(overall),
    )


def discipline_summary(statuses: Sequence[TrackableStatus]) -> DisciplineSummary:
    """
    Rules only: how many are active, how many were kept today and the
    weakest current streak (0 with no rules).
    """
    rules = [s for s in statuses if s.trackable.kind == "rule"]
    return DisciplineSummary(
        active=len(rules),
        kept_today=sum(1 for s in rules if s.completed_today),
        weakest_streak=min((s.current_streak for s in rules), default=0),
    )
