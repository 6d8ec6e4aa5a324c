"""Overtraining risk from per-muscle usage records.

Every record is checked against three patterns (a muscle can trip more than
one): still inside its recovery window, trained too often at high intensity,
or hit hard within the last two days. The share of flagged entries over
tracked muscles gives the risk band.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from statistics import fmean
from typing import Iterable, Optional, Sequence

logger = logging.getLogger(__name__)

RISK_LEVELS = ("low", "moderate", "high", "very_high")
UPPER_BODY_KEYWORDS = ("chest", "back", "shoulders", "biceps", "triceps")
LOWER_BODY_KEYWORDS = ("quad", "hamstring", "glute", "calf")
EMPTY_USAGE_RECOMMENDATION = "Start tracking your workouts to get injury risk assessments"
DEFAULT_WEEKLY_FREQUENCY = 3
FATIGUE_DECAY_PER_DAY = 0.15

ANTAGONISTS = {
    "pectoralis": ["latissimus_dorsi", "trapezius", "rhomboids"],
    "latissimus_dorsi": ["pectoralis", "anterior_deltoid"],
    "quadriceps": ["hamstrings", "glutes"],
    "hamstrings": ["quadriceps", "calves"],
    "biceps": ["triceps", "forearms"],
    "triceps": ["biceps", "shoulders"],
    "anterior_deltoid": ["posterior_deltoid", "trapezius"],
}


@dataclass(frozen=True)
class MuscleUsageRecord:
    muscle_id: str
    muscle_name: str
    last_worked_at: datetime
    weekly_frequency: int
    intensity: int
    required_recovery_hours: int
    is_marked_recovered: bool = False


@dataclass(frozen=True)
class MuscleUsageLog:
    """One logged session for a muscle, before it is folded into its record."""
    muscle_id: str
    muscle_name: str
    intensity: int
    weekly_frequency: Optional[int] = None


@dataclass(frozen=True)
class FlaggedMuscle:
    muscle_name: str
    issue_kind: str   # insufficient_recovery | excessive_frequency | high_cumulative_fatigue
    recommendation: str
    days_since_worked: float
    required_recovery_days: float


@dataclass(frozen=True)
class RecoveryPlan:
    rest_days: int
    activities: tuple[str, ...]
    nutrition_focus: tuple[str, ...]


@dataclass(frozen=True)
class InjuryRiskAssessment:
    risk_level: str
    flagged_muscles: tuple[FlaggedMuscle, ...]
    recommendations: tuple[str, ...]
    needs_rest_day: bool
    recovery_plan: RecoveryPlan

    def to_dict(self) -> dict:
        return asdict(self)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def hours_since(when: datetime, now: datetime) -> float:
    # naive timestamps are read as UTC when compared against an aware clock
    if when.tzinfo is None and now.tzinfo is not None:
        when = when.replace(tzinfo=timezone.utc)
    return (now - when).total_seconds() / 3600.0


def recovery_hours_for_intensity(intensity: int) -> int:
    if intensity <= 3:
        return 24
    if intensity <= 6:
        return 48
    if intensity <= 8:
        return 72
    return 96


def determine_risk_level(flagged_count: int, tracked_count: int) -> str:
    if tracked_count <= 0:
        return "low"
    pct = flagged_count / tracked_count * 100
    if pct == 0:
        return "low"
    if pct < 20:
        return "moderate"
    if pct < 40:
        return "high"
    return "very_high"


def _flags_for(record: MuscleUsageRecord, now: datetime) -> list[FlaggedMuscle]:
    hours = hours_since(record.last_worked_at, now)
    days = hours / 24
    required_days = record.required_recovery_hours / 24
    name = record.muscle_name
    flags = []
    if not record.is_marked_recovered and hours < record.required_recovery_hours:
        flags.append(FlaggedMuscle(
            muscle_name=name,
            issue_kind="insufficient_recovery",
            recommendation=f"Allow {math.ceil(required_days - days)} more day(s) before training {name}",
            days_since_worked=days,
            required_recovery_days=required_days,
        ))
    if record.weekly_frequency > 3 and record.intensity >= 7:
        flags.append(FlaggedMuscle(
            muscle_name=name,
            issue_kind="excessive_frequency",
            recommendation=f"Reduce {name} training frequency to 2-3x per week",
            days_since_worked=days,
            required_recovery_days=required_days,
        ))
    if record.intensity >= 8 and days < 2:
        flags.append(FlaggedMuscle(
            muscle_name=name,
            issue_kind="high_cumulative_fatigue",
            recommendation=f"High-intensity training detected. Rest {name} for 48-72 hours",
            days_since_worked=days,
            required_recovery_days=3,
        ))
    return flags


def _mean_frequency(usage: Sequence[MuscleUsageRecord], keywords: Iterable[str]) -> float:
    keywords = tuple(keywords)
    freqs = [u.weekly_frequency for u in usage if any(k in u.muscle_name.lower() for k in keywords)]
    return fmean(freqs) if freqs else 0.0


def balance_recommendation(usage: Sequence[MuscleUsageRecord]) -> Optional[str]:
    upper = _mean_frequency(usage, UPPER_BODY_KEYWORDS)
    lower = _mean_frequency(usage, LOWER_BODY_KEYWORDS)
    if upper > lower * 1.5:
        return "Balance needed: Increase lower body training frequency"
    if lower > upper * 1.5:
        return "Balance needed: Increase upper body training frequency"
    return None


def generate_recovery_plan(risk_level: str) -> RecoveryPlan:
    if risk_level == "very_high":
        return RecoveryPlan(
            rest_days=3,
            activities=("Light walking (20-30 min)", "Gentle yoga or stretching", "Foam rolling"),
            nutrition_focus=(
                "Increase protein for recovery (2.5g/kg)",
                "Stay hydrated (3+ liters water)",
                "Focus on anti-inflammatory foods",
            ),
        )
    if risk_level == "high":
        return RecoveryPlan(
            rest_days=2,
            activities=("Light cardio (walking, cycling)", "Mobility work", "Active recovery (low intensity)"),
            nutrition_focus=("Maintain protein intake", "Adequate carbs for glycogen replenishment"),
        )
    if risk_level == "moderate":
        return RecoveryPlan(
            rest_days=1,
            activities=("Train underworked muscle groups", "Lower intensity workout", "Focus on technique over weight"),
            nutrition_focus=("Normal nutrition targets",),
        )
    return RecoveryPlan(
        rest_days=0,
        activities=("Continue normal training", "Incorporate preventive mobility work"),
        nutrition_focus=("Maintain balanced nutrition",),
    )


def assess(
    usage: Sequence[MuscleUsageRecord],
    planned_weekly_frequency: int = DEFAULT_WEEKLY_FREQUENCY,
    now: Optional[datetime] = None,
) -> InjuryRiskAssessment:
    """Score cumulative muscle usage for overtraining risk.

    ``planned_weekly_frequency`` is accepted for callers that track it but
    does not change the score.
    """
    if not usage:
        return InjuryRiskAssessment(
            risk_level="low",
            flagged_muscles=(),
            recommendations=(EMPTY_USAGE_RECOMMENDATION,),
            needs_rest_day=False,
            recovery_plan=generate_recovery_plan("low"),
        )

    now = now or _utcnow()
    flagged = [flag for record in usage for flag in _flags_for(record, now)]
    risk_level = determine_risk_level(len(flagged), len(usage))
    needs_rest = risk_level in ("high", "very_high")

    recommendations = []
    if needs_rest:
        recommendations.append("Take a full rest day to allow complete recovery")
        recommendations.append("Consider deload week if symptoms persist")
    if flagged:
        recommendations.append("Focus on underworked muscle groups in next session")
        recommendations.append("Incorporate mobility and stretching work")
    balance = balance_recommendation(usage)
    if balance:
        recommendations.append(balance)

    logger.debug(
        "Injury risk assessed as %s",
        risk_level,
        extra={"ctx_risk_level": risk_level, "ctx_flagged": len(flagged), "ctx_tracked": len(usage)},
    )
    return InjuryRiskAssessment(
        risk_level=risk_level,
        flagged_muscles=tuple(flagged),
        recommendations=tuple(recommendations),
        needs_rest_day=needs_rest,
        recovery_plan=generate_recovery_plan(risk_level),
    )


# ── Usage logging and recovery helpers ───────────────────────────────────

def log_muscle_usage(
    existing: Optional[MuscleUsageRecord],
    log: MuscleUsageLog,
    now: Optional[datetime] = None,
) -> MuscleUsageRecord:
    """Fold a new session into the muscle's single usage record."""
    now = now or _utcnow()
    recovery_hours = recovery_hours_for_intensity(log.intensity)
    if existing is None:
        return MuscleUsageRecord(
            muscle_id=log.muscle_id,
            muscle_name=log.muscle_name,
            last_worked_at=now,
            weekly_frequency=log.weekly_frequency or DEFAULT_WEEKLY_FREQUENCY,
            intensity=log.intensity,
            required_recovery_hours=recovery_hours,
            is_marked_recovered=False,
        )
    return replace(
        existing,
        last_worked_at=now,
        weekly_frequency=log.weekly_frequency or existing.weekly_frequency,
        intensity=log.intensity,
        required_recovery_hours=recovery_hours,
        is_marked_recovered=False,
    )


def is_muscle_fully_recovered(record: MuscleUsageRecord, now: Optional[datetime] = None) -> bool:
    now = now or _utcnow()
    adjusted = record.required_recovery_hours * (record.intensity / 7)
    return hours_since(record.last_worked_at, now) >= adjusted


def calculate_rest_days_needed(record: MuscleUsageRecord, now: Optional[datetime] = None) -> int:
    now = now or _utcnow()
    needed = record.required_recovery_hours * (record.intensity / 7)
    remaining = max(0.0, needed - hours_since(record.last_worked_at, now))
    return math.ceil(remaining / 24)


def suggest_alternative_muscles(overused_muscle: str, available: Iterable[str]) -> list[str]:
    available = set(available)
    return [m for m in ANTAGONISTS.get(overused_muscle.lower(), []) if m in available]


def calculate_cumulative_fatigue(
    recent_workouts: Iterable[tuple[datetime, float, float]],
    now: Optional[datetime] = None,
) -> float:
    """Sum of intensity x volume x 0.1 per workout, decayed by age in days, capped at 100.

    ``recent_workouts`` yields ``(performed_at, intensity, volume)`` tuples.
    """
    now = now or _utcnow()
    score = 0.0
    for performed_at, intensity, volume in recent_workouts:
        days_ago = hours_since(performed_at, now) / 24
        score += intensity * volume * 0.1 * math.exp(-FATIGUE_DECAY_PER_DAY * days_ago)
    return min(100.0, score)
