"""Workout split selection.

Picks a weekly training split from the user's goal, experience level and
available days, then assembles it from the exercise templates below.

Decision table (first match wins):
- sport_specific goal with a sport -> that sport's program
  (unknown sport -> 3-day push/pull/legs with sport_specific reps)
- <= 2 days -> full body (duplicated onto day 4 when training twice)
- 3 days -> push/pull/legs
- 4 days -> upper/lower, each twice
- 5 days -> one body part per day
- >= 6 days -> push/pull/legs run twice

Out-of-range day counts are not rejected here; request validation lives in
``anatom.validators.WorkoutGenerationRequest``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from anatom.services.health_catalog import DEFAULT_CATALOG, HealthProfile, HealthRulesCatalog
from anatom.services.workout_filter import filter_plan, needs_health_filtering
from anatom.services.workout_types import ExerciseTemplate, WorkoutDay, WorkoutPlan, WorkoutRequest

logger = logging.getLogger(__name__)


def _ex(name: str, sets: int, reps: str, rest: int, muscles: list[str], notes: str) -> ExerciseTemplate:
    return ExerciseTemplate(
        name=name,
        target_sets=sets,
        rep_range=reps,
        rest_seconds=rest,
        target_muscles=tuple(muscles),
        notes=notes,
    )


def _day(label: str, day_of_week: int, split_tag: str, focus: list[str], exercises: list[ExerciseTemplate]) -> WorkoutDay:
    return WorkoutDay(
        day_label=label,
        day_of_week=day_of_week,
        split_tag=split_tag,
        focus_muscle_groups=tuple(focus),
        exercises=tuple(exercises),
    )


def sets_for_level(level: str, advanced_bonus: bool = True) -> int:
    if level == "beginner":
        return 3
    if level == "intermediate" or not advanced_bonus:
        return 4
    return 5


def reps_for_goal(goal: str) -> str:
    if goal == "muscle_gain":
        return "8-12"
    if goal == "endurance":
        return "15-20"
    return "10-15"


# ── Gym split templates ──────────────────────────────────────────────────

FULL_BODY_EXERCISES = (
    _ex("Barbell Squat", 3, "10-15", 180, ["quadriceps", "glutes", "hamstrings"],
        "Compound leg exercise - drives overall strength and muscle growth"),
    _ex("Bench Press", 3, "10-15", 180, ["pectoralis_major", "triceps", "anterior_deltoid"],
        "Primary chest builder - also engages triceps and shoulders"),
    _ex("Bent-Over Barbell Row", 3, "10-15", 180, ["latissimus_dorsi", "trapezius", "rhomboids"],
        "Targets entire back - lats, traps, rhomboids"),
    _ex("Overhead Press", 3, "10-15", 120, ["deltoids", "triceps"],
        "Builds shoulder strength and size"),
    _ex("Romanian Deadlift", 3, "10-15", 120, ["hamstrings", "glutes", "erector_spinae"],
        "Posterior chain focus - hamstrings and glutes"),
)

PUSH_DAY = _day("Push (Chest, Shoulders, Triceps)", 1, "push", ["chest", "shoulders", "triceps"], [
    _ex("Barbell Bench Press", 4, "6-10", 180, ["pectoralis_major", "anterior_deltoid", "triceps"],
        "Heavy compound chest movement"),
    _ex("Incline Dumbbell Press", 3, "8-12", 120, ["upper_pectoralis", "anterior_deltoid"],
        "Upper chest emphasis"),
    _ex("Overhead Press", 4, "8-10", 120, ["deltoids"], "Primary shoulder builder"),
    _ex("Lateral Raises", 3, "12-15", 60, ["medial_deltoid"], "Isolates medial deltoid for width"),
    _ex("Tricep Dips", 3, "8-12", 90, ["triceps", "lower_pectoralis"], "Compound tricep movement"),
])

PULL_DAY = _day("Pull (Back, Biceps)", 3, "pull", ["back", "biceps"], [
    _ex("Deadlift", 4, "6-8", 240, ["erector_spinae", "latissimus_dorsi", "trapezius", "glutes", "hamstrings"],
        "Total posterior chain - back, glutes, hamstrings"),
    _ex("Pull-Ups", 4, "8-12", 120, ["latissimus_dorsi", "teres_major", "biceps"],
        "Vertical pulling - lats and upper back"),
    _ex("Barbell Row", 4, "8-10", 120, ["latissimus_dorsi", "rhomboids", "trapezius"],
        "Horizontal pulling - mid back thickness"),
    _ex("Face Pulls", 3, "15-20", 60, ["posterior_deltoid", "trapezius"], "Rear delts and upper back health"),
    _ex("Barbell Curl", 3, "10-12", 90, ["biceps"], "Primary bicep mass builder"),
])

LEGS_DAY = _day("Legs (Quads, Hamstrings, Glutes, Calves)", 5, "legs",
                ["quadriceps", "hamstrings", "glutes", "calves"], [
    _ex("Barbell Back Squat", 4, "6-10", 180, ["quadriceps", "glutes", "hamstrings"],
        "King of leg exercises - total leg development"),
    _ex("Romanian Deadlift", 4, "8-12", 120, ["hamstrings", "glutes"], "Hamstring and glute focus"),
    _ex("Leg Press", 3, "12-15", 120, ["quadriceps", "glutes"], "Quad volume without spinal loading"),
    _ex("Walking Lunges", 3, "12-15 each leg", 90, ["quadriceps", "glutes", "hamstrings"],
        "Unilateral leg work - balance and coordination"),
    _ex("Standing Calf Raise", 4, "15-20", 60, ["gastrocnemius", "soleus"], "Calf development"),
])

UPPER_LOWER_DAYS = (
    _day("Upper A (Strength Focus)", 1, "upper", ["chest", "back", "shoulders", "arms"], [
        _ex("Barbell Bench Press", 4, "6-8", 180, ["pectoralis_major", "triceps"], "Heavy chest pressing"),
        _ex("Bent-Over Row", 4, "6-8", 180, ["latissimus_dorsi", "rhomboids"], "Heavy back work"),
        _ex("Overhead Press", 3, "8-10", 120, ["deltoids"], "Shoulder strength"),
        _ex("Chin-Ups", 3, "8-10", 120, ["latissimus_dorsi", "biceps"], "Vertical pull with bicep emphasis"),
    ]),
    _day("Lower A (Quad Focus)", 2, "lower", ["quadriceps", "hamstrings", "glutes"], [
        _ex("Back Squat", 4, "6-8", 180, ["quadriceps", "glutes"], "Heavy squat for quad development"),
        _ex("Romanian Deadlift", 3, "8-10", 120, ["hamstrings", "glutes"], "Hamstring work"),
        _ex("Leg Press", 3, "12-15", 90, ["quadriceps"], "Additional quad volume"),
        _ex("Leg Curl", 3, "12-15", 60, ["hamstrings"], "Hamstring isolation"),
    ]),
    _day("Upper B (Hypertrophy Focus)", 4, "upper", ["chest", "back", "shoulders", "arms"], [
        _ex("Incline Dumbbell Press", 4, "10-12", 90, ["upper_pectoralis"], "Upper chest development"),
        _ex("Cable Rows", 4, "10-12", 90, ["latissimus_dorsi", "rhomboids"], "Constant tension on back"),
        _ex("Lateral Raises", 4, "12-15", 60, ["medial_deltoid"], "Shoulder width"),
        _ex("Barbell Curl", 3, "10-12", 60, ["biceps"], "Bicep mass"),
        _ex("Tricep Pushdown", 3, "12-15", 60, ["triceps"], "Tricep isolation"),
    ]),
    _day("Lower B (Posterior Chain Focus)", 5, "lower", ["hamstrings", "glutes", "quadriceps"], [
        _ex("Conventional Deadlift", 4, "6-8", 240, ["hamstrings", "glutes", "erector_spinae"],
            "Total posterior chain strength"),
        _ex("Front Squat", 3, "8-10", 120, ["quadriceps"], "Quad-focused squat variation"),
        _ex("Bulgarian Split Squat", 3, "10-12 each", 90, ["quadriceps", "glutes"], "Unilateral leg development"),
        _ex("Calf Raises", 4, "15-20", 60, ["gastrocnemius", "soleus"], "Calf development"),
    ]),
)

BODY_PART_DAYS = (
    _day("Chest Day", 1, "chest", ["pectoralis_major", "pectoralis_minor"], [
        _ex("Barbell Bench Press", 4, "6-10", 180, ["pectoralis_major", "anterior_deltoid", "triceps"],
            "Primary chest mass builder - flat angle for overall development"),
        _ex("Incline Dumbbell Press", 4, "8-12", 120, ["upper_pectoralis", "anterior_deltoid"],
            "Upper chest emphasis - 30-45 degree incline"),
        _ex("Dumbbell Flyes", 3, "12-15", 90, ["pectoralis_major"], "Chest isolation - focus on stretch and squeeze"),
        _ex("Cable Crossovers", 3, "12-15", 60, ["pectoralis_major", "pectoralis_minor"],
            "Constant tension throughout ROM"),
        _ex("Push-Ups", 3, "To failure", 60, ["pectoralis_major", "triceps"], "Finisher - pump and endurance"),
    ]),
    _day("Back Day", 2, "back", ["latissimus_dorsi", "trapezius", "rhomboids"], [
        _ex("Deadlift", 4, "5-8", 240, ["erector_spinae", "latissimus_dorsi", "trapezius", "glutes", "hamstrings"],
            "Total back thickness and posterior chain strength"),
        _ex("Pull-Ups", 4, "8-12", 120, ["latissimus_dorsi", "teres_major", "biceps"],
            "Lat width - go for full stretch and squeeze"),
        _ex("Barbell Row", 4, "8-10", 120, ["latissimus_dorsi", "rhomboids", "trapezius"],
            "Mid-back thickness - keep torso at 45 degrees"),
        _ex("Seated Cable Row", 3, "10-12", 90, ["latissimus_dorsi", "rhomboids"],
            "Squeeze shoulder blades at peak contraction"),
        _ex("Face Pulls", 3, "15-20", 60, ["posterior_deltoid", "trapezius", "rhomboids"],
            "Rear delt and upper back health"),
    ]),
    _day("Shoulders Day", 3, "shoulders", ["anterior_deltoid", "medial_deltoid", "posterior_deltoid"], [
        _ex("Overhead Press", 4, "6-10", 180, ["anterior_deltoid", "medial_deltoid", "triceps"],
            "Primary shoulder mass builder"),
        _ex("Dumbbell Lateral Raises", 4, "12-15", 60, ["medial_deltoid"], "Shoulder width - slight lean forward"),
        _ex("Reverse Pec Deck", 4, "12-15", 60, ["posterior_deltoid"], "Rear delt isolation"),
        _ex("Arnold Press", 3, "10-12", 90, ["anterior_deltoid", "medial_deltoid"],
            "Hits all three delt heads through rotation"),
        _ex("Shrugs", 4, "12-15", 60, ["trapezius"], "Upper trap development"),
    ]),
    _day("Legs Day", 4, "legs", ["quadriceps", "hamstrings", "glutes", "calves"], [
        _ex("Barbell Back Squat", 4, "6-10", 180, ["quadriceps", "glutes", "hamstrings"],
            "King of leg exercises - total leg development"),
        _ex("Romanian Deadlift", 4, "8-12", 120, ["hamstrings", "glutes"],
            "Hamstring focus - maintain slight knee bend"),
        _ex("Leg Press", 4, "12-15", 90, ["quadriceps", "glutes"], "Quad volume without spinal loading"),
        _ex("Leg Curl", 3, "12-15", 60, ["hamstrings"], "Hamstring isolation"),
        _ex("Leg Extension", 3, "12-15", 60, ["quadriceps"], "Quad isolation - focus on peak contraction"),
        _ex("Standing Calf Raise", 4, "15-20", 60, ["gastrocnemius", "soleus"],
            "Full ROM - stretch at bottom, squeeze at top"),
    ]),
    _day("Arms Day", 5, "arms", ["biceps", "triceps", "forearms"], [
        _ex("Barbell Curl", 4, "8-12", 90, ["biceps"], "Primary bicep mass builder"),
        _ex("Close-Grip Bench Press", 4, "8-10", 120, ["triceps", "pectoralis_major"],
            "Compound tricep movement - heavy loading"),
        _ex("Incline Dumbbell Curl", 3, "10-12", 60, ["biceps"], "Long head bicep emphasis"),
        _ex("Skull Crushers", 3, "10-12", 90, ["triceps"], "Tricep long head focus"),
        _ex("Hammer Curls", 3, "12-15", 60, ["brachialis", "forearms"], "Brachialis and forearm development"),
        _ex("Tricep Pushdown", 3, "12-15", 60, ["triceps"], "Tricep isolation - squeeze at full extension"),
    ]),
)


def _prescribe(day: WorkoutDay, sets: int, reps: str) -> WorkoutDay:
    return replace(day, exercises=tuple(replace(ex, target_sets=sets, rep_range=reps) for ex in day.exercises))


def full_body_plan(goal: str, level: str, days: int) -> WorkoutPlan:
    sets = sets_for_level(level)
    reps = reps_for_goal(goal)
    day = _day("Full Body", 1, "full_body", ["chest", "back", "legs", "shoulders", "arms"],
               [replace(ex, target_sets=sets, rep_range=reps) for ex in FULL_BODY_EXERCISES])
    workouts = (day, replace(day, day_of_week=4)) if days == 2 else (day,)
    return WorkoutPlan(
        name=f"{days}-Day Full Body Split",
        description="Efficient full-body training hitting all major muscle groups each session",
        rationale=(
            "Full body splits maximize frequency for each muscle group, ideal for beginners or those "
            "with limited training days. Each muscle is stimulated 2x/week for optimal growth."
        ),
        days=workouts,
    )


def push_pull_legs_plan(goal: str, level: str) -> WorkoutPlan:
    sets = sets_for_level(level, advanced_bonus=False)
    reps = reps_for_goal(goal)
    return WorkoutPlan(
        name="3-Day Push/Pull/Legs",
        description="Classic split separating pushing, pulling, and leg movements",
        rationale=(
            "PPL split allows for high frequency (each muscle 1-2x/week) with adequate recovery. "
            "Separating pushing and pulling movements prevents overlap and maximizes performance "
            "in each session."
        ),
        days=tuple(_prescribe(d, sets, reps) for d in (PUSH_DAY, PULL_DAY, LEGS_DAY)),
    )


def upper_lower_plan() -> WorkoutPlan:
    return WorkoutPlan(
        name="4-Day Upper/Lower Split",
        description="Train each muscle group 2x/week with dedicated upper and lower days",
        rationale=(
            "Upper/lower split hits each muscle 2x/week with varied rep ranges and exercise selection. "
            "First session focuses on strength (heavier), second on hypertrophy (higher volume). "
            "Optimal for muscle growth."
        ),
        days=UPPER_LOWER_DAYS,
    )


def body_part_plan() -> WorkoutPlan:
    return WorkoutPlan(
        name="5-Day Body Part Split",
        description="Dedicated day for each major muscle group with maximum focus and volume",
        rationale=(
            "5-day split allows maximum volume and focus per muscle group. Each body part gets fully "
            "trained with 15-25 sets when recovered, optimal for intermediate to advanced lifters "
            "seeking maximum hypertrophy."
        ),
        days=BODY_PART_DAYS,
    )


def push_pull_legs_twice_plan() -> WorkoutPlan:
    # Mon-Sat, one session per day
    days = (
        replace(PUSH_DAY, day_of_week=1),
        replace(PULL_DAY, day_of_week=2),
        replace(LEGS_DAY, day_of_week=3),
        replace(PUSH_DAY, day_of_week=4, day_label="Push (Repeat)"),
        replace(PULL_DAY, day_of_week=5, day_label="Pull (Repeat)"),
        replace(LEGS_DAY, day_of_week=6, day_label="Legs (Repeat)"),
    )
    return WorkoutPlan(
        name="6-Day Push/Pull/Legs (2x Frequency)",
        description="PPL split performed twice per week for maximum frequency",
        rationale=(
            "Training each muscle group 2x/week maximizes muscle protein synthesis frequency. "
            "Ideal for advanced lifters who can recover from high training volumes."
        ),
        days=days,
    )


# ── Sport programs ───────────────────────────────────────────────────────

SPORT_PROGRAMS: dict[str, WorkoutPlan] = {}


def _reg_sport(sport: str, plan: WorkoutPlan) -> WorkoutPlan:
    SPORT_PROGRAMS[sport] = plan
    return plan


_reg_sport("football", WorkoutPlan(
    name="Football Strength & Power Program",
    description="Builds explosive power, speed, and functional strength for football",
    rationale=(
        "Football requires explosive power, speed, and collision strength. Training emphasizes "
        "compound movements for total body power, plyometrics for explosiveness, and sport-specific "
        "conditioning."
    ),
    days=(
        _day("Lower Body Power", 1, "lower_power", ["explosive_strength", "speed", "agility"], [
            _ex("Box Jumps", 4, "5", 120, ["quadriceps", "glutes", "calves"],
                "Develops explosive leg power for jumping and sprinting"),
            _ex("Back Squat", 4, "5-6", 180, ["quadriceps", "glutes"], "Heavy strength foundation for lower body"),
            _ex("Romanian Deadlift", 3, "8", 120, ["hamstrings", "glutes"], "Strengthens hamstrings (injury prevention)"),
            _ex("Sled Push", 5, "20m", 90, ["quadriceps", "glutes", "calves"],
                "Sport-specific: mimics blocking and driving through opponents"),
        ]),
        _day("Upper Body Strength", 3, "upper_strength", ["pushing_power", "core_stability"], [
            _ex("Bench Press", 4, "6-8", 180, ["pectoralis_major", "triceps"], "Builds pushing strength for blocking"),
            _ex("Pull-Ups", 4, "8-10", 120, ["latissimus_dorsi"], "Upper back strength for tackling"),
            _ex("Overhead Press", 3, "8", 120, ["deltoids"], "Shoulder stability and strength"),
            _ex("Plank Variations", 3, "60s", 60, ["rectus_abdominis", "obliques"],
                "Core stability for contact situations"),
        ]),
        _day("Speed & Agility", 5, "conditioning", ["speed", "agility", "endurance"], [
            _ex("Sprint Intervals", 8, "40m", 120, ["full_body_cardio"], "Develops acceleration and top-end speed"),
            _ex("Cone Drills", 6, "1 set", 90, ["quadriceps", "glutes", "core"], "Improves change of direction"),
            _ex("Trap Bar Deadlift", 3, "6", 180, ["hamstrings", "glutes", "back"],
                "Total body power and explosiveness"),
        ]),
    ),
))

_reg_sport("basketball", WorkoutPlan(
    name="Basketball Performance Program",
    description="Develops vertical jump, lateral agility, and endurance for basketball",
    rationale=(
        "Basketball demands vertical explosiveness, lateral agility, and endurance. Program focuses "
        "on plyometrics for jumping, single-leg stability, and rotational core strength for shooting power."
    ),
    days=(
        _day("Lower Body Explosiveness", 1, "lower_explosive", ["vertical_jump", "lateral_quickness"], [
            _ex("Depth Jumps", 4, "6", 120, ["quadriceps", "glutes", "calves"], "Develops reactive strength for jumping"),
            _ex("Bulgarian Split Squat", 3, "8 each leg", 90, ["quadriceps", "glutes"],
                "Single-leg strength for jumping and cutting"),
            _ex("Lateral Bounds", 4, "10 each side", 60, ["adductors", "abductors", "glutes"],
                "Mimics defensive sliding and cutting movements"),
        ]),
        _day("Upper Body & Core", 3, "upper_core", ["shoulder_health", "core_rotation"], [
            _ex("Push-Ups", 4, "15-20", 60, ["pectoralis", "triceps"], "Functional upper body strength"),
            _ex("Dumbbell Rows", 3, "12 each arm", 60, ["latissimus_dorsi"], "Back strength and shoulder stability"),
            _ex("Medicine Ball Rotational Throws", 4, "10 each side", 60, ["obliques", "core"],
                "Develops rotational power for shooting"),
        ]),
    ),
))

_reg_sport("volleyball", WorkoutPlan(
    name="Volleyball Performance Program",
    description="Develops vertical jump, shoulder health, and reactive power for volleyball",
    rationale=(
        "Volleyball requires explosive vertical jumping, shoulder stability for overhead motions, and "
        "reactive power. Program emphasizes plyometrics, rotator cuff health, and single-leg strength."
    ),
    days=(
        _day("Lower Body Power", 1, "lower_power", ["vertical_jump", "explosiveness"], [
            _ex("Box Jumps", 4, "6", 120, ["quadriceps", "glutes", "calves"], "Develop explosive jumping power"),
            _ex("Back Squat", 4, "6-8", 180, ["quadriceps", "glutes"], "Foundational leg strength"),
            _ex("Bulgarian Split Squat", 3, "10 each leg", 90, ["quadriceps", "glutes"], "Single-leg power for jumping"),
            _ex("Calf Raises", 4, "15-20", 60, ["gastrocnemius", "soleus"], "Ankle strength for jumping and landing"),
        ]),
        _day("Upper Body & Shoulder Health", 3, "upper", ["shoulder_stability", "rotator_cuff"], [
            _ex("Dumbbell Shoulder Press", 4, "10-12", 90, ["deltoids"], "Shoulder strength for spiking"),
            _ex("Face Pulls", 4, "15-20", 60, ["posterior_deltoid", "rotator_cuff"],
                "Rotator cuff health - critical for volleyball"),
            _ex("Lat Pulldown", 4, "10-12", 90, ["latissimus_dorsi"], "Pulling strength for blocking"),
            _ex("External Rotations", 3, "15 each arm", 60, ["rotator_cuff"], "Rotator cuff strengthening"),
        ]),
        _day("Plyometrics & Core", 5, "plyo", ["reactive_power", "core_stability"], [
            _ex("Depth Jumps", 4, "6", 120, ["quadriceps", "glutes"], "Reactive jumping power"),
            _ex("Medicine Ball Slams", 4, "10", 60, ["core", "shoulders", "lats"], "Explosive power for spiking"),
            _ex("Plank Variations", 3, "45s each", 60, ["rectus_abdominis", "obliques"],
                "Core stability for jumping and landing"),
        ]),
    ),
))

_reg_sport("boxing", WorkoutPlan(
    name="Boxing Strength & Conditioning",
    description="Builds punching power, endurance, and rotational strength for boxing",
    rationale=(
        "Boxing requires rotational power, shoulder endurance, and exceptional cardio. Program focuses "
        "on explosive movements, core rotation, and high-rep conditioning to match fight demands."
    ),
    days=(
        _day("Upper Body Power", 1, "upper_power", ["punching_power", "shoulder_endurance"], [
            _ex("Medicine Ball Chest Pass", 4, "10", 90, ["pectoralis_major", "triceps", "anterior_deltoid"],
                "Explosive pushing power for jabs and crosses"),
            _ex("Push-Ups", 4, "20-30", 60, ["pectoralis_major", "triceps"], "Endurance for repeated punching"),
            _ex("Pull-Ups", 4, "10-12", 90, ["latissimus_dorsi", "biceps"], "Pulling strength for clinch work"),
            _ex("Landmine Press", 3, "10 each arm", 60, ["deltoids", "core"],
                "Rotational pressing mimics punch mechanics"),
        ]),
        _day("Lower Body & Core", 3, "lower_core", ["leg_drive", "rotational_power"], [
            _ex("Back Squat", 4, "8-10", 120, ["quadriceps", "glutes"], "Leg strength for power generation"),
            _ex("Romanian Deadlift", 3, "10-12", 90, ["hamstrings", "glutes"], "Posterior chain for hip drive in punches"),
            _ex("Medicine Ball Rotational Throws", 4, "10 each side", 60, ["obliques", "core"],
                "Rotational power - core of punching mechanics"),
            _ex("Russian Twists", 3, "20 total", 60, ["obliques"], "Core rotation endurance"),
        ]),
        _day("Conditioning", 5, "conditioning", ["cardio_endurance", "recovery"], [
            _ex("Jump Rope", 5, "3 min rounds", 60, ["calves", "cardio"], "Footwork and cardio - boxing staple"),
            _ex("Burpees", 4, "15", 60, ["full_body"], "Full body conditioning"),
            _ex("Battle Ropes", 4, "30s", 60, ["shoulders", "core", "grip"], "Shoulder endurance and grip"),
            _ex("Shadow Boxing", 5, "3 min rounds", 60, ["full_body"], "Sport-specific movement patterns"),
        ]),
    ),
))

_reg_sport("swimming", WorkoutPlan(
    name="Swimming Strength Program",
    description="Develops pulling power, shoulder stability, and core strength for swimming",
    rationale=(
        "Swimming demands strong pulling muscles, exceptional core stability, and healthy shoulders. "
        "Program emphasizes lat strength for propulsion, core work for body position, and rotator "
        "cuff exercises for injury prevention."
    ),
    days=(
        _day("Pull Strength", 1, "pull", ["lat_strength", "pulling_power"], [
            _ex("Lat Pulldown", 4, "10-12", 90, ["latissimus_dorsi", "teres_major"],
                "Primary lat development for pulling through water"),
            _ex("Straight-Arm Pulldown", 4, "12-15", 60, ["latissimus_dorsi"], "Mimics catch phase of stroke"),
            _ex("Dumbbell Row", 3, "12 each arm", 60, ["latissimus_dorsi", "rhomboids"], "Unilateral pulling strength"),
            _ex("Face Pulls", 3, "15-20", 60, ["posterior_deltoid", "rotator_cuff"], "Shoulder health and rear delt"),
        ]),
        _day("Core & Stability", 3, "core", ["core_stability", "body_position"], [
            _ex("Plank", 4, "60s", 60, ["rectus_abdominis", "obliques"], "Core stability for streamlined position"),
            _ex("Flutter Kicks", 4, "30s", 45, ["hip_flexors", "core"], "Mimics kicking motion"),
            _ex("Superman Hold", 3, "30s", 45, ["erector_spinae", "glutes"], "Back extension for body position"),
            _ex("Dead Bug", 3, "10 each side", 45, ["rectus_abdominis", "obliques"], "Core stability with limb movement"),
        ]),
        _day("Lower Body & Shoulders", 5, "lower_shoulders", ["kick_power", "shoulder_stability"], [
            _ex("Goblet Squat", 4, "12-15", 90, ["quadriceps", "glutes"], "Leg strength for powerful kicks"),
            _ex("External Rotations", 3, "15 each arm", 45, ["rotator_cuff"], "Rotator cuff health - critical for swimmers"),
            _ex("Dumbbell Shoulder Press", 3, "10-12", 90, ["deltoids"], "Shoulder strength and stability"),
            _ex("Band Pull-Aparts", 3, "20", 45, ["posterior_deltoid", "rhomboids"], "Posterior shoulder health"),
        ]),
    ),
))


# ── Selection ────────────────────────────────────────────────────────────

def explain_split_choice(days_per_week: int, goal: str, sport: Optional[str] = None) -> str:
    """Return the template key the decision table picks for these inputs."""
    if goal == "sport_specific" and sport:
        if sport in SPORT_PROGRAMS:
            return f"sport:{sport}"
        return "push_pull_legs"
    if days_per_week <= 2:
        return "full_body"
    if days_per_week == 3:
        return "push_pull_legs"
    if days_per_week == 4:
        return "upper_lower"
    if days_per_week == 5:
        return "body_part"
    return "push_pull_legs_2x"


_BUILDERS: dict[str, Callable[[str, str, int], WorkoutPlan]] = {
    "full_body": full_body_plan,
    "push_pull_legs": lambda goal, level, days: push_pull_legs_plan(goal, level),
    "upper_lower": lambda goal, level, days: upper_lower_plan(),
    "body_part": lambda goal, level, days: body_part_plan(),
    "push_pull_legs_2x": lambda goal, level, days: push_pull_legs_twice_plan(),
}


def select_split(goal: str, experience_level: str, days_per_week: int, sport: Optional[str] = None) -> WorkoutPlan:
    template = explain_split_choice(days_per_week, goal, sport)
    if template.startswith("sport:"):
        plan = SPORT_PROGRAMS[template.split(":", 1)[1]]
    else:
        plan = _BUILDERS[template](goal, experience_level, days_per_week)
    logger.debug(
        "Selected split template %s",
        template,
        extra={"ctx_template": template, "ctx_days_per_week": days_per_week, "ctx_goal": goal},
    )
    return plan


def generate_workout_plan(
    request: WorkoutRequest,
    profile: Optional[HealthProfile] = None,
    catalog: HealthRulesCatalog = DEFAULT_CATALOG,
) -> WorkoutPlan:
    """Select a split and, when the profile calls for it, rewrite it for health."""
    plan = select_split(request.goal, request.experience_level, request.days_per_week, request.sport)
    if profile is not None and needs_health_filtering(profile):
        plan = filter_plan(plan, profile, catalog).plan
    return plan
