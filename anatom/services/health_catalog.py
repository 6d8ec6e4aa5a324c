"""Static health-rules catalog: physical limitations, medical conditions,
dietary preferences and food allergies.

The catalog is built once at import time and never mutated afterwards.
Services receive it as a parameter (``catalog=DEFAULT_CATALOG``) so tests
can inject small fixture catalogs instead of the full rule set.

Exercise matching against catalog fragments uses ``matches_fragment``:
case-insensitive substring containment in either direction, so a short
name such as "Press" matches many fragments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


@dataclass(frozen=True)
class NutritionRestriction:
    nutrient: str
    limit: Optional[float]
    reason: str


@dataclass(frozen=True)
class LimitationRule:
    """A physical limitation and the exercises it rules out or flags."""
    id: str
    name: str
    description: str
    contraindicated_exercises: tuple[str, ...]
    caution_exercises: tuple[str, ...]
    # Ordered (fragment, alternatives) pairs; order decides substitution priority
    safe_alternatives: tuple[tuple[str, tuple[str, ...]], ...]
    warnings: tuple[str, ...]


@dataclass(frozen=True)
class ConditionRule:
    """A medical condition with exercise restrictions and nutrition adjustments."""
    id: str
    name: str
    description: str
    avoid_exercises: tuple[str, ...] = ()
    caution_exercises: tuple[str, ...] = ()
    recommended_exercises: tuple[str, ...] = ()
    max_intensity: Optional[str] = None   # "low" | "moderate" | "high"
    exercise_warnings: tuple[str, ...] = ()
    nutrition_restrictions: tuple[NutritionRestriction, ...] = ()
    nutrition_recommendations: tuple[str, ...] = ()
    focus_nutrients: tuple[str, ...] = ()


@dataclass(frozen=True)
class DietaryPreferenceRule:
    id: str
    name: str
    description: str
    food_restrictions: tuple[str, ...]
    allowed_foods: tuple[str, ...]
    nutrition_considerations: tuple[str, ...]


@dataclass(frozen=True)
class FoodAllergyRule:
    id: str
    name: str
    description: str
    common_names: tuple[str, ...]
    hidden_sources: tuple[str, ...]
    severity: str   # "high" | "moderate" | "low"


@dataclass(frozen=True)
class HealthRulesCatalog:
    """Read-only lookup tables keyed by stable string ids."""
    limitations: Mapping[str, LimitationRule] = field(default_factory=dict)
    conditions: Mapping[str, ConditionRule] = field(default_factory=dict)
    dietary_preferences: Mapping[str, DietaryPreferenceRule] = field(default_factory=dict)
    food_allergies: Mapping[str, FoodAllergyRule] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        limitations: Iterable[LimitationRule] = (),
        conditions: Iterable[ConditionRule] = (),
        dietary_preferences: Iterable[DietaryPreferenceRule] = (),
        food_allergies: Iterable[FoodAllergyRule] = (),
    ) -> "HealthRulesCatalog":
        return cls(
            limitations=MappingProxyType({r.id: r for r in limitations}),
            conditions=MappingProxyType({r.id: r for r in conditions}),
            dietary_preferences=MappingProxyType({r.id: r for r in dietary_preferences}),
            food_allergies=MappingProxyType({r.id: r for r in food_allergies}),
        )

    def limitation(self, rule_id: str) -> Optional[LimitationRule]:
        return self.limitations.get(rule_id)

    def condition(self, rule_id: str) -> Optional[ConditionRule]:
        return self.conditions.get(rule_id)

    def dietary_preference(self, rule_id: str) -> Optional[DietaryPreferenceRule]:
        return self.dietary_preferences.get(rule_id)

    def food_allergy(self, rule_id: str) -> Optional[FoodAllergyRule]:
        return self.food_allergies.get(rule_id)

    def limitations_for(self, ids: Iterable[str]) -> list[LimitationRule]:
        """Resolve ids to rules in sorted id order, skipping unknown ids."""
        return [r for r in (self.limitation(i) for i in sorted(ids)) if r is not None]

    def conditions_for(self, ids: Iterable[str]) -> list[ConditionRule]:
        return [r for r in (self.condition(i) for i in sorted(ids)) if r is not None]

    def dietary_preferences_for(self, ids: Iterable[str]) -> list[DietaryPreferenceRule]:
        return [r for r in (self.dietary_preference(i) for i in sorted(ids)) if r is not None]

    def options(self) -> dict[str, list[dict]]:
        """Id/name/description listing of every rule, for settings screens."""
        return {
            "physical_limitations": [
                {"id": r.id, "name": r.name, "description": r.description} for r in self.limitations.values()
            ],
            "medical_conditions": [
                {"id": r.id, "name": r.name, "description": r.description} for r in self.conditions.values()
            ],
            "food_allergies": [
                {"id": r.id, "name": r.name, "description": r.description, "severity": r.severity}
                for r in self.food_allergies.values()
            ],
            "dietary_preferences": [
                {"id": r.id, "name": r.name, "description": r.description} for r in self.dietary_preferences.values()
            ],
        }


@dataclass(frozen=True)
class HealthProfile:
    """A user's health settings, as read by the calling layer."""
    physical_limitations: frozenset[str] = frozenset()
    medical_conditions: frozenset[str] = frozenset()
    dietary_preferences: frozenset[str] = frozenset()
    food_allergies: frozenset[str] = frozenset()

    @classmethod
    def of(
        cls,
        physical_limitations: Iterable[str] = (),
        medical_conditions: Iterable[str] = (),
        dietary_preferences: Iterable[str] = (),
        food_allergies: Iterable[str] = (),
    ) -> "HealthProfile":
        return cls(
            physical_limitations=frozenset(physical_limitations),
            medical_conditions=frozenset(medical_conditions),
            dietary_preferences=frozenset(dietary_preferences),
            food_allergies=frozenset(food_allergies),
        )

    @property
    def is_empty_for_training(self) -> bool:
        return not self.physical_limitations and not self.medical_conditions

    @property
    def is_empty_for_nutrition(self) -> bool:
        return not self.medical_conditions and not self.dietary_preferences


def matches_fragment(exercise_name: str, fragment: str) -> bool:
    """Case-insensitive containment in either direction."""
    name = (exercise_name or "").lower()
    frag = (fragment or "").lower()
    if not name or not frag:
        return False
    return frag in name or name in frag


def matches_any(exercise_name: str, fragments: Iterable[str]) -> bool:
    return any(matches_fragment(exercise_name, f) for f in fragments)


# ── Physical limitations ─────────────────────────────────────────────────

_LIMITATIONS: list[LimitationRule] = []
_CONDITIONS: list[ConditionRule] = []
_PREFERENCES: list[DietaryPreferenceRule] = []
_ALLERGIES: list[FoodAllergyRule] = []


def _limitation(
    id: str,
    name: str,
    description: str,
    contraindicated: list[str],
    caution: list[str],
    alternatives: dict[str, list[str]],
    warnings: list[str],
) -> None:
    _LIMITATIONS.append(LimitationRule(
        id=id,
        name=name,
        description=description,
        contraindicated_exercises=tuple(contraindicated),
        caution_exercises=tuple(caution),
        safe_alternatives=tuple((k, tuple(v)) for k, v in alternatives.items()),
        warnings=tuple(warnings),
    ))


_limitation(
    "lower_back_injury", "Lower Back Injury", "Pain or injury in the lumbar region",
    contraindicated=[
        "Deadlift", "Conventional Deadlift", "Romanian Deadlift",
        "Barbell Row", "Bent-Over Barbell Row", "Bent-Over Row",
        "Good Mornings", "Hyperextensions",
    ],
    caution=["Barbell Squat", "Back Squat", "Barbell Back Squat", "Leg Press", "Overhead Press"],
    alternatives={
        "Deadlift": ["Trap Bar Deadlift (lighter)", "Hip Thrusts", "Glute Bridge"],
        "Barbell Row": ["Chest-Supported Row", "Cable Rows", "Seated Cable Row"],
        "Barbell Squat": ["Leg Press", "Goblet Squat", "Bulgarian Split Squat"],
    },
    warnings=["Avoid spinal flexion under load", "Use a lifting belt for support", "Focus on core stability"],
)

_limitation(
    "upper_back_injury", "Upper Back Injury", "Pain or injury in the thoracic region",
    contraindicated=["Barbell Row", "Bent-Over Row", "Pull-Ups", "Lat Pulldown"],
    caution=["Overhead Press", "Bench Press", "Dumbbell Rows"],
    alternatives={
        "Pull-Ups": ["Lat Pulldown (light)", "Straight Arm Pulldown"],
        "Barbell Row": ["Chest-Supported Row", "Machine Row"],
    },
    warnings=["Avoid heavy pulling movements", "Focus on posture correction"],
)

_limitation(
    "neck_injury", "Neck Injury", "Pain or injury in the cervical spine",
    contraindicated=["Overhead Press", "Barbell Shrugs", "Upright Rows", "Behind-the-Neck Press", "Neck Curls"],
    caution=["Bench Press", "Shoulder Press", "Lat Pulldown"],
    alternatives={
        "Overhead Press": ["Landmine Press", "Machine Shoulder Press"],
        "Shrugs": ["Face Pulls", "Rear Delt Flyes"],
    },
    warnings=["Avoid neck hyperextension", "Keep head in neutral position"],
)

_limitation(
    "knee_injury", "Knee Injury", "Pain or injury in the knee joint",
    contraindicated=[
        "Barbell Squat", "Back Squat", "Front Squat",
        "Leg Extension", "Deep Lunges", "Box Jumps", "Depth Jumps",
        "Bulgarian Split Squat",
    ],
    caution=["Leg Press", "Walking Lunges", "Step-Ups"],
    alternatives={
        "Barbell Squat": ["Box Squat (above parallel)", "Leg Press (limited ROM)"],
        "Lunges": ["Hip Hinge movements", "Romanian Deadlift"],
        "Leg Extension": ["Terminal Knee Extension (TKE)"],
    },
    warnings=["Avoid deep knee flexion", "Control eccentric movements", "Avoid impact exercises"],
)

_limitation(
    "hip_injury", "Hip Injury", "Pain or injury in the hip joint",
    contraindicated=["Barbell Squat", "Sumo Deadlift", "Wide-Stance Squat", "Lateral Lunges", "Hip Abduction Machine"],
    caution=["Romanian Deadlift", "Lunges", "Step-Ups"],
    alternatives={
        "Barbell Squat": ["Leg Press (neutral foot position)", "Goblet Squat"],
        "Sumo Deadlift": ["Conventional Deadlift", "Trap Bar Deadlift"],
    },
    warnings=["Avoid extreme hip rotation", "Maintain neutral hip alignment"],
)

_limitation(
    "ankle_injury", "Ankle Injury", "Pain or injury in the ankle joint",
    contraindicated=["Calf Raises", "Box Jumps", "Jump Squats", "Running", "Sprints", "Depth Jumps", "Lateral Bounds"],
    caution=["Barbell Squat", "Lunges", "Step-Ups"],
    alternatives={
        "Calf Raises": ["Seated Calf Raise", "Toe Press on Leg Press"],
        "Box Jumps": ["Step-Ups", "Glute Bridges"],
    },
    warnings=["Avoid impact exercises", "Use heel lifts if needed for squats"],
)

_limitation(
    "shoulder_injury", "Shoulder Injury", "General shoulder pain or injury",
    contraindicated=[
        "Overhead Press", "Barbell Bench Press", "Dips",
        "Upright Rows", "Behind-the-Neck Press", "Lateral Raises (heavy)",
    ],
    caution=["Incline Press", "Dumbbell Press", "Chest Flyes"],
    alternatives={
        "Overhead Press": ["Landmine Press", "High Incline Press"],
        "Bench Press": ["Floor Press", "Neutral Grip Dumbbell Press"],
        "Dips": ["Close-Grip Push-Ups", "Tricep Pushdowns"],
    },
    warnings=["Avoid overhead movements", "Keep arms below shoulder height when possible"],
)

_limitation(
    "shoulder_impingement", "Shoulder Impingement", "Rotator cuff impingement syndrome",
    contraindicated=[
        "Upright Rows", "Behind-the-Neck Press", "Behind-the-Neck Pulldown",
        "Wide Grip Bench Press", "Overhead Press",
    ],
    caution=["Lateral Raises", "Front Raises", "Pull-Ups"],
    alternatives={
        "Upright Rows": ["Face Pulls", "High Pulls with external rotation"],
        "Lateral Raises": ["Scaption (raising at 30-degree angle)"],
        "Overhead Press": ["Landmine Press", "Z Press"],
    },
    warnings=["Avoid internal rotation under load", "Strengthen rotator cuff"],
)

_limitation(
    "wrist_injury", "Wrist Injury", "Pain or injury in the wrist",
    contraindicated=["Barbell Curl", "Front Squat", "Clean", "Push-Ups (standard)", "Wrist Curls", "Reverse Curls"],
    caution=["Bench Press", "Overhead Press", "Deadlift"],
    alternatives={
        "Barbell Curl": ["Hammer Curls", "Cable Curls with rope"],
        "Push-Ups": ["Push-Ups on handles", "Push-Ups on fists"],
        "Front Squat": ["Goblet Squat", "Safety Bar Squat"],
    },
    warnings=["Use wrist wraps for support", "Maintain neutral wrist position"],
)

_limitation(
    "elbow_injury", "Elbow Injury", "Pain or injury in the elbow (tennis/golfer's elbow)",
    contraindicated=["Skull Crushers", "Tricep Extensions", "Preacher Curls", "Barbell Curl", "Chin-Ups (supinated grip)"],
    caution=["Bench Press", "Pull-Ups", "Rows"],
    alternatives={
        "Skull Crushers": ["Tricep Pushdowns", "Close-Grip Bench Press"],
        "Barbell Curl": ["Hammer Curls", "Cable Curls"],
        "Chin-Ups": ["Neutral Grip Pull-Ups", "Lat Pulldown (neutral grip)"],
    },
    warnings=["Avoid extreme elbow flexion/extension under load", "Reduce grip intensity"],
)

_limitation(
    "wheelchair_user", "Wheelchair User", "Limited or no lower body mobility",
    contraindicated=[
        "Barbell Squat", "Deadlift", "Lunges", "Running", "Calf Raises",
        "Leg Press", "Leg Extension", "Leg Curl", "Box Jumps",
    ],
    caution=[],
    alternatives={
        "Full Body": ["Upper Body Focus Program"],
        "Cardio": ["Arm Ergometer", "Seated Boxing", "Battle Ropes (seated)"],
    },
    warnings=["Focus on upper body and core", "Include rotator cuff and postural exercises"],
)

_limitation(
    "limited_mobility", "Limited Mobility", "General movement restrictions",
    contraindicated=["Box Jumps", "Burpees", "Mountain Climbers", "Sprints"],
    caution=["All exercises - use machines when possible"],
    alternatives={
        "Free Weights": ["Machine equivalents", "Cable exercises"],
        "Cardio": ["Stationary Bike", "Elliptical", "Swimming"],
    },
    warnings=["Progress slowly", "Prioritize safety and stability"],
)


# ── Medical conditions ───────────────────────────────────────────────────

def _r(nutrient: str, limit: Optional[float], reason: str) -> NutritionRestriction:
    return NutritionRestriction(nutrient=nutrient, limit=limit, reason=reason)


_CONDITIONS.extend([
    ConditionRule(
        id="heart_disease",
        name="Heart Disease",
        description="Cardiovascular disease or history of heart problems",
        avoid_exercises=("Heavy Deadlifts", "Heavy Squats", "Valsalva-heavy exercises"),
        caution_exercises=("All resistance training - monitor heart rate",),
        recommended_exercises=("Walking", "Light Cardio", "Yoga", "Swimming"),
        max_intensity="moderate",
        exercise_warnings=(
            "Avoid Valsalva maneuver (breath holding under strain)",
            "Keep heart rate below prescribed limit",
            "Stop immediately if chest pain or dizziness occurs",
        ),
        nutrition_restrictions=(
            _r("saturatedFat", 10, "Keep saturated fat under 10% of calories"),
            _r("cholesterol", 200, "Limit cholesterol to 200mg/day"),
            _r("sodium", 1500, "Reduce sodium for blood pressure control"),
            _r("transFat", 0, "Avoid trans fats completely"),
        ),
        nutrition_recommendations=(
            "Increase omega-3 fatty acids",
            "Emphasize fiber-rich foods",
            "Choose lean proteins",
        ),
        focus_nutrients=("omega3", "fiber", "potassium", "magnesium"),
    ),
    ConditionRule(
        id="hypertension",
        name="Hypertension (High Blood Pressure)",
        description="Chronically elevated blood pressure",
        avoid_exercises=("Isometric holds (heavy)", "Overhead pressing (very heavy)"),
        caution_exercises=("Heavy resistance training", "High-intensity intervals"),
        recommended_exercises=("Moderate cardio", "Walking", "Swimming", "Cycling"),
        max_intensity="moderate",
        exercise_warnings=(
            "Avoid holding breath during exercises",
            "Keep rest periods adequate",
            "Monitor blood pressure before and after exercise",
        ),
        nutrition_restrictions=(
            _r("sodium", 1500, "Strict sodium limit for blood pressure control"),
        ),
        nutrition_recommendations=(
            "Follow DASH diet principles",
            "Increase potassium-rich foods",
            "Limit alcohol and caffeine",
        ),
        focus_nutrients=("potassium", "magnesium", "calcium", "fiber"),
    ),
    ConditionRule(
        id="high_cholesterol",
        name="High Cholesterol",
        description="Elevated LDL cholesterol levels",
        recommended_exercises=("Regular cardio", "Resistance training", "HIIT"),
        exercise_warnings=("Exercise helps improve cholesterol - aim for 150+ min/week",),
        nutrition_restrictions=(
            _r("saturatedFat", 7, "Limit saturated fat to 7% of calories"),
            _r("cholesterol", 200, "Limit dietary cholesterol"),
            _r("transFat", 0, "Eliminate trans fats"),
        ),
        nutrition_recommendations=(
            "Increase soluble fiber intake",
            "Add plant sterols/stanols",
            "Choose healthy fats (olive oil, avocado, nuts)",
        ),
        focus_nutrients=("fiber", "omega3", "plantSterols"),
    ),
    ConditionRule(
        id="diabetes_type_1",
        name="Type 1 Diabetes",
        description="Insulin-dependent diabetes mellitus",
        caution_exercises=("High-intensity exercise without carb management",),
        recommended_exercises=("Regular exercise with blood sugar monitoring",),
        exercise_warnings=(
            "Check blood sugar before, during, and after exercise",
            "Have fast-acting carbs available",
            "Be aware of hypoglycemia symptoms",
            "Coordinate exercise with insulin timing",
        ),
        nutrition_restrictions=(
            _r("carbs", 45, "Limit carbs to 45% of calories, spread throughout day"),
            _r("sugar", 25, "Minimize added sugars"),
        ),
        nutrition_recommendations=(
            "Choose low glycemic index foods",
            "Consistent carb intake at meals",
            "Include fiber with carbs to slow absorption",
            "Coordinate carb intake with insulin",
        ),
        focus_nutrients=("fiber", "protein", "chromium"),
    ),
    ConditionRule(
        id="diabetes_type_2",
        name="Type 2 Diabetes",
        description="Non-insulin dependent diabetes mellitus",
        recommended_exercises=("Resistance training", "Moderate cardio", "Walking after meals"),
        exercise_warnings=(
            "Exercise improves insulin sensitivity",
            "Monitor blood sugar levels",
            "Stay hydrated",
        ),
        nutrition_restrictions=(
            _r("carbs", 40, "Limit carbs to 40% of calories"),
            _r("sugar", 20, "Minimize added sugars"),
        ),
        nutrition_recommendations=(
            "Choose low GI foods (GI < 55)",
            "Increase fiber to 30g+ per day",
            "Include protein with each meal",
            "Time carbs around exercise",
        ),
        focus_nutrients=("fiber", "protein", "chromium", "magnesium"),
    ),
    ConditionRule(
        id="thyroid_disorder",
        name="Thyroid Disorder",
        description="Hypo or hyperthyroidism",
        caution_exercises=("High-intensity exercise if hyperthyroid",),
        recommended_exercises=("Moderate exercise as tolerated",),
        exercise_warnings=(
            "Adjust intensity based on symptoms",
            "Be aware of fatigue and heart rate changes",
        ),
        nutrition_recommendations=(
            "Ensure adequate iodine intake",
            "Include selenium-rich foods",
            "Avoid excessive goitrogenic foods if hypothyroid",
        ),
        focus_nutrients=("iodine", "selenium", "zinc"),
    ),
    ConditionRule(
        id="asthma",
        name="Asthma",
        description="Chronic respiratory condition",
        avoid_exercises=("Cold weather outdoor exercise without preparation",),
        caution_exercises=("High-intensity intervals", "Endurance events"),
        recommended_exercises=("Swimming", "Walking", "Yoga", "Interval training (with proper warm-up)"),
        exercise_warnings=(
            "Always have rescue inhaler available",
            "Proper warm-up is essential",
            "Avoid triggers (pollen, cold air, pollution)",
        ),
        nutrition_recommendations=(
            "Anti-inflammatory diet may help",
            "Include omega-3 rich foods",
            "Stay well hydrated",
        ),
        focus_nutrients=("omega3", "vitaminD", "magnesium"),
    ),
    ConditionRule(
        id="copd",
        name="COPD",
        description="Chronic obstructive pulmonary disease",
        avoid_exercises=("Very high intensity exercise",),
        caution_exercises=("All exercise - start slow, monitor oxygen",),
        recommended_exercises=("Walking", "Stationary cycling", "Light resistance training", "Breathing exercises"),
        max_intensity="low",
        exercise_warnings=(
            "Exercise helps improve lung function",
            "Use supplemental oxygen if prescribed",
            "Monitor oxygen saturation",
        ),
        nutrition_recommendations=(
            "Adequate protein for muscle maintenance",
            "Smaller, more frequent meals",
            "Stay well hydrated",
        ),
        focus_nutrients=("protein", "vitaminD", "calcium"),
    ),
    ConditionRule(
        id="kidney_disease",
        name="Kidney Disease",
        description="Chronic kidney disease or impaired kidney function",
        caution_exercises=("Very high intensity exercise",),
        recommended_exercises=("Moderate exercise as tolerated",),
        exercise_warnings=("Stay hydrated but follow fluid restrictions if prescribed",),
        nutrition_restrictions=(
            _r("protein", 0.8, "Limit protein to 0.8g/kg body weight"),
            _r("potassium", 2000, "May need to limit potassium"),
            _r("phosphorus", 800, "May need to limit phosphorus"),
            _r("sodium", 2000, "Limit sodium intake"),
        ),
        nutrition_recommendations=(
            "Work with a renal dietitian",
            "Choose high-quality proteins",
            "Monitor fluid intake",
        ),
    ),
    ConditionRule(
        id="osteoporosis",
        name="Osteoporosis",
        description="Low bone density",
        avoid_exercises=(
            "High-impact jumping", "Box Jumps", "Depth Jumps",
            "Forward bending under load", "Twisting movements under load",
        ),
        caution_exercises=("Heavy deadlifts", "Barbell rows"),
        recommended_exercises=("Weight-bearing exercise", "Resistance training", "Walking", "Tai Chi"),
        exercise_warnings=(
            "Avoid spinal flexion under load",
            "Focus on posture and balance",
            "Resistance training helps build bone",
        ),
        nutrition_recommendations=(
            "Calcium intake 1200mg+ daily",
            "Vitamin D 800-1000 IU daily",
            "Adequate protein for bone health",
            "Limit alcohol and caffeine",
        ),
        focus_nutrients=("calcium", "vitaminD", "protein", "magnesium", "vitaminK"),
    ),
    ConditionRule(
        id="osteoarthritis",
        name="Osteoarthritis",
        description="Degenerative joint disease",
        avoid_exercises=("High-impact activities", "Deep squats", "Heavy weights on affected joints"),
        caution_exercises=("All weight-bearing exercises on affected joints",),
        recommended_exercises=("Swimming", "Cycling", "Elliptical", "Range of motion exercises"),
        exercise_warnings=(
            "Low-impact exercise helps maintain joint health",
            "Strengthen muscles around affected joints",
            "Use appropriate range of motion",
        ),
        nutrition_recommendations=(
            "Anti-inflammatory diet",
            "Omega-3 fatty acids",
            "Maintain healthy weight",
            "Glucosamine/chondroitin may help",
        ),
        focus_nutrients=("omega3", "vitaminD", "vitaminC"),
    ),
    ConditionRule(
        id="pregnancy",
        name="Pregnancy",
        description="Currently pregnant",
        avoid_exercises=(
            "Contact sports", "High fall risk activities",
            "Supine exercises after 1st trimester", "Hot yoga",
            "Scuba diving", "Heavy lifting",
        ),
        caution_exercises=("All exercises - modify as needed",),
        recommended_exercises=("Walking", "Swimming", "Prenatal yoga", "Light resistance training"),
        exercise_warnings=(
            "Stay well hydrated",
            "Avoid overheating",
            "Stop if experiencing pain, bleeding, or dizziness",
            "Consult healthcare provider",
        ),
        nutrition_restrictions=(
            _r("caffeine", 200, "Limit caffeine to 200mg/day"),
        ),
        nutrition_recommendations=(
            "Adequate folate/folic acid",
            "Iron supplementation often needed",
            "Adequate calcium and vitamin D",
            "Additional 300-500 calories in 2nd/3rd trimester",
        ),
        focus_nutrients=("folate", "iron", "calcium", "vitaminD", "omega3", "protein"),
    ),
])


# ── Food allergies ───────────────────────────────────────────────────────

def _allergy(id: str, name: str, description: str, common: list[str], hidden: list[str], severity: str) -> None:
    _ALLERGIES.append(FoodAllergyRule(
        id=id, name=name, description=description,
        common_names=tuple(common), hidden_sources=tuple(hidden), severity=severity,
    ))


_allergy("peanuts", "Peanuts", "Peanut allergy - can cause severe anaphylaxis",
         ["peanut", "groundnut", "arachis oil"],
         ["Asian cuisine", "Candy", "Baked goods", "Some protein bars"], "high")
_allergy("tree_nuts", "Tree Nuts", "Allergy to tree nuts (almonds, walnuts, cashews, etc.)",
         ["almond", "walnut", "cashew", "pistachio", "pecan", "macadamia", "hazelnut", "brazil nut"],
         ["Baked goods", "Cereals", "Candy", "Nut butters", "Pesto"], "high")
_allergy("dairy", "Dairy", "Allergy to milk and dairy products",
         ["milk", "cheese", "butter", "cream", "yogurt", "whey", "casein", "lactose"],
         ["Baked goods", "Processed foods", "Some medications", "Protein powders"], "moderate")
_allergy("eggs", "Eggs", "Egg allergy",
         ["egg", "albumin", "globulin", "lysozyme", "mayonnaise"],
         ["Baked goods", "Pasta", "Some vaccines", "Foam on drinks"], "moderate")
_allergy("wheat", "Wheat", "Wheat allergy (different from celiac disease)",
         ["wheat", "flour", "bread", "pasta", "semolina", "spelt", "durum"],
         ["Soy sauce", "Beer", "Processed meats", "Gravies"], "moderate")
_allergy("gluten", "Gluten", "Celiac disease or gluten sensitivity",
         ["gluten", "wheat", "barley", "rye", "triticale"],
         ["Soy sauce", "Beer", "Oats (cross-contamination)", "Processed foods"], "moderate")
_allergy("soy", "Soy", "Soy allergy",
         ["soy", "soya", "edamame", "tofu", "tempeh", "miso"],
         ["Processed foods", "Asian cuisine", "Vegetable oil", "Protein bars"], "moderate")
_allergy("fish", "Fish", "Allergy to finned fish",
         ["fish", "salmon", "tuna", "cod", "anchovies"],
         ["Caesar dressing", "Worcestershire sauce", "Asian dishes"], "high")
_allergy("shellfish", "Shellfish", "Allergy to shellfish (crustaceans and/or mollusks)",
         ["shrimp", "crab", "lobster", "clam", "oyster", "mussel", "scallop"],
         ["Asian cuisine", "Seafood restaurants", "Glucosamine supplements"], "high")
_allergy("sesame", "Sesame", "Sesame allergy",
         ["sesame", "tahini", "hummus", "sesame oil"],
         ["Bread", "Middle Eastern food", "Asian cuisine", "Cosmetics"], "high")
_allergy("lactose", "Lactose Intolerance", "Inability to digest lactose (not an allergy)",
         ["milk", "lactose", "whey", "cream"],
         ["Processed foods", "Some medications", "Baked goods"], "low")
_allergy("fructose", "Fructose Intolerance", "Difficulty absorbing fructose",
         ["fructose", "high fructose corn syrup", "honey", "agave"],
         ["Processed foods", "Soft drinks", "Many fruits"], "low")


# ── Dietary preferences ──────────────────────────────────────────────────

def _preference(id: str, name: str, description: str, restricted: list[str], allowed: list[str], notes: list[str]) -> None:
    _PREFERENCES.append(DietaryPreferenceRule(
        id=id, name=name, description=description,
        food_restrictions=tuple(restricted), allowed_foods=tuple(allowed),
        nutrition_considerations=tuple(notes),
    ))


_preference("vegetarian", "Vegetarian", "No meat or fish, but allows dairy and eggs",
            ["meat", "poultry", "fish", "seafood"],
            ["dairy", "eggs", "vegetables", "fruits", "grains", "legumes", "nuts"],
            ["Ensure adequate protein from varied sources",
             "May need B12 supplementation",
             "Include iron-rich plant foods with vitamin C"])
_preference("vegan", "Vegan", "No animal products of any kind",
            ["meat", "poultry", "fish", "seafood", "dairy", "eggs", "honey"],
            ["vegetables", "fruits", "grains", "legumes", "nuts", "seeds", "plant milks"],
            ["B12 supplementation essential",
             "Combine proteins for complete amino acids",
             "May need vitamin D, omega-3, iron, zinc supplements",
             "Include calcium-fortified foods"])
_preference("pescatarian", "Pescatarian", "Vegetarian plus fish and seafood",
            ["meat", "poultry"],
            ["fish", "seafood", "dairy", "eggs", "vegetables", "fruits", "grains", "legumes"],
            ["Good source of omega-3 from fish",
             "Generally nutritionally complete",
             "Watch mercury levels in large fish"])
_preference("halal", "Halal", "Islamic dietary laws",
            ["pork", "alcohol", "non-halal meat", "blood products"],
            ["halal meat", "fish", "vegetables", "fruits", "grains", "dairy"],
            ["Nutritionally complete with halal protein sources",
             "Be aware of hidden alcohol in foods"])
_preference("kosher", "Kosher", "Jewish dietary laws",
            ["pork", "shellfish", "mixing meat and dairy", "non-kosher meat"],
            ["kosher meat", "fish with fins and scales", "vegetables", "fruits", "grains"],
            ["Nutritionally complete",
             "Meal planning needed for meat/dairy separation"])
_preference("keto", "Keto", "Very low carbohydrate, high fat diet",
            ["grains", "sugar", "most fruits", "starchy vegetables", "legumes"],
            ["meat", "fish", "eggs", "cheese", "nuts", "seeds", "low-carb vegetables", "oils"],
            ["Carbs limited to ~10% of calories (20-50g/day)",
             "Fat at ~70% of calories",
             "May need electrolyte supplementation",
             "Initial adaptation period common",
             "Monitor cholesterol levels"])
_preference("paleo", "Paleo", "Based on foods available to Paleolithic humans",
            ["grains", "legumes", "dairy", "refined sugar", "processed foods"],
            ["meat", "fish", "eggs", "vegetables", "fruits", "nuts", "seeds"],
            ["Generally nutrient-dense",
             "May need calcium from non-dairy sources",
             "Higher protein intake typical"])
_preference("low_fodmap", "Low FODMAP", "For IBS and digestive issues",
            ["wheat", "onions", "garlic", "many fruits", "dairy", "legumes"],
            ["meat", "fish", "eggs", "rice", "oats", "selected vegetables", "selected fruits"],
            ["Work with dietitian for proper implementation",
             "Elimination then reintroduction phases",
             "Ensure adequate fiber intake"])


DEFAULT_CATALOG = HealthRulesCatalog.build(
    limitations=_LIMITATIONS,
    conditions=_CONDITIONS,
    dietary_preferences=_PREFERENCES,
    food_allergies=_ALLERGIES,
)
