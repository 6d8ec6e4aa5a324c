from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Optional

from anatom.validators import EngineInputError

# Population reference for the percentile estimate (US adults)
POPULATION_BMI_MEAN = 26.5
POPULATION_BMI_SD = 5.5


@dataclass(frozen=True)
class BMICategory:
    id: str
    name: str
    health_risk: str
    color: str
    description: str
    min_bmi: float
    max_bmi: float


@dataclass(frozen=True)
class IdealWeightRange:
    min_kg: float
    max_kg: float
    message: str


@dataclass(frozen=True)
class BMIResult:
    bmi: float
    category: str
    category_id: str
    health_risk: str
    color: str
    ideal_weight_range: IdealWeightRange
    weight_to_ideal: float   # negative = lose, positive = gain
    recommendation: str
    percentile: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


# WHO adult categories, checked in order with min <= bmi < max
BMI_CATEGORIES = (
    BMICategory("severely_underweight", "Severely Underweight", "Very High", "#9b59b6",
                "Significantly below healthy weight range", 0, 16),
    BMICategory("underweight", "Underweight", "Moderate", "#3498db", "Below healthy weight range", 16, 18.5),
    BMICategory("normal", "Normal", "Low", "#2ecc71", "Healthy weight range", 18.5, 25),
    BMICategory("overweight", "Overweight", "Moderate", "#f39c12", "Above healthy weight range", 25, 30),
    BMICategory("obese_1", "Obese Class I", "High", "#e67e22", "Obesity Class I", 30, 35),
    BMICategory("obese_2", "Obese Class II", "Very High", "#e74c3c", "Obesity Class II (Severe)", 35, 40),
    BMICategory("obese_3", "Obese Class III", "Extremely High", "#c0392b", "Obesity Class III (Morbid)", 40, 100),
)

RECOMMENDATIONS = {
    "severely_underweight": (
        "Priority: Increase caloric intake with nutrient-dense foods. Consider consulting a healthcare "
        "provider. Focus on strength training to build muscle mass."
    ),
    "underweight": (
        "Focus on gradual weight gain through a caloric surplus of 300-500 calories. Prioritize protein "
        "intake and resistance training."
    ),
    "normal": (
        "Maintain your healthy weight through balanced nutrition and regular exercise. Focus on your "
        "specific fitness goals."
    ),
    "overweight": (
        "A moderate caloric deficit of 300-500 calories and regular exercise can help reach a healthier "
        "weight. Focus on whole foods and strength training."
    ),
    "obese_1": (
        "Work with healthcare providers on a sustainable weight loss plan. Aim for 0.5-1kg loss per week "
        "through diet and exercise modifications."
    ),
    "obese_2": (
        "Medical supervision recommended for weight loss. Focus on building sustainable habits with "
        "moderate exercise and dietary changes."
    ),
    "obese_3": (
        "Consult with healthcare providers for comprehensive weight management. Consider working with a "
        "registered dietitian and exercise physiologist."
    ),
}

NORMAL_BMI_GOAL_RECOMMENDATIONS = {
    "muscle_gain": (
        "Your BMI is healthy for muscle building. Focus on a slight caloric surplus (200-300 cal) with "
        "high protein intake for lean gains."
    ),
    "fat_loss": (
        "Your BMI is already healthy. For body recomposition, focus on strength training while "
        "maintaining a slight deficit or maintenance calories."
    ),
}


def can_calculate_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> bool:
    return weight_kg is not None and height_cm is not None and weight_kg > 0 and height_cm > 0


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    if not can_calculate_bmi(weight_kg, height_cm):
        raise EngineInputError("Weight and height must be positive values")
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def bmi_category(bmi: float) -> BMICategory:
    for category in BMI_CATEGORIES:
        if category.min_bmi <= bmi < category.max_bmi:
            return category
    return BMI_CATEGORIES[-1]


def ideal_weight_range(height_cm: float) -> IdealWeightRange:
    height_sq = (height_cm / 100) ** 2
    low = round(18.5 * height_sq, 1)
    high = round(25 * height_sq, 1)
    return IdealWeightRange(
        min_kg=low,
        max_kg=high,
        message=f"For your height ({height_cm:g}cm), a healthy weight range is {low}-{high}kg",
    )


def weight_to_ideal(weight_kg: float, height_cm: float) -> float:
    bmi = calculate_bmi(weight_kg, height_cm)
    if bmi_category(bmi).id == "normal":
        return 0.0
    height_sq = (height_cm / 100) ** 2
    target_bmi = 18.5 if bmi < 18.5 else 25
    return round(target_bmi * height_sq - weight_kg, 1)


def bmi_recommendation(category_id: str, fitness_goal: Optional[str] = None) -> str:
    if category_id == "normal" and fitness_goal in NORMAL_BMI_GOAL_RECOMMENDATIONS:
        return NORMAL_BMI_GOAL_RECOMMENDATIONS[fitness_goal]
    return RECOMMENDATIONS.get(category_id, RECOMMENDATIONS["normal"])


def estimate_bmi_percentile(bmi: float) -> int:
    z = (bmi - POPULATION_BMI_MEAN) / POPULATION_BMI_SD
    return round(0.5 * (1 + math.erf(z / math.sqrt(2))) * 100)


def analyze_bmi(weight_kg: float, height_cm: float, fitness_goal: Optional[str] = None) -> BMIResult:
    bmi = calculate_bmi(weight_kg, height_cm)
    category = bmi_category(bmi)
    return BMIResult(
        bmi=bmi,
        category=category.name,
        category_id=category.id,
        health_risk=category.health_risk,
        color=category.color,
        ideal_weight_range=ideal_weight_range(height_cm),
        weight_to_ideal=weight_to_ideal(weight_kg, height_cm),
        recommendation=bmi_recommendation(category.id, fitness_goal),
        percentile=estimate_bmi_percentile(bmi),
    )
