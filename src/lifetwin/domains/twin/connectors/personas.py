"""Persona presets: pre-filled snapshots for onboarding and demos.

The condition-tracking personas describe a typical adult in that state, not
an emergency: every body and money metric is forecast, and the insights
range from cautions (prediabetic) to several warnings (diabetic_type2).
"""

from __future__ import annotations

from lifetwin.domains.twin.domain_logic.twin_models import TwinMode, UserSnapshot

PERSONA_NAMES = ["custom", "prediabetic", "diabetic_type2"]


def get_prediabetic_snapshot() -> UserSnapshot:
    """Typical pre-diabetic profile (HbA1c 5.7-6.4%, fasting glucose 100-125)."""
    return UserSnapshot(
        mode=TwinMode.LIFE,
        persona="prediabetic",
        height_cm=170,
        weight_kg=88,
        previous_weight_kg=86,
        steps_per_day=4500,
        workouts_per_week=1,
        resting_heart_rate=78,
        average_sleep_hours=6.2,
        blood_pressure_sys=135,
        blood_pressure_dia=88,
        hba1c=5.9,
        fasting_glucose=115,
        cholesterol=210,
        ldl_cholesterol=135,
        hdl_cholesterol=42,
        triglycerides=180,
        alt=38,
        ast=32,
        creatinine=1.1,
        egfr=85,
        monthly_income=5500,
        fixed_costs=2200,
        lifestyle_spend=800,
        current_savings=8500,
        total_debt=4500,
        debt_interest_rate=18,
        groceries_spend=450,
        eating_out_spend=380,
        alcohol_spend=120,
        late_night_food_spend=95,
        pharmacy_spend=85,
        subscription_spend=65,
    )


def get_diabetic_type2_snapshot() -> UserSnapshot:
    """Typical managed type 2 diabetic profile with higher pharmacy costs."""
    return UserSnapshot(
        mode=TwinMode.LIFE,
        persona="diabetic_type2",
        height_cm=175,
        weight_kg=95,
        previous_weight_kg=93,
        steps_per_day=3200,
        workouts_per_week=0,
        resting_heart_rate=82,
        average_sleep_hours=5.8,
        blood_pressure_sys=142,
        blood_pressure_dia=92,
        hba1c=7.2,
        fasting_glucose=145,
        cholesterol=235,
        ldl_cholesterol=155,
        hdl_cholesterol=38,
        triglycerides=220,
        alt=45,
        ast=40,
        creatinine=1.3,
        egfr=72,
        monthly_income=5000,
        fixed_costs=2400,
        lifestyle_spend=600,
        current_savings=5200,
        total_debt=8500,
        debt_interest_rate=22,
        groceries_spend=520,
        eating_out_spend=280,
        alcohol_spend=60,
        late_night_food_spend=45,
        pharmacy_spend=245,
        subscription_spend=55,
    )


def get_persona_snapshot(name: str) -> UserSnapshot:
    """Return the preset snapshot for a persona name."""
    if name == "prediabetic":
        return get_prediabetic_snapshot()
    if name == "diabetic_type2":
        return get_diabetic_type2_snapshot()
    if name == "custom":
        return UserSnapshot()
    raise ValueError(f"Unknown persona {name!r}; expected one of: {' | '.join(PERSONA_NAMES)}")
