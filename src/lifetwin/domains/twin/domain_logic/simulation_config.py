"""Simulation configuration: every threshold, slope and point value the engine uses.

The table is immutable and versioned as a unit. Changing any value changes
simulation output deterministically; nothing in the engine inlines these
numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

CONFIG_VERSION = "2025.1"


# ---------------------------------------------------------------------------
# Scoring rules (0-100 composite scores)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BmiScoring:
    underweight: float = 18.5
    normal: float = 24.9
    overweight: float = 29.9
    obese: float = 30.0
    points_normal: int = 15
    points_overweight: int = 5
    points_obese: int = -10


@dataclass(frozen=True)
class StepsScoring:
    high: float = 8000
    medium: float = 5000
    points_high: int = 10
    points_medium: int = 5
    points_low: int = -5


@dataclass(frozen=True)
class WorkoutScoring:
    high: float = 3
    medium: float = 1
    points_high: int = 10
    points_medium: int = 5
    points_none: int = -10


@dataclass(frozen=True)
class HeartRateScoring:
    athlete: float = 60
    normal: float = 75
    poor: float = 90
    points_athlete: int = 10
    points_normal: int = 5
    points_poor: int = -10


@dataclass(frozen=True)
class BloodPressureScoring:
    systolic_normal: float = 120
    diastolic_normal: float = 80
    systolic_high: float = 140
    diastolic_high: float = 90
    points_optimal: int = 5
    points_high: int = -15


@dataclass(frozen=True)
class LabScoring:
    hba1c_normal: float = 5.7
    hba1c_high: float = 6.4
    hba1c_points_normal: int = 5
    hba1c_points_elevated: int = -5
    hba1c_points_high: int = -10
    ldl_optimal: float = 100
    ldl_high: float = 160
    ldl_points_optimal: int = 5
    ldl_points_high: int = -10
    egfr_healthy: float = 90
    egfr_low: float = 60
    egfr_points_healthy: int = 5
    egfr_points_low: int = -15


@dataclass(frozen=True)
class SleepScoring:
    min_hours: float = 7
    max_hours: float = 9
    poor_hours: float = 6
    points_good: int = 5
    points_poor: int = -5


@dataclass(frozen=True)
class SavingsRateScoring:
    high: float = 0.20
    medium: float = 0.10
    points_high: int = 20
    points_medium: int = 10
    points_positive: int = 0
    points_negative: int = -20


@dataclass(frozen=True)
class RunwayScoring:
    safe: float = 6
    warning: float = 3
    danger: float = 1
    points_safe: int = 15
    points_warning: int = 5
    points_danger: int = 0
    points_critical: int = -10


@dataclass(frozen=True)
class DebtScoring:
    critical_ratio: float = 3     # debt > 3x monthly income
    warning_ratio: float = 1
    points_critical: int = -15
    points_warning: int = -5


@dataclass(frozen=True)
class SpendingScoring:
    bad_habits_threshold: float = 400
    subscriptions_threshold: float = 100
    points_bad_habits: int = -15
    points_subscriptions: int = -5


@dataclass(frozen=True)
class ScoringConfig:
    base_score: int = 50
    min_score: int = 0
    max_score: int = 100
    bmi: BmiScoring = field(default_factory=BmiScoring)
    steps: StepsScoring = field(default_factory=StepsScoring)
    workouts: WorkoutScoring = field(default_factory=WorkoutScoring)
    heart_rate: HeartRateScoring = field(default_factory=HeartRateScoring)
    blood_pressure: BloodPressureScoring = field(default_factory=BloodPressureScoring)
    labs: LabScoring = field(default_factory=LabScoring)
    sleep: SleepScoring = field(default_factory=SleepScoring)
    savings_rate: SavingsRateScoring = field(default_factory=SavingsRateScoring)
    runway: RunwayScoring = field(default_factory=RunwayScoring)
    debt: DebtScoring = field(default_factory=DebtScoring)
    spending: SpendingScoring = field(default_factory=SpendingScoring)


# ---------------------------------------------------------------------------
# Simulation physics (monthly slopes, slope selectors, clamping bounds)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WeightPhysics:
    base_monthly_change: float = 0.3
    bad_food_spend_threshold: float = 400
    bad_food_penalty: float = 0.2
    active_workouts: float = 3
    active_steps: float = 8000
    active_bonus: float = 0.6
    moderate_workouts: float = 1
    moderate_steps: float = 5000
    moderate_bonus: float = 0.3
    max_monthly_improvement: float = -0.8


@dataclass(frozen=True)
class Hba1cPhysics:
    junk_spend_high: float = 600
    junk_spend_med: float = 300
    junk_spend_low: float = 100
    alcohol_high: float = 200
    alcohol_med: float = 100
    steps_sedentary: float = 3000
    steps_active: float = 8000
    steps_athlete: float = 10000
    workouts_high: float = 4
    sleep_poor: float = 6
    slope_junk_high: float = 0.04
    slope_junk_med: float = 0.02
    slope_junk_low: float = -0.01
    slope_alcohol_high: float = 0.02
    slope_alcohol_med: float = 0.01
    slope_sedentary: float = 0.02
    slope_active: float = -0.02
    slope_athlete: float = -0.03
    slope_no_gym: float = 0.01
    slope_high_gym: float = -0.02
    slope_poor_sleep: float = 0.01
    # improved path: adjustments added on top of the baseline slope
    improve_steps_cut: float = 5000
    improve_junk_high: float = -0.04
    improve_junk_med: float = -0.02
    improve_sedentary: float = -0.03
    improve_active: float = -0.01
    max_drop: float = -0.15
    min_value: float = 4.0
    max_value: float = 14.0


@dataclass(frozen=True)
class LdlPhysics:
    bad_fat_high: float = 400
    bad_fat_med: float = 200
    bad_fat_low: float = 100
    alcohol_high: float = 150
    workouts_high: float = 4
    workouts_med: float = 2
    bmi_obese: float = 30
    slope_bad_fat_high: float = 1.5
    slope_bad_fat_med: float = 0.5
    slope_bad_fat_low: float = -0.5
    slope_alcohol: float = 0.5
    slope_gym_high: float = -1.0
    slope_gym_med: float = -0.5
    slope_gym_none: float = 0.5
    slope_obese: float = 0.5
    improved_cardio_impact: float = 3.0
    max_drop: float = -4.0
    baseline_min: float = 40
    improved_min: float = 60


@dataclass(frozen=True)
class SleepPhysics:
    default_hours: float = 7.0
    target_hours: float = 7.5
    months_to_target: int = 6
    fluctuation: float = 0.1      # baseline wobbles within +/- this many hours
    fluctuation_period: int = 3


@dataclass(frozen=True)
class HeartRatePhysics:
    default_bpm: float = 70
    sedentary_slope: float = 0.2
    improved_slope: float = -0.5
    floor_bpm: float = 48


@dataclass(frozen=True)
class MealsCostPhysics:
    days_per_month: float = 30
    default_daily_cost: float = 25
    baseline_slope: float = 0.5   # lifestyle creep, $/day per month
    improved_slope: float = -1.0  # cooking at home
    improved_floor: float = 15


@dataclass(frozen=True)
class ExercisePhysics:
    minutes_per_workout: float = 45
    steps_per_minute: float = 300
    max_step_minutes: float = 30
    default_minutes: float = 15
    sedentary_slope: float = -0.5
    baseline_floor: float = 5
    target_minutes: float = 45
    ramp_months: int = 12          # months to move from current to target
    improved_ceiling: float = 60


@dataclass(frozen=True)
class MoneyPhysics:
    reduce_eating_out: float = 0.5
    reduce_alcohol: float = 0.5
    reduce_late_night: float = 0.8
    reduce_subscriptions: float = 0.5
    reduce_general_discretionary: float = 0.1
    investment_multiplier: float = 0.05   # extra return on the saved cuts
    junk_spend_target: float = 0.5        # improved junk spend as share of baseline
    health_redistribution: float = 0.2    # share of junk spend moved to health spend


@dataclass(frozen=True)
class SimulationPhysics:
    weight: WeightPhysics = field(default_factory=WeightPhysics)
    hba1c: Hba1cPhysics = field(default_factory=Hba1cPhysics)
    ldl: LdlPhysics = field(default_factory=LdlPhysics)
    sleep: SleepPhysics = field(default_factory=SleepPhysics)
    heart_rate: HeartRatePhysics = field(default_factory=HeartRatePhysics)
    meals_cost: MealsCostPhysics = field(default_factory=MealsCostPhysics)
    exercise: ExercisePhysics = field(default_factory=ExercisePhysics)
    money: MoneyPhysics = field(default_factory=MoneyPhysics)


# ---------------------------------------------------------------------------
# Reporting thresholds (trend labels and insight triggers only)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthReporting:
    weight_diff: float = 0
    bp_high_sys: float = 130
    bp_high_dia: float = 85
    bp_warn_sys: float = 140
    bp_warn_dia: float = 90
    hba1c_warn: float = 6.5
    hba1c_caution: float = 5.7
    glucose_normal: float = 100
    glucose_diabetic: float = 126
    ldl_warn: float = 160
    ldl_caution: float = 100
    hdl_good: float = 60
    hdl_bad: float = 40
    trig_good: float = 150
    trig_warn: float = 200
    alt_good: float = 40
    alt_warn: float = 50
    alcohol_trigger: float = 100
    creatinine_good: float = 1.2
    egfr_good: float = 90
    egfr_bad: float = 60
    hr_good: float = 70
    sleep_poor: float = 6


@dataclass(frozen=True)
class MoneyReporting:
    savings_rate_high: float = 15   # percent
    savings_rate_med: float = 5
    runway_safe: float = 3          # months
    runway_critical: float = 1
    eating_out_high: float = 300
    fixed_overhead_ratio: float = 0.6
    debt_income_ratio: float = 3
    debt_interest_high: float = 10  # APR percent
    lifestyle_ratio: float = 0.3


@dataclass(frozen=True)
class RecommendationThresholds:
    take_out_spend: float = 150
    take_out_saving_share: float = 0.6
    alcohol_spend: float = 80
    alcohol_saving_share: float = 0.5
    steps_target: float = 8000
    savings_gain_min: float = 500
    debt_interest_high: float = 10
    max_recommendations: int = 4


@dataclass(frozen=True)
class ReportingConfig:
    health: HealthReporting = field(default_factory=HealthReporting)
    money: MoneyReporting = field(default_factory=MoneyReporting)
    recommendations: RecommendationThresholds = field(default_factory=RecommendationThresholds)


@dataclass(frozen=True)
class SimulationConfig:
    """The complete, versioned rule table for one engine run."""

    version: str = CONFIG_VERSION
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    simulation: SimulationPhysics = field(default_factory=SimulationPhysics)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)


DEFAULT_CONFIG = SimulationConfig()
