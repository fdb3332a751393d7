"""
Domain Constants

This module contains constant definitions valid across the domain layer.

The weights and thresholds below are empirically chosen tuning parameters,
not derived quantities. Change them here, never inline in the services.
"""

# Home advantage applied by the default strategy (fraction of 100%)
HOME_ADVANTAGE = 0.15
# Scale of the form-index difference in the default strategy
FORM_FACTOR_SCALE = 0.1

# Data windows (matches)
H2H_LIMIT = 20
FORM_WINDOW = 5
EXTENDED_FORM_WINDOW = 10
SCORING_RATE_WINDOW = 10
MOMENTUM_WINDOW = 5

# Match listing and league overview
MATCHES_PAGE_DEFAULT = 100
MATCHES_PAGE_MAX = 500
RECENT_RESULTS_LIMIT = 10
TOP_SCORERS_LIMIT = 5

# Neutral priors for teams without scored matches
NEUTRAL_FORM_INDEX = 0.5
NEUTRAL_AVG_GOALS = 1.0
DEFAULT_SCORING_RATE = 0.7

# Momentum
MOMENTUM_DECAY = 0.8
MOMENTUM_WIN_POINTS = 3.0
MOMENTUM_DRAW_POINTS = 1.0

# Rating estimate
ELO_BASELINE = 1500
ELO_WIN_BONUS = 15
ELO_LOSS_PENALTY = 10
ELO_GOAL_DIFF_FACTOR = 5
ELO_SCALE = 400
ELO_WIN_SHARE = 85.0
ELO_AVERAGE_GOALS = 2.5
ELO_STRENGTH_DIVISOR = 200
ELO_HOME_GOAL_SHARE = 0.6
ELO_AWAY_GOAL_SHARE = 0.4
ELO_STRENGTH_GOAL_FACTOR = 0.1

# Attack-defense
ATTACK_DEFENSE_HOME_MULTIPLIER = 1.15
MIN_DEFENSE = 0.5
ATTACK_DEFENSE_GAP_THRESHOLD = 0.5
ATTACK_DEFENSE_DRAW_FLOOR = 15.0

# Poisson
POISSON_HOME_MULTIPLIER = 1.1
POISSON_MAX_GOALS = 5

# Closed-form goal markets: line -> (decay constant, upper cap)
GOAL_MARKET_FLOOR = 5.0
GOAL_MARKET_CURVES = {
    "over_15": (0.8, 95.0),
    "over_25": (0.6, 90.0),
    "over_35": (0.4, 85.0),
}

# Ensemble weights (order is the evaluation order)
ENSEMBLE_WEIGHTS = {
    "default": 0.3,
    "attack_defense": 0.25,
    "poisson": 0.25,
    "elo": 0.2,
}

# Simulated forest
FOREST_TREES = 100
FOREST_ATTACK_MARGIN = 0.3
FOREST_DRAW_WIN_RATE_GAP = 0.1

# Seasonal trends
MOMENTUM_ADJUSTMENT = 5.0
TREND_MIN_PROBABILITY = 5.0
TREND_MAX_PROBABILITY = 85.0

# Fixed confidences
CONFIDENCE_POISSON = 0.8
CONFIDENCE_ELO = 0.75
CONFIDENCE_ENSEMBLE = 0.85
CONFIDENCE_FOREST = 0.82
CONFIDENCE_SEASONAL = 0.7

# Tolerance for outcome probabilities summing to 100
PROBABILITY_SUM_TOLERANCE = 1.0

# Catalogue of available algorithms
ALGORITHMS_METADATA = {
    "default": {
        "name": "Default (Form + H2H)",
        "description": "Head-to-head record adjusted by recent form and home advantage",
        "speed": "fast",
    },
    "attack_defense": {
        "name": "Attack-Defense Analysis",
        "description": "Compares attacking output against the opponent's defensive record",
        "speed": "fast",
    },
    "poisson": {
        "name": "Poisson Distribution",
        "description": "Scoreline probabilities from independent Poisson goal models",
        "speed": "medium",
    },
    "elo": {
        "name": "ELO Rating System",
        "description": "Relative strength rating converted to win probabilities",
        "speed": "fast",
    },
    "machine_learning": {
        "name": "Machine Learning Ensemble",
        "description": "Weighted average of the default, attack-defense, Poisson and ELO models",
        "speed": "slow",
    },
    "random_forest": {
        "name": "Random Forest",
        "description": "Vote of rule-based decision trees over strength features",
        "speed": "slow",
    },
    "seasonal_trends": {
        "name": "Seasonal Trends",
        "description": "Default prediction shifted by recent momentum",
        "speed": "medium",
    },
}
