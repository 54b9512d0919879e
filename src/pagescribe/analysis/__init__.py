from .assertions import suggest_assertions
from .classifier import PageClassifier, calculate_confidence, classify, classify_features
from .features import detect_features

__all__ = [
    "PageClassifier",
    "calculate_confidence",
    "classify",
    "classify_features",
    "detect_features",
    "suggest_assertions",
]
