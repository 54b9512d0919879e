from .analysis import PageClassifier, classify
from .config import ClassifierConfig, SelectorConfig, Settings, load_settings
from .dom import PageDocument
from .locator import SelectorGenerator, synthesize
from .recording import ActionRecorder

__all__ = [
    "ActionRecorder",
    "ClassifierConfig",
    "PageClassifier",
    "PageDocument",
    "SelectorConfig",
    "SelectorGenerator",
    "Settings",
    "classify",
    "load_settings",
    "synthesize",
]
