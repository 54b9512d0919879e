from .action_recorder import ActionRecorder, is_interactive_element, is_recorder_element
from .page_loader import fetch_rendered_html, load_page

__all__ = [
    "ActionRecorder",
    "fetch_rendered_html",
    "is_interactive_element",
    "is_recorder_element",
    "load_page",
]
