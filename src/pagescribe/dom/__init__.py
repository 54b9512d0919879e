from .document import GeometryProvider, PageDocument, owner_document
from .element import accessible_name, effective_role, implicit_role, snapshot_element

__all__ = [
    "GeometryProvider",
    "PageDocument",
    "accessible_name",
    "effective_role",
    "implicit_role",
    "owner_document",
    "snapshot_element",
]
