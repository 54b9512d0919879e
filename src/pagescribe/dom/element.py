"""
元素事实读取：标签名、属性、class、直接文本、隐式 ARIA role、可访问名称、元素快照。
"""
from __future__ import annotations

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from pagescribe.dom.document import PageDocument
from pagescribe.models import ElementInfo
from pagescribe.utils import clip, collapse_whitespace

# 隐式 ARIA role（显式 role 缺失时使用）
_IMPLICIT_ROLES: dict[str, str] = {
    "button": "button",
    "a": "link",
    "select": "combobox",
    "textarea": "textbox",
    "img": "img",
    "nav": "navigation",
    "main": "main",
    "header": "banner",
    "footer": "contentinfo",
    "aside": "complementary",
    "article": "article",
    "section": "region",
    "form": "form",
    "table": "table",
    "ul": "list",
    "ol": "list",
    "li": "listitem",
}

_INPUT_ROLES: dict[str, str] = {
    "submit": "button",
    "button": "button",
    "checkbox": "checkbox",
    "radio": "radio",
    "search": "searchbox",
}

_FORM_CONTROL_TAGS = frozenset({"input", "select", "textarea"})


def tag_name(element: Tag) -> str:
    return (element.name or "").lower()


def get_attr(element: Tag, name: str) -> str | None:
    value = element.get(name)
    if value is None:
        return None
    # bs4 会把 class/rel 等多值属性拆成 list
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def class_list(element: Tag) -> list[str]:
    value = element.get("class")
    if not value:
        return []
    if isinstance(value, str):
        value = value.split()
    return [c for c in value if c]


def parent_element(element: Tag) -> Tag | None:
    parent = element.parent
    if parent is None or isinstance(parent, BeautifulSoup):
        return None
    return parent


def element_children(element: Tag) -> list[Tag]:
    return [c for c in element.children if isinstance(c, Tag)]


def direct_text(element: Tag) -> str | None:
    """只取元素自身的文本节点（不含子元素文本），去首尾空白。"""
    parts = [
        str(node)
        for node in element.children
        if isinstance(node, NavigableString) and not isinstance(node, PreformattedString)
    ]
    text = "".join(parts).strip()
    return text or None


def text_content(element: Tag) -> str:
    return element.get_text()


def implicit_role(element: Tag) -> str | None:
    tag = tag_name(element)
    if tag == "input":
        input_type = (get_attr(element, "type") or "").lower()
        return _INPUT_ROLES.get(input_type, "textbox")
    return _IMPLICIT_ROLES.get(tag)


def effective_role(element: Tag) -> str | None:
    return get_attr(element, "role") or implicit_role(element)


def accessible_name(document: PageDocument, element: Tag) -> str | None:
    """优先级：aria-label > aria-labelledby > 关联 <label> > 直接文本。"""
    aria_label = get_attr(element, "aria-label")
    if aria_label:
        return aria_label

    labelled_by = get_attr(element, "aria-labelledby")
    if labelled_by:
        label_el = document.get_element_by_id(labelled_by)
        if label_el is not None:
            return text_content(label_el).strip() or None

    if tag_name(element) in _FORM_CONTROL_TAGS:
        element_id = get_attr(element, "id")
        if element_id:
            for label in document.query_all("label[for]"):
                if get_attr(label, "for") == element_id:
                    return text_content(label).strip() or None

    return direct_text(element)


def snapshot_element(document: PageDocument, element: Tag) -> ElementInfo:
    attributes = {name: get_attr(element, name) or "" for name in element.attrs}
    rect = document.bounding_rect(element)
    if rect is not None and rect.width <= 0:
        rect = None

    text = clip(collapse_whitespace(text_content(element)), 100)
    info = ElementInfo(
        tag_name=tag_name(element),
        id=get_attr(element, "id") or None,
        class_list=class_list(element),
        attributes=attributes,
        rect=rect,
        role=get_attr(element, "role") or None,
        implicit_role=implicit_role(element),
        aria_label=get_attr(element, "aria-label") or None,
        aria_labelledby=get_attr(element, "aria-labelledby") or None,
        accessible_name=accessible_name(document, element),
        direct_text=direct_text(element),
        text_content=text or None,
    )
    if tag_name(element) == "input":
        info.input_type = (get_attr(element, "type") or "text").lower()
        info.placeholder = get_attr(element, "placeholder") or None
        info.name = get_attr(element, "name") or None
    return info
