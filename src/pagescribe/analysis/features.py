"""
页面特征提取

每个特征都是一个独立的查询，互不依赖；任何一个探测失败（非法标记、查询异常）
都退化为 False/0，而不是中断整个分析。
"""
from __future__ import annotations

from typing import Callable, TypeVar

from bs4 import Tag

from pagescribe.config import ClassifierConfig
from pagescribe.dom.document import PageDocument
from pagescribe.dom.element import element_children, get_attr, tag_name
from pagescribe.models import PageFeatures
from pagescribe.utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

EMAIL_SELECTOR = (
    'input[type="email"], input[name*="email"], input[id*="email"], input[autocomplete="email"]'
)
USERNAME_SELECTOR = (
    'input[name*="user"], input[id*="user"], input[name*="login"], input[autocomplete="username"]'
)
CONFIRM_PASSWORD_SELECTORS = (
    'input[name*="confirm"]',
    'input[name*="password2"]',
    'input[name*="password_confirm"]',
    'input[id*="confirm"]',
    'input[placeholder*="confirm" i]',
)
SEARCH_INPUT_SELECTOR = (
    'input[type="search"], input[name*="search"], input[id*="search"], '
    'input[placeholder*="search" i], input[aria-label*="search" i], '
    '[role="searchbox"], [role="search"] input'
)
RESULTS_CONTAINER_SELECTOR = (
    '[class*="result"], [id*="result"], [class*="search-result"], '
    '[aria-label*="result" i], [role="list"]'
)
LIST_CONTAINER_SELECTOR = (
    '[class*="grid"], [class*="list"], [class*="card"], [role="list"], ul[class], ol[class]'
)
MAIN_CONTENT_SELECTOR = 'main, [role="main"], article, .content, #content'
IMAGE_SELECTOR = 'img, picture, [role="img"]'

_LAYOUT_TABLE_ROLES = frozenset({"presentation", "none"})


def _probe(name: str, fn: Callable[[], T], default: T) -> T:
    try:
        return fn()
    except Exception as e:
        logger.debug("特征 %s 探测失败，使用默认值: %s", name, e)
        return default


def _exists(document: PageDocument, selector: str) -> bool:
    return document.query_one(selector) is not None


def is_data_table(table: Tag) -> bool:
    """有表头、多于一行、且不是布局表格。"""
    has_headers = table.select_one("thead th, th") is not None
    has_multiple_rows = len(table.select("tbody tr, tr")) > 1
    role = (get_attr(table, "role") or "").strip().lower()
    return has_headers and has_multiple_rows and role not in _LAYOUT_TABLE_ROLES


def has_repeating_children(
    containers: list[Tag],
    *,
    min_children: int = 3,
    threshold: float = 0.5,
) -> bool:
    """
    集合渲染的信号：容器（至少 min_children 个子元素）中，
    与第一个子元素同标签的后续子元素占比超过 threshold。
    """
    for container in containers:
        children = element_children(container)
        if len(children) < max(min_children, 2):
            continue
        first_tag = tag_name(children[0])
        similar = sum(1 for child in children[1:] if tag_name(child) == first_tag)
        if similar / (len(children) - 1) > threshold:
            return True
    return False


def count_form_fields(document: PageDocument) -> int:
    count = sum(len(form.select("input, select, textarea")) for form in document.query_all("form"))
    if count == 0:
        count = len(document.query_all("input"))
    return count


def detect_features(document: PageDocument, config: ClassifierConfig | None = None) -> PageFeatures:
    config = config or ClassifierConfig()
    d = document

    return PageFeatures(
        has_password_field=_probe("password", lambda: _exists(d, 'input[type="password"]'), False),
        has_email_field=_probe("email", lambda: _exists(d, EMAIL_SELECTOR), False),
        has_username_field=_probe("username", lambda: _exists(d, USERNAME_SELECTOR), False),
        has_confirm_password=_probe(
            "confirm_password",
            lambda: any(_exists(d, s) for s in CONFIRM_PASSWORD_SELECTORS),
            False,
        ),
        has_search_input=_probe("search", lambda: _exists(d, SEARCH_INPUT_SELECTOR), False),
        has_results_container=_probe("results", lambda: _exists(d, RESULTS_CONTAINER_SELECTOR), False),
        has_table=_probe("table", lambda: any(is_data_table(t) for t in d.query_all("table")), False),
        has_list=_probe(
            "list",
            lambda: has_repeating_children(
                d.query_all(LIST_CONTAINER_SELECTOR),
                min_children=config.list_min_children,
                threshold=config.list_similarity_threshold,
            ),
            False,
        ),
        has_textarea=_probe("textarea", lambda: _exists(d, "textarea"), False),
        has_single_h1=_probe("single_h1", lambda: len(d.query_all("h1")) == 1, False),
        has_main_content=_probe("main_content", lambda: _exists(d, MAIN_CONTENT_SELECTOR), False),
        has_images=_probe("images", lambda: _exists(d, IMAGE_SELECTOR), False),
        form_field_count=_probe("form_field_count", lambda: count_form_fields(d), 0),
    )
