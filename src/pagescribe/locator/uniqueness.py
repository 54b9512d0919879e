"""
Selector 唯一性校验

`:contains("...")` 不是标准 CSS（Cypress/jQuery 扩展），不能交给查询引擎：
先查询基础 selector，再手动统计文本包含目标子串的元素。
"""
from __future__ import annotations

import re

import soupsieve as sv
from bs4 import Tag

from pagescribe.dom.document import PageDocument
from pagescribe.dom.element import text_content
from pagescribe.locator.patterns import unescape_contains_text
from pagescribe.utils import get_logger

logger = get_logger(__name__)

_CONTAINS_RE = re.compile(r'^(.+?):contains\("(.+)"\)$', re.DOTALL)
# CSS 字符串字面量（含转义），用于判断 :contains( 是否出现在引号之外
_QUOTED_RE = re.compile(r'"(?:\\.|[^"\\])*"|\'(?:\\.|[^\'\\])*\'', re.DOTALL)


def split_contains(selector: str) -> tuple[str, str] | None:
    """拆出 (基础 selector, 未转义的目标文本)；非 :contains 形式返回 None。"""
    m = _CONTAINS_RE.match(selector)
    if not m:
        return None
    base, text = m.groups()
    return base, unescape_contains_text(text)


def resolve(document: PageDocument, selector: str) -> list[Tag]:
    """解析 selector 得到匹配元素；非法 selector 抛出 SelectorSyntaxError。"""
    if ":contains(" in _QUOTED_RE.sub('""', selector):
        parts = split_contains(selector)
        if parts is None:
            raise sv.SelectorSyntaxError(f"无法解析的 :contains selector: {selector}", selector, 0)
        base, search_text = parts
        needle = search_text.strip()
        return [el for el in document.query_all(base) if needle in text_content(el).strip()]
    return document.query_all(selector)


def _safe_resolve(document: PageDocument, selector: str) -> list[Tag] | None:
    try:
        return resolve(document, selector)
    except sv.SelectorSyntaxError as e:
        logger.debug("忽略非法 selector %r: %s", selector, e)
        return None


def is_unique(document: PageDocument, selector: str) -> bool:
    matches = _safe_resolve(document, selector)
    return matches is not None and len(matches) == 1


def identifies(document: PageDocument, selector: str, element: Tag) -> bool:
    """唯一匹配且匹配到的正是目标元素。"""
    matches = _safe_resolve(document, selector)
    return matches is not None and len(matches) == 1 and matches[0] is element
