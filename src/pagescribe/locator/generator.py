from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import soupsieve as sv
from bs4 import Tag

from pagescribe.config import SelectorConfig
from pagescribe.dom.document import PageDocument
from pagescribe.dom.element import (
    accessible_name,
    class_list,
    direct_text,
    effective_role,
    element_children,
    get_attr,
    parent_element,
    tag_name,
)
from pagescribe.locator.patterns import (
    ClassFilter,
    escape_attribute_value,
    escape_contains_text,
    escape_identifier,
    is_dynamic_id,
)
from pagescribe.locator.uniqueness import identifies
from pagescribe.models import (
    MAX_ALTERNATIVES,
    AlternativeSelector,
    SelectorResult,
    SelectorStrategy,
)
from pagescribe.utils import get_logger

logger = get_logger(__name__)

# 文本定位只用于可交互元素和标题
_TEXT_TAGS = frozenset({"button", "a", "label", "span", "h1", "h2", "h3", "h4", "h5", "h6"})

_ROLE_NAME_MAX = 30
FALLBACK_CONFIDENCE = 30


def _tag_selector(element: Tag) -> str:
    # lxml 保留 fb:like 这类带冒号的标签名，需转义
    tag = tag_name(element)
    return escape_identifier(tag) if tag else "*"


@dataclass(frozen=True)
class _Strategy:
    name: SelectorStrategy
    confidence: int
    generate: Callable[[PageDocument, Tag], "str | None"]


class SelectorGenerator:
    """
    为单个元素生成最佳 selector 及备选：
    - 按优先级依次尝试 9 种策略（测试属性 > 无障碍属性 > id > 文本 > class > 结构路径）
    - 第一个唯一命中的作为主结果，后续唯一命中的最多 5 个作为备选
    - 全部失败时退化为绝对 :nth-child 路径（不保证唯一）
    """

    def __init__(self, config: SelectorConfig | None = None) -> None:
        self.config = config or SelectorConfig()
        self._classes = ClassFilter(self.config.excluded_class_patterns)
        self._max_alternatives = min(self.config.max_alternatives, MAX_ALTERNATIVES)
        self._strategies: tuple[_Strategy, ...] = (
            _Strategy("data-testid", 100, self._data_attr("data-testid")),
            _Strategy("data-cy", 100, self._data_attr("data-cy")),
            _Strategy("data-test", 100, self._data_attr("data-test")),
            _Strategy("aria-label", 95, self._aria_label),
            _Strategy("role+name", 90, self._role_with_name),
            _Strategy("id", 85, self._unique_id),
            _Strategy("text", 80, self._text_selector),
            _Strategy("class", 60, self._stable_class_selector),
            _Strategy("css-path", 40, self._css_path),
        )

    def generate(self, element: Tag, document: PageDocument | None = None) -> SelectorResult:
        document = document or PageDocument.of(element)

        best: AlternativeSelector | None = None
        alternatives: list[AlternativeSelector] = []

        for strategy in self._strategies:
            selector = self._try_strategy(strategy, document, element)
            if not selector or not identifies(document, selector, element):
                continue

            candidate = AlternativeSelector(
                selector=selector,
                strategy=strategy.name,
                confidence=strategy.confidence,
            )
            if best is None:
                best = candidate
            else:
                alternatives.append(candidate)
                if len(alternatives) >= self._max_alternatives:
                    break

        if best is not None:
            logger.debug("selector[%s]: %s", best.strategy, best.selector)
            return SelectorResult(
                selector=best.selector,
                strategy=best.strategy,
                confidence=best.confidence,
                is_unique=True,
                alternatives=alternatives,
            )

        # 兜底：绝对路径无条件接受，is_unique 如实反映
        path = self._css_path(document, element) or self._absolute_path(document, element)
        logger.debug("selector 兜底路径: %s", path)
        return SelectorResult(
            selector=path,
            strategy="css-path",
            confidence=FALLBACK_CONFIDENCE,
            is_unique=identifies(document, path, element),
            alternatives=[],
        )

    def _try_strategy(self, strategy: _Strategy, document: PageDocument, element: Tag) -> str | None:
        try:
            return strategy.generate(document, element)
        except sv.SelectorSyntaxError as e:
            logger.debug("策略 %s 生成失败: %s", strategy.name, e)
            return None

    # ========== 各策略 ==========

    @staticmethod
    def _data_attr(attr: str) -> Callable[[PageDocument, Tag], "str | None"]:
        def generate(_document: PageDocument, element: Tag) -> str | None:
            value = get_attr(element, attr)
            return f'[{attr}="{escape_attribute_value(value)}"]' if value else None

        return generate

    def _aria_label(self, _document: PageDocument, element: Tag) -> str | None:
        label = get_attr(element, "aria-label")
        if not label:
            return None
        return f'[aria-label="{escape_attribute_value(label)}"]'

    def _role_with_name(self, document: PageDocument, element: Tag) -> str | None:
        role = effective_role(element)
        if not role:
            return None
        role_sel = f'[role="{escape_attribute_value(role)}"]'

        name = accessible_name(document, element)
        if name:
            text = escape_contains_text(name[:_ROLE_NAME_MAX])
            ranked = self._classes.ranked(class_list(element))
            candidates = [
                f'{role_sel}[aria-label="{escape_attribute_value(name)}"]',
                f'{role_sel}:contains("{text}")',
            ]
            candidates += [f'{role_sel}.{escape_identifier(c)}:contains("{text}")' for c in ranked]
            candidates += [f"{role_sel}.{escape_identifier(c)}" for c in ranked]
            for candidate in candidates:
                if identifies(document, candidate, element):
                    return candidate

        if identifies(document, role_sel, element):
            return role_sel
        return None

    def _unique_id(self, document: PageDocument, element: Tag) -> str | None:
        element_id = get_attr(element, "id")
        if not element_id or is_dynamic_id(element_id):
            return None
        selector = f"#{escape_identifier(element_id)}"
        return selector if identifies(document, selector, element) else None

    def _text_selector(self, document: PageDocument, element: Tag) -> str | None:
        tag = tag_name(element)
        if tag not in _TEXT_TAGS:
            return None

        text = direct_text(element)
        if not text or len(text) > self.config.text_max_length:
            return None

        escaped = escape_contains_text(text)
        selector = f'{_tag_selector(element)}:contains("{escaped}")'
        if identifies(document, selector, element):
            return selector

        # 文本不唯一：叠加一个区分性的 class
        for cls in self._classes.ranked(class_list(element)):
            selector = f'{_tag_selector(element)}.{escape_identifier(cls)}:contains("{escaped}")'
            if identifies(document, selector, element):
                return selector
        return None

    def _stable_class_selector(self, document: PageDocument, element: Tag) -> str | None:
        ranked = self._classes.ranked(class_list(element))
        if not ranked:
            return None

        tag = _tag_selector(element)
        escaped = [escape_identifier(c) for c in ranked]

        candidates = [f"{tag}.{c}" for c in escaped]
        if len(escaped) >= 2:
            for i in range(min(len(escaped), 3)):
                for j in range(i + 1, min(len(escaped), 4)):
                    candidates.append(f"{tag}.{escaped[i]}.{escaped[j]}")
            if len(escaped) >= 3:
                candidates.append(tag + "".join(f".{c}" for c in escaped[:3]))

        for candidate in candidates:
            if identifies(document, candidate, element):
                return candidate
        return None

    def _css_path(self, document: PageDocument, element: Tag) -> str | None:
        body = document.body
        path: list[str] = []
        current: Tag | None = element
        depth = 0

        while current is not None and current is not body and depth < self.config.css_path_max_depth:
            tag = tag_name(current)
            parent = parent_element(current)
            if parent is not None:
                siblings = [c for c in element_children(parent) if tag_name(c) == tag]
                if len(siblings) > 1:
                    index = next(i for i, s in enumerate(siblings, start=1) if s is current)
                    path.insert(0, f"{_tag_selector(current)}:nth-of-type({index})")
                else:
                    path.insert(0, _tag_selector(current))
            else:
                path.insert(0, _tag_selector(current))
            current = parent
            depth += 1

        if not path:
            return None
        selector = " > ".join(path)
        return selector if identifies(document, selector, element) else None

    def _absolute_path(self, document: PageDocument, element: Tag) -> str:
        root = document.document_element
        path: list[str] = []
        current: Tag | None = element

        while current is not None and current is not root:
            tag = _tag_selector(current)
            parent = parent_element(current)
            if parent is not None:
                index = next(i for i, c in enumerate(element_children(parent), start=1) if c is current)
                path.insert(0, f"{tag}:nth-child({index})")
            else:
                path.insert(0, tag)
            current = parent

        return " > ".join(path) or _tag_selector(element)


_default_generator = SelectorGenerator()


def synthesize(element: Tag, config: SelectorConfig | None = None) -> SelectorResult:
    generator = _default_generator if config is None else SelectorGenerator(config)
    return generator.generate(element)
