from __future__ import annotations

import os
from dataclasses import dataclass, field

# 框架/构建工具生成的 class 名模式（`*` 为唯一通配符，整串匹配）
DEFAULT_EXCLUDED_CLASS_PATTERNS: tuple[str, ...] = (
    "ng-*",  # Angular
    "sc-*",  # styled-components
    "css-*",  # Emotion / CSS-in-JS
    "jsx-*",  # styled-jsx
    "_*",  # CSS Modules hash
    "style__*",  # CSS Modules
    "Mui*",  # Material-UI
    "chakra-*",  # Chakra UI
    "ant-*",  # Ant Design
    "tw-*",  # Tailwind 动态类
)


@dataclass(frozen=True)
class SelectorConfig:
    """Selector 生成配置，录制会话期间只读。"""

    excluded_class_patterns: tuple[str, ...] = DEFAULT_EXCLUDED_CLASS_PATTERNS
    css_path_max_depth: int = 5
    text_max_length: int = 50
    max_alternatives: int = 5


@dataclass(frozen=True)
class ClassifierConfig:
    """页面分类的经验阈值。"""

    login_max_fields: int = 4
    list_similarity_threshold: float = 0.5
    list_min_children: int = 3


@dataclass(frozen=True)
class Settings:
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    page_timeout_ms: int = 30000
    html_parser: str = "lxml"


def _split_patterns(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return DEFAULT_EXCLUDED_CLASS_PATTERNS
    patterns = tuple(p.strip() for p in raw.split(",") if p.strip())
    return patterns or DEFAULT_EXCLUDED_CLASS_PATTERNS


def load_settings() -> Settings:
    selector = SelectorConfig(
        excluded_class_patterns=_split_patterns(os.getenv("PAGESCRIBE_EXCLUDED_CLASS_PATTERNS")),
        css_path_max_depth=int(os.getenv("PAGESCRIBE_CSS_PATH_MAX_DEPTH", "5")),
        text_max_length=int(os.getenv("PAGESCRIBE_TEXT_MAX_LENGTH", "50")),
    )
    classifier = ClassifierConfig(
        login_max_fields=int(os.getenv("PAGESCRIBE_LOGIN_MAX_FIELDS", "4")),
        list_similarity_threshold=float(os.getenv("PAGESCRIBE_LIST_SIMILARITY_THRESHOLD", "0.5")),
    )
    page_timeout_ms = int(os.getenv("PAGESCRIBE_PAGE_TIMEOUT_MS", "30000"))
    html_parser = os.getenv("PAGESCRIBE_HTML_PARSER", "lxml")
    return Settings(
        selector=selector,
        classifier=classifier,
        page_timeout_ms=page_timeout_ms,
        html_parser=html_parser,
    )
