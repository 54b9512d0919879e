from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SelectorStrategy = Literal[
    "data-testid",
    "data-cy",
    "data-test",
    "aria-label",
    "role+name",
    "id",
    "text",
    "class",
    "css-path",
]

PageType = Literal[
    "login-form",
    "registration-form",
    "contact-form",
    "search",
    "table",
    "list",
    "detail",
    "generic",
]

AssertionType = Literal[
    "visibility",
    "text-content",
    "count",
    "attribute",
    "url",
    "form-validation",
    "accessibility",
]

ActionType = Literal["click", "type", "navigate", "select", "check", "submit", "scroll", "hover"]

MAX_ALTERNATIVES = 5


class _CamelModel(BaseModel):
    """序列化为 camelCase（与录制端的 JSON 约定一致），构造时接受 snake_case。"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ========== Selector 相关模型 ==========


class AlternativeSelector(_CamelModel):
    selector: str
    strategy: SelectorStrategy
    confidence: int = Field(ge=0, le=100)


class SelectorResult(_CamelModel):
    selector: str = Field(min_length=1)
    strategy: SelectorStrategy
    confidence: int = Field(ge=0, le=100, description="按策略静态赋值，仅用于排序/展示")
    is_unique: bool
    alternatives: list[AlternativeSelector] = Field(default_factory=list, max_length=MAX_ALTERNATIVES)


class Rect(_CamelModel):
    x: float
    y: float
    width: float
    height: float


class ElementInfo(_CamelModel):
    """元素快照：调用时刻从文档读出的只读事实。"""

    tag_name: str
    id: str | None = None
    class_list: list[str] = Field(default_factory=list)
    attributes: dict[str, str] = Field(default_factory=dict)
    rect: Rect | None = None
    role: str | None = None
    implicit_role: str | None = None
    aria_label: str | None = None
    aria_labelledby: str | None = None
    accessible_name: str | None = None
    direct_text: str | None = None
    text_content: str | None = Field(default=None, description="空白规整后截断到 100 字符")
    input_type: str | None = None
    placeholder: str | None = None
    name: str | None = None


# ========== 页面分类相关模型 ==========


class PageFeatures(_CamelModel):
    has_password_field: bool = False
    has_email_field: bool = False
    has_username_field: bool = False
    has_confirm_password: bool = False
    has_search_input: bool = False
    has_results_container: bool = False
    has_table: bool = False
    has_list: bool = False
    has_textarea: bool = False
    has_single_h1: bool = False
    has_main_content: bool = False
    has_images: bool = False
    form_field_count: int = Field(default=0, ge=0)


class AssertionTemplate(_CamelModel):
    type: AssertionType
    description: str
    code: str = Field(description="测试代码片段，仅作文本输出，不会被执行")


class ClassificationResult(_CamelModel):
    page_type: PageType
    confidence: int = Field(ge=0, le=100)
    features: PageFeatures
    suggested_assertions: list[AssertionTemplate] = Field(default_factory=list)


# ========== 录制相关模型 ==========


class RecordedAction(_CamelModel):
    id: str
    type: ActionType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    selector: SelectorResult
    element: ElementInfo
    value: str | None = None
    url: str | None = None
    page_type: PageType | None = None


class RecordingSession(_CamelModel):
    id: str
    name: str
    url: str
    start_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: datetime | None = None
    actions: list[RecordedAction] = Field(default_factory=list)
    page_type: PageType | None = None
