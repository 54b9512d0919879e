from __future__ import annotations

import uuid
from datetime import datetime, timezone

from bs4 import Tag

from pagescribe.analysis.classifier import PageClassifier
from pagescribe.dom.document import PageDocument
from pagescribe.dom.element import get_attr, snapshot_element, tag_name
from pagescribe.locator.generator import SelectorGenerator
from pagescribe.models import ActionType, PageType, RecordedAction, RecordingSession, SelectorResult
from pagescribe.utils import get_logger, preview_text

logger = get_logger(__name__)

# 录制端自身注入的 UI（高亮层、提示框等）
RECORDER_ID_PREFIX = "pagescribe-recorder-"

_INTERACTIVE_TAGS = frozenset({
    "a", "button", "input", "select", "textarea", "label", "details", "summary",
})

_INTERACTIVE_ROLES = frozenset({
    "button", "link", "checkbox", "radio", "textbox",
    "combobox", "listbox", "menuitem", "tab", "switch",
})


def _mask_value(value: str | None, *, input_type: str | None) -> str | None:
    if value is None:
        return None
    if input_type and input_type.lower() == "password":
        return "***"
    return value


def is_recorder_element(element: Tag) -> bool:
    return (get_attr(element, "id") or "").startswith(RECORDER_ID_PREFIX)


def is_interactive_element(element: Tag) -> bool:
    if tag_name(element) in _INTERACTIVE_TAGS:
        return True
    role = get_attr(element, "role")
    if role and role in _INTERACTIVE_ROLES:
        return True
    return element.has_attr("onclick") or element.has_attr("tabindex")


class ActionRecorder:
    """
    把“对某个元素做了某个动作”转换为可回放的 RecordedAction：
    - selector 由 SelectorGenerator 生成（主结果 + 备选）
    - 附带元素快照和当前页面类型
    - 密码输入值脱敏

    不负责事件监听/防抖，也不负责持久化；调用方把结果挂到自己的动作日志上。
    """

    def __init__(
        self,
        document: PageDocument,
        *,
        generator: SelectorGenerator | None = None,
        classifier: PageClassifier | None = None,
    ) -> None:
        self.document = document
        self.generator = generator or SelectorGenerator()
        self.classifier = classifier or PageClassifier()
        self._page_type: PageType | None = None

    def start_session(self, name: str, url: str) -> RecordingSession:
        analysis = self.classifier.classify(self.document)
        self._page_type = analysis.page_type
        logger.info("开始录制 %s: 页面类型 %s (%d%%)", name, analysis.page_type, analysis.confidence)
        return RecordingSession(
            id=uuid.uuid4().hex,
            name=name,
            url=url,
            page_type=analysis.page_type,
        )

    def stop_session(self, session: RecordingSession) -> RecordingSession:
        session.end_time = datetime.now(timezone.utc)
        return session

    def record(
        self,
        action_type: ActionType,
        element: Tag,
        *,
        value: str | None = None,
        url: str | None = None,
    ) -> RecordedAction | None:
        if is_recorder_element(element):
            return None

        info = snapshot_element(self.document, element)
        selector = self.generator.generate(element, self.document)
        action = RecordedAction(
            id=uuid.uuid4().hex,
            type=action_type,
            selector=selector,
            element=info,
            value=_mask_value(value, input_type=info.input_type),
            url=url,
            page_type=self._page_type,
        )
        logger.debug(
            "录制动作 %s: %s (%s)",
            action_type,
            selector.selector,
            preview_text(info.text_content, limit=40),
        )
        return action

    def preview(self, element: Tag) -> SelectorResult | None:
        """悬停预览：只对可交互元素生成 selector。"""
        if is_recorder_element(element) or not is_interactive_element(element):
            return None
        return self.generator.generate(element, self.document)
