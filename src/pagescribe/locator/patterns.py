from __future__ import annotations

import re
from typing import Iterable

import soupsieve as sv

# 动态/框架生成的 id 形态：即使当前唯一也认为不稳定
_DYNAMIC_ID_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^[a-f0-9]{8,}$", re.IGNORECASE),  # hex hash
    re.compile(r"^\d+$"),  # 纯数字
    re.compile(r"^[a-z]+-\d+$", re.IGNORECASE),  # prefix-123
    re.compile(r"^:r[a-z0-9]+:$"),  # React useId，如 :r0:
    re.compile(r"^ember\d+$"),
    re.compile(r"^ui-id-\d+$"),  # jQuery UI
    re.compile(r"^ext-\d+$"),  # ExtJS
    re.compile(r"^[a-z]+_[a-f0-9]{4,}$", re.IGNORECASE),  # prefix_hash
)

# 带连字符但属于工具/框架前缀的 class 不算“更具体”
_UTILITY_PREFIXES: tuple[str, ...] = ("ng-", "sc-")


def is_dynamic_id(element_id: str) -> bool:
    return any(p.search(element_id) for p in _DYNAMIC_ID_PATTERNS)


def compile_class_pattern(pattern: str) -> re.Pattern[str]:
    """`*` 是唯一通配符，其余字符按字面匹配，整串锚定。"""
    body = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(f"^{body}$")


class ClassFilter:
    def __init__(self, patterns: Iterable[str]) -> None:
        self.patterns = tuple(patterns)
        self._compiled = tuple(compile_class_pattern(p) for p in self.patterns)

    def is_framework_class(self, class_name: str) -> bool:
        return any(p.match(class_name) for p in self._compiled)

    def stable_classes(self, classes: Iterable[str]) -> list[str]:
        return [c for c in classes if not self.is_framework_class(c)]

    def ranked(self, classes: Iterable[str]) -> list[str]:
        return rank_classes(self.stable_classes(classes))


def _is_modifier(class_name: str) -> bool:
    return "-" in class_name and not class_name.startswith(_UTILITY_PREFIXES)


def rank_classes(classes: Iterable[str]) -> list[str]:
    """带连字符的（如 btn-primary）排前，其次名字更长的排前；同分保持原顺序。"""
    return sorted(classes, key=lambda c: (not _is_modifier(c), -len(c)))


def escape_identifier(ident: str) -> str:
    return sv.escape(ident)


# CSS 字符串里不能原样出现的字符，写成十六进制转义（如换行 -> \a ）
_CSS_STRING_HEX = frozenset("\n\r\f\x00")


def escape_attribute_value(value: str) -> str:
    out = []
    for ch in value:
        if ch in "\\\"":
            out.append("\\" + ch)
        elif ch in _CSS_STRING_HEX:
            out.append(f"\\{ord(ch):x} ")
        else:
            out.append(ch)
    return "".join(out)


def escape_contains_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').strip()


_UNESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def unescape_contains_text(text: str) -> str:
    return _UNESCAPE_RE.sub(r"\1", text)
