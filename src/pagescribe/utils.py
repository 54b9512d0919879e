"""通用小工具：日志、文本规整、HTML/JSON 文件读写。"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path

LOG_LEVEL_ENV = "PAGESCRIBE_LOG_LEVEL"
_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    获取 pagescribe 的模块 logger。

    同名 logger 只挂一个 handler；级别取环境变量 PAGESCRIBE_LOG_LEVEL，
    缺省或无法识别时为 INFO。
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)

    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "INFO").upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    return logger


_WS_RE = re.compile(r"\s+")


def collapse_whitespace(s: str) -> str:
    return _WS_RE.sub(" ", s).strip()


def clip(s: str, limit: int, *, ellipsis: str = "") -> str:
    """截断到 limit 个字符；超长时追加 ellipsis（不计入 limit）。"""
    if len(s) <= limit:
        return s
    return s[:limit] + ellipsis


def preview_text(value: str | None, limit: int = 80) -> str | None:
    """日志里展示元素文本/输入值用。"""
    if value is None:
        return None
    return clip(collapse_whitespace(value), limit, ellipsis="…")


def read_html(path: Path) -> str:
    # 页面存档偶尔带非法字节
    return path.read_text(encoding="utf-8", errors="replace")


def write_json(path: Path, obj: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")
