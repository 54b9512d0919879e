"""
用 Playwright 打开页面并取渲染后的 HTML，供 selector 生成 / 页面分类在内存文档上运行。
"""
from __future__ import annotations

from pagescribe.dom.document import PageDocument
from pagescribe.utils import get_logger

logger = get_logger(__name__)

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def fetch_rendered_html(url: str, *, timeout_ms: int = 30000, settle_ms: int = 1000) -> str:
    try:
        from playwright.sync_api import sync_playwright  # type: ignore[import-not-found]
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "缺少依赖 playwright。请先安装：pip install -e '.[recorder]' 或 pip install playwright，并运行：playwright install chromium"
        ) from e

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        try:
            context = browser.new_context(
                user_agent=_USER_AGENT,
                viewport={"width": 1280, "height": 720},
            )
            page = context.new_page()
            logger.info("加载页面: %s", url)
            page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            # 给动态内容一点时间
            page.wait_for_timeout(settle_ms)
            return page.content()
        finally:
            browser.close()


def load_page(url: str, *, timeout_ms: int = 30000, parser: str = "lxml") -> PageDocument:
    return PageDocument.from_html(fetch_rendered_html(url, timeout_ms=timeout_ms), parser=parser)
