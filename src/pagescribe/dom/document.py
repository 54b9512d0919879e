"""
文档访问层

所有对文档的查询都经过这里：按 selector 查询、属性/文本读取、树导航、可选的几何信息。
底层是 BeautifulSoup（lxml 解析器）+ soupsieve CSS 引擎，
因此 selector 生成和页面分类可以在内存文档上测试，无需真实浏览器。
"""
from __future__ import annotations

from typing import Callable

from bs4 import BeautifulSoup, Tag

from pagescribe.models import Rect

# 调用方（例如 Playwright 采集端）可注入的几何信息提供者
GeometryProvider = Callable[[Tag], "Rect | None"]


def owner_document(element: Tag) -> Tag:
    """返回元素所属的文档根（BeautifulSoup 对象）；游离子树返回其最顶层节点。"""
    current = element
    while current.parent is not None:
        current = current.parent
    return current


class PageDocument:
    def __init__(self, soup: Tag, *, geometry: GeometryProvider | None = None) -> None:
        self.soup = soup
        self._geometry = geometry

    @classmethod
    def from_html(
        cls,
        html: str,
        *,
        parser: str = "lxml",
        geometry: GeometryProvider | None = None,
    ) -> PageDocument:
        return cls(BeautifulSoup(html, parser), geometry=geometry)

    @classmethod
    def of(cls, element: Tag, *, geometry: GeometryProvider | None = None) -> PageDocument:
        return cls(owner_document(element), geometry=geometry)

    @classmethod
    def wrap(cls, obj: object) -> PageDocument:
        if isinstance(obj, PageDocument):
            return obj
        if isinstance(obj, BeautifulSoup):
            return cls(obj)
        if isinstance(obj, Tag):
            return cls.of(obj)
        if isinstance(obj, str):
            return cls.from_html(obj)
        raise TypeError(f"不支持的文档类型: {type(obj).__name__}")

    @property
    def document_element(self) -> Tag | None:
        if not isinstance(self.soup, BeautifulSoup):
            return self.soup
        for child in self.soup.children:
            if isinstance(child, Tag):
                return child
        return None

    @property
    def body(self) -> Tag | None:
        return self.soup.find("body")

    @property
    def title(self) -> str:
        node = self.soup.find("title")
        return node.get_text(strip=True) if node else ""

    def query_all(self, selector: str, scope: Tag | None = None) -> list[Tag]:
        """等价于 querySelectorAll；非法 selector 抛出 soupsieve.SelectorSyntaxError。"""
        return list((scope or self.soup).select(selector))

    def query_one(self, selector: str, scope: Tag | None = None) -> Tag | None:
        return (scope or self.soup).select_one(selector)

    def get_element_by_id(self, element_id: str) -> Tag | None:
        if not element_id:
            return None
        return self.soup.find(attrs={"id": element_id})

    def bounding_rect(self, element: Tag) -> Rect | None:
        if self._geometry is None:
            return None
        return self._geometry(element)
