from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv

from pagescribe.analysis import PageClassifier
from pagescribe.config import load_settings
from pagescribe.dom import PageDocument
from pagescribe.locator import SelectorGenerator
from pagescribe.utils import read_html, write_json

app = typer.Typer(no_args_is_help=True, add_completion=False, rich_markup_mode="markdown")


def _echo_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, ensure_ascii=False, indent=2))


@app.command()
def analyze(
    html: Path | None = typer.Option(None, "--html", exists=True, dir_okay=False, help="本地 HTML 文件"),
    url: str | None = typer.Option(None, "--url", help="在线页面地址（需要 playwright）"),
    out: Path | None = typer.Option(None, "--out", help="把分类结果写入 JSON 文件"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出全部页面特征"),
) -> None:
    """
    页面分类：识别页面原型（登录/注册/联系表单、搜索、表格、列表、详情、通用），并给出建议断言。

    **示例**

        pagescribe analyze --html login.html
        pagescribe analyze --url http://example.com/search --verbose
    """
    load_dotenv()
    settings = load_settings()

    if (html is None) == (url is None):
        typer.secho("❌ 请指定 --html 或 --url 之一", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    try:
        if html is not None:
            document = PageDocument.from_html(read_html(html), parser=settings.html_parser)
        else:
            from pagescribe.recording import load_page

            document = load_page(url, timeout_ms=settings.page_timeout_ms, parser=settings.html_parser)
    except Exception as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=2) from e

    result = PageClassifier(settings.classifier).classify(document)
    typer.echo(f"页面类型: {result.page_type} (置信度 {result.confidence}%)")

    if verbose:
        for key, value in result.features.model_dump(by_alias=True).items():
            typer.echo(f"  - {key}: {value}")
        for assertion in result.suggested_assertions:
            typer.echo(f"  * [{assertion.type}] {assertion.description}")

    if out is not None:
        write_json(out, result.model_dump(mode="json", by_alias=True))
        typer.echo(f"已写入分类结果: {out}")


@app.command()
def selector(
    html: Path = typer.Option(..., "--html", exists=True, dir_okay=False, help="本地 HTML 文件"),
    target: str = typer.Option(..., "--target", help="用于选中目标元素的 CSS selector"),
    all_matches: bool = typer.Option(False, "--all", help="为所有匹配元素生成 selector"),
) -> None:
    """
    为 HTML 中的元素生成稳定 selector（主结果 + 备选），输出 JSON。

    **示例**

        pagescribe selector --html page.html --target "form button"
    """
    load_dotenv()
    settings = load_settings()

    document = PageDocument.from_html(read_html(html), parser=settings.html_parser)
    try:
        elements = document.query_all(target)
    except Exception as e:
        typer.secho(f"❌ 非法的 --target: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from e

    if not elements:
        typer.secho(f"❌ 没有元素匹配: {target}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    generator = SelectorGenerator(settings.selector)
    if not all_matches:
        elements = elements[:1]
    results = [generator.generate(el, document).model_dump(mode="json", by_alias=True) for el in elements]
    _echo_json(results if all_matches else results[0])


if __name__ == "__main__":
    app()
