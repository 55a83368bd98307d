from __future__ import annotations
from pathlib import Path
import base64

TEMPLATE_PATH = Path(__file__).with_name("template.html")


def load_template(path: Path = TEMPLATE_PATH) -> str:
    if not path.exists():
        raise FileNotFoundError(f"Missing template: {path}")
    return path.read_text(encoding="utf-8")


def b64_png(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def render_report(template: str, symbol: str, window: str, key_numbers_html: str, chart_html: str) -> str:
    return (template
            .replace("{{SYMBOL}}", symbol)
            .replace("{{WINDOW}}", window)
            .replace("{{KEY_NUMBERS}}", key_numbers_html)
            .replace("{{CHART}}", chart_html))
