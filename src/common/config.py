"""Dashboard settings: configs/dashboard.yaml plus environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import yaml

from src.common.paths import ProjectPaths

DEFAULT_DATA_URL = "https://raw.githubusercontent.com/gptechnologies/COTData/refs/heads/main/cot.csv"
DATA_URL_ENV = "COT_DATA_URL"


@dataclass(frozen=True)
class Settings:
    source: str = DEFAULT_DATA_URL
    timeout_s: int = 60
    retries: int = 3
    delimiter: str = ","
    page_title: str = "COT — Non-Commercial Positions"
    default_show_net: bool = False


def load_settings(
    paths: ProjectPaths | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """
    Build Settings from configs/dashboard.yaml (if present) and the environment.

    Precedence for the source location: COT_DATA_URL > source.default_url > built-in default.
    A missing config file is not an error; built-in defaults apply.
    """
    paths = paths or ProjectPaths(Path(".").resolve())
    env = os.environ if env is None else env

    cfg = {}
    if paths.settings_file.exists():
        cfg = yaml.safe_load(paths.settings_file.read_text(encoding="utf-8")) or {}

    src_cfg = cfg.get("source") or {}
    app_cfg = cfg.get("app") or {}
    defaults = Settings()

    source = env.get(DATA_URL_ENV) or src_cfg.get("default_url") or defaults.source

    return Settings(
        source=str(source).strip(),
        timeout_s=int(src_cfg.get("timeout_s", defaults.timeout_s)),
        retries=max(1, int(src_cfg.get("retries", defaults.retries))),
        delimiter=str(src_cfg.get("delimiter", defaults.delimiter)),
        page_title=str(app_cfg.get("page_title", defaults.page_title)),
        default_show_net=bool(app_cfg.get("default_show_net", defaults.default_show_net)),
    )
