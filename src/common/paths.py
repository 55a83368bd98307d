from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class ProjectPaths:
    root: Path

    @property
    def configs(self) -> Path: return self.root / "configs"
    @property
    def settings_file(self) -> Path: return self.configs / "dashboard.yaml"
    @property
    def reports(self) -> Path: return self.root / "reports"
