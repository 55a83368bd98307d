"""
Root entrypoint for `streamlit run app.py` (local and Streamlit Cloud).

Puts the repository root on PYTHONPATH so `import src...` resolves,
then executes the dashboard page.
"""

from __future__ import annotations

import runpy
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

runpy.run_path(str(REPO_ROOT / "src" / "app" / "app.py"), run_name="__main__")
