"""Pytest configuration.

The repository uses a flat `src/` namespace layout. This conftest ensures tests can import from the
`src.*` namespace when running `pytest` without installing the project, and exposes the bundled
sample dataset.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

SAMPLE_DATASET_PATH = REPO_ROOT / "src" / "db" / "fixtures" / "sample_dataset.json"


@pytest.fixture(scope="session")
def sample_dataset() -> dict[str, Any]:
    """The bundled products/sales/customers demo dataset."""

    return json.loads(SAMPLE_DATASET_PATH.read_text(encoding="utf-8"))
