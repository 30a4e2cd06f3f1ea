from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any) -> str:
    """Compact JSON for CLI reports: ensure_ascii=False, no trailing newline."""
    return json.dumps(obj, ensure_ascii=False)
