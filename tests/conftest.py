import json
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture()
def write_json(tmp_path: Path) -> Callable[[str, object], Path]:
    def _write(name: str, payload: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
