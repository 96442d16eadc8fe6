"""Root conftest: seeds settings env vars from .env.test before hotsho is imported."""
from __future__ import annotations

import os
from pathlib import Path

ENV_TEST = Path(__file__).resolve().parent / ".env.test"


def _read_env_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if line and not line.startswith("#") and "=" in line:
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip().strip("'\"")
    return values


if ENV_TEST.exists():
    for name, value in _read_env_file(ENV_TEST).items():
        os.environ.setdefault(name, value)
