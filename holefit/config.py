"""Project settings — directories, judge endpoint and log level.

Values come from ``HOLEFIT_*`` environment variables; a ``.env`` or
``.env.local`` file at the repository root is loaded first and never
overrides variables that are already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent


# ── .env loader ────────────────────────────────────────────────────

def load_env(root: Path = ROOT) -> None:
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v


load_env()


# ── Settings ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    """Where problems and solutions live and how to reach the judge."""

    problems_dir: Path = ROOT / "problems"
    solutions_dir: Path = ROOT / "solutions"

    judge_url: str = "https://poses.live"
    """Base URL of the judge server."""

    judge_token: str = ""
    """Bearer token for the judge API; empty disables uploads."""

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        env = os.environ
        return cls(
            problems_dir=Path(env.get("HOLEFIT_PROBLEMS_DIR", cls.problems_dir)),
            solutions_dir=Path(env.get("HOLEFIT_SOLUTIONS_DIR", cls.solutions_dir)),
            judge_url=env.get("HOLEFIT_JUDGE_URL", cls.judge_url).rstrip("/"),
            judge_token=env.get("HOLEFIT_API_TOKEN", cls.judge_token),
            log_level=env.get("HOLEFIT_LOG_LEVEL", cls.log_level).upper(),
        )


# Module-level singleton, importable everywhere.
SETTINGS = Settings.from_env()
