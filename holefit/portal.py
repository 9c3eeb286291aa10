"""Judge server client — download problems and upload poses.

Every request carries the API token as a bearer header.  HTTP failures
surface as ``requests.HTTPError`` from ``raise_for_status()``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from holefit.config import SETTINGS
from holefit.problem import Pose, pose_to_dict


log = logging.getLogger(__name__)

TIMEOUT_S = 30


class PortalError(RuntimeError):
    """Raised when the judge cannot be used (e.g. no API token)."""


class JudgeClient:

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        token = token if token is not None else SETTINGS.judge_token
        if not token:
            raise PortalError("No judge API token; set HOLEFIT_API_TOKEN.")
        self.base_url = (base_url or SETTINGS.judge_url).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str) -> requests.Response:
        resp = self.session.get(f"{self.base_url}{path}", timeout=TIMEOUT_S)
        resp.raise_for_status()
        return resp

    def hello(self) -> dict:
        """Check the token; returns the server's greeting."""
        return self._get("/api/hello").json()

    def download_problem(self, problem_id: int, path: Path | str) -> Path:
        resp = self._get(f"/api/problems/{problem_id}")
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(resp.text, encoding="utf-8")
        log.info("Downloaded problem %d to %s", problem_id, path)
        return path

    def upload_solution(self, problem_id: int, pose: Pose) -> dict:
        """Submit *pose*; returns the server's JSON (contains the submission id)."""
        resp = self.session.post(
            f"{self.base_url}/api/problems/{problem_id}/solutions",
            json=pose_to_dict(pose),
            timeout=TIMEOUT_S,
        )
        resp.raise_for_status()
        data = resp.json()
        log.info("Uploaded solution for problem %d: %s", problem_id, data)
        return data
