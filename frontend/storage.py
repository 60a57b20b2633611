import json
import logging
import os
from pathlib import Path
from typing import Any

from backend.app.models import Trend
from backend.app.services.ai_response import TREND_LIST_ADAPTER


logger = logging.getLogger(__name__)

STORAGE_KEY = "ytgap_savedTrends"
DEFAULT_STORAGE_FILE = Path.home() / ".ytgap" / "storage.json"


def default_storage_path() -> Path:
    raw = (os.getenv("YTGAP_STORAGE_FILE") or "").strip()
    return Path(raw).expanduser() if raw else DEFAULT_STORAGE_FILE


class SavedTrendsStorage:
    """
    Saved trends as one JSON-encoded array under a fixed key of a JSON file
    used as a key/value store. Reads degrade to an empty list; writes are
    best-effort and never raise.
    """

    def __init__(self, path: Path | str | None = None, key: str = STORAGE_KEY):
        self.path = Path(path) if path is not None else default_storage_path()
        self.key = key

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        return raw if isinstance(raw, dict) else {}

    def load(self) -> list[Trend]:
        try:
            blob = self._read_all().get(self.key)
            if not blob:
                return []
            return TREND_LIST_ADAPTER.validate_python(json.loads(blob))
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to get saved trends: %s", exc)
            return []

    def save(self, trends: list[Trend]) -> bool:
        try:
            try:
                snapshot = self._read_all()
            except ValueError:
                snapshot = {}
            snapshot[self.key] = json.dumps([trend.to_wire() for trend in trends], ensure_ascii=True)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(snapshot, ensure_ascii=True, indent=2), encoding="utf-8")
            return True
        except OSError as exc:
            logger.error("Failed to save trends: %s", exc)
            return False
