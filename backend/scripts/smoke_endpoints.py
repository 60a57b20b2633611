from __future__ import annotations

import os
import sys
from pathlib import Path

from fastapi import HTTPException

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("GEMINI_API_KEY", "smoke-test-key")

import backend.main as main_module
from backend.app.models import TrendsRequest


class CannedGateway:
    def __init__(self, text: str):
        self.text = text
        self.calls: list[tuple[str, float]] = []

    def generate(self, prompt: str, temperature: float) -> str:
        self.calls.append((prompt, temperature))
        return self.text


def assert_true(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


def call_trends(action: str, payload: dict, gateway: CannedGateway):
    return main_module.trends(TrendsRequest(action=action, payload=payload), gateway=gateway)


def test_health() -> None:
    payload = main_module.health()
    assert_true(payload.get("ok") is True, "/health should return ok=true")


def test_fetch_trends_fenced() -> None:
    gateway = CannedGateway('```json\n[{"term":"a","dailySearches":100000,"videoCount":50}]\n```')
    payload = call_trends(
        "fetchTrends",
        {"selectedDate": "2024-01-01", "niche": "", "searchVolume": "50000", "saturationLevel": "0.01"},
        gateway,
    )
    assert_true(payload == [{"term": "a", "dailySearches": 100000, "videoCount": 50}], "fenced JSON should parse")
    assert_true(len(gateway.calls) == 1, "fetchTrends should call the model once")


def test_generate_ideas() -> None:
    gateway = CannedGateway('{"titles": ["1", "2", "3", "4", "5"], "outline": "### Outline"}')
    payload = call_trends("generateIdeas", {"term": "solar gadgets"}, gateway)
    assert_true(len(payload["titles"]) == 5, "generateIdeas should return five titles")
    assert_true(payload["outline"] == "### Outline", "generateIdeas should keep the outline")


def test_invalid_action() -> None:
    try:
        call_trends("unknown", {}, CannedGateway("[]"))
    except HTTPException as exc:
        assert_true(exc.status_code == 400, "unknown action should be a 400")
        assert_true(exc.detail == "Invalid action specified.", "unknown action message")
        return
    raise AssertionError("unknown action should raise")


def test_malformed_model_output() -> None:
    try:
        call_trends("generateIdeas", {"term": "x"}, CannedGateway("not json"))
    except HTTPException as exc:
        assert_true(exc.status_code == 500, "bad model output should be a 500")
        assert_true(str(exc.detail).startswith("Server error: "), "500 detail should carry the cause")
        return
    raise AssertionError("bad model output should raise")


def run() -> int:
    checks = [
        ("health", test_health),
        ("fetchTrends fenced JSON", test_fetch_trends_fenced),
        ("generateIdeas", test_generate_ideas),
        ("invalid action", test_invalid_action),
        ("malformed model output", test_malformed_model_output),
    ]
    failures = []

    for check_name, check_fn in checks:
        try:
            check_fn()
            print(f"[PASS] {check_name}")
        except Exception as exc:  # pragma: no cover - smoke script output path
            failures.append((check_name, str(exc)))
            print(f"[FAIL] {check_name}: {exc}")

    if failures:
        print(f"\nSmoke checks failed: {len(failures)}")
        for check_name, message in failures:
            print(f"- {check_name}: {message}")
        return 1

    print("\nAll smoke checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
