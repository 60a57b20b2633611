import json
import re
from typing import Any

from pydantic import TypeAdapter, ValidationError

try:
    from backend.app.models import ContentIdeas, Trend
except ModuleNotFoundError:
    from app.models import ContentIdeas, Trend


FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)

TREND_LIST_ADAPTER = TypeAdapter(list[Trend])


class MalformedResponse(ValueError):
    pass


def strip_code_fence(text: str) -> str:
    stripped = (text or "").strip()
    match = FENCE_RE.match(stripped)
    if match and match.group(2):
        return match.group(2).strip()
    return stripped


def parse_json_response(text: str | None) -> Any:
    if text is None:
        raise MalformedResponse("Received malformed data from AI: empty response.")
    try:
        return json.loads(strip_code_fence(text))
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"Received malformed data from AI: response is not valid JSON ({exc.msg}).")


def describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "validation failed"


def parse_trends(text: str | None) -> list[Trend]:
    data = parse_json_response(text)
    if not isinstance(data, list):
        raise MalformedResponse("Received malformed data from AI: expected an array.")
    try:
        return TREND_LIST_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise MalformedResponse(f"Received malformed data from AI: invalid trend ({describe_validation_error(exc)}).")


def parse_content_ideas(text: str | None) -> ContentIdeas:
    data = parse_json_response(text)
    if (
        not isinstance(data, dict)
        or not isinstance(data.get("titles"), list)
        or not isinstance(data.get("outline"), str)
    ):
        raise MalformedResponse("Received malformed data from AI: object has incorrect shape.")
    try:
        return ContentIdeas.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponse(f"Received malformed data from AI: invalid ideas ({describe_validation_error(exc)}).")
