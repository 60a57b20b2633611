import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

try:
    from backend.app.config import ConfigurationError, Settings, load_settings
    from backend.app.models import FetchTrendsPayload, GenerateIdeasPayload, TrendsRequest
    from backend.app.services.ai_response import describe_validation_error, parse_content_ideas, parse_trends
    from backend.app.services.gemini_gateway import IDEAS_TEMPERATURE, TRENDS_TEMPERATURE, GeminiGateway
    from backend.app.services.prompt_builder import build_ideas_prompt, build_trends_prompt
except ModuleNotFoundError:
    from app.config import ConfigurationError, Settings, load_settings
    from app.models import FetchTrendsPayload, GenerateIdeasPayload, TrendsRequest
    from app.services.ai_response import describe_validation_error, parse_content_ideas, parse_trends
    from app.services.gemini_gateway import IDEAS_TEMPERATURE, TRENDS_TEMPERATURE, GeminiGateway
    from app.services.prompt_builder import build_ideas_prompt, build_trends_prompt


logger = logging.getLogger(__name__)

INVALID_ACTION_MESSAGE = "Invalid action specified."
INVALID_BODY_MESSAGE = "Invalid request body."

router = APIRouter()


# ---------------------------
# Actions
# ---------------------------

def fetch_trends_action(payload: FetchTrendsPayload, gateway: GeminiGateway) -> list[dict[str, Any]]:
    prompt = build_trends_prompt(
        payload.selectedDate,
        payload.niche,
        payload.searchVolume,
        payload.saturationLevel,
    )
    text = gateway.generate(prompt, temperature=TRENDS_TEMPERATURE)
    return [trend.to_wire() for trend in parse_trends(text)]


def generate_ideas_action(payload: GenerateIdeasPayload, gateway: GeminiGateway) -> dict[str, Any]:
    prompt = build_ideas_prompt(payload.term)
    text = gateway.generate(prompt, temperature=IDEAS_TEMPERATURE)
    return parse_content_ideas(text).to_wire()


ACTIONS: dict[str, tuple[type[BaseModel], Callable[[Any, GeminiGateway], Any]]] = {
    "fetchTrends": (FetchTrendsPayload, fetch_trends_action),
    "generateIdeas": (GenerateIdeasPayload, generate_ideas_action),
}


# ---------------------------
# App setup
# ---------------------------

def create_app(settings: Settings, gateway: GeminiGateway | None = None) -> FastAPI:
    application = FastAPI(title="YTGAP trends API")
    application.state.settings = settings
    application.state.gateway = gateway or GeminiGateway(settings)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=settings.cors_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(StarletteHTTPException, http_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.include_router(router)
    return application


async def http_error_handler(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(_request: Request, _exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": INVALID_BODY_MESSAGE})


def get_gateway(request: Request) -> GeminiGateway:
    return request.app.state.gateway


# ---------------------------
# Routes
# ---------------------------


@router.get("/health")
def health():
    return {"ok": True}


@router.post("/api/trends")
def trends(body: TrendsRequest, gateway: GeminiGateway = Depends(get_gateway)):
    entry = ACTIONS.get(body.action) if isinstance(body.action, str) else None
    if entry is None:
        raise HTTPException(status_code=400, detail=INVALID_ACTION_MESSAGE)
    payload_model, handler = entry

    try:
        payload = payload_model.model_validate(body.payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid payload: {describe_validation_error(exc)}")

    try:
        return handler(payload, gateway)
    except Exception as exc:
        logger.exception("API route error during %s", body.action)
        message = str(exc) or "An unexpected error occurred."
        raise HTTPException(status_code=500, detail=f"Server error: {message}")


# Missing credentials stop the process here, before the first request.
try:
    SETTINGS = load_settings()
except ConfigurationError:
    logger.critical("Gemini credentials are not configured; refusing to start")
    raise

app = create_app(SETTINGS)


@app.on_event("startup")
def on_startup_log_settings():
    logger.info("trends API ready (model=%s, timeout=%ss)", SETTINGS.gemini_model, SETTINGS.gemini_timeout_seconds)
