import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

import categories
import managing
import sources
import spendings
from config import settings
from database import DocumentStore
from errors import ApiError, Internal

# ---------------------------
# Logging
# ---------------------------
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == "development" else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(settings.LOG_LEVEL.upper())),
)
logger = structlog.get_logger()


# ---------------------------
# App Init
# ---------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting accounting API", environment=settings.ENVIRONMENT, mongo_host=settings.MONGO_HOST)
    app.state.store = DocumentStore.from_uri(settings.mongo_uri)
    yield
    app.state.store.close()
    logger.info("Accounting API stopped")


app = FastAPI(title="Accounting API", lifespan=lifespan)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


@app.middleware("http")
async def edge(request: Request, call_next):
    """Answers preflight, turns uncaught errors into 500s and stamps CORS headers on everything."""
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("Unhandled exception", path=request.url.path, method=request.method, error=str(e))
            error = Internal(str(e))
            response = PlainTextResponse(error.body, status_code=error.status_code)
    response.headers.update(CORS_HEADERS)
    return response


# ---------------------------
# Error mapping
# ---------------------------
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    log = logger.error if exc.status_code >= 500 else logger.info
    log("Request rejected", path=request.url.path, method=request.method, kind=exc.kind, reason=exc.message)
    return PlainTextResponse(exc.body, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.info("Request rejected", path=request.url.path, method=request.method, status=exc.status_code)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


def validation_message(exc: RequestValidationError) -> str:
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[0] if loc else "body"
        if err.get("type") == "json_invalid":
            return "Invalid JSON body"
        if err.get("type") == "missing":
            return f"Missing {field} parameter"
        return f"Invalid {field} parameter"
    return "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = validation_message(exc)
    logger.info("Request rejected", path=request.url.path, method=request.method, kind="invalid_argument", reason=message)
    return PlainTextResponse(message, status_code=400)


# ---------------------------
# Routes
# ---------------------------
@app.get("/")
def root():
    return PlainTextResponse("Hello AA!")


app.include_router(spendings.router)
app.include_router(categories.router)
app.include_router(sources.router)
app.include_router(managing.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
