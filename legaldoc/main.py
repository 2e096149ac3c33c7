"""
Main FastAPI Application
Entry point for the legal document analysis service
"""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from legaldoc.core.config import settings
from legaldoc.core.errors import AnalysisError, ErrorKind, InternalError
from legaldoc.api.endpoints import router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIXES = ("/api", "/analyze", "/upload")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Plain-language analysis of legal documents"
)

# ===== UNEXPECTED ERRORS =====
# Registered before CORS so CORS stays the outermost layer
@app.middleware("http")
async def catch_unexpected_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s", request.url.path)
        error = InternalError("An unexpected error occurred")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

# ===== CORS CONFIG =====
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===== ERROR HANDLING =====
@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    if exc.status_code < 500:
        logger.warning("%s on %s: %s", exc.kind.value, request.url.path, exc.message)
    else:
        logger.error("%s on %s: %s", exc.kind.value, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning("Malformed request on %s: %s", request.url.path, detail)
    return JSONResponse(
        status_code=400,
        content={"error": ErrorKind.VALIDATION.value, "message": f"Invalid request: {detail}"}
    )

@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unmatched routes under the API paths get a structured 404, whatever the method
    if exc.status_code in (404, 405) and request.url.path.startswith(API_PREFIXES):
        return JSONResponse(
            status_code=404,
            content={
                "error": ErrorKind.NOT_FOUND.value,
                "message": f"Route {request.method} {request.url.path} not found"
            }
        )
    return await http_exception_handler(request, exc)

# ===== ROUTERS =====
app.include_router(router, tags=["analysis"])

# ===== HEALTH CHECKS =====
@app.get("/")
def root():
    return {"message": "Backend is running"}

@app.get("/health")
def health_check():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "service": settings.APP_NAME,
        "version": settings.VERSION
    }

# ===== RUN APP =====
if __name__ == "__main__":
    import uvicorn
    logger.info("%s running on http://localhost:%d", settings.APP_NAME, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
