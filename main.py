from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from config import get_settings
from database import MongoContext
from routers.ratings import ratings_router
from utils.errors import ConflictError, NotFoundError, RatingValidationError, StoreError

import logging
import logging.handlers
import time
import json
from datetime import datetime
from pathlib import Path

import uvicorn


settings = get_settings()

app = FastAPI(title="myday-api", version="1.0.0")

# ✅ Create logs directory
logs_dir = Path(settings.LOG_DIR)
logs_dir.mkdir(exist_ok=True)

# ✅ Setup logging configuration inline
def setup_logging():
    """Setup console and rotating file logging for the myday_api logger tree"""

    # Custom formatter with colors
    class ColoredFormatter(logging.Formatter):
        COLORS = {
            'DEBUG': '\033[36m',    # Cyan
            'INFO': '\033[32m',     # Green
            'WARNING': '\033[33m',  # Yellow
            'ERROR': '\033[31m',    # Red
            'CRITICAL': '\033[35m', # Magenta
            'RESET': '\033[0m'      # Reset
        }

        def format(self, record):
            if settings.LOG_COLORS.lower() == "true" and getattr(record, 'color', False):
                level_color = self.COLORS.get(record.levelname, '')
                reset_color = self.COLORS['RESET']
                original_levelname = record.levelname
                record.levelname = f"{level_color}{record.levelname}{reset_color}"
                formatted = super().format(record)
                record.levelname = original_levelname
                return formatted
            return super().format(record)

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    # Create main logger, module loggers are its children (myday_api.store, ...)
    logger = logging.getLogger("myday_api")
    logger.setLevel(level)
    logger.handlers.clear()

    # Console handler with colors
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_formatter = ColoredFormatter(
        fmt='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(console_formatter)

    # Main log file handler with rotation
    file_handler = logging.handlers.RotatingFileHandler(
        filename=logs_dir / "api.log",
        maxBytes=settings.LOG_MAX_FILE_SIZE,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(level)
    file_formatter = logging.Formatter(
        fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(file_formatter)

    # Error log file handler
    error_handler = logging.handlers.RotatingFileHandler(
        filename=logs_dir / "errors.log",
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(file_formatter)

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)
    logger.addHandler(error_handler)
    logger.propagate = False

    return logger

# ✅ Initialize logger
logger = setup_logging()


def format_json_for_log(data, max_length=1000):
    """Format data as JSON for logging"""
    try:
        json_str = json.dumps(data, indent=2, ensure_ascii=False, default=str)

        if len(json_str) > max_length:
            return json_str[:max_length] + "... [truncated]"

        return json_str
    except (TypeError, ValueError):
        return str(data)


# ✅ Request logging middleware
@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = f"req_{int(time.time() * 1000)}"
    start_time = time.time()

    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"🔵 [{request_id}] {request.method} {request.url.path} | Client: {client_ip}", extra={"color": True})

    # Masked auth header
    if request.headers.get("authorization"):
        logger.info(f"🔑 [{request_id}] Auth: Basic ***", extra={"color": True})

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"💥 [{request_id}] EXCEPTION: {request.method} {request.url.path} | Error: {str(e)} | Time: {process_time:.3f}s",
            exc_info=True,
            extra={"color": True},
        )
        raise

    process_time = time.time() - start_time

    # Status emoji
    emoji = "✅" if response.status_code < 300 else "🔄" if response.status_code < 400 else "⚠️" if response.status_code < 500 else "❌"
    logger.info(
        f"{emoji} [{request_id}] {response.status_code} | {process_time:.3f}s",
        extra={"color": True},
    )

    if process_time > 1.0:
        logger.warning(f"🐌 [{request_id}] SLOW REQUEST: {process_time:.3f}s for {request.method} {request.url.path}", extra={"color": True})

    return response

# ✅ Exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error_details = exc.errors()

    logger.error(
        f"🔴 VALIDATION ERROR: {request.method} {request.url.path}",
        extra={'color': True}
    )
    logger.error(f"🔴 Details: {format_json_for_log(error_details)}")

    return JSONResponse(
        status_code=400,
        content={
            "detail": jsonable_encoder(error_details),
            "message": "Request validation failed"
        }
    )

@app.exception_handler(RatingValidationError)
async def rating_validation_exception_handler(request: Request, exc: RatingValidationError):
    logger.warning(f"⚠️ Rating is not valid: {exc}", extra={'color': True})
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError):
    logger.info(f"🔍 {exc}", extra={'color': True})
    return JSONResponse(status_code=404, content={"detail": "User data not found"})

@app.exception_handler(ConflictError)
async def conflict_exception_handler(request: Request, exc: ConflictError):
    logger.info(f"🔁 {exc}", extra={'color': True})
    return JSONResponse(status_code=409, content={"detail": "User data already exists"})

@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError):
    logger.error(
        f"💾 STORE ERROR: {request.method} {request.url.path} - {exc}" + (" (timeout)" if exc.timeout else ""),
        extra={'color': True}
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": "The document store is unavailable"
        }
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"💥 UNHANDLED EXCEPTION: {request.method} {request.url.path} - {str(exc)}",
        exc_info=True,
        extra={'color': True}
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": "An unexpected error occurred"
        }
    )

# ✅ Application lifecycle events
@app.on_event("startup")
def startup_event():
    logger.info("🚀 MYDAY API Starting up...", extra={'color': True})

    app.state.mongo = MongoContext(settings).open()

    logger.info(f"📁 Logs directory: {logs_dir.absolute()}", extra={'color': True})
    logger.info("✅ MYDAY API Started successfully!", extra={'color': True})

@app.on_event("shutdown")
def shutdown_event():
    logger.info("🛑 MYDAY API Shutting down...", extra={'color': True})
    mongo = getattr(app.state, "mongo", None)
    if mongo is not None:
        mongo.close()
    logger.info("✅ MYDAY API Stopped successfully!", extra={'color': True})

# ✅ Include routers
app.include_router(ratings_router)

# ✅ Health check endpoint
@app.get("/health")
def health_check():
    logger.info("💓 Health check requested", extra={'color': True})
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "message": "MYDAY API is running",
        "version": "1.0.0"
    }


if __name__ == "__main__":
    uvicorn.run(app, host=settings.LISTEN_HOST, port=settings.LISTEN_PORT)
