from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os

from airsoft_hub.core import config
from airsoft_hub.database import Base, engine, SessionLocal

# import models so they are registered on the metadata
import airsoft_hub.models  # noqa: F401

from airsoft_hub.routes.events import router as events_router
from airsoft_hub.routes.auth import router as auth_router
from airsoft_hub.routes.saved_events import router as saved_events_router
from airsoft_hub.services.user_service import promote_admins

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(title="Airsoft Hub API")

# Create uploads directory if it doesn't exist
os.makedirs(config.UPLOAD_DIR, exist_ok=True)

# Mount uploaded thumbnails as static files
app.mount("/uploads", StaticFiles(directory=config.UPLOAD_DIR), name="uploads")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


# Every error body has the shape {"error": "<message>", ...}
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid input", "details": jsonable_encoder(exc.errors())},
    )


# Create tables (after models are imported)
Base.metadata.create_all(bind=engine)

# Promote admins listed in ADMIN_EMAILS
with SessionLocal() as db:
    promote_admins(db, config.admin_emails())

app.include_router(events_router, prefix="/events", tags=["events"])
app.include_router(events_router, prefix="/api/events", tags=["events"])
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(saved_events_router, prefix="/api/saved-events", tags=["saved-events"])


@app.get("/", response_class=PlainTextResponse)
def read_root():
    return "Welcome to the Airsoft Hub Croatia"


@app.get("/ping")
def ping():
    return {"message": "pong"}


if __name__ == "__main__":
    import uvicorn

    host, port = config.parse_address(config.APP_ADDRESS)
    uvicorn.run(app, host=host, port=port)
