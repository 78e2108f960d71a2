import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse
import traceback
from starlette.middleware.base import BaseHTTPMiddleware

# Import logging
from logging_config import logger, log_request_info, log_response_info

# Import routers
from routers import inventory, view, form, capture
from database.db import init_db
from database.storage import IMAGE_STORAGE_DIR, IMAGE_URL_PREFIX
from errors import PantryError, RemoteOperationError
from services.session import get_session

# Create FastAPI app
app = FastAPI(
    title="Pantry Tracker API",
    description="""
    # Pantry Tracker API

    Keep track of what is in the pantry.

    ## Features

    - **Inventory**: Add items, merge repeated additions, increment, decrement and delete
    - **Search**: Filter the pantry by name or category, with category quick filters
    - **Images**: Attach a photo to an item by uploading a file or capturing a camera frame

    Adding an item whose name already exists adds the new quantity to the stored one.
    Decrementing an item to zero removes it.
    """,
    version="1.0.0",
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT",
    },
    openapi_tags=[
        {
            "name": "Inventory",
            "description": "Operations on pantry items"
        },
        {
            "name": "View",
            "description": "The filtered in-memory pantry view"
        },
        {
            "name": "Form",
            "description": "State of the add-item form"
        },
        {
            "name": "Capture",
            "description": "Camera preview and frame capture for item photos"
        },
        {
            "name": "Root",
            "description": "Root endpoint for the API"
        }
    ]
)

# Logging middleware
class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        log_request_info(request)
        try:
            response = await call_next(request)
            log_response_info(response)
            return response
        except Exception as e:
            logger.error(f"Request failed: {str(e)}")
            logger.error(traceback.format_exc())
            raise

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ALLOW_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static files for item images
os.makedirs(IMAGE_STORAGE_DIR, exist_ok=True)
app.mount(IMAGE_URL_PREFIX, StaticFiles(directory=IMAGE_STORAGE_DIR), name="images")

# Include routers
app.include_router(inventory.router, prefix="/inventory", tags=["Inventory"])
app.include_router(view.router, prefix="/view", tags=["View"])
app.include_router(form.router, prefix="/form", tags=["Form"])
app.include_router(capture.router, prefix="/capture", tags=["Capture"])

# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    logger.info("Root endpoint accessed")
    return {
        "message": "Welcome to Pantry Tracker API",
        "routes": {
            "inventory": "/inventory",
            "view": "/view",
            "form": "/form",
            "capture": "/capture",
        }
    }

# Errors the client can show as a notice
@app.exception_handler(PantryError)
async def pantry_exception_handler(request: Request, exc: PantryError):
    logger.warning(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}")
    logger.error(traceback.format_exc())
    return JSONResponse(
        status_code=500,
        content={"detail": f"An unexpected error occurred: {str(exc)}"}
    )

# Startup event to initialize database and load the first snapshot
@app.on_event("startup")
async def startup_event():
    logger.info("Starting application...")
    await init_db()
    try:
        await get_session().refresh()
    except RemoteOperationError as e:
        logger.warning(f"Initial inventory load failed: {e.message}")
    logger.info("Application started successfully")

@app.on_event("shutdown")
async def shutdown_event():
    await get_session().shutdown()
    logger.info("Application stopped")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
