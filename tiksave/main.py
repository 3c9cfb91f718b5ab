from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
import logging
import time

from tiksave.api.resolve import router as resolve_router
from tiksave.middleware.error_handler import ErrorHandlingMiddleware, validation_exception_handler
from tiksave.core.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(
    title="TikSave API",
    description="Resolve TikTok links to direct video URLs",
    version="1.0.0"
)

# Error handling middleware (should be first)
app.add_middleware(ErrorHandlingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Include API routers
app.include_router(resolve_router)


@app.get("/health")
async def health_check():
    """Liveness check."""
    return {
        "status": "healthy",
        "service": "tiksave",
        "environment": settings.environment,
        "timestamp": time.time()
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
