import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocollect.db.lifespan import lifespan
from geocollect.api.v1.router import api_router
from geocollect.core.config import CORS_ORIGINS, PORT

logger = logging.getLogger(__name__)

# Create FastAPI app instance using the lifespan manager
app = FastAPI(
    title="Device Location Collector API",
    description="Reverse geocoding across AMap, Baidu and Tencent, datum conversion and device data collection.",
    version="0.1.0",
    lifespan=lifespan,
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    max_age=86400,
)
logger.info(f"CORS middleware added for origins: {CORS_ORIGINS}")


@app.get("/health", tags=["Health"])
async def health():
    return {"ok": True}


# --- Include API Routers ---
app.include_router(api_router, prefix="/api/v1")
logger.info("Included API router v1 at /api/v1.")


# --- Uvicorn Entry Point (for direct run, if needed) ---
if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting Uvicorn server directly on port {PORT}...")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
