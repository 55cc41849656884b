import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from miniparty.api import bookings
from miniparty.core.config import settings
from miniparty.core.errors import StorageError
from miniparty.core.logger import setup_logging, logger
from miniparty.services.db_service import BookingStore, create_store

setup_logging()

def add_spa_routes(app: FastAPI, dist_path: str):
    """Serves the built frontend: real files as-is, everything else falls back to index.html."""
    root = os.path.realpath(dist_path)
    index = os.path.join(root, "index.html")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str):
        file_path = os.path.realpath(os.path.join(root, full_path))
        if file_path.startswith(root + os.sep) and os.path.isfile(file_path):
            return FileResponse(file_path)
        if not os.path.isfile(index):
            raise StarletteHTTPException(status_code=404)
        return FileResponse(index)

def create_app(store: Optional[BookingStore] = None, dist_path: Optional[str] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("🚀 Starting MiniParty backend")
        await app.state.store.initialize()
        yield
        # Shutdown
        await app.state.store.close()
        logger.info("🛑 Shutting down backend")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.store = store if store is not None else create_store(settings)
    logger.info(f"🗄️ Using {type(app.state.store).__name__}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-Admin-Token"],
        allow_credentials=True,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"🔥 UNHANDLED ERROR: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error"}
        )

    app.include_router(bookings.router, tags=["Bookings"])

    @app.get("/health")
    async def health_check(request: Request):
        try:
            await request.app.state.store.ping()
        except StorageError as e:
            return JSONResponse(status_code=503, content={"status": "unhealthy", "error": str(e)})
        return {"status": "ok", "environment": settings.ENVIRONMENT, "timestamp": datetime.now().isoformat()}

    dist_path = dist_path if dist_path is not None else settings.DIST_PATH
    if os.path.isdir(dist_path):
        logger.info(f"Serving frontend from {dist_path}")
        add_spa_routes(app, dist_path)

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("miniparty.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
