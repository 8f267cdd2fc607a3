"""
HexDiff Backend - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hexdiff import __version__
from hexdiff.routers import config, engine, sessions
from hexdiff.services.config_manager import ConfigManager
from hexdiff.services.session_store import SessionStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    print("[Backend] Starting HexDiff Backend...")
    config_manager = ConfigManager.get_instance()
    print(f"[Backend] ConfigManager initialized ({config_manager.config_file})")
    store = SessionStore.get_instance()

    yield

    print(f"[Backend] Shutting down HexDiff Backend, dropping {len(store)} sessions...")
    store.clear()


app = FastAPI(
    title="HexDiff Backend",
    description="Positional binary diff engine for a hex viewer front end",
    version=__version__,
    lifespan=lifespan,
)

# The viewer UI is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(engine.router, prefix="/api", tags=["engine"])
app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "hexdiff-backend"}


def run():
    """Console entry point"""
    import uvicorn

    server = ConfigManager.get_instance().get("server", {})
    uvicorn.run(app, host=server.get("host", "0.0.0.0"), port=int(server.get("port", 8000)))


if __name__ == "__main__":
    run()
