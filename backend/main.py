"""
Tool Diff Backend - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, render
from services.config_manager import ConfigManager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    print("[Backend] Starting Tool Diff Backend...")
    settings = ConfigManager.get_instance().render_settings()
    print(
        f"[Backend] Render settings loaded (context={settings.context_lines}, "
        f"max diff input={settings.max_diff_input_chars})"
    )

    yield
    print("[Backend] Shutting down Tool Diff Backend...")


app = FastAPI(
    title="Tool Diff Backend",
    description="Diff and patch rendering for AI-assistant tool-call records",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for the local session viewer
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(render.router, prefix="/api/render", tags=["render"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "tool-diff-backend"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
