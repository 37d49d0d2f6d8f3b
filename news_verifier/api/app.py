"""FastAPI application for the News Verifier service."""

import contextlib
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from ..infrastructure.config import AnalyzerConfig
from ..infrastructure.dependencies import get_service_container
from .endpoints import analysis, health
from .endpoints.health import API_VERSION

# Configure logging
logging.basicConfig(
    level=AnalyzerConfig.from_env().logging_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    container = get_service_container()
    logger.info(f"🚀 News Verifier API starting (analysis delay {container.config.analysis_delay}s)")

    yield  # Application runs here

    # Shutdown: cancel analyses still in flight
    await container.shutdown()


# Create FastAPI application
app = FastAPI(
    title="News Verifier API",
    description="Simulated news authenticity checks with claim detection and credibility scoring",
    version=API_VERSION,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(analysis.router)
