"""
Typing Integrity API

FastAPI application exposing:
- GET  /health            → service status
- POST /anti-cheat/check  → Verdict for a reported session (dry run)
- POST /sessions          → 201 accepted / 422 rejected / 400 empty

Request and response bodies use camelCase field names.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from integrity.config import get_settings
from integrity.models.anticheat import detect_anti_cheat
from integrity.schemas.inputs import AntiCheatInput, SessionSubmission
from integrity.schemas.outputs import SubmissionReceipt, Verdict
from integrity.submission import EmptySubmissionError, SessionSubmissionGate


# Load environment variables
load_dotenv()

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Application State
# =============================================================================

class AppState:
    """Application state container."""
    gate: Optional[SessionSubmissionGate] = None


state = AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Typing Integrity API...")
    state.gate = SessionSubmissionGate()
    logger.info("Typing Integrity API ready")

    yield

    # Shutdown
    logger.info("Shutting down Typing Integrity API...")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Typing Integrity",
    description="Typing session metrics and anti-cheat validation",
    version=settings.version,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.version}


@app.get("/", include_in_schema=False)
async def root():
    """Redirect root to API documentation."""
    from fastapi.responses import RedirectResponse
    return RedirectResponse(url="/docs")


# =============================================================================
# Anti-Cheat Endpoints
# =============================================================================

@app.post("/anti-cheat/check", response_model=Verdict)
async def check_session(payload: AntiCheatInput):
    """
    Run the anti-cheat validator without accepting the session.

    - Always 200 for schema-valid input
    - Never triggers downstream effects
    """
    return detect_anti_cheat(payload)


@app.post(
    "/sessions",
    response_model=SubmissionReceipt,
    status_code=status.HTTP_201_CREATED,
)
async def submit_session(payload: SessionSubmission):
    """
    Submit a completed session.

    - 400 for sessions without keystrokes or duration
    - 422 with the verdict when anti-cheat rejects the session
    - 201 once the session is trusted and downstream sinks ran
    """
    try:
        receipt = state.gate.submit(payload)
    except EmptySubmissionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Session submission error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error processing session"
        )

    if not receipt.accepted:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=receipt.model_dump(mode="json", by_alias=True),
        )

    return receipt


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
