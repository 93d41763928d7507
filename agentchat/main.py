# agentchat/main.py
from fastapi import FastAPI, WebSocket, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
import logging

from agentchat.api.v1.router import api_router
from agentchat.api.dependencies import get_orchestrator
from agentchat.ai.orchestrator import Orchestrator
from agentchat.database import engine, Base, get_db
from agentchat.config import get_settings
from agentchat.errors import AgentChatError
from agentchat.models import user, custom_agent, conversation, message  # noqa: F401  (register tables)
from agentchat.websockets.connection_manager import handle_chat_connection

# Settings are read once per process
settings = get_settings()

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create any missing tables
Base.metadata.create_all(bind=engine)

# Application
app = FastAPI(
    title="Agent Chat API",
    description="API for chatting with a configurable group of AI personas",
    version="0.1.0"
)

# Browser clients are served from other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# REST routes
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Health check"""
    return {
        "message": "Welcome to the Agent Chat API",
        "status": "online",
        "version": "0.1.0"
    }


@app.exception_handler(AgentChatError)
async def agentchat_exception_handler(request: Request, exc: AgentChatError):
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.detail}
    )


# Malformed request bodies use the domain validation error shape
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "validation_error", "detail": jsonable_encoder(exc.errors())}
    )


# Anything unexpected becomes a 500 with the same error shape
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Global exception: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "detail": "Internal server error"}
    )


@app.websocket("/ws/chat")
async def chat_websocket_endpoint(
    websocket: WebSocket,
    access_token: str,
    db: Session = Depends(get_db),
    orchestrator: Orchestrator = Depends(get_orchestrator)
):
    """
    WebSocket endpoint for chatting with live typing indicators

    Args:
        websocket: WebSocket connection
        access_token: JWT authentication token
    """
    await handle_chat_connection(
        websocket=websocket,
        access_token=access_token,
        db=db,
        orchestrator=orchestrator
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("agentchat.main:app", host="0.0.0.0", port=8000, reload=True)
