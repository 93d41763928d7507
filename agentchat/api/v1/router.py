# agentchat/api/v1/router.py
from fastapi import APIRouter
from agentchat.api.v1 import agents, conversations

# Create the main router
api_router = APIRouter()

# Include all the sub-routers
api_router.include_router(agents.router, prefix="/agents", tags=["agents"])
api_router.include_router(conversations.router, prefix="/conversations", tags=["conversations"])
