from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import List

from models.preferences import LaunchContext, LaunchResponse
from services.assistant import RecipeAssistant
from services.host_bridge import TelegramLaunchBridge
from .dependencies import get_assistant

router = APIRouter()


class HostAlerts(BaseModel):
    """Feedback the front-end should replay through the Telegram WebApp API"""
    alerts: List[str] = Field(default_factory=list)
    vibrations: int = 0


@router.post("/launch", response_model=LaunchResponse)
async def register_launch(context: LaunchContext, assistant: RecipeAssistant = Depends(get_assistant)):
    """Record how the Mini App was opened and load a forwarded recipe text, once"""
    bridge = TelegramLaunchBridge(context.url, context.init_data)
    assistant.set_host(bridge)
    text = assistant.load_forwarded_message()
    return LaunchResponse(text=text, loaded=text is not None, user=assistant.host.get_user_data())


@router.get("/alerts", response_model=HostAlerts)
async def drain_alerts(assistant: RecipeAssistant = Depends(get_assistant)):
    host = assistant.host.host
    if not isinstance(host, TelegramLaunchBridge):
        return HostAlerts()
    alerts, vibrations = host.drain()
    return HostAlerts(alerts=alerts, vibrations=vibrations)
