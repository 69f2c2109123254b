"""
FastAPI Web Application - Slack Endpoints
=========================================

Receives slash commands and button actions from Slack, hands them to the
command router and relays the answer. Follow-up messages (announcements,
commentary, prompt replacements) go to the request's response_url from a
background task after the HTTP response has been sent.
"""

import json
import logging
from datetime import datetime
from typing import Callable, List, Optional
from contextlib import asynccontextmanager

import pytz
from fastapi import FastAPI, HTTPException, Request, BackgroundTasks
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, ValidationError

from ..application.command_router import CommandRouter, Interaction, SlashCommand
from ..application.responses import BotResponse, CommandResult
from ..domain.calendar import get_timezone
from ..infrastructure.config import Settings, get_settings
from ..infrastructure.llm import CommentaryService
from ..infrastructure.persistence import StarStore, create_store
from ..infrastructure.slack import NotificationProvider, ResponseUrlProvider

logging.basicConfig(level=getattr(logging, get_settings().log_level, logging.INFO))
logger = logging.getLogger(__name__)

# ── Globals ────────────────────────────────────────────────────────
store: Optional[StarStore] = None
router: Optional[CommandRouter] = None
notifier: Optional[NotificationProvider] = None


# ── Inbound payloads ───────────────────────────────────────────────

class SlashCommandPayload(BaseModel):
    """Fields Slack sends with a slash command."""
    user_id: str = ""
    user_name: str = ""
    text: str = ""
    response_url: str = ""


class SlackUser(BaseModel):
    id: str = ""
    username: str = ""
    name: str = ""


class SlackAction(BaseModel):
    action_id: str = ""
    value: str = ""


class InteractionPayload(BaseModel):
    """The JSON document in the 'payload' form field of a block action."""
    user: SlackUser = Field(default_factory=SlackUser)
    actions: List[SlackAction] = Field(default_factory=list)
    response_url: str = ""


# ── Wiring ─────────────────────────────────────────────────────────

def configure(
    star_store: StarStore,
    commentary: Optional[CommentaryService] = None,
    notification_provider: Optional[NotificationProvider] = None,
    settings: Optional[Settings] = None,
) -> CommandRouter:
    """Install the store and collaborators used by the endpoints."""
    global store, router, notifier
    settings = settings or get_settings()

    store = star_store
    notifier = notification_provider or ResponseUrlProvider(settings.slack.notify_timeout_seconds)
    router = CommandRouter(
        star_store,
        get_timezone(settings.timezone),
        commentary=commentary,
        command_name=settings.slack.command_name,
    )
    return router


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    for issue in settings.validate():
        logger.warning(issue)

    configure(create_store(settings), CommentaryService(settings.llm), settings=settings)
    logger.info(f"Workout Wins ready (timezone {settings.timezone}, store {settings.store.backend})")
    yield
    if store:
        store.close()


app = FastAPI(title="Workout Wins", description="Slack workout star tracker", lifespan=lifespan)


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


# ── Helpers ────────────────────────────────────────────────────────

async def parse_slack_body(request: Request) -> dict:
    """Form-encoded (what Slack sends) or JSON, chosen by content type."""
    content_type = request.headers.get("content-type", "").lower()

    if "application/json" in content_type:
        try:
            data = await request.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def deliver_followup(build: Callable[[], BotResponse], response_url: str):
    """Background task: build a follow-up message and post it to Slack."""
    try:
        response = build()
        notifier.send(response_url, response.to_slack())
        logger.info(f"Follow-up delivered ({response.visibility.value})")
    except Exception as e:
        logger.exception(f"Follow-up delivery failed: {e}")


def _json(response: BotResponse) -> JSONResponse:
    return JSONResponse(response.to_slack())


def _reply(result: CommandResult, response_url: str, background_tasks: BackgroundTasks) -> Response:
    if result.deferred is not None:
        if response_url:
            background_tasks.add_task(deliver_followup, result.deferred, response_url)
        else:
            # No side channel to post to: answer with the follow-up itself
            return _json(result.deferred())

    if result.response is None:
        return Response(status_code=200)
    return _json(result.response)


def _require_router() -> CommandRouter:
    if router is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return router


# ══════════════════════════════════════════════════════════════════
#  ROUTES
# ══════════════════════════════════════════════════════════════════

@app.post("/slack/workout")
async def slash_command(request: Request, background_tasks: BackgroundTasks):
    """Handle /workout-wins slash commands."""
    active_router = _require_router()
    body = await parse_slack_body(request)

    try:
        payload = SlashCommandPayload(**body)
    except ValidationError as e:
        logger.warning(f"Malformed slash command: {e}")
        raise HTTPException(status_code=400, detail="Malformed slash command")

    command = SlashCommand(
        user_id=payload.user_id,
        display_name=payload.user_name,
        raw_text=payload.text,
        now=utc_now(),
        response_url=payload.response_url,
    )
    result = active_router.handle_command(command)
    return _reply(result, payload.response_url, background_tasks)


@app.post("/slack/interactions")
async def interactions(request: Request, background_tasks: BackgroundTasks):
    """Handle Confirm / Cancel clicks on a repeat-star prompt."""
    active_router = _require_router()
    body = await parse_slack_body(request)

    try:
        raw = body.get("payload")
        payload = InteractionPayload(**(json.loads(raw) if isinstance(raw, str) else body))
    except (ValueError, TypeError, ValidationError) as e:
        logger.warning(f"Malformed interaction payload: {e}")
        raise HTTPException(status_code=400, detail="Malformed interaction payload")

    if not payload.actions:
        raise HTTPException(status_code=400, detail="No action in payload")

    action = payload.actions[0]
    interaction = Interaction(
        action_id=action.action_id,
        user_id=payload.user.id,
        display_name=payload.user.username or payload.user.name,
        day_key=action.value,
        response_url=payload.response_url,
    )
    result = active_router.handle_interaction(interaction)

    # Slack ignores the HTTP body of block actions; replies go to response_url
    if payload.response_url and result.response is not None:
        response = result.response
        background_tasks.add_task(deliver_followup, lambda: response, payload.response_url)
        return Response(status_code=200)
    return _reply(result, payload.response_url, background_tasks)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=get_settings().host, port=get_settings().port)
