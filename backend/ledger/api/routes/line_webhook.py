"""
LINE webhook used to discover the user, group or room id to push to.
"""
import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/line", tags=["line"])

SOURCE_KEYS = ("userId", "groupId", "roomId")


@router.get("/webhook")
async def webhook_ready():
    """LINE console verification."""
    return {"status": "LINE webhook is ready"}


@router.post("/webhook")
async def receive_webhook(request: Request):
    """Log source ids found in LINE events so one can be set as LINE_USER_ID."""
    try:
        body = await request.json()
    except ValueError:
        logger.warning("LINE webhook received a non-JSON body")
        return JSONResponse(
            status_code=400,
            content={"status": "error", "message": "Failed to process webhook"}
        )

    events = body.get("events") if isinstance(body, dict) else None
    for event in events if isinstance(events, list) else []:
        if not isinstance(event, dict):
            continue
        source = event.get("source") or {}
        for key in SOURCE_KEYS:
            if source.get(key):
                logger.info("LINE %s found: %s (set LINE_USER_ID=%s)", key, source[key], source[key])

        logger.info("LINE event type: %s", event.get("type"))
        message = event.get("message") or {}
        if event.get("type") == "message" and message.get("type") == "text":
            logger.info("LINE message: %s", message.get("text"))

    return {"status": "ok"}
