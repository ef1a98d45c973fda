from fastapi import APIRouter, Depends, WebSocket

from routes.http import get_intake_services
from intake_agent.agents.intake import IntakeSubmissionFlow, intake_session_stream
from intake_agent.core import IntakeEvent, IntakeResultEvent, IntakeStatusEvent

from .ws_shared import run_websocket_session

router = APIRouter()


async def _send_intake_event(websocket: WebSocket, event: IntakeEvent) -> None:
    if isinstance(event, IntakeStatusEvent):
        payload = {
            "type": "intake_status",
            "status": event.status,
            "attempt": event.attempt,
        }
        await websocket.send_json(payload)
    elif isinstance(event, IntakeResultEvent):
        await websocket.send_json(event.payload)


@router.websocket("/ws/intake")
async def websocket_endpoint(
    websocket: WebSocket,
    services: dict = Depends(get_intake_services),
) -> None:
    flow = IntakeSubmissionFlow(services["analysis"], services["store"])
    await run_websocket_session(
        websocket=websocket,
        component="websocket_intake",
        session_prefix="ws-intake",
        pipeline_factory=lambda messages: intake_session_stream(messages, flow),
        send_event=_send_intake_event,
    )
