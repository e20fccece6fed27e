import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket
from loguru import logger

from app.dependencies import get_change_feed
from app.Domains.Booking.Services.appointment_service import APPOINTMENTS_TABLE
from app.Domains.Realtime.Services.change_feed import ChangeFeed, ChangeStream

router = APIRouter(tags=["Realtime WebSocket"])


async def _forward(websocket: WebSocket, stream: ChangeStream):
    async for change in stream:
        await websocket.send_json(change.model_dump(mode="json"))


async def _wait_for_disconnect(websocket: WebSocket):
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/ws/appointments")
async def appointments_feed(
    websocket: WebSocket,
    event: str = "*",
    filter: Optional[str] = None,
    feed: ChangeFeed = Depends(get_change_feed),
):
    """
    Pushes appointment row changes to the client, e.g. `?filter=customer_name=eq.Tom`.
    """
    try:
        stream = feed.listen(APPOINTMENTS_TABLE, event, filter)
    except ValueError as e:
        await websocket.accept()
        await websocket.close(code=4400, reason=str(e))
        return

    await websocket.accept()
    tasks = {
        asyncio.create_task(_forward(websocket, stream)),
        asyncio.create_task(_wait_for_disconnect(websocket)),
    }
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            if task.exception() is not None:
                logger.warning(f"Realtime connection ended with error: {task.exception()}")
    finally:
        for task in tasks:
            task.cancel()
        stream.close()
        logger.debug(f"Realtime client disconnected (filter={filter})")
