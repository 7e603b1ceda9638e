"""
Interactive lookup over a websocket: /ws/lookup

Each text frame is the current query. Replies are debounced per connection,
so a burst of keystrokes produces a single lookup for the last one.
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool

from wordbook.core.debounce import DebounceGate
from wordbook.core.errors import InvalidQuery


logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/lookup")
async def lookup_socket(websocket: WebSocket):
    await websocket.accept()
    dictionary = websocket.app.state.dictionary
    delay = websocket.app.state.settings.debounce_seconds
    gate = DebounceGate()

    async def send_lookup(query: str):
        try:
            result = await run_in_threadpool(dictionary.lookup, query)
            payload = {"query": query, **result.to_dict()}
        except InvalidQuery as e:
            payload = {"query": query, "status": "invalid", "reason": str(e)}
        await websocket.send_json(payload)

    try:
        while True:
            query = await websocket.receive_text()
            gate.schedule("lookup", delay, send_lookup, query)
    except WebSocketDisconnect:
        logger.debug("lookup socket closed")
    finally:
        gate.cancel_all()
