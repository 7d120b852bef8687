"""Live quote stream: debounced Fusion quotes over a WebSocket.

The client sends one JSON message per keystroke in the amount field; only
the last request in each quiet window reaches the upstream API, and its
quote is pushed back. Stale requests are dropped, never answered.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from aggregator_core.api.routes.swap import fetch_fusion_quote, missing_quote_params
from aggregator_core.cache import ResponseCache
from aggregator_core.debounce import debounce
from aggregator_core.errors import AggregatorError
from aggregator_core.exchange import OneInchClient
from aggregator_core.logging import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["swap"])


def _connected(websocket: WebSocket) -> bool:
    return (
        websocket.client_state == WebSocketState.CONNECTED
        and websocket.application_state == WebSocketState.CONNECTED
    )


async def push_quote(
    websocket: WebSocket,
    client: OneInchClient,
    cache: ResponseCache,
    chain_id: int,
    params: dict[str, Any],
) -> None:
    """Fetch a quote and send it, unless the socket closed while it was in flight."""
    try:
        reply = {"quote": await fetch_fusion_quote(client, cache, chain_id, params)}
    except AggregatorError as e:
        reply = {"error": str(e)}
    if not _connected(websocket):
        log.debug("quote_dropped_after_close", chain_id=chain_id, amount=params.get("amount"))
        return
    reply["request"] = params
    await websocket.send_json(reply)


@router.websocket("/ws/quote/{chain_id}")
async def quote_stream(websocket: WebSocket, chain_id: int):
    state = websocket.app.state
    await websocket.accept()

    debounced = debounce(
        lambda params: push_quote(websocket, state.client, state.response_cache, chain_id, params),
        state.config.quote_stream.debounce_seconds,
    )
    try:
        while True:
            text = await websocket.receive_text()
            try:
                message = json.loads(text)
            except ValueError:
                await websocket.send_json({"error": "Invalid JSON"})
                continue
            if not isinstance(message, dict):
                await websocket.send_json({"error": "Expected a JSON object"})
                continue
            params = {k: str(v) for k, v in message.items() if v is not None}
            missing = missing_quote_params(params)
            if missing:
                await websocket.send_json(
                    {"error": f"Missing required parameters: {', '.join(missing)}"}
                )
                continue
            debounced(params)
    except WebSocketDisconnect:
        log.debug("quote_stream_closed", chain_id=chain_id, pending=debounced.pending)
    finally:
        debounced.cancel()
