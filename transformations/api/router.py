from fastapi import APIRouter, Request
from starlette.responses import Response

from ..envelope import decode_event
from ..errors import DecodeError

router = APIRouter()


@router.post("/")
async def receive(request: Request) -> Response:
    state = request.app.state
    metrics = state.metrics

    try:
        event = decode_event(request.headers, await request.body())
        metrics.record_received(event["type"])
        outbound = await state.transformation.transform(event)
    except DecodeError:
        metrics.decode_errors_total.inc()
        raise

    response = await state.dispatcher.dispatch(outbound)
    metrics.record_emitted(outbound["type"], state.dispatcher.mode.value)
    return response
