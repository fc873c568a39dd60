"""HTTP middleware for request ID propagation and correlation.

Every request/response pair carries a correlation id so that the admission
and submission log lines of one request can be tied together.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from registry_gate.core.config import settings
from registry_gate.core.logging import clear_request_id, set_request_id


async def request_id_middleware(request: Request, call_next) -> Response:
    """Bind a request id for the duration of the request.

    The incoming header (``settings.log.request_id_header``) is reused when
    present, otherwise a UUID4 is generated. The id and the total duration,
    including any time spent waiting for admission, are echoed back as
    response headers.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response
