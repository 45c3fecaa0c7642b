# app/core/logging_middleware.py
from fastapi import Request
from app.core.logger import logger
import time
import uuid

REQUEST_ID_HEADER = "X-Request-ID"

async def log_requests(request: Request, call_next):
    """Log every request with a request id, status and elapsed time"""

    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
    client = request.client.host if request.client else "unknown"
    started = time.perf_counter()

    with logger.contextualize(request_id=request_id):
        logger.info(f"{request.method} {request.url.path} from {client}")

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception(
                f"{request.method} {request.url.path} failed after {elapsed_ms:.2f}ms"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} "
            f"- Status: {response.status_code} "
            f"- Time: {elapsed_ms:.2f}ms"
        )

    response.headers[REQUEST_ID_HEADER] = request_id
    return response
