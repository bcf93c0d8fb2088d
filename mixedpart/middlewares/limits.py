"""Request body size limit applied ahead of multipart decoding."""

from collections.abc import Iterable

import orjson
from robyn import Request, Response

from mixedpart.core.logger import LogIcon, logger
from mixedpart.core.settings import settings as st
from mixedpart.middlewares.base import BaseMiddleware


class BodySizeLimitMiddleware(BaseMiddleware):
    """Rejects request bodies larger than ``max_body_size`` with 413.

    Decoding buffers the whole body, so the cap bounds memory and latency.
    """

    def __init__(self, endpoints: Iterable[str] | None = None, max_body_size: int | None = None) -> None:
        super().__init__(endpoints)
        self.max_body_size = max_body_size if max_body_size is not None else st.MAX_BODY_SIZE

    def before(self, request: Request) -> Request | Response:
        body = request.body or b""
        size = len(body.encode() if isinstance(body, str) else body)
        if size <= self.max_body_size:
            return request

        logger.warning("Request body too large", icon=LogIcon.LIMIT, size=size, limit=self.max_body_size)
        return Response(
            status_code=413,
            headers={"content-type": "application/json"},
            description=orjson.dumps({"error": "body_too_large", "limit": self.max_body_size}).decode(),
        )

    def after(self, response: Response) -> Response:
        return response
