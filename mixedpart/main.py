"""robyn-mixedpart - multipart/mixed decoding service powered by Robyn."""

from robyn import Robyn

from mixedpart.api.health import router as health_router
from mixedpart.api.parts import router as parts_router
from mixedpart.core.logger import LogIcon, logger
from mixedpart.core.router import MIXED_ENDPOINTS
from mixedpart.core.settings import settings as st
from mixedpart.middlewares.base import MiddlewareHandler
from mixedpart.middlewares.limits import BodySizeLimitMiddleware
from mixedpart.middlewares.openapi import MixedOpenAPIMiddleware

app = Robyn(__file__)

# Routers
app.include_router(health_router)
app.include_router(parts_router)

# Middlewares
middlewares = MiddlewareHandler(app)
middlewares.register(MixedOpenAPIMiddleware())
middlewares.register(BodySizeLimitMiddleware(endpoints=MIXED_ENDPOINTS))


def main() -> None:
    logger.info("Starting %s | HOST=%s | PORT=%s", st.API_NAME, st.API_HOST, st.API_PORT, icon=LogIcon.START)
    app.start(host=st.API_HOST, port=st.API_PORT)


if __name__ == "__main__":
    main()
