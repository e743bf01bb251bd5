from fastapi import FastAPI, Request
import logging
import os

from svgcad.convert_api.api import failure_response, router
from svgcad.services.errors import SvgConversionError

logger = logging.getLogger(__name__)

app = FastAPI(title="svgcad")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(SvgConversionError)
async def conversion_error_handler(request: Request, exc: SvgConversionError):
    logger.warning("Conversion failed: %s", exc, extra={"status_code": exc.status_code})
    return failure_response(exc.status_code, exc.message, exc.error or exc.message)


app.include_router(router, prefix="/api")


def run():
    import uvicorn

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3000")))


if __name__ == "__main__":
    run()
