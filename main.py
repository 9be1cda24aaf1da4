import argparse
import logging
import threading

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from core.config import settings
from core.db import engine
from core.errors import OrderStoreError, ValidationError
from core.logging import setup_logging
from core.migrate import Migration, migrate
from routes.orders import router as orders_router

load_dotenv()
setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Ensure tables exist for dev/test; production runs `--migration up`
if settings.AUTO_MIGRATE:
    migrate(engine, Migration.UP)

app.include_router(orders_router)


@app.exception_handler(OrderStoreError)
async def order_store_error_handler(request: Request, exc: OrderStoreError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    body = {"status": "error", "message": exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        body["details"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=body)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
    }


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Orders service")
    parser.add_argument("-p", "--port", type=int, default=settings.PORT, help="Port to serve on")
    parser.add_argument(
        "-m", "--migration", type=Migration.parse, default=Migration.NONE, help="Migration to run: up, down or none"
    )
    parser.add_argument("--test-run", action="store_true", help="Post sample orders once the server is up")
    parser.add_argument("--count", type=int, default=1, help="Number of sample orders to create")
    parser.add_argument("-d", "--delay", type=int, default=1000, help="Delay between sample requests, in ms")
    return parser.parse_args(argv)


if __name__ == "__main__":
    import uvicorn
    from services.sample_orders import fill_test_data

    args = parse_args()
    migrate(engine, args.migration)

    if args.test_run:
        threading.Thread(
            target=fill_test_data, args=(args.port, args.count, args.delay), daemon=True
        ).start()

    logger.warning("Server starting on port %s", args.port)
    uvicorn.run(app, host="0.0.0.0", port=args.port, reload=False)
