"""B3 Store FastAPI application.

Serves the storefront API. Commands are processed synchronously within each
request; every ``/api`` request runs inside the storefront domain context
with its method and path bound to the log context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# PROTEAN_ENV picks the config overlay before the domain initializes. With
# event_processing = "sync" SMS handlers run inline after commit; with "async"
# they run in the Engine started by src/server.py.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api import (
    category_router,
    customer_router,
    order_router,
    product_router,
    register_error_handlers,
)
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context

storefront.init()

app = FastAPI(
    title="B3 Store API",
    description="Grocery ordering with bcoin loyalty rewards",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def storefront_context(request: Request, call_next):
    if not request.url.path.startswith("/api"):
        return await call_next(request)

    add_context(method=request.method, path=request.url.path)
    try:
        with storefront.domain_context():
            return await call_next(request)
    finally:
        clear_context()


for router in (order_router, product_router, category_router, customer_router):
    app.include_router(router)
register_error_handlers(app)


@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "store": storefront.name})
