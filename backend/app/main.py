# backend/app/main.py
"""FastAPI application entry-point."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .config import settings
from .routers import picklist

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Warehouse Pick List API")

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_origin_regex=None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(picklist.router, prefix="/picklist", tags=["picklist"])
# Mirror under /api so the frontend can call /api/* directly.
app.include_router(picklist.router, prefix="/api/picklist", tags=["picklist"])


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}
