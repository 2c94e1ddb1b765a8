# submap_bridge/app.py
import asyncio
import importlib
import json
import logging
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from . import config as C
from .api.deps import get_bridge, set_shared
from .api.routes import router
from .core import MapBuilderBridge, Options, SlamBackend
from .errors import ConsistencyViolation
from .services.submap_service import submap_list_service
from .state import SharedState

logger = logging.getLogger(__name__)


def load_backend(spec: str, options: Options) -> SlamBackend:
    """
    Build the SLAM backend from a "package.module:factory" string.
    The factory receives the backend options mapping.
    """
    if not spec or ":" not in spec:
        raise RuntimeError(
            "no backend configured; set SUBMAP_BRIDGE_BACKEND=package.module:factory"
        )
    module_name, attr = spec.split(":", 1)
    factory = getattr(importlib.import_module(module_name), attr)
    return factory(options.backend_options)


def create_app(bridge: Optional[MapBuilderBridge] = None) -> FastAPI:
    app = FastAPI(title="Submap Bridge")

    # CORS for both HTTP and WS (allow all origins; credentials False to keep wildcard)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    shared = SharedState(bridge=bridge)
    set_shared(shared)
    app.state.shared = shared
    app.include_router(router)

    # ---------------------- Lifecycle ----------------------
    @app.on_event("startup")
    async def on_startup():
        if shared.bridge is not None:
            return
        C.configure_logging()
        options = Options.from_config()
        backend = load_backend(C.BACKEND_FACTORY, options)
        shared.attach(MapBuilderBridge(backend, options, C.EXPECTED_SENSOR_IDS))

    @app.on_event("shutdown")
    async def on_shutdown():
        b = shared.detach()
        if b is not None:
            b.shutdown()

    # ---------------------- WS: Submap list stream ------------
    @app.websocket("/ws/submap_list")
    async def ws_submap_list(ws: WebSocket):
        """Pushes the submap list whenever a submap version or pose changes."""
        await ws.accept()
        bridge = get_bridge()
        last_sent = None
        period = 1.0 / C.SUBMAP_LIST_WS_HZ

        try:
            while True:
                try:
                    snap = await asyncio.to_thread(submap_list_service, bridge)
                except ConsistencyViolation as e:
                    # abandon this tick; the next poll reads a fresh snapshot
                    logger.error("submap list stream: %s", e)
                    snap = None

                if snap is not None:
                    payload = snap.model_dump()
                    if payload["trajectory"] != last_sent:
                        await ws.send_text(json.dumps({"type": "submap_list", **payload}))
                        last_sent = payload["trajectory"]

                # doubles as the poll period; a client close ends the loop here
                try:
                    await asyncio.wait_for(ws.receive_text(), timeout=period)
                except asyncio.TimeoutError:
                    pass
        except WebSocketDisconnect:
            return

    return app


app = create_app()
