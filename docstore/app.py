"""Entry point serving the document store over HTTP."""

from __future__ import annotations

import asyncio
import logging
import signal

import uvicorn

from docstore.api.app import create_app
from docstore.infra.config import AppConfig, load_config
from docstore.infra.logging import configure_logging
from docstore.store.database import Database


async def run_server(cfg: AppConfig) -> None:
    logger = logging.getLogger(__name__)
    db = Database.from_config(cfg.storage)
    app = create_app(db, cfg.server)

    server = uvicorn.Server(uvicorn.Config(app, host=cfg.server.host, port=cfg.server.port, log_config=None))
    stop_event = asyncio.Event()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            asyncio.get_running_loop().add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows/limited environments
            pass

    logger.info(
        "Server listening on port %s", cfg.server.port,
        extra={"event": "startup", "data_dir": str(db.root), "lock_paths": cfg.storage.lock_paths},
    )
    serve = asyncio.create_task(server.serve())
    stopped = asyncio.create_task(stop_event.wait())
    await asyncio.wait({serve, stopped}, return_when=asyncio.FIRST_COMPLETED)

    server.should_exit = True
    stopped.cancel()
    await asyncio.gather(serve, stopped, return_exceptions=True)


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="JSON document store server")
    parser.add_argument("--config", default=None, help="Path to settings YAML (default: $CONFIG_PATH)")
    parser.add_argument("--port", type=int, default=None, help="Override the configured port")
    parser.add_argument("--reset", action="store_true", help="Restore seed documents before serving")
    args = parser.parse_args()

    configure_logging()
    cfg = load_config(args.config)
    if args.port is not None:
        cfg.server.port = args.port
    if args.reset:
        asyncio.run(Database.from_config(cfg.storage).reset())

    asyncio.run(run_server(cfg))


if __name__ == "__main__":
    main()
