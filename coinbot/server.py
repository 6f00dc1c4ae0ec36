# coinbot/server.py
from __future__ import annotations

import argparse
import logging
import signal
from typing import Optional, Sequence

import uvicorn

from coinbot.config.settings import Settings
from coinbot.main import create_app

logger = logging.getLogger("coinbot.server")


class WebhookServer(uvicorn.Server):
    """uvicorn server that logs which signal started the graceful shutdown."""

    def handle_exit(self, sig: int, frame) -> None:
        if not self.should_exit:
            logger.info("shutting down the server | signal=%s", signal.Signals(sig).name)
        super().handle_exit(sig, frame)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CoinCap Dialogflow webhook")
    parser.add_argument("--addr", default=None, help="listen address, e.g. :8080 or 127.0.0.1:9000")
    parser.add_argument("--base", default=None, help="CoinCap assets API base URL")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    return parser


def settings_from_args(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    base = base or Settings.from_env()
    return base.with_overrides(
        LISTEN_ADDR=args.addr,
        COINCAP_BASE_URL=args.base,
        LOG_LEVEL=args.log_level,
    )


def build_server(settings: Settings) -> WebhookServer:
    host, port = settings.listen_host_port
    config = uvicorn.Config(
        create_app(settings),
        host=host,
        port=port,
        timeout_keep_alive=int(settings.IDLE_TIMEOUT_S),
        timeout_graceful_shutdown=int(settings.SHUTDOWN_GRACE_S),
        log_config=None,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return WebhookServer(config)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s %(filename)s:%(lineno)d %(message)s",
    )

    try:
        settings = settings_from_args(args)
        logging.getLogger().setLevel(settings.LOG_LEVEL)
        server = build_server(settings)
    except ValueError as exc:
        logger.critical("bad configuration | %s", exc)
        raise SystemExit(1)

    logger.info("starting the server | addr=%s | upstream=%s", settings.LISTEN_ADDR, settings.COINCAP_BASE_URL)
    try:
        server.run()
    except SystemExit as exc:
        # uvicorn calls sys.exit() when the listen socket cannot be bound
        if exc.code in (None, 0):
            raise
        logger.critical("server failed to start | addr=%s | exit=%s", settings.LISTEN_ADDR, exc.code)
        raise SystemExit(1) from exc
    except Exception:
        logger.critical("server crashed | addr=%s", settings.LISTEN_ADDR, exc_info=True)
        raise SystemExit(1)

    if not server.started:
        logger.critical("server failed to start | addr=%s", settings.LISTEN_ADDR)
        raise SystemExit(1)

    logger.info("stopped the server | addr=%s", settings.LISTEN_ADDR)


if __name__ == "__main__":
    main()
