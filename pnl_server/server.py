"""FastAPI application exposing trade submission, portfolio and PnL endpoints."""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from pnl_server.routers import portfolio as portfolio_router
from pnl_server.routers import trades as trades_router
from pnl_server.services import AccountingContext
from pnl_server.settings import settings
from pnl_server.state import create_context

logger = logging.getLogger(__name__)


def create_app(context: Optional[AccountingContext] = None) -> FastAPI:
    """Build the application around an accounting context it owns."""
    app = FastAPI(title="PnL Tracker")
    app.state.accounting = context or create_context(settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(trades_router.router)
    app.include_router(portfolio_router.router)

    @app.get("/")
    async def server_time():
        return {"serverTime": int(time.time() * 1000)}

    @app.get("/health")
    async def health_check(request: Request):
        accounting: AccountingContext = request.app.state.accounting
        return {
            "status": "ok",
            "trades": len(accounting.accountant.trade_log),
            "instruments": len(accounting.accountant.instruments()),
        }

    return app


app = create_app()


def main():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Server is running on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":  # pragma: no cover
    main()
