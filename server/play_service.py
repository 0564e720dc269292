"""REST service exposing the Mines engine."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict
from typing import Dict, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mines.board import MinesError
from mines.rules_schema import RuleSet, load_rules
from mines.service import DEFAULT_PLAYER, ActionView, MinesService

load_dotenv()

RULES_PATH = os.getenv("MINES_RULES_PATH")
LOG_LEVEL = os.getenv("MINES_LOG_LEVEL", "INFO")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("MINES_CORS_ORIGINS", "*").split(",") if origin.strip()]

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


class StartRequest(BaseModel):
    bet: float
    mine_count: int


class RevealRequest(BaseModel):
    row: int
    col: int


class AmountRequest(BaseModel):
    amount: float


class ResetRequest(BaseModel):
    amount: Optional[float] = None


def serialize_action(view: ActionView) -> Dict[str, object]:
    return {
        "game": asdict(view.game),
        "payout": view.payout,
        "balance": view.balance,
    }


def create_app(service: Optional[MinesService] = None) -> FastAPI:
    service = service or MinesService(load_rules(RULES_PATH))
    app = FastAPI(title="Mines Play Service")
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MinesError)
    async def handle_mines_error(request: Request, exc: MinesError) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc), "error": type(exc).__name__})

    @app.post("/api/game/start")
    def start_game(request: StartRequest, x_player_id: str = Header(DEFAULT_PLAYER)) -> Dict[str, object]:
        return serialize_action(service.start_game(request.bet, request.mine_count, player_id=x_player_id))

    @app.post("/api/game/reveal")
    def reveal_cell(request: RevealRequest, x_player_id: str = Header(DEFAULT_PLAYER)) -> Dict[str, object]:
        return serialize_action(service.reveal_cell(request.row, request.col, player_id=x_player_id))

    @app.post("/api/game/cashout")
    def cash_out(x_player_id: str = Header(DEFAULT_PLAYER)) -> Dict[str, object]:
        return serialize_action(service.cash_out(player_id=x_player_id))

    @app.get("/api/game/current")
    def current_game(x_player_id: str = Header(DEFAULT_PLAYER)) -> Dict[str, object]:
        view = service.get_current_game(x_player_id)
        return {"game": asdict(view) if view is not None else None}

    @app.get("/api/player/balance")
    def get_balance(x_player_id: str = Header(DEFAULT_PLAYER)) -> Dict[str, object]:
        return {"balance": service.get_balance(x_player_id)}

    @app.get("/api/player/history")
    def get_history(x_player_id: str = Header(DEFAULT_PLAYER)) -> Dict[str, object]:
        return {"history": [asdict(entry) for entry in service.get_history(x_player_id)]}

    @app.post("/api/player/deposit")
    def deposit(request: AmountRequest, x_player_id: str = Header(DEFAULT_PLAYER)) -> Dict[str, object]:
        return {"balance": service.deposit(request.amount, player_id=x_player_id)}

    @app.post("/api/player/reset")
    def reset_balance(
        request: Optional[ResetRequest] = None, x_player_id: str = Header(DEFAULT_PLAYER)
    ) -> Dict[str, object]:
        amount = request.amount if request is not None else None
        return {"balance": service.reset_balance(amount, player_id=x_player_id)}

    @app.get("/api/rules")
    def get_rules() -> Dict[str, object]:
        rules: RuleSet = service.rules
        return {**rules.model_dump(), "max_mine_count": rules.max_mine_count}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("MINES_HOST", "127.0.0.1"), port=int(os.getenv("MINES_PORT", "8000")))
