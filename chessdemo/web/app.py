"""
FastAPI application — the web UI backend.

Exposes:
  GET  /api/personalities  Built-in and configured personalities
  GET  /api/config         Speeds, delays and restart settings for the UI
  POST /api/move           One selector pick for a given FEN and personality,
                           with the resulting board as SVG
  WS   /ws/demo            Stream an auto-play session over a WebSocket

The WebSocket client may send {"type": "reset"}, {"type": "speed"} or
{"type": "stop"} at any time. Every server message is an event dict with a
"type" key naming the event class.

In production FastAPI serves the built frontend from frontend/dist.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import logging.handlers
from datetime import date, datetime
from pathlib import Path

import chess
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from chessdemo.board import ChessBoard
from chessdemo.config import Config, load_config
from chessdemo.events import SpeedChangedEvent
from chessdemo.game import run_autoplay
from chessdemo.personality import get_personality
from chessdemo.renderer import render_svg
from chessdemo.selector import score_move, select_move
from chessdemo.session import SPEEDS, DemoSession

try:
    config = load_config()
except FileNotFoundError:
    config = Config()

# --------------------------------------------------------------------------- #
# Logging                                                                      #
# --------------------------------------------------------------------------- #

_LOG_FILE = Path("./logs/chessdemo.log")
_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    handlers=[
        logging.StreamHandler(),                                   # server console
        logging.handlers.RotatingFileHandler(
            _LOG_FILE, maxBytes=2 * 1024 * 1024, backupCount=3,  # 2 MB × 3 files
            encoding="utf-8",
        ),
    ],
)
logger = logging.getLogger("chessdemo")


app = FastAPI(title="ChessDemo")

_DIST = Path(__file__).parent.parent.parent / "frontend" / "dist"


def _to_json_dict(event: object) -> dict:
    """Event dataclass → dict tagged with its class name."""
    return {"type": type(event).__name__, **dataclasses.asdict(event)}  # type: ignore[call-overload]


def _to_json(data: dict) -> str:
    """json.dumps with datetime → ISO-string support."""
    def _default(obj: object) -> str:
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
    return json.dumps(data, default=_default)


# --------------------------------------------------------------------------- #
# REST                                                                         #
# --------------------------------------------------------------------------- #

@app.get("/api/personalities")
def get_personalities():
    return [
        dataclasses.asdict(p)
        for p in sorted(config.personality_pool().values(), key=lambda p: p.name)
    ]


@app.get("/api/config")
def get_config():
    return {
        "speed": config.demo.speed,
        "speeds": [
            {"name": s.name, "label": s.label, "delay_ms": s.delay_ms} for s in SPEEDS
        ],
        "restart_delay": config.demo.restart_delay,
        "max_plies": config.demo.max_plies,
        "white_personality": config.demo.white_personality,
        "black_personality": config.demo.black_personality,
    }


@app.post("/api/move")
def api_move(payload: dict):
    """Pick a move for the side to move in `fen` with the named personality."""
    fen = str(payload.get("fen", "")).strip() or chess.STARTING_FEN
    name = str(payload.get("personality", "balanced"))

    try:
        personality = get_personality(name, config.personalities)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    try:
        board = ChessBoard(fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    if board.game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over ({board.game_over_reason()})",
        )

    move = select_move(board.moves(verbose=True), personality, board.color_to_move)  # type: ignore[arg-type]
    board.move(move)
    return {
        "move": dataclasses.asdict(move),
        "base_score": score_move(move, personality),
        "personality": personality.name,
        "fen_after": board.fen(),
        "svg": render_svg(board, board.last_move()),
    }


# --------------------------------------------------------------------------- #
# WebSocket demo                                                               #
# --------------------------------------------------------------------------- #

@app.websocket("/ws/demo")
async def demo_ws(ws: WebSocket) -> None:
    await ws.accept()
    session = DemoSession(config)

    async def _send(event: object) -> None:
        await ws.send_text(_to_json(_to_json_dict(event)))

    async def _demo_loop() -> None:
        try:
            async for event in run_autoplay(session):
                await _send(event)
        except WebSocketDisconnect:
            session.request_stop()

    async def _receive_loop() -> None:
        try:
            while True:
                msg = await ws.receive_json()
                match msg.get("type"):
                    case "reset":
                        logger.info("Client requested reset")
                        session.request_reset()
                    case "speed":
                        speed = session.cycle_speed()
                        await _send(SpeedChangedEvent(label=speed.label, delay_ms=speed.delay_ms))
                    case "stop":
                        # Keep listening; the demo loop ends on its own once
                        # the current game reports the interruption.
                        session.request_stop()
                    case other:
                        logger.warning("Ignoring unknown control message %r", other)
        except (WebSocketDisconnect, RuntimeError):
            session.request_stop()

    try:
        # Run demo and receive concurrently; cancel whichever is still running
        # when the other finishes (e.g. stop → demo ends → stop listening).
        demo_task = asyncio.create_task(_demo_loop())
        recv_task = asyncio.create_task(_receive_loop())

        done, pending = await asyncio.wait(
            {demo_task, recv_task}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
            try:
                await task
            except (asyncio.CancelledError, WebSocketDisconnect):
                pass

        # Re-raise any exception from the demo loop
        for task in done:
            if task.exception():
                raise task.exception()  # type: ignore[misc]

    except WebSocketDisconnect:
        session.request_stop()
    except Exception as exc:
        logger.exception("Demo session failed")
        try:
            await ws.send_text(_to_json({"type": "error", "message": str(exc)}))
        except (WebSocketDisconnect, RuntimeError):
            pass


# --------------------------------------------------------------------------- #
# Serve built frontend in production                                           #
# --------------------------------------------------------------------------- #

if _DIST.exists():
    app.mount(
        "/assets", StaticFiles(directory=_DIST / "assets"), name="assets"
    )

    @app.get("/{full_path:path}")
    async def spa(full_path: str) -> FileResponse:
        return FileResponse(_DIST / "index.html")
