"""
Entry point for the ChessDemo web UI.

Development (hot-reload):
    python web_main.py          ← API + WebSocket on :8000

Production: build the frontend into frontend/dist and run the same command;
FastAPI serves it alongside /api and /ws/demo.
"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "chessdemo.web.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
