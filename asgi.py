"""
ASGI entry point.

Run with:
    uvicorn asgi:app
or:
    python main.py   (binds LISTEN_ADDR, default 127.0.0.1:6770)
"""

from app import create_app

app = create_app()
