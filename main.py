"""
main.py: Server launcher and entry point.

Run this file to start the nurse assignment API:

    python main.py

The interactive API docs open at http://127.0.0.1:8000/docs

This file does NOT contain application logic. See nurse_assignment/main.py for
the FastAPI application factory and service wiring.

Direct uvicorn usage:
    uvicorn nurse_assignment.main:app --reload
"""

from __future__ import annotations

import uvicorn


HOST = "127.0.0.1"
PORT = 8000


def main() -> None:
    """Start the assignment API server."""
    print("=" * 60)
    print("  Nurse Assignment Calculator")
    print("=" * 60)
    print(f"  Server  : http://{HOST}:{PORT}")
    print(f"  API docs: http://{HOST}:{PORT}/docs")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    # Blocks until CTRL+C
    uvicorn.run(
        "nurse_assignment.main:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()
