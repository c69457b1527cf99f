"""
Entry point for the polygon clipping service.

Running this script with ``python run.py`` will start the FastAPI
server that exposes the clipping API and, when present, the static
front end.  The application defined in ``backend/polyclip/main.py`` is
imported after adjusting the Python path to include the ``backend``
directory.

The bind address, port and log level can be overridden with the
``POLYCLIP_HOST``, ``POLYCLIP_PORT`` and ``POLYCLIP_LOG_LEVEL``
environment variables.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import logging
import uvicorn

logging.basicConfig(
    level=os.getenv("POLYCLIP_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the clipping service."""
    # Ensure ``backend`` is on sys.path so that ``polyclip`` can be
    # imported without installing the project.
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    # Import inside main() to avoid modifying sys.path at module import time.
    from polyclip.main import app  # type: ignore

    host = os.getenv("POLYCLIP_HOST", "0.0.0.0")
    port = int(os.getenv("POLYCLIP_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
