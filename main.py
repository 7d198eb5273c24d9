"""Main application entry point."""

import os

import uvicorn

from campusconnect.config.environment import IS_PRODUCTION_ENVIRONMENT

PORT = int(os.environ.get("PORT", "8000"))

if __name__ == "__main__":
    if not IS_PRODUCTION_ENVIRONMENT:
        # Development: single process with hot reload
        uvicorn.run(
            "campusconnect.api.app:app",
            host="127.0.0.1",
            port=PORT,
            reload=True,
            log_level="debug"
        )
    else:
        # Production: the in-memory catalog lives in one process, so one worker
        uvicorn.run(
            "campusconnect.api.app:app",
            host="0.0.0.0",
            port=PORT,
            reload=False,
            workers=1,
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
