"""Launch the control API under uvicorn.

Host and port default to `ApiConfig` (HOST / PORT, `.env` honoured); flags
override them. The app is built by `create_app` in the worker, so each
reload gets a fresh controller.

  python -m agent_wallet.ui.serve --port 8080 --reload
"""

from __future__ import annotations

import argparse
import os
from typing import Any, Dict, List, Optional

import uvicorn
from dotenv import load_dotenv

from agent_wallet.config import load_config


APP_FACTORY = "agent_wallet.ui.api:create_app"


def uvicorn_options(argv: Optional[List[str]] = None) -> Dict[str, Any]:
    load_dotenv(override=False)
    api = load_config().api

    p = argparse.ArgumentParser(description="Agent wallet control API")
    p.add_argument("--host", default=api.host)
    p.add_argument("--port", type=int, default=api.port)
    p.add_argument("--reload", action="store_true", help="Restart on code changes (dev only)")
    p.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "info"))
    args = p.parse_args(argv)

    return {
        "factory": True,
        "host": args.host,
        "port": args.port,
        "reload": args.reload,
        "log_level": args.log_level,
    }


def main(argv: Optional[List[str]] = None) -> None:
    uvicorn.run(APP_FACTORY, **uvicorn_options(argv))


if __name__ == "__main__":
    main()
