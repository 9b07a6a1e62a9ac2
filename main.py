import argparse
import logging
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager

import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db, get_schema_version_from_db
from config import load_config, get_config_value
from routes import tools_router
from utils.scheduler import intervals_from_config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

# First-run init
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: init DB and config
    config = load_config()  # Ensures config exists
    configure_logging(config["logging"]["level"])
    init_db()
    app.state.intervals = intervals_from_config(config)
    yield

app = FastAPI(
    title="RecallCoach",
    description="Spaced-repetition study items exposed as tools",
    lifespan=lifespan,
)

app.include_router(tools_router, prefix="/tools", tags=["tools"])

@app.get("/health")
async def health():
    return {"status": "ok", "schemaVersion": get_schema_version_from_db()}

def resolve_server_options(host: Optional[str] = None, port: Optional[int] = None) -> Dict[str, Any]:
    """Command-line values win over config.toml."""
    return {
        "host": host or get_config_value("server", "host", "127.0.0.1"),
        "port": port or get_config_value("server", "port", 8000),
        "log_level": get_config_value("logging", "level", "INFO"),
    }

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="RecallCoach tool server")
    parser.add_argument("--init", action="store_true", help="Initialize DB and config")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    parser.add_argument("--host", help="Bind address (default from config)")
    parser.add_argument("--port", type=int, help="Port (default from config)")
    args = parser.parse_args()
    options = resolve_server_options(args.host, args.port)  # Ensures config is copied if missing
    configure_logging(options["log_level"])
    if args.init:
        init_db()
        print("DB initialized and config copied to ~/.recallcoach/")
        exit(0)
    uvicorn.run(
        "main:app",
        host=options["host"],
        port=options["port"],
        reload=args.dev,
        log_level=options["log_level"].lower(),
    )
