from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

import uvicorn

from scenepanel_core.app import create_app
from scenepanel_core.config import load_core_config
from scenepanel_core.home import ensure_scenepanel_layout, resolve_scenepanel_home


def main() -> None:
    home = resolve_scenepanel_home()
    paths = ensure_scenepanel_layout(home)
    config = load_core_config(paths)

    log_file = paths.logs_dir / "core.log"
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            RotatingFileHandler(
                log_file,
                maxBytes=config.logging.max_size_mb * 1024 * 1024,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            ),
            logging.StreamHandler(),
        ],
    )

    host = os.environ.get("SCENEPANEL_BIND") or config.network.bind_host

    env_port = os.environ.get("SCENEPANEL_PORT")
    port = int(env_port) if env_port else config.network.core_port

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
