from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from scenepanel_core.home import ScenePanelPaths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    core_port: int = Field(default=8790, ge=1, le=65535)


class LoggingConfig(BaseModel):
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class FormConfig(BaseModel):
    """A form declared on the control panel.

    ``method`` and ``action`` play the role of the HTML form's own attributes; the panel
    always submits with whatever is declared here.
    """

    selector: str = Field(min_length=2, pattern=r"^#[A-Za-z][\w-]*$")
    method: str = Field(default="POST")
    action: str = Field(min_length=1)
    fields: dict[str, str] = Field(
        default_factory=dict,
        description="Ordered field names mapped to the value sent when the field is left out.",
    )


def _default_forms() -> list[FormConfig]:
    return [
        FormConfig(
            selector="#triangle-add",
            action="/add-triangle",
            fields={"x": "0", "y": "0"},
        ),
        FormConfig(
            selector="#text-add",
            action="/add-text",
            fields={"text": "", "x": "0", "y": "0", "wavy": "false"},
        ),
    ]


class UiConfig(BaseModel):
    delete_endpoint: str = Field(default="/delete")
    api_base_url: str | None = Field(
        default=None,
        description=(
            "Base URL of the scene API used by the panel. If omitted, the panel calls the "
            "running app in-process."
        ),
    )
    max_sessions: int = Field(default=64, ge=1)
    forms: list[FormConfig] = Field(default_factory=_default_forms)


class CoreConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    ui: UiConfig = Field(default_factory=UiConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_core_config(paths: ScenePanelPaths) -> CoreConfig:
    """Load config from ${SCENEPANEL_HOME}/config/core.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.core_config_path
    if not config_path.exists():
        return CoreConfig()

    raw = _read_json(config_path)
    return CoreConfig.model_validate(raw)


def write_core_config(paths: ScenePanelPaths, config: CoreConfig) -> None:
    """Persist config to ${SCENEPANEL_HOME}/config/core.json."""

    payload = config.model_dump(mode="json", exclude_none=True)
    paths.config_dir.mkdir(parents=True, exist_ok=True)
    paths.core_config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
