"""
Runtime settings, read from COLOR_TOOLS_* environment variables.
"""

import os

from pydantic import BaseModel, Field


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    host: str = Field("0.0.0.0", description="Address uvicorn binds to")
    port: int = Field(8973, ge=1, le=65535)
    log_level: str = Field("INFO", description="Root logging level")
    mcp: bool = Field(True, description="Mount the MCP transport on /mcp")

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        values = {}
        if "COLOR_TOOLS_HOST" in env:
            values["host"] = env["COLOR_TOOLS_HOST"]
        if "COLOR_TOOLS_PORT" in env:
            values["port"] = int(env["COLOR_TOOLS_PORT"])
        if "COLOR_TOOLS_LOG_LEVEL" in env:
            values["log_level"] = env["COLOR_TOOLS_LOG_LEVEL"].upper()
        if "COLOR_TOOLS_MCP" in env:
            values["mcp"] = _flag(env["COLOR_TOOLS_MCP"])
        return cls(**values)
