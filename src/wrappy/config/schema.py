"""Pydantic models for wrappy.yaml configuration."""

from typing import Literal

from pydantic import BaseModel, Field


class ContainersConfig(BaseModel):
    """Where containers live and how they are created."""

    root_dir: str = Field(
        default="~/.wrappy/containers",
        description="Directory new containers are created in when no base dir is given",
    )
    atomic_create: bool = Field(
        default=False,
        description="Stage container creation in a temporary directory and rename into place",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level for wrappy modules",
    )


class WrappyConfig(BaseModel):
    """Root configuration model for wrappy.yaml."""

    containers: ContainersConfig = Field(default_factory=ContainersConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
