# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/config/models.py

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from dockctl.docker.run import RestartPolicy


class StepBase(BaseModel):
    name: Optional[str] = None
    retries: int = Field(default=1, ge=1)          # total attempts on CommandFailed
    retry_delay_seconds: float = Field(default=2.0, ge=0)


class BuildStep(StepBase):
    action: Literal["build"]
    image: str
    context: str = ""
    build_file: Optional[str] = None
    build_args: Dict[str, str] = Field(default_factory=dict)
    labels: Dict[str, str] = Field(default_factory=dict)
    timestamp_label: bool = False


class Mount(BaseModel):
    host: str
    container: str


class Port(BaseModel):
    host: int
    container: int


class RunStep(StepBase):
    action: Literal["run"]
    image: str
    args: List[str] = Field(default_factory=list)
    container_name: Optional[str] = None
    hostname: Optional[str] = None
    workdir: Optional[str] = None
    network: Optional[str] = None
    detached: bool = False
    interactive: bool = False
    privileged: bool = False
    read_only: bool = False
    remove: bool = False
    restart: Optional[str] = None
    restart_retries: Optional[int] = None
    env: Dict[str, str] = Field(default_factory=dict)
    ports: List[Port] = Field(default_factory=list)
    mounts: List[Mount] = Field(default_factory=list)

    @field_validator("restart")
    @classmethod
    def _known_policy(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in {p.value for p in RestartPolicy}:
            raise ValueError(f"unknown restart policy '{v}'")
        return v


class ExecStep(StepBase):
    action: Literal["exec"]
    container: str
    command: List[str]
    detached: bool = False
    tty: bool = False
    privileged: bool = False
    user: Optional[str] = None
    group: Optional[str] = None
    workdir: Optional[str] = None


class LoginStep(StepBase):
    action: Literal["login"]
    host: str
    username: Optional[str] = None
    password: Optional[str] = None   # omit to read from stdin


class ImageStep(StepBase):
    action: Literal["pull", "push"]
    image: str


class TagStep(StepBase):
    action: Literal["tag"]
    source: str
    target: str


class RemoveStep(StepBase):
    action: Literal["rm", "rmi"]
    target: str
    force: bool = False


class ContainerStep(StepBase):
    action: Literal["start", "stop"]
    container: str


Step = Annotated[
    Union[BuildStep, RunStep, ExecStep, LoginStep, ImageStep, TagStep, RemoveStep, ContainerStep],
    Field(discriminator="action"),
]


class Pipeline(BaseModel):
    steps: List[Step] = Field(default_factory=list)
