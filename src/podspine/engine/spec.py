"""Engine-agnostic pipeline spec consumed by the translator.

The upstream loader builds a ``Spec`` once; the translator only reads it.

.. code-block:: text

    Spec
    ├── pod_spec: PodSpec      name, namespace, labels, annotations,
    │                          service account, node selector, tolerations
    ├── volumes: [Volume]      exactly one of empty_dir / host_path
    └── steps:   [Step]        one runtime container each
                 ├── volumes:  [VolumeMount]  by Volume logical name
                 ├── envs:     {name: value}
                 └── secrets:  [Secret]       env name + raw bytes

Volumes carry two identifiers: ``id`` is the generated runtime name used in
the Pod, ``name`` is the logical key steps reference in their mounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PullPolicy(str, Enum):
    """Image pull policy declared on a step.

    ``DEFAULT`` is the unset value; it translates the same way as an
    unrecognized policy.
    """

    DEFAULT = "default"
    ALWAYS = "always"
    IF_NOT_EXISTS = "if-not-exists"
    NEVER = "never"


@dataclass(frozen=True)
class Toleration:
    """Scheduling toleration for tainted nodes.

    ``toleration_seconds`` defaults to ``0`` and is always emitted; pass
    ``None`` to leave it out of the Pod entirely.
    """

    operator: str | None = None
    effect: str | None = None
    toleration_seconds: int | None = 0
    value: str | None = None


@dataclass(frozen=True)
class PodSpec:
    """Pod-level template copied onto the descriptor as-is."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    service_account_name: str = ""
    node_selector: dict[str, str] = field(default_factory=dict)
    tolerations: list[Toleration] = field(default_factory=list)


@dataclass(frozen=True)
class VolumeEmptyDir:
    """Ephemeral, node-local scratch volume."""

    id: str
    name: str


@dataclass(frozen=True)
class VolumeHostPath:
    """Volume backed by a directory on the executing node."""

    id: str
    name: str
    path: str


@dataclass(frozen=True)
class Volume:
    """Declared volume; a tagged union of its two variants."""

    empty_dir: VolumeEmptyDir | None = None
    host_path: VolumeHostPath | None = None


@dataclass(frozen=True)
class VolumeMount:
    """Reference from a step to a declared volume by logical name."""

    name: str
    path: str


@dataclass(frozen=True)
class Secret:
    """Secret exposed to a step as the environment variable ``env``."""

    env: str
    data: bytes


@dataclass(frozen=True)
class Step:
    """One execution unit, translated into one container."""

    id: str
    entrypoint: list[str] = field(default_factory=list)
    command: list[str] = field(default_factory=list)
    pull: PullPolicy = PullPolicy.DEFAULT
    working_dir: str = ""
    privileged: bool = False
    volumes: list[VolumeMount] = field(default_factory=list)
    envs: dict[str, str] = field(default_factory=dict)
    secrets: list[Secret] = field(default_factory=list)


@dataclass(frozen=True)
class Spec:
    """Translation input: pod template, declared volumes, and steps."""

    pod_spec: PodSpec = field(default_factory=PodSpec)
    volumes: list[Volume] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)
