"""
Shared pytest fixtures for podspine tests.

Provides small spec builders and resets structlog between tests so that
``structlog.testing.capture_logs`` sees every event.
"""

from __future__ import annotations

import pytest
import structlog

from podspine.engine.spec import (
    PodSpec,
    PullPolicy,
    Secret,
    Spec,
    Step,
    Toleration,
    Volume,
    VolumeEmptyDir,
    VolumeHostPath,
    VolumeMount,
)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch, tmp_path):
    """Keep PODSPINE_* variables and stray .env files out of tests."""
    for key in (
        "PODSPINE_PLACEHOLDER_IMAGE",
        "PODSPINE_SECRET_MODE",
        "PODSPINE_STRICT_MOUNTS",
        "PODSPINE_LOG_LEVEL",
        "PODSPINE_JSON_LOGS",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cache_volume() -> Volume:
    return Volume(host_path=VolumeHostPath(id="vol-cache-1a2b", name="cache", path="/tmp/cache"))


@pytest.fixture
def workspace_volume() -> Volume:
    return Volume(empty_dir=VolumeEmptyDir(id="vol-ws-3c4d", name="workspace"))


@pytest.fixture
def pipeline_spec(cache_volume, workspace_volume) -> Spec:
    """Two steps sharing a workspace, one with a cache and a secret."""
    return Spec(
        pod_spec=PodSpec(
            name="drone-build-42",
            namespace="ci",
            labels={"app": "drone", "build": "42"},
            annotations={"drone.io/repo": "octocat/hello-world"},
            service_account_name="pipeline",
            node_selector={"kubernetes.io/os": "linux"},
            tolerations=[
                Toleration(operator="Exists", effect="NoSchedule", toleration_seconds=30),
            ],
        ),
        volumes=[workspace_volume, cache_volume],
        steps=[
            Step(
                id="clone",
                entrypoint=["/bin/sh", "-c"],
                command=["git clone https://github.com/octocat/hello-world.git ."],
                pull=PullPolicy.IF_NOT_EXISTS,
                working_dir="/drone/src",
                volumes=[VolumeMount(name="workspace", path="/drone/src")],
                envs={"DRONE_BRANCH": "main"},
            ),
            Step(
                id="build",
                entrypoint=["/bin/sh", "-c"],
                command=["make build"],
                pull=PullPolicy.ALWAYS,
                working_dir="/drone/src",
                volumes=[
                    VolumeMount(name="workspace", path="/drone/src"),
                    VolumeMount(name="cache", path="/cache"),
                ],
                envs={"GOPATH": "/cache/go", "CGO_ENABLED": "0"},
                secrets=[Secret(env="DOCKER_PASSWORD", data=b"hunter2")],
            ),
        ],
    )
