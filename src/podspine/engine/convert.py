"""Spec to Kubernetes Pod translation.

Pure functions that map a :class:`~podspine.engine.spec.Spec` onto
``kubernetes_asyncio`` client models. Nothing here performs I/O, logs, or
raises: every mapping is total.

.. code-block:: text

    to_pod(spec)
    ├── metadata         ← pod_spec name/namespace/labels/annotations
    ├── restart_policy   ← "Never"
    ├── to_volumes(spec)
    │     empty_dir  → V1Volume(name=id, empty_dir={})
    │     host_path  → V1Volume(name=id, host_path={path, DirectoryOrCreate})
    ├── to_containers(spec)
    │     ├── to_pull_policy(step.pull)
    │     ├── to_volume_mounts(spec, step)  ← lookup_volume_id by name
    │     └── to_env(step)                  ← envs + secrets + KUBERNETES_NODE
    ├── node_selector    ← pod_spec.node_selector
    └── to_tolerations(spec)

Degradation policies:

- Unknown or unset pull policies fall back to ``IfNotPresent``.
- Mounts naming an undeclared volume are dropped, as are volumes with no
  populated variant. Use
  :func:`~podspine.engine.translator.find_unresolved_mounts` to surface them.
- Privileged flags, node selectors and secret values are copied unchecked.
"""

from __future__ import annotations

from typing import Any

from kubernetes_asyncio.client import (
    V1Container,
    V1EmptyDirVolumeSource,
    V1EnvFromSource,
    V1EnvVar,
    V1EnvVarSource,
    V1HostPathVolumeSource,
    V1ObjectFieldSelector,
    V1ObjectMeta,
    V1Pod,
    V1PodSpec,
    V1Secret,
    V1SecretEnvSource,
    V1SecurityContext,
    V1Toleration,
    V1Volume,
    V1VolumeMount,
)

from podspine.core.settings import DEFAULT_PLACEHOLDER_IMAGE
from podspine.engine.spec import PullPolicy, Spec, Step

RESTART_POLICY_NEVER = "Never"

PULL_ALWAYS = "Always"
PULL_NEVER = "Never"
PULL_IF_NOT_PRESENT = "IfNotPresent"

HOST_PATH_DIRECTORY_OR_CREATE = "DirectoryOrCreate"

NODE_ENV_NAME = "KUBERNETES_NODE"
NODE_FIELD_PATH = "spec.nodeName"

SECRET_TYPE_OPAQUE = "Opaque"


def to_pod(
    spec: Spec,
    *,
    image: str = DEFAULT_PLACEHOLDER_IMAGE,
    secret_mode: str = "inline",
) -> V1Pod:
    """Translate a spec into a Pod.

    Metadata is copied without validation; an empty name is left for the
    API server to reject.
    """
    pod_spec = spec.pod_spec
    return V1Pod(
        api_version="v1",
        kind="Pod",
        metadata=V1ObjectMeta(
            name=pod_spec.name,
            namespace=pod_spec.namespace,
            annotations=dict(pod_spec.annotations or {}),
            labels=dict(pod_spec.labels or {}),
        ),
        spec=V1PodSpec(
            service_account_name=pod_spec.service_account_name,
            restart_policy=RESTART_POLICY_NEVER,
            volumes=to_volumes(spec),
            containers=to_containers(spec, image=image, secret_mode=secret_mode),
            node_selector=dict(pod_spec.node_selector or {}),
            tolerations=to_tolerations(spec),
        ),
    )


def to_tolerations(spec: Spec) -> list[V1Toleration]:
    tolerations = []
    for toleration in spec.pod_spec.tolerations:
        tolerations.append(
            V1Toleration(
                operator=toleration.operator,
                effect=toleration.effect,
                toleration_seconds=optional_int(toleration.toleration_seconds),
                value=toleration.value,
            )
        )
    return tolerations


def to_volumes(spec: Spec) -> list[V1Volume]:
    """Translate declared volumes, keyed by their generated ``id``.

    Each variant is checked on its own, so a volume with both populated
    yields two entries and one with neither yields none.
    """
    volumes = []
    for v in spec.volumes:
        if v.empty_dir is not None:
            volumes.append(
                V1Volume(
                    name=v.empty_dir.id,
                    empty_dir=V1EmptyDirVolumeSource(),
                )
            )

        if v.host_path is not None:
            volumes.append(
                V1Volume(
                    name=v.host_path.id,
                    host_path=V1HostPathVolumeSource(
                        path=v.host_path.path,
                        type=HOST_PATH_DIRECTORY_OR_CREATE,
                    ),
                )
            )

    return volumes


def to_containers(
    spec: Spec,
    *,
    image: str = DEFAULT_PLACEHOLDER_IMAGE,
    secret_mode: str = "inline",
) -> list[V1Container]:
    """Translate steps into containers, one each, in step order.

    With ``secret_mode="reference"`` secrets are not inlined; a step that
    declares secrets gets an ``envFrom`` reference to the Secret built by
    :func:`to_secret` instead.
    """
    inline_secrets = secret_mode != "reference"
    containers = []

    for s in spec.steps:
        container = V1Container(
            name=s.id,
            image=image,
            command=list(s.entrypoint),
            args=list(s.command),
            image_pull_policy=to_pull_policy(s.pull),
            working_dir=s.working_dir,
            security_context=V1SecurityContext(
                privileged=optional_bool(s.privileged),
            ),
            volume_mounts=to_volume_mounts(spec, s),
            env=to_env(s, inline_secrets=inline_secrets),
        )
        if not inline_secrets and s.secrets:
            container.env_from = to_env_from(s)

        containers.append(container)

    return containers


def to_env(step: Step, *, inline_secrets: bool = True) -> list[V1EnvVar]:
    """Build a step's environment.

    Order: explicit variables in declaration order, then one variable per
    secret, then ``KUBERNETES_NODE``. Duplicate names are kept; the
    container runtime resolves them last-write-wins.
    """
    env_vars = []

    for k, v in step.envs.items():
        env_vars.append(V1EnvVar(name=k, value=v))

    # Plaintext values; secret_mode="reference" wires envFrom instead.
    if inline_secrets:
        for secret in step.secrets:
            env_vars.append(V1EnvVar(name=secret.env, value=_decode(secret.data)))

    env_vars.append(
        V1EnvVar(
            name=NODE_ENV_NAME,
            value_from=V1EnvVarSource(
                field_ref=V1ObjectFieldSelector(field_path=NODE_FIELD_PATH),
            ),
        )
    )

    return env_vars


def to_env_from(step: Step) -> list[V1EnvFromSource]:
    """Reference the step's Secret (named after the step id) as env."""
    return [V1EnvFromSource(secret_ref=V1SecretEnvSource(name=step.id))]


def to_secret(step: Step) -> V1Secret:
    """Collect a step's secrets into an Opaque Secret named after the step.

    A later secret with the same ``env`` replaces an earlier one.
    """
    string_data = {}
    for secret in step.secrets:
        string_data[secret.env] = _decode(secret.data)

    return V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=V1ObjectMeta(name=step.id),
        type=SECRET_TYPE_OPAQUE,
        string_data=string_data,
    )


def to_volume_mounts(spec: Spec, step: Step) -> list[V1VolumeMount]:
    volume_mounts = []
    for v in step.volumes:
        volume_id, ok = lookup_volume_id(spec, v.name)
        if not ok:
            continue
        volume_mounts.append(V1VolumeMount(name=volume_id, mount_path=v.path))
    return volume_mounts


def lookup_volume_id(spec: Spec, name: str) -> tuple[str, bool]:
    """Return the ``id`` of the first volume whose logical name matches."""
    for v in spec.volumes:
        if v.empty_dir is not None and v.empty_dir.name == name:
            return v.empty_dir.id, True

        if v.host_path is not None and v.host_path.name == name:
            return v.host_path.id, True

    return "", False


def to_pull_policy(policy: Any) -> str:
    """Map a step pull policy; anything unrecognized is ``IfNotPresent``."""
    if policy == PullPolicy.ALWAYS:
        return PULL_ALWAYS
    if policy == PullPolicy.NEVER:
        return PULL_NEVER
    if policy == PullPolicy.IF_NOT_EXISTS:
        return PULL_IF_NOT_PRESENT
    return PULL_IF_NOT_PRESENT


def optional_int(value: int | None) -> int | None:
    return None if value is None else int(value)


def optional_bool(value: bool | None) -> bool | None:
    return None if value is None else bool(value)


def _decode(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")
