"""Translator facade over the pure Pod mappers.

:mod:`podspine.engine.convert` is total and silent: a mount that names an
undeclared volume disappears from the container. ``Translator`` keeps that
behavior by default but reports what was dropped, and can be switched to
reject such specs outright.

.. code-block:: text

    Translator(settings).translate(spec)
    ├── find_unresolved_mounts(spec)  → [UnresolvedMount]
    │     └── strict_mounts?  → raise UnresolvedVolumeError
    ├── to_pod(spec, image=settings.placeholder_image,
    │            secret_mode=settings.secret_mode)
    ├── to_secret(step) per step with secrets   (reference mode only)
    └── TranslationResult(pod, unresolved, secrets)

Example:
    >>> from podspine.engine import Spec, Step, PullPolicy, Translator
    >>> result = Translator().translate(
    ...     Spec(steps=[Step(id="build", entrypoint=["/bin/sh"], pull=PullPolicy.ALWAYS)])
    ... )
    >>> result.pod.spec.containers[0].image_pull_policy
    'Always'
    >>> result.ok
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kubernetes_asyncio.client import V1Pod, V1Secret
from pydantic import ValidationError

from podspine.core.errors import ConfigError, UnresolvedVolumeError
from podspine.core.logging import LogContext, configure_logging, get_logger
from podspine.core.settings import TranslatorSettings
from podspine.engine.convert import lookup_volume_id, to_pod, to_secret
from podspine.engine.spec import Spec


@dataclass(frozen=True)
class UnresolvedMount:
    """A step mount whose volume name matched no declared volume."""

    step_id: str
    name: str
    path: str


@dataclass(frozen=True)
class TranslationResult:
    """Pod descriptor plus everything the translation had to leave out."""

    pod: V1Pod
    unresolved: list[UnresolvedMount] = field(default_factory=list)
    secrets: list[V1Secret] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every mount reference resolved."""
        return not self.unresolved


def find_unresolved_mounts(spec: Spec) -> list[UnresolvedMount]:
    """List mounts that :func:`~podspine.engine.convert.to_volume_mounts` drops.

    Results follow step order, then mount order within each step.
    """
    unresolved = []
    for step in spec.steps:
        for mount in step.volumes:
            _, ok = lookup_volume_id(spec, mount.name)
            if not ok:
                unresolved.append(
                    UnresolvedMount(step_id=step.id, name=mount.name, path=mount.path)
                )
    return unresolved


class Translator:
    """Translate specs into Pods using injected settings.

    Stateless apart from its settings; one instance can serve concurrent
    callers.
    """

    def __init__(self, settings: TranslatorSettings | None = None) -> None:
        self.settings = settings or TranslatorSettings()
        self._logger = get_logger(__name__)

    @classmethod
    def from_env(cls, **overrides) -> Translator:
        """Build a translator from ``PODSPINE_*`` variables plus overrides.

        Also configures logging from ``log_level`` and ``json_logs``.

        Raises:
            ConfigError: If the settings fail validation.
        """
        try:
            settings = TranslatorSettings(**overrides)
        except ValidationError as exc:
            raise ConfigError("Invalid translator settings", cause=exc) from exc

        configure_logging(level=settings.log_level, json_format=settings.json_logs)
        return cls(settings)

    def to_pod(self, spec: Spec) -> V1Pod:
        """Translate without reporting; dangling mounts are dropped."""
        return to_pod(
            spec,
            image=self.settings.placeholder_image,
            secret_mode=self.settings.secret_mode,
        )

    def translate(self, spec: Spec) -> TranslationResult:
        """Translate a spec and report unresolved mounts.

        Raises:
            UnresolvedVolumeError: If ``strict_mounts`` is set and any mount
                names an undeclared volume.
        """
        pod_name = spec.pod_spec.name
        with LogContext(pod=pod_name, namespace=spec.pod_spec.namespace):
            self._logger.debug(
                "translate.started",
                steps=len(spec.steps),
                volumes=len(spec.volumes),
            )

            unresolved = find_unresolved_mounts(spec)
            if unresolved:
                if self.settings.strict_mounts:
                    raise UnresolvedVolumeError(unresolved).with_context(
                        pod=pod_name,
                        namespace=spec.pod_spec.namespace,
                    )
                self._logger.warning(
                    "translate.unresolved_mounts",
                    count=len(unresolved),
                    mounts=[f"{m.step_id}:{m.name}" for m in unresolved],
                )

            pod = self.to_pod(spec)

            secrets = []
            if self.settings.secret_mode == "reference":
                secrets = [to_secret(step) for step in spec.steps if step.secrets]

            self._logger.debug(
                "translate.completed",
                containers=len(pod.spec.containers),
                pod_volumes=len(pod.spec.volumes),
                secrets=len(secrets),
            )

        return TranslationResult(pod=pod, unresolved=unresolved, secrets=secrets)


def translate(spec: Spec, settings: TranslatorSettings | None = None) -> TranslationResult:
    """Translate ``spec`` with a one-off :class:`Translator`."""
    return Translator(settings).translate(spec)
