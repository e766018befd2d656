"""Pipeline spec to Kubernetes Pod translation.

Architecture:

    .. code-block:: text

        podspine.engine
        ├── __init__.py    ← Public API (this file)
        ├── spec.py        ← Spec, Step, Volume, ... (input model)
        ├── convert.py     ← Pure mappers: to_pod, to_volumes, to_containers, ...
        ├── translator.py  ← Translator facade + TranslationResult
        ├── validator.py   ← SpecValidator (optional pre-translation gate)
        └── manifest.py    ← to_manifest / manifest_hash

    .. mermaid::

        graph LR
            SPEC[Spec] --> VAL{SpecValidator}
            SPEC --> TR[Translator]
            TR -->|to_pod| CONV[convert]
            CONV --> POD[V1Pod]
            POD --> MAN[to_manifest]
"""

from podspine.engine.convert import (
    lookup_volume_id,
    to_containers,
    to_env,
    to_env_from,
    to_pod,
    to_pull_policy,
    to_secret,
    to_tolerations,
    to_volume_mounts,
    to_volumes,
)
from podspine.engine.manifest import manifest_hash, to_manifest
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
from podspine.engine.translator import (
    TranslationResult,
    Translator,
    UnresolvedMount,
    find_unresolved_mounts,
    translate,
)
from podspine.engine.validator import SpecValidator

__all__ = [
    # Input model
    "PodSpec",
    "PullPolicy",
    "Secret",
    "Spec",
    "Step",
    "Toleration",
    "Volume",
    "VolumeEmptyDir",
    "VolumeHostPath",
    "VolumeMount",
    # Mappers
    "lookup_volume_id",
    "to_containers",
    "to_env",
    "to_env_from",
    "to_pod",
    "to_pull_policy",
    "to_secret",
    "to_tolerations",
    "to_volume_mounts",
    "to_volumes",
    # Facade
    "TranslationResult",
    "Translator",
    "UnresolvedMount",
    "find_unresolved_mounts",
    "translate",
    "SpecValidator",
    # Rendering
    "manifest_hash",
    "to_manifest",
]
