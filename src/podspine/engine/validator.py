"""Pre-translation validation of pipeline specs.

The translator trusts its input and never calls this module. Callers that
want to reject malformed specs before they reach the cluster run
``SpecValidator`` first.

.. code-block:: text

    SpecValidator.validate(spec) → [violation, ...]
    ├── volume checks
    │   ├── no variant populated?
    │   ├── both variants populated?
    │   └── logical name declared twice?
    ├── step checks
    │   ├── empty id?
    │   └── id used by another step?
    └── mount checks
        └── mount names an undeclared volume?

    validate_or_raise(spec)
    └── raises SpecValidationError on any violation

Example:
    >>> from podspine.engine import Spec, Step, VolumeMount
    >>> spec = Spec(steps=[Step(id="build", volumes=[VolumeMount("cache", "/cache")])])
    >>> SpecValidator().validate(spec)
    ["Step 'build' mounts undeclared volume 'cache' at /cache"]
"""

from __future__ import annotations

from collections import Counter

from podspine.core.errors import SpecValidationError
from podspine.core.logging import get_logger
from podspine.engine.spec import Spec
from podspine.engine.translator import find_unresolved_mounts

logger = get_logger(__name__)


class SpecValidator:
    """Collects every structural problem in a spec (not fail-fast).

    Stateless; can be shared across the application.
    """

    def validate(self, spec: Spec) -> list[str]:
        """Return violation messages. Empty list = spec is valid."""
        violations: list[str] = []
        violations.extend(self._check_volumes(spec))
        violations.extend(self._check_steps(spec))
        violations.extend(self._check_mounts(spec))
        return violations

    def validate_or_raise(self, spec: Spec) -> None:
        """Validate, raising ``SpecValidationError`` with every violation."""
        violations = self.validate(spec)
        if violations:
            logger.warning(
                "spec.validation_failed",
                pod=spec.pod_spec.name,
                violations=len(violations),
            )
            raise SpecValidationError(violations).with_context(
                pod=spec.pod_spec.name,
                namespace=spec.pod_spec.namespace,
            )

    # ------------------------------------------------------------------
    # Internal checks
    # ------------------------------------------------------------------

    def _check_volumes(self, spec: Spec) -> list[str]:
        violations: list[str] = []
        names: list[str] = []

        for index, volume in enumerate(spec.volumes):
            if volume.empty_dir is None and volume.host_path is None:
                violations.append(f"Volume #{index} has no empty_dir or host_path")
                continue
            if volume.empty_dir is not None and volume.host_path is not None:
                violations.append(
                    f"Volume #{index} sets both empty_dir and host_path"
                )
            if volume.empty_dir is not None:
                names.append(volume.empty_dir.name)
            if volume.host_path is not None:
                names.append(volume.host_path.name)

        for name, count in Counter(names).items():
            if count > 1:
                violations.append(
                    f"Volume name '{name}' is declared {count} times; "
                    "mounts bind to the first"
                )

        return violations

    def _check_steps(self, spec: Spec) -> list[str]:
        violations: list[str] = []

        for index, step in enumerate(spec.steps):
            if not step.id:
                violations.append(f"Step #{index} has an empty id")

        ids = Counter(step.id for step in spec.steps if step.id)
        for step_id, count in ids.items():
            if count > 1:
                violations.append(f"Step id '{step_id}' is used by {count} steps")

        return violations

    def _check_mounts(self, spec: Spec) -> list[str]:
        return [
            f"Step '{m.step_id}' mounts undeclared volume '{m.name}' at {m.path}"
            for m in find_unresolved_mounts(spec)
        ]
