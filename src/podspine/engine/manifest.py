"""Wire-format rendering and hashing of translated descriptors.

``to_manifest`` turns ``kubernetes_asyncio`` models into the camelCase dicts
the API server accepts, without constructing an ``ApiClient`` (which would
need an event loop and a connection pool). ``manifest_hash`` gives a stable
fingerprint for caching and diffing descriptors.

Example:
    >>> from podspine.engine import Spec, Step, to_pod
    >>> manifest = to_manifest(to_pod(Spec(steps=[Step(id="build")])))
    >>> manifest["spec"]["restartPolicy"]
    'Never'
    >>> manifest["spec"]["containers"][0]["imagePullPolicy"]
    'IfNotPresent'
"""

from __future__ import annotations

import hashlib
import json
from datetime import date, datetime
from typing import Any

_PRIMITIVES = (str, int, float, bool)


def to_manifest(obj: Any) -> Any:
    """Render a Kubernetes model (or nested lists/dicts of them) as plain data.

    Model attributes left as ``None`` are omitted, matching the API server's
    ``omitempty`` behavior for optional fields.

    Raises:
        TypeError: If ``obj`` is neither plain data nor a Kubernetes model.
    """
    if obj is None or isinstance(obj, _PRIMITIVES):
        return obj
    if isinstance(obj, (list, tuple)):
        return [to_manifest(item) for item in obj]
    if isinstance(obj, dict):
        return {key: to_manifest(value) for key, value in obj.items()}
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    openapi_types = getattr(obj, "openapi_types", None)
    if openapi_types is None:
        raise TypeError(f"Cannot render {type(obj).__name__} as a manifest")

    rendered: dict[str, Any] = {}
    for attr in openapi_types:
        value = getattr(obj, attr)
        if value is None:
            continue
        rendered[obj.attribute_map[attr]] = to_manifest(value)
    return rendered


def manifest_hash(obj: Any) -> str:
    """SHA-256 of the canonical JSON manifest for integrity and cache keys."""
    canonical = json.dumps(to_manifest(obj), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()
