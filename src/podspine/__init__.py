"""
podspine - Pipeline spec to Kubernetes Pod translation.

- podspine.core: errors, structured logging, settings
- podspine.engine: input model, Pod mappers, translator facade
"""

__version__ = "0.1.0"

from podspine.engine import *  # noqa
