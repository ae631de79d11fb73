"""Consistency checker for a Helm chart repository's maintainers registry.

Cross-validates ``maintainers.yaml`` against ``charts/index.yaml`` and reports
every inconsistency found in a single pass.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
