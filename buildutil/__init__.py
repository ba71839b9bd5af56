"""buildutil - decision helpers for a build-orchestration controller.

This package answers the questions a scheduler and admission layer ask
about build records: phase, run policy, owning config and version, input
image reference, and trusted environment reconciliation.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
