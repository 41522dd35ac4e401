"""
Readiness gate: completeness and gap analysis for deployment projects.

The engine only emits structlog events; the embedding process configures
output once at startup with ``readiness_gate.core.observability.setup_structured_logging()``.
"""

__version__ = "0.1.0"
