"""Champion draft engine: turn sequencing, draft state, roster analytics and alerts."""

__all__ = [
    "models",
    "errors",
    "sequencer",
    "availability",
    "state_machine",
    "knowledge",
    "analytics",
    "alerts",
    "catalog",
    "persistence",
    "report",
    "render",
    "report_pdf",
    "config",
    "cli",
]
