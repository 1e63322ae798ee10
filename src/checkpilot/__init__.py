"""checkpilot - task checklists, verification hooks and commit cadence."""

__version__ = "0.1.0"
