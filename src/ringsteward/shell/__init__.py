"""Command-line shell for Ring Steward (``python -m ringsteward.shell``)."""
