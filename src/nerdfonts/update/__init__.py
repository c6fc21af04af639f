"""Self-update of the standalone build."""

from .self_update import SelfUpdater

__all__ = ["SelfUpdater"]
