"""Workflow Dispatcher.

Triggers GitHub Actions `workflow_dispatch` events from the command line:
- configuration loaded from the environment or `.env`
- structured logging
- workflow discovery correlated with a local checkout
"""

__version__ = "0.1.0"

from workflow_dispatcher.dispatcher.config import DispatcherSettings

__all__ = ["__version__", "DispatcherSettings"]
