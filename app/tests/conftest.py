import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing
# application modules (e.g. `infrastructure.configuration`) works during
# collection regardless of how pytest was invoked.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402

from infrastructure.events.dispatcher import clear_handlers  # noqa: E402
import structlog  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Keep the default event dispatcher and logging context test-local."""
    clear_handlers()
    structlog.contextvars.clear_contextvars()
    yield
    clear_handlers()
    structlog.contextvars.clear_contextvars()
