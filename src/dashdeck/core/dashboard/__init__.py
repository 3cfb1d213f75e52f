"""
Dashboard serving for dashdeck.

The dashboard consists of:
- API layer (api/) - FastAPI endpoints serving workspace data to the web UI
- Client (client.py) - Explicitly refreshed local copy of the API data

Workspace reading and derivation live in dashdeck.core.workspace; this
package only marshals them over HTTP.
"""

from dashdeck.core.dashboard.client import DashboardClient, DashboardClientError
from dashdeck.core.dashboard.models import DashboardData, TaskUpdateRequest

__all__ = [
    "DashboardClient",
    "DashboardClientError",
    "DashboardData",
    "TaskUpdateRequest",
]
