"""InnVest Web Route Modules.

Each module exports a ``router`` (APIRouter instance) that the main app
includes in ``innvest.web.app``.

Usage:
    from innvest.web.routes import analytics
    app.include_router(analytics.router)
"""

from innvest.web.routes import analytics, health

__all__ = ["analytics", "health"]
