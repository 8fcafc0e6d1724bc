"""
Request-scoped time source
"""

from datetime import datetime


def get_now() -> datetime:
    """Current local time, resolved once per request.

    Routes depend on this instead of calling ``datetime.now()`` so tests can
    pin "today" with ``app.dependency_overrides``.
    """
    return datetime.now()
