"""HTTP middleware: request timeout and request ID / access log.

Applied in main app; order matters (first added = innermost).
"""

from linkvault.middleware.request_id import RequestIDMiddleware
from linkvault.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware"]
