# src/category_api/core/logging/
# ├─ __init__.py            # public API: setup_logging, set_request_id, RequestIDMiddleware
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # RequestIdFilter, RedactFilter (+ contextvar helpers)
# ├─ handlers.py            # handler config factories (console / rotating files)
# └─ middleware.py          # FastAPI/Starlette middleware to set request id


from .builder import setup_logging, make_dict_config
from .filters import set_request_id, get_request_id, reset_request_id, RequestIdFilter, RedactFilter
from .middleware import RequestIDMiddleware

__all__ = [
    "setup_logging",
    "make_dict_config",
    "set_request_id",
    "get_request_id",
    "reset_request_id",
    "RequestIdFilter",
    "RedactFilter",
    "RequestIDMiddleware",
]
