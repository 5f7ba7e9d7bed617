"""Domain layer for ledgerlens.

Services are exported lazily: parsers import domain entities while the
services import the parser registry.
"""

_SERVICES = {
    "CategoryService": "ledgerlens.domain.category",
    "RecurringService": "ledgerlens.domain.recurring",
    "TransactionService": "ledgerlens.domain.transaction",
    "UploadService": "ledgerlens.domain.upload",
    "WorkspaceService": "ledgerlens.domain.workspace",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
