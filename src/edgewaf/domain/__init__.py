"""Domain core: binding state, validation and the reconcile engine."""

from __future__ import annotations

from .errors import EdgeWafError, InvalidBindingError, RemoteAPIError, RemoteRequestError
from .ports import HttpClient
from .reconcile import CreateOutcome, DiffOutcome, ReconcileEngine, compare
from .state import EdgeBindingInputs, EdgeBindingState, edge_deployment_url, vendor_headers
from .validation import CheckResult, FieldFailure, check, check_properties

__all__ = [
    "CheckResult",
    "CreateOutcome",
    "DiffOutcome",
    "EdgeBindingInputs",
    "EdgeBindingState",
    "EdgeWafError",
    "FieldFailure",
    "HttpClient",
    "InvalidBindingError",
    "ReconcileEngine",
    "RemoteAPIError",
    "RemoteRequestError",
    "check",
    "check_properties",
    "compare",
    "edge_deployment_url",
    "vendor_headers",
]
