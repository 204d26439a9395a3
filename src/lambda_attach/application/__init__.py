"""Application layer - dispatch, callback authentication and reconciliation."""

from lambda_attach.application.assembly import AssemblyBuilder, generate_location, generate_signing_key
from lambda_attach.application.attacher import Attacher
from lambda_attach.application.dispatcher import Dispatcher
from lambda_attach.application.function_registry import FunctionRegistry
from lambda_attach.application.reconciler import CallbackReconciler
from lambda_attach.application.signature import SignatureVerifier

__all__ = [
    "AssemblyBuilder",
    "generate_location",
    "generate_signing_key",
    "Attacher",
    "Dispatcher",
    "FunctionRegistry",
    "CallbackReconciler",
    "SignatureVerifier",
]
