"""Processing operations (convert, compress, merge...)."""
from .models import Action, OperationResult, SupportedOperation
from .service import OperationService

__all__ = [
    'Action',
    'OperationResult',
    'SupportedOperation',
    'OperationService',
]
