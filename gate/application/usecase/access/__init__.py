"""Access control use cases."""

from gate.application.usecase.access.complete_login import (
    CompleteLoginRequest,
    CompleteLoginResponse,
    CompleteLoginUseCase,
)
from gate.application.usecase.access.evaluate_login import (
    EvaluateLoginRequest,
    EvaluateLoginResponse,
    EvaluateLoginUseCase,
)

__all__ = [
    "CompleteLoginRequest",
    "CompleteLoginResponse",
    "CompleteLoginUseCase",
    "EvaluateLoginRequest",
    "EvaluateLoginResponse",
    "EvaluateLoginUseCase",
]
