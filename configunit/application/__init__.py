"""Application layer use cases."""

from .demo_usecase import DemoUseCase, DemoUseCaseError

__all__ = ["DemoUseCase", "DemoUseCaseError"]
