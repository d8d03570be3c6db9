from .login_admin import LoginAdminUseCase
from .verify_session import VerifySessionUseCase

__all__ = ["LoginAdminUseCase", "VerifySessionUseCase"]
