from .jwt_tokens import JwtTokenSigner
from .middleware import SessionGate, extract_token

__all__ = ["JwtTokenSigner", "SessionGate", "extract_token"]
