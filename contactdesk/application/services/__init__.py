from .password_hashing import WerkzeugPasswordHasher

__all__ = ["WerkzeugPasswordHasher"]
