from .config_credential_store import ConfigCredentialStore
from .sqlalchemy_credential_repository import SqlAlchemyCredentialStore

__all__ = ["ConfigCredentialStore", "SqlAlchemyCredentialStore"]
