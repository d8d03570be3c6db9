"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine

from contactdesk.application.services.password_hashing import WerkzeugPasswordHasher
from contactdesk.application.use_cases.admins import LoginAdminUseCase, VerifySessionUseCase
from contactdesk.application.use_cases.chat import PublishChatMessageUseCase
from contactdesk.application.use_cases.records import (
    DeleteRecordUseCase,
    GetRecordUseCase,
    ListRecordsUseCase,
    SubmitRecordUseCase,
    UpdateRecordUseCase,
)
from contactdesk.domain.admins.repositories import CredentialStore
from contactdesk.domain.records.repositories import RecordRepository
from contactdesk.infrastructure.admin_setup import require_config_credential
from contactdesk.infrastructure.auth import JwtTokenSigner, SessionGate
from contactdesk.infrastructure.chat import ChatHub
from contactdesk.infrastructure.db import SessionFactory, build_engine, build_session_factory
from contactdesk.infrastructure.repositories.admins import (
    ConfigCredentialStore,
    SqlAlchemyCredentialStore,
)
from contactdesk.infrastructure.repositories.records import (
    JsonFileRecordRepository,
    SqlAlchemyRecordRepository,
)
from contactdesk.interfaces.http.controllers.auth_controller import AuthController
from contactdesk.interfaces.http.controllers.chat_controller import ChatController
from contactdesk.interfaces.http.controllers.misc_controller import MiscController
from contactdesk.interfaces.http.controllers.records_controller import RecordsController
from contactdesk.interfaces.http.resources import RESOURCE_KINDS
from contactdesk.interfaces.ws.chat_relay import ChatRelayServer
from contactdesk.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @property
    def uses_database(self) -> bool:
        return (
            self.config.storage.backend == "database"
            or self.config.auth.credential_backend == "database"
        )

    @cached_property
    def engine(self) -> Engine | None:
        if not self.uses_database:
            return None
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> SessionFactory:
        if self.engine is None:
            raise RuntimeError("no database backend is configured")
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def credential_store(self) -> CredentialStore:
        if self.config.auth.credential_backend == "database":
            return SqlAlchemyCredentialStore(self.session_factory)
        username, password_hash = require_config_credential(self.config.auth)
        return ConfigCredentialStore(username, password_hash)

    @cached_property
    def record_repository(self) -> RecordRepository:
        if self.config.storage.backend == "json":
            return JsonFileRecordRepository(self.config.storage.data_dir)
        return SqlAlchemyRecordRepository(self.session_factory)

    @cached_property
    def token_signer(self) -> JwtTokenSigner:
        auth = self.config.auth
        return JwtTokenSigner(auth.jwt_secret or "", algorithm=auth.jwt_algorithm)

    @cached_property
    def login_use_case(self) -> LoginAdminUseCase:
        return LoginAdminUseCase(
            credentials=self.credential_store,
            password_hasher=self.password_hasher,
            signer=self.token_signer,
            token_ttl=timedelta(seconds=self.config.auth.token_ttl_seconds),
        )

    @cached_property
    def verify_session_use_case(self) -> VerifySessionUseCase:
        return VerifySessionUseCase(signer=self.token_signer)

    @cached_property
    def session_gate(self) -> SessionGate:
        return SessionGate(
            verify=self.verify_session_use_case,
            cookie_name=self.config.auth.cookie_name,
        )

    @cached_property
    def chat_hub(self) -> ChatHub:
        return ChatHub()

    @cached_property
    def publish_chat_message_use_case(self) -> PublishChatMessageUseCase:
        return PublishChatMessageUseCase(
            broadcaster=self.chat_hub,
            max_length=self.config.chat.max_message_length,
        )

    @cached_property
    def chat_relay(self) -> ChatRelayServer:
        return ChatRelayServer(
            hub=self.chat_hub,
            publish_use_case=self.publish_chat_message_use_case,
            host=self.config.chat.host,
            port=self.config.chat.port,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_use_case,
            gate=self.session_gate,
            auth_config=self.config.auth,
            security_config=self.config.security,
        )

    @cached_property
    def records_controllers(self) -> list[RecordsController]:
        repository = self.record_repository
        return [
            RecordsController(
                kind,
                submit=SubmitRecordUseCase(records=repository),
                list_records=ListRecordsUseCase(records=repository),
                get_record=GetRecordUseCase(records=repository),
                update=UpdateRecordUseCase(records=repository),
                delete=DeleteRecordUseCase(records=repository),
                gate=self.session_gate,
            )
            for kind in RESOURCE_KINDS
        ]

    @cached_property
    def chat_controller(self) -> ChatController:
        return ChatController(publish_use_case=self.publish_chat_message_use_case)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
