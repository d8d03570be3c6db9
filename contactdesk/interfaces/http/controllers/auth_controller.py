# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from contactdesk.application.use_cases.admins.login_admin import LoginAdminUseCase
from contactdesk.domain.admins.exceptions import InvalidCredentialsError
from contactdesk.infrastructure.audit import AuditAction, audit_log
from contactdesk.infrastructure.auth.middleware import SessionGate
from contactdesk.interfaces.http.dto.auth import (
    AdminProfileDTO,
    LoginRequestDTO,
    LoginSuccessDTO,
)
from contactdesk.shared.config import AuthConfig, SecurityConfig
from contactdesk.shared.errors.validation import raise_validation_error
from contactdesk.shared.logging import logger
from contactdesk.shared.middleware.rate_limit import rate_limit
from contactdesk.utils.http import client_ip


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginAdminUseCase,
        gate: SessionGate,
        auth_config: AuthConfig,
        security_config: SecurityConfig,
    ) -> None:
        self._login_use_case = login_use_case
        self._gate = gate
        self._auth_config = auth_config
        self._security_config = security_config

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()

        try:
            session = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=session.claims.subject,
            ip_address=ip_address,
            details={"username": dto.username},
        )

        payload = LoginSuccessDTO(token=session.token, expires_at=session.claims.expires_at)
        response = jsonify(payload.model_dump(mode="json"))
        response.set_cookie(
            self._auth_config.cookie_name,
            session.token,
            httponly=True,
            samesite=self._security_config.cookie_samesite,
            secure=self._security_config.cookie_secure,
            max_age=self._auth_config.token_ttl_seconds,
        )
        return response, 200

    def logout(self) -> tuple[Response, int]:
        audit_log(
            AuditAction.LOGOUT,
            ip_address=client_ip(),
            details={},
        )

        response = jsonify({"success": True, "message": "Logged out successfully"})
        response.delete_cookie(
            self._auth_config.cookie_name,
            samesite=self._security_config.cookie_samesite,
            secure=self._security_config.cookie_secure,
            httponly=True,
        )
        logger.info("admin.logout: ok")
        return response, 200

    def check_auth(self) -> tuple[Response, int]:
        return jsonify({"success": True, "isAuthenticated": True}), 200

    def profile(self) -> tuple[Response, int]:
        claims = g.session
        admin = AdminProfileDTO(
            id=claims.subject,
            username=claims.username,
            role=claims.role,
            issued_at=claims.issued_at,
            expires_at=claims.expires_at,
        )
        return jsonify({"success": True, "admin": admin.model_dump(mode="json")}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("admin_auth", __name__, url_prefix="/api/admin")
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule(
            "/check-auth",
            endpoint="check_auth",
            view_func=self._gate.require_admin(self.check_auth),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/profile",
            endpoint="profile",
            view_func=self._gate.require_admin(self.profile),
            methods=["GET"],
        )
        return bp
