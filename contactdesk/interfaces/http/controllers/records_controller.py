# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from contactdesk.application.use_cases.records import (
    DeleteRecordUseCase,
    GetRecordUseCase,
    ListRecordsUseCase,
    SubmitRecordUseCase,
    UpdateRecordUseCase,
)
from contactdesk.infrastructure.audit import AuditAction, audit_log
from contactdesk.infrastructure.auth.middleware import SessionGate
from contactdesk.interfaces.http.resources import ResourceKind
from contactdesk.shared.errors.validation import raise_validation_error
from contactdesk.shared.middleware.rate_limit import rate_limit
from contactdesk.utils.http import client_ip


class RecordsController:
    """CRUD endpoints for one resource kind.

    The kind supplies the route prefix, the validation schema and which
    operations are open to the public; everything else is shared.
    """

    def __init__(
        self,
        kind: ResourceKind,
        *,
        submit: SubmitRecordUseCase,
        list_records: ListRecordsUseCase,
        get_record: GetRecordUseCase,
        update: UpdateRecordUseCase,
        delete: DeleteRecordUseCase,
        gate: SessionGate,
    ) -> None:
        self._kind = kind
        self._submit = submit
        self._list = list_records
        self._get = get_record
        self._update = update
        self._delete = delete
        self._gate = gate

    def _validated_fields(self) -> dict:
        try:
            payload = self._kind.schema.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)
        return payload.to_fields()

    @rate_limit(limit=5, window_seconds=60.0)
    def create(self) -> tuple[Response, int]:
        fields = self._validated_fields()
        record = self._submit.execute(self._kind.name, fields, client_ip())
        return jsonify({"success": True, "record": record.to_dict()}), HTTPStatus.CREATED

    def index(self) -> tuple[Response, int]:
        newest_first = request.args.get("order", "desc").lower() != "asc"
        records = self._list.execute(self._kind.name, newest_first=newest_first)
        payload = {
            "success": True,
            "records": [record.to_dict() for record in records],
            "count": len(records),
        }
        return jsonify(payload), HTTPStatus.OK

    def show(self, record_id: str) -> tuple[Response, int]:
        record = self._get.execute(self._kind.name, record_id)
        return jsonify({"success": True, "record": record.to_dict()}), HTTPStatus.OK

    def update(self, record_id: str) -> tuple[Response, int]:
        fields = self._validated_fields()
        record = self._update.execute(self._kind.name, record_id, fields)
        audit_log(
            AuditAction.RECORD_UPDATED,
            user_id=getattr(g, "user_id", None),
            ip_address=client_ip(),
            details={"kind": self._kind.name, "id": record_id},
        )
        return jsonify({"success": True, "record": record.to_dict()}), HTTPStatus.OK

    def destroy(self, record_id: str) -> tuple[Response, int]:
        self._delete.execute(self._kind.name, record_id)
        audit_log(
            AuditAction.RECORD_DELETED,
            user_id=getattr(g, "user_id", None),
            ip_address=client_ip(),
            details={"kind": self._kind.name, "id": record_id},
        )
        return jsonify({"success": True, "id": record_id}), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        kind = self._kind
        guard = self._gate.require_admin
        bp = Blueprint(f"records_{kind.name}", __name__, url_prefix=f"/api/{kind.path}")
        bp.add_url_rule(
            "",
            endpoint="create",
            view_func=self.create if kind.public_create else guard(self.create),
            methods=["POST"],
        )
        bp.add_url_rule(
            "",
            endpoint="index",
            view_func=self.index if kind.public_list else guard(self.index),
            methods=["GET"],
        )
        bp.add_url_rule("/<record_id>", endpoint="show", view_func=guard(self.show), methods=["GET"])
        bp.add_url_rule(
            "/<record_id>", endpoint="update", view_func=guard(self.update), methods=["PUT"]
        )
        bp.add_url_rule(
            "/<record_id>", endpoint="destroy", view_func=guard(self.destroy), methods=["DELETE"]
        )
        return bp
