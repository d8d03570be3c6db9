# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import atexit
import os

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from contactdesk.container import Container
from contactdesk.infrastructure.admin_setup import setup_admin_credential
from contactdesk.infrastructure.db import init_db
from contactdesk.shared.config import AppConfig, load_config
from contactdesk.shared.logging import logger, setup_logging
from contactdesk.shared.middleware.error_handler import configure_error_handling
from contactdesk.shared.middleware.rate_limit import RATE_LIMIT_ENABLED_KEY
from contactdesk.shared.middleware.request_logger import configure_request_logging

CONTAINER_EXTENSION_KEY = "contactdesk.container"


def _bootstrap_storage(container: Container) -> None:
    if container.engine is not None:
        init_db(container.engine)

    if container.config.auth.credential_backend == "database":
        setup_admin_credential(
            container.config.auth,
            container.credential_store,  # type: ignore[arg-type]
            container.password_hasher,
        )
    else:
        # Fails here, not on first login, when the fixed credential is incomplete.
        _ = container.credential_store


def _start_chat_relay(container: Container) -> None:
    relay = container.chat_relay
    relay.start()
    atexit.register(relay.stop)


def create_app(config: AppConfig | None = None, *, log_to_file: bool = True) -> Flask:
    config = config or load_config()
    setup_logging("DEBUG" if config.debug_logging else None, to_file=log_to_file)

    container = Container(config)
    _bootstrap_storage(container)

    app = Flask(__name__)
    app.extensions[CONTAINER_EXTENSION_KEY] = container
    app.config[RATE_LIMIT_ENABLED_KEY] = config.security.enable_rate_limit
    if config.security.trusted_proxy_hops:
        hops = config.security.trusted_proxy_hops
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)  # type: ignore[method-assign]

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    for controller in container.records_controllers:
        app.register_blueprint(controller.as_blueprint())
    app.register_blueprint(container.chat_controller.as_blueprint())

    if config.chat.enabled:
        _start_chat_relay(container)

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(
        f"Flask app initialized (records={config.storage.backend}, "
        f"credentials={config.auth.credential_backend}, chat={config.chat.enabled})"
    )
    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", "5000"))
    create_app().run(host="0.0.0.0", port=port, debug=False)
