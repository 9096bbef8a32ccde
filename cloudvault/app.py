import logging
import ssl

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from cloudvault.config import Config
from cloudvault.errors import CloudVaultError, InvalidToken, TooLarge
from cloudvault.extensions import db, jwt, migrate
from cloudvault.object_store import ObjectStore
from cloudvault.routes import blueprints


def register_error_handlers(app):
    @app.errorhandler(CloudVaultError)
    def handle_app_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        return jsonify(TooLarge().to_dict()), TooLarge.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        app.logger.exception(f"Unhandled error: {e}")
        return jsonify({"error": "Internal server error"}), 500


@jwt.unauthorized_loader
def missing_token(reason):
    return jsonify({"error": "Authorization token missing"}), 401


@jwt.invalid_token_loader
def invalid_token(reason):
    return jsonify({"error": InvalidToken.message}), 401


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_payload):
    return jsonify({"error": "Token has expired"}), 401


def create_app(config_object=Config, object_store=None):
    app = Flask(__name__)
    app.config.from_object(config_object)

    if not app.config.get("JWT_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET_KEY must be set before the app can start")

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    CORS(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    app.extensions["object_store"] = object_store or ObjectStore.from_config(app.config)

    for bp in blueprints:
        app.register_blueprint(bp)
    register_error_handlers(app)
    return app


def ssl_context(cert_path, key_path):
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.minimum_version = ssl.TLSVersion.TLSv1_3
    context.maximum_version = ssl.TLSVersion.TLSv1_3
    context.load_cert_chain(cert_path, key_path)
    return context


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = create_app()

    cert_path = app.config.get("SSL_CERT_FILE")
    key_path = app.config.get("SSL_KEY_FILE")
    try:
        if not (cert_path and key_path):
            raise FileNotFoundError("SSL_CERT_FILE / SSL_KEY_FILE not configured")
        context = ssl_context(cert_path, key_path)
        app.logger.info("Starting CloudVault API with HTTPS (TLS 1.3)")
        app.run(host='0.0.0.0', port=5000, ssl_context=context, debug=app.config["DEBUG"])
    except FileNotFoundError as e:
        app.logger.warning(f"SSL certificate not found: {e}")
        app.logger.warning("Falling back to HTTP (insecure)")
        app.run(host='0.0.0.0', port=5000, debug=app.config["DEBUG"])
