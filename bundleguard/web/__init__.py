import logging
import secrets

from flask import Flask, Response
from flask_compress import Compress

from bundleguard.config import Config
from bundleguard.session import create_cipher
from bundleguard.web.routes import api_bp
from bundleguard.web.session import SESSION_CIPHER_EXTENSION


def create_app() -> Flask:
  Config.load()

  app = Flask(__name__)
  app.config["DEBUG"] = Config.get("DEBUG", False)

  secret_key = Config.get("SECRET_KEY")
  if not secret_key:
    logging.warning("SECRET_KEY is not set; sessions will not survive a restart")
    secret_key = secrets.token_hex(32)
  app.secret_key = secret_key

  app.extensions[SESSION_CIPHER_EXTENSION] = create_cipher()

  app.register_blueprint(api_bp)

  @app.after_request
  def set_security_headers(response: Response) -> Response:
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response

  # Only enable compression in production mode
  if not app.config["DEBUG"]:
    Compress(app)

  return app
