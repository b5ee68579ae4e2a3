import json
from typing import Any, Optional

from flask import request, Response

from bundleguard.web.routes.api import api_bp
from bundleguard.web.session import get_session_store



def _json_response(payload: dict[str, Any], status: int = 200) -> Response:
  return Response(
    json.dumps(payload, indent=2),
    status=status,
    mimetype="application/json",
  )



@api_bp.route("/session", methods=["GET"])
def get_session() -> Response:

  user: Optional[dict[str, Any]] = get_session_store().restore()

  return _json_response({"user": user})



@api_bp.route("/session", methods=["POST"])
def create_session() -> Response:

  record = request.get_json(silent=True)

  try:
    user = get_session_store().set_user(record)
  except ValueError as e:
    return _json_response({"error": str(e)}, status=400)

  return _json_response({"user": user}, status=201)



@api_bp.route("/session", methods=["DELETE"])
def delete_session() -> Response:

  get_session_store().clear()

  return Response(status=204)
