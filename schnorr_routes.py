"""
Schnorr Flask Blueprint — Schnorr Identification 엔드포인트
=============================================================

JSON 입출력. 파라미터/스테이트먼트는 TinyDB 에 저장한다.

  GET  /schnorr/sizes       증명 크기 (모드별)
  GET  /schnorr/statement   저장된 g, X
  POST /schnorr/statement   g, X 저장 (압축 hex)
  POST /schnorr/verify      hex 증명 검증
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from zkp.schnorr.codec import Mode, serialized_size
from zkp.schnorr.config import DEFAULT_MODE
from zkp.schnorr.errors import ProofVerificationError, SerializationError
from zkp.schnorr.group import get_group
from zkp.schnorr.transcript import FiatShamirRng
from zkp.schnorr.verifier import verify

from schnorr_serializers import deserialize_point, deserialize_proof

logger = logging.getLogger(__name__)

schnorr_bp = Blueprint('schnorr', __name__, url_prefix='/schnorr')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_schnorr_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def current_group():
    return get_group(current_app.config["SCHNORR_GROUP"])


def error(message, status=400):
    return jsonify({"error": message}), status


# ──────────────────────────────────────────────────────────────
# 엔드포인트
# ──────────────────────────────────────────────────────────────

@schnorr_bp.route("/sizes")
def sizes():
    """모드별 증명 바이트 수."""
    group = current_group()
    return jsonify({
        "group": group.name,
        Mode.COMPRESSED: serialized_size(group, Mode.COMPRESSED),
        Mode.UNCOMPRESSED: serialized_size(group, Mode.UNCOMPRESSED),
    })


@schnorr_bp.route("/statement", methods=["GET"])
def get_statement():
    """저장된 파라미터/스테이트먼트."""
    data = db_get("schnorr.statement")
    if data is None:
        return error("no statement stored", 404)
    return jsonify(data)


@schnorr_bp.route("/statement", methods=["POST"])
def set_statement():
    """파라미터 g 와 스테이트먼트 X 를 저장한다 (압축 hex)."""
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        return error("request body must be a JSON object")
    group = current_group()
    try:
        deserialize_point(group, body["parameters"])
        deserialize_point(group, body["statement"])
    except KeyError as e:
        return error("missing field: {}".format(e.args[0]))
    except (TypeError, ValueError, SerializationError) as e:
        return error("invalid point: {}".format(e))

    data = {"parameters": body["parameters"], "statement": body["statement"]}
    db_set("schnorr.statement", data)
    return jsonify(data)


@schnorr_bp.route("/verify", methods=["POST"])
def verify_proof():
    """저장된 스테이트먼트에 대해 증명을 검증한다.

    body: {"proof": hex, "mode": "compressed" | "uncompressed"}
    unchecked 모드는 외부 입력에 사용할 수 없으므로 거부한다.
    """
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        return error("request body must be a JSON object")
    stored = db_get("schnorr.statement")
    if stored is None:
        return error("no statement stored", 404)

    mode = body.get("mode", DEFAULT_MODE)
    if mode not in (Mode.COMPRESSED, Mode.UNCOMPRESSED):
        return error("unsupported mode: {}".format(mode))

    group = current_group()
    try:
        proof = deserialize_proof(group, {"proof": body["proof"], "mode": mode})
    except KeyError:
        return error("missing field: proof")
    except (TypeError, ValueError, SerializationError) as e:
        logger.info("rejected proof encoding: %s", e)
        return error("invalid proof encoding: {}".format(e))

    parameters = deserialize_point(group, stored["parameters"])
    statement = deserialize_point(group, stored["statement"])

    try:
        verify(parameters, statement, FiatShamirRng(), proof)
    except ProofVerificationError as e:
        return jsonify({"result": False, "protocol": e.protocol})
    return jsonify({"result": True})
