"""
Schnorr 데이터 직렬화/역직렬화 헬퍼
=====================================

TinyDB / JSON 에 저장 가능한 형태로 Schnorr 객체를 변환한다.
점과 스칼라는 zkp.schnorr 의 정규 바이트 인코딩을 16진 문자열로 담는다.
"""

from zkp.schnorr.codec import Mode, serialize, deserialize


# ─── 군 원소 ───

def serialize_point(group, point, compressed=True):
    """계산 표현의 점 → hex str"""
    return group.canonical_bytes(point, compressed).hex()


def deserialize_point(group, hex_str, compressed=True):
    """hex str → 계산 표현의 점 (검증 포함)"""
    return group.from_affine(
        group.decode_point(bytes.fromhex(hex_str), compressed=compressed))


# ─── 스칼라 ───

def serialize_scalar(group, value):
    """스칼라 → hex str"""
    return group.encode_scalar(value).hex()


def deserialize_scalar(group, hex_str):
    """hex str → 스칼라"""
    return group.decode_scalar(bytes.fromhex(hex_str))


# ─── Proof ───

def serialize_proof(proof, mode=Mode.COMPRESSED):
    """Proof → dict"""
    return {
        "group": proof.group.name,
        "mode": mode,
        "proof": serialize(proof, mode).hex(),
    }


def deserialize_proof(group, data):
    """dict → Proof"""
    return deserialize(group, bytes.fromhex(data["proof"]), data.get("mode", Mode.COMPRESSED))


# ─── 화면 표시용 ───

def point_short(group, point):
    """점을 짧은 문자열로 (압축 인코딩 앞 8자리)"""
    h = serialize_point(group, point)
    return h[:8] + "..." + h[-4:]
