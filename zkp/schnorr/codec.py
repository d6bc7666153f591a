"""
Schnorr 증명 코덱
===================

Proof 를 바이트열로, 바이트열을 Proof 로 변환한다.

**바이트 배치**:
  [커밋먼트 점 (정규 표현)][opening 스칼라 (리틀엔디안 고정 폭)]

**세 가지 모드**:
  - compressed: 점을 x 좌표 + 선택 비트로 기록 (가장 작음)
  - uncompressed: 점의 전체 좌표를 기록
  - unchecked: uncompressed 와 바이트가 같다. 디코딩 시 점의 좌표 범위,
    곡선 위, 부분군 검사를 생략한다. 스칼라 범위는 항상 검사한다.
    이미 신뢰하는 입력에만 사용한다.

포맷에는 모드 태그가 없다. 호출자는 인코딩에 사용한 모드를 알고
같은 모드로 디코딩해야 한다.

사용 예시:
    >>> data = serialize(proof, Mode.COMPRESSED)
    >>> proof2 = deserialize(BN128_G1, data, Mode.COMPRESSED)
    >>> proof2 == proof  # True
"""

import logging

from zkp.schnorr.errors import NotEnoughSpaceError, SerializationError
from zkp.schnorr.proof import Proof

logger = logging.getLogger(__name__)


class Mode:
    COMPRESSED = "compressed"
    UNCOMPRESSED = "uncompressed"
    UNCHECKED = "unchecked"

    ALL = (COMPRESSED, UNCOMPRESSED, UNCHECKED)


def _check_mode(mode):
    if mode not in Mode.ALL:
        raise ValueError("unknown serialization mode: {}".format(mode))


def _is_compressed(mode):
    return mode == Mode.COMPRESSED


# ─────────────────────────────────────────────────────────────────────
# 크기 조회
# ─────────────────────────────────────────────────────────────────────

def serialized_size(group, mode=Mode.COMPRESSED):
    """mode 로 인코딩한 증명의 바이트 수 (인코딩 없이 계산)."""
    _check_mode(mode)
    return group.point_size(_is_compressed(mode)) + group.scalar_size


def compressed_size(group):
    return serialized_size(group, Mode.COMPRESSED)


def uncompressed_size(group):
    return serialized_size(group, Mode.UNCOMPRESSED)


# ─────────────────────────────────────────────────────────────────────
# 인코딩 / 디코딩
# ─────────────────────────────────────────────────────────────────────

def serialize(proof, mode=Mode.COMPRESSED):
    """Proof → bytes.

    커밋먼트를 정규 표현으로 바꾼 뒤 점과 스칼라를 이어 붙인다.
    """
    _check_mode(mode)
    group = proof.group
    commit, opening = proof.to_wire_form()
    return (
        group.encode_point(commit, compressed=_is_compressed(mode))
        + group.encode_scalar(opening)
    )


def deserialize(group, data, mode=Mode.COMPRESSED):
    """bytes → Proof.

    Args:
        group: 증명이 속한 군
        data: serialize(proof, mode) 가 만든 바이트열
        mode: 인코딩에 사용한 모드

    Returns:
        Proof (커밋먼트는 계산 표현)

    Raises:
        NotEnoughSpaceError: 길이가 serialized_size(group, mode) 와 다를 때
        InvalidDataError: 스칼라가 유효하지 않을 때, 또는 점이 유효하지 않을 때
            (점 검사는 unchecked 모드에서 생략)
    """
    _check_mode(mode)
    data = bytes(data)
    expected = serialized_size(group, mode)
    if len(data) != expected:
        logger.debug("proof length mismatch: mode=%s expected=%d got=%d",
                     mode, expected, len(data))
        raise NotEnoughSpaceError(
            "{} proof needs {} bytes, got {}".format(mode, expected, len(data)))

    compressed = _is_compressed(mode)
    validate = mode != Mode.UNCHECKED
    point_size = group.point_size(compressed)

    try:
        commit = group.decode_point(
            data[:point_size], compressed=compressed, validate=validate)
        opening = group.decode_scalar(data[point_size:])
    except SerializationError as e:
        logger.debug("rejected %s proof encoding for %s: %s", mode, group.name, e)
        raise

    return Proof.from_wire_form(group, commit, opening)


def serialize_into(proof, writer, mode=Mode.COMPRESSED):
    """증명을 바이너리 writer (write 메서드를 가진 객체)에 기록한다."""
    writer.write(serialize(proof, mode))


def deserialize_from(group, reader, mode=Mode.COMPRESSED):
    """바이너리 reader 에서 정확히 한 증명을 읽는다.

    Raises:
        NotEnoughSpaceError: reader 의 남은 바이트가 모자랄 때
    """
    size = serialized_size(group, mode)
    data = reader.read(size)
    if len(data) != size:
        raise NotEnoughSpaceError(
            "unexpected end of input: needed {} bytes, got {}".format(size, len(data)))
    return deserialize(group, data, mode)
