"""Schnorr Identification 프로토콜 상수."""

# 트랜스크립트 도메인 분리 레이블 (ASCII)
PROTOCOL_LABEL = b"schnorr_identity"

# ProofVerificationError 에 실리는 진단용 이름
PROTOCOL_NAME = "Schnorr Identification"

DEFAULT_GROUP = "bn128"

# codec.Mode.COMPRESSED
DEFAULT_MODE = "compressed"
