"""
Schnorr 증명 오류 계층
========================

두 가지 오류 계열:
  - ProofVerificationError: 검증 방정식이 성립하지 않음 (증명 거부).
    정상적인 프로토콜 결과이며, 재시도 대상이 아니다.
  - SerializationError: 디코딩 중 잘못된 입력 바이트.
    부분 디코딩이나 복구는 하지 않는다.
"""


class CryptoError(Exception):
    """zkp.schnorr 의 모든 오류의 기반 클래스."""


class ProofVerificationError(CryptoError):
    """검증 방정식 불일치. protocol 은 진단용 프로토콜 이름이다."""

    def __init__(self, protocol):
        super().__init__("{} proof verification failed".format(protocol))
        self.protocol = protocol


class SerializationError(CryptoError):
    """잘못된 직렬화 입력."""


class NotEnoughSpaceError(SerializationError):
    """바이트 길이가 모드가 요구하는 크기와 다르다."""


class InvalidDataError(SerializationError):
    """점 인코딩, 플래그, 또는 스칼라 값이 유효하지 않다."""
