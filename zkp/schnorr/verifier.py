"""
Schnorr Identification Verifier
=================================

Prover가 X = g·x 를 만족하는 x 를 안다는 비대화식 증명을 검증한다.

**검증 과정**:
  1. 트랜스크립트에 흡수: 레이블 ‖ g ‖ X ‖ R  (이 순서, 모두 포함)
  2. 챌린지 c 도출
  3. g·s + X·c == R 확인

  하나라도 빠뜨리거나 순서를 바꾸면 위조가 가능해진다.
  점은 비압축 정규 인코딩(고정 폭)으로 흡수하므로 구분자가 필요 없다.

**Prover 측 (참고)**:
  R = g·r,  c = H(레이블 ‖ g ‖ X ‖ R),  s = r - c·x
  → g·s + X·c = g·r - g·(c·x) + g·(x·c) = R

사용 예시:
    >>> from zkp.schnorr.verifier import verify
    >>> verify(g, X, FiatShamirRng(), proof)   # 실패 시 ProofVerificationError
"""

import logging

from zkp.schnorr.config import PROTOCOL_LABEL, PROTOCOL_NAME
from zkp.schnorr.errors import ProofVerificationError

logger = logging.getLogger(__name__)


def transcript_bytes(group, parameters, statement, random_commit, label=PROTOCOL_LABEL):
    """트랜스크립트에 흡수할 바이트열: label ‖ g ‖ X ‖ R."""
    return (
        label
        + group.canonical_bytes(parameters)
        + group.canonical_bytes(statement)
        + group.canonical_bytes(random_commit)
    )


def challenge(group, parameters, statement, transcript, random_commit):
    """레이블과 공개 값들을 흡수하고 챌린지 c 를 도출한다.

    트랜스크립트 상태는 결과와 무관하게 진행된다.
    """
    transcript.absorb(transcript_bytes(group, parameters, statement, random_commit))
    return transcript.challenge_scalar(group.scalar_field)


def verify(parameters, statement, transcript, proof):
    """Schnorr 증명을 검증한다.

    Args:
        parameters: 생성자 g (proof.group 의 계산 표현)
        statement: 공개 값 X = g·x
        transcript: Transcript (absorb, challenge_scalar)
        proof: Proof

    Raises:
        ProofVerificationError: g·s + X·c != R
        ValueError: parameters 또는 statement 가 proof.group 의 원소가 아닐 때
    """
    group = proof.group
    if not (group.is_element(parameters) and group.is_element(statement)):
        raise ValueError(
            "parameters and statement must be elements of {}".format(group.name))

    c = challenge(group, parameters, statement, transcript, proof.random_commit)

    lhs = group.add(group.mul(parameters, proof.opening), group.mul(statement, c))
    if not group.eq(lhs, proof.random_commit):
        logger.info("%s proof rejected (group=%s)", PROTOCOL_NAME, group.name)
        raise ProofVerificationError(PROTOCOL_NAME)

    logger.debug("%s proof accepted (group=%s)", PROTOCOL_NAME, group.name)


def is_valid_proof(parameters, statement, transcript, proof):
    """verify() 의 bool 버전."""
    try:
        verify(parameters, statement, transcript, proof)
    except ProofVerificationError:
        return False
    return True
