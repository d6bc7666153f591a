"""
Schnorr Fiat-Shamir Transcript
================================

비대화식(non-interactive) 변환을 위한 Fiat-Shamir 트랜스크립트.

**Fiat-Shamir 변환이란?**
  Schnorr 식별 프로토콜은 원래 대화식 시그마 프로토콜이다:
  - Prover가 커밋먼트 R = g·r 을 보내면
  - Verifier가 랜덤 챌린지 c 를 보내고
  - Prover가 응답 s 를 보낸다

  Fiat-Shamir 변환은 Verifier의 챌린지를 해시로 대체한다:
  - 지금까지의 모든 메시지를 트랜스크립트에 흡수(absorb)하고
  - 트랜스크립트 상태로부터 챌린지를 결정론적으로 도출한다
  - Prover와 Verifier가 같은 순서로 흡수하면 같은 챌린지를 얻는다

**인터페이스**:
  검증기는 Transcript 인터페이스(absorb, challenge_scalar)에만 의존한다.
  테스트에서는 고정 챌린지를 돌려주는 FixedChallengeTranscript 를 쓸 수 있다.

주의:
  트랜스크립트는 순차 객체다. 동시에 여러 검증에 하나의 인스턴스를
  공유하면 챌린지가 달라진다. 검증마다 새 트랜스크립트를 사용한다.

사용 예시:
    >>> t = FiatShamirRng(b"my-protocol")
    >>> t.absorb(b"schnorr_identity" + params_bytes)
    >>> c = t.challenge_scalar(BN128FR)
"""

import hashlib


class Transcript:
    """Fiat-Shamir 오라클 인터페이스.

    absorb(data): 바이트열을 상태에 흡수한다.
    challenge_scalar(field): 현재 상태에서 field 원소를 도출한다.
    """

    def absorb(self, data):
        raise NotImplementedError

    def challenge_scalar(self, field):
        raise NotImplementedError


class FiatShamirRng(Transcript):
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    상태는 32바이트 seed 하나다.
      - 초기화: seed = SHA-256(initial)
      - 흡수:   seed = SHA-256(seed ‖ data)
      - 도출:   SHA-256(seed ‖ 0) ‖ SHA-256(seed ‖ 1) (64바이트) mod 위수
                이후 seed = SHA-256(seed ‖ 2) 로 갱신 (다음 챌린지는 다른 값)

    64바이트(512비트)를 위수로 축소하므로 편향은 무시할 수 있다.

    속성:
        seed: 현재 상태 (bytes, 32바이트)
    """

    def __init__(self, initial=b""):
        self.seed = hashlib.sha256(bytes(initial)).digest()

    def absorb(self, data):
        self.seed = hashlib.sha256(self.seed + bytes(data)).digest()

    def challenge_scalar(self, field):
        """트랜스크립트로부터 챌린지 스칼라를 생성한다.

        Args:
            field: py_ecc FQ 하위 클래스 (field_modulus 속성 필요)

        Returns:
            field 원소

        예시:
            >>> c1 = t.challenge_scalar(BN128FR)
            >>> c2 = t.challenge_scalar(BN128FR)
            # c1과 c2는 서로 다른 값 (seed 가 갱신되므로)
        """
        wide = (
            hashlib.sha256(self.seed + b"\x00").digest()
            + hashlib.sha256(self.seed + b"\x01").digest()
        )
        self.seed = hashlib.sha256(self.seed + b"\x02").digest()
        return field(int.from_bytes(wide, "little") % field.field_modulus)


class FixedChallengeTranscript(Transcript):
    """항상 같은 챌린지를 돌려주는 트랜스크립트 (테스트용).

    흡수한 바이트열은 absorbed 리스트에 순서대로 기록된다.
    """

    def __init__(self, challenge):
        self.challenge = challenge
        self.absorbed = []

    def absorb(self, data):
        self.absorbed.append(bytes(data))

    def challenge_scalar(self, field):
        return field(int(self.challenge) % field.field_modulus)
