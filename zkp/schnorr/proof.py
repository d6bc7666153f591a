"""
Schnorr Identification 증명 객체
==================================

Proof = (random_commit, opening)
  - random_commit: 군 원소 (Prover의 커밋먼트 R), 계산 표현
  - opening: 스칼라 필드 원소 (Prover의 응답 s)

두 값 사이의 관계는 생성 시 강제하지 않는다.
유효성은 오직 검증 방정식 g·s + X·c == R 로만 판단한다.

**와이어 형태(wire form)**:
  계산 표현의 점은 여러 좌표로 표현될 수 있으므로, 프로세스 밖으로
  나가기 전에 정규(affine) 형태로 바꿔야 한다.
  to_wire_form() / from_wire_form() 이 이 경계를 담당한다.
"""


class Proof:
    """Schnorr 증명 데이터 컨테이너.

    속성:
        group: random_commit 이 속한 군 (zkp.schnorr.group.Group)
        random_commit: 군 원소 (계산 표현)
        opening: group.scalar_field 원소
    """

    def __init__(self, group, random_commit, opening):
        self.group = group
        self.random_commit = random_commit
        self.opening = group.scalar(opening)

    def to_wire_form(self):
        """(정규 표현의 커밋먼트, opening) 을 반환한다."""
        return self.group.to_affine(self.random_commit), self.opening

    @classmethod
    def from_wire_form(cls, group, affine_commit, opening):
        """정규 표현의 커밋먼트로부터 Proof 를 만든다."""
        return cls(group, group.from_affine(affine_commit), opening)

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return NotImplemented
        return (
            self.group is other.group
            and self.group.eq(self.random_commit, other.random_commit)
            and self.opening == other.opening
        )

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        commit, opening = self.to_wire_form()
        return "Proof(group={}, random_commit={}, opening={})".format(
            self.group.name, commit, int(opening))
