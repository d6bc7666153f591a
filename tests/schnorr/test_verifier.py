"""
Verifier tests: 완전성, 건전성, 트랜스크립트 민감도, 장난감 군 시나리오
"""
import logging

import pytest

from zkp.schnorr.config import PROTOCOL_LABEL, PROTOCOL_NAME
from zkp.schnorr.errors import CryptoError, ProofVerificationError
from zkp.schnorr.group import BN128_G1, BLS12_381_G1
from zkp.schnorr.proof import Proof
from zkp.schnorr.transcript import FiatShamirRng, FixedChallengeTranscript
from zkp.schnorr.verifier import challenge, is_valid_proof, transcript_bytes, verify

WITNESS = 7
NONCE = 3


# =====================================================================
# 완전성 (정직한 증명은 통과)
# =====================================================================

class TestCompleteness:
    def test_valid_proof(self, any_group, prove):
        g = any_group.generator()
        statement, proof = prove(any_group, g, WITNESS)
        verify(g, statement, FiatShamirRng(), proof)

    @pytest.mark.parametrize("witness,r", [(1, 1), (2, 0), (123456789, 42), (10 ** 40, 7)])
    def test_various_witnesses(self, prove, witness, r):
        g = BN128_G1.generator()
        statement, proof = prove(BN128_G1, g, witness, r=r)
        assert is_valid_proof(g, statement, FiatShamirRng(), proof)

    def test_random_nonces(self, toy_group, prove):
        g = toy_group.generator()
        for x in range(toy_group.order):
            statement, proof = prove(toy_group, g, x)
            assert is_valid_proof(g, statement, FiatShamirRng(), proof)

    def test_other_generator(self, prove):
        """파라미터가 기본 생성자가 아니어도 된다."""
        h = BN128_G1.mul(BN128_G1.generator(), 31337)
        statement, proof = prove(BN128_G1, h, 99)
        verify(h, statement, FiatShamirRng(), proof)

    def test_projective_representation_irrelevant(self, bn128_proof):
        """커밋먼트의 좌표 표현이 달라도 검증 결과는 같다."""
        g, statement, proof = bn128_proof
        lam = BN128_G1.FQ(777)
        commit = tuple(c * lam for c in proof.random_commit)
        same = Proof(BN128_G1, commit, proof.opening)
        verify(g, statement, FiatShamirRng(), same)

    def test_prover_transcript_matches(self, prove):
        """초기 상태가 같은 트랜스크립트만 통과한다."""
        g = BN128_G1.generator()
        statement, proof = prove(BN128_G1, g, 5, transcript=FiatShamirRng(b"session-1"))
        verify(g, statement, FiatShamirRng(b"session-1"), proof)
        with pytest.raises(ProofVerificationError):
            verify(g, statement, FiatShamirRng(b"session-2"), proof)


# =====================================================================
# 건전성 (위조 불가)
# =====================================================================

class TestSoundness:
    def test_random_proofs_rejected(self, bn128_proof):
        g, statement, _ = bn128_proof
        G = BN128_G1
        accepted = 0
        for _ in range(16):
            fake = Proof(G, G.mul(g, G.random_scalar()), G.random_scalar())
            accepted += is_valid_proof(g, statement, FiatShamirRng(), fake)
        assert accepted == 0

    def test_exact_acceptance_rate_toy(self, toy_group):
        """장난감 군에서 모든 (R, s) 쌍을 나열하면 정확히 1/q 만 통과한다.

        각 R 에 대해 c 가 고정되므로 g·s = R - X·c 를 만족하는 s 는 하나뿐이다.
        """
        G = toy_group
        g = G.generator()
        statement = G.mul(g, WITNESS)
        commits = [G.mul(g, k) for k in range(G.order)]
        accepted = 0
        total = 0
        for commit in commits:
            for s in range(G.order):
                total += 1
                accepted += is_valid_proof(g, statement, FiatShamirRng(), Proof(G, commit, s))
        assert total == G.order * G.order
        assert accepted == G.order

    def test_wrong_statement_rejected(self, bn128_proof):
        g, statement, proof = bn128_proof
        other = BN128_G1.add(statement, g)
        with pytest.raises(ProofVerificationError):
            verify(g, other, FiatShamirRng(), proof)

    def test_tampered_opening_rejected(self, bn128_proof):
        g, statement, proof = bn128_proof
        tampered = Proof(BN128_G1, proof.random_commit, proof.opening + 1)
        with pytest.raises(ProofVerificationError):
            verify(g, statement, FiatShamirRng(), tampered)

    def test_tampered_commit_rejected(self, bn128_proof):
        g, statement, proof = bn128_proof
        tampered = Proof(BN128_G1, BN128_G1.add(proof.random_commit, g), proof.opening)
        with pytest.raises(ProofVerificationError):
            verify(g, statement, FiatShamirRng(), tampered)

    def test_error_carries_protocol_name(self, bn128_proof):
        g, statement, proof = bn128_proof
        tampered = Proof(BN128_G1, proof.random_commit, proof.opening + 1)
        with pytest.raises(ProofVerificationError) as exc:
            verify(g, statement, FiatShamirRng(), tampered)
        assert exc.value.protocol == PROTOCOL_NAME == "Schnorr Identification"
        assert isinstance(exc.value, CryptoError)

    def test_rejection_is_logged(self, bn128_proof, caplog):
        g, statement, proof = bn128_proof
        tampered = Proof(BN128_G1, proof.random_commit, proof.opening + 1)
        with caplog.at_level(logging.INFO, logger="zkp.schnorr.verifier"):
            assert not is_valid_proof(g, statement, FiatShamirRng(), tampered)
        assert PROTOCOL_NAME in caplog.text


# =====================================================================
# 트랜스크립트 민감도
# =====================================================================

class TestTranscript:
    def test_absorb_order_and_content(self, bn128_proof):
        g, statement, proof = bn128_proof
        G = BN128_G1
        t = FixedChallengeTranscript(1)
        verify_ok = is_valid_proof(g, statement, t, proof)
        assert not verify_ok  # 고정 챌린지로는 통과하지 않는다
        assert t.absorbed == [
            PROTOCOL_LABEL
            + G.canonical_bytes(g)
            + G.canonical_bytes(statement)
            + G.canonical_bytes(proof.random_commit)
        ]

    def test_label_is_ascii_protocol_name(self):
        assert PROTOCOL_LABEL == b"schnorr_identity"

    def test_transcript_bytes_layout(self, bn128_proof):
        g, statement, proof = bn128_proof
        data = transcript_bytes(BN128_G1, g, statement, proof.random_commit)
        assert data.startswith(PROTOCOL_LABEL)
        assert len(data) == len(PROTOCOL_LABEL) + 3 * BN128_G1.uncompressed_size

    @pytest.mark.parametrize("field", ["label", "parameters", "statement", "commit"])
    def test_each_field_changes_challenge(self, bn128_proof, field):
        g, statement, proof = bn128_proof
        G = BN128_G1
        values = {
            "label": PROTOCOL_LABEL,
            "parameters": g,
            "statement": statement,
            "commit": proof.random_commit,
        }
        base = transcript_bytes(G, values["parameters"], values["statement"],
                                values["commit"], label=values["label"])
        if field == "label":
            values["label"] = b"schnorr_identitY"
        else:
            values[field] = G.add(values[field], g)
        mutated = transcript_bytes(G, values["parameters"], values["statement"],
                                   values["commit"], label=values["label"])
        t1 = FiatShamirRng()
        t1.absorb(base)
        t2 = FiatShamirRng()
        t2.absorb(mutated)
        assert t1.challenge_scalar(G.scalar_field) != t2.challenge_scalar(G.scalar_field)

    def test_challenge_matches_verifier(self, bn128_proof):
        g, statement, proof = bn128_proof
        c = challenge(BN128_G1, g, statement, FiatShamirRng(), proof.random_commit)
        lhs = BN128_G1.add(BN128_G1.mul(g, proof.opening), BN128_G1.mul(statement, c))
        assert BN128_G1.eq(lhs, proof.random_commit)

    def test_transcript_advances_on_failure(self, bn128_proof):
        g, statement, proof = bn128_proof
        t = FiatShamirRng()
        before = t.seed
        tampered = Proof(BN128_G1, proof.random_commit, proof.opening + 1)
        assert not is_valid_proof(g, statement, t, tampered)
        assert t.seed != before

    def test_reused_transcript_rejects_second_check(self, bn128_proof):
        """같은 트랜스크립트를 이어 쓰면 두 번째 챌린지는 달라진다."""
        g, statement, proof = bn128_proof
        t = FiatShamirRng()
        verify(g, statement, t, proof)
        with pytest.raises(ProofVerificationError):
            verify(g, statement, t, proof)


# =====================================================================
# 장난감 군 시나리오 (p=23, q=11, g=4, x=7, r=3, c=5)
# =====================================================================

class TestToyScenario:
    def test_accepts(self, toy_group):
        G = toy_group
        g = G.generator()
        statement = G.mul(g, WITNESS)        # 4^7 = 8
        commit = G.mul(g, NONCE)             # 4^3 = 18
        assert (statement, commit) == (8, 18)
        opening = (NONCE - 5 * WITNESS) % G.order   # 3 - 35 ≡ 1 (mod 11)
        assert opening == 1
        verify(g, statement, FixedChallengeTranscript(5), Proof(G, commit, opening))

    def test_changed_opening_rejects(self, toy_group):
        G = toy_group
        g = G.generator()
        statement = G.mul(g, WITNESS)
        commit = G.mul(g, NONCE)
        opening = (NONCE - 5 * WITNESS - 1) % G.order
        with pytest.raises(ProofVerificationError):
            verify(g, statement, FixedChallengeTranscript(5), Proof(G, commit, opening))

    def test_plus_convention_rejects(self, toy_group):
        """s = r + c·x 로 만든 응답은 g·s + X·c == R 을 만족하지 않는다.

        38 이 통과하려면 g^(38 + 35) = g^3, 즉 70 ≡ 0 (mod q) 이어야 한다.
        q = 11 은 35 도 70 도 나누지 않으므로 거부된다.
        """
        G = toy_group
        g = G.generator()
        statement = G.mul(g, WITNESS)
        commit = G.mul(g, NONCE)
        opening = NONCE + 5 * WITNESS    # 38
        assert not is_valid_proof(
            g, statement, FixedChallengeTranscript(5), Proof(G, commit, opening))


# =====================================================================
# 군 혼용
# =====================================================================

class TestGroupMismatch:
    def test_curve_statement_with_toy_proof(self, bn128_proof, toy_group, prove):
        g, statement, _ = bn128_proof
        _, toy_proof = prove(toy_group, toy_group.generator(), WITNESS)
        with pytest.raises(ValueError):
            verify(g, statement, FiatShamirRng(), toy_proof)

    def test_toy_statement_with_curve_proof(self, bn128_proof, toy_group, prove):
        _, _, proof = bn128_proof
        g = toy_group.generator()
        statement, _ = prove(toy_group, g, WITNESS)
        with pytest.raises(ValueError):
            verify(g, statement, FiatShamirRng(), proof)

    def test_other_curve_statement(self, bn128_proof):
        _, _, proof = bn128_proof
        g = BLS12_381_G1.generator()
        with pytest.raises(ValueError):
            verify(g, BLS12_381_G1.mul(g, WITNESS), FiatShamirRng(), proof)

    def test_is_valid_proof_does_not_swallow(self, bn128_proof, toy_group):
        _, _, proof = bn128_proof
        with pytest.raises(ValueError):
            is_valid_proof(toy_group.generator(), 9, FiatShamirRng(), proof)

    def test_transcript_untouched(self, bn128_proof, toy_group):
        """군 검사는 트랜스크립트 흡수보다 먼저 일어난다."""
        _, _, proof = bn128_proof
        rng = FiatShamirRng()
        seed = rng.seed
        with pytest.raises(ValueError):
            verify(toy_group.generator(), 9, rng, proof)
        assert rng.seed == seed
