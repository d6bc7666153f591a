import pytest

from zkp.schnorr.group import BN128_G1, BLS12_381_G1, ModularGroup
from zkp.schnorr.proof import Proof
from zkp.schnorr.transcript import FiatShamirRng
from zkp.schnorr.verifier import challenge


# ── 테스트 상수 ──
TOY_P = 23
TOY_Q = 11
TOY_G = 4


def make_proof(group, parameters, witness, r=None, transcript=None):
    """정직한 Prover: R = g·r, c = H(...), s = r - c·x.

    Returns:
        (statement, proof)
    """
    x = group.scalar(witness)
    statement = group.mul(parameters, x)
    r = group.random_scalar() if r is None else group.scalar(r)
    commit = group.mul(parameters, r)
    if transcript is None:
        transcript = FiatShamirRng()
    c = challenge(group, parameters, statement, transcript, commit)
    return statement, Proof(group, commit, r - c * x)


@pytest.fixture
def toy_group():
    """p=23, q=11, g=4 장난감 Schnorr 군."""
    return ModularGroup(TOY_P, TOY_Q, TOY_G)


@pytest.fixture(params=["bn128", "bls12_381", "toy"])
def any_group(request):
    if request.param == "bn128":
        return BN128_G1
    if request.param == "bls12_381":
        return BLS12_381_G1
    return ModularGroup(TOY_P, TOY_Q, TOY_G)


@pytest.fixture(params=["bn128", "bls12_381"])
def curve_group(request):
    return {"bn128": BN128_G1, "bls12_381": BLS12_381_G1}[request.param]


@pytest.fixture
def bn128_proof():
    """bn128 위의 (g, X, proof)."""
    g = BN128_G1.generator()
    statement, proof = make_proof(BN128_G1, g, 123456789, r=987654321)
    return g, statement, proof


@pytest.fixture
def prove():
    """정직한 Prover 함수 (make_proof)."""
    return make_proof
