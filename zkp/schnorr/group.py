"""
Schnorr 군(Group) 및 스칼라 필드 연산
======================================

검증기와 코덱이 공유하는 군 연산 인터페이스를 정의한다.
검증기/코덱은 구체적인 곡선을 알지 못하며, 아래 ``Group`` 인터페이스만 사용한다.

**두 가지 표현(representation)**:
  - 계산 표현 (projective): py_ecc.optimized_* 의 동차 좌표 (X, Y, Z).
    같은 점이 여러 좌표로 표현될 수 있어 바이트 비교에 쓸 수 없다.
  - 정규 표현 (affine): (x, y) = (X/Z, Y/Z), 무한원점은 None.
    직렬화와 트랜스크립트 입력은 항상 이 표현을 거친다.

**구현**:
  - WeierstrassGroup: y² = x³ + b 곡선의 G1 (BN128, BLS12-381)
  - ModularGroup: Z_p^* 의 위수 q 부분군 (Schnorr 군, 장난감 군 포함)

와이어 포맷 (WeierstrassGroup):
  - 좌표는 리틀엔디안, 폭은 ceil(bits(p)/8) 바이트
  - 마지막 바이트 bit 7: y 선택 비트 (y > (p-1)/2), bit 6: 무한원점 플래그
  - 압축: x ‖ flags,  비압축: x ‖ y ‖ flags

사용 예시:
    >>> from zkp.schnorr.group import BN128_G1
    >>> G = BN128_G1.generator()
    >>> P = BN128_G1.mul(G, 7)
    >>> BN128_G1.encode_point(BN128_G1.to_affine(P), compressed=True)
"""

import secrets

from py_ecc import optimized_bn128, optimized_bls12_381
from py_ecc.fields import bn128_FQ, bls12_381_FQ
from py_ecc.fields import optimized_bn128_FQ, optimized_bls12_381_FQ

from zkp.schnorr.errors import InvalidDataError, NotEnoughSpaceError

# 플래그 비트 (좌표 마지막 바이트의 상위 비트)
Y_FLAG = 0x80
INFINITY_FLAG = 0x40
FLAG_MASK = Y_FLAG | INFINITY_FLAG


def byte_width(modulus):
    """modulus 미만의 정수를 담는 최소 바이트 수."""
    return (modulus.bit_length() + 7) // 8


# ─────────────────────────────────────────────────────────────────────
# 스칼라 필드
# ─────────────────────────────────────────────────────────────────────

class BN128FR(bn128_FQ):
    """bn128 G1 위수 위의 스칼라 필드."""
    field_modulus = optimized_bn128.curve_order


class BLS12381FR(bls12_381_FQ):
    """BLS12-381 G1 위수 위의 스칼라 필드."""
    field_modulus = optimized_bls12_381.curve_order


def make_scalar_field(order, name=None):
    """위수 order 의 스칼라 필드 클래스를 만든다 (ModularGroup 용)."""
    name = name or "FR{}".format(order)
    return type(name, (bn128_FQ,), {"field_modulus": order})


# ─────────────────────────────────────────────────────────────────────
# Group 인터페이스
# ─────────────────────────────────────────────────────────────────────

class Group:
    """검증기/코덱이 사용하는 군 연산 인터페이스.

    하위 클래스가 구현해야 하는 것:
        generator, identity, is_element, add, neg, mul, eq,
        to_affine, from_affine, is_valid,
        encode_point, decode_point, compressed_size, uncompressed_size

    스칼라 처리 (encode_scalar/decode_scalar/random_scalar)는 공통이다.
    스칼라는 리틀엔디안 고정 폭 (scalar_size 바이트)으로 직렬화한다.
    """

    name = None
    scalar_field = None

    @property
    def order(self):
        return self.scalar_field.field_modulus

    @property
    def scalar_size(self):
        return byte_width(self.order)

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self.name)

    # ── 스칼라 ──

    def scalar(self, value):
        """정수 또는 필드 원소를 이 군의 스칼라 필드 원소로 변환한다."""
        return self.scalar_field(int(value) % self.order)

    def random_scalar(self):
        return self.scalar_field(secrets.randbelow(self.order))

    def encode_scalar(self, s):
        return (int(s) % self.order).to_bytes(self.scalar_size, "little")

    def decode_scalar(self, data):
        """스칼라 바이트열을 필드 원소로 복원한다.

        점 검사를 생략하는 unchecked 모드에서도 범위 검사는 항상 한다.

        Raises:
            NotEnoughSpaceError: 길이가 scalar_size 와 다를 때
            InvalidDataError: 값이 위수 이상일 때
        """
        if len(data) != self.scalar_size:
            raise NotEnoughSpaceError(
                "scalar needs {} bytes, got {}".format(self.scalar_size, len(data)))
        n = int.from_bytes(data, "little")
        if n >= self.order:
            raise InvalidDataError("scalar is not reduced modulo the group order")
        return self.scalar_field(n)

    # ── 편의 함수 ──

    def canonical_bytes(self, point, compressed=False):
        """계산 표현의 점을 정규 바이트열로 만든다."""
        return self.encode_point(self.to_affine(point), compressed)

    def point_size(self, compressed):
        return self.compressed_size if compressed else self.uncompressed_size


# ─────────────────────────────────────────────────────────────────────
# 단축 바이어슈트라스 곡선 G1
# ─────────────────────────────────────────────────────────────────────

class WeierstrassGroup(Group):
    """py_ecc.optimized_* 곡선 모듈 위의 G1 군.

    p ≡ 3 (mod 4) 인 기저체를 가정하므로 제곱근은 rhs^((p+1)/4) 로 구한다.

    속성:
        curve: py_ecc 곡선 모듈 (add, neg, multiply, G1)
        FQ: 기저체 클래스
        b: 곡선 계수 (y² = x³ + b)
        cofactor_check: True 이면 디코딩 시 부분군 소속을 검사한다
    """

    def __init__(self, name, curve, FQ, b, scalar_field, cofactor_check=False):
        self.name = name
        self.curve = curve
        self.FQ = FQ
        self.b = FQ(b)
        self.scalar_field = scalar_field
        self.cofactor_check = cofactor_check
        self.field_modulus = FQ.field_modulus
        self.coord_size = byte_width(self.field_modulus)
        if self.field_modulus % 4 != 3:
            raise ValueError("base field must satisfy p = 3 mod 4")
        # 플래그 두 비트를 담을 여유가 있어야 한다
        if self.field_modulus.bit_length() > self.coord_size * 8 - 2:
            raise ValueError("no spare bits for point flags")

    @property
    def compressed_size(self):
        return self.coord_size

    @property
    def uncompressed_size(self):
        return 2 * self.coord_size

    # ── 군 연산 (계산 표현) ──

    def generator(self):
        return self.curve.G1

    def identity(self):
        return (self.FQ(1), self.FQ(1), self.FQ(0))

    def is_identity(self, p):
        return p[2] == 0

    def is_element(self, p):
        """p 가 이 군의 계산 표현 (X, Y, Z) 인지 (곡선 검사는 하지 않음)."""
        return (
            isinstance(p, tuple) and len(p) == 3
            and all(isinstance(c, self.FQ) for c in p)
        )

    def add(self, p, q):
        return self.curve.add(p, q)

    def neg(self, p):
        return self.curve.neg(p)

    def mul(self, p, scalar):
        return self.curve.multiply(p, int(scalar) % self.order)

    def eq(self, p, q):
        if self.is_identity(p) or self.is_identity(q):
            return self.is_identity(p) and self.is_identity(q)
        x1, y1, z1 = p
        x2, y2, z2 = q
        return x1 * z2 == x2 * z1 and y1 * z2 == y2 * z1

    # ── 정규화 경계 ──

    def to_affine(self, p):
        """(X, Y, Z) → (x, y). 무한원점은 None."""
        if self.is_identity(p):
            return None
        x, y, z = p
        return (x / z, y / z)

    def from_affine(self, a):
        """(x, y) → (x, y, 1). None 은 무한원점."""
        if a is None:
            return self.identity()
        x, y = a
        return (self.FQ(int(x)), self.FQ(int(y)), self.FQ(1))

    def is_on_curve(self, a):
        if a is None:
            return True
        x, y = a
        return y * y == x * x * x + self.b

    def in_subgroup(self, a):
        if not self.cofactor_check or a is None:
            return True
        return self.is_identity(self.curve.multiply(self.from_affine(a), self.order))

    def is_valid(self, a):
        if a is None:
            return True
        x, y = a
        if int(x) >= self.field_modulus or int(y) >= self.field_modulus:
            return False
        return self.is_on_curve(a) and self.in_subgroup(a)

    def sqrt(self, v):
        """기저체 제곱근. 제곱잉여가 아니면 None."""
        y = v ** ((self.field_modulus + 1) // 4)
        if y * y != v:
            return None
        return y

    def y_is_larger(self, y):
        return int(y) > (self.field_modulus - 1) // 2

    # ── 인코딩 ──

    def _coord_bytes(self, value):
        return int(value).to_bytes(self.coord_size, "little")

    def encode_point(self, a, compressed=True):
        """정규 표현의 점을 바이트열로 만든다.

        Args:
            a: (x, y) 또는 None (무한원점)
            compressed: True 이면 x 와 선택 비트만 기록

        Returns:
            bytes: compressed_size 또는 uncompressed_size 바이트
        """
        if a is None:
            size = self.compressed_size if compressed else self.uncompressed_size
            out = bytearray(size)
            out[-1] |= INFINITY_FLAG
            return bytes(out)

        x, y = a
        if compressed:
            out = bytearray(self._coord_bytes(x))
            if self.y_is_larger(y):
                out[-1] |= Y_FLAG
            return bytes(out)
        return self._coord_bytes(x) + self._coord_bytes(y)

    def decode_point(self, data, compressed=True, validate=True):
        """바이트열을 정규 표현의 점으로 복원한다.

        validate=False 이면 좌표 범위, 곡선 위, 부분군 검사를 모두 생략한다.
        y 선택 비트와 무한원점 플래그가 함께 켜진 인코딩은 항상 거부한다.
        압축 포맷에서 x 에 대응하는 y 가 없으면 검사 여부와 무관하게 실패한다.

        Raises:
            NotEnoughSpaceError: 길이가 맞지 않을 때
            InvalidDataError: 플래그, 좌표, 곡선/부분군 검사 실패
        """
        size = self.compressed_size if compressed else self.uncompressed_size
        if len(data) != size:
            raise NotEnoughSpaceError(
                "{} point needs {} bytes, got {}".format(self.name, size, len(data)))

        buf = bytearray(data)
        flags = buf[-1] & FLAG_MASK
        buf[-1] &= ~FLAG_MASK & 0xFF

        if validate and not compressed and flags & Y_FLAG:
            raise InvalidDataError("y selector set on an uncompressed point")

        if flags == FLAG_MASK:
            raise InvalidDataError("y selector set on the point at infinity")

        if flags & INFINITY_FLAG:
            if validate and any(buf):
                raise InvalidDataError("non-canonical point at infinity")
            return None

        x_int = int.from_bytes(buf[:self.coord_size], "little")
        if validate and x_int >= self.field_modulus:
            raise InvalidDataError("x coordinate is not reduced")
        x = self.FQ(x_int)

        if compressed:
            y = self.sqrt(x * x * x + self.b)
            if y is None:
                raise InvalidDataError("x coordinate is not on the curve")
            if self.y_is_larger(y) != bool(flags & Y_FLAG):
                y = -y
        else:
            y_int = int.from_bytes(buf[self.coord_size:], "little")
            if validate and y_int >= self.field_modulus:
                raise InvalidDataError("y coordinate is not reduced")
            y = self.FQ(y_int)

        a = (x, y)
        if validate:
            if not self.is_on_curve(a):
                raise InvalidDataError("point is not on the curve")
            if not self.in_subgroup(a):
                raise InvalidDataError("point is not in the prime order subgroup")
        return a


# ─────────────────────────────────────────────────────────────────────
# Schnorr 군: Z_p^* 의 위수 q 부분군
# ─────────────────────────────────────────────────────────────────────

class ModularGroup(Group):
    """소수 p 에 대한 Z_p^* 의 위수 q 부분군 (곱셈군을 덧셈 기호로 사용).

    add 는 모듈러 곱셈, mul 은 모듈러 거듭제곱이다.
    원소의 표현은 하나뿐이므로 to_affine/from_affine 은 항등 변환이고,
    압축/비압축 인코딩은 같다.

    예시 (장난감 군, p=23, q=11, g=4):
        >>> G = ModularGroup(23, 11, 4)
        >>> G.mul(G.generator(), 11)  # 1 (항등원)
    """

    def __init__(self, p, q, g, name=None):
        if (p - 1) % q != 0:
            raise ValueError("q must divide p - 1")
        if g % p in (0, 1) or pow(g, q, p) != 1:
            raise ValueError("g must generate the order-q subgroup")
        self.p = p
        self.g = g % p
        self.name = name or "modp{}".format(p)
        self.scalar_field = make_scalar_field(q)
        self.coord_size = byte_width(p)

    @property
    def compressed_size(self):
        return self.coord_size

    @property
    def uncompressed_size(self):
        return self.coord_size

    def generator(self):
        return self.g

    def identity(self):
        return 1

    def is_element(self, a):
        return isinstance(a, int) and not isinstance(a, bool)

    def add(self, a, b):
        return (a * b) % self.p

    def neg(self, a):
        return pow(a, self.order - 1, self.p)

    def mul(self, a, scalar):
        return pow(a, int(scalar) % self.order, self.p)

    def eq(self, a, b):
        return a % self.p == b % self.p

    def to_affine(self, a):
        return a % self.p

    def from_affine(self, a):
        return a

    def is_valid(self, a):
        return 0 < a < self.p and pow(a, self.order, self.p) == 1

    def encode_point(self, a, compressed=True):
        return int(a).to_bytes(self.coord_size, "little")

    def decode_point(self, data, compressed=True, validate=True):
        if len(data) != self.coord_size:
            raise NotEnoughSpaceError(
                "{} element needs {} bytes, got {}".format(self.name, self.coord_size, len(data)))
        a = int.from_bytes(data, "little")
        if validate and not self.is_valid(a):
            raise InvalidDataError("value is not in the order-q subgroup")
        return a


# ─────────────────────────────────────────────────────────────────────
# 등록된 곡선
# ─────────────────────────────────────────────────────────────────────

BN128_G1 = WeierstrassGroup(
    "bn128", optimized_bn128, optimized_bn128_FQ, 3, BN128FR)

BLS12_381_G1 = WeierstrassGroup(
    "bls12_381", optimized_bls12_381, optimized_bls12_381_FQ, 4, BLS12381FR,
    cofactor_check=True)

GROUPS = {
    BN128_G1.name: BN128_G1,
    BLS12_381_G1.name: BLS12_381_G1,
}


def get_group(name):
    """이름으로 등록된 군을 찾는다.

    Raises:
        ValueError: 등록되지 않은 이름
    """
    try:
        return GROUPS[name]
    except KeyError:
        raise ValueError("unknown group: {}".format(name)) from None
