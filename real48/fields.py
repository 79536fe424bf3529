import collections
import struct

from . import alog
from . import fp_utils as fpu


SIZE = 6
EXP_BITS = 8
MANT_BITS = 39
SIGN_POS = EXP_BITS + MANT_BITS

EXP_MAX = fpu.mask(EXP_BITS)
MANT_MASK = fpu.mask(MANT_BITS)

# Packed exponent of 1.0.
BIAS = 129

_WORD_PACKER = struct.Struct('<Q')
_PAD = bytes(_WORD_PACKER.size - SIZE)


class Fields(collections.namedtuple('Fields', 'sign, exponent, mantissa')):
  """Logical view of a Real48 value.

  The 48-bit little-endian word carries the exponent in bits [0, 8), the
  mantissa (without the implicit leading one) in bits [8, 47) and the sign in
  bit 47.
  """

  __slots__ = ()

  def is_zero(self):
    return self.exponent == 0


ZERO = Fields(False, 0, 0)


def make(sign, exponent, mantissa):
  if not 0 <= exponent <= EXP_MAX:
    alog.xraise(ValueError, f'Exponent out of range: {exponent}')
  if not 0 <= mantissa <= MANT_MASK:
    alog.xraise(ValueError, f'Mantissa out of range: 0x{mantissa:x}')

  return Fields(bool(sign), exponent, mantissa)


def pack_word(fields):
  return (fields.exponent | (fields.mantissa << EXP_BITS) |
          (int(fields.sign) << SIGN_POS))


def unpack_word(word):
  return Fields(fpu.bits(word, SIGN_POS, 1) != 0,
                fpu.bits(word, 0, EXP_BITS),
                fpu.bits(word, EXP_BITS, MANT_BITS))


def pack(fields):
  return _WORD_PACKER.pack(pack_word(fields))[: SIZE]


def unpack(data):
  if len(data) != SIZE:
    alog.xraise(ValueError, f'Real48 data must be {SIZE} bytes long: {bytes(data)!r}')

  return unpack_word(_WORD_PACKER.unpack(bytes(data) + _PAD)[0])
