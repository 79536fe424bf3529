import enum
import functools
import math
import numbers
import operator

import numpy as np

from . import alog
from . import codec
from . import fields as flds


class Class(enum.Enum):
  NORMAL = 'normal'
  ZERO = 'zero'


@functools.total_ordering
class Real48:
  """A 48-bit packed floating point value (1 sign, 8 exponent, 39 mantissa bits).

  Instances are immutable and are identified by their 6 byte little-endian
  representation. Arithmetic is carried out in double precision and the result
  re-encoded, so every operator can raise the codec errors.
  """

  __slots__ = ('_b',)

  def __init__(self, value=0.0):
    if isinstance(value, Real48):
      data = value._b
    elif isinstance(value, np.float32):
      data = flds.pack(codec.f32_to_fields(value))
    elif isinstance(value, numbers.Real):
      data = flds.pack(codec.f64_to_fields(value))
    else:
      alog.xraise(TypeError, f'Cannot convert {type(value).__name__} to Real48: {value}')

    object.__setattr__(self, '_b', data)

  def __setattr__(self, name, value):
    alog.xraise(AttributeError, f'{type(self).__name__} is immutable')

  def __reduce__(self):
    return type(self).from_bytes, (self._b,)

  @classmethod
  def _create(cls, data):
    obj = cls.__new__(cls)
    object.__setattr__(obj, '_b', data)

    return obj

  @classmethod
  def from_bytes(cls, data):
    # Validates the length, any 6 byte pattern is a valid value.
    flds.unpack(data)

    return cls._create(bytes(data))

  @classmethod
  def from_fields(cls, sign, exponent, mantissa):
    return cls._create(flds.pack(flds.make(sign, exponent, mantissa)))

  @classmethod
  def from_float32(cls, value):
    return cls._create(flds.pack(codec.f32_to_fields(value)))

  @classmethod
  def min(cls):
    return cls.from_fields(False, 1, 0)

  @classmethod
  def max(cls):
    return cls.from_fields(False, flds.EXP_MAX, flds.MANT_MASK)

  @classmethod
  def epsilon(cls):
    return cls.from_fields(False, 90, 0)

  def to_bytes(self):
    return self._b

  __bytes__ = to_bytes

  def fields(self):
    return flds.unpack(self._b)

  def to_float32(self):
    return codec.fields_to_f32(self.fields())

  def classify(self):
    return Class.ZERO if self.fields().is_zero() else Class.NORMAL

  def __float__(self):
    return codec.fields_to_f64(self.fields())

  def __bool__(self):
    return not self.fields().is_zero()

  def __repr__(self):
    return f'{type(self).__name__}({float(self)!r})'

  def __str__(self):
    return str(float(self))

  def __hash__(self):
    return hash(float(self))

  def _binary_op(self, other, op, reflected=False):
    if isinstance(other, Real48):
      ovalue = float(other)
    elif isinstance(other, numbers.Real):
      ovalue = float(Real48(other))
    else:
      return NotImplemented

    a, b = (ovalue, float(self)) if reflected else (float(self), ovalue)

    return Real48(op(a, b))

  def __add__(self, other):
    return self._binary_op(other, operator.add)

  def __radd__(self, other):
    return self._binary_op(other, operator.add, reflected=True)

  def __sub__(self, other):
    return self._binary_op(other, operator.sub)

  def __rsub__(self, other):
    return self._binary_op(other, operator.sub, reflected=True)

  def __mul__(self, other):
    return self._binary_op(other, operator.mul)

  def __rmul__(self, other):
    return self._binary_op(other, operator.mul, reflected=True)

  def __truediv__(self, other):
    return self._binary_op(other, _div)

  def __rtruediv__(self, other):
    return self._binary_op(other, _div, reflected=True)

  def __pos__(self):
    return self

  def __neg__(self):
    fields = self.fields()
    if fields.is_zero():
      return Real48()

    return Real48._create(flds.pack(fields._replace(sign=not fields.sign)))

  def _compare_value(self, other):
    if isinstance(other, Real48):
      return float(other)
    if isinstance(other, numbers.Real):
      return other

  def __eq__(self, other):
    ovalue = self._compare_value(other)

    return NotImplemented if ovalue is None else float(self) == ovalue

  def __lt__(self, other):
    ovalue = self._compare_value(other)

    return NotImplemented if ovalue is None else float(self) < ovalue

  def __gt__(self, other):
    ovalue = self._compare_value(other)

    return NotImplemented if ovalue is None else float(self) > ovalue


def _div(a, b):
  # IEEE semantics, the non finite result is then rejected by the encoder.
  if b == 0.0:
    return math.nan if a == 0.0 else math.inf

  return a / b


def encode_f64(value):
  return Real48._create(flds.pack(codec.f64_to_fields(value)))


def encode_f32(value):
  return Real48.from_float32(value)


def decode_f64(value):
  return float(value)


def decode_f32(value):
  return value.to_float32()


def classify(value):
  return value.classify()


def min():
  return Real48.min()


def max():
  return Real48.max()


def epsilon():
  return Real48.epsilon()
