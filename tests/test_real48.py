import copy
import pickle

import numpy as np
import pytest

from real48 import codec
from real48 import fields as flds
from real48 import real48 as r48


def test_default_is_zero():
  value = r48.Real48()

  assert value.to_bytes() == bytes(6)
  assert bytes(value) == bytes(6)
  assert value.classify() == r48.Class.ZERO
  assert not value


def test_constructor_types():
  assert r48.Real48(3).to_bytes() == r48.encode_f64(3.0).to_bytes()
  assert r48.Real48(np.float64(0.1)).to_bytes() == r48.encode_f64(0.1).to_bytes()
  assert r48.Real48(np.float32(0.1)).to_bytes() == r48.encode_f32(np.float32(0.1)).to_bytes()
  assert r48.Real48(r48.Real48(2.5)).to_bytes() == r48.encode_f64(2.5).to_bytes()

  with pytest.raises(TypeError):
    r48.Real48('1.0')
  with pytest.raises(TypeError):
    r48.Real48(None)


def test_constructor_errors():
  with pytest.raises(codec.UnrepresentableError):
    r48.Real48(float('nan'))
  with pytest.raises(codec.Real48OverflowError):
    r48.Real48(1e39)
  with pytest.raises(codec.UnderflowError):
    r48.Real48(1e-39)


def test_immutable():
  value = r48.Real48(1.0)

  with pytest.raises(AttributeError):
    value._b = bytes(6)
  with pytest.raises(AttributeError):
    value.foo = 1


def test_from_bytes():
  value = r48.Real48.from_bytes(bytearray(b'\x81\x00\x00\x00\x00\x40'))

  assert value.to_bytes() == b'\x81\x00\x00\x00\x00\x40'
  assert isinstance(value.to_bytes(), bytes)
  assert float(value) == 1.5

  with pytest.raises(ValueError):
    r48.Real48.from_bytes(bytes(5))
  with pytest.raises(ValueError):
    r48.Real48.from_bytes(bytes(7))


def test_from_fields():
  value = r48.Real48.from_fields(True, 130, 1 << 38)

  assert value.fields() == flds.Fields(True, 130, 1 << 38)
  assert float(value) == -3.0

  with pytest.raises(ValueError):
    r48.Real48.from_fields(False, 256, 0)
  with pytest.raises(ValueError):
    r48.Real48.from_fields(False, 1, 1 << 39)
  with pytest.raises(ValueError):
    r48.Real48.from_fields(False, -1, 0)


def test_constants():
  assert r48.min().to_bytes() == b'\x01\x00\x00\x00\x00\x00'
  assert r48.max().to_bytes() == b'\xff\xff\xff\xff\xff\x7f'
  assert r48.epsilon().to_bytes() == b'\x5a\x00\x00\x00\x00\x00'
  assert r48.Real48.max().to_bytes() == r48.max().to_bytes()

  assert r48.classify(r48.min()) == r48.Class.NORMAL
  assert r48.classify(r48.max()) == r48.Class.NORMAL
  assert r48.min() < r48.epsilon() < r48.max()


def test_arithmetic():
  assert (r48.Real48(1.5) + r48.Real48(2.25)).to_bytes() == r48.encode_f64(3.75).to_bytes()
  assert float(r48.Real48(10) - r48.Real48(4)) == 6.0
  assert float(r48.Real48(3) * r48.Real48(0.5)) == 1.5
  assert float(r48.Real48(1) / r48.Real48(4)) == 0.25


def test_arithmetic_mixed_operands():
  assert float(r48.Real48(10) - 4) == 6.0
  assert float(3 * r48.Real48(0.5)) == 1.5
  assert float(1 / r48.Real48(4)) == 0.25
  assert float(10 - r48.Real48(4)) == 6.0
  assert float(sum([r48.Real48(1.0), r48.Real48(2.0), r48.Real48(3.0)])) == 6.0

  with pytest.raises(TypeError):
    r48.Real48(1.0) + '1'


def test_arithmetic_rounds_through_double():
  a, b = r48.Real48(0.1), r48.Real48(0.2)

  assert (a + b).to_bytes() == r48.encode_f64(float(a) + float(b)).to_bytes()


def test_inplace_rebinds():
  value = r48.Real48(1.0)
  alias = value
  value += r48.Real48(2.0)

  assert float(value) == 3.0
  assert float(alias) == 1.0

  value *= 2
  value /= r48.Real48(3.0)
  value -= 1

  assert float(value) == 1.0


def test_arithmetic_errors():
  with pytest.raises(codec.Real48OverflowError):
    r48.max() + r48.max()
  with pytest.raises(codec.Real48OverflowError):
    r48.max() * 2
  with pytest.raises(codec.UnderflowError):
    r48.min() / 2
  with pytest.raises(codec.UnderflowError):
    r48.min() * r48.min()
  with pytest.raises(codec.UnrepresentableError):
    r48.Real48(1.0) / r48.Real48()
  with pytest.raises(codec.UnrepresentableError):
    r48.Real48() / r48.Real48()


def test_cancellation_gives_zero():
  assert (r48.min() - r48.min()).to_bytes() == bytes(6)


def test_negation():
  value = r48.Real48(2.5)

  assert float(-value) == -2.5
  assert (-value).to_bytes()[5] == value.to_bytes()[5] ^ 0x80
  assert (-(-value)).to_bytes() == value.to_bytes()
  assert (+value) is value
  assert float(-r48.max()) == -float(r48.max())


def test_negation_of_zero_is_canonical():
  assert (-r48.Real48()).to_bytes() == bytes(6)
  assert (-r48.Real48.from_bytes(b'\x00\x11\x22\x33\x44\x55')).to_bytes() == bytes(6)


def test_comparisons():
  one, two = r48.Real48(1), r48.Real48(2)

  assert two > one
  assert one < two
  assert not one > two
  assert one <= one and one >= one
  assert one == r48.Real48(1.0)
  assert one != two
  assert two > 1.5
  assert one < 1.5
  assert one == 1
  assert r48.Real48(-3) < r48.Real48()
  assert sorted([two, -two, one, r48.Real48()]) == [-two, r48.Real48(), one, two]


def test_zero_patterns_compare_equal():
  junk = r48.Real48.from_bytes(b'\x00\xff\xff\xff\xff\xff')

  assert junk == r48.Real48()
  assert hash(junk) == hash(r48.Real48())


def test_hash():
  assert hash(r48.Real48(1.5)) == hash(1.5)
  assert len({r48.Real48(1.0), r48.Real48(1), r48.Real48(2.0)}) == 2


def test_conversions():
  value = r48.Real48(0.1)

  assert float(value) == r48.decode_f64(value)
  assert value.to_float32() == float(np.float32(0.1))
  assert repr(r48.Real48(1.5)) == 'Real48(1.5)'
  assert str(r48.Real48(-0.25)) == '-0.25'


def test_copy_and_pickle():
  value = r48.Real48(-123.456)

  for other in (copy.copy(value), copy.deepcopy(value), pickle.loads(pickle.dumps(value))):
    assert other.to_bytes() == value.to_bytes()
