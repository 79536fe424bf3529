import enum
import math

from . import alog
from . import fields as flds
from . import fp_utils as fpu


class ErrorKind(enum.Enum):
  UNREPRESENTABLE = 'unrepresentable'
  UNDERFLOW = 'underflow'
  OVERFLOW = 'overflow'


class Real48Error(ArithmeticError):
  kind = None


class UnrepresentableError(Real48Error):
  kind = ErrorKind.UNREPRESENTABLE


class UnderflowError(Real48Error):
  kind = ErrorKind.UNDERFLOW


class Real48OverflowError(Real48Error, OverflowError):
  kind = ErrorKind.OVERFLOW


def _float_bits(value, fmt):
  try:
    if math.isfinite(value):
      return fpu.to_bits(value, fmt)
  except OverflowError:
    alog.xraise(UnrepresentableError, f'Value does not fit {fmt.name}: {value}')

  alog.xraise(UnrepresentableError,
              f'Cannot represent NaN or infinity converting from {fmt.name}: {value}')


def _rebias(exp, from_bias, to_bias, to_max, what):
  rexp = exp - from_bias + to_bias
  if rexp <= 0:
    alog.xraise(UnderflowError, f'Value too small (underflow) {what}')
  if rexp > to_max:
    alog.xraise(Real48OverflowError, f'Exponent overflow {what}')

  return rexp


def _round_mantissa(exp, mant, shift, nm, exp_max, what):
  rmant = fpu.round_shift(mant, shift)
  if rmant == (1 << nm):
    # Rounding carried out of the mantissa field, 1.111...1 -> 10.000...0
    rmant = 0
    exp += 1
    if exp > exp_max:
      alog.xraise(Real48OverflowError, f'Exponent overflow after rounding {what}')

  return exp, rmant


def _encode(value, fmt):
  sign, exp, mant = fpu.split_bits(_float_bits(value, fmt), fmt)
  if exp == 0:
    # Zero and subnormals alike.
    return flds.ZERO

  what = f'converting from {fmt.name}'
  exp = _rebias(exp, fpu.exp_bias(fmt.nx), flds.BIAS, flds.EXP_MAX, what)

  shift = fmt.nm - flds.MANT_BITS
  if shift > 0:
    exp, mant = _round_mantissa(exp, mant, shift, flds.MANT_BITS, flds.EXP_MAX, what)
  else:
    mant <<= -shift

  return flds.Fields(sign != 0, exp, mant)


def _decode(fields, fmt):
  if fields.is_zero():
    return 0.0

  # The all ones exponent is reserved to NaN and infinity in IEEE formats.
  exp_max = fpu.mask(fmt.nx) - 1
  what = f'converting to {fmt.name}'
  exp = _rebias(fields.exponent, flds.BIAS, fpu.exp_bias(fmt.nx), exp_max, what)

  shift = flds.MANT_BITS - fmt.nm
  if shift > 0:
    exp, mant = _round_mantissa(exp, fields.mantissa, shift, fmt.nm, exp_max, what)
  else:
    mant = fields.mantissa << -shift

  return fpu.from_bits(fpu.pack_bits(int(fields.sign), exp, mant, fmt), fmt)


def f64_to_fields(value):
  return _encode(value, fpu.F64)


def f32_to_fields(value):
  return _encode(value, fpu.F32)


def fields_to_f64(fields):
  # Every Real48 exponent lands well inside the double range, so this cannot
  # raise.
  return _decode(fields, fpu.F64)


def fields_to_f32(fields):
  return _decode(fields, fpu.F32)
