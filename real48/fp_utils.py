import collections
import struct


# Exponent and mantissa widths of the IEEE-754 formats the codec bridges.
FpFormat = collections.namedtuple('FpFormat', 'name, nx, nm, packer, bits_packer')

F32 = FpFormat('float32', 8, 23, struct.Struct('<f'), struct.Struct('<I'))
F64 = FpFormat('float64', 11, 52, struct.Struct('<d'), struct.Struct('<Q'))


def exp_bias(nx):
  return (1 << (nx - 1)) - 1


def mask(n):
  return (1 << n) - 1


def bits(v, pos, n):
  return (v >> pos) & mask(n)


def round_shift(v, shift):
  # Round half up on the discarded low bits.
  return (v + (1 << (shift - 1))) >> shift


def to_bits(v, fmt):
  return fmt.bits_packer.unpack(fmt.packer.pack(v))[0]


def from_bits(v, fmt):
  return fmt.packer.unpack(fmt.bits_packer.pack(v))[0]


def split_bits(v, fmt):
  nx, nm = fmt.nx, fmt.nm

  return bits(v, nx + nm, 1), bits(v, nm, nx), bits(v, 0, nm)


def pack_bits(s, e, m, fmt):
  nx, nm = fmt.nx, fmt.nm

  return (s << (nx + nm)) | ((e & mask(nx)) << nm) | (m & mask(nm))
