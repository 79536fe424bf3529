import argparse
import binascii
import collections
import struct

import numpy as np

from . import alog
from . import codec
from . import env_config as envc
from . import real48 as r48


PASS = 'pass'
MISMATCH = 'mismatch'
SHORT = 'short'

_F32_PACKER = struct.Struct('<f')
_F64_PACKER = struct.Struct('<d')


class FuzzConfig(envc.EnvConfig):

  ENV_PREFIX = 'REAL48_FUZZ_'

  iterations = 10000
  seed = 0
  max_size = 12


def compute_seed(seed):
  if isinstance(seed, int):
    return binascii.crc32(struct.pack('=q', seed))
  if isinstance(seed, bytes):
    return binascii.crc32(seed)

  return binascii.crc32(str(seed).encode())


def _round_trip(data, packer, encode, decode):
  value = packer.unpack(data[: packer.size])[0]
  try:
    result = decode(encode(value))
  except codec.Real48Error as ex:
    return ex.kind.value

  return PASS if result == value else MISMATCH


def check_input(data):
  """Runs one fuzz input through the Real48 round trip.

  Inputs of 4 to 7 bytes are read as a little-endian single precision value,
  longer ones as a double. Returns PASS, MISMATCH, SHORT or the value of the
  ErrorKind raised by the codec.
  """
  if len(data) < _F32_PACKER.size:
    return SHORT
  if len(data) < _F64_PACKER.size:
    return _round_trip(data, _F32_PACKER, r48.encode_f32, r48.decode_f32)

  return _round_trip(data, _F64_PACKER, r48.encode_f64, r48.decode_f64)


def fuzz_one_input(data):
  return check_input(bytes(data)) == PASS


def random_inputs(rng, count, max_size):
  for _ in range(count):
    size = int(rng.integers(0, max_size, endpoint=True))

    yield rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()


def run_fuzz(config):
  rng = np.random.default_rng(compute_seed(config.seed))

  stats = collections.Counter()
  for i, data in enumerate(random_inputs(rng, config.iterations, config.max_size)):
    outcome = check_input(data)
    stats[outcome] += 1
    alog.debug0(f'[{i}] {data.hex()} -> {outcome}')

  summary = ', '.join(f'{k}={v}' for k, v in sorted(stats.items()))
  alog.info(f'Fuzzed {config.iterations} inputs (seed={config.seed}): {summary}')

  return stats


def main(args=None):
  parser = argparse.ArgumentParser(description='Real48 round trip fuzzer')
  alog.add_logging_options(parser)
  pargs, rem_args = parser.parse_known_args(args=args)
  alog.setup_logging(pargs)

  try:
    return run_fuzz(FuzzConfig(args=rem_args))
  except Exception as ex:
    alog.exception(ex, exmsg='Exception while running the fuzzer')
    raise


if __name__ == '__main__':
  main()
