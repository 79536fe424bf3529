import argparse
import os

import yaml

from . import alog


def to_type(v, vtype):
  return vtype(yaml.safe_load(v)) if isinstance(v, str) else vtype(v)


def getenv(name, dtype=None, defval=None):
  # os.getenv expects the default value to be a string, so cannot be passed in there.
  env = os.getenv(name, None)
  if env is None:
    env = defval
  if env is not None:
    return to_type(env, dtype) if dtype is not None else env


class EnvConfig:
  """Settings object whose public class attributes are the defaults.

  Each attribute can be overridden by the ENV_PREFIX + NAME (upper case)
  environment variable, and then by a --name command line argument. Values are
  converted to the type of the default.
  """

  ENV_PREFIX = ''

  def __init__(self, args=None, **kwargs):
    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    state = dict()
    for name in dir(self):
      if not name.startswith('_') and not name.isupper():
        value = getattr(self, name)
        # Do not try to override functions (even though there really should not
        # be in an EnvConfig derived object).
        if not callable(value):
          env = getenv(f'{self.ENV_PREFIX}{name.upper()}', dtype=type(value))
          if env is not None:
            value = env

          parser.add_argument(f'--{name}', type=type(value))
          state[name] = value

    pargs, _ = parser.parse_known_args(args=args)
    for name, value in state.items():
      avalue = getattr(pargs, name, None)
      setattr(self, name, value if avalue is None else avalue)

    for name, value in kwargs.items():
      if name not in state:
        alog.xraise(AttributeError, f'Unknown {type(self).__name__} setting: {name}')
      setattr(self, name, to_type(value, type(state[name])))

  def __repr__(self):
    values = ', '.join(f'{k}={v}' for k, v in vars(self).items())

    return f'{type(self).__name__}({values})'
