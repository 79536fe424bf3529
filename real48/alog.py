import logging
import os
import sys
import time
import traceback
import types


DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

SPAM = DEBUG - 2
VERBOSE = DEBUG - 1
DEBUG0 = DEBUG + 1
DEBUG1 = DEBUG + 2
DEBUG2 = DEBUG + 3
DEBUG3 = DEBUG + 4

_LEVEL_NAMES = {
  SPAM: 'SPAM',
  VERBOSE: 'VERBOSE',
  DEBUG0: 'DEBUG0',
  DEBUG1: 'DEBUG1',
  DEBUG2: 'DEBUG2',
  DEBUG3: 'DEBUG3',
}

_SHORT_LEV = {
  SPAM: 'SP',
  VERBOSE: 'VB',
  DEBUG0: '0D',
  DEBUG1: '1D',
  DEBUG2: '2D',
  DEBUG3: '3D',
  DEBUG: 'DD',
  INFO: 'IN',
  WARNING: 'WA',
  ERROR: 'ER',
  CRITICAL: 'CR',
}

_LOGGER = logging.getLogger('real48')


class Formatter(logging.Formatter):

  def __init__(self, emit_extra=None):
    super().__init__()
    self.emit_extra = emit_extra

  def format(self, r):
    hdr = self.make_header(r)
    msg = (r.msg % r.args) if r.args else r.msg

    return '\n'.join([f'{hdr}: {ln}' for ln in str(msg).split('\n')])

  def formatTime(self, r, datefmt=None):
    if datefmt:
      return time.strftime(datefmt, time.localtime(r.created))

    tstr = time.strftime('%Y%m%d %H:%M:%S', time.localtime(r.created))

    return f'{tstr}.{r.msecs * 1000:06.0f}'

  def make_header(self, r):
    tstr = self.formatTime(r)
    lid = _SHORT_LEV.get(r.levelno, r.levelname[:2])
    hdr = f'{lid}{tstr};{os.getpid()};{r.module}'
    if self.emit_extra:
      extras = [str(getattr(r, name, None)) for name in self.emit_extra]
      hdr = f'{hdr};{";".join(extras)}'

    return hdr


_DEFAULT_ARGS = dict(
  log_level=os.getenv('LOG_LEVEL', 'INFO'),
  log_file=os.getenv('LOG_FILE', 'STDERR'),
  log_emit_extra=[],
)

def add_logging_options(parser):
  parser.add_argument('--log_level', type=str, default=_DEFAULT_ARGS.get('log_level'),
                      choices={'SPAM', 'VERBOSE', 'DEBUG', 'DEBUG0', 'DEBUG1', 'DEBUG2',
                               'DEBUG3', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'},
                      help='The logging level')
  parser.add_argument('--log_file', type=str, default=_DEFAULT_ARGS.get('log_file'),
                      help='Comma separated list of target log files (STDOUT, STDERR ' \
                      f'are also recognized)')
  parser.add_argument('--log_emit_extra', nargs='*',
                      help='Which other logging record fields should be emitted')


def _add_levels():
  for level, name in _LEVEL_NAMES.items():
    if logging.getLevelName(level) != name:
      logging.addLevelName(level, name)


def _make_handler(fname):
  if fname == 'STDOUT':
    return logging.StreamHandler(sys.stdout)
  if fname == 'STDERR':
    return logging.StreamHandler(sys.stderr)

  return logging.FileHandler(fname, mode='a')


def setup_logging(args):
  _add_levels()

  numeric_level = logging.getLevelName(args.log_level.upper())
  handlers = []
  if args.log_file:
    for fname in args.log_file.split(','):
      handler = _make_handler(fname)
      handler.setLevel(numeric_level)
      handler.setFormatter(Formatter(emit_extra=args.log_emit_extra))
      handlers.append(handler)

  logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

  set_current_level(numeric_level)


def basic_setup(**kwargs):
  args = _DEFAULT_ARGS.copy()
  args.update(kwargs)
  setup_logging(types.SimpleNamespace(**args))


_LEVEL = DEBUG

def set_current_level(level):
  global _LEVEL

  _LEVEL = level


def level_active(level):
  return _LEVEL <= level


_LOGGING_FRAMES = 1 if sys.version_info >= (3, 11) else 2

def log(level, msg, *args, **kwargs):
  kwargs['stacklevel'] = kwargs.get('stacklevel', 1) + _LOGGING_FRAMES
  _LOGGER.log(level, msg, *args, **kwargs)


def _nested_args(kwargs):
  kwargs['stacklevel'] = kwargs.get('stacklevel', 1) + 1

  return kwargs


def debug0(msg, *args, **kwargs):
  if DEBUG0 >= _LEVEL:
    log(DEBUG0, msg, *args, **_nested_args(kwargs))


def debug(msg, *args, **kwargs):
  if DEBUG >= _LEVEL:
    log(DEBUG, msg, *args, **_nested_args(kwargs))


def info(msg, *args, **kwargs):
  if INFO >= _LEVEL:
    log(INFO, msg, *args, **_nested_args(kwargs))


def warning(msg, *args, **kwargs):
  if WARNING >= _LEVEL:
    log(WARNING, msg, *args, **_nested_args(kwargs))


def error(msg, *args, **kwargs):
  if ERROR >= _LEVEL:
    log(ERROR, msg, *args, **_nested_args(kwargs))


def exception(e, *args, **kwargs):
  msg = kwargs.pop('exmsg', 'Exception')
  tb = traceback.format_exc()
  error(f'{msg}: {e}\n{tb}', *args, **_nested_args(kwargs))


def xraise(e, msg, *args, **kwargs):
  if kwargs.pop('logit', False):
    error(msg, *args, **_nested_args(kwargs))

  raise e(msg)
