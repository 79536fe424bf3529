from real48 import env_config as envc


class _Config(envc.EnvConfig):

  ENV_PREFIX = 'TEST_R48_'

  count = 3
  ratio = 0.5
  name = 'base'


def test_getenv(monkeypatch):
  monkeypatch.setenv('TEST_R48_VALUE', '12')
  monkeypatch.delenv('TEST_R48_MISSING', raising=False)

  assert envc.getenv('TEST_R48_VALUE', dtype=int) == 12
  assert envc.getenv('TEST_R48_VALUE') == '12'
  assert envc.getenv('TEST_R48_MISSING') is None
  assert envc.getenv('TEST_R48_MISSING', dtype=float, defval='2.5') == 2.5


def test_to_type():
  assert envc.to_type('[1, 2]', list) == [1, 2]
  assert envc.to_type('true', bool) is True
  assert envc.to_type(7, float) == 7.0


def test_defaults():
  config = _Config(args=[])

  assert (config.count, config.ratio, config.name) == (3, 0.5, 'base')


def test_env_and_args_override(monkeypatch):
  monkeypatch.setenv('TEST_R48_COUNT', '10')
  monkeypatch.setenv('TEST_R48_RATIO', '0.25')

  config = _Config(args=['--count', '11', '--unrelated', 'x'])

  assert config.count == 11
  assert config.ratio == 0.25
  assert 'count=11' in repr(config)
