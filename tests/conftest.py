import pytest

from config import default_config
from engine import build_new_save
from macro import continue_to_level2
from models import Country, Leader


class ScriptedRng:
    """Stands in for random.Random; replays fixed values from random()."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        self.calls += 1
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]

    def randint(self, lo, hi):
        return min(hi, lo + int(self.random() * (hi - lo + 1)))


@pytest.fixture(scope="session")
def config():
    return default_config()


@pytest.fixture
def save(config):
    return build_new_save(
        config,
        Country(base_name="Aurelia", state_type_id="REPUBLIC", geography="coastal"),
        Leader(name="Ana Rojas", gender="FEMALE", role_id="PRESIDENT"),
        preset_id="BALANCED",
    )


@pytest.fixture
def level2_save(config, save):
    save.level1_complete = True
    result = continue_to_level2(save, config)
    assert result["ok"]
    save.news = []
    return save


@pytest.fixture
def rng():
    return ScriptedRng
