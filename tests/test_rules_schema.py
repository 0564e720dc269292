import json

import pytest
from pydantic import ValidationError

from mines.rules_schema import RuleSet, load_rules


def test_default_rules():
    rules = RuleSet()

    assert rules.grid_size == 5
    assert rules.house_edge == 0.05
    assert rules.total_cells == 25
    assert rules.max_mine_count == 24
    assert rules.starting_balance == 1000
    assert rules.history_limit == 50


@pytest.mark.parametrize(
    "overrides",
    [
        {"grid_size": 1},
        {"grid_size": 7},
        {"house_edge": -0.01},
        {"min_bet": 0},
        {"default_mine_count": 25},
        {"history_limit": 0},
        {"grid_size": 6, "house_edge": 0.06},
    ],
)
def test_invalid_rules_rejected(overrides):
    with pytest.raises(ValidationError):
        RuleSet(**overrides)


def test_load_rules_from_file(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"grid_size": 4, "default_mine_count": 2, "starting_balance": 200}))

    rules = load_rules(path)

    assert rules.grid_size == 4
    assert rules.total_cells == 16
    assert rules.starting_balance == 200


def test_load_rules_defaults():
    assert load_rules() == RuleSet()
