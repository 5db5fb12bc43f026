"""
Tests for save DC resolution and recharge checks.
"""

import asyncio

import pytest

from rulecore.actions.recharge import roll_recharge
from rulecore.actions.saves import resolve_save_dc
from rulecore.core.config import RulesConfig
from rulecore.core.constants import SaveScaling
from rulecore.core.error_handling import ConfigurationError, RechargeNotConfigured
from rulecore.items import Feature, RechargeConfig, SaveConfig, Superpower


def test_spell_dc(ayla):
    assert resolve_save_dc(ayla.get_item("burning-hands"), ayla) == 15


def test_maneuver_dc(ayla):
    assert resolve_save_dc(ayla.get_item("precise-strike"), ayla) == 14


def test_alchemical_dc_uses_spell_dc(ayla):
    bomb = Superpower(
        id="bomb",
        name="Bomb",
        power_type="concoction",
        save=SaveConfig(type="dex", scaling=SaveScaling.ALCHEMICAL),
    )
    assert resolve_save_dc(bomb, ayla) == 15


def test_flat_dc(ayla):
    assert resolve_save_dc(ayla.get_item("fire-breath"), ayla) == 13


def test_base_save_dc_is_configurable(ayla):
    config = RulesConfig(base_save_dc=10)
    assert resolve_save_dc(ayla.get_item("burning-hands"), ayla, config) == 17


def test_no_save(ayla):
    assert resolve_save_dc(ayla.get_item("rapier"), ayla) is None
    assert resolve_save_dc(ayla.get_item("gold"), ayla) is None


def test_unowned_item(ayla):
    assert resolve_save_dc(ayla.get_item("fire-breath"), None) == 13
    assert resolve_save_dc(ayla.get_item("burning-hands"), None) is None


def test_unknown_scaling_is_a_configuration_error(ayla):
    broken = Feature(id="broken", name="Broken", save=SaveConfig(type="wis"))
    with pytest.raises(ConfigurationError):
        resolve_save_dc(broken, ayla)


# ============================================================================
# RECHARGE
# ============================================================================


@pytest.fixture
def breath() -> Feature:
    return Feature(
        id="breath",
        name="Breath",
        recharge=RechargeConfig(value=4, charged=False),
    )


@pytest.mark.parametrize(
    "die, success",
    [(1, False), (3, False), (4, True), (6, True)],
)
def test_recharge_threshold(breath, store, scripted_evaluator, die, success):
    result = asyncio.run(roll_recharge(breath, scripted_evaluator(die), store))
    assert result.success is success
    assert result.threshold == 4
    assert result.roll.value == die
    assert breath.recharge.charged is success


def test_recharge_failure_mutates_nothing(breath, store, scripted_evaluator):
    asyncio.run(roll_recharge(breath, scripted_evaluator(2), store))
    assert store.mutations == []


def test_recharge_flavor(breath, store, scripted_evaluator):
    result = asyncio.run(roll_recharge(breath, scripted_evaluator(5), store))
    assert result.flavor == "recharge check - success!"


def test_recharge_die_is_configurable(breath, store, scripted_evaluator):
    config = RulesConfig(recharge_die="1d4")
    result = asyncio.run(
        roll_recharge(breath, scripted_evaluator(4), store, config=config)
    )
    assert result.success


def test_recharge_is_logged(mocker, breath, store, scripted_evaluator):
    mock_log = mocker.patch("rulecore.actions.recharge.log_debug")
    asyncio.run(roll_recharge(breath, scripted_evaluator(3), store))
    mock_log.assert_called_once()
    assert mock_log.call_args.args[1] == {"item": "Breath", "success": False}


def test_recharge_not_configured(ayla, store, scripted_evaluator):
    with pytest.raises(RechargeNotConfigured):
        asyncio.run(
            roll_recharge(ayla.get_item("rapier"), scripted_evaluator(), store)
        )
    with pytest.raises(RechargeNotConfigured):
        asyncio.run(roll_recharge(ayla.get_item("gold"), scripted_evaluator(), store))
