"""Tests for the console transcript and the forecast script."""

import importlib.util
import logging
from pathlib import Path

import pytest

from seird.convergence import HalvingRecord
from seird.params import N_POP, SEIRDState, x0
from seird.report import (
    format_forecast,
    format_halving,
    format_initial_conditions,
    format_population_check,
    population_check,
)

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "forecast.py"


@pytest.fixture
def forecast_script():
    spec = importlib.util.spec_from_file_location("forecast", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    yield module
    seird_logger = logging.getLogger("seird")
    for handler in list(seird_logger.handlers):
        seird_logger.removeHandler(handler)
    seird_logger.setLevel(logging.NOTSET)


# ============================================================
# population_check
# ============================================================

def test_population_check_reference_state():
    assert population_check(x0, N_POP)


def test_population_check_rounds_total():
    state = SEIRDState(S=N_POP - 100.4, E=50.0, I=25.0, R=25.0, D=0.0)
    assert population_check(state, N_POP)


def test_population_check_detects_drift():
    state = SEIRDState(S=N_POP - 98.0, E=99.0, I=0.0, R=0.0, D=0.0)
    assert not population_check(state, N_POP)
    assert "Error" in format_population_check(state, N_POP)
    assert f"!= N0 = {N_POP}" in format_population_check(state, N_POP)


def test_population_check_message_on_success():
    text = format_population_check(x0, N_POP)
    assert f"N = {N_POP} = N0 = {N_POP}" in text


# ============================================================
# formatting
# ============================================================

def test_format_initial_conditions():
    text = format_initial_conditions(x0, N_POP, 0, 90)
    assert f"N0 = {N_POP}" in text
    assert "S0 = 2798047" in text
    assert "E0 = 99" in text
    assert "I0 = 0" in text
    assert "R0 = 24" in text
    assert "D0 = 0" in text
    assert "a = 0" in text and "b = 90" in text


def test_format_halving():
    record = HalvingRecord(iteration=3, delta=0.0123456789, h=0.125)
    assert format_halving(record) == " 3: delta = 0.012346, h = 0.125000"


def test_format_forecast_floors_values():
    state = SEIRDState(S=10.9, E=5.5, I=2.99, R=1.01, D=0.6)
    text = format_forecast(state, 90)
    assert "day 90" in text
    assert " S = 10 " in text
    assert " E = 5 " in text
    assert " I = 2 " in text
    assert " R = 1 " in text
    assert " D = 0 " in text


# ============================================================
# scripts/forecast.py
# ============================================================

def test_forecast_script_short_horizon(forecast_script, capsys):
    assert forecast_script.main(["--end", "20"]) == 0
    out = capsys.readouterr().out
    assert "Solving the system" in out
    assert " 1: delta = " in out
    assert "forecast for day 20" in out
    assert f"N0 = {N_POP}" in out


def test_forecast_script_reports_non_convergence(forecast_script, capsys):
    code = forecast_script.main(["--end", "20", "--eps", "0", "--max-halvings", "2"])
    assert code == 1
    assert "No convergence after 2 halvings" in capsys.readouterr().out


def test_forecast_script_exact_horizon(forecast_script, capsys):
    assert forecast_script.main(["--end", "20", "--no-overshoot"]) == 0
    assert "forecast for day 20" in capsys.readouterr().out
