"""
Console transcript for the SEIR-D forecast.

Formats the initial data, the per-halving diagnostics and the forecast,
and checks that the whole population is accounted for. Compartments are
printed floored to whole people.
"""
import math

from .convergence import HalvingRecord
from .params import SEIRDState


def population_check(state: SEIRDState, n_pop: int) -> bool:
    """True if round(S + E + I + R + D) equals the initial population."""
    return round(state.total) == n_pop


def format_initial_conditions(
    state: SEIRDState,
    n_pop: int,
    start: int,
    end: int,
) -> str:
    lines = [
        "SEIR-D model input data",
        f" N0 = {n_pop} (total population)",
        f" S0 = {math.floor(state.S)} (susceptible)",
        f" E0 = {math.floor(state.E)} (exposed, asymptomatic)",
        f" I0 = {math.floor(state.I)} (detected / symptomatic cases)",
        f" R0 = {math.floor(state.R)} (recovered)",
        f" D0 = {math.floor(state.D)} (deceased)",
        f" a = {start} (first day), b = {end} (last day)",
    ]
    return "\n".join(lines)


def format_halving(record: HalvingRecord) -> str:
    return f" {record.iteration}: delta = {record.delta:f}, h = {record.h:f}"


def format_forecast(state: SEIRDState, day: int) -> str:
    lines = [
        f"SEIR-D forecast for day {day}",
        f" S = {math.floor(state.S)} (susceptible)",
        f" E = {math.floor(state.E)} (exposed, asymptomatic)",
        f" I = {math.floor(state.I)} (detected / symptomatic cases)",
        f" R = {math.floor(state.R)} (recovered)",
        f" D = {math.floor(state.D)} (deceased)",
    ]
    return "\n".join(lines)


def format_population_check(state: SEIRDState, n_pop: int) -> str:
    n = round(state.total)
    if population_check(state, n_pop):
        return f" N = {n} = N0 = {n_pop}\n The whole population is accounted for."
    return f" Error!\n N = {n} != N0 = {n_pop}"
