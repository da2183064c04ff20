"""Mamdani fuzzy controller: (temperature, occupancy) -> fan speed in percent.

Pipeline: fuzzify both inputs, fire the fixed 3x3 rule table with min-conjunction,
clip each output set by its strongest rule, union the clipped sets and take the
centroid over 0..100. ``sample_surface`` runs the pipeline over the display grid.
"""
import logging
import math
from enum import IntEnum
from typing import List, NamedTuple

import numpy as np

from membership import build_membership, centroid, clip, union

log = logging.getLogger(__name__)


class LinguisticSet(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def label(self):
        return self.name.capitalize()


class MembershipDegree(NamedTuple):
    """Degree per linguistic set; index with a ``LinguisticSet``."""
    low: float
    medium: float
    high: float


class Rule(NamedTuple):
    name: str
    temperature: LinguisticSet
    occupancy: LinguisticSet
    output: LinguisticSet


class RuleResult(NamedTuple):
    name: str
    firing_strength: float
    output_set: LinguisticSet


class EvaluationResult(NamedTuple):
    speed: float
    active_rules: List[RuleResult]


class SurfaceGrid(NamedTuple):
    temperature_axis: List[float]
    occupancy_axis: List[float]
    speed_matrix: List[List[float]]   # [occupancy][temperature]


L, M, H = LinguisticSet.LOW, LinguisticSet.MEDIUM, LinguisticSet.HIGH

# --- fuzzy sets: (shape, params) ---
TEMPERATURE_SETS = {
    L: ("Trapezoidal", (-10, 10, 18, 22)),   # cold
    M: ("Triangular", (20, 24, 28)),         # comfortable
    H: ("Trapezoidal", (26, 30, 50, 50)),    # hot
}
OCCUPANCY_SETS = {
    L: ("Trapezoidal", (-1, 0, 3, 6)),
    M: ("Triangular", (4, 8, 12)),
    H: ("Trapezoidal", (10, 14, 25, 25)),
}
OUTPUT_SETS = {
    L: ("Trapezoidal", (-10, 0, 30, 50)),
    M: ("Triangular", (30, 50, 70)),
    H: ("Trapezoidal", (50, 80, 110, 110)),
}

OUTPUT_UNIVERSE = np.arange(0, 101, 1, dtype=float)

# (start, stop, step), both ends inclusive
TEMPERATURE_AXIS = (10, 40, 1)
OCCUPANCY_AXIS = (0, 20, 1)

ACTIVE_RULE_THRESHOLD = 0.01

RULES = (
    Rule("Cold & Empty", L, L, L),
    Rule("Cold & Some People", L, M, L),
    Rule("Cold & Crowded", L, H, M),            # body heat compensation
    Rule("Comfort & Empty", M, L, L),
    Rule("Comfort & Some People", M, M, M),
    Rule("Comfort & Crowded", M, H, H),
    Rule("Hot & Empty", H, L, M),
    Rule("Hot & Some People", H, M, H),
    Rule("Hot & Crowded", H, H, H),
)


# --- fuzzification ---
def _check_finite(name, value):
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}.")
    return float(value)

def _fuzzify(x, sets):
    return MembershipDegree(*(build_membership(x, *sets[s]) for s in LinguisticSet))

def temperature_membership(temp_celsius):
    return _fuzzify(_check_finite("temperature", temp_celsius), TEMPERATURE_SETS)

def occupancy_membership(person_count):
    return _fuzzify(_check_finite("occupancy", person_count), OCCUPANCY_SETS)


# --- inference ---
def evaluate_rules(temp_degree, occ_degree):
    """Fire every rule in table order; strength is min(temperature, occupancy)."""
    return [
        RuleResult(r.name, min(temp_degree[r.temperature], occ_degree[r.occupancy]), r.output)
        for r in RULES
    ]

def clip_levels(rule_results):
    """Strongest firing per output set (0 for a set no rule reached)."""
    levels = [0.0, 0.0, 0.0]
    for r in rule_results:
        if r.firing_strength > levels[r.output_set]:
            levels[r.output_set] = r.firing_strength
    return MembershipDegree(*levels)

def aggregate(rule_results):
    """Clipped output sets unioned over the output universe -> (U, mu)."""
    levels = clip_levels(rule_results)
    U = OUTPUT_UNIVERSE
    clipped = [clip(levels[s], build_membership(U, *OUTPUT_SETS[s])) for s in LinguisticSet]
    return U, union(*clipped)

def defuzzify(U, mu):
    return centroid(U, mu, empty=0.0)


def evaluate(temperature, occupancy):
    temp_degree = temperature_membership(temperature)
    occ_degree = occupancy_membership(occupancy)
    results = evaluate_rules(temp_degree, occ_degree)

    U, mu = aggregate(results)
    speed = defuzzify(U, mu)
    if not np.any(mu):
        log.info("No rule fired for temperature=%s occupancy=%s. Outputting 0.", temperature, occupancy)

    active = [r for r in results if r.firing_strength > ACTIVE_RULE_THRESHOLD]
    log.debug("evaluate(%s, %s) -> %.4f (%d active rules)", temperature, occupancy, speed, len(active))
    return EvaluationResult(speed, active)


# --- surface ---
def _axis(start, stop, step):
    return [float(v) for v in np.arange(start, stop + step, step)]

def sample_surface():
    """Speed over the display grid, rows by occupancy and columns by temperature."""
    temps = _axis(*TEMPERATURE_AXIS)
    occs = _axis(*OCCUPANCY_AXIS)
    matrix = [[evaluate(t, o).speed for t in temps] for o in occs]
    log.debug("Sampled control surface: %d x %d", len(occs), len(temps))
    return SurfaceGrid(temps, occs, matrix)
