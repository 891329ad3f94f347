import copy
import logging
import pathlib

import numpy as np
import yaml

from .core.env import Obstacle, WorldBounds
from .core.params import FlockingParams
from .core.metrics import MetricsCollector
from .core.simulator import Simulator
from .core.vector import Vector3
from .policies.boids import BoidsPolicy

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised for structurally malformed configuration (never for numeric sanity)."""


DEFAULT_CONFIG = {
    "dt": 0.1,
    "steps": 1000,
    "render_every": 2,
    "seed": None,
    "workers": 1,
    "world": {
        "bounds": [1000.0, 1000.0, 500.0],
        "margin": 50.0,
        "clamp": True,
        "avoidance_distance": 20.0,
        "obstacles": [
            {"center": [-200.0, 150.0, 120.0], "radius": 40.0},
            {"center": [150.0, -100.0, 250.0], "radius": 60.0},
            {"center": [0.0, 0.0, 200.0], "radius": 30.0},
        ],
    },
    "flocking": FlockingParams().to_dict(),
    "policy": {"type": "boids"},
    "agents": {"count": 30, "max_count": 50},
    "metrics": {"history_size": 300, "every": 10, "collision_threshold": 1.0},
}


def deep_update(base: dict, override: dict) -> dict:
    """
    Layer override on top of base and return a fresh tree. Nested sections
    (world, flocking, agents, ...) merge key by key; anything else in
    override, lists of obstacles included, replaces the base value. Neither
    input is modified and the result shares no containers with them.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_update(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _read_mapping(path: pathlib.Path) -> dict:
    raw = yaml.safe_load(path.read_text())
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping, got {type(raw).__name__}")
    return raw


def load_config(path: pathlib.Path | None) -> dict:
    """
    Resolve a simulation config. A file may name a parent through
    `inherits:` (relative to its own directory); the chain bottoms out at
    DEFAULT_CONFIG. Always returns a private copy the caller may mutate.
    """
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    path = pathlib.Path(path)
    overrides = _read_mapping(path)
    parent = overrides.pop("inherits", None)
    if parent is None:
        base = DEFAULT_CONFIG
    else:
        logger.debug("%s inherits from %s", path, path.parent / parent)
        base = load_config(path.parent / parent)
    return deep_update(base, overrides)


def _vec3(value, what: str) -> Vector3:
    try:
        return Vector3.of(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{what} must have three numeric components, got {value!r}") from exc


def params_from_config(cfg: dict) -> FlockingParams:
    return FlockingParams.from_dict(cfg.get("flocking"))


def bounds_from_config(cfg: dict) -> WorldBounds:
    world = cfg.get("world", {})
    ext = _vec3(world.get("bounds", [1000.0, 1000.0, 500.0]), "world.bounds")
    return WorldBounds(ext.x, ext.y, ext.z, float(world.get("margin", 50.0)))


def obstacles_from_config(cfg: dict) -> list[Obstacle]:
    obstacles = []
    for idx, o in enumerate(cfg.get("world", {}).get("obstacles", []) or []):
        if "center" not in o:
            raise ConfigError(f"world.obstacles[{idx}] has no center")
        center = _vec3(o["center"], f"world.obstacles[{idx}].center")
        obstacles.append(Obstacle(center=center, radius=float(o.get("radius", 1.0))))
    return obstacles


def make_policy(cfg: dict):
    policy_type = cfg.get("policy", {}).get("type", "boids")
    if policy_type != "boids":
        raise ConfigError(f"unknown policy type {policy_type!r}")
    bounds = bounds_from_config(cfg)
    return BoidsPolicy(
        params=params_from_config(cfg),
        bounds=bounds,
        obstacles=obstacles_from_config(cfg),
        avoidance_distance=float(cfg.get("world", {}).get("avoidance_distance", 20.0)),
    )


def make_metrics(cfg: dict) -> MetricsCollector:
    m = cfg.get("metrics", {})
    return MetricsCollector(
        max_history_size=int(m.get("history_size", 300)),
        collision_threshold=float(m.get("collision_threshold", 1.0)),
    )


def build_simulator(cfg: dict, rng=None) -> Simulator:
    rng = rng or np.random.default_rng(cfg.get("seed"))
    policy = make_policy(cfg)
    agents_cfg = cfg.get("agents", {})
    max_count = agents_cfg.get("max_count", 50)
    # max_speed is left unset so the simulator tracks live parameter updates
    sim = Simulator(
        [],
        policy,
        dt=float(cfg["dt"]),
        bounds=policy.bounds,
        clamp_to_bounds=bool(cfg.get("world", {}).get("clamp", True)),
        workers=int(cfg.get("workers", 1)),
        max_agents=None if max_count is None else int(max_count),
        metrics=make_metrics(cfg),
        metrics_every=int(cfg.get("metrics", {}).get("every", 1)),
    )
    count = int(agents_cfg.get("count", 0))
    if count > 0:
        sim.spawn(count, rng=rng)
    return sim
