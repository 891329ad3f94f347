import argparse
import logging
import pathlib
import sys

# Ensure repository root is on PYTHONPATH when running without installation.
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flockcore.config import load_config, build_simulator, obstacles_from_config

logger = logging.getLogger("run_sim")


def main():
    parser = argparse.ArgumentParser(description="Run drone flocking simulation.")
    parser.add_argument("--config", type=pathlib.Path, help="Path to YAML config.")
    parser.add_argument("--render", action="store_true", help="Enable live 3D rendering.")
    parser.add_argument("--steps", type=int, help="Override total simulation steps.")
    parser.add_argument("--dt", type=float, help="Override simulation timestep.")
    parser.add_argument("--seed", type=int, help="Seed for the initial swarm layout.")
    parser.add_argument("--workers", type=int, help="Worker threads per tick.")
    parser.add_argument("--render-every", type=int, dest="render_every", help="Render every N steps.")
    parser.add_argument("--metrics-every", type=int, default=50, dest="metrics_every", help="Log the latest metrics every N steps.")
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config)
    for key in ("steps", "dt", "seed", "workers", "render_every"):
        value = getattr(args, key)
        if value is not None:
            cfg = {**cfg, key: value}

    sim = build_simulator(cfg)
    renderer = None
    if args.render:
        from flockcore.viz.render_3d import SwarmRenderer3D

        renderer = SwarmRenderer3D(bounds=sim.bounds, obstacles=obstacles_from_config(cfg))

    for step in range(cfg["steps"]):
        state = sim.step()
        if step % args.metrics_every == 0 and sim.metrics.latest is not None:
            m = sim.metrics.latest
            logger.info(
                "step %d t=%.2f n=%d speed=%.2f spread=%.1f collisions=%d",
                step, m["t"], m["drone_count"], m["average_speed"],
                m["swarm_spread"]["avg_distance"], m["collisions"],
            )
        if renderer and step % cfg["render_every"] == 0:
            renderer.render(state, metrics=sim.metrics.latest)

    recent = sim.metrics.history(duration=10.0)
    if recent:
        logger.info(
            "last %.1fs: mean speed %.2f over %d samples",
            recent[-1]["t"] - recent[0]["t"],
            sum(m["average_speed"] for m in recent) / len(recent),
            len(recent),
        )


if __name__ == "__main__":
    main()
