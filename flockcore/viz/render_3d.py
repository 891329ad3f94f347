import matplotlib.pyplot as plt
import numpy as np

from ..core.env import WorldBounds
from ..core.state import SwarmState


class SwarmRenderer3D:
    def __init__(self, bounds: WorldBounds, obstacles=None):
        self.bounds = bounds
        self.obstacles = obstacles or []
        self.fig = plt.figure(figsize=(8, 7))
        self.ax = self.fig.add_subplot(projection="3d")
        backend = plt.get_backend().lower()
        self._interactive = backend not in {"agg", "pdf", "svg"}
        if self._interactive:
            plt.ion()
        self.agent_scat = None
        self.ax.set_xlim(-bounds.x / 2.0, bounds.x / 2.0)
        self.ax.set_ylim(-bounds.y / 2.0, bounds.y / 2.0)
        self.ax.set_zlim(0.0, bounds.z)
        self._draw_static()

    def _draw_static(self):
        # obstacles are static, drawn once
        u, v = np.mgrid[0 : 2 * np.pi : 16j, 0 : np.pi : 8j]
        for idx, obs in enumerate(self.obstacles):
            c = obs.center
            xs = c.x + obs.radius * np.cos(u) * np.sin(v)
            ys = c.y + obs.radius * np.sin(u) * np.sin(v)
            zs = c.z + obs.radius * np.cos(v)
            self.ax.plot_wireframe(xs, ys, zs, color="gray", alpha=0.3, linewidth=0.5)
            self.ax.text(c.x, c.y, c.z, f"O{idx}", fontsize=8, color="black")

    def render(self, swarm_state: SwarmState, metrics=None):
        positions = np.array([a.position.as_array() for a in swarm_state.agents.values()]).reshape(-1, 3)
        if self.agent_scat is None:
            self.agent_scat = self.ax.scatter(
                positions[:, 0],
                positions[:, 1],
                positions[:, 2],
                c="blue",
                s=12,
                alpha=0.8,
                depthshade=True,
            )
        else:
            self.agent_scat._offsets3d = (positions[:, 0], positions[:, 1], positions[:, 2])
        title = f"t={swarm_state.t:.2f} | n={len(swarm_state.agents)}"
        if metrics:
            title += f" | spread {metrics['swarm_spread']['avg_distance']:.1f}"
        self.ax.set_title(title)
        if self._interactive:
            plt.pause(0.001)
