"""Main simulator controller."""

from typing import Callable, Optional
import time
import numpy as np
from nbody_gravity.physics.barnes_hut import BarnesHutTree
from nbody_gravity.physics.body import BodyArray
from nbody_gravity.physics.diagnostics import Diagnostics
from nbody_gravity.physics.integrators.base import Integrator
from nbody_gravity.physics.integrators.euler import EulerIntegrator
from nbody_gravity.physics.interactions import central_pass_chunk
from nbody_gravity.physics.parallel import WorkerPool
from nbody_gravity.utils.config import SimulationConfig


class NumericalInstabilityError(FloatingPointError):
    """Positions or velocities stopped being finite after a step."""


class Simulator:
    """Main simulation controller.

    Each step runs four phases over the body array, in place:

    1. exact interaction of the central body with every other body
    2. sequential build of a fresh Barnes-Hut tree over the other bodies
    3. parallel tree traversal, one per body, accumulating approximate forces
    4. integration of the accumulated increments

    The tree is a local of ``step`` and is dropped before it returns.
    """

    def __init__(
        self,
        bodies: BodyArray,
        config: Optional[SimulationConfig] = None,
        integrator: Optional[Integrator] = None,
        renderer=None,
    ):
        """Initialize simulator.

        Args:
            bodies: Body array, mutated in place every step
            config: Simulation configuration (default: SimulationConfig())
            integrator: Integrator to use (default: Euler)
            renderer: Optional object with ``render(snapshot, step)``
        """
        self.bodies = bodies
        self.config = config or SimulationConfig()
        self.integrator = integrator or EulerIntegrator()
        self.renderer = renderer
        self.pool = WorkerPool(self.config.worker_count)

        self.time = 0.0
        self.step_count = 0
        self.frames_rendered = 0

        # Last tree statistics
        self.last_tree_nodes = 0
        self.last_tree_depth = 0
        self.last_tree_bodies = 0
        self.last_approximated = 0

        # Profiling: last step timing (ms)
        self._profile: bool = False
        self._timing = {}

        # Callbacks
        self.on_step_callback: Optional[Callable] = None
        self.on_render_callback: Optional[Callable] = None

    def set_profiling(self, enabled: bool = True):
        """Enable or disable per-phase step timing."""
        self._profile = enabled

    def get_timing(self) -> dict:
        """Return last step timing in ms per phase."""
        return dict(self._timing)

    def central_pass(self):
        """Exact interaction between the central body and every other body.

        Chunks write their own bodies' rows and return a partial increment
        for the central body; the partials are summed here afterwards.
        """
        indices = self.bodies.non_central_indices()
        partials = self.pool.map_chunks(
            lambda chunk: central_pass_chunk(self.bodies, chunk, self.config),
            indices,
        )
        if partials:
            self.bodies.accelerations[self.bodies.central_index] += np.sum(partials, axis=0)

    def build_tree(self) -> BarnesHutTree:
        """Build this step's octree (sequential)."""
        return BarnesHutTree.build(self.bodies, self.config)

    def tree_pass(self, tree: BarnesHutTree) -> int:
        """Traverse the tree once per inserted body, in parallel.

        Returns:
            Total number of bodies whose pull came through an aggregate
        """
        indices = np.asarray(tree.inserted, dtype=np.int64)
        counts = self.pool.map_chunks(
            lambda chunk: sum(tree.interact(int(i)) for i in chunk),
            indices,
        )
        return int(sum(counts))

    def step(self):
        """Perform one simulation step."""
        t0 = time.perf_counter()
        self.central_pass()
        t1 = time.perf_counter()
        tree = self.build_tree()
        t2 = time.perf_counter()
        self.last_approximated = self.tree_pass(tree)
        self.last_tree_nodes = tree.node_count
        self.last_tree_depth = tree.depth()
        self.last_tree_bodies = len(tree.inserted)
        del tree
        t3 = time.perf_counter()

        if self.config.debug:
            self._log_step_state()
        self.integrator.step(self.bodies, self.config)
        self._check_finite()
        t4 = time.perf_counter()
        if self._profile:
            self._timing = {
                "central_ms": (t1 - t0) * 1000.0,
                "build_ms": (t2 - t1) * 1000.0,
                "tree_ms": (t3 - t2) * 1000.0,
                "integrator_ms": (t4 - t3) * 1000.0,
            }

        self.time += self.config.time_step
        self.step_count += 1

        if self.step_count % self.config.render_interval == 0:
            self.render()
        if self.on_step_callback:
            self.on_step_callback(self)

    def render(self):
        """Hand a read-only snapshot of the bodies to the renderer."""
        if self.renderer is None and self.on_render_callback is None:
            return
        snapshot = self.bodies.snapshot()
        if self.renderer is not None:
            self.renderer.render(snapshot, self.step_count)
        if self.on_render_callback:
            self.on_render_callback(snapshot, self.step_count)
        self.frames_rendered += 1

    def _check_finite(self):
        """Stop before a corrupted state reaches the next step.

        Raises:
            NumericalInstabilityError: If any position or velocity is NaN/inf
        """
        for name in ("positions", "velocities"):
            values = getattr(self.bodies, name)
            if not np.all(np.isfinite(values)):
                bad = np.unique(np.nonzero(~np.isfinite(values))[0])
                raise NumericalInstabilityError(
                    f"Non-finite {name} after step {self.step_count + 1} "
                    f"for {len(bad)} bodies (first: {int(bad[0])})"
                )

    def _log_step_state(self):
        """Print central acceleration, tree stats and disk mass balance."""
        diagnostics = Diagnostics(self.bodies)
        acc = diagnostics.central_acceleration()
        above, below = diagnostics.mass_balance()
        ratio = below / above if above > 0 else float("inf")
        print(f"[Star] step={self.step_count + 1} ax={acc[0]:.6e} ay={acc[1]:.6e}")
        print(f"[Tree] nodes={self.last_tree_nodes} depth={self.last_tree_depth} "
              f"bodies={self.last_tree_bodies} approximated={self.last_approximated}")
        print(f"[Diag] mass_below={below:.6e} mass_above={above:.6e} ratio={ratio:.4f}")

    def run(self, n_steps: Optional[int] = None):
        """Run simulation for a fixed number of steps.

        Renders the initial state first when nothing has run yet.

        Args:
            n_steps: Number of steps to run (default: config.n_steps)
        """
        if n_steps is None:
            n_steps = self.config.n_steps
        if self.step_count == 0:
            self.render()
        for _ in range(n_steps):
            self.step()

    def get_state(self):
        """Get current simulation state.

        Returns:
            Tuple of (positions, velocities, masses, time, step_count)
        """
        pos, vel, mass = self.bodies.snapshot()
        return pos, vel, mass, self.time, self.step_count

    def close(self):
        """Release worker threads and the renderer."""
        self.pool.close()
        if self.renderer is not None:
            self.renderer.close()

    def __enter__(self) -> "Simulator":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
