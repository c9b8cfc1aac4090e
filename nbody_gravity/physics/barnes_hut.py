"""Barnes-Hut 3D octree for O(N log N) gravity.

The tree is rebuilt from scratch every step. Nodes live in flat lists (an
arena) and refer to their children by index; ``-1`` marks an absent child.
Each node is in one of three states:

* EMPTY: no body yet (only a fresh root can be observed like this)
* LEAF: holds real bodies by index; normally exactly one, more only when
  coincident bodies reach ``max_depth`` and cannot be separated
* INTERNAL: summed mass and mass-weighted centroid of its subtree

Insertion is sequential. Once built, the tree is only read, so traversal
for different target bodies can run concurrently; each traversal writes
only to its target's accumulator row.
"""

from enum import IntEnum
from typing import Iterable, List, Optional, Tuple
import numpy as np
from nbody_gravity.physics.body import BodyArray
from nbody_gravity.physics.interactions import direct_interaction
from nbody_gravity.physics.octant import Octant
from nbody_gravity.physics.vector import magnitude
from nbody_gravity.utils.config import SimulationConfig

NO_CHILD = -1


class NodeState(IntEnum):
    EMPTY = 0
    LEAF = 1
    INTERNAL = 2


class BarnesHutTree:
    """Octree over a ``BodyArray`` with incremental center-of-mass merging."""

    def __init__(self, bodies: BodyArray, root: Octant, config: SimulationConfig):
        """Create a tree with an empty root.

        Args:
            bodies: Bodies referenced by index; positions must not change
                while the tree is alive
            root: Region covered by the root node
            config: Physical constants, opening angle and depth limit
        """
        self.bodies = bodies
        self.config = config
        self.theta = config.theta
        self.max_depth = config.max_depth

        self._octant: List[Octant] = []
        self._state: List[NodeState] = []
        self._mass: List[float] = []
        self._com: List[np.ndarray] = []
        self._members: List[List[int]] = []
        self._count: List[int] = []
        self._children: List[List[int]] = []
        self._depth: List[int] = []
        self.inserted: List[int] = []

        self._new_node(root, 0)

    @classmethod
    def build(
        cls,
        bodies: BodyArray,
        config: SimulationConfig,
        root: Optional[Octant] = None,
        indices: Optional[Iterable[int]] = None,
    ) -> "BarnesHutTree":
        """Build a tree from every non-central body inside the root.

        Args:
            bodies: Body array
            config: Simulation configuration
            root: Root octant (default: from ``config.root_center`` and
                ``config.tree_half_length``)
            indices: Bodies to insert (default: all non-central bodies)

        Returns:
            Built tree; ``tree.inserted`` lists the bodies it holds
        """
        if root is None:
            root = Octant(config.root_center, config.tree_half_length)
        tree = cls(bodies, root, config)
        if indices is None:
            indices = bodies.non_central_indices()
        for i in indices:
            if root.contains(bodies.positions[i]):
                tree.insert(int(i))
        return tree

    def _new_node(self, octant: Octant, depth: int) -> int:
        self._octant.append(octant)
        self._state.append(NodeState.EMPTY)
        self._mass.append(0.0)
        self._com.append(np.zeros(3))
        self._members.append([])
        self._count.append(0)
        self._children.append([NO_CHILD] * 8)
        self._depth.append(depth)
        return len(self._state) - 1

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def insert(self, body_index: int):
        """Insert a body below the root.

        Raises:
            ValueError: If the body lies outside the root octant
        """
        position = self.bodies.positions[body_index]
        if not self._octant[0].contains(position):
            raise ValueError(
                f"Body {body_index} at {tuple(position)} lies outside the root {self._octant[0]!r}"
            )
        self._insert(0, body_index)
        self.inserted.append(body_index)

    def _insert(self, node: int, body_index: int):
        state = self._state[node]

        if state == NodeState.EMPTY:
            self._state[node] = NodeState.LEAF
            self._members[node] = [body_index]
            self._count[node] = 1
            self._mass[node] = float(self.bodies.masses[body_index])
            self._com[node] = self.bodies.positions[body_index].copy()
            return

        if state == NodeState.LEAF:
            if self._depth[node] >= self.max_depth:
                # Too deep to separate; keep coincident bodies together
                self._merge(node, body_index)
                self._members[node].append(body_index)
                return
            # The leaf aggregate is already its body's mass and position,
            # so the resident body is pushed down without re-merging
            (resident,) = self._members[node]
            self._members[node] = []
            self._state[node] = NodeState.INTERNAL
            self._route(node, resident)
            self._insert(node, body_index)
            return

        self._merge(node, body_index)
        self._route(node, body_index)

    def _merge(self, node: int, body_index: int):
        """Fold a body into the node's summed mass and centroid."""
        m = float(self.bodies.masses[body_index])
        pos = self.bodies.positions[body_index]
        mass = self._mass[node]
        massum = mass + m
        if massum == 0.0:
            self._com[node] = (self._com[node] + pos) / 2.0
        else:
            self._com[node] = (pos * m + self._com[node] * mass) / massum
        self._mass[node] = massum
        self._count[node] += 1

    def _route(self, node: int, body_index: int):
        """Insert a body into the child of ``node`` that contains it."""
        which, octant = self._octant[node].child_containing(self.bodies.positions[body_index])
        child = self._children[node][which]
        if child == NO_CHILD:
            child = self._new_node(octant, self._depth[node] + 1)
            self._children[node][which] = child
        self._insert(child, body_index)

    # ------------------------------------------------------------------
    # Force accumulation
    # ------------------------------------------------------------------

    def interact(self, target: int) -> int:
        """Accumulate the tree's pull on one body.

        Only ``bodies.accelerations[target]`` is written.

        Args:
            target: Body index

        Returns:
            Number of bodies whose pull came through an aggregate rather
            than individually
        """
        acc = self.bodies.accelerations[target]
        return self._interact(
            0,
            target,
            self.bodies.positions[target],
            self.bodies.velocities[target],
            float(self.bodies.masses[target]),
            acc,
        )

    def _interact(
        self,
        node: int,
        target: int,
        pos: np.ndarray,
        vel: np.ndarray,
        mass: float,
        acc: np.ndarray,
    ) -> int:
        state = self._state[node]
        if state == NodeState.EMPTY:
            return 0

        bodies = self.bodies
        if state == NodeState.LEAF:
            for member in self._members[node]:
                if member == target:
                    continue
                direct_interaction(
                    acc,
                    pos,
                    vel,
                    mass,
                    bodies.positions[member],
                    float(bodies.masses[member]),
                    self.config,
                    source_vel=bodies.velocities[member],
                    single=True,
                )
            return 0

        com = self._com[node]
        dist = magnitude(com - pos)
        if dist > 0.0 and self._octant[node].side_length / dist < self.theta:
            direct_interaction(acc, pos, vel, mass, com, self._mass[node], self.config, single=False)
            return self._count[node]

        # Too close (or centroid on top of the target): open the node
        approximated = 0
        for child in self._children[node]:
            if child != NO_CHILD:
                approximated += self._interact(child, target, pos, vel, mass, acc)
        return approximated

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        return len(self._state)

    @property
    def root(self) -> int:
        return 0

    @property
    def root_octant(self) -> Octant:
        return self._octant[0]

    def state(self, node: int) -> NodeState:
        return self._state[node]

    def octant(self, node: int) -> Octant:
        return self._octant[node]

    def aggregate(self, node: int) -> Tuple[float, np.ndarray]:
        """(mass, center of mass) represented by a node."""
        return self._mass[node], self._com[node].copy()

    def body_count(self, node: int) -> int:
        """Number of bodies stored at or below a node."""
        return self._count[node]

    def children(self, node: int) -> List[int]:
        """Indices of present children."""
        return [c for c in self._children[node] if c != NO_CHILD]

    def members(self, node: int) -> List[int]:
        """Bodies held directly by a leaf."""
        return list(self._members[node])

    def subtree_bodies(self, node: int) -> List[int]:
        """Every body stored at or below ``node``."""
        out: List[int] = []
        stack = [node]
        while stack:
            n = stack.pop()
            out.extend(self._members[n])
            stack.extend(self.children(n))
        return out

    def depth(self) -> int:
        """Deepest level in use (root is 0)."""
        return max(self._depth)

    def summary(self) -> List[Tuple[int, int, float, Tuple[float, float, float]]]:
        """(depth, state, mass, centroid) for every node in creation order."""
        return [
            (self._depth[n], int(self._state[n]), self._mass[n], tuple(self._com[n]))
            for n in range(self.node_count)
        ]
