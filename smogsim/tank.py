"""The tank model that every player drives, and its placement in a solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

from .link import Connection, RigidLink
from .model import SHIFT_Y, Layer, LinkSpec, Model, PointSpec, build_model, chain_model
from .particle import METAL, MOTOR, SPIKE, Particle
from .solver import Solver
from .vector import Vec2, Vec4

CENTER_HP = 1.0
CENTER_ELASTICITY = 100.0

MUZZLE_ELASTICITY = 100.0

TREAD_ELASTICITY = 30.0
TREAD_HP = 3.0

BASE_HP = 12.0
BASE_ELASTICITY = 10.0

PISTOL_HP = 7.0
PISTOL_ELASTICITY = 25.0

_TREAD_STEPS = (
    ("r", 12),
    ("ur", 3),
    ("ul", 1),
    ("l", 1),
    ("dl", 2),
    ("l", 10),
    ("ul", 2),
    ("l", 1),
    ("dl", 1),
    ("dr", 3),
)


@dataclass
class PlayerModel:
    """Indices of a tank's particles and connections inside a solver."""

    particle_range: range
    max_hp: float
    base_connections: List[int]
    left_motors: List[int]
    right_motors: List[int]
    pistols: List[int]
    center: int
    muzzle: int
    center_connection: int

    def particle_indices(self) -> Iterator[int]:
        """Indices of every particle belonging to the tank."""
        return iter(self.particle_range)


@dataclass
class RawPlayerModel:
    """A tank model with indices relative to its own particle list."""

    particles: List[Particle] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    base_connections: List[int] = field(default_factory=list)
    left_motors: List[int] = field(default_factory=list)
    right_motors: List[int] = field(default_factory=list)
    pistols: List[int] = field(default_factory=list)
    center: int = 0
    muzzle: int = 0
    center_connection: int = 0

    @classmethod
    def generate_tank(cls) -> "RawPlayerModel":
        """Build the standard tank: hull, muzzle, pistons, motors and tread."""
        link = RigidLink(length=1.0, durability=BASE_HP, elasticity=BASE_ELASTICITY)
        P = PointSpec
        L = LinkSpec

        hull = Layer(
            particle=METAL.with_color(Vec4(0.5, 0.8, 0.0, 1.0)),
            link=link,
            points=[
                P(-4, 0, "left_base"), P(-3, -0.5), P(-3, 0.5), P(-2, 0),
                P(-1, -0.5), P(-1, 0.5), P(0, 0), P(0, 1, "center_base"),
                P(1, -0.5), P(1, 0.5), P(2, 0), P(3, -0.5), P(3, 0.5),
                P(4, 0, "right_base"),
            ],
            links=[
                L([0], [1, 2]), L([1, 2], [3]), L([3], [4, 5]), L([4, 5], [6, 7]),
                L([6, 7], [8, 9]), L([8, 9], [10]), L([10], [11, 12]),
                L([11, 12], [13]), L([0], [13]),
            ],
        )
        barrel = Layer(
            particle=METAL.with_color(Vec4(0.25, 0.4, 0.0, 1.0)),
            link=link.with_elasticity(MUZZLE_ELASTICITY),
            points=[
                P(0, 2, "main"), P(0, 3), P(0, 4), P(0, 5), P(0, 6), P(0, 7),
                P(0, 8, "muzzle_end"),
            ],
            links=[L([k], [k + 1]) for k in range(6)],
        )
        pistons = Layer(
            link=link.with_durability(PISTOL_HP).with_elasticity(PISTOL_ELASTICITY),
            links=[
                L(["left_base", "right_base"], ["main"]),
                L(["left_base"], ["muzzle_end"], name="pistol1"),
                L(["right_base"], ["muzzle_end"], name="pistol2"),
            ],
        )
        core = Layer(
            link=link.with_durability(CENTER_HP).with_elasticity(CENTER_ELASTICITY),
            links=[L(["center_base"], ["main"], name="main_connection")],
        )
        motors = Layer(
            particle=MOTOR.with_color(Vec4(0.25, 0.25, 0.25, 1.0)),
            link=link,
            offset=Vec2(0.0, -3.0),
            hexagonal=True,
            points=[
                P(-7.5, 2, "l0"), P(-5.5, 0, "l1"), P(-2, 0, "l2"), P(2, 0, "l3"),
                P(5.5, 0, "l4"), P(5.5, 2, "l5"),
                P(-5.5, 2, "r0"), P(-1, 2, "r1"), P(3.5, 2, "r2"),
            ],
            links=[
                L([0], [1]), L([1], [2]), L([2], [3]), L([3], [4]), L([4], [5]),
                L([0], [5]), L([1], [4]), L([0], [4]),
                L([0, 1], [6]), L([4, 5], [8]), L([2, 3], [7]),
                L(["left_base"], [0, 1]),
                L(["center_base"], [2, 3]),
                L(["right_base"], [4, 5], name="last_base_connection"),
            ],
        )

        tank, labels = build_model([hull, barrel, pistons, core, motors])

        tread = chain_model(
            METAL,
            link.with_elasticity(TREAD_ELASTICITY).with_durability(TREAD_HP),
            Vec2(-6.0, -3.0 - SHIFT_Y.y),
            _TREAD_STEPS,
            step=2,
            adjacent=SPIKE,
            adjacent_link=link.with_elasticity(100.0),
        )
        tank = tank + tread

        return cls(
            particles=tank.particles,
            connections=tank.connections,
            base_connections=list(range(labels["last_base_connection"] + 1)),
            center=labels["main"],
            muzzle=labels["muzzle_end"],
            center_connection=labels["main_connection"],
            left_motors=[labels[f"l{k}"] for k in range(6)],
            right_motors=[labels[f"r{k}"] for k in range(3)],
            pistols=[labels["pistol1"], labels["pistol2"]],
        )

    def model(self) -> Model:
        """The tank as a model centred on its main particle."""
        return Model(
            center=self.particles[self.center].pos,
            particles=self.particles,
            connections=self.connections,
        )

    def place_in_solver(self, pos: Vec2, solver: Solver) -> PlayerModel:
        """Add the tank to ``solver`` with its center at ``pos``."""
        particles = solver.size()
        connections = len(solver.connections)
        player_model = PlayerModel(
            particle_range=range(particles, particles + len(self.particles)),
            max_hp=sum(self.connections[i].link.durability for i in self.base_connections),
            base_connections=[i + connections for i in self.base_connections],
            left_motors=[i + particles for i in self.left_motors],
            right_motors=[i + particles for i in self.right_motors],
            pistols=[i + connections for i in self.pistols],
            center=self.center + particles,
            muzzle=self.muzzle + particles,
            center_connection=self.center_connection + connections,
        )
        solver.add_model(self.model(), pos)
        return player_model