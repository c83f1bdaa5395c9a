"""Player state and the controller that turns input and packets into physics."""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .packets import (
    Dash,
    Fire,
    GamePacket,
    IndexedGamePacket,
    Motor,
    Muzzle,
    NoPacket,
    ResetMuzzle,
    SpawnParticle,
    Thrust,
)
from .particle import GROUND, PROJECTILE_HEAVY, PROJECTILE_IMPULSE, PROJECTILE_STICKY, Kind
from .solver import Solver
from .tank import PISTOL_HP, PlayerModel
from .vector import Vec2, Vec4

U = TypeVar("U")

_PROJECTILES = {
    0: (PROJECTILE_HEAVY, 0.6),
    1: (PROJECTILE_IMPULSE, 0.25),
    2: (PROJECTILE_STICKY, 0.1),
}
_RELOAD_TICKS = {0: 400, 1: 1500, 2: 16}
_DASH_TICKS = 4800
_HP_THRESHOLD = 0.7
_MAX_MUZZLE_TURN = 0.04


@dataclass
class TickTimer:
    """A countdown measured in simulation ticks."""

    tick: int = 0
    _last: int = field(default=0, init=False, repr=False)

    def set(self, ticks: int) -> None:
        self.tick = ticks
        self._last = ticks

    def update(self) -> None:
        self.tick -= 1

    def ready(self) -> bool:
        return self.tick <= 0

    def not_ready(self) -> bool:
        return self.tick > 0

    def map_or(self, default: U, ticks: int, f: Callable[[], U]) -> U:
        """If ready, restart with ``ticks`` and return ``f()``; else ``default``."""
        if self.ready():
            self.set(ticks)
            return f()
        return default

    def progress(self) -> float:
        """Fraction of the countdown that has elapsed, between 0 and 1."""
        if self._last <= 0:
            return 1.0
        elapsed = self._last - self.tick
        return min(max(elapsed / self._last, 0.0), 1.0)


@dataclass
class Player:
    """One player and the state of their tank controls."""

    id: int
    team: int
    name: str
    model: PlayerModel
    gear: int = 0
    projectile: int = 0
    reload_timer: TickTimer = field(default_factory=TickTimer)
    dash_timer: TickTimer = field(default_factory=TickTimer)
    thrust: Tuple[float, float] = (0.0, 0.0)
    aim: Optional[Vec2] = None

    BASE_POWER = 16.0
    GEAR_POWER = 2.0
    MAX_GEAR = 5

    def power(self) -> float:
        return self.BASE_POWER * self.GEAR_POWER ** self.gear

    def gear_up(self) -> None:
        self.gear = min(self.gear + 1, self.MAX_GEAR)

    def gear_down(self) -> None:
        self.gear = max(self.gear, 1) - 1


@dataclass(frozen=True)
class SpawnPoint:
    """Where a player's tank starts and which team it belongs to."""

    pos: Vec2
    team: int


def _signum(value: float) -> float:
    if math.isnan(value):
        return math.nan
    return math.copysign(1.0, value)


def _clamp_turn(angle: float) -> float:
    if math.isnan(angle):
        return _MAX_MUZZLE_TURN
    return max(min(angle, _MAX_MUZZLE_TURN), -_MAX_MUZZLE_TURN)


def _srgb_to_linear(value: float) -> float:
    if value <= 0.0:
        return value
    if value <= 0.04045:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4


def get_color(a: float) -> Vec4:
    """Linear RGBA colour from red (0) to green (1) for a health fraction."""
    a = 0.0 if math.isnan(a) else max(a, 0.0)
    lightness = 0.0 if a == 0.0 else 0.7
    r, g, b = colorsys.hls_to_rgb((a * 120.0) / 360.0, lightness, 1.0)
    return Vec4(_srgb_to_linear(r), _srgb_to_linear(g), _srgb_to_linear(b), 1.0)


class Controller:
    """Applies every player's packets to a shared solver, tick by tick."""

    def __init__(
        self,
        player_id: int,
        name: str,
        model: PlayerModel,
        players: Iterable[Tuple[int, str, PlayerModel]],
        spawns: Sequence[SpawnPoint],
    ) -> None:
        self.tick = 0
        self.player = Player(player_id, spawns[player_id].team, name, model)
        self.players: List[Player] = [
            Player(pid, spawns[pid].team, pname, pmodel) for pid, pname, pmodel in players
        ]

    def get_player(self, player_id: int) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    @staticmethod
    def player_position(player: Player, solver: Solver) -> Vec2:
        return solver.particles[player.model.center].pos

    @staticmethod
    def player_hp(player: Player, solver: Solver) -> float:
        """Remaining health from 0 (destroyed) to 1 (intact)."""
        hp = (
            sum(solver.connections[i].link.durability for i in player.model.base_connections)
            / player.model.max_hp
        )
        return max((hp - _HP_THRESHOLD) / (1.0 - _HP_THRESHOLD), 0.0)

    @staticmethod
    def player_alive(player: Player, solver: Solver) -> bool:
        return Controller.player_hp(player, solver) > 0.0

    def get_winners(self, solver: Solver) -> Optional[Tuple[int, List[Player]]]:
        """The only team with living players and those players, if any."""
        teams: Dict[int, List[Player]] = {}
        for player in self.players:
            if self.player_alive(player, solver):
                teams.setdefault(player.team, []).append(player)
        if len(teams) != 1:
            return None
        return next(iter(teams.items()))

    def _update_timers(self) -> None:
        self.tick += 1
        self.player.reload_timer.update()
        self.player.dash_timer.update()

    def _update_player_colors(self, solver: Solver) -> None:
        for player in self.players:
            hp = self.player_hp(player, solver)
            solver.particles[player.model.center].color = get_color(hp)
            for pistol in player.model.pistols:
                connection = solver.connections[pistol]
                solver.particles[connection.i].color = get_color(
                    connection.link.durability / PISTOL_HP
                )

    def _update_players(self, solver: Solver) -> None:
        if self.tick % 8 != 0:
            return
        particles = solver.particles
        for player in self.players:
            if not self.player_alive(player, solver):
                continue
            model = player.model
            left_motor = model.right_motors[0]
            right_motor = model.right_motors[-1]

            center = particles[model.center].pos
            center_base = particles[solver.connections[model.center_connection].i].pos
            direction_up = center - center_base

            left, right = player.thrust
            if left != 0.0 or right != 0.0:
                particles[left_motor].set_velocity(left * direction_up)
                particles[right_motor].set_velocity(right * direction_up)

            if player.aim is None:
                continue
            desired = (player.aim - center).normalize() * 6.0 + center
            if (desired - center).dot(direction_up) < -0.1:
                side = _signum(direction_up.perp_dot(desired - center))
                desired = direction_up.perp() * (side * 6.0) + center

            muzzle = particles[model.muzzle].pos
            angle = _clamp_turn((muzzle - center).angle_between(desired - center))
            desired = (
                (muzzle - center).rotate(Vec2.from_angle(angle)).normalize() * 6.0 + center
            )

            for pistol in model.pistols:
                connection = solver.connections[pistol]
                base = particles[connection.i].pos
                connection.link = connection.link.with_length(desired.distance(base))

    def handle_packets(self, solver: Solver, packets: Iterable[IndexedGamePacket]) -> None:
        """Advance one tick: update timers and tanks, then apply ``packets``."""
        self._update_timers()
        self._update_player_colors(solver)
        self._update_players(solver)
        for packet in packets:
            self.handle_packet(solver, packet)

    def handle_packet(self, solver: Solver, packet: IndexedGamePacket) -> None:
        """Apply one player's packet; packets from unknown or dead players are ignored."""
        player = self.get_player(packet.id)
        if player is None or not self.player_alive(player, solver):
            return
        model = player.model
        particles = solver.particles
        center = particles[model.center]

        match packet.contents:
            case Motor(index=index, acc=acc):
                if index < len(particles) and particles[index].is_motor():
                    particles[index].kind = Kind.motor(acc)
            case SpawnParticle(pos=pos):
                solver.add_particle(
                    GROUND.with_position(pos).with_velocity(Vec2(0.0, -0.5))
                )
            case Dash(coeff=coeff):
                vel = (center.velocity() * coeff).clamp_length(0.05, 0.1)
                for index in model.particle_indices():
                    particles[index].set_velocity(vel * coeff)
            case Thrust(left=left, right=right):
                player.thrust = (left, right)
            case Muzzle(pos=pos):
                player.aim = pos
            case ResetMuzzle():
                player.aim = None
            case Fire(projectile=bullet):
                if bullet not in _PROJECTILES:
                    return
                projectile, force = _PROJECTILES[bullet]
                muzzle_end = particles[model.muzzle]
                muzzle_dir = (muzzle_end.pos - center.pos).normalize()
                bullet_pos = center.pos + muzzle_dir * 10.0
                solver.add_particle(
                    projectile.with_position(bullet_pos).with_velocity(muzzle_dir * force)
                )
                impulse = force * muzzle_dir.length() * projectile.mass
                recoil = impulse / muzzle_end.mass / 100.0
                for index in model.particle_indices():
                    solver.particles[index].add_velocity(muzzle_dir * -recoil)
            case NoPacket():
                pass

    def add_particle(self, pos: Vec2) -> List[GamePacket]:
        return [SpawnParticle(pos)]

    def move_tank(self, coeff: float) -> List[GamePacket]:
        """Motor packets driving the tank; the sign of ``coeff`` picks the direction."""
        power = self.player.power()
        model = self.player.model
        return [Motor(i, coeff * power) for i in model.left_motors] + [
            Motor(i, -coeff * power) for i in model.right_motors
        ]

    def move_muzzle(self, desired_pos: Vec2) -> List[GamePacket]:
        return [Muzzle(desired_pos)]

    def reset_muzzle(self) -> List[GamePacket]:
        return [ResetMuzzle()]

    def fire(self) -> List[GamePacket]:
        """Fire the selected projectile if reloaded, starting the reload."""
        if self.player.reload_timer.not_ready():
            return []
        self.player.reload_timer.set(_RELOAD_TICKS.get(self.player.projectile, 0))
        return [Fire(self.player.projectile)]

    def rotate_tank(self, force: float) -> List[GamePacket]:
        return [Thrust(force, -force)]

    def dash(self) -> List[GamePacket]:
        return self.player.dash_timer.map_or([], _DASH_TICKS, lambda: [Dash(2.0)])