# smogsim

A small 2D particle physics engine and the game logic of a tank battle built on top of it.

The engine moves particles by Verlet integration inside a rectangular box.
Particles collide with each other through a uniform grid, and pairs of particles
can be joined by springs (`ForceLink`) or rigid ribs (`RigidLink`). Rigid ribs
lose durability when they are stretched past their elasticity, which is how
tanks fall apart. Some particles have a special `Kind`: motors push the
particles they touch sideways, impulse projectiles knock things away, sticky
projectiles weld themselves to what they touch, and spikes do not collide with
motors.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `smogsim.vector` – immutable `Vec2` and `Vec4`.
- `smogsim.particle` – `Particle`, `Kind`, `KindType`, and the preset particles
  `GROUND`, `METAL`, `MOTOR`, `SPIKE`, `PROJECTILE_HEAVY`, `PROJECTILE_IMPULSE`
  and `PROJECTILE_STICKY`.
- `smogsim.link` – `ForceLink`, `RigidLink`, `Connection`, `Constraint`.
- `smogsim.grid` – the spatial `Grid` used for collision lookup; each cell
  holds at most four values.
- `smogsim.model` – `Model` (two models can be added together), plus
  `build_model` (with `Layer`, `PointSpec`, `LinkSpec`) and `chain_model` for
  assembling particle structures such as tank hulls and treads.
- `smogsim.solver` – `Solver`, which steps the world forward, and
  `rnd_in_bounds`.
- `smogsim.tank` – `RawPlayerModel.generate_tank()` builds the standard tank;
  `place_in_solver` puts it into a solver and returns a `PlayerModel` that
  indexes its motors, muzzle and health connections.
- `smogsim.packets` – the game commands (`Motor`, `SpawnParticle`, `Dash`,
  `Thrust`, `Muzzle`, `ResetMuzzle`, `Fire`, `NoPacket`) and
  `IndexedGamePacket`, a command tagged with the sending player's id.
- `smogsim.controller` – `Controller`, `Player`, `TickTimer`, `SpawnPoint`
  and `get_color`.

## Example

```python
from smogsim.vector import Vec2
from smogsim.link import Constraint
from smogsim.solver import Solver
from smogsim.tank import RawPlayerModel
from smogsim.controller import Controller, SpawnPoint
from smogsim.packets import IndexedGamePacket

solver = Solver(Constraint(Vec2(-100.0, -50.0), Vec2(100.0, 50.0)), [], [])
tank = RawPlayerModel.generate_tank()
spawns = [SpawnPoint(Vec2(-40.0, 0.0), team=0), SpawnPoint(Vec2(40.0, 0.0), team=1)]

models = [tank.place_in_solver(spawn.pos, solver) for spawn in spawns]
controller = Controller(
    0, "alice", models[0],
    [(0, "alice", models[0]), (1, "bob", models[1])],
    spawns,
)

# Each tick: gather the commands of every player, apply them, then step.
commands = [IndexedGamePacket(0, packet) for packet in controller.move_tank(1.0)]
controller.handle_packets(solver, commands)
solver.solve(1 / 60 / 8)

print(Controller.player_hp(controller.player, solver))
print(controller.get_winners(solver))
```

`Controller.get_winners` returns the team number and its players once only one
team has living tanks, and `None` otherwise.

## What this package does not do

It has no window, rendering, input handling, menus or network client. The
controller only produces commands (`move_tank`, `fire`, `dash`, ...) and
applies the ones it is given; drawing the world, reading the keyboard and
mouse, and sending commands between players are left to the caller. There is
no command-line program and no map loading: the caller builds the `Solver`
and supplies the `SpawnPoint` list.