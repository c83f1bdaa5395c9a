import dataclasses

import pytest

from smogsim.packets import (
    Dash,
    Fire,
    IndexedGamePacket,
    Motor,
    Muzzle,
    NoPacket,
    ResetMuzzle,
    SpawnParticle,
    Thrust,
)
from smogsim.vector import Vec2


def test_packets_compare_by_value():
    assert Motor(3, 1.5) == Motor(3, 1.5)
    assert Thrust(0.1, -0.1) == Thrust(0.1, -0.1)
    assert ResetMuzzle() == ResetMuzzle()
    assert Fire(1) != Fire(2)


def test_packets_are_immutable():
    packet = Dash(2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        packet.coeff = 3.0
    assert packet.coeff == 2.0
    assert packet == Dash(2.0)


def test_indexed_packet_fields():
    packet = IndexedGamePacket(4, Muzzle(Vec2(1.0, 2.0)))
    assert packet.id == 4
    assert packet.contents.pos == Vec2(1.0, 2.0)


def test_packets_support_matching():
    match SpawnParticle(Vec2(5.0, 6.0)):
        case SpawnParticle(pos):
            matched = pos
        case _:
            matched = None
    assert matched == Vec2(5.0, 6.0)


def test_packets_are_hashable():
    packets = {NoPacket(), NoPacket(), Fire(0), Fire(0)}
    assert len(packets) == 2


@pytest.mark.parametrize("projectile", [-1, 256])
def test_fire_rejects_out_of_range(projectile):
    with pytest.raises(ValueError):
        Fire(projectile)


def test_motor_rejects_negative_index():
    with pytest.raises(ValueError):
        Motor(-1, 1.0)


@pytest.mark.parametrize("player_id", [-1, 256])
def test_indexed_packet_rejects_bad_id(player_id):
    with pytest.raises(ValueError):
        IndexedGamePacket(player_id, NoPacket())


def test_indexed_packet_accepts_bounds():
    assert IndexedGamePacket(255, Fire(255)).contents.projectile == 255