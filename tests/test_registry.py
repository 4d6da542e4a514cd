"""Tests for Registry listener bookkeeping."""

from conftest import Ping, Pong, Recorder

from eventry import Registry


class AlwaysEqual:
    """Listener that compares equal to everything."""

    def __eq__(self, other):
        return True

    def __hash__(self):
        return 0


class TestRegistry:
    def test_empty_snapshot(self):
        assert Registry().snapshot(Ping) == ()

    def test_add_preserves_order(self, journal):
        reg = Registry()
        a, b = Recorder("a", journal), Recorder("b", journal)
        reg.add(Ping, a)
        reg.add(Ping, b)
        assert reg.snapshot(Ping) == (a, b)

    def test_add_is_idempotent(self, journal):
        reg = Registry()
        a, b = Recorder("a", journal), Recorder("b", journal)
        reg.add(Ping, a)
        reg.add(Ping, b)
        reg.add(Ping, a)
        assert reg.snapshot(Ping) == (a, b)

    def test_identity_not_equality(self):
        """Equal but distinct listeners are separate entries."""
        reg = Registry()
        first, second = AlwaysEqual(), AlwaysEqual()
        reg.add(Ping, first)
        reg.add(Ping, second)

        listeners = reg.snapshot(Ping)
        assert len(listeners) == 2
        assert listeners[0] is first
        assert listeners[1] is second

        reg.remove(Ping, second)
        assert reg.snapshot(Ping)[0] is first
        assert len(reg.snapshot(Ping)) == 1

    def test_remove_keeps_empty_entry(self, journal):
        reg = Registry()
        a = Recorder("a", journal)
        reg.add(Ping, a)
        reg.remove(Ping, a)
        assert reg.snapshot(Ping) == ()
        assert Ping in reg.event_types()

    def test_remove_unknown_is_noop(self, journal):
        reg = Registry()
        reg.remove(Ping, Recorder("ghost", journal))
        assert reg.event_types() == []

    def test_remove_all_drops_entry(self, journal):
        reg = Registry()
        reg.add(Ping, Recorder("a", journal))
        reg.add(Pong, Recorder("b", journal))
        reg.remove_all(Ping)
        reg.remove_all(Ping)
        assert reg.event_types() == [Pong]

    def test_remove_everywhere(self, journal):
        reg = Registry()
        a, b = Recorder("a", journal), Recorder("b", journal)
        reg.add(Ping, a)
        reg.add(Pong, a)
        reg.add(Pong, b)
        reg.remove_everywhere(a)
        assert reg.snapshot(Ping) == ()
        assert reg.snapshot(Pong) == (b,)

    def test_snapshot_is_detached(self, journal):
        """Later mutation does not change an earlier snapshot."""
        reg = Registry()
        a = Recorder("a", journal)
        reg.add(Ping, a)
        before = reg.snapshot(Ping)
        reg.add(Ping, Recorder("b", journal))
        assert before == (a,)

    def test_contains(self, journal):
        reg = Registry()
        a = Recorder("a", journal)
        reg.add(Ping, a)
        assert (Ping, a) in reg
        assert (Pong, a) not in reg
        assert (Ping, Recorder("a", journal)) not in reg
