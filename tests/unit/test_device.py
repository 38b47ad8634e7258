from scrubby.license.device import DEVICE_ID_LENGTH, current_device_id, derive_device_id, machine_signals


def test_derive_device_id_is_deterministic():
    first = derive_device_id(["machine", "host", "user"])
    assert first == derive_device_id([" machine\n", "host", "user"])
    assert len(first) == DEVICE_ID_LENGTH
    assert all(char in "0123456789abcdef" for char in first)


def test_derive_device_id_depends_on_every_signal():
    base = derive_device_id(["machine", "host", "user"])
    assert derive_device_id(["machine", "host", "other"]) != base
    assert derive_device_id(["machine", "other", "user"]) != base


def test_current_device_id_stable():
    assert current_device_id() == current_device_id()
    assert len(machine_signals()) == 3
