import random

import pytest

from chip8vm import VirtualMachine


def assemble(*words):
    return b"".join(w.to_bytes(2, "big") for w in words)


@pytest.fixture
def vm():
    return VirtualMachine(rng=random.Random(1234))


@pytest.fixture
def load(vm):
    """Load 16-bit words at 0x200 and return the running vm."""
    def _load(*words):
        vm.load(assemble(*words), name="test")
        return vm
    return _load
