"""Fixture module loaded by :mod:`lib_module_loader.examples.simple_load`."""

GREETING = "hello"


def hello():
    """Print the greeting and hand it back to the caller."""
    print(GREETING)
    return GREETING
