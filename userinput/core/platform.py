"""Operating-system family detection for ``os family=`` gates."""

import os
import platform

WINDOWS = "windows"
MAC = "mac"
UNIX = "unix"

KNOWN_FAMILIES = frozenset({WINDOWS, MAC, UNIX})


def current_family() -> str:
    """Return the running platform's family: windows, mac or unix."""
    system = platform.system().lower()
    if system.startswith("win") or os.name == "nt":
        return WINDOWS
    if system == "darwin":
        return MAC
    return UNIX


def family_matches(family: str | None, running: str) -> bool:
    """True if a gate family applies to the running family.

    macOS is also a unix, as the installer runtime treats it.
    """
    if family not in KNOWN_FAMILIES:
        return False
    if family == running:
        return True
    return family == UNIX and running == MAC
