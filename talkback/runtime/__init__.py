"""Runtime package.

Keep this module dependency-light: importing `talkback.runtime.*` in unit
tests should not open any network connections.
"""

__all__: list[str] = []
