"""Exception hierarchy for router discovery."""


class RouterScoutError(Exception):
    """Base exception for all discovery errors."""


class MissingDependencyError(RouterScoutError):
    """A required external command is not available on this host."""

    def __init__(self, commands: list[str]):
        self.commands = commands
        super().__init__(f"Required command(s) not found in PATH: {', '.join(commands)}")


class InvalidRangePolicyError(RouterScoutError):
    """Unknown range policy name or offsets outside a /24."""
