class OutbreakError(Exception):
    """Base for all Outbreak exceptions."""

    pass


# Loading
class LoadError(OutbreakError):
    """Roster source is unreadable or malformed."""

    pass


class DuplicateHost(LoadError):
    """Two hosts in one roster share a name."""

    pass


class EmptyRoster(OutbreakError):
    """A roster with no hosts; a run can never start from it."""

    pass


class HostNotFound(OutbreakError, KeyError):
    """No host with the requested name."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"no host named {self.name!r}"


# Commands
class InvalidCommand(OutbreakError):
    """Command issued in a phase that does not accept it."""

    def __init__(self, message, host_name=None, fact=None):
        super().__init__(message)
        self.host_name = host_name
        self.fact = fact


class InvalidStarter(InvalidCommand):
    """Named host cannot be patient zero."""

    pass


class InvalidTarget(InvalidCommand):
    """Named host is not a legal infection target this turn."""

    pass
