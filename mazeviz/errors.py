class MazeError(Exception):
    """Base class for everything mazeviz raises on purpose."""


class InvalidDimensionsError(MazeError, ValueError):
    pass


class SolverDestroyedError(MazeError):
    pass


class MazeDestroyedError(MazeError):
    pass


class ConfigError(MazeError, ValueError):
    pass
