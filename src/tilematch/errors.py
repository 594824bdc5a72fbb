class UsageError(RuntimeError):
    """Raised when a caller breaks a precondition of the engine.

    Examples: swapping while one of the two positions is unset, stepping past a
    grid edge, or addressing an index outside the board. These are programming
    errors; a rejected swap is never reported this way.
    """
