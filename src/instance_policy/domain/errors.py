"""Exception classes for the interception layer.

Only wiring faults are raised here.  Absent or malformed configuration
disables a policy silently, and collaborator failures (for example a failed
save during account finalization) propagate as the collaborator raised them.
"""


class PolicyError(Exception):
    """Base class for all errors raised by the interception layer."""


class UnknownHookError(PolicyError):
    """Raised when a pipeline hook name has no matching interceptor.

    Attributes:
        hook: The hook name that was rejected.
    """

    def __init__(self, hook: str) -> None:
        self.hook = hook
        super().__init__(f"No interceptor is registered for hook '{hook}'")
