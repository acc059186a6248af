"""
Exit codes for seidr commands.

A batch run whose steps fail still exits 0 unless --strict is given:
failures are reported per step, not through the exit status.
"""

SUCCESS = 0              # Everything ran (failures reported per step)
GENERAL_ERROR = 1        # Unknown jump target and other plain errors
USAGE_ERROR = 2          # Bad arguments, raised by click itself

CONFIG_ERROR = 66        # Config file missing, malformed or invalid
PERMISSION_ERROR = 67    # Insufficient permissions
DATA_ERROR = 70          # Data format or validation error
PARTIAL_SUCCESS = 71     # --strict and at least one step or link failed
INTERRUPTED = 130        # Ctrl+C (SIGINT)

# Exit codes for exceptions that escape a command unexpectedly
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'TypeError': DATA_ERROR,
    'YAMLError': CONFIG_ERROR,
    'ConfigError': CONFIG_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """Exit code for an exception, GENERAL_ERROR when unmapped."""
    return EXCEPTION_EXIT_CODES.get(exc.__class__.__name__, GENERAL_ERROR)


class CommandError(Exception):
    """Error that carries the exit code the CLI should terminate with."""

    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when the config file cannot be loaded or is invalid."""

    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class LookupFailedError(CommandError):
    """Raised when a jump target is not declared in the config."""

    def __init__(self, message: str):
        super().__init__(message, GENERAL_ERROR)


class PartialSuccessError(CommandError):
    """Raised in strict mode when some steps or links failed."""

    def __init__(self, message: str, succeeded: int = 0, failed: int = 0):
        super().__init__(message, PARTIAL_SUCCESS)
        self.succeeded = succeeded
        self.failed = failed
