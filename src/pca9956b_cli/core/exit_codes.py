"""Process exit codes."""

# Base for every exit: quit is 128 + 0, signals are 128 + signal number
EXIT_BASE = 128

EXIT_QUIT = EXIT_BASE
EXIT_DEVICE_FAILURE = EXIT_BASE + 1  # Refresh could not read the device
EXIT_CONFIG_ERROR = 1  # Bad configuration, panel never started
EXIT_INPUT_CLOSED = 1  # Terminal stopped delivering keys


def exit_code_for_signal(signum: int) -> int:
    """Exit code after a termination signal was caught."""
    return EXIT_BASE + signum
