from .domain import LOG_LEVELS, LogMessage


def discovery_modules() -> list[str]:
    # Modules contributing @adapter factories for the log role.
    return ["pipe_stream.observability.adapters.logging"]


__all__ = ["LOG_LEVELS", "LogMessage", "discovery_modules"]
