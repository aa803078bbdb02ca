from importlib.metadata import PackageNotFoundError, version

from ipswdownloads.constants import APP_NAME


def get_user_agent() -> str:
    """User-Agent for HTTP requests: `ipswdownloads/<installed version or unknown>`."""
    try:
        return f"{APP_NAME}/{version(APP_NAME)}"
    except PackageNotFoundError:
        return f"{APP_NAME}/unknown"
