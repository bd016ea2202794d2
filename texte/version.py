from importlib.metadata import PackageNotFoundError, version


def get_version_string() -> str:
    """Return the installed texte version, or 'unknown' for a source checkout."""
    try:
        return version("texte")
    except PackageNotFoundError:
        return "unknown"
