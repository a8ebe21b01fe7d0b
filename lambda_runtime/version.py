"""
Runtime version information.
"""

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0


def get_version() -> str:
    """Returns the semantic version of the runtime in the form Major.Minor.Patch"""
    return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"
