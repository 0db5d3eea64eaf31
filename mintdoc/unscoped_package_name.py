"""Utility for stripping the scope from package names."""


def unscoped_package_name(package_name: str) -> str:
    """Strip a leading ``@scope/`` from an npm-style package name."""
    # @scope/name -> name
    if package_name.startswith("@") and "/" in package_name:
        return package_name.split("/", 1)[1]
    return package_name
