"""matprops warning categories.

These exist so users can filter/suppress matprops warnings without
catching all UserWarning.

Keep this module lightweight and dependency-free to avoid import cycles.
"""


class MatPropsWarning(UserWarning):
    """Base warning category for all matprops user-facing warnings."""


class MatPropsConfigWarning(MatPropsWarning):
    """Malformed configuration values that were replaced by defaults."""
