"""IO exceptions."""


class PreferenceStoreError(Exception):
    """Raised by a strict preference store that cannot read or write its backing file."""


class RegisterDataError(ValueError):
    """Raised when the debug backend reports a register number or value that is not numeric."""
