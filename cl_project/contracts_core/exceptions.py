

class ReferentialError(Exception):
    """Raised when a referenced row does not exist, or when a row that is
    still referenced by a contract is about to be deleted."""
    pass
