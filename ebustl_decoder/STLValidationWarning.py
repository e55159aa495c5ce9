class STLValidationWarning(UserWarning):
    """Issued when an STL file deviates from EBU Tech 3264 but can still be read."""
