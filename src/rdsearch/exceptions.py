class InvalidRDDataError(ValueError):
    """Raised when an input table cannot be reshaped into an RD record.

    Typical causes are too few columns, columns of unequal length, a
    non-numeric running variable, or a ``sigma2`` block with the wrong shape
    (one column for sharp RD and local-point data, four for fuzzy RD).
    """


class RDClassError(TypeError):
    """Raised by :func:`rdsearch.data.check_class` when a record has the wrong type."""
