"""Internal implementation package for tolgeo; import public symbols from ``tolgeo``."""
