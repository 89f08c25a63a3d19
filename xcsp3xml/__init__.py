"""Read XCSP3 constraint-programming instances from XML into plain Python objects."""

__version__ = "0.1.0"