"""Check XML documents for well-formedness and write them out in canonical, markup or meta form."""

__version__ = "2.2.6"