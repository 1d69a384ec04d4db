# sunlark/core/__init__.py
"""Host value model and the int/float NumericUnion."""
