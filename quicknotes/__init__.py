"""Notes client core: REST adapters, use cases and async MVVM viewmodels."""

__version__ = "0.1.0"
