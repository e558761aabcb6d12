"""Batch iteration over datasets."""

from tableflow.loading.batch_loader import BatchLoader, LoaderState

__all__ = ["BatchLoader", "LoaderState"]
