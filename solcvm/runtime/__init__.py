from .locator import StorageLocator

__all__ = ["StorageLocator"]
