from .memory import Memory, Rom, Ram, OffsetMemory, ReadOnlyMemoryError

__all__ = ["Memory", "Rom", "Ram", "OffsetMemory", "ReadOnlyMemoryError"]
