from ._traced import get_tracer, traced

__all__ = ["traced", "get_tracer"]
