from .response import ResponseORM

__all__ = ["ResponseORM"]
