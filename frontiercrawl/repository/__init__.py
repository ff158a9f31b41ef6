from .requests import RequestsRepository

__all__ = ["RequestsRepository"]
