"""Resolver service, factory and command-line interface."""

from ksm_notation.service.factory import build_resolver
from ksm_notation.service.resolver import NotationResolver

__all__ = [
    "NotationResolver",
    "build_resolver",
]
