"""Dataclass-by-declaration base classes for services and handlers."""

from abc import ABCMeta
from dataclasses import dataclass
from typing import Any, dataclass_transform


@dataclass_transform()
class AutoDataclassMeta(ABCMeta):
    """ABC metaclass that turns every subclass into a dataclass.

    The root class that declares the metaclass is left alone; its subclasses
    list their collaborators as annotated fields, which dishka reads to
    inject them.
    """

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)
        return cls


class Service(metaclass=AutoDataclassMeta):
    """Base class for domain services."""
