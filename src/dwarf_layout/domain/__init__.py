#!/usr/bin/env python3

"""Domain layer containing the struct layout models and services."""

from . import models, services

__all__ = [
    "models",
    "services",
]
