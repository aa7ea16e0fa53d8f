"""
Code Generators for Task Schemas.

This package contains generators that produce source code from a TaskSchema:
- csharp_gen: Generate a Sharpliner C# task model
"""

from .csharp_gen import EmitOptions, HeaderMetadata, emit

__all__ = [
    'EmitOptions',
    'HeaderMetadata',
    'emit',
]
