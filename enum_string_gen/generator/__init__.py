"""
generator — the top-level generation pass.

ExtensionGenerator(config).execute(compilation) → GeneratorResult
"""

from .extension_generator import ExtensionGenerator
from .models import GeneratedSource, GeneratorResult

__all__ = ["ExtensionGenerator", "GeneratedSource", "GeneratorResult"]
