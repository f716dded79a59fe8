"""Type aliases using modern PEP 695 syntax.

This module defines type aliases for common type patterns throughout the
application.
"""

import os
from typing import TypeAlias

# Any path form accepted at the engine boundary
# Normalized to str before it reaches the filesystem capability
StrPath: TypeAlias = str | os.PathLike[str]

# Raw mapping produced by YAML loading, before pydantic validation
RawConfig: TypeAlias = dict[str, object]
