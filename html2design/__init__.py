"""html2design – top-level package

Exposes the public API (`compile_html`, `DesignCompiler`, etc.) **and** sets
up a minimal logging configuration so that every sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `HTML2DESIGN_LOG_LEVEL`.
"""

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise INFO.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("HTML2DESIGN_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .compiler import CompileResult, DesignCompiler, compile_html  # noqa: E402  (import after logger)
from .errors import CompileError, EmptyInputError, NoElementsFoundError, NothingRenderedError  # noqa: E402
from .layout_engine import LayoutEngine  # noqa: E402
from .models import DesignNode, NodeVariant  # noqa: E402
from .pptx_renderer import PPTXRenderer  # noqa: E402

__all__ = [
    "compile_html",
    "CompileResult",
    "DesignCompiler",
    "CompileError",
    "EmptyInputError",
    "NoElementsFoundError",
    "NothingRenderedError",
    "LayoutEngine",
    "DesignNode",
    "NodeVariant",
    "PPTXRenderer",
]
