import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import html2design` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def flex_document():
    """Two-child flex container used by several end-to-end tests."""
    return (
        "<html><head><style>.box{display:flex;gap:10px;padding:5px;}</style></head>"
        "<body><div class='box'><button>A</button><button>B</button></div></body></html>"
    )
